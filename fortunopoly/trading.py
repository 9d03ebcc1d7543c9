"""
Trading system for Fortunopoly.
Allows two players to swap properties and money in one atomic exchange.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from fortunopoly.events import LogCategory
from fortunopoly.results import ActionResult

if TYPE_CHECKING:
    from fortunopoly.game import GameState
    from fortunopoly.spaces import Space


@dataclass
class TradeProposal:
    """
    A trade offer from one player to another.

    - The proposer gives offered_properties and offered_money
    - The recipient gives requested_properties and requested_money
    - Improved properties cannot be traded
    """

    from_player_id: int
    to_player_id: int
    offered_properties: List[int] = field(default_factory=list)
    offered_money: int = 0
    requested_properties: List[int] = field(default_factory=list)
    requested_money: int = 0

    def is_empty(self) -> bool:
        return not (
            self.offered_properties
            or self.offered_money
            or self.requested_properties
            or self.requested_money
        )


@dataclass
class TradeValidation:
    valid: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class TradeSummary:
    """Resolved view of a proposal for display."""

    from_name: str
    to_name: str
    offered_properties: List["Space"]
    offered_money: int
    requested_properties: List["Space"]
    requested_money: int


class TradeSystem:
    """Holds at most one active proposal and executes it against the game."""

    def __init__(self, game: "GameState"):
        self.game = game
        self.active_trade: Optional[TradeProposal] = None

    def create_proposal(self, from_player_id: int, to_player_id: int) -> TradeProposal:
        """Start a new proposal, replacing any active one."""
        self.active_trade = TradeProposal(from_player_id, to_player_id)
        return self.active_trade

    def add_offered_property(self, position: int) -> bool:
        if self.active_trade is None or position in self.active_trade.offered_properties:
            return False
        self.active_trade.offered_properties.append(position)
        return True

    def remove_offered_property(self, position: int) -> bool:
        if self.active_trade is None or position not in self.active_trade.offered_properties:
            return False
        self.active_trade.offered_properties.remove(position)
        return True

    def set_offered_money(self, amount: int) -> bool:
        if self.active_trade is None:
            return False
        self.active_trade.offered_money = max(0, amount)
        return True

    def add_requested_property(self, position: int) -> bool:
        if self.active_trade is None or position in self.active_trade.requested_properties:
            return False
        self.active_trade.requested_properties.append(position)
        return True

    def remove_requested_property(self, position: int) -> bool:
        if self.active_trade is None or position not in self.active_trade.requested_properties:
            return False
        self.active_trade.requested_properties.remove(position)
        return True

    def set_requested_money(self, amount: int) -> bool:
        if self.active_trade is None:
            return False
        self.active_trade.requested_money = max(0, amount)
        return True

    def toggle_property(self, position: int, is_offer: bool) -> bool:
        """Add the property to one side of the trade, or remove it if already there."""
        if self.active_trade is None:
            return False
        if is_offer:
            if position in self.active_trade.offered_properties:
                return self.remove_offered_property(position)
            return self.add_offered_property(position)
        if position in self.active_trade.requested_properties:
            return self.remove_requested_property(position)
        return self.add_requested_property(position)

    def validate(self, proposal: Optional[TradeProposal] = None) -> TradeValidation:
        """
        Check that a proposal can be executed right now.

        Args:
            proposal: Proposal to check (defaults to the active one)
        """
        trade = proposal or self.active_trade
        if trade is None:
            return TradeValidation(False, "No active trade")

        game = self.game
        from_player = game.get_player(trade.from_player_id)
        to_player = game.get_player(trade.to_player_id)

        if from_player is None or to_player is None:
            return TradeValidation(False, "Invalid players")
        if from_player.player_id == to_player.player_id:
            return TradeValidation(False, "Cannot trade with yourself")
        if from_player.is_bankrupt or to_player.is_bankrupt:
            return TradeValidation(False, "Cannot trade with bankrupt player")

        for party, positions in (
            (from_player, trade.offered_properties),
            (to_player, trade.requested_properties),
        ):
            for pos in positions:
                name = game.board.get_space(pos).name
                if not party.owns(pos):
                    return TradeValidation(False, f"{party.name} doesn't own {name}")
                if game.get_houses(pos) > 0:
                    return TradeValidation(False, f"Cannot trade {name} - has buildings")

        if trade.offered_money > from_player.money:
            return TradeValidation(False, f"{from_player.name} doesn't have ${trade.offered_money}")
        if trade.requested_money > to_player.money:
            return TradeValidation(False, f"{to_player.name} doesn't have ${trade.requested_money}")

        if trade.is_empty():
            return TradeValidation(False, "Trade is empty")

        return TradeValidation(True)

    def execute(self) -> ActionResult:
        """
        Execute the active proposal.

        All transfers happen or none do. Mortgages travel with the tile.
        """
        validation = self.validate()
        if not validation:
            return ActionResult.fail(validation.reason)

        trade = self.active_trade
        game = self.game
        from_player = game.get_player(trade.from_player_id)
        to_player = game.get_player(trade.to_player_id)

        for giver, taker, positions in (
            (from_player, to_player, trade.offered_properties),
            (to_player, from_player, trade.requested_properties),
        ):
            for pos in positions:
                mortgaged = giver.is_mortgaged(pos)
                giver.release(pos)
                taker.acquire(pos)
                if mortgaged:
                    taker.mortgaged.add(pos)
                game.property_owners[pos] = taker.player_id

        if trade.offered_money > 0:
            from_player.debit(trade.offered_money)
            to_player.credit(trade.offered_money)
        if trade.requested_money > 0:
            to_player.debit(trade.requested_money)
            from_player.credit(trade.requested_money)

        game.add_log(f"Trade completed: {from_player.name} <-> {to_player.name}", LogCategory.TRADE)
        self.active_trade = None
        return ActionResult.ok()

    def cancel(self) -> None:
        self.active_trade = None

    def summary(self) -> Optional[TradeSummary]:
        if self.active_trade is None:
            return None
        trade = self.active_trade
        board = self.game.board
        from_player = self.game.get_player(trade.from_player_id)
        to_player = self.game.get_player(trade.to_player_id)
        return TradeSummary(
            from_name=from_player.name if from_player else "?",
            to_name=to_player.name if to_player else "?",
            offered_properties=[board.get_space(pos) for pos in trade.offered_properties],
            offered_money=trade.offered_money,
            requested_properties=[board.get_space(pos) for pos in trade.requested_properties],
            requested_money=trade.requested_money,
        )
