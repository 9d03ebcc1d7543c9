"""
Main game engine and state management.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from fortunopoly.board import Board
from fortunopoly.cards import (
    Card,
    CollectFromAllEffect,
    Deck,
    DeckType,
    EveryoneLosesEffect,
    FreeArsonEffect,
    GambleEffect,
    JailEffect,
    JailFreeEffect,
    MoneyEffect,
    MoveEffect,
    MoveRelativeEffect,
    PayPerPropertyEffect,
    PayToAllEffect,
    StealChoiceEffect,
    StealFromAllEffect,
    StealFromRichestEffect,
    create_fate_deck,
    create_fortune_deck,
)
from fortunopoly.config import GameConfig
from fortunopoly.events import EventLog, LogCategory
from fortunopoly.exceptions import ConfigurationError
from fortunopoly.player import Player, PlayerState
from fortunopoly.results import (
    ActionResult,
    CardResult,
    ChoiceRequest,
    ChoiceType,
    DiceRoll,
    GamePhase,
    JailResult,
    LandingAction,
    LandingResult,
    MoveResult,
    TurnPhase,
)
from fortunopoly.spaces import (
    ChanceSpace,
    PropertySpace,
    RailroadSpace,
    SpaceType,
    TaxSpace,
    UtilitySpace,
)
from fortunopoly.trading import TradeSystem

logger = logging.getLogger(__name__)


class GameState:
    """
    Represents the complete state of a Fortunopoly game.
    This is the main interface for the game engine.
    """

    def __init__(self, config: GameConfig, players: List[Player], board: Optional[Board] = None):
        if not players:
            raise ConfigurationError("A game needs at least one player")
        ids = [p.player_id for p in players]
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"Duplicate player ids: {ids}")

        self.config = config
        self.house_rules = config.house_rules
        self.board = board or Board()
        self.event_log = EventLog(config.max_log_entries)

        # Initialize RNG
        self.rng = random.Random(config.seed)

        # Initialize players, seat order is turn order
        self.players: List[PlayerState] = [
            PlayerState(
                p.player_id,
                p.name,
                self.board,
                config.starting_money,
                is_bot=p.is_bot,
                bot_difficulty=p.bot_difficulty,
            )
            for p in players
        ]

        # Ownership ledger: position -> owner id, position -> improvement level
        self.property_owners: Dict[int, int] = {}
        self.property_houses: Dict[int, int] = {}

        self.decks: Dict[DeckType, Deck] = {
            DeckType.FORTUNE: create_fortune_deck(self.rng),
            DeckType.FATE: create_fate_deck(self.rng),
        }

        self.trading = TradeSystem(self)

        self.phase = GamePhase.PLAYING
        self.turn_phase = TurnPhase.WAITING
        self.current_player_index = 0
        self.last_dice_roll: Tuple[int, int] = (0, 0)
        self.consecutive_doubles = 0
        self.round = 1
        self.free_parking_pot = 0
        self.pending_choice: Optional[ChoiceRequest] = None

        self.add_log(f"Game started with {len(self.players)} players!")
        self.add_log(f"{self.get_current_player().name}'s turn")

    def add_log(self, message: str, category: LogCategory = LogCategory.INFO) -> None:
        self.event_log.add(message, category)

    # === LOOKUPS ===

    def get_player(self, player_id: int) -> Optional[PlayerState]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_current_player(self) -> PlayerState:
        """Get the current active player."""
        return self.players[self.current_player_index]

    def get_active_players(self) -> List[PlayerState]:
        """Get all non-bankrupt players."""
        return [p for p in self.players if not p.is_bankrupt]

    def get_owner(self, position: int) -> Optional[PlayerState]:
        owner_id = self.property_owners.get(position)
        return self.get_player(owner_id) if owner_id is not None else None

    def get_houses(self, position: int) -> int:
        return self.property_houses.get(position, 0)

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def _turn_error(self, player_id: int) -> Optional[str]:
        """Reason why this player may not act right now, or None."""
        if self.is_over:
            return "Game is over"
        current = self.get_current_player()
        if current.player_id != player_id:
            return "Not your turn"
        if current.is_bankrupt:
            return "Player is bankrupt"
        return None

    # === DICE AND MOVEMENT ===

    def roll_dice(self) -> DiceRoll:
        """
        Roll two dice for the current player.

        Rolling doubles too many times in a row sends the player straight
        to jail instead of moving.
        """
        die1 = self.rng.randint(1, 6)
        die2 = self.rng.randint(1, 6)
        self.last_dice_roll = (die1, die2)
        roll = DiceRoll(die1, die2)

        if roll.is_doubles:
            self.consecutive_doubles += 1
        else:
            self.consecutive_doubles = 0

        self.turn_phase = TurnPhase.ROLLED
        player = self.get_current_player()
        self.add_log(
            f"{player.name} rolled {die1} + {die2} = {roll.total}"
            f"{' (Doubles!)' if roll.is_doubles else ''}"
        )

        if (
            roll.is_doubles
            and not player.in_jail
            and self.consecutive_doubles >= self.config.max_consecutive_doubles
        ):
            self.add_log(
                f"{player.name} rolled doubles {self.consecutive_doubles} times in a row!",
                LogCategory.JAIL,
            )
            self.send_to_jail(player.player_id)
            roll.sent_to_jail = True

        return roll

    def move_player(self, player_id: int, spaces: int) -> MoveResult:
        """Move a player a relative number of spaces around the board."""
        player = self.get_player(player_id)
        old_position = player.position
        passed_start = player.advance(spaces, self.config.start_bonus)
        self.turn_phase = TurnPhase.MOVING

        if passed_start and not player.in_jail:
            self.add_log(f"{player.name} passed START and collected ${self.config.start_bonus}!")

        return MoveResult(old_position, player.position, passed_start)

    def move_current_player(self, spaces: int) -> MoveResult:
        return self.move_player(self.get_current_player().player_id, spaces)

    # === LANDING ===

    def process_landing(self, player_id: int) -> LandingResult:
        """
        Resolve the tile the player stands on.

        Returns:
            LandingResult telling the caller what is still needed
        """
        player = self.get_player(player_id)
        position = player.position
        space = self.board.get_space(position)
        self.turn_phase = TurnPhase.LANDED

        if space.space_type == SpaceType.START:
            self.add_log(f"{player.name} landed on START")
            if self.house_rules.double_go:
                player.credit(self.config.start_bonus)
                self.add_log(
                    f"DOUBLE GO! {player.name} gets extra ${self.config.start_bonus}!",
                    LogCategory.CARD,
                )

        elif space.is_acquirable:
            return self._process_property_landing(player, space)

        elif isinstance(space, ChanceSpace):
            return self.process_chance_card(player_id, space.deck)

        elif isinstance(space, TaxSpace):
            return self.process_tax(player_id, position)

        elif space.space_type == SpaceType.JAIL:
            self.add_log(f"{player.name} is just visiting Jail")

        elif space.space_type == SpaceType.GO_TO_JAIL:
            return self.send_to_jail(player_id)

        elif space.space_type == SpaceType.PARKING:
            if self.house_rules.parking_jackpot and self.free_parking_pot > 0:
                player.credit(self.free_parking_pot)
                self.add_log(
                    f"JACKPOT! {player.name} collected ${self.free_parking_pot} from Free Parking!",
                    LogCategory.CARD,
                )
                self.free_parking_pot = 0
            else:
                self.add_log(f"{player.name} is relaxing at Free Parking")

        return LandingResult(LandingAction.NONE, position)

    def _process_property_landing(self, player: PlayerState, space) -> LandingResult:
        position = space.position
        owner = self.get_owner(position)

        if owner is None:
            if player.can_afford(space.price):
                self.turn_phase = TurnPhase.BUYING
                return LandingResult(LandingAction.CAN_BUY, position)
            self.add_log(f"{player.name} cannot afford {space.name} (${space.price})")
            return LandingResult(LandingAction.CANT_AFFORD, position)

        if owner.player_id == player.player_id:
            self.add_log(f"{player.name} landed on their own property")
            return LandingResult(LandingAction.OWN_PROPERTY, position, owner_id=owner.player_id)

        if owner.in_jail:
            self.add_log(f"{player.name} doesn't pay rent - {owner.name} is in jail")
            return LandingResult(LandingAction.OWNER_IN_JAIL, position, owner_id=owner.player_id)

        self.turn_phase = TurnPhase.PAYING
        return LandingResult(
            LandingAction.PAY_RENT,
            position,
            owner_id=owner.player_id,
            rent=self.calculate_rent(position),
        )

    def calculate_rent(self, property_position: int) -> int:
        """
        Calculate the rent owed for landing on a property.

        Mortgaged tiles never charge rent. Utilities use the last dice roll.
        """
        owner = self.get_owner(property_position)
        if owner is None or owner.is_mortgaged(property_position):
            return 0

        space = self.board.get_space(property_position)

        if isinstance(space, PropertySpace):
            return space.get_rent(self.get_houses(property_position), owner.owns_monopoly(space.group))
        if isinstance(space, RailroadSpace):
            return space.get_rent(owner.count_railroads())
        if isinstance(space, UtilitySpace):
            return space.get_rent(sum(self.last_dice_roll), owner.count_utilities())
        return 0

    # === BUYING AND BUILDING ===

    def buy_property(self, player_id: int, position: int) -> bool:
        """
        Player buys the unowned tile at the specified position.
        Returns True if successful, False otherwise.
        """
        if self._turn_error(player_id):
            return False

        space = self.board.get_space(position)
        if not space.is_acquirable or position in self.property_owners:
            return False

        player = self.get_player(player_id)
        if not player.debit(space.price):
            return False

        player.acquire(position)
        self.property_owners[position] = player_id
        self.property_houses[position] = 0
        self.add_log(f"{player.name} bought {space.name} for ${space.price}", LogCategory.PURCHASE)
        return True

    def decline_purchase(self, player_id: int, position: int) -> bool:
        if self._turn_error(player_id):
            return False

        player = self.get_player(player_id)
        space = self.board.get_space(position)
        self.add_log(f"{player.name} decided not to buy {space.name}")
        return True

    def build_house(self, player_id: int, property_position: int) -> bool:
        """
        Build one improvement level on a property.

        Requires ownership, the whole color group and fewer than five
        levels. The fifth level is the hotel.
        """
        if self._turn_error(player_id):
            return False

        space = self.board.get_property_space(property_position)
        player = self.get_player(player_id)
        if space is None or not player.owns(property_position):
            return False
        if not player.owns_monopoly(space.group):
            return False

        houses = self.get_houses(property_position)
        if houses >= 5:
            return False

        if not player.debit(space.house_price):
            return False

        self.property_houses[property_position] = houses + 1
        building = "Hotel" if houses + 1 == 5 else "House"
        self.add_log(f"{player.name} built a {building} on {space.name}", LogCategory.PURCHASE)
        return True

    def sabotage_property(self, player_id: int, property_position: int) -> bool:
        """Pay a flat fee to remove one improvement from an opponent's tile."""
        if self._turn_error(player_id):
            return False

        houses = self.get_houses(property_position)
        if houses <= 0:
            return False

        owner = self.get_owner(property_position)
        if owner is None or owner.player_id == player_id:
            return False

        player = self.get_player(player_id)
        if not player.debit(self.config.sabotage_cost):
            return False

        self.property_houses[property_position] = houses - 1
        space = self.board.get_space(property_position)
        self.add_log(
            f"{player.name} SABOTAGED {owner.name}'s {space.name}! House removed.",
            LogCategory.JAIL,
        )
        return True

    # === MORTGAGES ===

    def mortgage_property(self, player_id: int, property_position: int) -> ActionResult:
        """Mortgage an owned tile for half its price."""
        error = self._turn_error(player_id)
        if error:
            return ActionResult.fail(error)

        player = self.get_player(player_id)
        space = self.board.get_space(property_position)
        if not space.is_acquirable or not player.owns(property_position):
            return ActionResult.fail("You don't own this property")

        if isinstance(space, PropertySpace):
            group = self.board.get_color_group(space.group)
        else:
            group = [property_position]
        if any(self.get_houses(pos) > 0 for pos in group):
            return ActionResult.fail("Sell buildings in this color group first")

        if player.is_mortgaged(property_position):
            return ActionResult.fail("Already mortgaged")

        value = space.price // 2
        player.credit(value)
        player.mortgaged.add(property_position)
        self.add_log(f"{player.name} mortgaged {space.name} for ${value}", LogCategory.MONEY)
        return ActionResult.ok()

    def unmortgage_cost(self, property_position: int) -> int:
        """Half the price plus interest, rounded up."""
        half = self.board.get_space(property_position).price // 2
        interest = -(-half * self.config.mortgage_interest_percent // 100)
        return half + interest

    def unmortgage_property(self, player_id: int, property_position: int) -> ActionResult:
        error = self._turn_error(player_id)
        if error:
            return ActionResult.fail(error)

        player = self.get_player(player_id)
        if not player.owns(property_position):
            return ActionResult.fail("You don't own this property")
        if not player.is_mortgaged(property_position):
            return ActionResult.fail("Not mortgaged")

        cost = self.unmortgage_cost(property_position)
        if not player.debit(cost):
            return ActionResult.fail("Not enough money")

        player.mortgaged.discard(property_position)
        space = self.board.get_space(property_position)
        self.add_log(f"{player.name} unmortgaged {space.name} for ${cost}", LogCategory.PURCHASE)
        return ActionResult.ok()

    # === PAYMENTS ===

    def pay_rent(self, payer_id: int, owner_id: int, amount: int) -> bool:
        """
        Payer pays rent to the tile owner.

        On a shortfall the payer hands over everything they have and goes
        bankrupt with the owner as creditor.
        """
        payer = self.get_player(payer_id)
        owner = self.get_player(owner_id)

        if payer.debit(amount):
            owner.credit(amount)
            self.add_log(f"{payer.name} paid ${amount} rent to {owner.name}", LogCategory.RENT)
            return True

        available = payer.drain()
        owner.credit(available)
        self.add_log(f"{payer.name} paid ${available} (all they had) to {owner.name}", LogCategory.RENT)
        self.declare_bankruptcy(payer_id, owner_id)
        return False

    def process_tax(self, player_id: int, position: int) -> LandingResult:
        player = self.get_player(player_id)
        space = self.board.get_space(position)

        if player.debit(space.amount):
            collected = space.amount
            self.add_log(f"{player.name} paid ${space.amount} {space.name}", LogCategory.RENT)
        else:
            collected = player.drain()
            self.add_log(f"{player.name} paid ${collected} tax (all they had)", LogCategory.RENT)
            self.declare_bankruptcy(player_id, None)

        if self.house_rules.parking_jackpot:
            self.free_parking_pot += collected
            self.add_log(f"Tax added to Free Parking Jackpot: ${self.free_parking_pot} total")

        return LandingResult(LandingAction.TAX_PAID, position)

    # === CARDS ===

    def process_chance_card(self, player_id: int, deck_type: DeckType) -> LandingResult:
        """Draw a card from the named deck. The effect is applied separately."""
        player = self.get_player(player_id)
        card = self.decks[deck_type].draw()
        self.turn_phase = TurnPhase.CARD
        self.add_log(f"{player.name} drew a {deck_type.value.capitalize()} card", LogCategory.CARD)
        return LandingResult(
            LandingAction.CHANCE_CARD, player.position, card=card, deck=deck_type
        )

    def apply_card_effect(self, player_id: int, card: Card) -> CardResult:
        """
        Execute a card's effect for the player who drew it.

        Returns:
            CardResult flagging a pending landing on a new tile, or a
            ChoiceRequest when the drawer still has to pick a target
        """
        player = self.get_player(player_id)
        effect = card.effect
        others = [p for p in self.get_active_players() if p.player_id != player_id]

        if isinstance(effect, MoneyEffect):
            if effect.amount > 0:
                player.credit(effect.amount)
                self.add_log(f"{player.name} received ${effect.amount}", LogCategory.CARD)
            elif player.debit(-effect.amount):
                self.add_log(f"{player.name} paid ${-effect.amount}", LogCategory.CARD)
            else:
                self.declare_bankruptcy(player_id, None)

        elif isinstance(effect, MoveEffect):
            passed = player.relocate(effect.position, effect.collect_start, self.config.start_bonus)
            if passed:
                self.add_log(
                    f"{player.name} passed START and collected ${self.config.start_bonus}",
                    LogCategory.CARD,
                )
            self.add_log(
                f"{player.name} moved to {self.board.get_space(effect.position).name}",
                LogCategory.CARD,
            )
            return CardResult(needs_landing=True)

        elif isinstance(effect, MoveRelativeEffect):
            passed = player.advance(effect.spaces, self.config.start_bonus)
            if passed:
                self.add_log(f"{player.name} passed START", LogCategory.CARD)
            self.add_log(
                f"{player.name} moved to {self.board.get_space(player.position).name}",
                LogCategory.CARD,
            )
            return CardResult(needs_landing=True)

        elif isinstance(effect, JailEffect):
            self.send_to_jail(player_id)

        elif isinstance(effect, JailFreeEffect):
            player.has_jail_free_card = True
            self.add_log(f"{player.name} got a Get Out of Jail Free card!", LogCategory.CARD)

        elif isinstance(effect, (CollectFromAllEffect, StealFromAllEffect)):
            collected = 0
            for other in others:
                amount = min(effect.amount, other.money)
                other.debit(amount)
                collected += amount
            player.credit(collected)
            if isinstance(effect, StealFromAllEffect):
                self.add_log(f"{player.name} stole ${collected} total from all players!", LogCategory.CARD)
            else:
                self.add_log(f"{player.name} collected ${collected} from other players", LogCategory.CARD)

        elif isinstance(effect, PayToAllEffect):
            total = effect.amount * len(others)
            if player.debit(total):
                for other in others:
                    other.credit(effect.amount)
                self.add_log(f"{player.name} paid ${effect.amount} to each player", LogCategory.CARD)
            else:
                self.declare_bankruptcy(player_id, None)

        elif isinstance(effect, PayPerPropertyEffect):
            cost = effect.amount * player.property_count
            if player.debit(cost):
                self.add_log(f"{player.name} paid ${cost} for repairs", LogCategory.CARD)
            else:
                self.declare_bankruptcy(player_id, None)

        elif isinstance(effect, StealFromRichestEffect):
            if others:
                richest = max(others, key=lambda p: p.money)
                self._steal(player, richest, effect.amount)

        elif isinstance(effect, StealChoiceEffect):
            if others:
                self.pending_choice = ChoiceRequest(
                    ChoiceType.STEAL_TARGET,
                    amount=effect.amount,
                    candidates=[p.player_id for p in others],
                )
                return CardResult(choice=self.pending_choice)
            self.add_log(f"{player.name} has nobody to steal from", LogCategory.CARD)

        elif isinstance(effect, FreeArsonEffect):
            targets = self.demolition_targets(player_id)
            if targets:
                self.pending_choice = ChoiceRequest(ChoiceType.DEMOLISH_TARGET, candidates=targets)
                return CardResult(choice=self.pending_choice)
            self.add_log(f"{player.name} found no buildings to burn", LogCategory.CARD)

        elif isinstance(effect, EveryoneLosesEffect):
            for victim in self.get_active_players():
                if not victim.debit(effect.amount):
                    victim.drain()
                    # The drawer is left at zero but stays in the game
                    if victim.player_id != player_id:
                        self.declare_bankruptcy(victim.player_id, None)
            self.add_log(f"Market Crash! Everyone lost ${effect.amount}", LogCategory.CARD)

        elif isinstance(effect, GambleEffect):
            if self.rng.random() > 0.5:
                player.credit(effect.win_amount)
                self.add_log(f"{player.name} won the gamble! +${effect.win_amount}", LogCategory.CARD)
            elif player.debit(effect.lose_amount):
                self.add_log(f"{player.name} lost the gamble! -${effect.lose_amount}", LogCategory.CARD)
            else:
                self.add_log(
                    f"{player.name} lost but couldn't pay ${effect.lose_amount}", LogCategory.CARD
                )
                self.declare_bankruptcy(player_id, None)

        else:
            logger.warning(f"Unhandled card effect {effect!r} on card {card.card_id}")

        return CardResult()

    def _steal(self, thief: PlayerState, victim: PlayerState, amount: int) -> int:
        stolen = min(amount, victim.money)
        victim.debit(stolen)
        thief.credit(stolen)
        self.add_log(f"{thief.name} stole ${stolen} from {victim.name}!", LogCategory.CARD)
        return stolen

    def demolition_targets(self, player_id: int) -> List[int]:
        """Improved tiles owned by other active players."""
        return sorted(
            pos
            for pos, owner_id in self.property_owners.items()
            if owner_id != player_id
            and self.get_houses(pos) > 0
            and not self.get_player(owner_id).is_bankrupt
        )

    def resolve_steal_choice(self, player_id: int, target_id: int) -> ActionResult:
        """Complete a pending steal card once the drawer has picked a victim."""
        error = self._turn_error(player_id)
        if error:
            return ActionResult.fail(error)

        choice = self.pending_choice
        if choice is None or choice.choice_type != ChoiceType.STEAL_TARGET:
            return ActionResult.fail("No steal target pending")

        target = self.get_player(target_id)
        if target_id not in choice.candidates or target is None or target.is_bankrupt:
            return ActionResult.fail("Invalid steal target")

        self._steal(self.get_player(player_id), target, choice.amount)
        self.pending_choice = None
        return ActionResult.ok()

    def resolve_demolish_choice(self, player_id: int, position: int) -> ActionResult:
        """Complete a pending arson card by removing one level from the chosen tile."""
        error = self._turn_error(player_id)
        if error:
            return ActionResult.fail(error)

        choice = self.pending_choice
        if choice is None or choice.choice_type != ChoiceType.DEMOLISH_TARGET:
            return ActionResult.fail("No demolition target pending")

        if position not in choice.candidates or position not in self.demolition_targets(player_id):
            return ActionResult.fail("No opponent buildings on that tile")

        self.property_houses[position] -= 1
        player = self.get_player(player_id)
        self.add_log(
            f"{player.name} burned a house on {self.board.get_space(position).name}!",
            LogCategory.CARD,
        )
        self.pending_choice = None
        return ActionResult.ok()

    # === JAIL ===

    def send_to_jail(self, player_id: int) -> LandingResult:
        """Send a player to jail without passing START."""
        player = self.get_player(player_id)
        player.send_to_jail()
        self.consecutive_doubles = 0
        self.add_log(f"{player.name} was sent to Jail!", LogCategory.JAIL)
        return LandingResult(LandingAction.JAILED, player.position)

    def process_jail_turn(self, player_id: int, roll: DiceRoll) -> JailResult:
        """
        Resolve a jailed player's roll.

        Doubles free the player. Otherwise the jail counter goes up, and on
        the last allowed turn the bail is forced, bankrupting the player if
        it cannot be paid.
        """
        player = self.get_player(player_id)

        if roll.is_doubles:
            player.release_from_jail()
            self.add_log(f"{player.name} rolled doubles and escaped Jail!", LogCategory.JAIL)
            return JailResult(escaped=True, can_move=True)

        if player.increment_jail_turn() >= self.config.max_jail_turns:
            if player.debit(self.config.jail_bail):
                player.release_from_jail()
                self.add_log(
                    f"{player.name} paid ${self.config.jail_bail} and left Jail", LogCategory.JAIL
                )
                return JailResult(escaped=True, can_move=True)
            self.declare_bankruptcy(player_id, None)
            return JailResult(escaped=False, can_move=False)

        self.add_log(
            f"{player.name} stays in Jail (turn {player.jail_turns}/{self.config.max_jail_turns})",
            LogCategory.JAIL,
        )
        return JailResult(escaped=False, can_move=False)

    def pay_jail_bail(self, player_id: int) -> bool:
        """Leave jail using a Get Out of Jail Free card, or else the cash bail."""
        if self._turn_error(player_id):
            return False

        player = self.get_player(player_id)
        if not player.in_jail:
            return False

        if player.has_jail_free_card:
            player.has_jail_free_card = False
            player.release_from_jail()
            self.add_log(f"{player.name} used Get Out of Jail Free card!", LogCategory.JAIL)
            return True

        if player.debit(self.config.jail_bail):
            player.release_from_jail()
            self.add_log(
                f"{player.name} paid ${self.config.jail_bail} to leave Jail", LogCategory.JAIL
            )
            return True

        return False

    # === BANKRUPTCY AND TURN FLOW ===

    def declare_bankruptcy(self, player_id: int, creditor_id: Optional[int] = None) -> None:
        """
        Take a player out of the game.

        With a creditor, every tile passes to them with its improvements and
        mortgage. Without one, tiles go back to the bank and improvements
        are erased.
        """
        player = self.get_player(player_id)
        if player.is_bankrupt:
            return

        player.go_bankrupt()
        self.add_log(f"{player.name} went BANKRUPT!", LogCategory.BANKRUPTCY)

        creditor = self.get_player(creditor_id) if creditor_id is not None else None
        if creditor is not None:
            for pos in sorted(player.properties):
                creditor.acquire(pos)
                if player.is_mortgaged(pos):
                    creditor.mortgaged.add(pos)
                self.property_owners[pos] = creditor.player_id
            self.add_log(f"{creditor.name} received {player.name}'s properties")
        else:
            for pos in player.properties:
                self.property_owners.pop(pos, None)
                self.property_houses.pop(pos, None)

        player.properties.clear()
        player.mortgaged.clear()

        if len(self.get_active_players()) <= 1:
            self.end_game()

    def grant_extra_roll(self) -> None:
        player = self.get_current_player()
        self.add_log(f"{player.name} rolled doubles! Roll again.")
        self.turn_phase = TurnPhase.WAITING

    def finish_turn_actions(self) -> None:
        self.turn_phase = TurnPhase.END_TURN

    def end_turn(self) -> PlayerState:
        """Pass the turn to the next player who is still in the game."""
        self.consecutive_doubles = 0
        self.pending_choice = None

        next_index = self.current_player_index
        checked = 0
        while True:
            next_index = (next_index + 1) % len(self.players)
            checked += 1
            if next_index == 0:
                self.round += 1
                self.add_log(f"--- Round {self.round} ---")
            if not self.players[next_index].is_bankrupt or checked >= len(self.players):
                break

        self.current_player_index = next_index
        self.turn_phase = TurnPhase.WAITING

        next_player = self.get_current_player()
        self.add_log(f"{next_player.name}'s turn")
        return next_player

    def end_game(self) -> None:
        self.phase = GamePhase.GAME_OVER
        self.add_log("GAME OVER!")
        logger.info(f"Game over after {self.round} rounds")

    def get_winner(self) -> PlayerState:
        """The last player standing, or else the one with the highest net worth."""
        active = self.get_active_players()
        if len(active) == 1:
            return active[0]
        return max(self.players, key=lambda p: p.net_worth())

    def get_standings(self) -> List[PlayerState]:
        """Players still in the game first, each part ordered by net worth."""
        return sorted(self.players, key=lambda p: (p.is_bankrupt, -p.net_worth()))


def create_game(config: GameConfig, players: List[Player], board: Optional[Board] = None) -> GameState:
    """Create a new game with the given configuration and players."""
    logger.info(f"Creating game for {len(players)} players (seed={config.seed})")
    return GameState(config, players, board)
