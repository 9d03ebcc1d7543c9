"""Scripted opponent with three difficulty tiers."""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from fortunopoly.agents.base import Agent
from fortunopoly.config import BotDifficulty
from fortunopoly.game import GameState
from fortunopoly.spaces import PropertySpace, SpaceType
from fortunopoly.trading import TradeProposal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotProfile:
    """Decision thresholds for one difficulty tier."""

    buy_chance: float
    min_money_buffer: int
    trade_accept_chance: float
    build_chance: float
    prioritize_monopoly: bool
    sabotage_chance: float


DIFFICULTY: Dict[BotDifficulty, BotProfile] = {
    BotDifficulty.EASY: BotProfile(
        buy_chance=0.4,
        min_money_buffer=100,
        trade_accept_chance=0.8,
        build_chance=0.3,
        prioritize_monopoly=False,
        sabotage_chance=0.1,
    ),
    BotDifficulty.MEDIUM: BotProfile(
        buy_chance=0.7,
        min_money_buffer=250,
        trade_accept_chance=0.4,
        build_chance=0.6,
        prioritize_monopoly=True,
        sabotage_chance=0.3,
    ),
    BotDifficulty.HARD: BotProfile(
        buy_chance=0.95,
        min_money_buffer=150,
        trade_accept_chance=0.1,
        build_chance=0.9,
        prioritize_monopoly=True,
        sabotage_chance=0.5,
    ),
}


class BotAgent(Agent):
    """
    Rule-of-thumb bot.

    Completing a monopoly always wins over caution. Past that, each tier
    trades off cash safety against random eagerness using its profile.
    Hard bots also buy stations and utilities, block opponents and leave
    jail early.
    """

    def __init__(
        self,
        player_id: int,
        name: str,
        difficulty: BotDifficulty = BotDifficulty.MEDIUM,
        seed: Optional[int] = None,
    ):
        super().__init__(player_id, name)
        self.difficulty = BotDifficulty(difficulty)
        self.profile = DIFFICULTY[self.difficulty]
        # Deterministic per seat unless a seed is given
        self.rng = random.Random(player_id if seed is None else seed)

    @property
    def is_hard(self) -> bool:
        return self.difficulty == BotDifficulty.HARD

    def should_buy(self, game: GameState, position: int) -> bool:
        player = game.get_player(self.player_id)
        space = game.board.get_space(position)
        group = space.group if isinstance(space, PropertySpace) else None

        if self.is_hard and space.space_type in (SpaceType.RAILROAD, SpaceType.UTILITY):
            if player.money > space.price + 50:
                logger.debug(f"{self.name}: buying {space.name}, stations and utilities pay off")
                return True

        if group is not None:
            group_size = game.board.group_size(group)
            if player.count_in_group(group) == group_size - 1:
                logger.debug(f"{self.name}: completing monopoly with {space.name}")
                return True

            if self.is_hard and player.money > space.price:
                for other in game.get_active_players():
                    if other.player_id != self.player_id and other.count_in_group(group) == group_size - 1:
                        logger.debug(f"{self.name}: blocking {other.name} on {group}")
                        return True

        if player.money < space.price + self.profile.min_money_buffer:
            logger.debug(f"{self.name}: can't afford {space.name} with buffer")
            return False

        if self.profile.prioritize_monopoly and group is not None and player.count_in_group(group) > 0:
            logger.debug(f"{self.name}: already owns part of {group}, buying")
            return True

        decision = self.rng.random() < self.profile.buy_chance
        logger.debug(
            f"{self.name}: buy {space.name}? {'yes' if decision else 'no'} "
            f"({self.profile.buy_chance:.0%} chance)"
        )
        return decision

    def should_pay_bail(self, game: GameState) -> bool:
        player = game.get_player(self.player_id)

        if player.has_jail_free_card:
            return True
        # Early game: stay in and roll
        if player.property_count < 3:
            return False
        if player.money > 800 and player.property_count > 5:
            return True

        has_monopoly = any(player.owns_monopoly(group) for group in game.board.groups)
        if has_monopoly and player.money > 300:
            return True
        if self.is_hard and player.money > 400:
            return True

        return player.money > 600

    def try_build_houses(self, game: GameState) -> int:
        """
        Build on monopolized tiles while cash stays above the buffer.

        One random gate per turn decides whether the bot builds at all.
        """
        if self.rng.random() > self.profile.build_chance:
            return 0

        player = game.get_player(self.player_id)
        built = 0
        for position in sorted(player.properties):
            space = game.board.get_property_space(position)
            if space is None or not player.owns_monopoly(space.group):
                continue
            if game.get_houses(position) >= 5:
                continue
            if player.money < space.house_price + self.profile.min_money_buffer:
                continue
            if game.build_house(self.player_id, position):
                logger.debug(f"{self.name}: built on {space.name}")
                built += 1
        return built

    def evaluate_trade(self, game: GameState, proposal: TradeProposal) -> bool:
        """
        Judge a proposal addressed to this bot.

        The bot receives the proposer's offered side and gives up the
        requested side. Values are face prices plus cash.
        """
        player = game.get_player(self.player_id)
        board = game.board

        receive_value = proposal.offered_money + sum(
            getattr(board.get_space(pos), "price", 0) for pos in proposal.offered_properties
        )
        give_value = proposal.requested_money + sum(
            getattr(board.get_space(pos), "price", 0) for pos in proposal.requested_properties
        )

        completes_monopoly = False
        for pos in proposal.offered_properties:
            space = board.get_property_space(pos)
            if space is not None and player.count_in_group(space.group) + 1 == board.group_size(space.group):
                completes_monopoly = True

        if self.is_hard and completes_monopoly and receive_value > give_value * 0.5:
            logger.debug(f"{self.name}: accepting trade, it completes a monopoly")
            return True

        if receive_value >= give_value * 1.2:
            logger.debug(f"{self.name}: accepting trade worth ${receive_value} for ${give_value}")
            return True

        return self.rng.random() < self.profile.trade_accept_chance

    def choose_steal_target(self, game: GameState, candidates: List[int]) -> Optional[int]:
        """Rob the wealthiest candidate."""
        players = [game.get_player(pid) for pid in candidates]
        players = [p for p in players if p is not None and not p.is_bankrupt]
        if not players:
            return None
        return max(players, key=lambda p: p.money).player_id

    def choose_demolish_target(self, game: GameState, candidates: List[int]) -> Optional[int]:
        """Burn the most improved candidate tile."""
        if not candidates:
            return None
        return max(candidates, key=game.get_houses)

    def consider_sabotage(self, game: GameState) -> Optional[int]:
        if self.rng.random() >= self.profile.sabotage_chance:
            return None

        targets = game.demolition_targets(self.player_id)
        if not targets:
            return None

        player = game.get_player(self.player_id)
        if player.money < game.config.sabotage_cost + self.profile.min_money_buffer:
            return None

        target = max(targets, key=game.get_houses)
        logger.debug(f"{self.name}: sabotaging {game.board.get_space(target).name}")
        return target


def create_bot_for(game: GameState, player_id: int, seed: Optional[int] = None) -> BotAgent:
    """Build a bot for a seated player using the difficulty chosen at setup."""
    player = game.get_player(player_id)
    return BotAgent(player_id, player.name, player.bot_difficulty or BotDifficulty.MEDIUM, seed)
