"""
Flat snapshot serialization of GameState.

Produces a JSON-ready dict holding everything needed to resume a game.
Deck order is not part of the snapshot; decks are reshuffled on restore.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from fortunopoly.config import BotDifficulty, GameConfig, HouseRules
from fortunopoly.events import LogCategory
from fortunopoly.exceptions import SnapshotError
from fortunopoly.game import GameState
from fortunopoly.player import Player
from fortunopoly.results import GamePhase, TurnPhase

logger = logging.getLogger(__name__)


class PlayerRecord(BaseModel):
    player_id: int
    name: str
    money: int = Field(ge=0)
    position: int = Field(ge=0)
    properties: List[int] = Field(default_factory=list)
    mortgaged_properties: List[int] = Field(default_factory=list)
    in_jail: bool = False
    jail_turns: int = Field(default=0, ge=0)
    has_jail_free_card: bool = False
    is_bankrupt: bool = False
    is_bot: bool = False
    bot_difficulty: Optional[BotDifficulty] = None


class LogRecord(BaseModel):
    message: str
    category: LogCategory = LogCategory.INFO
    timestamp: float


class HouseRulesRecord(BaseModel):
    parking_jackpot: bool = False
    double_go: bool = False


class GameSnapshot(BaseModel):
    """Everything needed to resume a game."""

    phase: GamePhase
    players: List[PlayerRecord] = Field(min_length=1)
    current_player_index: int = Field(ge=0)
    turn_phase: TurnPhase = TurnPhase.WAITING
    last_dice_roll: Tuple[int, int] = (0, 0)
    consecutive_doubles: int = Field(default=0, ge=0)
    property_owners: Dict[int, int] = Field(default_factory=dict)
    property_houses: Dict[int, int] = Field(default_factory=dict)
    log: List[LogRecord] = Field(default_factory=list)
    round: int = Field(default=1, ge=1)
    house_rules: HouseRulesRecord = Field(default_factory=HouseRulesRecord)
    free_parking_pot: int = Field(default=0, ge=0)

    @field_validator("property_houses")
    @classmethod
    def check_levels(cls, value: Dict[int, int]) -> Dict[int, int]:
        for position, level in value.items():
            if not 0 <= level <= 5:
                raise ValueError(f"Improvement level {level} on tile {position} is out of range")
        return value


def _build_snapshot(game: GameState) -> GameSnapshot:
    players = [
        PlayerRecord(
            player_id=p.player_id,
            name=p.name,
            money=p.money,
            position=p.position,
            properties=sorted(p.properties),
            mortgaged_properties=sorted(p.mortgaged),
            in_jail=p.in_jail,
            jail_turns=p.jail_turns,
            has_jail_free_card=p.has_jail_free_card,
            is_bankrupt=p.is_bankrupt,
            is_bot=p.is_bot,
            bot_difficulty=p.bot_difficulty,
        )
        for p in game.players
    ]
    return GameSnapshot(
        phase=game.phase,
        players=players,
        current_player_index=game.current_player_index,
        turn_phase=game.turn_phase,
        last_dice_roll=game.last_dice_roll,
        consecutive_doubles=game.consecutive_doubles,
        property_owners=dict(game.property_owners),
        property_houses=dict(game.property_houses),
        log=[
            LogRecord(message=e.message, category=e.category, timestamp=e.timestamp)
            for e in game.event_log
        ],
        round=game.round,
        house_rules=HouseRulesRecord(
            parking_jackpot=game.house_rules.parking_jackpot,
            double_go=game.house_rules.double_go,
        ),
        free_parking_pot=game.free_parking_pot,
    )


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a JSON-ready dict."""
    return _build_snapshot(game).model_dump(mode="json")


def dumps(game: GameState, indent: Optional[int] = 2) -> str:
    return _build_snapshot(game).model_dump_json(indent=indent)


def restore_snapshot(data: Dict[str, Any], config: Optional[GameConfig] = None) -> GameState:
    """
    Rebuild a GameState from a snapshot dict.

    Args:
        data: Snapshot as produced by serialize_snapshot
        config: Base configuration; house rules always come from the snapshot

    Raises:
        SnapshotError: If the snapshot is malformed or inconsistent
    """
    try:
        snapshot = GameSnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e
    return _restore(snapshot, config)


def loads(text: str, config: Optional[GameConfig] = None) -> GameState:
    try:
        snapshot = GameSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e
    return _restore(snapshot, config)


def _restore(snapshot: GameSnapshot, config: Optional[GameConfig]) -> GameState:
    base = config or GameConfig()
    game_config = GameConfig(
        starting_money=base.starting_money,
        start_bonus=base.start_bonus,
        jail_bail=base.jail_bail,
        max_jail_turns=base.max_jail_turns,
        max_consecutive_doubles=base.max_consecutive_doubles,
        sabotage_cost=base.sabotage_cost,
        mortgage_interest_percent=base.mortgage_interest_percent,
        max_log_entries=base.max_log_entries,
        house_rules=HouseRules(
            parking_jackpot=snapshot.house_rules.parking_jackpot,
            double_go=snapshot.house_rules.double_go,
        ),
        seed=base.seed,
    )

    roster = [
        Player(r.player_id, r.name, is_bot=r.is_bot, bot_difficulty=r.bot_difficulty)
        for r in snapshot.players
    ]
    try:
        game = GameState(game_config, roster)
    except ValueError as e:
        raise SnapshotError(str(e)) from e

    if snapshot.current_player_index >= len(game.players):
        raise SnapshotError(f"Current player index {snapshot.current_player_index} is out of range")

    board_size = game.board.size
    for record, player in zip(snapshot.players, game.players):
        if record.position >= board_size:
            raise SnapshotError(f"{record.name} is off the board at {record.position}")
        player.money = record.money
        player.position = record.position
        player.properties = set(record.properties)
        # Mortgages only make sense on owned tiles
        player.mortgaged = set(record.mortgaged_properties) & player.properties
        player.in_jail = record.in_jail
        player.jail_turns = record.jail_turns
        player.has_jail_free_card = record.has_jail_free_card
        player.is_bankrupt = record.is_bankrupt

    for position, owner_id in snapshot.property_owners.items():
        owner = game.get_player(owner_id)
        if owner is None:
            raise SnapshotError(f"Tile {position} is owned by unknown player {owner_id}")
        if not 0 <= position < board_size or not game.board.is_acquirable(position):
            raise SnapshotError(f"Tile {position} cannot be owned")
        if position not in owner.properties:
            raise SnapshotError(f"Ledger says {owner.name} owns tile {position} but their record does not")

    for player in game.players:
        for position in player.properties:
            if snapshot.property_owners.get(position) != player.player_id:
                raise SnapshotError(f"{player.name} lists tile {position} missing from the ledger")

    game.property_owners = dict(snapshot.property_owners)
    game.property_houses = {
        pos: snapshot.property_houses.get(pos, 0) for pos in snapshot.property_owners
    }

    game.phase = snapshot.phase
    game.turn_phase = snapshot.turn_phase
    game.current_player_index = snapshot.current_player_index
    game.last_dice_roll = tuple(snapshot.last_dice_roll)
    game.consecutive_doubles = snapshot.consecutive_doubles
    game.round = snapshot.round
    game.free_parking_pot = snapshot.free_parking_pot

    game.event_log.clear()
    for entry in snapshot.log:
        game.event_log.add(entry.message, entry.category, timestamp=entry.timestamp)
    game.add_log("Game loaded successfully!")

    logger.info(f"Restored game at round {game.round} with {len(game.players)} players")
    return game
