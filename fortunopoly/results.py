"""
Phase enums and the structured results returned by engine operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fortunopoly.cards import Card, DeckType


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


class TurnPhase(str, Enum):
    """Progression of a single turn."""

    WAITING = "waiting"
    ROLLED = "rolled"
    MOVING = "moving"
    LANDED = "landed"
    BUYING = "buying"
    PAYING = "paying"
    CARD = "card"
    END_TURN = "endTurn"


class LandingAction(str, Enum):
    """What a landing asks of the caller."""

    NONE = "none"
    CAN_BUY = "canBuy"
    CANT_AFFORD = "cantAfford"
    OWN_PROPERTY = "ownProperty"
    OWNER_IN_JAIL = "ownerInJail"
    PAY_RENT = "payRent"
    CHANCE_CARD = "chanceCard"
    TAX_PAID = "taxPaid"
    JAILED = "jailed"


@dataclass
class DiceRoll:
    die1: int
    die2: int
    sent_to_jail: bool = False

    @property
    def total(self) -> int:
        return self.die1 + self.die2

    @property
    def is_doubles(self) -> bool:
        return self.die1 == self.die2


@dataclass
class MoveResult:
    old_position: int
    new_position: int
    passed_start: bool


@dataclass
class LandingResult:
    """
    Outcome of resolving the tile a player stands on.

    owner_id and rent are set for PAY_RENT; card and deck for CHANCE_CARD.
    """

    action: LandingAction
    position: int
    owner_id: Optional[int] = None
    rent: int = 0
    card: Optional[Card] = None
    deck: Optional[DeckType] = None


@dataclass
class ActionResult:
    """Success flag plus a human-readable reason on failure."""

    success: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls) -> "ActionResult":
        return cls(True)

    @classmethod
    def fail(cls, reason: str) -> "ActionResult":
        return cls(False, reason)


class ChoiceType(str, Enum):
    STEAL_TARGET = "stealChoice"
    DEMOLISH_TARGET = "freeArson"


@dataclass
class ChoiceRequest:
    """
    A card effect waiting for an external decision.

    candidates holds player ids for STEAL_TARGET and tile positions for
    DEMOLISH_TARGET.
    """

    choice_type: ChoiceType
    amount: int = 0
    candidates: List[int] = field(default_factory=list)


@dataclass
class CardResult:
    needs_landing: bool = False
    choice: Optional[ChoiceRequest] = None

    @property
    def needs_choice(self) -> bool:
        return self.choice is not None


@dataclass
class JailResult:
    escaped: bool
    can_move: bool
