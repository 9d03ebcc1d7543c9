"""
Fortune and Fate card system.

Fortune cards cover movement, fines and heists; Fate cards cover financial
and life events. Each card carries exactly one effect variant.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Sequence, Union


class DeckType(Enum):
    """The two independent card decks."""

    FORTUNE = "fortune"
    FATE = "fate"


class EffectType(Enum):
    """Kinds of card effects."""

    MONEY = "money"
    MOVE = "move"
    MOVE_RELATIVE = "moveRelative"
    JAIL = "jail"
    JAIL_FREE = "jailFree"
    COLLECT_FROM_ALL = "collectFromAll"
    PAY_TO_ALL = "payToAll"
    PAY_PER_PROPERTY = "payPerProperty"
    STEAL_FROM_RICHEST = "stealFromRichest"
    STEAL_FROM_ALL = "stealFromAll"
    STEAL_CHOICE = "stealChoice"
    FREE_ARSON = "freeArson"
    EVERYONE_LOSES = "everyoneLoses"
    GAMBLE = "gamble"


@dataclass(frozen=True)
class MoneyEffect:
    """Flat money delta; negative amounts are payments to the bank."""

    amount: int
    effect_type: ClassVar[EffectType] = EffectType.MONEY


@dataclass(frozen=True)
class MoveEffect:
    """Move to an absolute position."""

    position: int
    collect_start: bool = True
    effect_type: ClassVar[EffectType] = EffectType.MOVE


@dataclass(frozen=True)
class MoveRelativeEffect:
    spaces: int
    effect_type: ClassVar[EffectType] = EffectType.MOVE_RELATIVE


@dataclass(frozen=True)
class JailEffect:
    effect_type: ClassVar[EffectType] = EffectType.JAIL


@dataclass(frozen=True)
class JailFreeEffect:
    effect_type: ClassVar[EffectType] = EffectType.JAIL_FREE


@dataclass(frozen=True)
class CollectFromAllEffect:
    """Collect a fixed amount from every other active player."""

    amount: int
    effect_type: ClassVar[EffectType] = EffectType.COLLECT_FROM_ALL


@dataclass(frozen=True)
class PayToAllEffect:
    """Pay a fixed amount to every other active player."""

    amount: int
    effect_type: ClassVar[EffectType] = EffectType.PAY_TO_ALL


@dataclass(frozen=True)
class PayPerPropertyEffect:
    amount: int
    effect_type: ClassVar[EffectType] = EffectType.PAY_PER_PROPERTY


@dataclass(frozen=True)
class StealFromRichestEffect:
    amount: int
    effect_type: ClassVar[EffectType] = EffectType.STEAL_FROM_RICHEST


@dataclass(frozen=True)
class StealFromAllEffect:
    amount: int
    effect_type: ClassVar[EffectType] = EffectType.STEAL_FROM_ALL


@dataclass(frozen=True)
class StealChoiceEffect:
    """Steal from a player picked by the drawer. Needs an external decision."""

    amount: int
    effect_type: ClassVar[EffectType] = EffectType.STEAL_CHOICE


@dataclass(frozen=True)
class FreeArsonEffect:
    """Remove one improvement from an opponent tile picked by the drawer."""

    effect_type: ClassVar[EffectType] = EffectType.FREE_ARSON


@dataclass(frozen=True)
class EveryoneLosesEffect:
    """Every active player pays the bank, the drawer included."""

    amount: int
    effect_type: ClassVar[EffectType] = EffectType.EVERYONE_LOSES


@dataclass(frozen=True)
class GambleEffect:
    win_amount: int
    lose_amount: int
    effect_type: ClassVar[EffectType] = EffectType.GAMBLE


CardEffect = Union[
    MoneyEffect,
    MoveEffect,
    MoveRelativeEffect,
    JailEffect,
    JailFreeEffect,
    CollectFromAllEffect,
    PayToAllEffect,
    PayPerPropertyEffect,
    StealFromRichestEffect,
    StealFromAllEffect,
    StealChoiceEffect,
    FreeArsonEffect,
    EveryoneLosesEffect,
    GambleEffect,
]


@dataclass(frozen=True)
class Card:
    """Represents a Fortune or Fate card."""

    card_id: int
    text: str
    effect: CardEffect

    def __repr__(self) -> str:
        return f"Card({self.card_id}, '{self.text}')"


class Deck:
    """
    A finite deck that deals every card once per cycle.

    Cards are popped from a shuffled working copy. When the working copy
    runs out, a fresh copy of the full card set is shuffled in.
    """

    def __init__(self, deck_type: DeckType, cards: Sequence[Card], rng: random.Random):
        self.deck_type = deck_type
        self.all_cards = tuple(cards)
        self.rng = rng
        self.cards: List[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Replace the working copy with a freshly shuffled full set."""
        self.cards = list(self.all_cards)
        self.rng.shuffle(self.cards)

    def draw(self) -> Card:
        """Draw a card, reshuffling first if the deck is exhausted."""
        if not self.cards:
            self.shuffle()
        return self.cards.pop()

    @property
    def size(self) -> int:
        return len(self.all_cards)

    def __len__(self) -> int:
        return len(self.cards)


FATE_CARDS: List[Card] = [
    Card(1, "Bank error in your favor! Collect $200.", MoneyEffect(200)),
    Card(2, "You won a crossword competition! Collect $100.", MoneyEffect(100)),
    Card(3, "Tax refund! Collect $50.", MoneyEffect(50)),
    Card(4, "Birthday gift from a rich uncle! Collect $150.", MoneyEffect(150)),
    Card(5, "You sold your vintage collection! Collect $75.", MoneyEffect(75)),
    Card(6, "Dividend payout! Collect $50.", MoneyEffect(50)),
    Card(7, "Doctor's bill. Pay $50.", MoneyEffect(-50)),
    Card(9, "Home repairs needed. Pay $100.", MoneyEffect(-100)),
    Card(10, "School fees due. Pay $75.", MoneyEffect(-75)),
    Card(19, "Get Out of Jail Free card! Keep this until needed.", JailFreeEffect()),
    Card(20, "It's your lucky day! Collect $25 from each player.", CollectFromAllEffect(25)),
    Card(22, "Street repairs: Pay $25 per property you own.", PayPerPropertyEffect(25)),
]

FORTUNE_CARDS: List[Card] = [
    Card(8, "Speeding ticket. Pay $15.", MoneyEffect(-15)),
    Card(11, "Parking fine. Pay $20.", MoneyEffect(-20)),
    Card(12, "Advance to START! Collect $200.", MoveEffect(0)),
    Card(13, "Take a trip to North Station.", MoveEffect(5)),
    Card(14, "Go to Free Parking for a break.", MoveEffect(20)),
    Card(15, "Visit Ruby Lane.", MoveEffect(21)),
    Card(16, "Move forward 3 spaces.", MoveRelativeEffect(3)),
    Card(17, "Move back 3 spaces.", MoveRelativeEffect(-3)),
    Card(18, "Go directly to Jail. Do not pass START.", JailEffect()),
    Card(21, "You're feeling generous. Pay each player $10.", PayToAllEffect(10)),
    Card(23, "Corporate Espionage! Steal $100 from the richest player.", StealFromRichestEffect(100)),
    Card(24, "Arson! Remove 1 house from any opponent's property (free).", FreeArsonEffect()),
    Card(25, "Con Artist! Steal $50 from each other player.", StealFromAllEffect(50)),
    Card(26, "Heist Opportunity! Steal $150 from a player of your choice.", StealChoiceEffect(150)),
    Card(27, "Market Crash! Everyone loses $75 (including you).", EveryoneLosesEffect(75)),
    Card(28, "Lucky Gamble! Flip a coin: Heads = win $200, Tails = lose $100.", GambleEffect(200, 100)),
]


def create_fate_deck(rng: random.Random) -> Deck:
    """Create the Fate deck."""
    return Deck(DeckType.FATE, FATE_CARDS, rng)


def create_fortune_deck(rng: random.Random) -> Deck:
    """Create the Fortune deck."""
    return Deck(DeckType.FORTUNE, FORTUNE_CARDS, rng)


def find_card(card_id: int) -> Card:
    """Look up a card from either deck by id."""
    for card in FATE_CARDS + FORTUNE_CARDS:
        if card.card_id == card_id:
            return card
    raise KeyError(card_id)
