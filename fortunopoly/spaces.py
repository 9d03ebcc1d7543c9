"""
Board space definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from fortunopoly.cards import DeckType


class SpaceType(Enum):
    """Types of spaces on the board."""

    START = "start"
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    CHANCE = "chance"
    TAX = "tax"
    JAIL = "jail"
    GO_TO_JAIL = "gotojail"
    PARKING = "parking"


ACQUIRABLE_TYPES = (SpaceType.PROPERTY, SpaceType.RAILROAD, SpaceType.UTILITY)


@dataclass
class Space:
    """Base class for a board space."""

    name: str
    position: int
    space_type: SpaceType

    @property
    def is_acquirable(self) -> bool:
        return self.space_type in ACQUIRABLE_TYPES

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass
class StartSpace(Space):
    """The START space."""

    def __init__(self, position: int = 0):
        super().__init__("START", position, SpaceType.START)


@dataclass
class PropertySpace(Space):
    """A colored property that can be owned, improved and mortgaged."""

    price: int
    group: str
    rent: Tuple[int, int, int, int, int, int]
    house_price: int

    def __init__(
        self,
        name: str,
        position: int,
        price: int,
        group: str,
        rent: Tuple[int, int, int, int, int, int],
        house_price: int,
    ):
        super().__init__(name, position, SpaceType.PROPERTY)
        self.price = price
        self.group = group
        self.rent = tuple(rent)
        self.house_price = house_price

    def get_rent(self, level: int, has_monopoly: bool) -> int:
        """
        Calculate rent for this property.

        Args:
            level: Improvement level (0-4 houses, 5 for hotel)
            has_monopoly: Whether the owner holds the whole color group

        Returns:
            Rent amount. The monopoly bonus only doubles unimproved rent.
        """
        if level > 0:
            return self.rent[level]
        return self.rent[0] * 2 if has_monopoly else self.rent[0]


@dataclass
class RailroadSpace(Space):
    """A station; rent grows with the number of stations owned."""

    price: int
    rent: Tuple[int, int, int, int]

    def __init__(
        self,
        name: str,
        position: int,
        price: int = 200,
        rent: Tuple[int, int, int, int] = (25, 50, 100, 200),
    ):
        super().__init__(name, position, SpaceType.RAILROAD)
        self.price = price
        self.rent = tuple(rent)

    def get_rent(self, railroads_owned: int) -> int:
        """Calculate rent based on number of railroads owned by the owner."""
        return self.rent[railroads_owned - 1]


@dataclass
class UtilitySpace(Space):
    """A utility; rent is the dice total times a multiplier."""

    price: int
    rent_multiplier: Tuple[int, int]

    def __init__(
        self,
        name: str,
        position: int,
        price: int = 150,
        rent_multiplier: Tuple[int, int] = (4, 10),
    ):
        super().__init__(name, position, SpaceType.UTILITY)
        self.price = price
        self.rent_multiplier = tuple(rent_multiplier)

    def get_rent(self, dice_total: int, utilities_owned: int) -> int:
        """Calculate rent based on dice total and number of utilities owned."""
        return dice_total * self.rent_multiplier[utilities_owned - 1]


@dataclass
class ChanceSpace(Space):
    """A Fortune or Fate card space."""

    deck: DeckType

    def __init__(self, position: int, deck: DeckType):
        super().__init__(deck.value.capitalize(), position, SpaceType.CHANCE)
        self.deck = deck


@dataclass
class TaxSpace(Space):
    """A tax space (Income Tax or Luxury Tax)."""

    amount: int

    def __init__(self, name: str, position: int, amount: int):
        super().__init__(name, position, SpaceType.TAX)
        self.amount = amount


@dataclass
class JailSpace(Space):
    """The Jail/Just Visiting space."""

    def __init__(self, position: int = 10):
        super().__init__("Jail", position, SpaceType.JAIL)


@dataclass
class GoToJailSpace(Space):
    """The Go To Jail space."""

    def __init__(self, position: int = 30):
        super().__init__("Go To Jail", position, SpaceType.GO_TO_JAIL)


@dataclass
class ParkingSpace(Space):
    """The Free Parking space."""

    def __init__(self, position: int = 20):
        super().__init__("Free Parking", position, SpaceType.PARKING)
