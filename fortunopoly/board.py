"""
The Fortunopoly board: 40 tiles in a ring.
"""

from collections import Counter
from typing import Dict, List, Optional, Sequence

from fortunopoly.cards import DeckType
from fortunopoly.exceptions import ConfigurationError
from fortunopoly.spaces import (
    ChanceSpace,
    GoToJailSpace,
    JailSpace,
    ParkingSpace,
    PropertySpace,
    RailroadSpace,
    Space,
    SpaceType,
    StartSpace,
    TaxSpace,
    UtilitySpace,
)

BOARD_SIZE = 40

# Color group -> number of tiles in the group
PROPERTY_GROUPS: Dict[str, int] = {
    "brown": 2,
    "lightblue": 3,
    "pink": 3,
    "orange": 3,
    "red": 3,
    "yellow": 3,
    "green": 3,
    "blue": 2,
}


def create_standard_spaces() -> List[Space]:
    """Create the standard 40-tile Fortunopoly layout."""
    return [
        # Bottom row (0-10)
        StartSpace(0),
        PropertySpace("Elm Street", 1, 60, "brown", (2, 10, 30, 90, 160, 250), 50),
        ChanceSpace(2, DeckType.FORTUNE),
        PropertySpace("Oak Lane", 3, 60, "brown", (4, 20, 60, 180, 320, 450), 50),
        TaxSpace("Income Tax", 4, 200),
        RailroadSpace("North Station", 5),
        PropertySpace("Pine Avenue", 6, 100, "lightblue", (6, 30, 90, 270, 400, 550), 50),
        ChanceSpace(7, DeckType.FATE),
        PropertySpace("Cedar Road", 8, 100, "lightblue", (6, 30, 90, 270, 400, 550), 50),
        PropertySpace("Maple Drive", 9, 120, "lightblue", (8, 40, 100, 300, 450, 600), 50),
        JailSpace(10),
        # Left side (11-20)
        PropertySpace("Rose Court", 11, 140, "pink", (10, 50, 150, 450, 625, 750), 100),
        UtilitySpace("Power Plant", 12),
        PropertySpace("Lily Lane", 13, 140, "pink", (10, 50, 150, 450, 625, 750), 100),
        PropertySpace("Daisy Way", 14, 160, "pink", (12, 60, 180, 500, 700, 900), 100),
        RailroadSpace("East Station", 15),
        PropertySpace("Sunset Blvd", 16, 180, "orange", (14, 70, 200, 550, 750, 950), 100),
        ChanceSpace(17, DeckType.FORTUNE),
        PropertySpace("Dawn Street", 18, 180, "orange", (14, 70, 200, 550, 750, 950), 100),
        PropertySpace("Horizon Road", 19, 200, "orange", (16, 80, 220, 600, 800, 1000), 100),
        ParkingSpace(20),
        # Top row (21-30)
        PropertySpace("Ruby Lane", 21, 220, "red", (18, 90, 250, 700, 875, 1050), 150),
        ChanceSpace(22, DeckType.FATE),
        PropertySpace("Scarlet Ave", 23, 220, "red", (18, 90, 250, 700, 875, 1050), 150),
        PropertySpace("Crimson Way", 24, 240, "red", (20, 100, 300, 750, 925, 1100), 150),
        RailroadSpace("South Station", 25),
        PropertySpace("Gold Street", 26, 260, "yellow", (22, 110, 330, 800, 975, 1150), 150),
        PropertySpace("Amber Road", 27, 260, "yellow", (22, 110, 330, 800, 975, 1150), 150),
        UtilitySpace("Water Works", 28),
        PropertySpace("Honey Lane", 29, 280, "yellow", (24, 120, 360, 850, 1025, 1200), 150),
        GoToJailSpace(30),
        # Right side (31-39)
        PropertySpace("Emerald Ave", 31, 300, "green", (26, 130, 390, 900, 1100, 1275), 200),
        PropertySpace("Jade Street", 32, 300, "green", (26, 130, 390, 900, 1100, 1275), 200),
        ChanceSpace(33, DeckType.FORTUNE),
        PropertySpace("Forest Road", 34, 320, "green", (28, 150, 450, 1000, 1200, 1400), 200),
        RailroadSpace("West Station", 35),
        ChanceSpace(36, DeckType.FATE),
        PropertySpace("Royal Blvd", 37, 350, "blue", (35, 175, 500, 1100, 1300, 1500), 200),
        TaxSpace("Luxury Tax", 38, 100),
        PropertySpace("Imperial Way", 39, 400, "blue", (50, 200, 600, 1400, 1700, 2000), 200),
    ]


class Board:
    """The Fortunopoly game board."""

    def __init__(
        self,
        spaces: Optional[Sequence[Space]] = None,
        groups: Optional[Dict[str, int]] = None,
    ):
        self.spaces: List[Space] = list(spaces) if spaces is not None else create_standard_spaces()
        self.groups: Dict[str, int] = dict(groups) if groups is not None else dict(PROPERTY_GROUPS)
        self.color_groups: Dict[str, List[int]] = self._build_color_groups()
        self._validate()

    def _build_color_groups(self) -> Dict[str, List[int]]:
        """Build a mapping of color groups to property positions."""
        groups: Dict[str, List[int]] = {}
        for space in self.spaces:
            if isinstance(space, PropertySpace):
                groups.setdefault(space.group, []).append(space.position)
        return groups

    def _validate(self) -> None:
        if not self.spaces:
            raise ConfigurationError("Board has no spaces")

        for index, space in enumerate(self.spaces):
            if space.position != index:
                raise ConfigurationError(
                    f"Space '{space.name}' is at index {index} but claims position {space.position}"
                )

        counts = Counter(space.space_type for space in self.spaces)
        for unique in (SpaceType.START, SpaceType.JAIL, SpaceType.GO_TO_JAIL, SpaceType.PARKING):
            if counts[unique] != 1:
                raise ConfigurationError(
                    f"Board needs exactly one {unique.value} space, found {counts[unique]}"
                )

        for group, positions in self.color_groups.items():
            expected = self.groups.get(group)
            if expected is None:
                raise ConfigurationError(f"Unknown color group '{group}'")
            if len(positions) != expected:
                raise ConfigurationError(
                    f"Group '{group}' has {len(positions)} tiles, expected {expected}"
                )
        for group in self.groups:
            if group not in self.color_groups:
                raise ConfigurationError(f"Group '{group}' has no tiles on the board")

        for space in self.spaces:
            if isinstance(space, PropertySpace) and len(space.rent) != 6:
                raise ConfigurationError(f"'{space.name}' needs a 6-entry rent schedule")

    def __len__(self) -> int:
        return len(self.spaces)

    @property
    def size(self) -> int:
        return len(self.spaces)

    @property
    def jail_position(self) -> int:
        return next(s.position for s in self.spaces if s.space_type == SpaceType.JAIL)

    def get_space(self, position: int) -> Space:
        """Get the space at the given position."""
        return self.spaces[position % len(self.spaces)]

    def get_property_space(self, position: int) -> Optional[PropertySpace]:
        """Get a property space, or None if not a property."""
        space = self.get_space(position)
        return space if isinstance(space, PropertySpace) else None

    def is_acquirable(self, position: int) -> bool:
        """Whether the tile at this position can be owned."""
        return self.get_space(position).is_acquirable

    def get_color_group(self, group: str) -> List[int]:
        """Get all property positions in a color group."""
        return self.color_groups.get(group, [])

    def tiles_in_group(self, group: str) -> List[PropertySpace]:
        return [self.spaces[pos] for pos in self.get_color_group(group)]

    def group_size(self, group: str) -> int:
        """Declared number of tiles in a color group (0 for unknown groups)."""
        return self.groups.get(group, 0)

    def get_all_railroads(self) -> List[int]:
        """Get positions of all railroad spaces."""
        return [s.position for s in self.spaces if isinstance(s, RailroadSpace)]

    def get_all_utilities(self) -> List[int]:
        """Get positions of all utility spaces."""
        return [s.position for s in self.spaces if isinstance(s, UtilitySpace)]

    def get_acquirable_positions(self) -> List[int]:
        return [s.position for s in self.spaces if s.is_acquirable]
