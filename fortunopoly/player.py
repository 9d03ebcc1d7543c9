"""
Player state and management.
"""

from typing import Callable, Optional, Set

from fortunopoly.board import Board
from fortunopoly.config import BotDifficulty
from fortunopoly.spaces import PropertySpace, RailroadSpace, Space, UtilitySpace


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(
        self,
        player_id: int,
        name: str,
        is_bot: bool = False,
        bot_difficulty: Optional[BotDifficulty] = None,
    ):
        self.player_id = player_id
        self.name = name
        self.is_bot = is_bot
        self.bot_difficulty = BotDifficulty(bot_difficulty) if bot_difficulty else None
        if is_bot and self.bot_difficulty is None:
            self.bot_difficulty = BotDifficulty.MEDIUM

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}', bot={self.is_bot})"


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(
        self,
        player_id: int,
        name: str,
        board: Board,
        starting_money: int = 1500,
        is_bot: bool = False,
        bot_difficulty: Optional[BotDifficulty] = None,
    ):
        self.player_id = player_id
        self.name = name
        self.board = board
        self.money = starting_money
        self.position = 0
        self.properties: Set[int] = set()
        self.mortgaged: Set[int] = set()
        self.in_jail = False
        self.jail_turns = 0
        self.has_jail_free_card = False
        self.is_bankrupt = False
        self.is_bot = is_bot
        self.bot_difficulty = bot_difficulty

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"money={self.money}, position={self.position}, bankrupt={self.is_bankrupt})"
        )

    # Money

    def credit(self, amount: int) -> None:
        self.money += amount

    def debit(self, amount: int) -> bool:
        """Take money if the player can afford it. Nothing changes otherwise."""
        if self.money >= amount:
            self.money -= amount
            return True
        return False

    def can_afford(self, amount: int) -> bool:
        return self.money >= amount

    def drain(self) -> int:
        """Take the whole balance and return what was taken."""
        taken = self.money
        self.money = 0
        return taken

    # Tiles

    def acquire(self, position: int) -> None:
        self.properties.add(position)

    def release(self, position: int) -> None:
        """Give up a tile. A released tile is never left mortgaged."""
        self.properties.discard(position)
        self.mortgaged.discard(position)

    def owns(self, position: int) -> bool:
        return position in self.properties

    def is_mortgaged(self, position: int) -> bool:
        return position in self.mortgaged

    def count_where(self, predicate: Callable[[Space], bool]) -> int:
        """Count owned tiles matching a predicate over the tile."""
        return sum(1 for pos in self.properties if predicate(self.board.get_space(pos)))

    def count_in_group(self, group: str) -> int:
        return self.count_where(lambda s: isinstance(s, PropertySpace) and s.group == group)

    def owns_monopoly(self, group: str) -> bool:
        """
        Whether the player holds every tile of a color group.

        Ownership is count-based against the declared group size.
        """
        size = self.board.group_size(group)
        return size > 0 and self.count_in_group(group) == size

    def count_railroads(self) -> int:
        return self.count_where(lambda s: isinstance(s, RailroadSpace))

    def count_utilities(self) -> int:
        return self.count_where(lambda s: isinstance(s, UtilitySpace))

    # Movement

    def relocate(self, position: int, collect_start: bool = True, start_bonus: int = 200) -> bool:
        """
        Move directly to a position.

        Moving to a lower position counts as passing START, except when the
        destination is the jail tile. The bonus is never paid while jailed.

        Returns:
            True if the START bonus was paid
        """
        passed_start = position < self.position and position != self.board.jail_position
        self.position = position
        if passed_start and collect_start and not self.in_jail:
            self.credit(start_bonus)
            return True
        return False

    def advance(self, spaces: int, start_bonus: int = 200) -> bool:
        """
        Move a relative number of spaces around the ring.

        Only forward moves can pass START.

        Returns:
            True if START was passed
        """
        old_position = self.position
        new_position = (old_position + spaces) % self.board.size
        passed_start = spaces > 0 and new_position < old_position
        self.position = new_position
        if passed_start and not self.in_jail:
            self.credit(start_bonus)
        return passed_start

    # Jail

    def send_to_jail(self) -> None:
        self.position = self.board.jail_position
        self.in_jail = True
        self.jail_turns = 0

    def release_from_jail(self) -> None:
        self.in_jail = False
        self.jail_turns = 0

    def increment_jail_turn(self) -> int:
        self.jail_turns += 1
        return self.jail_turns

    # Status

    def go_bankrupt(self) -> None:
        self.is_bankrupt = True
        self.money = 0

    def net_worth(self) -> int:
        """Money plus face price of every owned tile."""
        total = self.money
        for pos in self.properties:
            total += getattr(self.board.get_space(pos), "price", 0)
        return total

    @property
    def property_count(self) -> int:
        return len(self.properties)
