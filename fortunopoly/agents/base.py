"""Base class for all Fortunopoly agents."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from fortunopoly.game import GameState
    from fortunopoly.trading import TradeProposal


class Agent(ABC):
    """
    Abstract base class for Fortunopoly agents.

    An agent makes the decisions a seated player would make. The turn
    driver in `fortunopoly.rules` asks these questions and then calls the
    engine itself, so agents never mutate the game directly except when
    building.

    Attributes:
        player_id: The id of the player this agent controls.
        name: The player's display name.
    """

    def __init__(self, player_id: int, name: str):
        """
        Initialize the agent.

        Args:
            player_id: The id of the player this agent controls.
            name: The player's display name.
        """
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def should_buy(self, game: "GameState", position: int) -> bool:
        """Whether to buy the unowned tile the player landed on."""

    @abstractmethod
    def should_pay_bail(self, game: "GameState") -> bool:
        """Whether to leave jail by card or bail instead of rolling for doubles."""

    @abstractmethod
    def evaluate_trade(self, game: "GameState", proposal: "TradeProposal") -> bool:
        """Whether to accept a proposal addressed to this player."""

    @abstractmethod
    def choose_steal_target(self, game: "GameState", candidates: List[int]) -> Optional[int]:
        """Pick the player id to rob from the given candidates."""

    @abstractmethod
    def choose_demolish_target(self, game: "GameState", candidates: List[int]) -> Optional[int]:
        """Pick the tile position to lose one improvement level."""

    @abstractmethod
    def try_build_houses(self, game: "GameState") -> int:
        """Build where it makes sense. Returns how many levels were built."""

    @abstractmethod
    def consider_sabotage(self, game: "GameState") -> Optional[int]:
        """Return an opponent tile position to sabotage, or None."""
