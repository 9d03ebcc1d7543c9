"""
Game configuration settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BotDifficulty(str, Enum):
    """Difficulty tiers for scripted opponents."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class HouseRules:
    """Optional rule variants chosen before the game starts."""

    # Taxes feed a pot that is paid out on Free Parking
    parking_jackpot: bool = False
    # Landing exactly on START pays the bonus a second time
    double_go: bool = False


@dataclass
class GameConfig:
    """Configuration for a Fortunopoly game."""

    starting_money: int = 1500
    start_bonus: int = 200
    jail_bail: int = 50
    max_jail_turns: int = 3
    max_consecutive_doubles: int = 3

    sabotage_cost: int = 150
    mortgage_interest_percent: int = 10

    max_log_entries: int = 100

    house_rules: HouseRules = field(default_factory=HouseRules)

    seed: Optional[int] = None
