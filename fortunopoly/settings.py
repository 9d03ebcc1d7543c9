"""
Environment-based defaults using pydantic-settings.

Environment variables (prefix: FORTUNOPOLY_):
    FORTUNOPOLY_SEED               - RNG seed for dice, decks and bots (default: unset)
    FORTUNOPOLY_STARTING_MONEY     - Money each player starts with (default: 1500)
    FORTUNOPOLY_MAX_LOG_ENTRIES    - Narration log capacity (default: 100)
    FORTUNOPOLY_BOT_DIFFICULTY     - easy | medium | hard (default: medium)
    FORTUNOPOLY_PARKING_JACKPOT    - Enable the Free Parking jackpot (default: false)
    FORTUNOPOLY_DOUBLE_GO          - Enable double bonus on START (default: false)
    FORTUNOPOLY_MAX_ROUNDS         - Round cap for simulated games (default: 50)
    FORTUNOPOLY_LOG_LEVEL          - Python logging level for the CLI (default: WARNING)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fortunopoly.config import BotDifficulty, GameConfig, HouseRules


class GameSettings(BaseSettings):
    """Defaults for new games, overridable from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="FORTUNOPOLY_",
    )

    seed: Optional[int] = Field(
        default=None,
        description="Seed for the game RNG. Unset means a fresh random game.",
    )
    starting_money: int = Field(
        default=1500,
        gt=0,
        description="Money each player starts with.",
    )
    max_log_entries: int = Field(
        default=100,
        gt=0,
        description="Number of narration entries kept before the oldest are dropped.",
    )
    bot_difficulty: BotDifficulty = Field(
        default=BotDifficulty.MEDIUM,
        description="Difficulty used for bots that do not specify one.",
    )
    parking_jackpot: bool = Field(default=False)
    double_go: bool = Field(default=False)
    max_rounds: int = Field(
        default=50,
        gt=0,
        description="Round cap for simulated games before the winner is decided on net worth.",
    )
    log_level: str = Field(default="WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept lower-case level names."""
        if not value:
            return "WARNING"
        return str(value).upper()

    def to_config(self) -> GameConfig:
        """Build a GameConfig from these settings."""
        return GameConfig(
            starting_money=self.starting_money,
            max_log_entries=self.max_log_entries,
            house_rules=HouseRules(
                parking_jackpot=self.parking_jackpot,
                double_go=self.double_go,
            ),
            seed=self.seed,
        )


@lru_cache
def get_settings() -> GameSettings:
    """Return cached settings instance."""
    return GameSettings()
