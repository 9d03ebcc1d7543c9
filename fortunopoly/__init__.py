"""
Fortunopoly Rules Engine

A deterministic, seedable implementation of the Fortunopoly board game
rules with scripted bot opponents.
"""

from .board import Board, PROPERTY_GROUPS
from .config import BotDifficulty, GameConfig, HouseRules
from .exceptions import ConfigurationError, FortunopolyError, InvalidActionError, SnapshotError
from .game import GameState, create_game
from .player import Player, PlayerState

__all__ = [
    "Board",
    "PROPERTY_GROUPS",
    "BotDifficulty",
    "GameConfig",
    "HouseRules",
    "ConfigurationError",
    "FortunopolyError",
    "InvalidActionError",
    "SnapshotError",
    "GameState",
    "create_game",
    "Player",
    "PlayerState",
]
