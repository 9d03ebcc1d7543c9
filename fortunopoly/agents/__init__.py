"""Decision makers for seated players."""

from fortunopoly.agents.base import Agent
from fortunopoly.agents.bot import DIFFICULTY, BotAgent, BotProfile, create_bot_for

__all__ = ["Agent", "BotAgent", "BotProfile", "DIFFICULTY", "create_bot_for"]
