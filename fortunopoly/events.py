"""
Narration log shown to players.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class LogCategory(str, Enum):
    """Categories used to style narration entries."""

    INFO = "info"
    PURCHASE = "purchase"
    RENT = "rent"
    CARD = "card"
    JAIL = "jail"
    MONEY = "money"
    TRADE = "trade"
    BANKRUPTCY = "bankruptcy"


@dataclass
class LogEntry:
    """A single narration line."""

    message: str
    category: LogCategory = LogCategory.INFO
    timestamp: float = field(default_factory=time.time)

    def __repr__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class EventLog:
    """Append-only narration log that keeps only the most recent entries."""

    def __init__(self, max_entries: int = 100):
        self.max_entries = max_entries
        self.entries: List[LogEntry] = []

    def add(
        self,
        message: str,
        category: LogCategory = LogCategory.INFO,
        timestamp: Optional[float] = None,
    ) -> LogEntry:
        """Append an entry, dropping the oldest ones beyond capacity."""
        entry = LogEntry(message, LogCategory(category))
        if timestamp is not None:
            entry.timestamp = timestamp
        self.entries.append(entry)
        if len(self.entries) > self.max_entries:
            del self.entries[: len(self.entries) - self.max_entries]
        logger.debug(f"[{entry.category.value}] {message}")
        return entry

    def get_entries(self) -> List[LogEntry]:
        return self.entries.copy()

    def get_recent(self, count: int = 10) -> List[LogEntry]:
        """Get the most recent N entries."""
        if count <= 0:
            return []
        return self.entries[-count:]

    def messages(self) -> List[str]:
        return [entry.message for entry in self.entries]

    def clear(self) -> None:
        """Clear the log."""
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)
