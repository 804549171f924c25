"""
Game Log - Append-only record of everything that happened in a game.

The log is a side channel for narration and replay, not game state.
Every entry is also mirrored to the ``doomspire.game`` logger.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any


game_logger = logging.getLogger("doomspire.game")


class LogEntryType(str, Enum):
    """Categories of log entries."""
    DICE = "dice"
    MOVEMENT = "movement"
    BOAT = "boat"
    EXPLORATION = "exploration"
    COMBAT = "combat"
    HARVEST = "harvest"
    ASSESSMENT = "assessment"
    EVENT = "event"
    SYSTEM = "system"
    VICTORY = "victory"


@dataclass
class LogEntry:
    round: int
    player_name: str
    entry_type: LogEntryType
    content: str
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round,
            "player_name": self.player_name,
            "type": self.entry_type.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }


class GameLog:
    """Ordered list of log entries."""

    def __init__(self):
        self._entries: list[LogEntry] = []

    def add(self, round: int, player_name: str, entry_type: LogEntryType, content: str) -> LogEntry:
        entry = LogEntry(round=round, player_name=player_name, entry_type=entry_type, content=content)
        self._entries.append(entry)
        game_logger.debug("[round %d] %s %s: %s", round, player_name, entry_type.value, content)
        return entry

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def extend(self, entries: list[LogEntry]):
        """Append entries recorded elsewhere (e.g. by a committed action)."""
        self._entries.extend(entries)

    def of_type(self, entry_type: LogEntryType) -> list[LogEntry]:
        return [e for e in self._entries if e.entry_type == entry_type]

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
