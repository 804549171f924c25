"""
Resolution context - what a resolver needs besides the action itself.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .dice import DiceRoller
from .decks import ContentTables, TieredDecks
from .log import GameLog, LogEntryType
from .settings import GameSettings, DEFAULT_SETTINGS
from .state import GameState


@dataclass
class ResolutionContext:
    """
    Working set for resolving one action.

    `state` is the executor's private clone; resolvers mutate it freely
    and the executor decides whether it is committed.
    """
    state: GameState
    dice: DiceRoller
    decks: TieredDecks | None = None
    content: ContentTables = field(default_factory=ContentTables)
    log: GameLog = field(default_factory=GameLog)
    settings: GameSettings = DEFAULT_SETTINGS

    def note(self, player_name: str, entry_type: LogEntryType, content: str):
        self.log.add(self.state.current_round, player_name, entry_type, content)
