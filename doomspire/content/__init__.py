"""
Content - Static card and tile tables for Lords of Doomspire.

Everything here is read-only data plus the setup helpers that turn it
into a fresh game.
"""

from .monsters import MONSTER_CARDS
from .events import EVENT_CARDS
from .treasures import TREASURE_CARDS
from .encounters import ENCOUNTER_CARDS
from .tiles import BoardBuilder, build_board, render_board
from .setup import build_decks, create_game, default_content

__all__ = [
    "MONSTER_CARDS",
    "EVENT_CARDS",
    "TREASURE_CARDS",
    "ENCOUNTER_CARDS",
    "BoardBuilder",
    "build_board",
    "render_board",
    "build_decks",
    "create_game",
    "default_content",
]
