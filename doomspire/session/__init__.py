"""
Session Module - Runs and keeps track of games.

A session represents one play-through:
- Created when a caller starts a game
- Holds the game master (state, decks, dice, log, agents)
- Plays turns on request
- Dropped when the caller deletes it

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState, make_agents
from .game_master import GameMaster, GameSummary, LoopState, TurnResult, drive

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "make_agents",
    "GameMaster",
    "GameSummary",
    "LoopState",
    "TurnResult",
    "drive",
]
