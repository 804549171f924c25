"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller creates a session → players seated, board built, game started
2. During the game:
   - Turns are played one at a time, or run to completion
   - The game log grows with every action
3. Game ends (victory or round limit) → session stays readable
4. Caller deletes the session → ALL state dropped

PERSISTENCE RULES:
- Sessions are in-memory only
- A seed fully determines a bot-only game, so it can be replayed
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from typing import Any
import time
import uuid

from ..bots.agent import FirstLegalAgent, PlayerAgent, RandomAgent
from ..engine_core.settings import GameSettings, DEFAULT_SETTINGS
from .game_master import GameMaster, TurnResult


logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAMES = ["Alice", "Bob", "Carol", "Dave"]


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Someone won or the round limit was hit
    ABANDONED = "abandoned"  # Deleted before the game ended


@dataclass
class Session:
    """
    One in-memory game.

    Contains:
    - The game master (state, decks, dice, log, agents)
    - Session metadata

    State is NOT persisted.
    """
    session_id: str
    master: GameMaster
    created_at: float
    seed: int | None = None
    state: SessionState = SessionState.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    async def play_turn(self) -> TurnResult:
        turn = await self.master.execute_turn()
        self._sync()
        return turn

    async def play_out(self):
        summary = await self.master.run_to_completion()
        self._sync()
        return summary

    def _sync(self):
        if self.master.is_finished:
            self.state = SessionState.GAME_OVER


def make_agents(player_names: list[str], agent_kind: str = "random", seed: int | None = None) -> list[PlayerAgent]:
    """Build one bot per player. Random bots get distinct seeds derived from the game seed."""
    if agent_kind == "first":
        return [FirstLegalAgent(name) for name in player_names]
    if agent_kind == "random":
        return [
            RandomAgent(name, None if seed is None else seed * 31 + index)
            for index, name in enumerate(player_names)
        ]
    raise ValueError(f"Unknown agent kind: {agent_kind}")


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with bot players
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, settings: GameSettings = DEFAULT_SETTINGS):
        self.settings = settings
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        player_names: list[str] | None = None,
        num_players: int = 2,
        seed: int | None = None,
        max_rounds: int | None = None,
        agent_kind: str = "random",
    ) -> Session:
        """
        Create and start a new bot-only game.

        Args:
            player_names: Names of the lords; defaults to the first num_players stock names
            num_players: Used only when player_names is not given
            seed: Seed for dice, board and bots
            max_rounds: Override the settings' round limit
            agent_kind: "random" or "first"

        Returns:
            New Session with the game already started
        """
        names = list(player_names) if player_names else DEFAULT_PLAYER_NAMES[:num_players]
        settings = self.settings
        if max_rounds is not None:
            settings = replace(settings, max_rounds=max_rounds)

        master = GameMaster(make_agents(names, agent_kind, seed), settings=settings, seed=seed)
        master.start()

        session = Session(
            session_id=str(uuid.uuid4()),
            master=master,
            created_at=time.time(),
            seed=seed,
            metadata={"agent_kind": agent_kind},
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s for %s", session.session_id, ", ".join(names))
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        Drop a session from memory.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.is_active():
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, session.state.value)
        return True

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [sid for sid, session in self._sessions.items() if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600):
        """
        Clean up finished sessions older than max_age.

        Called periodically to free memory.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
