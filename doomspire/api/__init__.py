"""
API Module - HTTP interface to the engine.

Exposes bot-only games via REST API.
A client:
1. Creates a game (players, seed, round limit, bot kind)
2. Plays it turn by turn or runs it to the end
3. Reads the board, players and game log

All state is session-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    ErrorResponse,
    GameResponse,
    GameStateResponse,
    GameLogResponse,
    GameListResponse,
    DeleteGameResponse,
    TurnResponse,
    RunResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    TileInfo,
    LogEntryInfo,
    # Enums
    AgentKind,
    ErrorCode,
    GameStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    # Responses
    "ErrorResponse",
    "GameResponse",
    "GameStateResponse",
    "GameLogResponse",
    "GameListResponse",
    "DeleteGameResponse",
    "TurnResponse",
    "RunResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "TileInfo",
    "LogEntryInfo",
    # Enums
    "AgentKind",
    "ErrorCode",
    "GameStatus",
    # Service
    "APIService",
    "create_app",
]
