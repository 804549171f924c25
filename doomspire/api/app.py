"""
FastAPI Application - REST API for running Doomspire games.

Endpoints:
    GET    /api/v1/health               Health check
    POST   /api/v1/games                Create a bot-only game
    GET    /api/v1/games                List games
    GET    /api/v1/games/{id}           Get game summary
    DELETE /api/v1/games/{id}           Delete game
    GET    /api/v1/games/{id}/state     Get full board and player state
    POST   /api/v1/games/{id}/turns     Play the current player's turn
    POST   /api/v1/games/{id}/run       Play the game to the end
    GET    /api/v1/games/{id}/log       Get the game log

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..engine_core.settings import GameSettings
from .schemas import (
    # Request models
    CreateGameRequest,
    # Response models
    ErrorResponse,
    GameResponse,
    GameStateResponse,
    GameLogResponse,
    GameListResponse,
    DeleteGameResponse,
    TurnResponse,
    RunResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)
from .service import APIService


logger = logging.getLogger(__name__)

# Environment configuration
DOOMSPIRE_ENV = os.getenv("DOOMSPIRE_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
DOOMSPIRE_MAX_ROUNDS = int(os.getenv("DOOMSPIRE_MAX_ROUNDS", "100"))


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Doomspire Engine API",
        description="""
Lords of Doomspire turn-resolution engine - bot-only games over HTTP.

## Playing a game

1. `POST /games` seats up to four bots and starts the game
2. `POST /games/{id}/turns` plays one turn, or `POST /games/{id}/run` plays to the end
3. `GET /games/{id}/state` and `GET /games/{id}/log` show what happened

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `GAME_OVER` | Game has already ended |
| `VALIDATION_ERROR` | Request parameters are invalid |
| `TURN_FAILED` | A player agent failed during the turn |
| `INTERNAL_ERROR` | Unexpected server error |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(settings=GameSettings(max_rounds=DOOMSPIRE_MAX_ROUNDS))

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def from_service_error(error: ErrorResponse) -> JSONResponse:
        status_codes = {
            ErrorCode.GAME_NOT_FOUND: 404,
            ErrorCode.GAME_OVER: 409,
            ErrorCode.TURN_FAILED: 422,
        }
        return make_error_response(
            error.error_code,
            error.error,
            status_code=status_codes.get(error.error_code, 400),
            details=error.details,
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service=f"doomspire-{DOOMSPIRE_ENV}", version=__version__)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid players or parameters"}},
        tags=["Games"],
        summary="Create a new bot-only game",
    )
    async def create_game(body: CreateGameRequest) -> Union[GameResponse, JSONResponse]:
        """
        Create a game and start it.

        Every seat is played by the chosen bot. Pass a `seed` to make the
        whole game reproducible.
        """
        try:
            return api_service.create_game(body)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game summary",
    )
    async def get_game(game_id: str) -> Union[GameResponse, JSONResponse]:
        response = api_service.get_game(game_id)
        if isinstance(response, ErrorResponse):
            return from_service_error(response)
        return response

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=DeleteGameResponse,
        tags=["Games"],
        summary="Delete a game",
    )
    async def delete_game(game_id: str) -> DeleteGameResponse:
        """Delete a game and release its state."""
        success = api_service.delete_game(game_id)
        return DeleteGameResponse(success=success, game_id=game_id)

    @app.get(
        "/api/v1/games/{game_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get full game state",
    )
    async def get_game_state(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(game_id)
        if isinstance(response, ErrorResponse):
            return from_service_error(response)
        return response

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/turns",
        response_model=TurnResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Game is over"},
            422: {"model": ErrorResponse, "description": "A bot failed during the turn"},
        },
        tags=["Game Loop"],
        summary="Play the current player's turn",
    )
    async def play_turn(game_id: str) -> Union[TurnResponse, JSONResponse]:
        """
        Play one full turn: roll, spend every die, check victory.

        A turn in which a bot failed is a 422 TURN_FAILED error; actions
        committed before the failure stay and the turn passes on.
        """
        try:
            response = await api_service.play_turn(game_id)
        except Exception as e:
            logger.exception("Turn crashed for game %s", game_id)
            return make_error_response(ErrorCode.INTERNAL_ERROR, str(e), status_code=500)
        if isinstance(response, ErrorResponse):
            return from_service_error(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/run",
        response_model=RunResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Game is over"},
        },
        tags=["Game Loop"],
        summary="Play the game to the end",
    )
    async def run_game(game_id: str) -> Union[RunResponse, JSONResponse]:
        try:
            response = await api_service.run_game(game_id)
        except Exception as e:
            logger.exception("Run crashed for game %s", game_id)
            return make_error_response(ErrorCode.INTERNAL_ERROR, str(e), status_code=500)
        if isinstance(response, ErrorResponse):
            return from_service_error(response)
        return response

    @app.get(
        "/api/v1/games/{game_id}/log",
        response_model=GameLogResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get the game log",
    )
    async def get_log(
        game_id: str,
        since: Annotated[int, Query(ge=0, description="Skip this many earlier entries")] = 0,
    ) -> Union[GameLogResponse, JSONResponse]:
        response = api_service.get_log(game_id, since)
        if isinstance(response, ErrorResponse):
            return from_service_error(response)
        return response

    return app


# For running directly: uvicorn doomspire.api.app:app
app = create_app()
