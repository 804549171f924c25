"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- The OpenAPI schema lists every endpoint with its response model
"""

import asyncio

import pytest


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_game_state_response_schema(self):
        """GameStateResponse serializes nested players and tiles."""
        from doomspire.api.schemas import (
            GameStateResponse,
            GameStatus,
            PlayerInfo,
            PositionInfo,
            TileInfo,
        )

        response = GameStateResponse(
            game_id="game-1",
            status=GameStatus.ACTIVE,
            phase="playing",
            current_round=3,
            current_player="Alice",
            players=[PlayerInfo(name="Alice", color="#e74c3c", home_position=PositionInfo(row=0, col=0))],
            board=[TileInfo(position=PositionInfo(row=0, col=0), tile_type="home")],
            deck_sizes={"1": [5, 5, 4]},
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "active"
        assert data["players"][0]["resources"] == {"food": 0, "wood": 0, "ore": 0, "gold": 0}
        assert data["board"][0]["tile_type"] == "home"
        assert data["deck_sizes"]["1"] == [5, 5, 4]
        assert data["api_version"] == "v1"

    def test_turn_response_schema(self):
        from doomspire.api.schemas import TurnResponse

        response = TurnResponse(
            game_id="game-1",
            player_name="Bob",
            dice=[1, 3],
            actions=["harvest with [1]: ", "harvest with [3]: "],
            success=True,
            current_round=2,
        )
        data = response.model_dump()
        assert data["dice"] == [1, 3]
        assert data["game_over"] is False
        assert data["winner"] is None

    def test_error_response_schema(self):
        from doomspire.api.schemas import ErrorCode, ErrorResponse

        error = ErrorResponse(error="Game x not found", error_code=ErrorCode.GAME_NOT_FOUND)
        data = error.model_dump(mode="json")
        assert data["error_code"] == "GAME_NOT_FOUND"
        assert data["details"] is None


class TestErrorCodes:
    """Tests for error code structure."""

    def test_required_error_codes_exist(self):
        from doomspire.api.schemas import ErrorCode

        required_codes = [
            "GAME_NOT_FOUND",
            "GAME_OVER",
            "VALIDATION_ERROR",
            "TURN_FAILED",
            "INTERNAL_ERROR",
        ]

        for code in required_codes:
            assert hasattr(ErrorCode, code), f"Missing error code: {code}"
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from doomspire.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def schema(self):
        from doomspire.api.app import app
        from fastapi.openapi.utils import get_openapi

        return get_openapi(
            title=app.title,
            version=app.version,
            routes=app.routes,
        )

    def test_openapi_schema_generates(self, schema):
        assert "paths" in schema
        assert "components" in schema
        assert "schemas" in schema["components"]

    def test_response_models_in_schema(self, schema):
        schemas = schema["components"]["schemas"]

        required_schemas = [
            "GameResponse",
            "GameStateResponse",
            "TurnResponse",
            "RunResponse",
            "GameLogResponse",
            "ErrorResponse",
        ]

        for name in required_schemas:
            assert name in schemas, f"Missing schema: {name}"

    def test_endpoints_present(self, schema):
        paths = schema["paths"]
        assert "post" in paths["/api/v1/games"]
        assert "get" in paths["/api/v1/games"]
        assert "200" in paths["/api/v1/games/{game_id}/state"]["get"]["responses"]
        assert "404" in paths["/api/v1/games/{game_id}/state"]["get"]["responses"]
        assert "409" in paths["/api/v1/games/{game_id}/turns"]["post"]["responses"]
        assert "422" in paths["/api/v1/games/{game_id}/turns"]["post"]["responses"]
        assert "post" in paths["/api/v1/games/{game_id}/run"]
        assert "get" in paths["/api/v1/games/{game_id}/log"]


class TestAppRoutes:
    """Route handlers called directly, without an HTTP client."""

    def endpoint(self, app, path, method):
        for route in app.routes:
            if getattr(route, "path", None) == path and method in getattr(route, "methods", ()):
                return route.endpoint
        raise AssertionError(f"No route {method} {path}")

    def test_missing_game_is_404(self):
        from doomspire.api.app import create_app

        app = create_app()
        get_game = self.endpoint(app, "/api/v1/games/{game_id}", "GET")
        response = asyncio.run(get_game("nope"))
        assert response.status_code == 404

    def test_duplicate_players_is_400(self):
        from doomspire.api.app import create_app
        from doomspire.api.schemas import CreateGameRequest

        app = create_app()
        create_game = self.endpoint(app, "/api/v1/games", "POST")
        response = asyncio.run(create_game(CreateGameRequest(players=["Ann", "Ann"])))
        assert response.status_code == 400

    def test_health(self):
        from doomspire.api.app import create_app

        health = self.endpoint(create_app(), "/api/v1/health", "GET")
        response = asyncio.run(health())
        assert response.status == "ok"

    def test_failed_turn_is_422(self):
        from doomspire.api.app import create_app
        from doomspire.api.schemas import CreateGameRequest
        from doomspire.api.service import APIService
        from doomspire.bots import FirstLegalAgent

        class SilentAgent(FirstLegalAgent):
            async def request_dice_action(self, view, log, turn_context):
                raise TimeoutError("no answer")

        service = APIService()
        app = create_app(service)
        created = service.create_game(CreateGameRequest(seed=5))
        service.session_manager.get_session(created.game_id).master.agents["Alice"] = SilentAgent("Alice")

        play_turn = self.endpoint(app, "/api/v1/games/{game_id}/turns", "POST")
        response = asyncio.run(play_turn(created.game_id))

        assert response.status_code == 422
        assert b"TURN_FAILED" in response.body
