"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between HTTP clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or was deleted
- GAME_OVER: The game has already ended
- VALIDATION_ERROR: Request parameters are invalid
- TURN_FAILED: A player agent failed during the turn
- INTERNAL_ERROR: Anything else
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class AgentKind(str, Enum):
    """Built-in bots."""
    RANDOM = "random"
    FIRST = "first"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TURN_FAILED = "TURN_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    row: int
    col: int

    model_config = {"from_attributes": True}


class ResourcesInfo(BaseModel):
    food: int = 0
    wood: int = 0
    ore: int = 0
    gold: int = 0

    model_config = {"from_attributes": True}


class ItemInfo(BaseModel):
    item_id: str
    name: str
    combat_bonus: int = 0
    dragon_bonus: int = 0
    underdog_bonus: int = 0
    breaks: bool = False
    stuck: bool = False

    model_config = {"from_attributes": True}


class ChampionInfo(BaseModel):
    champion_id: int
    position: PositionInfo
    items: list[ItemInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class BoatInfo(BaseModel):
    boat_id: int
    zone: str = Field(description="nw, ne, sw or se")


class PlayerInfo(BaseModel):
    """Player information for display."""
    name: str
    color: str
    fame: int = 0
    might: int = 0
    resources: ResourcesInfo = Field(default_factory=ResourcesInfo)
    home_position: PositionInfo
    champions: list[ChampionInfo] = Field(default_factory=list)
    boats: list[BoatInfo] = Field(default_factory=list)
    claimed_tiles: int = 0
    is_current_turn: bool = False


class TileInfo(BaseModel):
    """One board cell."""
    position: PositionInfo
    tile_type: str
    tier: Optional[int] = None
    explored: bool = True
    resources: Optional[ResourcesInfo] = None
    starred: bool = False
    claimed_by: Optional[str] = None
    monster: Optional[str] = Field(None, description="Name of the monster guarding the tile")
    adventure_tokens: int = 0
    items: list[ItemInfo] = Field(default_factory=list)


class LogEntryInfo(BaseModel):
    """One game log entry."""
    round: int
    player_name: str
    type: str = Field(description="dice, movement, boat, exploration, combat, harvest, ...")
    content: str
    timestamp: float


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a new bot-only game."""
    players: Optional[list[str]] = Field(
        None, min_length=1, max_length=4, description="Player names; defaults to stock names"
    )
    num_players: int = Field(2, ge=1, le=4, description="Used when players is not given")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    max_rounds: Optional[int] = Field(None, ge=1, description="Round limit; defaults to server setting")
    agent_kind: AgentKind = Field(AgentKind.RANDOM, description="Which bot plays every seat")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameResponse(BaseModel):
    """Summary of a game."""
    game_id: str
    status: GameStatus
    players: list[str] = Field(default_factory=list)
    current_player: Optional[str] = None
    current_round: int = 1
    seed: Optional[int] = None
    winner: Optional[str] = None
    victory: Optional[str] = None
    created_at: float = 0.0
    api_version: str = "v1"


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    status: GameStatus
    phase: str
    current_round: int
    current_player: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    board: list[TileInfo] = Field(default_factory=list)
    deck_sizes: dict[str, list[int]] = Field(
        default_factory=dict, description="Cards left in each pile, keyed by tier"
    )
    winner: Optional[str] = None
    victory: Optional[str] = None
    api_version: str = "v1"


class TurnResponse(BaseModel):
    """Result of playing one turn."""
    game_id: str
    player_name: str
    dice: list[int]
    actions: list[str] = Field(default_factory=list)
    success: bool
    error: Optional[str] = None
    game_over: bool = False
    winner: Optional[str] = None
    victory: Optional[str] = None
    current_round: int
    api_version: str = "v1"


class RunResponse(BaseModel):
    """Result of playing a game to the end."""
    game_id: str
    winner: Optional[str] = None
    victory: Optional[str] = None
    rounds: int
    turns: int
    failed_turns: int = 0
    final_fame: dict[str, int] = Field(default_factory=dict)
    final_gold: dict[str, int] = Field(default_factory=dict)
    api_version: str = "v1"


class GameLogResponse(BaseModel):
    game_id: str
    entries: list[LogEntryInfo] = Field(default_factory=list)
    count: int = 0
    api_version: str = "v1"


class GameListResponse(BaseModel):
    """Response listing games."""
    games: list[GameResponse]
    count: int


class DeleteGameResponse(BaseModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
