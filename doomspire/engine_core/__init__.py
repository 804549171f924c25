"""
Engine Core - Deterministic rules engine for Lords of Doomspire.

The engine is the runtime that:
1. Holds GameState (board, players, champions, boats)
2. Rolls and tracks dice
3. Generates legal dice actions
4. Resolves actions via the executor (movement, harvest, arrival)
5. Suspends on player decisions and resumes with their answers
"""

from .state import (
    GameState,
    GamePhase,
    Board,
    Tile,
    TileType,
    Player,
    Champion,
    Boat,
    Item,
    Monster,
    OceanZone,
    Position,
    Resources,
)
from .settings import GameSettings, DEFAULT_SETTINGS
from .errors import (
    DoomspireError,
    InvalidConsumption,
    ContractError,
    AgentError,
    GameStateError,
)
from .dice import DiceRoller, DicePool
from .log import GameLog, LogEntry, LogEntryType
from .action import Action, ActionType, ActionPayload, ActionResult, TileIntent
from .action_generator import ActionGenerator, legal_actions
from .decisions import DecisionRequest, DecisionBatch, validate_response
from .decks import Card, CardType, ContentTables, TieredDecks
from .executor import ActionExecutor
from .victory import Victory, VictoryType, check_victory

__all__ = [
    "GameState",
    "GamePhase",
    "Board",
    "Tile",
    "TileType",
    "Player",
    "Champion",
    "Boat",
    "Item",
    "Monster",
    "OceanZone",
    "Position",
    "Resources",
    "GameSettings",
    "DEFAULT_SETTINGS",
    "DoomspireError",
    "InvalidConsumption",
    "ContractError",
    "AgentError",
    "GameStateError",
    "DiceRoller",
    "DicePool",
    "GameLog",
    "LogEntry",
    "LogEntryType",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "TileIntent",
    "ActionGenerator",
    "legal_actions",
    "DecisionRequest",
    "DecisionBatch",
    "validate_response",
    "Card",
    "CardType",
    "ContentTables",
    "TieredDecks",
    "ActionExecutor",
    "Victory",
    "VictoryType",
    "check_victory",
]
