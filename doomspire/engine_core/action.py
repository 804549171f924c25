"""
Action System - Dice actions, tile intents, and results.

A player spends dice on one of three actions:
1. Move a champion along a path (and say what to do where it lands)
2. Move a boat, optionally ferrying a champion
3. Harvest claimed (or blockaded) tiles

All state changes flow through the ActionExecutor.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import OceanZone, Position


class ActionType(Enum):
    """Types of dice actions."""
    MOVE_CHAMPION = "move_champion"
    MOVE_BOAT = "move_boat"
    HARVEST = "harvest"


@dataclass
class TileIntent:
    """
    What the player wants to do on the tile the champion lands on.

    Everything defaults to "do nothing"; arrival only acts on what was
    asked for.
    """
    claim_tile: bool = False
    use_temple: bool = False
    use_mercenary: bool = False
    conquer_with_might: bool = False
    conquer_with_fame: bool = False
    adventure_pile: int = 1  # Which of the tier's three piles to draw from
    pick_up_items: list[str] = field(default_factory=list)
    drop_items: list[str] = field(default_factory=list)


@dataclass
class ActionPayload:
    """
    Parameters of a dice action.

    Different action types use different fields; the executor checks
    that the ones it needs are present.
    """
    champion_id: int | None = None
    path: list[Position] = field(default_factory=list)
    tile_intent: TileIntent = field(default_factory=TileIntent)

    # Boat moves
    boat_id: int | None = None
    boat_path: list[OceanZone] = field(default_factory=list)
    ferry_champion_id: int | None = None
    drop_position: Position | None = None

    # Harvest
    harvest_positions: list[Position] = field(default_factory=list)


@dataclass
class Action:
    """
    A complete dice action to be resolved against the game state.

    Actions are:
    - Logged for replay
    - Validated before resolution
    - Applied atomically by the executor
    """
    action_type: ActionType
    player_name: str
    die_values: list[int]
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def move_champion(
        cls,
        player_name: str,
        die_value: int,
        champion_id: int,
        path: list[Position],
        tile_intent: TileIntent | None = None,
    ) -> Action:
        """Factory for champion movement. `path` starts at the champion's position."""
        return cls(
            action_type=ActionType.MOVE_CHAMPION,
            player_name=player_name,
            die_values=[die_value],
            payload=ActionPayload(
                champion_id=champion_id,
                path=list(path),
                tile_intent=tile_intent or TileIntent(),
            ),
        )

    @classmethod
    def move_boat(
        cls,
        player_name: str,
        die_value: int,
        boat_id: int,
        path: list[OceanZone],
        champion_id: int | None = None,
        drop_position: Position | None = None,
        tile_intent: TileIntent | None = None,
    ) -> Action:
        """Factory for boat movement. `path` starts at the boat's zone."""
        return cls(
            action_type=ActionType.MOVE_BOAT,
            player_name=player_name,
            die_values=[die_value],
            payload=ActionPayload(
                boat_id=boat_id,
                boat_path=list(path),
                ferry_champion_id=champion_id,
                drop_position=drop_position,
                tile_intent=tile_intent or TileIntent(),
            ),
        )

    @classmethod
    def harvest(cls, player_name: str, die_values: list[int], positions: list[Position]) -> Action:
        """Factory for harvesting. The dice values sum to the tile budget."""
        return cls(
            action_type=ActionType.HARVEST,
            player_name=player_name,
            die_values=list(die_values),
            payload=ActionPayload(harvest_positions=list(positions)),
        )

    def describe(self) -> str:
        p = self.payload
        if self.action_type == ActionType.MOVE_CHAMPION:
            path = " -> ".join(str(pos) for pos in p.path)
            return f"move champion{p.champion_id} with {self.die_values[0]}: {path}"
        if self.action_type == ActionType.MOVE_BOAT:
            path = " -> ".join(zone.value for zone in p.boat_path)
            ferry = f", ferrying champion{p.ferry_champion_id} to {p.drop_position}" if p.ferry_champion_id else ""
            return f"move boat{p.boat_id} with {self.die_values[0]}: {path}{ferry}"
        tiles = ", ".join(str(pos) for pos in p.harvest_positions)
        return f"harvest with {self.die_values}: {tiles}"


@dataclass
class ActionResult:
    """
    Result of resolving an action.

    Contains:
    - The new state to commit
    - The per-resolver reports (movement, arrival, harvest)

    Rejected requests are recorded in the reports; broken contracts
    raise before a result exists.
    """
    success: bool
    new_state: Any | None = None  # GameState

    # Human-readable changes
    state_changes: list[str] = field(default_factory=list)

    movement: Any | None = None  # ChampionMove | BoatMove
    arrival: Any | None = None  # ArrivalReport
    harvest: Any | None = None  # HarvestReport
    game_over: bool = False

    # Committed alongside new_state
    new_decks: Any | None = None  # TieredDecks
    log_entries: list[Any] = field(default_factory=list)  # LogEntry

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        **reports: Any,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            **reports,
        )
