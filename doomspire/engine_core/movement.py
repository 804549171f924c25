"""
Movement - Where a champion or boat ends up for a given path and die.

Both calculators are pure: they read the state and report an end
position with a stop reason, and the executor applies the result.

Champion stop conditions, checked per step in this order:
- the step is not orthogonally adjacent (stop before it)
- the step leaves the board (stop before it)
- the step enters another player's home (stop before it)
- the step enters an unexplored tile (stop ON it, whatever budget is left)
- the die budget is used up
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from .state import GameState, OceanZone, Position


class MoveStopReason(Enum):
    INVALID_MOVE = "invalid_move"
    OUT_OF_BOUNDS = "out_of_bounds"
    FOREIGN_HOME = "foreign_home"
    UNEXPLORED_TILE = "unexplored_tile"
    BUDGET_EXHAUSTED = "budget_exhausted"
    ARRIVED = "arrived"


@dataclass(frozen=True)
class ChampionMove:
    end_position: Position
    moves_used: int
    reason: MoveStopReason


def calculate_champion_move(
    state: GameState,
    player_name: str,
    path: Sequence[Position],
    die_value: int,
) -> ChampionMove:
    """
    Walk `path` (which starts at the champion's current position).

    Does not change any state.
    """
    if not path:
        raise ValueError("Champion path must include the starting position")
    state.get_player(player_name)
    if len(path) == 1:
        return ChampionMove(path[0], 0, MoveStopReason.ARRIVED)

    foreign_homes = {p.home_position for p in state.players if p.name != player_name}
    current = path[0]
    moves_used = 0

    for step in path[1:]:
        if not current.is_adjacent(step):
            return ChampionMove(current, moves_used, MoveStopReason.INVALID_MOVE)

        tile = state.board.tile_at(step)
        if tile is None:
            return ChampionMove(current, moves_used, MoveStopReason.OUT_OF_BOUNDS)

        if step in foreign_homes:
            return ChampionMove(current, moves_used, MoveStopReason.FOREIGN_HOME)

        if not tile.explored:
            return ChampionMove(step, moves_used + 1, MoveStopReason.UNEXPLORED_TILE)

        current = step
        moves_used += 1
        if moves_used >= die_value:
            return ChampionMove(current, moves_used, MoveStopReason.BUDGET_EXHAUSTED)

    return ChampionMove(current, moves_used, MoveStopReason.ARRIVED)


# =============================================================================
# Boats
# =============================================================================

# Each sea touches its corner plus three tiles along each adjoining edge
COASTAL_TILES: dict[OceanZone, frozenset[Position]] = {
    OceanZone.NW: frozenset(Position(r, c) for r, c in [
        (0, 0), (0, 1), (0, 2), (0, 3), (1, 0), (2, 0), (3, 0)]),
    OceanZone.NE: frozenset(Position(r, c) for r, c in [
        (0, 7), (0, 6), (0, 5), (0, 4), (1, 7), (2, 7), (3, 7)]),
    OceanZone.SW: frozenset(Position(r, c) for r, c in [
        (7, 0), (7, 1), (7, 2), (7, 3), (6, 0), (5, 0), (4, 0)]),
    OceanZone.SE: frozenset(Position(r, c) for r, c in [
        (7, 7), (7, 6), (7, 5), (7, 4), (6, 7), (5, 7), (4, 7)]),
}

OCEAN_ADJACENCY: dict[OceanZone, tuple[OceanZone, ...]] = {
    OceanZone.NW: (OceanZone.NE, OceanZone.SW),
    OceanZone.NE: (OceanZone.NW, OceanZone.SE),
    OceanZone.SW: (OceanZone.NW, OceanZone.SE),
    OceanZone.SE: (OceanZone.NE, OceanZone.SW),
}


def adjacent_zones(zone: OceanZone) -> tuple[OceanZone, ...]:
    return OCEAN_ADJACENCY[zone]


class BoatFerryOutcome(Enum):
    NO_CHAMPION = "no_champion"
    CHAMPION_MOVED = "champion_moved"
    CHAMPION_NOT_REACHABLE = "champion_not_reachable"
    TARGET_NOT_REACHABLE = "target_not_reachable"


@dataclass(frozen=True)
class BoatMove:
    end_zone: OceanZone
    moves_used: int
    reason: MoveStopReason
    ferry: BoatFerryOutcome
    reachable_tiles: frozenset[Position] = field(default_factory=frozenset)


def calculate_boat_move(
    path: Sequence[OceanZone],
    die_value: int,
    champion_position: Position | None = None,
    drop_position: Position | None = None,
) -> BoatMove:
    """
    Sail along `path` (starting at the boat's zone) and check the ferry.

    A ferried champion can be picked up from, and dropped on, any coastal
    tile of any zone the boat passed through, including where it started.
    Does not change any state.
    """
    if not path:
        raise ValueError("Boat path must include the starting zone")

    current = path[0]
    moves_used = 0
    reason = MoveStopReason.ARRIVED
    reachable = set(COASTAL_TILES[current])

    for step in path[1:]:
        if step not in OCEAN_ADJACENCY[current]:
            reason = MoveStopReason.INVALID_MOVE
            break
        current = step
        moves_used += 1
        reachable |= COASTAL_TILES[current]
        if moves_used >= die_value:
            reason = MoveStopReason.BUDGET_EXHAUSTED
            break

    if champion_position is None or drop_position is None:
        ferry = BoatFerryOutcome.NO_CHAMPION
    elif champion_position not in reachable:
        ferry = BoatFerryOutcome.CHAMPION_NOT_REACHABLE
    elif drop_position not in reachable:
        ferry = BoatFerryOutcome.TARGET_NOT_REACHABLE
    else:
        ferry = BoatFerryOutcome.CHAMPION_MOVED

    return BoatMove(current, moves_used, reason, ferry, frozenset(reachable))
