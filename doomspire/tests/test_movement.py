"""
Tests for champion and boat movement.

Tests:
- Champion stop conditions, in order
- Boat paths and ferry reachability
- Executor handling of move actions
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.dice import DicePool
from ..engine_core.executor import ActionExecutor
from ..engine_core.movement import (
    BoatFerryOutcome,
    MoveStopReason,
    calculate_boat_move,
    calculate_champion_move,
)
from ..engine_core.state import OceanZone, Position


P = Position


class TestChampionMove:
    """Tests for calculate_champion_move."""

    def test_walks_full_path(self, state):
        move = calculate_champion_move(state, "Alice", [P(0, 0), P(0, 1), P(0, 2)], 3)
        assert move.end_position == P(0, 2)
        assert move.moves_used == 2
        assert move.reason == MoveStopReason.ARRIVED

    def test_budget_exhausted(self, state):
        path = [P(0, 0), P(0, 1), P(0, 2), P(0, 3)]
        move = calculate_champion_move(state, "Alice", path, 2)
        assert move.end_position == P(0, 2)
        assert move.reason == MoveStopReason.BUDGET_EXHAUSTED

    def test_diagonal_step_stops_before(self, state):
        move = calculate_champion_move(state, "Alice", [P(0, 0), P(1, 1)], 3)
        assert move.end_position == P(0, 0)
        assert move.reason == MoveStopReason.INVALID_MOVE

    def test_off_board_stops_before(self, state):
        move = calculate_champion_move(state, "Alice", [P(0, 0), P(-1, 0)], 1)
        assert move.end_position == P(0, 0)
        assert move.reason == MoveStopReason.OUT_OF_BOUNDS

    def test_foreign_home_stops_before(self, state):
        path = [P(3, 4), P(4, 4)]
        move = calculate_champion_move(state, "Alice", path, 2)
        assert move.end_position == P(3, 4)
        assert move.reason == MoveStopReason.FOREIGN_HOME

    def test_unexplored_tile_stops_on_it(self, state):
        """Entering an unexplored tile ends movement there, whatever budget is left."""
        state.board.require_tile(P(0, 2)).explored = False
        path = [P(0, 0), P(0, 1), P(0, 2), P(0, 3)]
        move = calculate_champion_move(state, "Alice", path, 3)
        assert move.end_position == P(0, 2)
        assert move.moves_used == 2
        assert move.reason == MoveStopReason.UNEXPLORED_TILE

    def test_staying_put(self, state):
        move = calculate_champion_move(state, "Alice", [P(0, 0)], 2)
        assert move.end_position == P(0, 0)
        assert move.moves_used == 0

    def test_empty_path_raises(self, state):
        with pytest.raises(ValueError):
            calculate_champion_move(state, "Alice", [], 1)

    def test_does_not_mutate_state(self, state):
        calculate_champion_move(state, "Alice", [P(0, 0), P(0, 1)], 1)
        assert state.get_champion("Alice", 1).position == P(0, 0)


class TestBoatMove:
    """Tests for calculate_boat_move."""

    def test_one_step(self):
        move = calculate_boat_move([OceanZone.NW, OceanZone.NE], 1)
        assert move.end_zone == OceanZone.NE
        assert move.reason == MoveStopReason.BUDGET_EXHAUSTED
        assert move.ferry == BoatFerryOutcome.NO_CHAMPION

    def test_non_adjacent_zone_stops(self):
        move = calculate_boat_move([OceanZone.NW, OceanZone.SE], 2)
        assert move.end_zone == OceanZone.NW
        assert move.reason == MoveStopReason.INVALID_MOVE

    def test_ferry_between_zones(self):
        move = calculate_boat_move(
            [OceanZone.NW, OceanZone.NE], 1,
            champion_position=P(2, 0), drop_position=P(0, 6),
        )
        assert move.ferry == BoatFerryOutcome.CHAMPION_MOVED

    def test_ferry_from_starting_zone(self):
        """The starting zone's coast counts for pick-up and drop-off."""
        move = calculate_boat_move([OceanZone.NW], 1, champion_position=P(0, 1), drop_position=P(3, 0))
        assert move.ferry == BoatFerryOutcome.CHAMPION_MOVED

    def test_champion_not_reachable(self):
        move = calculate_boat_move(
            [OceanZone.NW, OceanZone.NE], 1,
            champion_position=P(4, 4), drop_position=P(0, 6),
        )
        assert move.ferry == BoatFerryOutcome.CHAMPION_NOT_REACHABLE

    def test_target_not_reachable(self):
        move = calculate_boat_move(
            [OceanZone.NW, OceanZone.NE], 1,
            champion_position=P(0, 0), drop_position=P(7, 7),
        )
        assert move.ferry == BoatFerryOutcome.TARGET_NOT_REACHABLE


class TestMoveActions:
    """Move actions through the executor."""

    def test_move_prepends_start(self, state, dice, run_resolution):
        """A path that does not start at the champion is walked from the champion."""
        executor = ActionExecutor()
        pool = DicePool([2])
        action = Action.move_champion("Alice", 2, 1, [P(0, 1), P(0, 2)])
        result = run_resolution(executor.resolve(state, action, pool, dice))

        assert result.success
        assert result.new_state.get_champion("Alice", 1).position == P(0, 2)
        assert not pool.has_remaining()
        # Original state untouched
        assert state.get_champion("Alice", 1).position == P(0, 0)

    def test_failed_ferry_still_moves_boat(self, state, dice, run_resolution):
        executor = ActionExecutor()
        action = Action.move_boat(
            "Alice", 1, 1, [OceanZone.NW, OceanZone.NE],
            champion_id=1, drop_position=P(4, 0),
        )
        state.get_champion("Alice", 1).position = P(2, 2)
        result = run_resolution(executor.resolve(state, action, DicePool([1]), dice))

        new_state = result.new_state
        assert new_state.get_player("Alice").get_boat(1).zone == OceanZone.NE
        assert new_state.get_champion("Alice", 1).position == P(2, 2)
        assert result.arrival is None
