"""
Tests for harvesting claimed and blockaded tiles.
"""

from ..engine_core.action import Action
from ..engine_core.dice import DicePool
from ..engine_core.executor import ActionExecutor
from ..engine_core.harvest import HarvestSkipReason, calculate_harvest
from ..engine_core.state import Position
from .conftest import resource_tile


P = Position


class TestCalculateHarvest:
    """Tests for calculate_harvest."""

    def test_budget_truncates_request(self, state):
        """Three tiles requested with a budget of two yields the first two."""
        for col in (1, 2, 3):
            state.board.set_tile(resource_tile(P(2, col), claimed_by="Alice", food=1))
        report = calculate_harvest(state, "Alice", [P(2, 1), P(2, 2), P(2, 3)], 2)

        assert report.harvested == [P(2, 1), P(2, 2)]
        assert report.truncated == [P(2, 3)]
        assert report.resources.food == 2

    def test_unclaimed_tile_skipped(self, state):
        state.board.set_tile(resource_tile(P(2, 2), ore=1))
        report = calculate_harvest(state, "Alice", [P(2, 2)], 1)
        assert report.harvested == []
        assert report.skipped == [(P(2, 2), HarvestSkipReason.NOT_OWNED)]

    def test_opponent_on_tile_blocks(self, state):
        state.board.set_tile(resource_tile(P(2, 2), claimed_by="Alice", wood=1))
        state.get_champion("Bob", 1).position = P(2, 2)
        report = calculate_harvest(state, "Alice", [P(2, 2)], 1)
        assert report.skipped == [(P(2, 2), HarvestSkipReason.BLOCKED_BY_OPPONENT)]

    def test_blockade_harvests_unprotected_claim(self, state):
        """Standing on an opponent's unprotected claim lets you harvest it."""
        state.board.set_tile(resource_tile(P(2, 2), claimed_by="Bob", gold=1))
        state.get_champion("Alice", 1).position = P(2, 2)
        report = calculate_harvest(state, "Alice", [P(2, 2)], 1)
        assert report.harvested == [P(2, 2)]
        assert report.resources.gold == 1

    def test_blockade_of_protected_claim(self, state):
        state.board.set_tile(resource_tile(P(2, 2), claimed_by="Bob", gold=1))
        state.get_champion("Alice", 1).position = P(2, 2)
        state.get_champion("Bob", 1).position = P(2, 3)
        report = calculate_harvest(state, "Alice", [P(2, 2)], 1)
        assert report.skipped == [(P(2, 2), HarvestSkipReason.CLAIM_PROTECTED)]

    def test_missing_tile(self, state):
        report = calculate_harvest(state, "Alice", [P(9, 9)], 1)
        assert report.skipped == [(P(9, 9), HarvestSkipReason.MISSING_TILE)]

    def test_multi_resource_tile(self, state):
        state.board.set_tile(resource_tile(P(1, 1), claimed_by="Alice", food=1, ore=1))
        report = calculate_harvest(state, "Alice", [P(1, 1)], 3)
        assert report.resources.to_dict() == {"food": 1, "wood": 0, "ore": 1, "gold": 0}


class TestHarvestAction:
    """Harvest through the executor."""

    def test_harvest_adds_resources(self, state, dice, run_resolution):
        state.board.set_tile(resource_tile(P(1, 1), claimed_by="Alice", wood=2))
        state.board.set_tile(resource_tile(P(1, 2), claimed_by="Alice", ore=1))
        pool = DicePool([1, 1, 2])
        action = Action.harvest("Alice", [1, 1], [P(1, 1), P(1, 2)])

        result = run_resolution(ActionExecutor().resolve(state, action, pool, dice))

        alice = result.new_state.get_player("Alice")
        assert alice.resources.wood == 2
        assert alice.resources.ore == 1
        assert pool.remaining() == [2]
        assert result.harvest.tile_count == 2
