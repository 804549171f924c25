"""
Tests for the built-in agents and the action generator they rely on.
"""

import asyncio

import pytest

from ..bots import FirstLegalAgent, RandomAgent, TurnContext
from ..engine_core.action import ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.decisions import DecisionRequest, OptionChoice
from ..engine_core.settings import GameSettings
from ..engine_core.state import GamePhase, Position, Tile, TileType
from .conftest import resource_tile


P = Position


class TestActionGenerator:
    """Tests for legal_actions."""

    def test_every_die_has_a_harvest(self, state):
        actions = legal_actions(state, "Alice", [1, 3])
        harvests = [a for a in actions if a.action_type == ActionType.HARVEST]
        assert sorted(a.die_values[0] for a in harvests) == [1, 3]

    def test_champion_moves_within_die(self, state):
        actions = legal_actions(state, "Alice", [1])
        moves = [a for a in actions if a.action_type == ActionType.MOVE_CHAMPION]
        destinations = {a.payload.path[-1] for a in moves}
        assert destinations == {P(0, 1), P(1, 0)}

    def test_never_enters_foreign_home(self, state):
        state.get_champion("Alice", 1).position = P(3, 4)
        actions = legal_actions(state, "Alice", [1])
        destinations = {a.payload.path[-1] for a in actions if a.action_type == ActionType.MOVE_CHAMPION}
        assert P(4, 4) not in destinations

    def test_does_not_path_through_unexplored(self, state):
        state.board.require_tile(P(0, 1)).explored = False
        state.board.require_tile(P(1, 0)).explored = False
        actions = legal_actions(state, "Alice", [3])
        destinations = {a.payload.path[-1] for a in actions if a.action_type == ActionType.MOVE_CHAMPION}
        assert destinations == {P(0, 1), P(1, 0)}

    def test_claims_free_resource_tiles(self, state):
        state.board.set_tile(resource_tile(P(0, 1), food=1))
        actions = legal_actions(state, "Alice", [1])
        move = next(a for a in actions if a.action_type == ActionType.MOVE_CHAMPION and a.payload.path[-1] == P(0, 1))
        assert move.payload.tile_intent.claim_tile

    def test_uses_affordable_temple(self, state):
        state.board.set_tile(Tile(P(0, 1), TileType.TEMPLE))
        state.get_player("Alice").fame = 2
        actions = legal_actions(state, "Alice", [1])
        move = next(a for a in actions if a.action_type == ActionType.MOVE_CHAMPION and a.payload.path[-1] == P(0, 1))
        assert move.payload.tile_intent.use_temple

    def test_temple_cost_follows_settings(self, state):
        state.board.set_tile(Tile(P(0, 1), TileType.TEMPLE))
        state.get_player("Alice").fame = 1

        def temple_move(actions):
            return next(a for a in actions if a.action_type == ActionType.MOVE_CHAMPION and a.payload.path[-1] == P(0, 1))

        assert not temple_move(legal_actions(state, "Alice", [1])).payload.tile_intent.use_temple
        cheap = GameSettings(temple_fame_cost=1)
        assert temple_move(legal_actions(state, "Alice", [1], cheap)).payload.tile_intent.use_temple

    def test_nothing_when_not_playing(self, state):
        finished = state._copy_with(phase=GamePhase.FINISHED)
        assert legal_actions(finished, "Alice", [1]) == []

    def test_nothing_without_dice(self, state):
        assert legal_actions(state, "Alice", []) == []


class TestAgents:
    """Tests for RandomAgent and FirstLegalAgent."""

    def context(self, remaining):
        return TurnContext(round=1, dice_rolled=list(remaining), remaining=list(remaining))

    def test_first_legal_is_deterministic(self, state):
        agent = FirstLegalAgent("Alice")
        first = asyncio.run(agent.request_dice_action(state, [], self.context([2])))
        assert first.describe() == legal_actions(state, "Alice", [2])[0].describe()

    def test_random_agent_is_seeded(self, state):
        a = asyncio.run(RandomAgent("Alice", 3).request_dice_action(state, [], self.context([1, 2, 3])))
        b = asyncio.run(RandomAgent("Alice", 3).request_dice_action(state, [], self.context([1, 2, 3])))
        assert a.describe() == b.describe()

    def test_random_answer_is_an_option(self):
        request = DecisionRequest("Alice", OptionChoice("?", "t", ("x", "y", "z")))
        answer = asyncio.run(RandomAgent("Alice", 1).request_decision(None, request))
        assert answer in {"x", "y", "z"}

    def test_first_option(self):
        request = DecisionRequest("Alice", OptionChoice("?", "t", ("x", "y")))
        assert asyncio.run(FirstLegalAgent("Alice").request_decision(None, request)) == "x"

    def test_no_options_raises(self):
        request = DecisionRequest("Alice", OptionChoice("?", "t", ()))
        with pytest.raises(ValueError):
            asyncio.run(RandomAgent("Alice").request_decision(None, request))

    def test_no_assessment_by_default(self, state):
        assert asyncio.run(RandomAgent("Alice").make_strategic_assessment(state, [], [1])) is None
