"""
Tests for victory checks.
"""

from ..engine_core.settings import GameSettings
from ..engine_core.state import Position, Tile, TileType
from ..engine_core.victory import Victory, VictoryType, alternative_victory, check_victory
from .conftest import resource_tile


P = Position


class TestAlternativeVictory:
    """Threshold victories, checked fame then gold then starred tiles."""

    def test_none(self, state):
        assert alternative_victory(state, "Alice") is None

    def test_fame_checked_before_gold(self, state):
        alice = state.get_player("Alice")
        alice.fame = 10
        alice.resources.gold = 10
        assert alternative_victory(state, "Alice") == VictoryType.FAME

    def test_economic(self, state):
        for col in (1, 2, 3):
            state.board.set_tile(resource_tile(P(2, col), claimed_by="Alice", food=1, wood=1))
        assert alternative_victory(state, "Alice") == VictoryType.ECONOMIC

    def test_custom_thresholds(self, state):
        state.get_player("Alice").fame = 3
        assert alternative_victory(state, "Alice", GameSettings(victory_fame_threshold=3)) == VictoryType.FAME


class TestCheckVictory:
    """Tests for check_victory."""

    def test_dragon_slayer_wins(self, state):
        state.dragon_slayer = "Bob"
        assert check_victory(state) == Victory("Bob", VictoryType.COMBAT)

    def test_threshold_needs_champion_on_doomspire(self, state):
        state.board.set_tile(Tile(P(2, 2), TileType.DOOMSPIRE, tier=3))
        state.get_player("Alice").resources.gold = 12
        assert check_victory(state) is None

        state.get_champion("Alice", 1).position = P(2, 2)
        assert check_victory(state) == Victory("Alice", VictoryType.GOLD)

    def test_does_not_mutate(self, state):
        state.dragon_slayer = "Alice"
        check_victory(state)
        assert not state.is_finished
