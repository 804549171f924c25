"""
Tests for board layout and game setup.
"""

import pytest

from ..content.setup import HOME_POSITIONS, MAX_PLAYERS, build_decks, create_game
from ..content.tiles import BoardBuilder, build_board, make_tile, render_board, trio_positions
from ..engine_core.dice import DiceRoller
from ..engine_core.state import GamePhase, Position, TileType


P = Position


class TestBoardBuilder:
    """Tests for the standard board."""

    def test_covers_every_cell(self):
        board = build_board(seed=1)
        assert len(board.tiles) == 64
        assert all(board.in_bounds(p) for p in board.tiles)

    def test_same_seed_same_board(self):
        assert render_board(build_board(seed=9)) == render_board(build_board(seed=9))

    def test_homes_in_corners(self):
        board = build_board(seed=2)
        for corner in HOME_POSITIONS:
            assert board.require_tile(corner).tile_type == TileType.HOME

    def test_one_doomspire_in_centre(self):
        board = build_board(seed=3)
        doomspire = board.find(lambda t: t.tile_type == TileType.DOOMSPIRE)
        assert len(doomspire) == 1
        assert doomspire[0].position in {P(3, 3), P(3, 4), P(4, 3), P(4, 4)}

    def test_exploration_state(self):
        """Home and tier-1 trios start explored; tier 2 and the centre do not."""
        board = build_board(seed=4)
        assert board.require_tile(P(0, 0)).explored
        assert board.require_tile(P(0, 4)).explored
        assert not board.require_tile(P(2, 2)).explored
        assert not board.require_tile(P(3, 3)).explored

    def test_trios_share_a_group(self):
        board = build_board(seed=5)
        group = board.require_tile(P(2, 2)).tile_group
        assert group is not None
        assert len(board.tiles_in_group(group)) == 3

    def test_adventure_tokens(self):
        board = BoardBuilder(DiceRoller(6), adventure_tokens=3).build()
        adventures = board.find(lambda t: t.tile_type == TileType.ADVENTURE)
        assert adventures
        assert all(t.adventure_tokens == 3 for t in adventures)


class TestTiles:
    """Tests for tile definitions."""

    def test_trio_rotation(self):
        assert trio_positions(P(0, 0), 0) == [P(0, 0), P(0, 1), P(1, 0)]
        assert trio_positions(P(7, 7), 2) == [P(7, 7), P(7, 6), P(6, 7)]

    def test_double_resource_is_starred(self):
        tile = make_tile(("gold", "gold"), P(1, 1), explored=True)
        assert tile.tile_type == TileType.RESOURCE
        assert tile.resources.gold == 2
        assert tile.starred

    def test_single_resource_not_starred(self):
        assert not make_tile("ore", P(1, 1), explored=True).starred

    def test_wolf_den_is_adventure(self):
        tile = make_tile("wolfDen", P(1, 1), explored=True)
        assert tile.tile_type == TileType.ADVENTURE
        assert tile.tier == 1

    def test_unknown_definition(self):
        with pytest.raises(ValueError):
            make_tile("castle", P(1, 1), explored=True)

    def test_render_marks_unexplored(self):
        lines = render_board(build_board(seed=7)).splitlines()
        assert len(lines) == 8
        assert lines[0].startswith("HOM")
        assert "?" in lines[3]


class TestCreateGame:
    """Tests for create_game."""

    def test_players_start_at_home(self):
        state = create_game(["Alice", "Bob", "Carol"], seed=1)
        assert state.phase == GamePhase.SETUP
        for player, home in zip(state.players, HOME_POSITIONS):
            assert player.home_position == home
            assert player.champions[0].position == home
            assert len(player.boats) == 1

    def test_starting_resources(self):
        alice = create_game(["Alice"], seed=1).get_player("Alice")
        assert alice.resources.food == 1
        assert alice.resources.wood == 1
        assert alice.fame == 0

    def test_too_many_players(self):
        with pytest.raises(ValueError):
            create_game([f"P{i}" for i in range(MAX_PLAYERS + 1)])

    def test_duplicate_names(self):
        with pytest.raises(ValueError):
            create_game(["Alice", "Alice"])

    def test_no_players(self):
        with pytest.raises(ValueError):
            create_game([])

    def test_decks_have_three_tiers(self):
        decks = build_decks(DiceRoller(1))
        assert decks.tiers == [1, 2, 3]
        assert all(sum(decks.pile_sizes(t)) > 0 for t in decks.tiers)
