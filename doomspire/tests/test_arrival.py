"""
Tests for the tile arrival pipeline.

Tests:
- Exploration reveals the tile group and awards fame
- Step order and early stops
- Special tiles, items, claiming and conquest
"""

from ..engine_core.action import Action, TileIntent
from ..engine_core.arrival import (
    AlreadyExplored,
    CardDrawn,
    ChampionFought,
    ClaimRejected,
    Claimed,
    CombatFreeTile,
    Conquered,
    ExistingMonsterFought,
    ItemsManaged,
    MercenaryHired,
    NewlyExplored,
    NoTokensLeft,
    SpecialRejected,
    TempleUsed,
    resolve_arrival,
)
from ..engine_core.cards import MonsterFought
from ..engine_core.context import ResolutionContext
from ..engine_core.decks import ContentTables, MonsterDef, Theme, TieredDecks
from ..engine_core.dice import DicePool
from ..engine_core.executor import ActionExecutor
from ..engine_core.state import Item, Monster, Position, Resources, Tile, TileType
from .conftest import UnrolledDice, resource_tile


P = Position


def arrive(ctx, run_resolution, position, intent=None, answers=()):
    ctx.state.get_champion("Alice", 1).position = position
    return run_resolution(resolve_arrival(ctx, "Alice", 1, intent), answers)


def single_monster_content(might: int = 2, fame: int = 1) -> ContentTables:
    return ContentTables(monsters={
        "rat": MonsterDef("rat", "Rat", 1, Theme.BEAST, might=might, fame=fame, resources={"food": 1}),
    })


class TestExploration:
    """Tests for the exploration step."""

    def test_reveals_whole_group(self, ctx, run_resolution):
        board = ctx.state.board
        for col in (1, 2, 3):
            tile = board.require_tile(P(2, col))
            tile.explored = False
            tile.tile_group = 7

        report = arrive(ctx, run_resolution, P(2, 1))

        exploration = report.step("exploration")
        assert isinstance(exploration, NewlyExplored)
        assert set(exploration.tiles) == {P(2, 1), P(2, 2), P(2, 3)}
        assert all(board.require_tile(P(2, c)).explored for c in (1, 2, 3))
        assert ctx.state.get_player("Alice").fame == 1

    def test_explored_tile_gives_nothing(self, ctx, run_resolution):
        report = arrive(ctx, run_resolution, P(1, 1))
        assert isinstance(report.step("exploration"), AlreadyExplored)
        assert ctx.state.get_player("Alice").fame == 0

    def test_move_onto_unexplored_tile(self, state, dice, run_resolution):
        """Moving stops on the unexplored tile and arrival explores it."""
        state.board.require_tile(P(0, 2)).explored = False
        action = Action.move_champion("Alice", 3, 1, [P(0, 0), P(0, 1), P(0, 2), P(0, 3)])
        result = run_resolution(ActionExecutor().resolve(state, action, DicePool([3]), dice))

        assert result.new_state.get_champion("Alice", 1).position == P(0, 2)
        assert result.new_state.board.require_tile(P(0, 2)).explored
        assert isinstance(result.arrival.step("exploration"), NewlyExplored)


class TestChampionCombatStep:
    """Champion combat during arrival."""

    def test_fight_on_open_tile(self, ctx, run_resolution):
        ctx.state.get_champion("Bob", 1).position = P(2, 2)
        ctx.dice.rolls = [3, 1]
        report = arrive(ctx, run_resolution, P(2, 2))

        combat = report.step("champion_combat")
        assert isinstance(combat, ChampionFought)
        assert combat.outcome.attacker_won
        assert ctx.state.get_champion("Bob", 1).position == P(4, 4)

    def test_lost_fight_stops_pipeline(self, ctx, run_resolution):
        ctx.state.get_champion("Bob", 1).position = P(2, 2)
        ctx.state.board.set_tile(resource_tile(P(2, 2), food=1))
        ctx.dice.rolls = [1, 3]
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))

        assert report.stopped_at == "champion_combat"
        assert "claim" not in report.steps
        assert ctx.state.board.require_tile(P(2, 2)).claimed_by is None

    def test_no_fight_on_temple(self, ctx, run_resolution):
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.TEMPLE))
        ctx.state.get_champion("Bob", 1).position = P(2, 2)
        report = arrive(ctx, run_resolution, P(2, 2))
        assert report.step("champion_combat") == CombatFreeTile(("Bob",))


class TestMonsterStep:
    """Resident monsters and card draws."""

    def test_resident_monster_fought_before_drawing(self, state, dice, run_resolution):
        content = single_monster_content()
        decks = TieredDecks.from_cards(content.build_cards(), dice)
        ctx = ResolutionContext(state=state, dice=dice, decks=decks, content=content)
        tile = Tile(P(2, 2), TileType.ADVENTURE, tier=1, adventure_tokens=2)
        tile.monster = Monster("ogre", "Ogre", 1, might=9, fame=3)
        state.board.set_tile(tile)
        dice.rolls = [1]

        report = arrive(ctx, run_resolution, P(2, 2))

        step = report.step("monster")
        assert isinstance(step, ExistingMonsterFought)
        assert not step.outcome.won
        assert report.stopped_at == "monster"
        assert tile.adventure_tokens == 2
        assert decks.pile_sizes(1) == [1, 0, 0]

    def test_draw_spends_token_and_fights(self, state, dice, run_resolution):
        content = single_monster_content(might=2, fame=1)
        decks = TieredDecks.from_cards(content.build_cards(), dice)
        ctx = ResolutionContext(state=state, dice=dice, decks=decks, content=content)
        tile = Tile(P(2, 2), TileType.ADVENTURE, tier=1, adventure_tokens=1)
        state.board.set_tile(tile)
        dice.rolls = [2]

        report = arrive(ctx, run_resolution, P(2, 2))

        step = report.step("monster")
        assert isinstance(step, CardDrawn)
        assert isinstance(step.outcome, MonsterFought)
        assert step.outcome.outcome.won
        assert tile.adventure_tokens == 0
        assert tile.monster is None
        assert state.get_player("Alice").resources.food == 1

    def test_no_tokens_left(self, ctx, run_resolution):
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.ADVENTURE, tier=1, adventure_tokens=0))
        report = arrive(ctx, run_resolution, P(2, 2))
        assert isinstance(report.step("monster"), NoTokensLeft)


class TestSpecialTiles:
    """Temple and mercenary camp."""

    def test_temple(self, ctx, run_resolution):
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.TEMPLE))
        alice = ctx.state.get_player("Alice")
        alice.fame = 3
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(use_temple=True))
        assert isinstance(report.step("special_tile"), TempleUsed)
        assert alice.fame == 1
        assert alice.might == 1

    def test_temple_needs_fame(self, ctx, run_resolution):
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.TEMPLE))
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(use_temple=True))
        assert isinstance(report.step("special_tile"), SpecialRejected)
        assert ctx.state.get_player("Alice").might == 0

    def test_mercenary(self, ctx, run_resolution):
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.MERCENARY))
        alice = ctx.state.get_player("Alice")
        alice.resources.gold = 4
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(use_mercenary=True))
        assert isinstance(report.step("special_tile"), MercenaryHired)
        assert alice.resources.gold == 1
        assert alice.might == 1


class TestItems:
    """Item drop and pick-up on arrival."""

    def test_drop_and_pick_up(self, ctx, run_resolution):
        tile = ctx.state.board.require_tile(P(1, 1))
        tile.items = [Item("long-sword", "Long Sword", combat_bonus=2)]
        champion = ctx.state.get_champion("Alice", 1)
        champion.items = [Item("rusty-sword", "Rusty Sword", combat_bonus=2, breaks=True)]

        intent = TileIntent(pick_up_items=["long-sword"], drop_items=["rusty-sword"])
        report = arrive(ctx, run_resolution, P(1, 1), intent)

        step = report.step("items")
        assert isinstance(step, ItemsManaged)
        assert step.picked_up == ("long-sword",)
        assert step.dropped == ("rusty-sword",)
        assert [i.item_id for i in champion.items] == ["long-sword"]
        assert [i.item_id for i in tile.items] == ["rusty-sword"]

    def test_stuck_item_cannot_be_dropped(self, ctx, run_resolution):
        champion = ctx.state.get_champion("Alice", 1)
        champion.items = [Item("stuck-ring", "Stuck Ring", stuck=True)]
        report = arrive(ctx, run_resolution, P(1, 1), TileIntent(drop_items=["stuck-ring"]))
        assert report.step("items").failures
        assert len(champion.items) == 1


class TestClaiming:
    """Claiming and conquering resource tiles."""

    def test_claim_free_tile(self, ctx, run_resolution):
        ctx.state.board.set_tile(resource_tile(P(2, 2), wood=1))
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))
        assert report.step("claim") == Claimed(P(2, 2))
        assert ctx.state.board.require_tile(P(2, 2)).claimed_by == "Alice"

    def test_only_resource_tiles(self, ctx, run_resolution):
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))
        assert isinstance(report.step("claim"), ClaimRejected)

    def test_claim_cap(self, ctx, run_resolution):
        alice = ctx.state.get_player("Alice")
        alice.max_claims = 1
        ctx.state.board.set_tile(resource_tile(P(1, 1), claimed_by="Alice", food=1))
        ctx.state.board.set_tile(resource_tile(P(2, 2), wood=1))

        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))

        assert isinstance(report.step("claim"), ClaimRejected)
        assert ctx.state.board.require_tile(P(2, 2)).claimed_by is None

    def test_claimed_tile_needs_conquest(self, ctx, run_resolution):
        ctx.state.board.set_tile(resource_tile(P(2, 2), claimed_by="Bob", wood=1))
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))
        assert isinstance(report.step("claim"), ClaimRejected)
        assert ctx.state.board.require_tile(P(2, 2)).claimed_by == "Bob"

    def test_conquer_with_might(self, ctx, run_resolution):
        ctx.state.board.set_tile(resource_tile(P(2, 2), claimed_by="Bob", wood=1))
        alice = ctx.state.get_player("Alice")
        alice.might = 2
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(conquer_with_might=True))
        assert report.step("claim") == Conquered(P(2, 2), "Bob", "might")
        assert alice.might == 1

    def test_conquer_protected_claim_rejected(self, ctx, run_resolution):
        ctx.state.board.set_tile(resource_tile(P(2, 2), claimed_by="Bob", wood=1))
        ctx.state.get_champion("Bob", 1).position = P(2, 3)
        ctx.state.get_player("Alice").fame = 2
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(conquer_with_fame=True))
        assert isinstance(report.step("claim"), ClaimRejected)
        assert ctx.state.get_player("Alice").fame == 2


class TestDoomspire:
    """Reaching the Doomspire tile."""

    def test_gold_victory_on_arrival(self, ctx, run_resolution):
        ctx.dice = UnrolledDice()
        ctx.state.board.set_tile(Tile(P(2, 2), TileType.DOOMSPIRE, tier=3))
        ctx.state.get_player("Alice").resources = Resources(gold=10)
        report = arrive(ctx, run_resolution, P(2, 2), TileIntent(claim_tile=True))
        assert report.game_over
        assert report.stopped_at == "doomspire"
        assert "claim" not in report.steps
