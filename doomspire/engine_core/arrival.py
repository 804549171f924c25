"""
Tile Arrival - Everything that happens when a champion comes to rest.

Steps run in a fixed order and each reports a small tagged outcome:
1. Exploration (reveals the whole tile group, awards fame)
2. Champion combat (not on home/temple/trader/mercenary tiles)
3. Monster: the resident monster, or a card drawn from an adventure tile
4. Special tile use (temple, mercenary camp)
5. Doomspire: threshold victory or the dragon
6. Item drop / pick-up
7. Claiming or conquering the tile

Losing a fight, leaving the tile, or ending the game stops the
sequence; later steps never run.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Union

from .action import TileIntent
from .cards import CardOutcome, MonsterFought, dispatch_card
from .combat import (
    AlternativeVictory,
    ChampionCombatOutcome,
    DragonFight,
    MonsterCombatOutcome,
    resolve_champion_combat,
    resolve_dragon_encounter,
    resolve_monster_combat,
)
from .context import ResolutionContext
from .decisions import Resolution
from .decks import Card
from .errors import ContractError
from .log import LogEntryType
from .state import CARD_TILES, NON_COMBAT_TILES, Position, Tile, TileType


logger = logging.getLogger(__name__)


# =============================================================================
# Step outcomes
# =============================================================================

@dataclass(frozen=True)
class AlreadyExplored:
    pass


@dataclass(frozen=True)
class NewlyExplored:
    fame: int
    tiles: tuple[Position, ...]


ExplorationOutcome = Union[AlreadyExplored, NewlyExplored]


@dataclass(frozen=True)
class NoOpponent:
    pass


@dataclass(frozen=True)
class CombatFreeTile:
    opponents: tuple[str, ...]


@dataclass(frozen=True)
class ChampionFought:
    outcome: ChampionCombatOutcome


ChampionCombatStep = Union[NoOpponent, CombatFreeTile, ChampionFought]


@dataclass(frozen=True)
class NoMonster:
    pass


@dataclass(frozen=True)
class ExistingMonsterFought:
    outcome: MonsterCombatOutcome


@dataclass(frozen=True)
class CardDrawn:
    card: Card
    outcome: CardOutcome


@dataclass(frozen=True)
class NoTokensLeft:
    pass


MonsterStep = Union[NoMonster, ExistingMonsterFought, CardDrawn, NoTokensLeft]


@dataclass(frozen=True)
class NotUsed:
    pass


@dataclass(frozen=True)
class TempleUsed:
    fame_spent: int
    might_gained: int = 1


@dataclass(frozen=True)
class MercenaryHired:
    gold_spent: int
    might_gained: int = 1


@dataclass(frozen=True)
class SpecialRejected:
    reason: str


SpecialTileStep = Union[NotUsed, TempleUsed, MercenaryHired, SpecialRejected]


@dataclass(frozen=True)
class NotDoomspire:
    pass


DoomspireStep = Union[NotDoomspire, AlternativeVictory, DragonFight]


@dataclass(frozen=True)
class NoItemChanges:
    pass


@dataclass(frozen=True)
class ItemsManaged:
    picked_up: tuple[str, ...]
    dropped: tuple[str, ...]
    failures: tuple[str, ...]


ItemStep = Union[NoItemChanges, ItemsManaged]


@dataclass(frozen=True)
class NotRequested:
    pass


@dataclass(frozen=True)
class Claimed:
    position: Position


@dataclass(frozen=True)
class Conquered:
    position: Position
    previous_owner: str
    paid_with: str  # "might" or "fame"


@dataclass(frozen=True)
class ClaimRejected:
    reason: str


ClaimStep = Union[NotRequested, Claimed, Conquered, ClaimRejected]


@dataclass
class ArrivalReport:
    """Outcome of every step that ran, keyed by step name, in order."""
    position: Position
    steps: dict[str, Any] = field(default_factory=dict)
    stopped_at: str | None = None
    game_over: bool = False

    def step(self, name: str) -> Any | None:
        return self.steps.get(name)


# =============================================================================
# Steps
# =============================================================================

def explore(ctx: ResolutionContext, player_name: str, tile: Tile) -> ExplorationOutcome:
    if tile.explored:
        return AlreadyExplored()

    revealed = [tile]
    if tile.tile_group is not None:
        revealed = ctx.state.board.tiles_in_group(tile.tile_group) or [tile]
    for t in revealed:
        t.explored = True
    tile.explored = True

    fame = ctx.settings.exploration_fame
    ctx.state.get_player(player_name).add_fame(fame)
    ctx.note(player_name, LogEntryType.EXPLORATION, f"Explored {tile.describe()} at {tile.position} and gained {fame} fame")
    return NewlyExplored(fame, tuple(t.position for t in revealed))


def fight_champions(
    ctx: ResolutionContext, player_name: str, champion_id: int, tile: Tile
) -> ChampionCombatStep:
    opponents = ctx.state.opposing_champions_at(player_name, tile.position)
    if not opponents:
        return NoOpponent()
    if tile.tile_type in NON_COMBAT_TILES:
        return CombatFreeTile(tuple(sorted({c.player_name for c in opponents})))

    defender = opponents[0]
    outcome = resolve_champion_combat(
        ctx.state, ctx.dice,
        player_name, champion_id,
        defender.player_name, defender.champion_id,
        ctx.settings,
    )
    ctx.note(
        player_name, LogEntryType.COMBAT,
        f"Fought {defender.player_name}'s champion{defender.champion_id}: "
        f"{outcome.winner_name} won ({outcome.attacker_total} vs {outcome.defender_total}"
        f" after {outcome.rolls} roll(s)); {outcome.loser_name} {outcome.healing.describe()}",
    )
    return ChampionFought(outcome)


def face_monster(
    ctx: ResolutionContext,
    player_name: str,
    champion_id: int,
    tile: Tile,
    intent: TileIntent,
) -> Resolution[MonsterStep]:
    if tile.monster is not None:
        outcome = resolve_monster_combat(ctx.state, ctx.dice, player_name, champion_id, tile.monster, tile)
        ctx.note(player_name, LogEntryType.COMBAT, outcome.describe())
        return ExistingMonsterFought(outcome)

    if tile.tile_type not in CARD_TILES:
        return NoMonster()
    if tile.adventure_tokens <= 0:
        return NoTokensLeft()
    if ctx.decks is None:
        raise ContractError(f"Adventure tile at {tile.position} but no decks were provided")

    tile.adventure_tokens -= 1
    card = ctx.decks.draw(tile.tier or 1, intent.adventure_pile)
    ctx.note(
        player_name, LogEntryType.EVENT,
        f"Drew a tier {card.tier} {card.card_type.value} card ({card.card_id}) at {tile.position}",
    )
    outcome = yield from dispatch_card(ctx, card, player_name, champion_id, tile)
    return CardDrawn(card, outcome)


def use_special_tile(ctx: ResolutionContext, player_name: str, tile: Tile, intent: TileIntent) -> SpecialTileStep:
    player = ctx.state.get_player(player_name)

    if intent.use_temple:
        cost = ctx.settings.temple_fame_cost
        if tile.tile_type != TileType.TEMPLE:
            return SpecialRejected("not a temple tile")
        if player.fame < cost:
            return SpecialRejected(f"needs {cost} fame to sacrifice at the temple")
        player.add_fame(-cost)
        player.add_might(1)
        ctx.note(player_name, LogEntryType.EVENT, f"Sacrificed {cost} fame at the temple for +1 might")
        return TempleUsed(cost)

    if intent.use_mercenary:
        cost = ctx.settings.mercenary_gold_cost
        if tile.tile_type != TileType.MERCENARY:
            return SpecialRejected("not a mercenary camp")
        if player.resources.gold < cost:
            return SpecialRejected(f"needs {cost} gold to hire mercenaries")
        player.resources.lose("gold", cost)
        player.add_might(1)
        ctx.note(player_name, LogEntryType.EVENT, f"Hired mercenaries for {cost} gold, +1 might")
        return MercenaryHired(cost)

    return NotUsed()


def enter_doomspire(ctx: ResolutionContext, player_name: str, champion_id: int, tile: Tile) -> DoomspireStep:
    if tile.tile_type != TileType.DOOMSPIRE:
        return NotDoomspire()

    result = resolve_dragon_encounter(ctx.state, ctx.dice, player_name, champion_id, ctx.settings)
    if isinstance(result, AlternativeVictory):
        ctx.note(player_name, LogEntryType.VICTORY, f"Reached the Doomspire and won a {result.victory_type.value}")
    elif result.won:
        ctx.note(player_name, LogEntryType.VICTORY, f"Slew the dragon (might {result.dragon_might})!")
    else:
        ctx.note(player_name, LogEntryType.COMBAT, f"The dragon (might {result.dragon_might}) won: {result.outcome.describe()}")
    return result


def manage_items(ctx: ResolutionContext, player_name: str, champion_id: int, tile: Tile, intent: TileIntent) -> ItemStep:
    if not intent.pick_up_items and not intent.drop_items:
        return NoItemChanges()

    champion = ctx.state.get_champion(player_name, champion_id)
    picked, dropped, failures = [], [], []

    # Drops first, to make room for pick-ups
    for item_id in intent.drop_items:
        item = next((i for i in champion.items if i.item_id == item_id), None)
        if item is None:
            failures.append(f"cannot drop {item_id}: not carried")
        elif item.stuck:
            failures.append(f"cannot drop {item.name}: it is stuck")
        else:
            champion.items.remove(item)
            tile.items.append(item)
            dropped.append(item_id)

    for item_id in intent.pick_up_items:
        item = next((i for i in tile.items if i.item_id == item_id), None)
        if item is None:
            failures.append(f"cannot pick up {item_id}: not on this tile")
        elif len(champion.items) >= ctx.settings.max_items:
            failures.append(f"cannot pick up {item.name}: inventory is full")
        else:
            tile.items.remove(item)
            champion.items.append(item)
            picked.append(item_id)

    if picked or dropped:
        ctx.note(
            player_name, LogEntryType.EVENT,
            f"champion{champion_id} picked up {picked or 'nothing'} and dropped {dropped or 'nothing'}",
        )
    return ItemsManaged(tuple(picked), tuple(dropped), tuple(failures))


def _claim_rejected(ctx, player_name: str, reason: str) -> ClaimRejected:
    logger.debug("Claim by %s rejected: %s", player_name, reason)
    ctx.note(player_name, LogEntryType.EVENT, f"Could not claim tile: {reason}")
    return ClaimRejected(reason)


def claim_tile(ctx: ResolutionContext, player_name: str, tile: Tile, intent: TileIntent) -> ClaimStep:
    conquer = intent.conquer_with_might or intent.conquer_with_fame
    if not intent.claim_tile and not conquer:
        return NotRequested()

    state = ctx.state
    player = state.get_player(player_name)
    if not tile.is_resource:
        return _claim_rejected(ctx, player_name, "only resource tiles can be claimed")
    if tile.claimed_by == player_name:
        return _claim_rejected(ctx, player_name, "tile is already yours")
    if len(state.claimed_tiles(player_name)) >= player.max_claims:
        return _claim_rejected(ctx, player_name, f"maximum of {player.max_claims} claims reached")

    if tile.claimed_by is None:
        tile.claimed_by = player_name
        ctx.note(player_name, LogEntryType.EVENT, f"Claimed {tile.describe()} at {tile.position}")
        return Claimed(tile.position)

    if not conquer:
        return _claim_rejected(ctx, player_name, f"tile is claimed by {tile.claimed_by}")
    if intent.conquer_with_might and intent.conquer_with_fame:
        return _claim_rejected(ctx, player_name, "conquer with might or with fame, not both")
    if state.opposing_champions_at(player_name, tile.position):
        return _claim_rejected(ctx, player_name, "other champions are present")
    if state.is_claim_protected(tile):
        return _claim_rejected(ctx, player_name, f"protected by an adjacent champion of {tile.claimed_by}")

    if intent.conquer_with_might:
        if player.might < 1:
            return _claim_rejected(ctx, player_name, "no might to spend on conquest")
        player.add_might(-1)
        paid_with = "might"
    else:
        if player.fame < 1:
            return _claim_rejected(ctx, player_name, "no fame to spend on conquest")
        player.add_fame(-1)
        paid_with = "fame"

    previous_owner = tile.claimed_by
    tile.claimed_by = player_name
    ctx.note(player_name, LogEntryType.EVENT, f"Conquered {tile.position} from {previous_owner} using {paid_with}")
    return Conquered(tile.position, previous_owner, paid_with)


# =============================================================================
# Pipeline
# =============================================================================

def resolve_arrival(
    ctx: ResolutionContext,
    player_name: str,
    champion_id: int,
    intent: TileIntent | None = None,
) -> Resolution[ArrivalReport]:
    """Run every arrival step for the champion's current tile, stopping early when one says so."""
    intent = intent or TileIntent()
    champion = ctx.state.get_champion(player_name, champion_id)
    tile = ctx.state.board.require_tile(champion.position)
    report = ArrivalReport(position=tile.position)

    def left_tile() -> bool:
        return champion.position != tile.position

    report.steps["exploration"] = explore(ctx, player_name, tile)

    combat = fight_champions(ctx, player_name, champion_id, tile)
    report.steps["champion_combat"] = combat
    if isinstance(combat, ChampionFought) and not combat.outcome.attacker_won:
        report.stopped_at = "champion_combat"
        return report

    monster = yield from face_monster(ctx, player_name, champion_id, tile, intent)
    report.steps["monster"] = monster
    lost = (
        isinstance(monster, ExistingMonsterFought) and not monster.outcome.won
    ) or (
        isinstance(monster, CardDrawn)
        and isinstance(monster.outcome, MonsterFought)
        and not monster.outcome.outcome.won
    )
    if lost or left_tile():
        report.stopped_at = "monster"
        return report

    report.steps["special_tile"] = use_special_tile(ctx, player_name, tile, intent)

    doomspire = enter_doomspire(ctx, player_name, champion_id, tile)
    report.steps["doomspire"] = doomspire
    if isinstance(doomspire, AlternativeVictory) or (isinstance(doomspire, DragonFight) and doomspire.won):
        report.stopped_at = "doomspire"
        report.game_over = True
        return report
    if isinstance(doomspire, DragonFight):
        report.stopped_at = "doomspire"
        return report

    report.steps["items"] = manage_items(ctx, player_name, champion_id, tile, intent)
    report.steps["claim"] = claim_tile(ctx, player_name, tile, intent)
    return report
