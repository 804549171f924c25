"""
Events - One handler per event card.

Each handler returns a one-line summary for the game log. Handlers
that need the drawing player (or every player at once) to decide
something are resolution generators; the rest return directly.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import logging

from .combat import resolve_monster_combat
from .context import ResolutionContext
from .decisions import (
    DecisionRequest,
    MarketDayChoice,
    OptionChoice,
    Resolution,
    TargetPlayerChoice,
    YesNoChoice,
    ask,
    ask_all,
    settle,
)
from .decks import EventDef
from .errors import UnknownCardError
from .log import LogEntryType
from .movement import adjacent_zones
from .state import Item, Monster, OceanZone, Resources, Tile, TileType
from .treasures import pick_up_item


logger = logging.getLogger(__name__)


BANDIT = Monster(
    monster_id="bandit-thug",
    name="Bandit",
    tier=1,
    might=3,
    fame=1,
    resources=Resources(gold=2),
)

RUNED_DAGGER = Item(item_id="runed-dagger", name="Runed Dagger", combat_bonus=1)

CURSE_GOLD_COST = 2
CURSE_MIGHT_LOSS = 2


@dataclass(frozen=True)
class EventResolved:
    event_id: str
    summary: str


# =============================================================================
# Tier 1
# =============================================================================

def _hungry_pests(ctx, player_name, champion_id, tile) -> Resolution[str]:
    candidates = tuple(p.name for p in ctx.state.players if p.name != player_name)
    if not candidates:
        return "no other player to pester"
    target = yield from ask(player_name, TargetPlayerChoice(
        prompt="Choose a player who loses 1 food to the rats",
        candidates=candidates,
    ))
    lost = ctx.state.get_player(target).resources.lose("food", 1)
    return f"{target} lost {lost} food to hungry pests"


def _market_day(ctx, player_name, champion_id, tile) -> Resolution[str]:
    declared = yield from ask(player_name, YesNoChoice(
        prompt="Declare market day? Every player must send a champion to the trader or pay 1 gold.",
        topic="market-day",
    ))
    if not declared:
        return "decided it is not market day"

    traders = ctx.state.board.find(lambda t: t.tile_type == TileType.TRADER)
    if not traders:
        logger.debug("Market day declared by %s with no trader tile on the board", player_name)
        return "declared market day, but there is no trader on the board"
    trader = traders[0]

    requests = []
    automatic: dict[str, str] = {}
    for player in ctx.state.players:
        away = tuple(c.champion_id for c in player.champions if c.position != trader.position)
        if player.champions and not away:
            continue
        decision = MarketDayChoice(
            prompt="Market day! Send a champion to the trader or pay 1 gold in tax.",
            champion_ids=away,
            can_pay=player.resources.gold >= 1,
        )
        options = decision.options()
        if not options:
            continue
        if len(options) == 1:
            automatic[player.name] = options[0]
        else:
            requests.append(DecisionRequest(player.name, decision))

    answers = yield from ask_all(requests)
    answers.update(automatic)

    outcomes = []
    # Seating order, whatever order the answers came back in
    for player in ctx.state.players:
        answer = answers.get(player.name)
        if answer is None:
            continue
        if answer == "pay-gold":
            player.resources.lose("gold", 1)
            outcomes.append(f"{player.name} paid 1 gold")
        else:
            champion_id_sent = int(answer.split("-", 1)[1])
            ctx.state.move_champion(player.name, champion_id_sent, trader.position)
            outcomes.append(f"{player.name} sent champion{champion_id_sent} to the trader")
    return "market day: " + ("; ".join(outcomes) if outcomes else "nobody was affected")


def _thug_ambush(ctx, player_name, champion_id, tile) -> str:
    roll = ctx.dice.roll_d3()
    player = ctx.state.get_player(player_name)
    if roll == 1:
        lost = player.resources.lose("gold", 1)
        return f"rolled {roll}: thugs stole {lost} gold"
    if roll == 2:
        outcome = resolve_monster_combat(ctx.state, ctx.dice, player_name, champion_id, BANDIT)
        ctx.note(player_name, LogEntryType.COMBAT, outcome.describe())
        return f"rolled {roll}: fought a bandit and {'won' if outcome.won else 'lost'}"
    player.add_fame(1)
    return f"rolled {roll}: scared the thugs off and gained 1 fame"


def _landslide(ctx, player_name, champion_id, tile) -> str:
    roll = 1 + ctx.dice.roll_d3()
    state = ctx.state
    player = state.get_player(player_name)
    champion = player.get_champion(champion_id)

    if roll == 2:
        state.send_home(player_name, champion_id)
        return f"rolled {roll}: fled home"

    if roll == 3:
        refuges = [
            t for t in state.claimed_tiles(player_name)
            if not state.champions_at(t.position)
        ]
        if not refuges:
            state.send_home(player_name, champion_id)
            return f"rolled {roll}: no free claimed tile, fled home"
        nearest = min(t.position.manhattan(champion.position) for t in refuges)
        closest = [t for t in refuges if t.position.manhattan(champion.position) == nearest]
        refuge = ctx.dice.choice(closest)
        state.move_champion(player_name, champion_id, refuge.position)
        return f"rolled {roll}: fled to claimed tile {refuge.position}"

    player.resources.gain("ore", 2)
    return f"rolled {roll}: survived and found 2 ore"


# =============================================================================
# Tier 2
# =============================================================================

def _add_oasis_tokens(ctx) -> int:
    oases = ctx.state.board.find(lambda t: t.tile_type == TileType.OASIS)
    for oasis in oases:
        oasis.adventure_tokens += 1
    return len(oases)


def _sudden_storm(ctx, player_name, champion_id, tile) -> str:
    moved = 0
    for player in ctx.state.players:
        for boat in player.boats:
            boat.zone = ctx.dice.choice(adjacent_zones(boat.zone))
            moved += 1
    oases = _add_oasis_tokens(ctx)
    return f"storm pushed {moved} boat(s) to adjacent seas and refilled {oases} oasis tile(s)"


def _druid_rampage(ctx, player_name, champion_id, tile) -> Resolution[str]:
    picked = yield from pick_up_item(ctx, player_name, champion_id, replace(RUNED_DAGGER), tile)
    bear = ctx.content.monster("bear").instantiate()
    tile.monster = bear
    return f"a druid handed over a runed dagger ({picked}) and turned into a {bear.name}"


def _riches_for_all(ctx, player_name, champion_id, tile) -> str:
    for player in ctx.state.players:
        player.resources.add(Resources(food=1, wood=1, ore=1, gold=1))
    oases = _add_oasis_tokens(ctx)
    return f"every player gained 1 of each resource; {oases} oasis tile(s) refilled"


# =============================================================================
# Tier 3
# =============================================================================

def _curse_of_the_earth(ctx, player_name, champion_id, tile) -> Resolution[str]:
    player = ctx.state.get_player(player_name)
    if player.resources.gold < CURSE_GOLD_COST:
        return f"could not afford the curse ({CURSE_GOLD_COST} gold)"
    curse = yield from ask(player_name, YesNoChoice(
        prompt=f"Pay {CURSE_GOLD_COST} gold to make every player lose {CURSE_MIGHT_LOSS} might?",
        topic="curse-of-the-earth",
    ))
    if not curse:
        return "declined to curse the lands"
    player.resources.lose("gold", CURSE_GOLD_COST)
    for p in ctx.state.players:
        p.add_might(-min(CURSE_MIGHT_LOSS, p.might))
    return f"paid {CURSE_GOLD_COST} gold; every player lost up to {CURSE_MIGHT_LOSS} might"


def _thieving_crows(ctx, player_name, champion_id, tile) -> str:
    thefts = []
    for player in ctx.state.players:
        resource, amount = player.resources.largest()
        if amount > 0:
            player.resources.lose(resource, amount)
            thefts.append(f"{player.name} lost {amount} {resource}")
    return "crows stole: " + (", ".join(thefts) if thefts else "nothing")


def _dragon_raid(ctx, player_name, champion_id, tile) -> str:
    raids = []
    for player in ctx.state.players:
        roll = ctx.dice.roll_d3()
        claims = [
            t for t in ctx.state.claimed_tiles(player.name)
            if t.tile_type != TileType.HOME
        ]
        for lost in ctx.dice.sample(claims, roll):
            lost.claimed_by = None
            raids.append(f"{player.name} lost {lost.position}")
    return "dragon raid: " + (", ".join(raids) if raids else "no claims lost")


def _sea_monsters(ctx, player_name, champion_id, tile) -> Resolution[str]:
    zone_id = yield from ask(player_name, OptionChoice(
        prompt="Choose an ocean zone for the sea monsters to invade",
        topic="sea-monsters",
        choices=tuple(z.value for z in OceanZone),
    ))
    zone = OceanZone(zone_id)

    requests = []
    automatic = {}
    for player in ctx.state.players:
        if not any(b.zone == zone for b in player.boats):
            continue
        choices = ("fight", "flee") if player.fame > 0 else ("fight",)
        if len(choices) == 1:
            automatic[player.name] = choices[0]
        else:
            requests.append(DecisionRequest(player.name, OptionChoice(
                prompt="Sea monsters! Fight to the end (+2 fame, lose the boat) or flee (-1 fame)?",
                topic="sea-monsters-captain",
                choices=choices,
            )))

    answers = yield from ask_all(requests)
    answers.update(automatic)

    outcomes = []
    for player in ctx.state.players:
        answer = answers.get(player.name)
        if answer is None:
            continue
        boats = [b for b in player.boats if b.zone == zone]
        if answer == "fight":
            player.add_fame(2 * len(boats))
            player.boats = [b for b in player.boats if b.zone != zone]
            outcomes.append(f"{player.name}'s captain fought and the boat was lost")
        else:
            player.add_fame(-len(boats))
            for boat in boats:
                boat.zone = ctx.dice.choice(adjacent_zones(zone))
            outcomes.append(f"{player.name}'s captain fled")
    return f"sea monsters in {zone.value}: " + ("; ".join(outcomes) if outcomes else "no boats there")


_HANDLERS = {
    "hungry-pests": _hungry_pests,
    "market-day": _market_day,
    "thug-ambush": _thug_ambush,
    "landslide": _landslide,
    "sudden-storm": _sudden_storm,
    "druid-rampage": _druid_rampage,
    "riches-for-all": _riches_for_all,
    "curse-of-the-earth": _curse_of_the_earth,
    "thieving-crows": _thieving_crows,
    "dragon-raid": _dragon_raid,
    "sea-monsters": _sea_monsters,
}


def resolve_event(
    ctx: ResolutionContext,
    event: EventDef,
    player_name: str,
    champion_id: int,
    tile: Tile,
) -> Resolution[EventResolved]:
    handler = _HANDLERS.get(event.event_id)
    if handler is None:
        raise UnknownCardError(event.event_id)
    summary = yield from settle(handler(ctx, player_name, champion_id, tile))
    ctx.note(player_name, LogEntryType.EVENT, f"{event.name}: {summary}")
    return EventResolved(event.event_id, summary)
