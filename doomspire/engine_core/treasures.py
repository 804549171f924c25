"""
Treasures - What happens when a treasure card is drawn.

Carriable treasures go into the champion's pack. A full pack turns
into a decision: drop a held item for the new one, or leave the new
one lying on the tile. A few treasures act right away instead.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from .context import ResolutionContext
from .decisions import DropItemChoice, OptionChoice, Resolution, YesNoChoice, ask, settle
from .decks import TreasureDef
from .log import LogEntryType
from .state import Item, Tile


BROKEN_SHIELD_ORE_REWARD = 1
BROKEN_SHIELD_ORE_COST = 2


@dataclass(frozen=True)
class TreasureResolved:
    treasure_id: str
    summary: str


def pick_up_item(
    ctx: ResolutionContext,
    player_name: str,
    champion_id: int,
    item: Item,
    tile: Tile,
) -> Resolution[str]:
    """Put an item in the champion's pack, asking what to drop when it is full."""
    champion = ctx.state.get_champion(player_name, champion_id)
    if len(champion.items) < ctx.settings.max_items:
        champion.items.append(item)
        return f"picked up {item.name}"

    droppable = tuple(i.item_id for i in champion.items if not i.stuck)
    if not droppable:
        tile.items.append(item)
        return f"could not carry {item.name}; left it on the tile"

    choice = yield from ask(player_name, DropItemChoice(
        prompt=f"Your champion can carry {ctx.settings.max_items} items. Drop one to take {item.name}?",
        new_item_id=item.item_id,
        new_item_name=item.name,
        held_item_ids=droppable,
    ))
    if choice == "leave":
        tile.items.append(item)
        return f"left {item.name} on the tile"

    dropped_id = choice.split(":", 1)[1]
    dropped = next(i for i in champion.items if i.item_id == dropped_id)
    champion.items.remove(dropped)
    tile.items.append(dropped)
    champion.items.append(item)
    return f"dropped {dropped.name} and picked up {item.name}"


def _broken_shield(ctx, treasure, player_name, champion_id, tile) -> Resolution[str]:
    player = ctx.state.get_player(player_name)
    if player.resources.ore < BROKEN_SHIELD_ORE_COST:
        player.resources.gain("ore", BROKEN_SHIELD_ORE_REWARD)
        return f"found a {treasure.name} and gained {BROKEN_SHIELD_ORE_REWARD} ore"

    choice = yield from ask(player_name, OptionChoice(
        prompt=f"Gain {BROKEN_SHIELD_ORE_REWARD} ore, or spend {BROKEN_SHIELD_ORE_COST} ore for +1 might?",
        topic=treasure.treasure_id,
        choices=("gain_ore", "gain_might"),
    ))
    if choice == "gain_might":
        player.resources.lose("ore", BROKEN_SHIELD_ORE_COST)
        player.add_might(1)
        return f"reforged the {treasure.name}: spent {BROKEN_SHIELD_ORE_COST} ore for +1 might"
    player.resources.gain("ore", BROKEN_SHIELD_ORE_REWARD)
    return f"salvaged the {treasure.name} for {BROKEN_SHIELD_ORE_REWARD} ore"


STUCK_RING = Item("stuck-ring", "Stuck Ring", stuck=True)
DRAGONSBANE_RING = Item("dragonsbane-ring", "Mysterious Ring (Dragon Slayer)", dragon_bonus=3)
HALF_SWORD = Item("half-sword", "Half Sword", combat_bonus=2)
CLOUDSLICER = Item("cloudslicer", "Cloudslicer", combat_bonus=4)


def _mysterious_ring(ctx, treasure, player_name, champion_id, tile) -> Resolution[str]:
    """
    Roll a d3:
    1 - the ring does nothing and cannot be dropped
    2 - swap places with any champion away from home, then the ring breaks
    3 - +3 might against the dragon
    """
    roll = ctx.dice.roll_d3()
    if roll == 1:
        summary = yield from pick_up_item(ctx, player_name, champion_id, replace(STUCK_RING), tile)
        return f"rolled 1, the ring is stuck: {summary}"
    if roll == 3:
        summary = yield from pick_up_item(ctx, player_name, champion_id, replace(DRAGONSBANE_RING), tile)
        return f"rolled 3, the ring bites dragons: {summary}"

    targets = {
        f"{c.player_name}:{c.champion_id}": c
        for c in ctx.state.all_champions()
        if not (c.player_name == player_name and c.champion_id == champion_id)
        and c.position != ctx.state.get_player(c.player_name).home_position
    }
    if not targets:
        return "rolled 2, but there was nobody to swap with; the ring breaks"

    choice = yield from ask(player_name, OptionChoice(
        prompt="Swap places with which champion?",
        topic="ring_swap",
        choices=tuple(targets),
    ))
    champion = ctx.state.get_champion(player_name, champion_id)
    target = targets[choice]
    champion.position, target.position = target.position, champion.position
    return (
        f"rolled 2, swapped places with {target.player_name}'s champion{target.champion_id}; "
        f"the ring breaks"
    )


def _sword_in_stone(ctx, treasure, player_name, champion_id, tile) -> Resolution[str]:
    """Try to pull the sword: d3 of 1 is half a sword, 2 resists, 3 is Cloudslicer."""
    attempt = yield from ask(player_name, YesNoChoice(
        prompt=f"Try to pull the {treasure.name}?",
        topic=treasure.treasure_id,
    ))
    if not attempt:
        return "left the sword in its stone"

    roll = ctx.dice.roll_d3()
    if roll == 2:
        return "rolled 2, the sword resists and the magic fades"
    reward = HALF_SWORD if roll == 1 else CLOUDSLICER
    summary = yield from pick_up_item(ctx, player_name, champion_id, replace(reward), tile)
    return f"rolled {roll}: {summary}"


def _announce(ctx, treasure, player_name, champion_id, tile) -> str:
    return f"found the {treasure.name}: {treasure.description}"


def _carriable(ctx, treasure, player_name, champion_id, tile) -> Resolution[str]:
    return (yield from pick_up_item(ctx, player_name, champion_id, treasure.to_item(), tile))


_HANDLERS = {
    "broken-shield": _broken_shield,
    "mysterious-ring": _mysterious_ring,
    "sword-in-stone": _sword_in_stone,
}


def resolve_treasure(
    ctx: ResolutionContext,
    treasure: TreasureDef,
    player_name: str,
    champion_id: int,
    tile: Tile,
) -> Resolution[TreasureResolved]:
    handler = _HANDLERS.get(treasure.treasure_id)
    if handler is None:
        handler = _carriable if treasure.carriable else _announce
    summary = yield from settle(handler(ctx, treasure, player_name, champion_id, tile))
    ctx.note(player_name, LogEntryType.EVENT, f"Treasure {treasure.name}: {summary}")
    return TreasureResolved(treasure.treasure_id, summary)
