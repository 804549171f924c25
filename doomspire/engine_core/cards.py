"""
Card Dispatcher - Route a drawn adventure card to its handler.

- Monster: placed on the tile and fought immediately
- Event: resolved by its per-event handler (may ask for decisions)
- Treasure: picked up or applied (may ask what to drop)
- Encounter / follower: no rules yet, logged as having no effect
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from .combat import MonsterCombatOutcome, resolve_monster_combat
from .context import ResolutionContext
from .decisions import Resolution, settle
from .decks import Card, CardType
from .events import EventResolved, resolve_event
from .log import LogEntryType
from .state import Tile
from .treasures import TreasureResolved, resolve_treasure


@dataclass(frozen=True)
class MonsterFought:
    card: Card
    outcome: MonsterCombatOutcome


@dataclass(frozen=True)
class NoEffect:
    card: Card
    reason: str


CardOutcome = Union[MonsterFought, EventResolved, TreasureResolved, NoEffect]


def _monster(ctx, card, player_name, champion_id, tile) -> MonsterFought:
    monster = ctx.content.monster(card.card_id).instantiate()
    tile.monster = monster
    ctx.note(player_name, LogEntryType.COMBAT, f"A {monster.name} (might {monster.might}) appears at {tile.position}")
    outcome = resolve_monster_combat(ctx.state, ctx.dice, player_name, champion_id, monster, tile)
    ctx.note(player_name, LogEntryType.COMBAT, outcome.describe())
    return MonsterFought(card, outcome)


def _event(ctx, card, player_name, champion_id, tile) -> Resolution[EventResolved]:
    event = ctx.content.event(card.card_id)
    return (yield from resolve_event(ctx, event, player_name, champion_id, tile))


def _treasure(ctx, card, player_name, champion_id, tile) -> Resolution[TreasureResolved]:
    treasure = ctx.content.treasure(card.card_id)
    return (yield from resolve_treasure(ctx, treasure, player_name, champion_id, tile))


def _no_effect(ctx, card, player_name, champion_id, tile) -> NoEffect:
    ctx.note(player_name, LogEntryType.EVENT, f"Drew {card.card_type.value} card {card.card_id}: no effect")
    return NoEffect(card, f"{card.card_type.value} cards have no effect")


def _get_handler(card_type: CardType):
    handlers = {
        CardType.MONSTER: _monster,
        CardType.EVENT: _event,
        CardType.TREASURE: _treasure,
        CardType.ENCOUNTER: _no_effect,
        CardType.FOLLOWER: _no_effect,
    }
    return handlers[card_type]


def dispatch_card(
    ctx: ResolutionContext,
    card: Card,
    player_name: str,
    champion_id: int,
    tile: Tile,
) -> Resolution[CardOutcome]:
    """Resolve a drawn card for the champion standing on `tile`."""
    handler = _get_handler(card.card_type)
    return (yield from settle(handler(ctx, card, player_name, champion_id, tile)))
