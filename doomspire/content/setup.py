"""
Game setup - Builds a fresh game from a list of player names.

Each lord starts in a home corner with one champion on the home tile
and one boat in the neighbouring ocean zone. Seating order follows the
corners: top left, top right, bottom left, bottom right.
"""

from __future__ import annotations
import logging

from ..engine_core.decks import ContentTables, TieredDecks
from ..engine_core.dice import DiceRoller
from ..engine_core.settings import GameSettings, DEFAULT_SETTINGS
from ..engine_core.state import (
    Boat,
    Champion,
    GamePhase,
    GameState,
    OceanZone,
    Player,
    Position,
    Resources,
)
from .encounters import ENCOUNTER_CARDS
from .events import EVENT_CARDS
from .monsters import MONSTER_CARDS
from .tiles import BoardBuilder
from .treasures import TREASURE_CARDS


logger = logging.getLogger(__name__)

MAX_PLAYERS = 4

HOME_POSITIONS = [Position(0, 0), Position(0, 7), Position(7, 0), Position(7, 7)]
HOME_ZONES = [OceanZone.NW, OceanZone.NE, OceanZone.SW, OceanZone.SE]
PLAYER_COLORS = ["#e74c3c", "#3498db", "#2ecc71", "#f39c12"]


def default_content() -> ContentTables:
    """Lookup tables for every card in the box."""
    return ContentTables(
        monsters={m.monster_id: m for m in MONSTER_CARDS},
        events={e.event_id: e for e in EVENT_CARDS},
        treasures={t.treasure_id: t for t in TREASURE_CARDS},
        encounters={enc.encounter_id: enc for enc in ENCOUNTER_CARDS},
    )


def build_decks(dice: DiceRoller, content: ContentTables | None = None) -> TieredDecks:
    """Shuffle every enabled card into three piles per tier."""
    content = content or default_content()
    return TieredDecks.from_cards(content.build_cards(), dice)


def create_player(index: int, name: str, settings: GameSettings = DEFAULT_SETTINGS) -> Player:
    home = HOME_POSITIONS[index]
    return Player(
        name=name,
        color=PLAYER_COLORS[index],
        home_position=home,
        fame=settings.starting_fame,
        might=settings.starting_might,
        resources=Resources.from_dict(settings.starting_resources),
        max_claims=settings.max_claims,
        champions=[Champion(champion_id=1, player_name=name, position=home)],
        boats=[Boat(boat_id=1, player_name=name, zone=HOME_ZONES[index])],
    )


def create_game(
    player_names: list[str],
    seed: int | None = None,
    settings: GameSettings = DEFAULT_SETTINGS,
    dice: DiceRoller | None = None,
) -> GameState:
    """
    Create a game in the setup phase.

    Raises ValueError for an empty or oversized table, or duplicate names.
    """
    if not player_names:
        raise ValueError("A game needs at least one player")
    if len(player_names) > MAX_PLAYERS:
        raise ValueError(f"At most {MAX_PLAYERS} players can play, got {len(player_names)}")
    if len(set(player_names)) != len(player_names):
        raise ValueError("Player names must be unique")

    dice = dice or DiceRoller(seed)
    board = BoardBuilder(dice, adventure_tokens=settings.adventure_tokens).build(settings.board_size)
    players = [create_player(i, name, settings) for i, name in enumerate(player_names)]

    logger.info("Created game for %s (seed=%s)", ", ".join(player_names), seed)
    return GameState(board=board, players=players, phase=GamePhase.SETUP)
