"""
Victory - Pure checks for the four ways to win.

Nothing here mutates state; callers decide what to do with the result.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .settings import GameSettings, DEFAULT_SETTINGS
from .state import GameState, TileType


class VictoryType(Enum):
    FAME = "Fame Victory"
    GOLD = "Gold Victory"
    ECONOMIC = "Economic Victory"
    COMBAT = "Combat Victory"


@dataclass(frozen=True)
class Victory:
    player_name: str
    victory_type: VictoryType


def alternative_victory(
    state: GameState,
    player_name: str,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> VictoryType | None:
    """Fame, gold and starred-tile thresholds, checked in that order."""
    player = state.get_player(player_name)
    if player.fame >= settings.victory_fame_threshold:
        return VictoryType.FAME
    if player.resources.gold >= settings.victory_gold_threshold:
        return VictoryType.GOLD
    if state.starred_tile_count(player_name) >= settings.victory_starred_tiles_threshold:
        return VictoryType.ECONOMIC
    return None


def check_victory(state: GameState, settings: GameSettings = DEFAULT_SETTINGS) -> Victory | None:
    """
    Report the winner, if any.

    Slaying the dragon wins outright. The threshold victories only count
    for a player who has a champion standing on the doomspire.
    """
    if state.dragon_slayer is not None:
        return Victory(state.dragon_slayer, VictoryType.COMBAT)

    doomspire = [t.position for t in state.board.find(lambda t: t.tile_type == TileType.DOOMSPIRE)]
    for player in state.players:
        if not any(c.position in doomspire for c in player.champions):
            continue
        victory_type = alternative_victory(state, player.name, settings)
        if victory_type is not None:
            return Victory(player.name, victory_type)
    return None
