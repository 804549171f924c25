"""
Game settings - rule constants shared by every resolver.

Kept in one dataclass so tests and the API can run variant games
(shorter games, lower thresholds) without touching module globals.
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class GameSettings:
    """Rule constants for one game."""
    board_size: int = 8

    # Victory
    victory_fame_threshold: int = 10
    victory_gold_threshold: int = 10
    victory_starred_tiles_threshold: int = 3

    # Fame
    exploration_fame: int = 1
    champion_combat_fame: int = 1

    # Dragon might is base + one d3 per encounter
    dragon_base_might: int = 6

    # Player limits
    max_claims: int = 10
    max_items: int = 2
    max_rounds: int = 100

    # Starting stockpile
    starting_fame: int = 0
    starting_might: int = 0
    starting_resources: dict[str, int] = field(
        default_factory=lambda: {"food": 1, "wood": 1, "ore": 0, "gold": 0}
    )

    # Special tiles
    mercenary_gold_cost: int = 3
    temple_fame_cost: int = 2

    # Adventure tiles start with this many tokens
    adventure_tokens: int = 2


DEFAULT_SETTINGS = GameSettings()
