"""
Treasure Cards - Every treasure in the adventure decks.

Carriable treasures become items in a champion's pack; the bonus
fields feed straight into combat. Non-carriable treasures act on the
spot (see engine_core.treasures).
"""

from ..engine_core.decks import Theme, TreasureDef


BEAST = Theme.BEAST
CAVE = Theme.CAVE
GROVE = Theme.GROVE


TREASURE_CARDS: list[TreasureDef] = [
    # Tier 1
    TreasureDef(
        "broken-shield", "Broken Shield", 1, BEAST,
        "Choose one: gain +1 ore, or spend 2 ore to gain +1 might.",
        count=2, carriable=False,
    ),
    TreasureDef(
        "rusty-sword", "Rusty sword", 1, GROVE,
        "Gain +2 might for this battle. This item breaks after one use.",
        count=2, combat_bonus=2, breaks=True,
    ),
    TreasureDef(
        "trollsbane", "Trollsbane", 1, CAVE,
        "A cursed axe, forged with fury towards trolls and their ilk.",
    ),
    TreasureDef(
        "mysterious-ring", "Mysterious Ring", 1, CAVE,
        "Roll 1d3: (1) the ring is stuck on your champion, (2) swap location "
        "with any champion and the ring breaks, (3) +3 might against dragons.",
    ),

    # Tier 2
    TreasureDef(
        "long-sword", "Löng Swörd", 2, CAVE,
        "It's a löng swörd. Gives +2 might.",
        count=2, combat_bonus=2,
    ),
    TreasureDef(
        "porcupine", "Porcupine", 2, GROVE,
        "If the opponent has more might, this shield grants +2 might.",
        underdog_bonus=2,
    ),
    TreasureDef(
        "sword-in-stone", "Sword in a stone", 2, BEAST,
        "Attempt to pull the sword! Roll 1d3: (1) half a sword, +2 might, "
        "(2) it resists, (3) Cloudslicer, +4 might.",
        carriable=False,
    ),
    TreasureDef(
        "staff-of-protection", "Staff of protection", 2, CAVE,
        "A dying wizard leans on an interesting looking staff.",
    ),
]
