"""
Monster Cards - Every monster in the adventure decks.

Monster structure:
- Tier (1-3) and theme (beast, cave, grove)
- Might to beat, fame and resources for the winner
- Count: copies in the deck
- Beast flag (some items and events care about beasts)
"""

from ..engine_core.decks import MonsterDef, Theme


BEAST = Theme.BEAST
CAVE = Theme.CAVE
GROVE = Theme.GROVE


MONSTER_CARDS: list[MonsterDef] = [
    # Tier 1
    MonsterDef("wolf", "Wolf", 1, BEAST, might=2, fame=1, resources={"food": 2}, count=2, is_beast=True),
    MonsterDef("boar", "Boar", 1, BEAST, might=2, fame=1, resources={"food": 2}, count=2, is_beast=True),
    MonsterDef("bandit", "Bandit", 1, BEAST, might=3, fame=1, resources={"gold": 2}, count=2),
    MonsterDef("dwerm", "Dwerm", 1, CAVE, might=2, fame=1, resources={"ore": 2}, count=2),
    MonsterDef("rock-golem", "Rock Golem", 1, CAVE, might=3, fame=1, resources={"ore": 2}, count=2),
    MonsterDef("troll-spawn", "Troll Spawn", 1, CAVE, might=5, fame=2, resources={"ore": 2, "gold": 2}, count=2),
    MonsterDef("sprout", "Sprout", 1, GROVE, might=2, fame=1, resources={"wood": 2}, count=2),
    MonsterDef("fairy", "Fairy", 1, GROVE, might=2, fame=1, resources={"wood": 2}, count=2),
    MonsterDef("entling", "Entling", 1, GROVE, might=4, fame=1, resources={"wood": 3}, count=2),

    # Tier 2
    MonsterDef("bear", "Bear", 2, BEAST, might=5, fame=2, resources={"food": 3}, count=2, is_beast=True),
    MonsterDef("assassin", "Assassin", 2, BEAST, might=5, fame=2, resources={"gold": 3}, count=2),
    MonsterDef("iron-golem", "Iron Golem", 2, CAVE, might=5, fame=2, resources={"ore": 3}, count=2),
    MonsterDef("troll", "Troll", 2, CAVE, might=7, fame=3, resources={"ore": 3, "gold": 3}, count=1),
    MonsterDef("elven-huntress", "Elven Huntress", 2, GROVE, might=4, fame=1, resources={"wood": 3}, count=2),
    MonsterDef("ent", "Ent", 2, GROVE, might=6, fame=2, resources={"wood": 4}, count=1),

    # Tier 3
    MonsterDef("wyrm", "Wyrm", 3, BEAST, might=7, fame=3, resources={"food": 3, "gold": 2}, is_beast=True),
    MonsterDef("fallen-knight", "Fallen Knight", 3, BEAST, might=8, fame=3, resources={"ore": 3, "gold": 2}),
    MonsterDef("demon-core", "Demon Core", 3, CAVE, might=8, fame=3, resources={"ore": 2, "gold": 3}),
    MonsterDef("troll-lord", "Troll Lord", 3, CAVE, might=10, fame=4, resources={"ore": 3, "gold": 3}),
    MonsterDef(
        "three-eyed-ape", "Three-eyed Ape", 3, GROVE,
        might=7, fame=3, resources={"food": 3, "wood": 3}, is_beast=True,
    ),
    MonsterDef("ancient", "Ancient", 3, GROVE, might=9, fame=3, resources={"wood": 4, "ore": 3}),
]
