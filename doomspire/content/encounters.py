"""
Encounter Cards - Characters met on adventure tiles.

None of these are in play yet: every encounter is disabled, so no
encounter or follower card is ever shuffled into a deck.
"""

from ..engine_core.decks import EncounterDef, Theme


BEAST = Theme.BEAST
CAVE = Theme.CAVE
GROVE = Theme.GROVE


ENCOUNTER_CARDS: list[EncounterDef] = [
    # Tier 1
    EncounterDef(
        "angry-dog", "Angry dog", 1, BEAST,
        "Give it 2 food and the dog joins as a follower (+1 might). Otherwise you are chased home.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "old-beggar", "Old beggar", 1, BEAST,
        "Refuses to leave until you pay him 1 gold.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "priestess", "Priestess", 1, CAVE,
        "Heals you for free if you lose a fight against any wild creature.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "abandoned-mule", "Abandoned Mule", 1, GROVE,
        "Max movement 2 per action die. The mule can carry 2 items.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "fairy-godmother", "Fairy godmother", 1, GROVE,
        "Every time your champion supports another player in battle, you get 1 fame.",
        disabled=True, follower=True,
    ),

    # Tier 2
    EncounterDef(
        "proud-mercenary", "Proud Mercenary", 2, BEAST,
        "Each combat you may pay 3 gold and gain a temporary +2 might.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "brawler", "Brawler", 2, CAVE,
        "Each combat you may feed him 3 food and gain a temporary +2 might.",
        disabled=True, follower=True,
    ),
    EncounterDef(
        "witch", "Witch", 2, GROVE,
        "Rolls 1d3 after your dice in combat: -1, +1 or +2 might.",
        disabled=True, follower=True,
    ),

    # Tier 3
    EncounterDef(
        "wandering-monk", "Wandering monk", 3, BEAST,
        "You may take over another player's resource tile (not a home tile).",
        disabled=True,
    ),
]
