"""
Event Cards - Every event in the adventure decks.

Disabled events are kept for reference but never shuffled into a deck;
their rules have no handler in engine_core.events.
"""

from ..engine_core.decks import EventDef, Theme


BEAST = Theme.BEAST
CAVE = Theme.CAVE
GROVE = Theme.GROVE


EVENT_CARDS: list[EventDef] = [
    # Tier 1
    EventDef(
        "hungry-pests", "Hungry pests", 1, BEAST,
        "Choose 1 player who loses 1 food to a mischief of starved rats.",
        count=2,
    ),
    EventDef(
        "market-day", "Market day", 1, BEAST,
        "Every player must send 1 champion to the trader, or refuse and pay 1 gold in tax.",
        count=2,
    ),
    EventDef(
        "thug-ambush", "Thug Ambush", 1, GROVE,
        "Roll 1d3: (1) they steal 1 gold, (2) fight a bandit with might 3, "
        "(3) you scare them off and gain 1 fame.",
        count=2,
    ),
    EventDef(
        "landslide", "Landslide", 1, CAVE,
        "Roll 1+d3: (1) flee to your home tile, (2) flee to your nearest claimed tile, "
        "(3) miracle! You survive and find +2 ore.",
        count=2,
    ),
    EventDef(
        "temple-trial", "Temple Trial", 1, BEAST,
        "Make an offering to any player for 1 fame, or take a resource from one and lose 1 fame.",
        count=2, disabled=True,
    ),

    # Tier 2
    EventDef(
        "sudden-storm", "Sudden storm", 2, BEAST,
        "All boats move into an adjacent sea. All oases gain +1 mystery card.",
        count=2,
    ),
    EventDef(
        "hornet-swarm", "Hornet swarm", 2, GROVE,
        "Roll 2d3 to flee the swarm in a direction chosen by the player to your right.",
        count=2, disabled=True,
    ),
    EventDef(
        "druid-rampage", "Druid rampage", 2, GROVE,
        "A wild-eyed druid hands you a runed dagger, +1 might. Once you leave, he turns into a bear.",
        count=2,
    ),
    EventDef(
        "dragon-hunger", "Dragon hunger", 2, BEAST,
        "Each lord counts their claimed tiles and is rewarded for 3, 5 or 7 of them.",
        disabled=True,
    ),
    EventDef(
        "blessing-of-the-lonesome", "Blessing of the lonesome", 2, BEAST,
        "Lords with a lone champion gain another; the food tax is doubled next turn.",
        disabled=True,
    ),
    EventDef(
        "riches-for-all", "Riches for all!", 2, CAVE,
        "All players collect 1 food, wood, ore and gold. All oases gain +1 mystery card.",
        count=2,
    ),

    # Tier 3
    EventDef(
        "curse-of-the-earth", "Curse of the Earth", 3, CAVE,
        "You may pay the Bogwitch 2 gold to curse the lands: all players lose 2 might.",
    ),
    EventDef(
        "thieving-crows", "Thieving crows", 3, GROVE,
        "A murder of thieving crows strikes: every player loses all of their most plentiful resource.",
    ),
    EventDef(
        "dragon-raid", "Dragon raid", 3, BEAST,
        "Each player loses 1 claimed tile. Home tiles are never raided.",
    ),
    EventDef(
        "sea-monsters", "Sea monsters", 3, BEAST,
        "Sea monsters invade one ocean zone. Each boat owner there fights (+2 fame, lose the boat) "
        "or flees (-1 fame, the boat moves one step).",
    ),
]
