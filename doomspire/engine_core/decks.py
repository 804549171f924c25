"""
Decks - Adventure cards, three face-down piles per tier.

A player landing on an adventure tile picks which pile of the tile's
tier to draw from; the theme on top of each pile is public. When all
three piles of a tier run dry, every card of that tier is gathered,
shuffled and dealt out again.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Iterable

from .dice import DiceRoller
from .errors import ContractError, UnknownCardError
from .state import Item, Monster, Resources


logger = logging.getLogger(__name__)

PILES_PER_TIER = 3


class CardType(Enum):
    MONSTER = "monster"
    EVENT = "event"
    TREASURE = "treasure"
    ENCOUNTER = "encounter"
    FOLLOWER = "follower"


class Theme(Enum):
    BEAST = "beast"
    CAVE = "cave"
    GROVE = "grove"


@dataclass(frozen=True)
class Card:
    """One physical adventure card. The payload is looked up by card_id."""
    card_id: str
    card_type: CardType
    tier: int
    theme: Theme


# =============================================================================
# Card definitions (static content, looked up by id)
# =============================================================================

@dataclass(frozen=True)
class MonsterDef:
    monster_id: str
    name: str
    tier: int
    theme: Theme
    might: int
    fame: int
    resources: dict[str, int] = field(default_factory=dict)
    count: int = 1
    is_beast: bool = False

    def instantiate(self) -> Monster:
        return Monster(
            monster_id=self.monster_id,
            name=self.name,
            tier=self.tier,
            might=self.might,
            fame=self.fame,
            resources=Resources.from_dict(self.resources),
            is_beast=self.is_beast,
        )


@dataclass(frozen=True)
class EventDef:
    event_id: str
    name: str
    tier: int
    theme: Theme
    description: str
    count: int = 1
    disabled: bool = False


@dataclass(frozen=True)
class TreasureDef:
    treasure_id: str
    name: str
    tier: int
    theme: Theme
    description: str
    count: int = 1
    carriable: bool = True
    combat_bonus: int = 0
    dragon_bonus: int = 0
    underdog_bonus: int = 0
    breaks: bool = False

    def to_item(self) -> Item:
        return Item(
            item_id=self.treasure_id,
            name=self.name,
            combat_bonus=self.combat_bonus,
            dragon_bonus=self.dragon_bonus,
            underdog_bonus=self.underdog_bonus,
            breaks=self.breaks,
        )


@dataclass(frozen=True)
class EncounterDef:
    encounter_id: str
    name: str
    tier: int
    theme: Theme
    description: str
    count: int = 1
    disabled: bool = False
    follower: bool = False


@dataclass
class ContentTables:
    """Read-only lookup tables for every adventure card."""
    monsters: dict[str, MonsterDef] = field(default_factory=dict)
    events: dict[str, EventDef] = field(default_factory=dict)
    treasures: dict[str, TreasureDef] = field(default_factory=dict)
    encounters: dict[str, EncounterDef] = field(default_factory=dict)

    def monster(self, monster_id: str) -> MonsterDef:
        if monster_id not in self.monsters:
            raise UnknownCardError(monster_id)
        return self.monsters[monster_id]

    def event(self, event_id: str) -> EventDef:
        if event_id not in self.events:
            raise UnknownCardError(event_id)
        return self.events[event_id]

    def treasure(self, treasure_id: str) -> TreasureDef:
        if treasure_id not in self.treasures:
            raise UnknownCardError(treasure_id)
        return self.treasures[treasure_id]

    def encounter(self, encounter_id: str) -> EncounterDef:
        if encounter_id not in self.encounters:
            raise UnknownCardError(encounter_id)
        return self.encounters[encounter_id]

    def build_cards(self) -> list[Card]:
        """One Card per physical copy, skipping disabled definitions."""
        cards = []
        for m in self.monsters.values():
            cards += [Card(m.monster_id, CardType.MONSTER, m.tier, m.theme)] * m.count
        for e in self.events.values():
            if not e.disabled:
                cards += [Card(e.event_id, CardType.EVENT, e.tier, e.theme)] * e.count
        for t in self.treasures.values():
            cards += [Card(t.treasure_id, CardType.TREASURE, t.tier, t.theme)] * t.count
        for enc in self.encounters.values():
            if not enc.disabled:
                card_type = CardType.FOLLOWER if enc.follower else CardType.ENCOUNTER
                cards += [Card(enc.encounter_id, card_type, enc.tier, enc.theme)] * enc.count
        return cards


class TieredDecks:
    """Three piles per tier. Top of a pile is the end of its list."""

    def __init__(self, cards: Iterable[Card], dice: DiceRoller):
        self.dice = dice
        self._all_cards: dict[int, list[Card]] = {}
        for card in cards:
            self._all_cards.setdefault(card.tier, []).append(card)
        self._piles: dict[int, list[list[Card]]] = {}
        for tier in self._all_cards:
            self._deal(tier)

    @classmethod
    def from_cards(cls, cards: Iterable[Card], dice: DiceRoller) -> TieredDecks:
        return cls(cards, dice)

    @property
    def tiers(self) -> list[int]:
        return sorted(self._all_cards)

    def _deal(self, tier: int):
        cards = self.dice.shuffle(list(self._all_cards[tier]))
        piles: list[list[Card]] = [[] for _ in range(PILES_PER_TIER)]
        for index, card in enumerate(cards):
            piles[index % PILES_PER_TIER].append(card)
        self._piles[tier] = piles

    def draw(self, tier: int, pile: int = 1) -> Card:
        """
        Draw the top card of a pile (1-3) of the given tier.

        An empty pile falls through to the next non-empty pile of the
        same tier; a fully empty tier is reshuffled first.
        """
        if tier not in self._piles:
            raise ContractError(f"No adventure cards for tier {tier}")
        if not 1 <= pile <= PILES_PER_TIER:
            raise ContractError(f"Pile must be between 1 and {PILES_PER_TIER}, got {pile}")

        piles = self._piles[tier]
        if not any(piles):
            logger.debug("Tier %d piles exhausted, reshuffling", tier)
            self._deal(tier)
            piles = self._piles[tier]

        for offset in range(PILES_PER_TIER):
            candidate = piles[(pile - 1 + offset) % PILES_PER_TIER]
            if candidate:
                return candidate.pop()
        raise ContractError(f"Tier {tier} has no cards even after reshuffling")

    def pile_sizes(self, tier: int) -> list[int]:
        return [len(p) for p in self._piles.get(tier, [])]

