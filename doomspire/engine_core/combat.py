"""
Combat - Champion, monster and dragon fights.

Every fight is one d3 plus might plus item bonuses per side. Losing
sends the champion home and costs healing (1 gold, or 1 fame when the
player has no gold). Defeat side effects are applied right here, so
callers never have to remember to apply them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .dice import DiceRoller
from .settings import GameSettings, DEFAULT_SETTINGS
from .state import Champion, GameState, Monster, Resources, Tile
from .victory import VictoryType, alternative_victory


logger = logging.getLogger(__name__)


# =============================================================================
# Items and healing
# =============================================================================

def combat_bonus(
    champion: Champion,
    player_might: int,
    opponent_might: int,
    is_dragon: bool = False,
) -> int:
    """Sum of the champion's item bonuses for this fight."""
    bonus = 0
    for item in champion.items:
        bonus += item.combat_bonus
        if is_dragon:
            bonus += item.dragon_bonus
        if opponent_might > player_might:
            bonus += item.underdog_bonus
    return bonus


def break_items(champion: Champion) -> list[str]:
    """Remove single-use items after a fight; returns the broken item names."""
    broken = [item.name for item in champion.items if item.breaks]
    champion.items = [item for item in champion.items if not item.breaks]
    return broken


@dataclass(frozen=True)
class HealingCost:
    gold: int = 0
    fame: int = 0

    def describe(self) -> str:
        if self.gold:
            return f"paid {self.gold} gold for healing"
        if self.fame:
            return f"lost {self.fame} fame for healing"
        return "had nothing to pay for healing"


def apply_defeat(state: GameState, player_name: str, champion_id: int) -> HealingCost:
    """Send the champion home and charge the healing cost."""
    player = state.get_player(player_name)
    state.send_home(player_name, champion_id)
    if player.resources.gold >= 1:
        player.resources.lose("gold", 1)
        return HealingCost(gold=1)
    if player.fame >= 1:
        player.add_fame(-1)
        return HealingCost(fame=1)
    return HealingCost()


# =============================================================================
# Champion vs champion
# =============================================================================

@dataclass(frozen=True)
class ChampionCombatOutcome:
    attacker_name: str
    defender_name: str
    defender_champion_id: int
    attacker_won: bool
    attacker_total: int
    defender_total: int
    rolls: int
    healing: HealingCost

    @property
    def winner_name(self) -> str:
        return self.attacker_name if self.attacker_won else self.defender_name

    @property
    def loser_name(self) -> str:
        return self.defender_name if self.attacker_won else self.attacker_name


def resolve_champion_combat(
    state: GameState,
    dice: DiceRoller,
    attacker_name: str,
    attacker_champion_id: int,
    defender_name: str,
    defender_champion_id: int,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> ChampionCombatOutcome:
    """Fight until one side is ahead; ties are rerolled, never kept."""
    attacker = state.get_player(attacker_name)
    defender = state.get_player(defender_name)
    attacking_champion = attacker.get_champion(attacker_champion_id)
    defending_champion = defender.get_champion(defender_champion_id)

    attacker_might = attacker.might + combat_bonus(attacking_champion, attacker.might, defender.might)
    defender_might = defender.might + combat_bonus(defending_champion, defender.might, attacker.might)

    rolls = 0
    while True:
        rolls += 1
        attacker_total = attacker_might + dice.roll_d3()
        defender_total = defender_might + dice.roll_d3()
        if attacker_total != defender_total:
            break

    attacker_won = attacker_total > defender_total
    break_items(attacking_champion)
    break_items(defending_champion)

    if attacker_won:
        attacker.add_fame(settings.champion_combat_fame)
        healing = apply_defeat(state, defender_name, defender_champion_id)
    else:
        defender.add_fame(settings.champion_combat_fame)
        healing = apply_defeat(state, attacker_name, attacker_champion_id)

    logger.debug(
        "%s vs %s: %d vs %d after %d roll(s)",
        attacker_name, defender_name, attacker_total, defender_total, rolls,
    )
    return ChampionCombatOutcome(
        attacker_name=attacker_name,
        defender_name=defender_name,
        defender_champion_id=defender_champion_id,
        attacker_won=attacker_won,
        attacker_total=attacker_total,
        defender_total=defender_total,
        rolls=rolls,
        healing=healing,
    )


# =============================================================================
# Champion vs monster
# =============================================================================

@dataclass(frozen=True)
class MonsterCombatOutcome:
    monster: Monster
    won: bool
    roll: int
    total: int
    monster_might: int
    fame_gained: int = 0
    resources_gained: Resources = field(default_factory=Resources)
    healing: HealingCost | None = None

    def describe(self) -> str:
        if self.won:
            return (
                f"defeated {self.monster.name} ({self.total} vs {self.monster_might}), "
                f"gained {self.fame_gained} fame and {self.resources_gained.describe()}"
            )
        return (
            f"lost to {self.monster.name} ({self.total} vs {self.monster_might}), "
            f"{self.healing.describe()}, champion returned home"
        )


def resolve_monster_combat(
    state: GameState,
    dice: DiceRoller,
    player_name: str,
    champion_id: int,
    monster: Monster,
    tile: Tile | None = None,
    is_dragon: bool = False,
) -> MonsterCombatOutcome:
    """
    One roll for the champion; ties go to the champion.

    With a tile, a win clears the monster from it and a loss leaves the
    monster there.
    """
    player = state.get_player(player_name)
    champion = player.get_champion(champion_id)

    bonus = combat_bonus(champion, player.might, monster.might, is_dragon=is_dragon)
    roll = dice.roll_d3()
    total = player.might + bonus + roll
    won = total >= monster.might
    break_items(champion)

    if won:
        player.add_fame(monster.fame)
        player.resources.add(monster.resources)
        if tile is not None and tile.monster == monster:
            tile.monster = None
        return MonsterCombatOutcome(
            monster=monster,
            won=True,
            roll=roll,
            total=total,
            monster_might=monster.might,
            fame_gained=monster.fame,
            resources_gained=monster.resources.copy(),
        )

    if tile is not None:
        tile.monster = monster
    healing = apply_defeat(state, player_name, champion_id)
    return MonsterCombatOutcome(
        monster=monster,
        won=False,
        roll=roll,
        total=total,
        monster_might=monster.might,
        healing=healing,
    )


# =============================================================================
# Dragon
# =============================================================================

@dataclass(frozen=True)
class AlternativeVictory:
    """A threshold was met on arrival; no fight happens."""
    victory_type: VictoryType


@dataclass(frozen=True)
class DragonFight:
    dragon_might: int
    outcome: MonsterCombatOutcome

    @property
    def won(self) -> bool:
        return self.outcome.won


def resolve_dragon_encounter(
    state: GameState,
    dice: DiceRoller,
    player_name: str,
    champion_id: int,
    settings: GameSettings = DEFAULT_SETTINGS,
) -> AlternativeVictory | DragonFight:
    """Check the threshold victories first; otherwise fight a dragon of base + d3 might."""
    victory_type = alternative_victory(state, player_name, settings)
    if victory_type is not None:
        return AlternativeVictory(victory_type)

    dragon_might = settings.dragon_base_might + dice.roll_d3()
    dragon = Monster(monster_id="dragon", name="the Dragon", tier=3, might=dragon_might, fame=0)
    outcome = resolve_monster_combat(state, dice, player_name, champion_id, dragon, is_dragon=True)
    if outcome.won:
        state.dragon_slayer = player_name
    return DragonFight(dragon_might, outcome)
