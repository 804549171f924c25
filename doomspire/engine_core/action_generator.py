"""
Action Generator - Enumerates sensible dice actions for a player.

The action generator is used by:
1. Bots to pick a move
2. The API to show what a player could do

Design: Generates fully-specified Action objects. Movement options are
one shortest path per reachable destination, so the list stays small.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass

from .action import Action, TileIntent
from .harvest import calculate_harvest
from .movement import COASTAL_TILES, OCEAN_ADJACENCY
from .settings import GameSettings, DEFAULT_SETTINGS
from .state import GamePhase, GameState, Position, Tile, TileType


@dataclass
class ActionGenerator:
    """Generates legal dice actions for one player and the dice they have left."""
    settings: GameSettings = DEFAULT_SETTINGS

    def generate(self, state: GameState, player_name: str, remaining_dice: list[int]) -> list[Action]:
        """
        Generate actions for the player, one die at a time.

        There is always at least one action per die (harvesting nothing),
        so a turn can always spend its dice.
        """
        if state.phase != GamePhase.PLAYING or not remaining_dice:
            return []

        actions: list[Action] = []
        for die in sorted(set(remaining_dice)):
            actions.extend(self._generate_champion_moves(state, player_name, die))
            actions.extend(self._generate_boat_moves(state, player_name, die))
            actions.append(self._generate_harvest(state, player_name, die))
        return actions

    def _intent_for(self, state: GameState, player_name: str, tile: Tile) -> TileIntent:
        """Claim free resource tiles and use special tiles when affordable."""
        player = state.get_player(player_name)
        claims = len(state.claimed_tiles(player_name))
        return TileIntent(
            claim_tile=tile.is_resource and tile.claimed_by is None and claims < player.max_claims,
            use_temple=tile.tile_type == TileType.TEMPLE and player.fame >= self.settings.temple_fame_cost,
            use_mercenary=(
                tile.tile_type == TileType.MERCENARY
                and player.resources.gold >= self.settings.mercenary_gold_cost
            ),
        )

    def _reachable(self, state: GameState, player_name: str, start: Position, steps: int) -> dict[Position, list[Position]]:
        """Breadth-first paths to every tile within `steps` moves."""
        foreign_homes = {p.home_position for p in state.players if p.name != player_name}
        paths = {start: [start]}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            tile = state.board.tile_at(current)
            # Movement stops on unexplored tiles
            if len(paths[current]) > steps or (current != start and tile is not None and not tile.explored):
                continue
            for neighbor in current.neighbors():
                if neighbor in paths or neighbor in foreign_homes:
                    continue
                if state.board.tile_at(neighbor) is None:
                    continue
                paths[neighbor] = paths[current] + [neighbor]
                queue.append(neighbor)
        del paths[start]
        return paths

    def _generate_champion_moves(self, state: GameState, player_name: str, die: int) -> list[Action]:
        actions = []
        player = state.get_player(player_name)
        for champion in player.champions:
            for destination, path in self._reachable(state, player_name, champion.position, die).items():
                tile = state.board.require_tile(destination)
                actions.append(Action.move_champion(
                    player_name, die, champion.champion_id, path,
                    self._intent_for(state, player_name, tile),
                ))
        return actions

    def _generate_boat_moves(self, state: GameState, player_name: str, die: int) -> list[Action]:
        actions = []
        player = state.get_player(player_name)
        for boat in player.boats:
            for next_zone in OCEAN_ADJACENCY[boat.zone]:
                path = [boat.zone, next_zone]
                actions.append(Action.move_boat(player_name, die, boat.boat_id, path))

                reachable = COASTAL_TILES[boat.zone] | COASTAL_TILES[next_zone]
                for champion in player.champions:
                    if champion.position not in reachable:
                        continue
                    for drop in sorted(reachable):
                        tile = state.board.tile_at(drop)
                        if tile is None or drop == champion.position or not tile.explored:
                            continue
                        if state.home_owner(drop) not in (None, player_name):
                            continue
                        actions.append(Action.move_boat(
                            player_name, die, boat.boat_id, path,
                            champion_id=champion.champion_id,
                            drop_position=drop,
                            tile_intent=self._intent_for(state, player_name, tile),
                        ))
        return actions

    def _generate_harvest(self, state: GameState, player_name: str, die: int) -> Action:
        candidates = [
            t.position for t in state.board.all_tiles()
            if t.claimed_by is not None and t.resources is not None
        ]
        report = calculate_harvest(state, player_name, candidates, len(candidates))
        return Action.harvest(player_name, [die], report.harvested[:die])


def legal_actions(
    state: GameState,
    player_name: str,
    remaining_dice: list[int],
    settings: GameSettings = DEFAULT_SETTINGS,
) -> list[Action]:
    """Convenience function for generating legal actions under the game's settings."""
    return ActionGenerator(settings=settings).generate(state, player_name, remaining_dice)
