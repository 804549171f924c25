"""
Game State - The single arena every resolver works against.

Design principles:
- One owner: board, players, champions and boats all live inside one
  GameState. Everything else refers to them by position, player name
  or id, never by holding onto the object.
- Copy-on-action: the executor clones the state before resolving an
  action and only hands the clone back when the action completed, so a
  failing agent or contract error never leaves half-applied changes.
- Serializable: every record is a plain dataclass.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum
from typing import Any, Callable, Iterator

from .errors import (
    UnknownPlayerError,
    UnknownChampionError,
    UnknownBoatError,
    UnknownTileError,
)


RESOURCE_TYPES = ("food", "wood", "ore", "gold")


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class TileType(Enum):
    """What a tile is, which decides how arrival resolves on it."""
    EMPTY = "empty"
    HOME = "home"
    RESOURCE = "resource"
    ADVENTURE = "adventure"
    OASIS = "oasis"
    TRADER = "trader"
    MERCENARY = "mercenary"
    TEMPLE = "temple"
    DOOMSPIRE = "doomspire"


# Champions never fight each other on these tiles
NON_COMBAT_TILES = frozenset({
    TileType.HOME,
    TileType.TEMPLE,
    TileType.TRADER,
    TileType.MERCENARY,
})

# Tiles that hold adventure tokens and yield cards
CARD_TILES = frozenset({TileType.ADVENTURE, TileType.OASIS})


class OceanZone(Enum):
    """The four seas around the island."""
    NW = "nw"
    NE = "ne"
    SW = "sw"
    SE = "se"


@dataclass(frozen=True, order=True)
class Position:
    """A board cell."""
    row: int
    col: int

    def neighbors(self) -> list[Position]:
        """Orthogonal neighbours (may be off the board)."""
        return [
            Position(self.row - 1, self.col),
            Position(self.row + 1, self.col),
            Position(self.row, self.col - 1),
            Position(self.row, self.col + 1),
        ]

    def is_adjacent(self, other: Position) -> bool:
        """True for horizontal/vertical neighbours. Diagonals are not adjacent."""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def manhattan(self, other: Position) -> int:
        """Manhattan distance."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass
class Resources:
    """A resource bag. Amounts never go below zero."""
    food: int = 0
    wood: int = 0
    ore: int = 0
    gold: int = 0

    def get(self, resource: str) -> int:
        return getattr(self, resource)

    def set(self, resource: str, amount: int):
        setattr(self, resource, max(0, amount))

    def add(self, other: Resources):
        for resource in RESOURCE_TYPES:
            self.set(resource, self.get(resource) + other.get(resource))

    def gain(self, resource: str, amount: int):
        self.set(resource, self.get(resource) + amount)

    def lose(self, resource: str, amount: int) -> int:
        """Remove up to `amount`; returns how much was actually removed."""
        lost = min(amount, self.get(resource))
        self.set(resource, self.get(resource) - lost)
        return lost

    def total(self) -> int:
        return self.food + self.wood + self.ore + self.gold

    def largest(self) -> tuple[str, int]:
        """The resource with the biggest stockpile; ties go to the earliest type."""
        best = RESOURCE_TYPES[0]
        for resource in RESOURCE_TYPES[1:]:
            if self.get(resource) > self.get(best):
                best = resource
        return best, self.get(best)

    def copy(self) -> Resources:
        return Resources(self.food, self.wood, self.ore, self.gold)

    def to_dict(self) -> dict[str, int]:
        return {resource: self.get(resource) for resource in RESOURCE_TYPES}

    def describe(self) -> str:
        parts = [f"{self.get(r)} {r}" for r in RESOURCE_TYPES if self.get(r) > 0]
        return ", ".join(parts) if parts else "nothing"

    @classmethod
    def from_dict(cls, values: dict[str, int] | None) -> Resources:
        values = values or {}
        return cls(**{r: values.get(r, 0) for r in RESOURCE_TYPES})


@dataclass
class Item:
    """
    A carriable item held by a champion or lying on a tile.

    Bonus fields:
    - combat_bonus: always applies
    - dragon_bonus: applies only against the dragon
    - underdog_bonus: applies only when the opponent has more might
    """
    item_id: str
    name: str
    combat_bonus: int = 0
    dragon_bonus: int = 0
    underdog_bonus: int = 0
    breaks: bool = False  # Removed after one fight
    stuck: bool = False  # Cannot be dropped

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "combat_bonus": self.combat_bonus,
            "dragon_bonus": self.dragon_bonus,
            "underdog_bonus": self.underdog_bonus,
            "breaks": self.breaks,
            "stuck": self.stuck,
        }


@dataclass(frozen=True)
class Monster:
    """Immutable monster template, placed on a tile or fought immediately."""
    monster_id: str
    name: str
    tier: int
    might: int
    fame: int
    resources: Resources = field(default_factory=Resources)
    is_beast: bool = False


@dataclass
class Tile:
    """
    One board cell.

    Only resource tiles may be claimed, only adventure/oasis tiles carry
    adventure tokens, and a tile holds at most one monster.
    """
    position: Position
    tile_type: TileType = TileType.EMPTY
    tier: int | None = None
    explored: bool = True
    resources: Resources | None = None
    starred: bool = False
    claimed_by: str | None = None
    monster: Monster | None = None
    adventure_tokens: int = 0
    items: list[Item] = field(default_factory=list)
    tile_group: int | None = None

    @property
    def is_resource(self) -> bool:
        return self.tile_type == TileType.RESOURCE

    def describe(self) -> str:
        """Short human-readable description for logs."""
        if self.tile_type == TileType.RESOURCE and self.resources:
            kinds = [r for r in RESOURCE_TYPES if self.resources.get(r) > 0]
            star = " (starred)" if self.starred else ""
            return f"resource tile with {', '.join(kinds)}{star}"
        return f"{self.tile_type.value} tile"


@dataclass
class Champion:
    """A player's token on the board."""
    champion_id: int
    player_name: str
    position: Position
    items: list[Item] = field(default_factory=list)

    def has_item(self, item_id: str) -> bool:
        return any(item.item_id == item_id for item in self.items)


@dataclass
class Boat:
    """A boat sailing one of the four ocean zones."""
    boat_id: int
    player_name: str
    zone: OceanZone


@dataclass
class Player:
    """
    A lord competing for the Doomspire.

    Fame, might and resources never drop below zero.
    """
    name: str
    color: str
    home_position: Position
    fame: int = 0
    might: int = 0
    resources: Resources = field(default_factory=Resources)
    max_claims: int = 10
    champions: list[Champion] = field(default_factory=list)
    boats: list[Boat] = field(default_factory=list)

    def get_champion(self, champion_id: int) -> Champion:
        for champion in self.champions:
            if champion.champion_id == champion_id:
                return champion
        raise UnknownChampionError(self.name, champion_id)

    def get_boat(self, boat_id: int) -> Boat:
        for boat in self.boats:
            if boat.boat_id == boat_id:
                return boat
        raise UnknownBoatError(self.name, boat_id)

    def add_fame(self, amount: int):
        self.fame = max(0, self.fame + amount)

    def add_might(self, amount: int):
        self.might = max(0, self.might + amount)


@dataclass
class Board:
    """Grid of tiles keyed by position."""
    rows: int
    cols: int
    tiles: dict[Position, Tile] = field(default_factory=dict)

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.cols

    def tile_at(self, position: Position) -> Tile | None:
        return self.tiles.get(position)

    def require_tile(self, position: Position) -> Tile:
        tile = self.tiles.get(position)
        if tile is None:
            raise UnknownTileError(position)
        return tile

    def set_tile(self, tile: Tile):
        self.tiles[tile.position] = tile

    def all_tiles(self) -> Iterator[Tile]:
        """Tiles in row-major order."""
        for position in sorted(self.tiles):
            yield self.tiles[position]

    def find(self, predicate: Callable[[Tile], bool]) -> list[Tile]:
        return [tile for tile in self.all_tiles() if predicate(tile)]

    def tiles_in_group(self, group: int) -> list[Tile]:
        return self.find(lambda t: t.tile_group == group)


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All rule changes go through the ActionExecutor.
    """
    board: Board
    players: list[Player] = field(default_factory=list)
    current_player_index: int = 0
    current_round: int = 1
    phase: GamePhase = GamePhase.SETUP

    # Terminal info
    winner: str | None = None
    victory: Any | None = None  # VictoryType
    dragon_slayer: str | None = None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    def get_player(self, player_name: str) -> Player:
        for player in self.players:
            if player.name == player_name:
                return player
        raise UnknownPlayerError(player_name)

    def get_champion(self, player_name: str, champion_id: int) -> Champion:
        return self.get_player(player_name).get_champion(champion_id)

    def all_champions(self) -> list[Champion]:
        return [c for p in self.players for c in p.champions]

    def champions_at(self, position: Position) -> list[Champion]:
        return [c for c in self.all_champions() if c.position == position]

    def opposing_champions_at(self, player_name: str, position: Position) -> list[Champion]:
        return [c for c in self.champions_at(position) if c.player_name != player_name]

    def claimed_tiles(self, player_name: str) -> list[Tile]:
        return self.board.find(lambda t: t.claimed_by == player_name)

    def starred_tile_count(self, player_name: str) -> int:
        return len(self.board.find(
            lambda t: t.is_resource and t.starred and t.claimed_by == player_name
        ))

    def home_owner(self, position: Position) -> str | None:
        """Name of the player whose home tile is at this position."""
        for player in self.players:
            if player.home_position == position:
                return player.name
        return None

    def is_claim_protected(self, tile: Tile) -> bool:
        """A claim is protected while one of the owner's champions stands next to it."""
        if tile.claimed_by is None:
            return False
        owner = self.get_player(tile.claimed_by)
        return any(c.position.is_adjacent(tile.position) for c in owner.champions)

    def move_champion(self, player_name: str, champion_id: int, position: Position) -> Tile:
        """Place a champion on a tile; returns the tile it now stands on."""
        tile = self.board.require_tile(position)
        self.get_champion(player_name, champion_id).position = position
        return tile

    def send_home(self, player_name: str, champion_id: int) -> Position:
        player = self.get_player(player_name)
        player.get_champion(champion_id).position = player.home_position
        return player.home_position

    def advance_to_next_player(self) -> GameState:
        """Pass the turn on; the round ticks over when seating wraps to the first player."""
        next_index = (self.current_player_index + 1) % len(self.players)
        next_round = self.current_round + 1 if next_index == 0 else self.current_round
        return self._copy_with(current_player_index=next_index, current_round=next_round)

    def finish(self, winner: str | None = None, victory: Any | None = None) -> GameState:
        return self._copy_with(phase=GamePhase.FINISHED, winner=winner, victory=victory)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            board=kwargs.get("board", self.board),
            players=kwargs.get("players", self.players),
            current_player_index=kwargs.get("current_player_index", self.current_player_index),
            current_round=kwargs.get("current_round", self.current_round),
            phase=kwargs.get("phase", self.phase),
            winner=kwargs.get("winner", self.winner),
            victory=kwargs.get("victory", self.victory),
            dragon_slayer=kwargs.get("dragon_slayer", self.dragon_slayer),
        )

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
