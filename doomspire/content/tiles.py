"""
Tiles - Board layout for an 8x8 Lords of Doomspire board.

The board is laid out from L-shaped trios of tiles:
- Four home trios, one per corner, explored
- Twelve tier-1 trios ringing the board, explored
- Four tier-2 trios around the centre, unexplored
- Four tier-3 centre tiles: three adventure tiles and the Doomspire

Which trio lands where is shuffled with the game's DiceRoller, so a
seed fully determines the board. Each trio shares a tile group and is
revealed together when explored.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from ..engine_core.dice import DiceRoller
from ..engine_core.state import Board, Position, Resources, Tile, TileType


BOARD_SIZE = 8

# A tile definition is a keyword, a resource name, or a list of resources
TileDef = Union[str, tuple[str, ...]]


@dataclass(frozen=True)
class TileTrio:
    corner: TileDef
    right: TileDef
    below: TileDef


HOME_TRIOS = [
    TileTrio("home", "food", "adventure"),
    TileTrio("home", "wood", "adventure"),
    TileTrio("home", "adventure", "food"),
    TileTrio("home", "adventure", "ore"),
]

TIER_1_TRIOS = [
    TileTrio("temple", "wood", "adventure"),
    TileTrio("adventure", "mercenary", "food"),
    TileTrio("ore", "adventure", "trader"),
    TileTrio("gold", "wolfDen", "oasis"),
    TileTrio("adventure2", "ore", "wolfDen"),
    TileTrio("wood", "adventure", "adventure2"),
    TileTrio("food", "adventure2", "oasis"),
    TileTrio("adventure", ("food", "ore"), "wolfDen"),
    TileTrio("wood", "ore", "adventure"),
    TileTrio("food", "ore", "adventure"),
    TileTrio("oasis", "gold", ("ore", "ore")),
    TileTrio(("food", "food"), "wood", "adventure"),
]

TIER_2_TRIOS = [
    TileTrio("adventure2", "bearCave", ("gold", "gold")),
    TileTrio(("ore", "ore"), "adventure2", "bearCave"),
    TileTrio(("wood", "wood"), "oasis", "adventure2"),
    TileTrio("adventure2", ("wood", "ore"), ("food", "food")),
]

TIER_3_TILES = ["adventure3", "adventure3", "adventure3", "doomspire"]

# Home corners, clockwise from the top left
HOME_PLACEMENTS = [
    (Position(0, 0), 0),
    (Position(0, 7), 1),
    (Position(7, 7), 2),
    (Position(7, 0), 3),
]

TIER_1_PLACEMENTS = [
    (Position(0, 4), 1),
    (Position(1, 2), 3),
    (Position(1, 5), 3),
    (Position(2, 1), 2),
    (Position(2, 6), 0),
    (Position(3, 0), 0),
    (Position(4, 7), 2),
    (Position(5, 1), 2),
    (Position(5, 6), 0),
    (Position(6, 2), 1),
    (Position(6, 5), 1),
    (Position(7, 3), 3),
]

TIER_2_PLACEMENTS = [
    (Position(2, 2), 0),
    (Position(2, 5), 1),
    (Position(5, 5), 2),
    (Position(5, 2), 3),
]

CENTRE_POSITIONS = [Position(3, 3), Position(3, 4), Position(4, 3), Position(4, 4)]

# (right, below) offsets per quarter turn clockwise
ROTATION_OFFSETS = [
    ((0, 1), (1, 0)),
    ((1, 0), (0, -1)),
    ((0, -1), (-1, 0)),
    ((-1, 0), (0, 1)),
]

# Adventure-like keywords: (tile type, tier)
ADVENTURE_DEFS = {
    "adventure": (TileType.ADVENTURE, 1),
    "adventure2": (TileType.ADVENTURE, 2),
    "adventure3": (TileType.ADVENTURE, 3),
    "wolfDen": (TileType.ADVENTURE, 1),
    "bearCave": (TileType.ADVENTURE, 2),
    "oasis": (TileType.OASIS, 1),
    "oasis2": (TileType.OASIS, 2),
}

SPECIAL_DEFS = {
    "temple": TileType.TEMPLE,
    "mercenary": TileType.MERCENARY,
    "trader": TileType.TRADER,
    "empty": TileType.EMPTY,
}


def trio_positions(corner: Position, rotation: int) -> list[Position]:
    """Corner, right and below positions of a trio turned `rotation` quarter turns."""
    (right_dr, right_dc), (below_dr, below_dc) = ROTATION_OFFSETS[rotation]
    return [
        corner,
        Position(corner.row + right_dr, corner.col + right_dc),
        Position(corner.row + below_dr, corner.col + below_dc),
    ]


def make_tile(
    tile_def: TileDef,
    position: Position,
    explored: bool,
    tile_group: int | None = None,
    adventure_tokens: int = 2,
) -> Tile:
    """Turn a tile definition into a Tile."""
    tile = Tile(position=position, explored=explored, tile_group=tile_group)

    if isinstance(tile_def, tuple):
        tile.tile_type = TileType.RESOURCE
        tile.resources = Resources()
        for resource in tile_def:
            tile.resources.gain(resource, 1)
    elif tile_def == "home":
        tile.tile_type = TileType.HOME
        tile.resources = Resources(food=1, wood=1)
    elif tile_def == "doomspire":
        tile.tile_type = TileType.DOOMSPIRE
        tile.tier = 3
    elif tile_def in ADVENTURE_DEFS:
        tile.tile_type, tile.tier = ADVENTURE_DEFS[tile_def]
        tile.adventure_tokens = adventure_tokens
    elif tile_def in SPECIAL_DEFS:
        tile.tile_type = SPECIAL_DEFS[tile_def]
    elif tile_def in ("food", "wood", "ore", "gold"):
        tile.tile_type = TileType.RESOURCE
        tile.resources = Resources()
        tile.resources.gain(tile_def, 1)
    else:
        raise ValueError(f"Unknown tile definition: {tile_def!r}")

    if tile.is_resource and tile.resources.total() > 1:
        tile.starred = True
    return tile


class BoardBuilder:
    """Lays trios onto an empty board using the game's dice for shuffling."""

    def __init__(self, dice: DiceRoller, adventure_tokens: int = 2):
        self.dice = dice
        self.adventure_tokens = adventure_tokens
        self._next_group = 1

    def build(self, size: int = BOARD_SIZE) -> Board:
        board = Board(rows=size, cols=size)
        self._place_trios(board, HOME_TRIOS, HOME_PLACEMENTS, explored=True)
        self._place_trios(board, TIER_1_TRIOS, TIER_1_PLACEMENTS, explored=True)
        self._place_trios(board, TIER_2_TRIOS, TIER_2_PLACEMENTS, explored=False)

        centre = self.dice.shuffle(list(TIER_3_TILES))
        for position, tile_def in zip(CENTRE_POSITIONS, centre):
            board.set_tile(make_tile(tile_def, position, explored=False, adventure_tokens=self.adventure_tokens))
        return board

    def _place_trios(self, board: Board, trios: list[TileTrio], placements, explored: bool):
        shuffled = self.dice.shuffle(list(trios))
        for index, (corner, rotation) in enumerate(placements):
            trio = shuffled[index % len(shuffled)]
            group = self._next_group
            self._next_group += 1
            defs = [trio.corner, trio.right, trio.below]
            for tile_def, position in zip(defs, trio_positions(corner, rotation)):
                existing = board.tile_at(position)
                if existing is not None and existing.tile_type != TileType.EMPTY:
                    raise ValueError(f"Trio overlaps an existing tile at {position}")
                board.set_tile(make_tile(
                    tile_def, position, explored,
                    tile_group=group,
                    adventure_tokens=self.adventure_tokens,
                ))


def build_board(dice: DiceRoller | None = None, seed: int | None = None) -> Board:
    """Build the standard board. Pass the game's dice, or a seed for a standalone board."""
    return BoardBuilder(dice or DiceRoller(seed)).build()


def render_board(board: Board) -> str:
    """Plain-text grid, one short code per tile."""
    codes = {
        TileType.HOME: "HOM",
        TileType.ADVENTURE: "AD",
        TileType.OASIS: "OAS",
        TileType.TEMPLE: "TMP",
        TileType.MERCENARY: "MRC",
        TileType.TRADER: "TRD",
        TileType.DOOMSPIRE: "DOOM",
        TileType.EMPTY: ".",
    }
    lines = []
    for row in range(board.rows):
        cells = []
        for col in range(board.cols):
            tile = board.tile_at(Position(row, col))
            if tile is None:
                cell = "."
            elif tile.is_resource:
                cell = "".join(r[0].upper() * tile.resources.get(r) for r in ("food", "wood", "ore", "gold"))
                if tile.starred:
                    cell += "*"
            else:
                cell = codes[tile.tile_type]
                if tile.tier is not None and tile.tile_type == TileType.ADVENTURE:
                    cell += str(tile.tier)
            if tile is not None and not tile.explored:
                cell = "?" + cell
            cells.append(f"{cell:<6}")
        lines.append("".join(cells).rstrip())
    return "\n".join(lines)
