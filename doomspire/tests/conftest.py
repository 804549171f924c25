"""
Pytest fixtures for Doomspire tests.
"""

import pytest

from ..content.setup import default_content
from ..engine_core.context import ResolutionContext
from ..engine_core.decks import TieredDecks
from ..engine_core.dice import DiceRoller
from ..engine_core.settings import DEFAULT_SETTINGS
from ..engine_core.state import (
    Board,
    Boat,
    Champion,
    GamePhase,
    GameState,
    OceanZone,
    Player,
    Position,
    Resources,
    Tile,
    TileType,
)


class ScriptedDice(DiceRoller):
    """
    DiceRoller whose d3 rolls come from a script.

    Once the script runs out, rolls fall back to the seeded generator.
    """

    def __init__(self, rolls=(), seed: int = 0):
        super().__init__(seed)
        self.rolls = list(rolls)

    def roll_d3(self) -> int:
        if self.rolls:
            return self.rolls.pop(0)
        return super().roll_d3()


class UnrolledDice(DiceRoller):
    """DiceRoller for paths that must not roll at all."""

    def roll_d3(self) -> int:
        raise AssertionError("no dice should be rolled here")


def empty_board(size: int = 5) -> Board:
    """Explored, empty board with homes in the top-left and bottom-right corners."""
    board = Board(rows=size, cols=size)
    for row in range(size):
        for col in range(size):
            board.set_tile(Tile(position=Position(row, col)))
    for corner in (Position(0, 0), Position(size - 1, size - 1)):
        board.set_tile(Tile(position=corner, tile_type=TileType.HOME, resources=Resources(food=1, wood=1)))
    return board


def make_player(name: str, home: Position, zone: OceanZone = OceanZone.NW, **kwargs) -> Player:
    return Player(
        name=name,
        color="#000000",
        home_position=home,
        champions=[Champion(champion_id=1, player_name=name, position=home)],
        boats=[Boat(boat_id=1, player_name=name, zone=zone)],
        **kwargs,
    )


def resource_tile(position: Position, claimed_by: str | None = None, **resources) -> Tile:
    res = Resources(**resources)
    return Tile(
        position=position,
        tile_type=TileType.RESOURCE,
        resources=res,
        starred=res.total() > 1,
        claimed_by=claimed_by,
    )


@pytest.fixture
def dice() -> ScriptedDice:
    """Dice with an empty script; tests set `dice.rolls` as needed."""
    return ScriptedDice()


@pytest.fixture
def board() -> Board:
    return empty_board()


@pytest.fixture
def state(board: Board) -> GameState:
    """Two-player game in progress on a 5x5 board, Alice to play."""
    return GameState(
        board=board,
        players=[
            make_player("Alice", Position(0, 0), OceanZone.NW),
            make_player("Bob", Position(4, 4), OceanZone.SE),
        ],
        phase=GamePhase.PLAYING,
    )


@pytest.fixture
def content():
    return default_content()


@pytest.fixture
def ctx(state, dice, content) -> ResolutionContext:
    """Resolution context over the shared state and scripted dice, with real decks."""
    decks = TieredDecks.from_cards(content.build_cards(), dice)
    return ResolutionContext(
        state=state,
        dice=dice,
        decks=decks,
        content=content,
        settings=DEFAULT_SETTINGS,
    )


@pytest.fixture
def run_resolution():
    """
    Drive a resolution generator to completion with canned answers.

    Answers are consumed in order; a DecisionBatch takes one dict of
    player name -> answer. Every request seen is recorded on the
    returned function's `requests` list.
    """
    def run(resolution, answers=()):
        pending = list(answers)
        run.requests = []
        try:
            request = next(resolution)
        except StopIteration as done:
            return done.value
        while True:
            run.requests.append(request)
            if not pending:
                raise AssertionError(f"Unexpected decision: {request}")
            try:
                request = resolution.send(pending.pop(0))
            except StopIteration as done:
                return done.value

    run.requests = []
    return run