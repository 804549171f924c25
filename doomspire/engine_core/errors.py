"""
Engine errors.

Two families of failure exist in the engine:
- Contract errors: a caller bypassed validation (a die that was never
  rolled, a champion that does not exist). These raise.
- Rejected player requests: claiming a claimed tile, harvesting a tile
  you do not control. These never raise; they are reported as
  outcomes with a reason.

Agent failures are wrapped in AgentError so the game master can fail
the turn without touching committed state.
"""

from __future__ import annotations


class DoomspireError(Exception):
    """Base class for all engine errors."""


class InvalidConsumption(DoomspireError):
    """A die value was requested that is not in the pool."""

    def __init__(self, requested: list[int], remaining: list[int]):
        self.requested = list(requested)
        self.remaining = list(remaining)
        super().__init__(
            f"Cannot consume dice {self.requested}: remaining dice are {self.remaining}"
        )


class ContractError(DoomspireError):
    """A caller referenced something that does not exist or broke an engine contract."""


class UnknownPlayerError(ContractError):
    def __init__(self, player_name: str):
        self.player_name = player_name
        super().__init__(f"Player {player_name!r} not found")


class UnknownChampionError(ContractError):
    def __init__(self, player_name: str, champion_id: int):
        self.player_name = player_name
        self.champion_id = champion_id
        super().__init__(f"Champion {champion_id} not found for player {player_name!r}")


class UnknownBoatError(ContractError):
    def __init__(self, player_name: str, boat_id: int):
        self.player_name = player_name
        self.boat_id = boat_id
        super().__init__(f"Boat {boat_id} not found for player {player_name!r}")


class UnknownTileError(ContractError):
    def __init__(self, position):
        self.position = position
        super().__init__(f"No tile at {position}")


class UnknownCardError(ContractError):
    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Unknown card {card_id!r}")


class AgentError(DoomspireError):
    """A player agent raised or answered with something it was not offered."""

    def __init__(self, player_name: str, message: str):
        self.player_name = player_name
        super().__init__(f"Agent for {player_name!r} failed: {message}")


class GameStateError(DoomspireError):
    """The game master was driven out of order (e.g. a turn before start())."""
