"""
Player Agents - Interface between the game master and whoever plays a lord.

An agent is asked for two things:
- Which dice action to take next, given the dice left this turn
- Answers to decisions raised while an action resolves

Agents only ever see a copy of the game state, so nothing an agent does
to its view can leak into the real game. Calls are async so agents that
think for a while (remote players, language models) fit the same seam.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING, Any

from ..engine_core.action_generator import legal_actions
from ..engine_core.settings import GameSettings, DEFAULT_SETTINGS

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.decisions import DecisionRequest
    from ..engine_core.log import LogEntry
    from ..engine_core.state import GameState


@dataclass
class TurnContext:
    """Where the current turn stands when an agent is asked for an action."""
    round: int
    dice_rolled: list[int]
    remaining: list[int] = field(default_factory=list)
    settings: GameSettings = DEFAULT_SETTINGS


class PlayerAgent(ABC):
    """
    Abstract base class for anything that plays a lord.

    Implementations range from scripted test agents to bots that pick
    uniformly among the legal actions.
    """

    @abstractmethod
    def get_name(self) -> str:
        """The player name this agent plays as."""

    @abstractmethod
    async def request_dice_action(
        self,
        view: GameState,
        log: list[LogEntry],
        turn_context: TurnContext,
    ) -> Action:
        """
        Choose the next dice action.

        Args:
            view: Copy of the current game state
            log: Game log so far
            turn_context: Dice rolled and still unspent this turn

        Returns:
            An Action spending one or more of the remaining dice
        """

    @abstractmethod
    async def request_decision(self, view: GameState, request: DecisionRequest) -> Any:
        """Answer a decision; the answer must be one of request.decision.options()."""

    async def make_strategic_assessment(
        self,
        view: GameState,
        log: list[LogEntry],
        dice: list[int],
    ) -> str | None:
        """Optional note on the agent's plan for this turn, logged as an assessment."""
        return None


class RandomAgent(PlayerAgent):
    """
    Random agent - picks actions and answers uniformly at random.

    Used for:
    - Simulated games
    - Baseline comparison
    """

    def __init__(self, name: str, seed: int | None = None):
        self.name = name
        self.rng = random.Random(seed)

    def get_name(self) -> str:
        return self.name

    async def request_dice_action(self, view, log, turn_context) -> Action:
        actions = legal_actions(view, self.name, turn_context.remaining, turn_context.settings)
        if not actions:
            raise ValueError("No legal actions available")
        return self.rng.choice(actions)

    async def request_decision(self, view, request) -> Any:
        options = request.decision.options()
        if not options:
            raise ValueError("No options available")
        return self.rng.choice(options)


class FirstLegalAgent(PlayerAgent):
    """
    First-legal agent - always takes the first action and the first option.

    Used for:
    - Deterministic testing
    """

    def __init__(self, name: str):
        self.name = name

    def get_name(self) -> str:
        return self.name

    async def request_dice_action(self, view, log, turn_context) -> Action:
        actions = legal_actions(view, self.name, turn_context.remaining, turn_context.settings)
        if not actions:
            raise ValueError("No legal actions available")
        return actions[0]

    async def request_decision(self, view, request) -> Any:
        options = request.decision.options()
        if not options:
            raise ValueError("No options available")
        return options[0]
