"""
Game Master - Drives a game of Lords of Doomspire turn by turn.

A turn:
1. Roll 1 + champions d3
2. Ask the agent for a strategic assessment (logged, optional)
3. Ask the agent for dice actions until the dice run out
4. Check victory after every action
5. End the game at the round limit, otherwise pass the turn on

The game master is the only place that awaits agents. Resolution stages
yield DecisionRequest / DecisionBatch values; drive() answers them and
resumes the stage, so the rules engine itself stays synchronous.
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from typing import Any, Awaitable, Callable

from ..bots.agent import PlayerAgent, TurnContext
from ..content.setup import build_decks, create_game, default_content
from ..engine_core.action import Action
from ..engine_core.decisions import DecisionBatch, DecisionRequest, Resolution
from ..engine_core.decks import ContentTables, TieredDecks
from ..engine_core.dice import DicePool, DiceRoller
from ..engine_core.errors import AgentError, DoomspireError, GameStateError
from ..engine_core.executor import ActionExecutor
from ..engine_core.log import GameLog, LogEntryType
from ..engine_core.settings import GameSettings, DEFAULT_SETTINGS
from ..engine_core.state import GamePhase, GameState
from ..engine_core.victory import Victory, check_victory


logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Where the game master is in its lifecycle."""
    SETUP = "setup"
    ROLLING = "rolling"
    WAITING_ACTION = "waiting_action"
    RESOLVING = "resolving"
    TURN_COMPLETE = "turn_complete"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of one player's turn.

    A failed turn (agent error, contract error) keeps every action
    committed before the failure; the failing action leaves no trace.
    """
    player_name: str
    dice: list[int]
    actions: list[str] = field(default_factory=list)
    success: bool = True
    game_over: bool = False
    winner: str | None = None
    victory: str | None = None
    error: str | None = None


@dataclass
class GameSummary:
    """How a finished game went."""
    winner: str | None
    victory: str | None
    rounds: int
    turns: int
    failed_turns: int
    final_fame: dict[str, int] = field(default_factory=dict)
    final_gold: dict[str, int] = field(default_factory=dict)


AnswerFn = Callable[[DecisionRequest], Awaitable[Any]]


async def drive(resolution: Resolution[Any], answer_fn: AnswerFn) -> Any:
    """
    Run a resolution stage to completion.

    Single requests are awaited one at a time; a batch is answered
    concurrently and sent back as a dict of player name -> answer.
    """
    try:
        request = next(resolution)
    except StopIteration as done:
        return done.value

    while True:
        if isinstance(request, DecisionBatch):
            answers = await asyncio.gather(*(answer_fn(r) for r in request.requests))
            response = {r.player_name: answer for r, answer in zip(request.requests, answers)}
        else:
            response = await answer_fn(request)
        try:
            request = resolution.send(response)
        except StopIteration as done:
            return done.value


class GameMaster:
    """
    Owns one game: state, decks, dice, log and the agents playing it.

    Usage:
        master = GameMaster([RandomAgent("Alice"), RandomAgent("Bob")], seed=7)
        master.start()
        summary = asyncio.run(master.run_to_completion())
    """

    def __init__(
        self,
        agents: list[PlayerAgent],
        settings: GameSettings = DEFAULT_SETTINGS,
        seed: int | None = None,
        state: GameState | None = None,
        decks: TieredDecks | None = None,
        dice: DiceRoller | None = None,
        content: ContentTables | None = None,
    ):
        if not agents:
            raise ValueError("A game needs at least one agent")
        self.settings = settings
        self.seed = seed
        self.dice = dice or DiceRoller(seed)
        self.content = content or default_content()
        self.agents = {agent.get_name(): agent for agent in agents}
        if len(self.agents) != len(agents):
            raise ValueError("Agent names must be unique")

        self.state = state or create_game(list(self.agents), settings=settings, dice=self.dice)
        missing = [p.name for p in self.state.players if p.name not in self.agents]
        if missing:
            raise ValueError(f"No agent for player(s): {', '.join(missing)}")

        self.decks = decks or build_decks(self.dice, self.content)
        self.executor = ActionExecutor(settings=settings, content=self.content)
        self.log = GameLog()
        self.loop_state = LoopState.SETUP
        self.turns: list[TurnResult] = []

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self):
        """Move the game from setup to playing."""
        if self.loop_state != LoopState.SETUP or self.state.phase != GamePhase.SETUP:
            raise GameStateError(f"Cannot start a game that is {self.state.phase.value}")
        self.state = self.state._copy_with(phase=GamePhase.PLAYING)
        self.loop_state = LoopState.TURN_COMPLETE
        names = ", ".join(p.name for p in self.state.players)
        self._note("", LogEntryType.SYSTEM, f"Game started with {names}")
        logger.info("Game started with %s", names)

    @property
    def is_finished(self) -> bool:
        return self.state.is_finished

    async def run_to_completion(self) -> GameSummary:
        """Play turns until someone wins or the round limit ends the game."""
        if self.loop_state == LoopState.SETUP:
            self.start()
        while not self.state.is_finished:
            await self.execute_turn()
        return self.summary()

    def summary(self) -> GameSummary:
        victory = self.state.victory
        return GameSummary(
            winner=self.state.winner,
            victory=victory.value if victory else None,
            rounds=self.state.current_round,
            turns=len(self.turns),
            failed_turns=sum(1 for t in self.turns if not t.success),
            final_fame={p.name: p.fame for p in self.state.players},
            final_gold={p.name: p.resources.gold for p in self.state.players},
        )

    # =========================================================================
    # Turns
    # =========================================================================

    async def execute_turn(self) -> TurnResult:
        """Play the current player's whole turn."""
        if self.state.phase != GamePhase.PLAYING:
            raise GameStateError(f"Cannot execute a turn while the game is {self.state.phase.value}")

        player = self.state.current_player
        agent = self.agents[player.name]

        self.loop_state = LoopState.ROLLING
        rolled = self.dice.roll_many(1 + len(player.champions))
        pool = DicePool(rolled)
        self._note(player.name, LogEntryType.DICE, "Rolled dice: " + ", ".join(f"[{d}]" for d in rolled))

        turn = TurnResult(player_name=player.name, dice=list(rolled))
        try:
            await self._assess(agent, rolled)
            while pool.has_remaining() and not self.state.is_finished:
                self.loop_state = LoopState.WAITING_ACTION
                action = await self._request_action(agent, rolled, pool)

                self.loop_state = LoopState.RESOLVING
                result = await drive(
                    self.executor.resolve(self.state, action, pool, self.dice, self.decks),
                    self._answer,
                )
                self.state = result.new_state
                self.decks = result.new_decks
                self.log.extend(result.log_entries)
                turn.actions.append(action.describe())

                victory = check_victory(self.state, self.settings)
                if victory is not None:
                    self._declare_winner(victory)
        except DoomspireError as exc:
            turn.success = False
            turn.error = str(exc)
            logger.warning("Turn of %s failed: %s", player.name, exc)
            self._note(player.name, LogEntryType.SYSTEM, f"Turn failed: {exc}")

        if not self.state.is_finished and self.state.current_round >= self.settings.max_rounds:
            self._note("", LogEntryType.SYSTEM, f"Maximum rounds ({self.settings.max_rounds}) reached")
            self._note("", LogEntryType.SYSTEM, "Game ended without a winner")
            logger.info("Game ended without a winner after %d rounds", self.state.current_round)
            self.state = self.state.finish()

        if self.state.is_finished:
            self.loop_state = LoopState.GAME_OVER
            turn.game_over = True
            turn.winner = self.state.winner
            turn.victory = self.state.victory.value if self.state.victory else None
        else:
            self.state = self.state.advance_to_next_player()
            self.loop_state = LoopState.TURN_COMPLETE

        self.turns.append(turn)
        logger.info(
            "Round %d: %s spent %s on %d action(s)%s",
            self.state.current_round, player.name, rolled, len(turn.actions),
            "" if turn.success else " (failed)",
        )
        return turn

    async def _assess(self, agent: PlayerAgent, rolled: list[int]):
        try:
            assessment = await agent.make_strategic_assessment(self.state.clone(), self.log.entries, list(rolled))
        except Exception as exc:
            raise AgentError(agent.get_name(), f"strategic assessment failed: {exc}") from exc
        if assessment:
            self._note(agent.get_name(), LogEntryType.ASSESSMENT, assessment)

    async def _request_action(self, agent: PlayerAgent, rolled: list[int], pool: DicePool) -> Action:
        context = TurnContext(
            round=self.state.current_round,
            dice_rolled=list(rolled),
            remaining=pool.remaining(),
            settings=self.settings,
        )
        try:
            action = await agent.request_dice_action(self.state.clone(), self.log.entries, context)
        except Exception as exc:
            raise AgentError(agent.get_name(), f"could not choose an action: {exc}") from exc
        if not isinstance(action, Action):
            raise AgentError(agent.get_name(), f"returned {type(action).__name__} instead of an Action")
        return action

    async def _answer(self, request: DecisionRequest) -> Any:
        """
        Ask the addressed player's agent; validation happens in the resolver.

        The agent sees the state of the action in progress, not the last
        committed one.
        """
        agent = self.agents.get(request.player_name)
        if agent is None:
            raise AgentError(request.player_name, "no agent to answer the decision")
        view = request.view if request.view is not None else self.state
        try:
            return await agent.request_decision(view.clone(), replace(request, view=None))
        except Exception as exc:
            raise AgentError(request.player_name, f"decision failed: {exc}") from exc

    def _declare_winner(self, victory: Victory):
        self.state = self.state.finish(victory.player_name, victory.victory_type)
        message = f"{victory.player_name} wins by {victory.victory_type.value}!"
        self._note(victory.player_name, LogEntryType.VICTORY, message)
        logger.info(message)

    def _note(self, player_name: str, entry_type: LogEntryType, content: str):
        self.log.add(self.state.current_round, player_name, entry_type, content)
