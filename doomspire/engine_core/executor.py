"""
Action Executor - Resolves one dice action against the game state.

The executor is the single point of state mutation for dice actions.

Design principles:
- Validate first: unknown players, champions, boats and dice that
  were never rolled raise before anything is touched
- Work on a clone: resolvers mutate a private copy of the state (and
  decks); the caller commits ActionResult.new_state only on success
- Dice are consumed only after the action resolved completely
- Resolution is a generator, so decisions bubble up to the caller
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
import logging

from .action import Action, ActionResult, ActionType
from .arrival import resolve_arrival
from .context import ResolutionContext
from .decisions import Resolution, settle, with_view
from .decks import ContentTables, TieredDecks
from .dice import DicePool, DiceRoller
from .errors import ContractError, GameStateError, InvalidConsumption
from .harvest import apply_harvest, calculate_harvest
from .log import GameLog, LogEntryType
from .movement import BoatFerryOutcome, calculate_boat_move, calculate_champion_move
from .settings import GameSettings, DEFAULT_SETTINGS
from .state import GamePhase, GameState


logger = logging.getLogger(__name__)


@dataclass
class ActionExecutor:
    """
    Resolves dice actions.

    Stateless - all game state is in GameState; content tables and
    settings are read-only.
    """
    settings: GameSettings = DEFAULT_SETTINGS
    content: ContentTables = field(default_factory=ContentTables)

    def resolve(
        self,
        state: GameState,
        action: Action,
        pool: DicePool,
        dice: DiceRoller,
        decks: TieredDecks | None = None,
    ) -> Resolution[ActionResult]:
        """
        Resolve an action, yielding any decisions it needs.

        Returns ActionResult with the new state. `state` itself is never
        modified; `pool` is only consumed once resolution finished.
        """
        self.validate(state, action, pool)

        # Copies share the game's dice so one seed keeps driving every roll
        shared = {id(dice): dice}
        if decks is not None:
            shared[id(decks.dice)] = decks.dice
        working_state, working_decks = deepcopy((state, decks), shared)
        ctx = ResolutionContext(
            state=working_state,
            dice=dice,
            decks=working_decks,
            content=self.content,
            log=GameLog(),
            settings=self.settings,
        )

        handler = self._get_handler(action.action_type)
        result = yield from with_view(settle(handler(ctx, action)), working_state)

        pool.consume_many(action.die_values)
        result.new_decks = working_decks
        result.log_entries = ctx.log.entries
        return result

    def validate(self, state: GameState, action: Action, pool: DicePool):
        """Raise if the action breaks an engine contract."""
        if state.phase != GamePhase.PLAYING:
            raise GameStateError(f"Cannot resolve actions while the game is {state.phase.value}")

        player = state.get_player(action.player_name)
        if player.name != state.current_player.name:
            raise ContractError(f"It is not {player.name}'s turn")

        if not action.die_values or not pool.can_consume(action.die_values):
            raise InvalidConsumption(action.die_values, pool.remaining())

        payload = action.payload
        if action.action_type == ActionType.MOVE_CHAMPION:
            if len(action.die_values) != 1:
                raise ContractError("A champion move uses exactly one die")
            player.get_champion(payload.champion_id)
        elif action.action_type == ActionType.MOVE_BOAT:
            if len(action.die_values) != 1:
                raise ContractError("A boat move uses exactly one die")
            player.get_boat(payload.boat_id)
            if payload.ferry_champion_id is not None:
                player.get_champion(payload.ferry_champion_id)
                if payload.drop_position is None:
                    raise ContractError("Ferrying a champion needs a drop position")

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.MOVE_CHAMPION: self._handle_move_champion,
            ActionType.MOVE_BOAT: self._handle_move_boat,
            ActionType.HARVEST: self._handle_harvest,
        }
        return handlers[action_type]

    def _handle_move_champion(self, ctx: ResolutionContext, action: Action) -> Resolution[ActionResult]:
        """Walk the path, then run arrival on wherever the champion stopped."""
        payload = action.payload
        champion = ctx.state.get_champion(action.player_name, payload.champion_id)
        start = champion.position

        path = list(payload.path)
        if not path or path[0] != start:
            path.insert(0, start)

        move = calculate_champion_move(ctx.state, action.player_name, path, action.die_values[0])
        ctx.state.move_champion(action.player_name, champion.champion_id, move.end_position)
        change = (
            f"Moved champion{champion.champion_id} from {start} to {move.end_position} "
            f"({move.reason.value})"
        )
        ctx.note(action.player_name, LogEntryType.MOVEMENT, change)

        arrival = yield from resolve_arrival(ctx, action.player_name, champion.champion_id, payload.tile_intent)
        return ActionResult.success_with_state(
            ctx.state,
            [change],
            movement=move,
            arrival=arrival,
            game_over=arrival.game_over,
        )

    def _handle_move_boat(self, ctx: ResolutionContext, action: Action) -> Resolution[ActionResult]:
        """Sail the boat; ferry the champion only when both ends were in reach."""
        payload = action.payload
        player = ctx.state.get_player(action.player_name)
        boat = player.get_boat(payload.boat_id)
        start = boat.zone

        path = list(payload.boat_path)
        if not path or path[0] != start:
            path.insert(0, start)

        champion = None
        if payload.ferry_champion_id is not None:
            champion = player.get_champion(payload.ferry_champion_id)

        move = calculate_boat_move(
            path,
            action.die_values[0],
            champion.position if champion else None,
            payload.drop_position if champion else None,
        )
        boat.zone = move.end_zone
        changes = [f"Moved boat{boat.boat_id} from {start.value} to {move.end_zone.value}"]
        ctx.note(action.player_name, LogEntryType.BOAT, changes[0])

        if move.ferry != BoatFerryOutcome.CHAMPION_MOVED:
            if move.ferry != BoatFerryOutcome.NO_CHAMPION:
                # Soft failure: the boat still moved
                logger.debug("Ferry for %s skipped: %s", action.player_name, move.ferry.value)
                ctx.note(
                    action.player_name, LogEntryType.BOAT,
                    f"Could not ferry champion{champion.champion_id}: {move.ferry.value}",
                )
            return ActionResult.success_with_state(ctx.state, changes, movement=move)

        origin = champion.position
        ctx.state.move_champion(action.player_name, champion.champion_id, payload.drop_position)
        changes.append(f"Ferried champion{champion.champion_id} from {origin} to {payload.drop_position}")
        ctx.note(action.player_name, LogEntryType.BOAT, changes[-1])

        arrival = yield from resolve_arrival(ctx, action.player_name, champion.champion_id, payload.tile_intent)
        return ActionResult.success_with_state(
            ctx.state,
            changes,
            movement=move,
            arrival=arrival,
            game_over=arrival.game_over,
        )

    def _handle_harvest(self, ctx: ResolutionContext, action: Action) -> ActionResult:
        budget = sum(action.die_values)
        report = calculate_harvest(ctx.state, action.player_name, action.payload.harvest_positions, budget)
        apply_harvest(ctx.state, action.player_name, report)

        change = f"Harvested {report.resources.describe()} from {report.tile_count} tile(s)"
        if report.skipped:
            skipped = ", ".join(f"{pos} ({reason.value})" for pos, reason in report.skipped)
            change += f"; skipped {skipped}"
        ctx.note(action.player_name, LogEntryType.HARVEST, change)
        return ActionResult.success_with_state(ctx.state, [change], harvest=report)
