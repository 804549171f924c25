"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session and game master calls
2. Manages games through the SessionManager
3. Formats engine state as response schemas

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    ErrorResponse,
    GameResponse,
    GameStateResponse,
    GameLogResponse,
    TurnResponse,
    RunResponse,
    # Shared
    BoatInfo,
    ChampionInfo,
    ItemInfo,
    LogEntryInfo,
    PlayerInfo,
    PositionInfo,
    ResourcesInfo,
    TileInfo,
    # Enums
    ErrorCode,
    GameStatus,
)
from ..engine_core.settings import GameSettings, DEFAULT_SETTINGS
from ..engine_core.state import GameState, Player, Position, Resources, Tile
from ..session import Session, SessionManager


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        game = service.create_game(CreateGameRequest(num_players=3, seed=7))
        turn = await service.play_turn(game.game_id)
        result = await service.run_game(game.game_id)
    """
    settings: GameSettings = DEFAULT_SETTINGS
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(self.settings)

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """
        Create and start a bot-only game.

        Raises ValueError for an invalid table (duplicate names, too many players).
        """
        session = self.session_manager.create_session(
            player_names=request.players,
            num_players=request.num_players,
            seed=request.seed,
            max_rounds=request.max_rounds,
            agent_kind=request.agent_kind.value,
        )
        return self._game_response(session)

    def get_game(self, game_id: str) -> GameResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return self._game_response(session)

    def list_games(self) -> list[GameResponse]:
        return [self._game_response(s) for s in self.session_manager.list_sessions()]

    def delete_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    def get_game_state(self, game_id: str) -> GameStateResponse | ErrorResponse:
        """Get the full board and player state."""
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return self._build_game_state(session)

    def get_log(self, game_id: str, since: int = 0) -> GameLogResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        entries = [
            LogEntryInfo(**entry.to_dict())
            for entry in session.master.log.entries[since:]
        ]
        return GameLogResponse(game_id=game_id, entries=entries, count=len(entries))

    async def play_turn(self, game_id: str) -> TurnResponse | ErrorResponse:
        """
        Play the current player's turn.

        A turn in which a bot failed is a TURN_FAILED error whose details
        hold the turn as it was recorded; the game has still moved on to
        the next player.
        """
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        if session.master.is_finished:
            return self._game_over(game_id)

        turn = await session.play_turn()
        response = TurnResponse(
            game_id=game_id,
            player_name=turn.player_name,
            dice=turn.dice,
            actions=turn.actions,
            success=turn.success,
            error=turn.error,
            game_over=turn.game_over,
            winner=turn.winner,
            victory=turn.victory,
            current_round=session.master.state.current_round,
        )
        if not turn.success:
            return ErrorResponse(
                error=f"Turn of {turn.player_name} failed: {turn.error}",
                error_code=ErrorCode.TURN_FAILED,
                details=response.model_dump(mode="json"),
            )
        return response

    async def run_game(self, game_id: str) -> RunResponse | ErrorResponse:
        """Play the game to the end."""
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        if session.master.is_finished:
            return self._game_over(game_id)

        summary = await session.play_out()
        return RunResponse(
            game_id=game_id,
            winner=summary.winner,
            victory=summary.victory,
            rounds=summary.rounds,
            turns=summary.turns,
            failed_turns=summary.failed_turns,
            final_fame=summary.final_fame,
            final_gold=summary.final_gold,
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )

    def _game_over(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} is already over",
            error_code=ErrorCode.GAME_OVER,
        )

    def _status(self, session: Session) -> GameStatus:
        return GameStatus(session.state.value)

    def _game_response(self, session: Session) -> GameResponse:
        """Convert Session to GameResponse."""
        state = session.master.state
        return GameResponse(
            game_id=session.session_id,
            status=self._status(session),
            players=[p.name for p in state.players],
            current_player=None if state.is_finished else state.current_player.name,
            current_round=state.current_round,
            seed=session.seed,
            winner=state.winner,
            victory=state.victory.value if state.victory else None,
            created_at=session.created_at,
        )

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """Build complete game state response."""
        state = session.master.state
        decks = session.master.decks
        return GameStateResponse(
            game_id=session.session_id,
            status=self._status(session),
            phase=state.phase.value,
            current_round=state.current_round,
            current_player=None if state.is_finished else state.current_player.name,
            players=[self._player_info(state, p) for p in state.players],
            board=[self._tile_info(t) for t in state.board.all_tiles()],
            deck_sizes={str(tier): decks.pile_sizes(tier) for tier in decks.tiers},
            winner=state.winner,
            victory=state.victory.value if state.victory else None,
        )

    def _player_info(self, state: GameState, player: Player) -> PlayerInfo:
        return PlayerInfo(
            name=player.name,
            color=player.color,
            fame=player.fame,
            might=player.might,
            resources=self._resources(player.resources),
            home_position=self._position(player.home_position),
            champions=[
                ChampionInfo(
                    champion_id=c.champion_id,
                    position=self._position(c.position),
                    items=[ItemInfo(**item.to_dict()) for item in c.items],
                )
                for c in player.champions
            ],
            boats=[BoatInfo(boat_id=b.boat_id, zone=b.zone.value) for b in player.boats],
            claimed_tiles=len(state.claimed_tiles(player.name)),
            is_current_turn=not state.is_finished and player.name == state.current_player.name,
        )

    def _tile_info(self, tile: Tile) -> TileInfo:
        return TileInfo(
            position=self._position(tile.position),
            tile_type=tile.tile_type.value,
            tier=tile.tier,
            explored=tile.explored,
            resources=self._resources(tile.resources) if tile.resources else None,
            starred=tile.starred,
            claimed_by=tile.claimed_by,
            monster=tile.monster.name if tile.monster else None,
            adventure_tokens=tile.adventure_tokens,
            items=[ItemInfo(**item.to_dict()) for item in tile.items],
        )

    def _position(self, position: Position) -> PositionInfo:
        return PositionInfo(row=position.row, col=position.col)

    def _resources(self, resources: Resources) -> ResourcesInfo:
        return ResourcesInfo(**resources.to_dict())
