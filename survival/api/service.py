"""
Game Service - Business logic layer between a front end and the engine.

The service:
1. Validates setup forms before any state exists
2. Creates sessions and their game loops
3. Translates directions into moves
4. Formats snapshots for rendering

This layer is framework-agnostic: a terminal, a desktop window or a
web page can drive it the same way.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    # Responses
    GameStateResponse,
    TurnResponse,
    ErrorResponse,
    EndSessionResponse,
    SessionListResponse,
    # Shared
    PlayerInfo,
    PositionInfo,
    ResourceInfo,
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..config import default_ruleset
from ..rules import RuleSetValidationError
from ..session import SessionManager, Session, GameLoop, TurnResult
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)

_ENGINE_ERROR_CODES = {
    "RESOURCE_LOCKED": ErrorCode.RESOURCE_LOCKED,
    "NOT_YOUR_TURN": ErrorCode.NOT_YOUR_TURN,
    "GAME_OVER": ErrorCode.GAME_OVER,
    "CLOSED": ErrorCode.SESSION_NOT_FOUND,
}


@dataclass
class GameService:
    """
    Main service for front ends.

    Usage:
        service = GameService()

        # Setup form submitted
        state = service.create_game({"players": [...]})

        # Key pressed
        turn = service.move(state.session_id, "left")
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest | dict[str, Any]) -> GameStateResponse | ErrorResponse:
        """
        Start a new game from a setup form.

        Invalid forms are rejected before any state is created.
        """
        if not isinstance(request, CreateGameRequest):
            try:
                request = CreateGameRequest.model_validate(request)
            except ValidationError as e:
                return ErrorResponse(
                    error="Invalid game setup",
                    error_code=ErrorCode.INVALID_SETUP,
                    details=[_format_validation_error(err) for err in e.errors()],
                )

        try:
            rules = default_ruleset(request.variant).with_overrides(
                grid_size=request.grid_size,
                duration_ms=(
                    request.duration_seconds * 1000
                    if request.duration_seconds is not None else None
                ),
            ).validated()
            session = self.session_manager.create_session(
                players=[(p.name, p.portrait) for p in request.players],
                rules=rules,
                random_seed=request.random_seed,
            )
        except RuleSetValidationError as e:
            return ErrorResponse(
                error="Invalid game options",
                error_code=ErrorCode.INVALID_SETUP,
                details=e.errors,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_SETUP)

        loop = GameLoop(session)
        if request.start_clock:
            loop.start()

        return self._state_response(session)

    def get_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current snapshot."""
        session = self.session_manager.get_session(session_id)
        if not session or session.game_state is None:
            return _session_not_found(session_id)
        return self._state_response(session)

    def move(self, session_id: str, request: MoveRequest | str) -> TurnResponse | ErrorResponse:
        """Apply a directional input for the current player."""
        session = self.session_manager.get_session(session_id)
        if not session or not session.game_loop:
            return _session_not_found(session_id)

        player_id = None
        if isinstance(request, MoveRequest):
            direction = request.direction.value
            player_id = request.player_id
        else:
            direction = request

        try:
            result = session.game_loop.move(direction, player_id=player_id)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_DIRECTION)

        return self._turn_response(session, result)

    def tick(self, session_id: str, elapsed_ms: int | None = None) -> GameStateResponse | ErrorResponse:
        """
        Advance the clock by hand.

        For front ends that run their own timer instead of the session clock.
        """
        session = self.session_manager.get_session(session_id)
        if not session or not session.game_loop:
            return _session_not_found(session_id)
        session.game_loop.tick(elapsed_ms)
        return self._state_response(session)

    def end_game(self, session_id: str) -> EndSessionResponse:
        """Tear a game down and stop its clock."""
        success = self.session_manager.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> SessionListResponse:
        """List active sessions."""
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Response builders
    # =========================================================================

    def _turn_response(self, session: Session, result: TurnResult) -> TurnResponse:
        error_code = None
        if not result.success and result.error_code:
            error_code = _ENGINE_ERROR_CODES.get(result.error_code, ErrorCode.INTERNAL_ERROR)

        return TurnResponse(
            session_id=session.session_id,
            accepted=result.success,
            notices=result.notices,
            changes=result.changes,
            error_code=error_code,
            game_state=self._state_response(session),
        )

    def _state_response(self, session: Session) -> GameStateResponse:
        state = session.game_state
        outcome = state.outcome

        players = [
            PlayerInfo(
                player_id=p.player_id,
                name=p.name,
                portrait=p.portrait,
                position=PositionInfo(x=p.position.x, y=p.position.y),
                food=p.food,
                water=p.water,
                wood=p.wood,
                move_count=p.move_count,
                is_current_turn=(not state.is_over and i == state.current_player_idx),
            )
            for i, p in enumerate(state.players)
        ]
        resources = [
            ResourceInfo(
                kind=r.kind.value,
                position=PositionInfo(x=r.position.x, y=r.position.y),
                amount=r.amount,
            )
            for r in state.resources.values()
        ]

        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            variant=state.variant,
            grid_size=state.grid_size,
            turn_number=state.turn_number,
            seconds_remaining=state.seconds_remaining,
            players=players,
            resources=resources,
            current_turn_player_id=None if state.is_over else state.current_player.player_id,
            winner=outcome.winner_name if outcome else None,
            loser=outcome.loser_name if outcome else None,
            game_over_reason=outcome.reason.value if outcome else None,
            message=outcome.message if outcome else None,
        )


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _format_validation_error(err: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    return f"{location}: {err.get('msg', 'invalid')}" if location else err.get("msg", "invalid")
