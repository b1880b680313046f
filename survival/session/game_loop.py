"""
Game Loop - Serializes player moves and clock ticks for one session.

The loop:
1. Presentation layer forwards a direction
2. Loop applies it through the reducer under its lock
3. Clock ticks take the same lock, so no update is lost
4. Listeners are notified with the new snapshot, in transition order
5. When the game ends the clock is stopped
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import threading
from typing import Callable, TYPE_CHECKING

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.state import Direction, GameState, GameOutcome
from .clock import GameClock
from .manager import SessionState
from ..utils.logging_config import get_game_logger

if TYPE_CHECKING:
    from .manager import Session

logger = get_game_logger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"
    CLOSED = "closed"


@dataclass
class TurnResult:
    """
    Result of processing one move or tick.

    game_state is the snapshot to render, whether or not the
    input was accepted.
    """
    success: bool
    loop_state: LoopState
    game_state: GameState | None = None

    # Messages to show the players
    notices: list[str] = field(default_factory=list)

    # Human-readable description of what changed
    changes: list[str] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)
    error_code: str | None = None

    outcome: GameOutcome | None = None

    @property
    def game_over(self) -> bool:
        return self.outcome is not None


Listener = Callable[[TurnResult], None]


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)
        loop.subscribe(render)
        loop.start()

        # Key press comes in
        result = loop.move("up")

        # Game view torn down
        loop.close()
    """

    def __init__(self, session: Session, reducer: Reducer | None = None):
        self.session = session
        self.reducer = reducer or Reducer(rules=session.rules, placer=session.placer)
        self.state = LoopState.READY
        self.clock = GameClock(session.rules.tick_ms, self.tick)
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        session.game_loop = self

        if session.game_state and session.game_state.is_over:
            self.state = LoopState.GAME_OVER

    def subscribe(self, listener: Listener):
        """
        Register a callback run after every accepted or rejected input.

        Callbacks run under the loop lock, one transition at a time, so
        they must not wait on another thread that drives this loop.
        """
        self._listeners.append(listener)

    def start(self):
        """Start the countdown."""
        with self._lock:
            if self.state != LoopState.READY:
                return
            self.state = LoopState.RUNNING
            self.session.state = SessionState.ACTIVE
            self.clock.start()

    def move(self, direction: Direction | str, player_id: str | None = None) -> TurnResult:
        """
        Apply a move for the current player.

        Raises:
            ValueError: if direction is not a known direction
        """
        action = Action.move(player_id, direction)
        return self._dispatch(action)

    def tick(self, elapsed_ms: int | None = None) -> TurnResult:
        """Run the clock down by elapsed_ms (one interval by default)."""
        if elapsed_ms is None:
            elapsed_ms = self.session.rules.tick_ms
        return self._dispatch(Action.tick(elapsed_ms))

    def close(self):
        """Stop the clock for good. Further input is refused."""
        with self._lock:
            self.clock.stop()
            self.state = LoopState.CLOSED
            self._listeners.clear()

    def _dispatch(self, action: Action) -> TurnResult:
        with self._lock:
            if self.state == LoopState.CLOSED or self.session.game_state is None:
                return TurnResult(
                    success=False,
                    loop_state=self.state,
                    game_state=self.session.game_state,
                    errors=["Game loop is closed"],
                    error_code="CLOSED",
                )

            result = self.reducer.apply(self.session.game_state, action)
            self.session.game_state = result.new_state

            if result.game_over and self.state != LoopState.GAME_OVER:
                self._finish()

            turn = self._to_turn_result(result)

            # Notified in transition order; a listener may call back in on this thread
            for listener in list(self._listeners):
                listener(turn)
        return turn

    def _finish(self):
        # Caller holds self._lock
        self.clock.stop()
        self.state = LoopState.GAME_OVER
        self.session.state = SessionState.GAME_OVER
        logger.info("Session %s finished", self.session.session_id)

    def _to_turn_result(self, result: ActionResult) -> TurnResult:
        state = result.new_state
        return TurnResult(
            success=result.success,
            loop_state=self.state,
            game_state=state,
            notices=list(result.notices),
            changes=list(result.state_changes),
            errors=[result.error] if result.error else [],
            error_code=result.error_code,
            outcome=state.outcome if state else None,
        )
