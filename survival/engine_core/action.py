"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (a directional move)
2. Clock input (time elapsed)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Direction


class ActionType(Enum):
    """Types of actions in the system."""
    MOVE = "move"
    TICK = "tick"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    This is a generic container; validation happens in the reducer.
    """
    player_id: str | None = None
    direction: Direction | None = None
    elapsed_ms: int = 0


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def move(cls, player_id: str, direction: Direction | str) -> Action:
        """Factory for move action."""
        return cls(
            action_type=ActionType.MOVE,
            payload=ActionPayload(player_id=player_id, direction=Direction.parse(direction)),
        )

    @classmethod
    def tick(cls, elapsed_ms: int) -> Action:
        """Factory for clock tick."""
        return cls(
            action_type=ActionType.TICK,
            payload=ActionPayload(elapsed_ms=elapsed_ms),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always a usable GameState: the next state on success,
    the untouched input state on failure.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes
    notices: list[str] = field(default_factory=list)  # Messages to show the players

    @property
    def game_over(self) -> bool:
        return bool(self.new_state and self.new_state.is_over)

    @classmethod
    def failure(
        cls,
        state: Any,
        error: str,
        error_code: str | None = None,
        notices: list[str] | None = None,
    ) -> ActionResult:
        """Create a failure result that leaves state untouched."""
        return cls(
            success=False,
            new_state=state,
            error=error,
            error_code=error_code,
            notices=notices or [],
        )

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        notices: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            notices=notices or [],
        )
