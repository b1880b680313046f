"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Players submit names and portraits -> session created with initial state
2. Game loop starts the clock
3. Moves and ticks go through the game loop, one at a time
4. Game ends (goal, move limit, empty stock, timeout) -> clock stopped
5. Session ended -> removed from memory, clock cancelled

PERSISTENCE RULES:
- Sessions are in-memory only
- Nothing survives the process
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
import uuid
import time

from ..rules import RuleSet, unlock_rules
from ..engine_core.state import GameState
from ..engine_core.placement import ResourcePlacer
from ..engine_core.setup import setup_game
from ..utils.logging_config import get_game_logger

if TYPE_CHECKING:
    from .game_loop import GameLoop

logger = get_game_logger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # State set up, clock not started
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Ended before completion


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The rule set
    - Current canonical game state
    - The placement RNG shared by setup and every later turn
    - The game loop driving it, once attached
    """
    session_id: str
    rules: RuleSet
    created_at: float
    placer: ResourcePlacer

    state: SessionState = SessionState.CREATED
    game_state: GameState | None = None
    game_loop: GameLoop | None = None

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from player setups
    - Track sessions
    - Tear sessions down, stopping their clocks

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        players: list[tuple[str, str]],
        rules: RuleSet | None = None,
        random_seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            players: (name, portrait) per player, in turn order
            rules: Variant parameters (defaults to the unlock rules)
            random_seed: Seed for reproducible resource placement

        Returns:
            New Session with its initial GameState

        Raises:
            ValueError: if a name or portrait is missing
        """
        game_rules = rules or unlock_rules()
        session_id = str(uuid.uuid4())

        placer = ResourcePlacer(
            grid_size=game_rules.grid_size,
            seed=random_seed,
            max_attempts=game_rules.placement_attempts,
        )
        game_state = setup_game(
            players,
            rules=game_rules,
            random_seed=random_seed,
            game_id=session_id,
            placer=placer,
        )

        session = Session(
            session_id=session_id,
            rules=game_rules,
            created_at=time.time(),
            placer=placer,
            game_state=game_state,
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (%s, %s)",
            session_id, game_rules.name, " vs ".join(p.name for p in game_state.players),
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The clock is stopped and the session removed from memory.
        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if session.game_loop:
            session.game_loop.close()

        if reason == "completed" and session.game_state and session.game_state.is_over:
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED

        session.game_state = None
        session.game_loop = None
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Clean up finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
