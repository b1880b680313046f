"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when both players have submitted a name and portrait
- Holds the current game state
- Serializes moves and clock ticks
- Destroyed when the game view goes away

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult
from .clock import GameClock

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "GameClock",
]
