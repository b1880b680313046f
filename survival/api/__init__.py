"""
API Module - Front-end interface.

Exposes the engine to a presentation layer. The front end:
1. Submits the setup form (names and portraits)
2. Forwards directional input
3. Renders the returned snapshot
4. Ends the game when its view goes away

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    PlayerSetup,
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
    ResourceInfo,
    PositionInfo,
    # Enums
    SessionStatus,
    DirectionName,
    ErrorCode,
)
from .service import GameService

__all__ = [
    # Requests
    "PlayerSetup",
    "CreateGameRequest",
    "MoveRequest",
    # Responses
    "GameStateResponse",
    "TurnResponse",
    "ErrorResponse",
    "EndSessionResponse",
    "SessionListResponse",
    # Shared
    "PlayerInfo",
    "ResourceInfo",
    "PositionInfo",
    # Enums
    "SessionStatus",
    "DirectionName",
    "ErrorCode",
    # Service
    "GameService",
]
