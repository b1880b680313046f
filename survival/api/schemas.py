"""
Pydantic Schemas - Request/response models for any presentation layer.

These models define the exact contract between a front end and the engine.
A front end submits a CreateGameRequest, then MoveRequests, and renders
the GameStateResponse it gets back.

Error Codes:
- INVALID_SETUP: Missing name or portrait, or bad game options
- INVALID_DIRECTION: Direction is not up/down/left/right
- RESOURCE_LOCKED: Tried to gather food or water before enough wood
- NOT_YOUR_TURN: Move sent for the player who is not up
- GAME_OVER: Game already finished, input ignored
- SESSION_NOT_FOUND: Session does not exist or has ended
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class DirectionName(str, Enum):
    """Directions accepted by the move endpoint."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_SETUP = "INVALID_SETUP"
    INVALID_DIRECTION = "INVALID_DIRECTION"
    RESOURCE_LOCKED = "RESOURCE_LOCKED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_OVER = "GAME_OVER"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class PlayerSetup(BaseModel):
    """One player's setup form."""
    name: str = Field(..., min_length=1, description="Display name")
    portrait: str = Field(
        ..., min_length=1,
        description="Opaque portrait handle (object URL, file path, glyph)",
    )

    @field_validator("name", "portrait")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    players: list[PlayerSetup] = Field(..., min_length=2, max_length=2)
    variant: Optional[str] = Field(None, description="classic or unlock")
    grid_size: Optional[int] = Field(None, ge=2, le=64)
    duration_seconds: Optional[int] = Field(None, ge=1)
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")
    start_clock: bool = Field(True, description="Start the countdown immediately")


class MoveRequest(BaseModel):
    """A directional input for the player whose turn it is."""
    direction: DirectionName
    player_id: Optional[str] = Field(
        None, description="Checked against the current player when given"
    )


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    x: int
    y: int


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    portrait: str
    position: PositionInfo
    food: int = 0
    water: int = 0
    wood: int = 0
    move_count: int = 0
    is_current_turn: bool = False


class ResourceInfo(BaseModel):
    """A resource pile on the grid. amount is None when infinite."""
    kind: str
    position: PositionInfo
    amount: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[list[str]] = Field(None, description="Additional error context")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: SessionStatus
    variant: str
    grid_size: int
    turn_number: int
    seconds_remaining: int
    players: list[PlayerInfo] = Field(default_factory=list)
    resources: list[ResourceInfo] = Field(default_factory=list)
    current_turn_player_id: Optional[str] = None
    winner: Optional[str] = None
    loser: Optional[str] = None
    game_over_reason: Optional[str] = None
    message: Optional[str] = None


class TurnResponse(BaseModel):
    """Result of a move: whether it was taken, what to tell the players."""
    session_id: str
    accepted: bool
    notices: list[str] = Field(default_factory=list)
    changes: list[str] = Field(default_factory=list)
    error_code: Optional[ErrorCode] = None
    game_state: GameStateResponse


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int
