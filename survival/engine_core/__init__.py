"""
Engine Core - Deterministic turn resolution for the survival grid.

The engine is the runtime that:
1. Sets up a GameState from player names and a RuleSet
2. Applies moves and clock ticks via the reducer
3. Places resources away from players when the rules ask for it
4. Decides when the game is over and who won
"""

from .state import (
    GameState,
    GamePhase,
    PlayerState,
    Position,
    Resource,
    ResourceKind,
    Direction,
    GameOutcome,
    EndReason,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .placement import ResourcePlacer, PlacementError
from .reducer import Reducer, apply_action, resolve_timeout
from .setup import setup_game

__all__ = [
    "GameState",
    "GamePhase",
    "PlayerState",
    "Position",
    "Resource",
    "ResourceKind",
    "Direction",
    "GameOutcome",
    "EndReason",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ResourcePlacer",
    "PlacementError",
    "Reducer",
    "apply_action",
    "resolve_timeout",
    "setup_game",
]
