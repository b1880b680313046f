"""
Resource Placement - Picks cells for resources to (re)spawn on.

Two strategies:
- random_position: any cell, uniformly. Can land on a player.
- free_position: rejection sampling away from occupied cells.
  Retries are bounded; after that a full scan of free cells is used,
  so placement terminates even on tiny or crowded grids.
"""

from __future__ import annotations
import random
from collections.abc import Iterable

from .state import Position
from ..utils.logging_config import get_game_logger

logger = get_game_logger(__name__)


class PlacementError(Exception):
    """Raised when every cell of the grid is occupied."""


class ResourcePlacer:
    """
    Draws resource positions from a seedable RNG.

    Usage:
        placer = ResourcePlacer(grid_size=8, seed=42)
        pos = placer.free_position(state.occupied_positions())
    """

    def __init__(
        self,
        grid_size: int,
        seed: int | None = None,
        max_attempts: int = 64,
        rng: random.Random | None = None,
    ):
        if grid_size < 1:
            raise ValueError("grid_size must be >= 1")
        self.grid_size = grid_size
        self.max_attempts = max_attempts
        self.rng = rng or random.Random(seed)

    def random_position(self) -> Position:
        """Uniform cell, no overlap check."""
        return Position(
            x=self.rng.randrange(self.grid_size),
            y=self.rng.randrange(self.grid_size),
        )

    def free_position(self, occupied: Iterable[Position]) -> Position:
        """Uniform cell not in occupied."""
        blocked = set(occupied)

        for _ in range(self.max_attempts):
            candidate = self.random_position()
            if candidate not in blocked:
                return candidate

        free = [
            Position(x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if Position(x, y) not in blocked
        ]
        if not free:
            raise PlacementError(
                f"No free cell on a {self.grid_size}x{self.grid_size} grid"
            )
        logger.debug(
            "Rejection sampling gave up after %d attempts, scanning %d free cell(s)",
            self.max_attempts, len(free),
        )
        return self.rng.choice(free)

    def place(
        self,
        occupied: Iterable[Position],
        avoid: bool,
        piles: Iterable[Position] = (),
    ) -> Position:
        """
        Pick a position using the strategy the rules ask for.

        When avoiding, other piles are kept clear too as long as the
        grid has a cell left for that; players are always kept clear.
        """
        if not avoid:
            return self.random_position()

        occupied = set(occupied)
        blocked = occupied | set(piles)
        if len(blocked) < self.grid_size ** 2:
            return self.free_position(blocked)
        return self.free_position(occupied)
