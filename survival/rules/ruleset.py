"""
Rule Sets - The configurable parameters of a game variant.

Two variants exist:
- CLASSIC: players start stocked, resources run out, no placement guarantees.
  The game ends when a player's stock hits zero or time runs out.
- UNLOCK: players start empty, resources never run out, wood unlocks
  food and water. First to the goal wins, hitting the move cap loses.

The engine never branches on anything but the RuleSet, so a new
variant is a new factory here, not a new code path in the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class RuleVariant(Enum):
    """Known rule variants."""
    CLASSIC = "classic"
    UNLOCK = "unlock"


DEFAULT_GRID_SIZE = 8
DEFAULT_DURATION_MS = 120_000
DEFAULT_TICK_MS = 1_000


@dataclass
class RuleSet:
    """
    Parameters for one variant.

    resource_amount of None means the resource is infinite.
    unlock_threshold of None disables unlock gating.
    goal_target / max_moves of None disable that end condition.
    """
    variant: RuleVariant
    grid_size: int = DEFAULT_GRID_SIZE
    duration_ms: int = DEFAULT_DURATION_MS
    tick_ms: int = DEFAULT_TICK_MS

    # Starting stock per player (food, water, wood)
    starting_stock: int = 0
    resource_amount: int | None = None

    # Unlock rule: wood gates food and water
    unlock_threshold: int | None = None

    # End conditions
    goal_target: int | None = None
    max_moves: int | None = None
    lose_on_empty_stock: bool = False

    # Placement
    avoid_players: bool = False
    placement_attempts: int = 64

    num_players: int = 2
    start_positions: list[tuple[int, int]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.variant.value

    def player_starts(self) -> list[tuple[int, int]]:
        """Start cells per player; defaults to opposite corners."""
        if self.start_positions:
            return list(self.start_positions)
        last = self.grid_size - 1
        return [(0, 0), (last, last)][: self.num_players]

    def validated(self) -> RuleSet:
        """Return self, raising RuleSetValidationError if invalid."""
        from .validation import validate_ruleset, RuleSetValidationError

        result = validate_ruleset(self)
        if not result.valid:
            raise RuleSetValidationError(result.errors)
        return self

    def with_overrides(
        self,
        grid_size: int | None = None,
        duration_ms: int | None = None,
        tick_ms: int | None = None,
    ) -> RuleSet:
        """Return a copy with the common knobs replaced."""
        return RuleSet(
            variant=self.variant,
            grid_size=grid_size if grid_size is not None else self.grid_size,
            duration_ms=duration_ms if duration_ms is not None else self.duration_ms,
            tick_ms=tick_ms if tick_ms is not None else self.tick_ms,
            starting_stock=self.starting_stock,
            resource_amount=self.resource_amount,
            unlock_threshold=self.unlock_threshold,
            goal_target=self.goal_target,
            max_moves=self.max_moves,
            lose_on_empty_stock=self.lose_on_empty_stock,
            avoid_players=self.avoid_players,
            placement_attempts=self.placement_attempts,
            num_players=self.num_players,
            start_positions=list(self.start_positions),
        )


def classic_rules(**overrides) -> RuleSet:
    """The original rules: finite resources, lose when a stock runs dry."""
    rules = RuleSet(
        variant=RuleVariant.CLASSIC,
        starting_stock=5,
        resource_amount=3,
        lose_on_empty_stock=True,
        avoid_players=False,
    )
    return rules.with_overrides(**overrides) if overrides else rules


def unlock_rules(**overrides) -> RuleSet:
    """Wood unlocks food and water; 5 of each wins, 25 moves loses."""
    rules = RuleSet(
        variant=RuleVariant.UNLOCK,
        starting_stock=0,
        resource_amount=None,
        unlock_threshold=5,
        goal_target=5,
        max_moves=25,
        avoid_players=True,
    )
    return rules.with_overrides(**overrides) if overrides else rules


RULESETS = {
    RuleVariant.CLASSIC: classic_rules,
    RuleVariant.UNLOCK: unlock_rules,
}


def ruleset_for(variant: RuleVariant | str, **overrides) -> RuleSet:
    """Look up a variant by enum or name and build its RuleSet."""
    if isinstance(variant, str):
        try:
            variant = RuleVariant(variant.lower())
        except ValueError:
            known = ", ".join(v.value for v in RuleVariant)
            raise ValueError(f"Unknown rule variant '{variant}' (known: {known})")
    return RULESETS[variant](**overrides)
