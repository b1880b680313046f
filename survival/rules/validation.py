"""
Rule Set Validation - Sanity checks for variant parameters.

Validates that:
1. Grid and timing values are positive
2. Start positions are on the grid and distinct
3. Thresholds are consistent (unlock <= goal)
4. There is room to place resources away from players
"""

from __future__ import annotations
from dataclasses import dataclass

from .ruleset import RuleSet


class RuleSetValidationError(Exception):
    """Raised when rule set validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Rule set validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_ruleset(rules: RuleSet) -> ValidationResult:
    """Validate a rule set. Returns ValidationResult with errors and warnings."""
    errors: list[str] = []
    warnings: list[str] = []

    if rules.grid_size < 1:
        errors.append("grid_size must be >= 1")
    if rules.duration_ms < 0:
        errors.append("duration_ms must be >= 0")
    if rules.tick_ms <= 0:
        errors.append("tick_ms must be > 0")
    if rules.num_players < 1:
        errors.append("num_players must be >= 1")
    if rules.starting_stock < 0:
        errors.append("starting_stock must be >= 0")
    if rules.resource_amount is not None and rules.resource_amount < 0:
        errors.append("resource_amount must be >= 0 or None for infinite")
    if rules.placement_attempts < 1:
        errors.append("placement_attempts must be >= 1")

    errors.extend(_validate_starts(rules))

    if rules.max_moves is not None and rules.max_moves < 1:
        errors.append("max_moves must be >= 1")
    if rules.goal_target is not None and rules.goal_target < 1:
        errors.append("goal_target must be >= 1")
    if (
        rules.unlock_threshold is not None
        and rules.goal_target is not None
        and rules.unlock_threshold > rules.goal_target
    ):
        errors.append("unlock_threshold must not exceed goal_target")

    # Players must leave at least one free cell for resource placement
    cells = rules.grid_size * rules.grid_size
    if rules.avoid_players and cells <= rules.num_players:
        errors.append(
            f"grid of {cells} cell(s) has no room for resources around "
            f"{rules.num_players} player(s)"
        )
    elif rules.avoid_players and cells < rules.num_players + 3:
        warnings.append("Grid is nearly full; resources will share cells")

    if rules.goal_target is None and not rules.lose_on_empty_stock and rules.max_moves is None:
        warnings.append("Only the timer can end this game")
    if rules.lose_on_empty_stock and rules.starting_stock == 0:
        warnings.append("Players start with an empty stock; the first move ends the game")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_starts(rules: RuleSet) -> list[str]:
    """Start positions must be on the grid, one per player, no duplicates."""
    errors = []
    starts = rules.player_starts()

    if len(starts) != rules.num_players:
        errors.append(
            f"Expected {rules.num_players} start position(s), got {len(starts)}"
        )

    seen = set()
    for x, y in starts:
        if not (0 <= x < rules.grid_size and 0 <= y < rules.grid_size):
            errors.append(f"Start position ({x}, {y}) is off the grid")
        if (x, y) in seen:
            errors.append(f"Duplicate start position ({x}, {y})")
        seen.add((x, y))

    return errors
