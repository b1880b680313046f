"""
Single place for default game configuration.

Every value can be overridden from the environment, e.g.
SURVIVAL_VARIANT=classic SURVIVAL_DURATION_SECONDS=60 survival play
"""

import os

from .rules import RuleSet, ruleset_for

SURVIVAL_LOG_LEVEL = os.getenv("SURVIVAL_LOG_LEVEL", "WARNING")
SURVIVAL_LOG_FORMAT = os.getenv("SURVIVAL_LOG_FORMAT", "simple")

# Rule variant used for new games when none is requested ("classic" or "unlock")
DEFAULT_VARIANT = os.getenv("SURVIVAL_VARIANT", "unlock")


def _int_env(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def default_ruleset(variant: str | None = None) -> RuleSet:
    """RuleSet for variant with environment overrides applied."""
    duration_seconds = _int_env("SURVIVAL_DURATION_SECONDS")
    return ruleset_for(
        variant or DEFAULT_VARIANT,
        grid_size=_int_env("SURVIVAL_GRID_SIZE"),
        duration_ms=duration_seconds * 1000 if duration_seconds is not None else None,
        tick_ms=_int_env("SURVIVAL_TICK_MS"),
    )
