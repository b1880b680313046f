"""Rule sets - the parameters that distinguish game variants."""

from .ruleset import (
    RuleSet,
    RuleVariant,
    classic_rules,
    unlock_rules,
    ruleset_for,
    RULESETS,
)
from .validation import validate_ruleset, RuleSetValidationError, ValidationResult

__all__ = [
    "RuleSet",
    "RuleVariant",
    "classic_rules",
    "unlock_rules",
    "ruleset_for",
    "RULESETS",
    "validate_ruleset",
    "RuleSetValidationError",
    "ValidationResult",
]
