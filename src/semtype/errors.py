"""Exceptions raised by semtype"""
from typing import List


class SemtypeError(Exception):
    """Base class for semtype errors."""


class InvalidInputError(SemtypeError, ValueError):
    """Caller passed a value that breaks an input contract (e.g. a blank name)."""


class RuleConfigError(SemtypeError):
    """Rule tables or the type hierarchy failed the startup checks."""

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        summary = '; '.join(self.violations[:3])
        if len(self.violations) > 3:
            summary += f" (+{len(self.violations) - 3} more)"
        super().__init__(f"{len(self.violations)} rule configuration violation(s): {summary}")
