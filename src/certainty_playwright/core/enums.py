# src/certainty_playwright/core/enums.py
"""
Error Classification Enums

Enums used to categorize and prioritize the errors raised or reported by
the assertion library. Assertion failures and library misuse get separate
categories so that aggregated test output can tell them apart.
"""

from enum import Enum
from typing import Dict


class ErrorSeverity(str, Enum):
    """
    Severity levels for assertion failures and library errors.

    Usage:
        >>> soft.add_failure("...", severity=ErrorSeverity.HIGH)
    """

    LOW = "low"
    """Cosmetic mismatches, logged and collected."""

    MEDIUM = "medium"
    """Default for assertion and access failures reported through fail()."""

    HIGH = "high"
    """Failures a test marks as serious, via add_failure() or a collector built with it."""

    CRITICAL = "critical"
    """Bugs in test code or in this library; never collected silently."""

    def rank(self) -> int:
        """Numeric rank used to pick the highest severity of a group."""
        ranking: Dict[ErrorSeverity, int] = {
            ErrorSeverity.LOW: 0,
            ErrorSeverity.MEDIUM: 1,
            ErrorSeverity.HIGH: 2,
            ErrorSeverity.CRITICAL: 3,
        }
        return ranking[self]


class ErrorCategory(str, Enum):
    """
    Error categories for organizing exceptions by origin.

    Usage:
        >>> if error.category == ErrorCategory.USAGE:
        ...     raise error  # never aggregate misuse with assertion failures
    """

    VALIDATION = "validation"
    """An expectation about the value under test was false."""

    USAGE = "usage"
    """The library was used incorrectly (recording after settlement, unsupported replay)."""


