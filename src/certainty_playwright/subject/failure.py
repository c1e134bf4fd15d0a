# src/certainty_playwright/subject/failure.py
"""
Failure Strategies

A failure strategy decides what happens when an assertion is false. Subjects
never raise on their own; they call ``fail(message)`` on their strategy.

- RaisingFailureStrategy: raise immediately (classic hard assertions)
- SoftAssertions: collect every failure and raise once at the end, so a
  single false expectation does not abort a whole asynchronous sequence

With ``failure_mode=collect`` subjects without an explicit strategy share
one collector, available from collected_failures().

Example:
    >>> with soft_assert() as failures:
    ...     subject = assert_that(element, failures)
    ...     await subject.has_class("active")
    ...     await subject.is_displayed()
    # assert_all() runs on exit and reports both failures together
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from certainty_playwright.config.settings import FailureMode, Settings, get_settings
from certainty_playwright.core.enums import ErrorSeverity
from certainty_playwright.core.exceptions import AssertionFailedError
from certainty_playwright.core.logger import get_logger


class FailureStrategy(Protocol):
    """Anything that can be told an assertion failed."""

    def fail(self, message: str) -> None:
        ...


class RaisingFailureStrategy:
    """Raise AssertionFailedError on the first failure."""

    def __init__(self):
        self.logger = get_logger("failure")

    def fail(self, message: str) -> None:
        self.logger.info("Assertion failed", message=message, strategy="raise")
        raise AssertionFailedError(message)


@dataclass
class AssertionFailure:
    """Details about a single assertion failure."""

    message: str
    timestamp: float = field(default_factory=time.time)
    context: Dict[str, Any] = field(default_factory=dict)
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    def to_dict(self) -> Dict[str, Any]:
        """Convert failure to dictionary for reporting."""
        return {
            "message": self.message,
            "timestamp": self.timestamp,
            "context": self.context,
            "severity": self.severity.value,
        }


class SoftAssertions:
    """
    Soft assertion collector that allows tests to continue after failures.

    Collects assertion failures without immediately failing the test,
    allowing a full sequence of element checks to run before the test
    reports.
    """

    def __init__(self, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        """
        Initialize soft assertions.

        Args:
            severity: Severity recorded for failures reported through fail()
        """
        self.severity = severity
        self.failures: List[AssertionFailure] = []
        self.logger = get_logger("soft_assertions")

    def fail(self, message: str) -> None:
        """Record a failure reported by a subject."""
        self.add_failure(message, severity=self.severity)

    def add_failure(
            self,
            message: str,
            severity: ErrorSeverity = ErrorSeverity.MEDIUM,
            context: Optional[Dict[str, Any]] = None
    ) -> "SoftAssertions":
        """Add a failure with an explicit severity and context."""
        self.failures.append(
            AssertionFailure(
                message=message,
                severity=severity,
                context=context or {}
            )
        )

        self.logger.info(
            "Soft assertion failed",
            message=message,
            severity=severity.value,
            failure_count=len(self.failures)
        )

        return self

    def has_failures(self) -> bool:
        """Check if there are any assertion failures."""
        return len(self.failures) > 0

    def get_failures(self) -> List[AssertionFailure]:
        """Get all assertion failures."""
        return self.failures.copy()

    def get_failure_count(self) -> int:
        """Get number of failures."""
        return len(self.failures)

    def get_messages(self) -> List[str]:
        """Get the messages of all failures, in the order they were reported."""
        return [f.message for f in self.failures]

    def get_failures_by_severity(self, severity: ErrorSeverity) -> List[AssertionFailure]:
        """Get failures filtered by severity."""
        return [f for f in self.failures if f.severity == severity]

    def clear_failures(self) -> None:
        """Clear all assertion failures."""
        self.failures.clear()

    def assert_all(self) -> None:
        """
        Raise AssertionFailedError if there are any failures.

        This should be called at the end of a test to fail it if soft
        assertions failed.
        """
        if not self.has_failures():
            return

        failure_details = [
            f"{i}. {failure.message}" for i, failure in enumerate(self.failures, 1)
        ]
        main_message = (
            f"Soft assertions failed: {len(self.failures)}\n" + "\n".join(failure_details)
        )
        severity = max((f.severity for f in self.failures), key=lambda s: s.rank())

        exception = AssertionFailedError(
            message=main_message,
            assertion_type="soft_assertions",
            severity=severity
        )
        exception.add_context("failure_count", len(self.failures))
        exception.add_context("failure_details", [f.to_dict() for f in self.failures])

        raise exception

    def __enter__(self) -> "SoftAssertions":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - automatically call assert_all."""
        if exc_type is None:  # Only check soft assertions if no other exception
            self.assert_all()


# Global collector for failure_mode=collect
_collected_failures: Optional[SoftAssertions] = None
_collected_for: Optional[Settings] = None


def collected_failures() -> SoftAssertions:
    """
    Get the process-wide collector used when ``failure_mode`` is ``collect``.

    Every subject created without an explicit strategy reports into this
    collector, so a test (or an autouse fixture) calls ``assert_all()`` on it
    to fail on what was gathered. A new collector is started whenever the
    settings are reloaded.

    Returns:
        SoftAssertions: Shared collector for the current settings
    """
    global _collected_failures, _collected_for

    settings = get_settings()
    if _collected_failures is None or _collected_for is not settings:
        _collected_failures = SoftAssertions()
        _collected_for = settings

    return _collected_failures


def default_failure_strategy() -> FailureStrategy:
    """Build the failure strategy selected by the ``failure_mode`` setting."""
    if get_settings().failure_mode == FailureMode.COLLECT:
        return collected_failures()
    return RaisingFailureStrategy()
