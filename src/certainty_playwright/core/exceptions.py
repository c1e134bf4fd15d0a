# src/certainty_playwright/core/exceptions.py
"""
Exception Hierarchy for the Assertion Library

Two kinds of errors exist:

- Assertion failures: an expectation was false. Reported through a failure
  strategy, raised only when that strategy decides to.
- Programmer misuse: recording a call on a settled eventual subject, replaying
  twice, or replaying a call the resolved value does not support. Always
  raised immediately and never collected with assertion failures.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from certainty_playwright.core.enums import ErrorCategory, ErrorSeverity


class CertaintyException(Exception):
    """
    Base exception class for all library exceptions.

    Attributes:
        message: Human-readable error description
        category: Error category for classification
        severity: Error severity level
        context: Additional context information
        timestamp: When the error occurred
    """

    def __init__(
            self,
            message: str,
            category: ErrorCategory = ErrorCategory.VALIDATION,
            severity: ErrorSeverity = ErrorSeverity.MEDIUM,
            context: Optional[Dict[str, Any]] = None,
            original_exception: Optional[BaseException] = None
    ):
        super().__init__(message)

        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now()

    def add_context(self, key: str, value: Any) -> "CertaintyException":
        """Add additional context information to the exception."""
        self.context[key] = value
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_exception": str(self.original_exception) if self.original_exception else None,
        }

    def __str__(self) -> str:
        return self.message


class AssertionFailedError(CertaintyException, AssertionError):
    """
    An assertion failure raised by a failure strategy.

    Subclasses AssertionError so pytest reports it as a regular test failure.
    """

    def __init__(
            self,
            message: str,
            assertion_type: Optional[str] = None,
            **kwargs
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=kwargs.pop("severity", ErrorSeverity.MEDIUM),
            **kwargs
        )

        if assertion_type:
            self.add_context("assertion_type", assertion_type)


class ProgrammerMisuseError(CertaintyException):
    """
    The library was used in a way that can never succeed.

    These indicate a bug in test code or in this library, not a false
    application behavior, so they always carry the USAGE category and
    CRITICAL severity.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            category=ErrorCategory.USAGE,
            severity=ErrorSeverity.CRITICAL,
            **kwargs
        )


class DeferredCallError(ProgrammerMisuseError):
    """A call was recorded after settlement, or a recorder was replayed twice."""

    def __init__(self, message: str, selector: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)

        if selector:
            self.add_context("selector", selector)


class UnsupportedOperationError(ProgrammerMisuseError, AttributeError):
    """A recorded call cannot be replayed because the resolved value has no such operation."""

    def __init__(self, selector: str, target: Any, **kwargs):
        message = (
            f"Unsupported operation for resolved value type: "
            f"{type(target).__name__} has no assertion '{selector}'"
        )
        super().__init__(message, **kwargs)

        self.add_context("selector", selector)
        self.add_context("target_type", type(target).__name__)

