# src/certainty_playwright/assertions.py
"""
Entry Points

    >>> from certainty_playwright import assert_that, soft_assert
    >>> with soft_assert() as failures:
    ...     heading = assert_that(page.locator("h1"), failures)
    ...     await heading.is_displayed()
    ...     await heading.text().starts_with("Welcome")
"""

from typing import Any, Optional

from certainty_playwright.subject.base import Subject
from certainty_playwright.subject.factory import default_factory
from certainty_playwright.subject.failure import (
    FailureStrategy,
    SoftAssertions,
    collected_failures,
    default_failure_strategy,
)


def assert_that(value: Any, failure_strategy: Optional[FailureStrategy] = None) -> Subject:
    """
    Create the most specific subject for value.

    Args:
        value: Value under test; Playwright element handles and locators get
            an ElementSubject
        failure_strategy: Receives failures; defaults to the strategy chosen
            by the ``failure_mode`` setting
    """
    return default_factory().new_subject(failure_strategy or default_failure_strategy(), value)


def soft_assert() -> SoftAssertions:
    """Create a soft assertion collector."""
    return SoftAssertions()

