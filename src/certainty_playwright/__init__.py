# src/certainty_playwright/__init__.py
"""Fluent assertions for Playwright element handles."""

from certainty_playwright.assertions import assert_that, collected_failures, soft_assert
from certainty_playwright.core.exceptions import (
    AssertionFailedError,
    DeferredCallError,
    ProgrammerMisuseError,
    UnsupportedOperationError,
)
from certainty_playwright.element.eventual import AttributeValue, EventualAttribute, EventualSubject
from certainty_playwright.element.subject import ElementSubject
from certainty_playwright.registration import register_element_types
from certainty_playwright.subject.factory import default_factory
from certainty_playwright.subject.failure import RaisingFailureStrategy, SoftAssertions

register_element_types(default_factory())

__version__ = "1.0.0"

__all__ = [
    "assert_that",
    "collected_failures",
    "soft_assert",
    "AssertionFailedError",
    "AttributeValue",
    "DeferredCallError",
    "ElementSubject",
    "EventualAttribute",
    "EventualSubject",
    "ProgrammerMisuseError",
    "RaisingFailureStrategy",
    "SoftAssertions",
    "UnsupportedOperationError",
    "register_element_types",
]
