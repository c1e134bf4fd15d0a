# src/certainty_playwright/registration.py
"""Teach a subject factory to build ElementSubject for Playwright element handles."""

from typing import Any

from playwright.async_api import ElementHandle, Locator

from certainty_playwright.element.subject import ElementSubject
from certainty_playwright.subject.factory import SubjectFactory


def is_element(value: Any) -> bool:
    return isinstance(value, (ElementHandle, Locator))


def register_element_types(factory: SubjectFactory) -> None:
    """Register ElementSubject for async ElementHandle and Locator values."""
    factory.add_type(is_element, ElementSubject)
