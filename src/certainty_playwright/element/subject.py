# src/certainty_playwright/element/subject.py
"""
Element Assertion Subject

Assertions for Playwright element handles and locators.

Every assertion starts its driver call immediately and returns an awaitable
completion signal: an ``asyncio.Task`` for direct checks, or an eventual
subject for accessors such as text() that accept further assertions before
the value is known.

Example:
    >>> button = assert_that(await page.query_selector("#save")).named("save button")
    >>> await button.is_displayed()
    >>> await button.has_class("primary")
    >>> await button.text().is_equal_to("Save")
    >>> await button.has_attribute("type").with_value("submit")
"""

import asyncio
from typing import Any, Awaitable, Coroutine, List, Tuple

from certainty_playwright.config.settings import get_settings
from certainty_playwright.core.logger import log_assertion
from certainty_playwright.element.driver import TAG_NAME_EXPRESSION, ElementHandle
from certainty_playwright.element.eventual import EventualAttribute, EventualSubject
from certainty_playwright.subject.base import Subject
from certainty_playwright.subject.failure import FailureStrategy
from certainty_playwright.subject.format import format_value


class ElementSubject(Subject):
    """
    Subject for browser elements.

    Args:
        failure_strategy: The failure strategy to use when an assertion fails
        value: The element handle being checked
    """

    def __init__(self, failure_strategy: FailureStrategy, value: ElementHandle):
        super().__init__(failure_strategy, value)

    def describe(self) -> str:
        """Return the element's name, or the configured generic label."""
        return self.name if self.name else get_settings().element_label

    def _schedule(self, check: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
        return asyncio.ensure_future(check)

    async def _access(self, field: str, operation: Awaitable[Any]) -> Tuple[bool, Any]:
        """Await a driver call, reporting an access failure instead of raising."""
        try:
            return True, await operation
        except Exception as reason:
            self.fail(
                f"Failed to access {field} of {self.describe()} with error: "
                f"{format_value(reason)}."
            )
            return False, reason

    async def _class_list(self) -> List[str]:
        classes = await self.value.get_attribute("class")
        if classes:
            return classes.split()
        return []

    def class_list(self) -> "asyncio.Task[List[str]]":
        """
        Return the element's CSS classes.

        Returns:
            Task resolving to the whitespace-separated class names, or an
            empty list when the attribute is absent or empty
        """
        return self._schedule(self._class_list())

    async def _check_class(self, class_name: str, expected: bool) -> None:
        ok, classes = await self._access("classes", self._class_list())
        if not ok:
            return

        present = class_name in classes
        log_assertion(
            "has_class" if expected else "does_not_have_class",
            class_name, classes, present == expected
        )
        if present and not expected:
            self.fail(f"Expected {self.describe()} to not have class '{class_name}'.")
        elif expected and not present:
            self.fail(f"Expected {self.describe()} to have class '{class_name}'.")

    def has_class(self, class_name: str) -> "asyncio.Task[None]":
        """Ensure that the element's 'class' attribute contains class_name."""
        return self._schedule(self._check_class(class_name, expected=True))

    def does_not_have_class(self, class_name: str) -> "asyncio.Task[None]":
        """Ensure that the element's 'class' attribute does not contain class_name."""
        return self._schedule(self._check_class(class_name, expected=False))

    async def _check_displayed(self, expected: bool) -> None:
        ok, displayed = await self._access("visibility", self.value.is_visible())
        if not ok:
            return

        log_assertion("is_displayed", expected, displayed, displayed == expected)
        if displayed and not expected:
            self.fail(f"Expected {self.describe()} to not be displayed.")
        elif expected and not displayed:
            self.fail(f"Expected {self.describe()} to be displayed.")

    def is_displayed(self) -> "asyncio.Task[None]":
        """Ensure that the element is currently displayed."""
        return self._schedule(self._check_displayed(True))

    def is_not_displayed(self) -> "asyncio.Task[None]":
        """Ensure that the element is currently not displayed."""
        return self._schedule(self._check_displayed(False))

    async def _check_attribute_presence(
            self,
            attribute_name: str,
            expected: bool,
            message: str
    ) -> None:
        ok, value = await self._access(
            f"attribute '{attribute_name}'",
            self.value.get_attribute(attribute_name)
        )
        if not ok:
            return

        present = value is not None
        log_assertion(f"attribute_present:{attribute_name}", expected, present, present == expected)
        if present != expected:
            self.fail(message)

    def has_attribute(self, attribute_name: str) -> EventualAttribute:
        """
        Ensure that the element has a given attribute.

        Returns:
            EventualAttribute: Supports a chained with_value() check
        """
        return EventualAttribute(self, attribute_name)

    def does_not_have_attribute(self, attribute_name: str) -> "asyncio.Task[None]":
        """Ensure that the element does not have a given attribute."""
        return self._schedule(self._check_attribute_presence(
            attribute_name, False,
            f'Expected {self.describe()} to not have attribute named "{attribute_name}".'
        ))

    def is_disabled(self) -> "asyncio.Task[None]":
        """Ensure that the element has a 'disabled' attribute."""
        return self._schedule(self._check_attribute_presence(
            "disabled", True,
            f'Expected {self.describe()} to have a "disabled" attribute.'
        ))

    def is_not_disabled(self) -> "asyncio.Task[None]":
        """Ensure that the element does not have a 'disabled' attribute."""
        return self._schedule(self._check_attribute_presence(
            "disabled", False,
            f'Expected {self.describe()} to not have a "disabled" attribute.'
        ))

    def is_checked(self) -> "asyncio.Task[None]":
        """Ensure that the element has a 'checked' attribute."""
        return self._schedule(self._check_attribute_presence(
            "checked", True,
            f'Expected {self.describe()} to have a "checked" attribute.'
        ))

    def is_not_checked(self) -> "asyncio.Task[None]":
        """Ensure that the element does not have a 'checked' attribute."""
        return self._schedule(self._check_attribute_presence(
            "checked", False,
            f'Expected {self.describe()} to not have a "checked" attribute.'
        ))

    def text(self) -> EventualSubject:
        """Return an eventual StringSubject for the element's rendered text."""
        return EventualSubject(self, self.value.inner_text(), f"text of {self.describe()}")

    def id(self) -> EventualSubject:
        """Return an eventual subject for the element's id (None when absent)."""
        return EventualSubject(self, self.value.get_attribute("id"), f"id of {self.describe()}")

    def classes(self) -> EventualSubject:
        """Return an eventual ListSubject for the element's classes."""
        return EventualSubject(self, self._class_list(), f"classes of {self.describe()}")

    def tag_name(self) -> EventualSubject:
        """Return an eventual StringSubject for the element's lower-case tag name."""
        return EventualSubject(
            self, self.value.evaluate(TAG_NAME_EXPRESSION), f"tag name of {self.describe()}"
        )

    def attribute(self, attribute_name: str) -> EventualSubject:
        """Return an eventual subject for an attribute of the element (None when absent)."""
        return EventualSubject(
            self,
            self.value.get_attribute(attribute_name),
            f"attribute '{attribute_name}' of {self.describe()}"
        )
