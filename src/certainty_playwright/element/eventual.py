# src/certainty_playwright/element/eventual.py
"""
Eventual Subjects

Subjects for values that only exist once a driver call completes. Assertion
calls made on them are recorded and replayed when the call settles:

    >>> await assert_that(element).text().starts_with("Sign").contains("in")

The driver call is scheduled as soon as the eventual subject is created.
``await`` on the subject (or on ``wait()``) returns the settled value. When
the driver call fails, the failure is reported through the parent subject
and the exception is returned instead of raised, so later steps of the test
still run.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Generator, Iterable, Optional

from certainty_playwright.core.logger import get_logger
from certainty_playwright.subject.base import Subject
from certainty_playwright.subject.deferred import DeferredSubject
from certainty_playwright.subject.factory import SubjectFactory, default_factory
from certainty_playwright.subject.format import format_value


class SettleState(str, Enum):
    """Lifecycle of an eventual subject. Both settled states are terminal."""
    PENDING = "pending"
    SETTLED_OK = "settled-ok"
    SETTLED_ERROR = "settled-error"


def loosely_equal(actual: Any, expected: Any) -> bool:
    """
    Compare an attribute value against an expected value with coercion.

    Attribute values are strings, so ``"5"`` matches ``5`` and ``5.0``, and
    ``"true"`` matches ``True``.

    This is not JavaScript ``==``: booleans compare against ``"true"`` and
    ``"false"`` rather than as 1 and 0, so ``"1"`` does not match ``True``, and
    an empty or blank string never matches a number.
    """
    if actual == expected:
        return True
    if isinstance(actual, str) and not isinstance(expected, str):
        if isinstance(expected, bool):
            return actual.strip().lower() == ("true" if expected else "false")
        if isinstance(expected, (int, float)):
            try:
                return float(actual) == float(expected)
            except ValueError:
                return False
    return False


@dataclass(frozen=True)
class AttributeValue:
    """
    The value of an attribute that was just found to exist.

    Only supports with_value(); any other call replayed onto it fails with
    UnsupportedOperationError.
    """

    subject: Subject
    name: str
    value: str

    def with_value(self, expected: Any) -> "AttributeValue":
        """Ensure that the attribute has the expected value."""
        if not loosely_equal(self.value, expected):
            self.subject.fail(
                f"Expected {self.subject.describe()} to have an attribute '{self.name}' "
                f"with value {format_value(expected)}, actual value was '{self.value}'."
            )
        return self


class _Eventual(DeferredSubject, ABC):
    """Shared lifecycle: schedule the operation, settle once, expose completion."""

    def __init__(self, subject: Subject, vocabulary: Iterable[str]):
        super().__init__(vocabulary)
        self.subject = subject
        self.state = SettleState.PENDING
        self.resolved: Optional[Any] = None
        self.logger = get_logger("eventual")
        self._task: Optional[asyncio.Future] = None

    def _start(self, operation: Awaitable[Any]) -> None:
        self._task = asyncio.ensure_future(self._settle(operation))

    @abstractmethod
    async def _settle(self, operation: Awaitable[Any]) -> Any:
        """Await operation, report or replay, and return the downstream value."""
        pass

    def _settle_error(self, message: str) -> None:
        self.state = SettleState.SETTLED_ERROR
        self._recorder.discard()
        self.logger.debug("Eventual subject failed to settle", message=message)
        self.subject.fail(message)

    async def _settle_ok(self, target: Any) -> None:
        self.state = SettleState.SETTLED_OK
        self.resolved = target
        await self._recorder.replay(target)

    def wait(self) -> "asyncio.Future[Any]":
        """
        Completion signal for this subject.

        Resolves to the fetched value once recorded calls were replayed, or
        to the driver exception after the access failure was reported.
        """
        return self._task

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def __await__(self) -> Generator[Any, None, Any]:
        return self.wait().__await__()


class EventualSubject(_Eventual):
    """
    A subject for a value produced by a pending driver operation.

    Once the operation succeeds, a subject for the resolved value is built
    by the subject factory, named after ``description``, given the parent's
    failure strategy and custom failure message, and every recorded call is
    replayed on it.

    Args:
        subject: The parent subject that spawned this one
        operation: Coroutine or future producing the value
        description: Description of the value for failure messages,
            e.g. "text of element"
        factory: Subject factory for the resolved value (default factory if omitted)
    """

    def __init__(
            self,
            subject: Subject,
            operation: Awaitable[Any],
            description: str,
            factory: Optional[SubjectFactory] = None
    ):
        self.factory = factory or default_factory()
        super().__init__(subject, self.factory.assertion_vocabulary())
        self.description = description
        self._start(operation)

    async def _settle(self, operation: Awaitable[Any]) -> Any:
        try:
            value = await operation
        except Exception as reason:
            self._settle_error(
                f"Failed to access {self.description} with error: {format_value(reason)}."
            )
            return reason

        value_subject = self.factory.new_subject(self.subject.failure_strategy, value)
        value_subject.named(self.description)
        value_subject.failure_message = self.subject.failure_message
        await self._settle_ok(value_subject)
        return value


class EventualAttribute(_Eventual):
    """
    A subject for a deferred attribute lookup that requires the attribute to exist.

    A missing attribute is reported as a failure. When the attribute exists,
    recorded with_value() checks are replayed on an AttributeValue.
    """

    def __init__(self, subject: Subject, attribute_name: str):
        super().__init__(subject, ())
        self.attribute_name = attribute_name
        self._start(subject.value.get_attribute(attribute_name))

    def with_value(self, expected: Any) -> "EventualAttribute":
        """Ensure that the attribute, once fetched, has the expected value."""
        self._recorder.record("with_value", expected)
        return self

    async def _settle(self, operation: Awaitable[Any]) -> Any:
        try:
            value = await operation
        except Exception as reason:
            self._settle_error(
                f"Failed to access attribute '{self.attribute_name}' of "
                f"{self.subject.describe()} with error: {format_value(reason)}."
            )
            return reason

        if value is None:
            self._settle_error(
                f"Expected {self.subject.describe()} to have attribute {self.attribute_name}."
            )
            return value

        await self._settle_ok(AttributeValue(self.subject, self.attribute_name, value))
        return value
