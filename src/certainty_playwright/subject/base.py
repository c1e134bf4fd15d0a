# src/certainty_playwright/subject/base.py
"""
Assertion Subjects

A subject wraps a value under test and exposes fluent assertion methods.
Every assertion returns the subject so calls can be chained, and every
failure is routed through the subject's failure strategy.

Example:
    >>> assert_that("Save changes").starts_with("Save").has_length(12)
"""

import re
from typing import Any, Iterable, Optional, Pattern, Union

from certainty_playwright.subject.failure import FailureStrategy
from certainty_playwright.subject.format import format_value


class Subject:
    """
    Base assertion subject for any value.

    Attributes:
        failure_strategy: Receives every failure reported by this subject
        value: The value under test
        name: Optional name used by describe() in failure messages
        failure_message: Optional custom text prefixed to every failure
    """

    def __init__(self, failure_strategy: FailureStrategy, value: Any):
        self.failure_strategy = failure_strategy
        self.value = value
        self.name: Optional[str] = None
        self.failure_message: Optional[str] = None

    def named(self, name: str) -> "Subject":
        """Set the name used to describe the value in failure messages."""
        self.name = name
        return self

    def with_message(self, message: str) -> "Subject":
        """Set a custom message that prefixes every failure of this subject."""
        self.failure_message = message
        return self

    def describe(self) -> str:
        """Return a string description of the subject."""
        return self.name if self.name else format_value(self.value)

    def fail(self, message: str) -> None:
        """Report a failure through the failure strategy."""
        if self.failure_message:
            message = f"{self.failure_message}: {message}"
        self.failure_strategy.fail(message)

    def is_equal_to(self, expected: Any) -> "Subject":
        if self.value != expected:
            self.fail(f"Expected {self.describe()} to be equal to {format_value(expected)}, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_not_equal_to(self, unexpected: Any) -> "Subject":
        if self.value == unexpected:
            self.fail(f"Expected {self.describe()} to not be equal to {format_value(unexpected)}.")
        return self

    def is_none(self) -> "Subject":
        if self.value is not None:
            self.fail(f"Expected {self.describe()} to be None, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_not_none(self) -> "Subject":
        if self.value is None:
            self.fail(f"Expected {self.describe()} to not be None.")
        return self

    def is_true(self) -> "Subject":
        if self.value is not True:
            self.fail(f"Expected {self.describe()} to be True, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_false(self) -> "Subject":
        if self.value is not False:
            self.fail(f"Expected {self.describe()} to be False, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_truthy(self) -> "Subject":
        if not self.value:
            self.fail(f"Expected {self.describe()} to be truthy, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_falsy(self) -> "Subject":
        if self.value:
            self.fail(f"Expected {self.describe()} to be falsy, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_in(self, *candidates: Any) -> "Subject":
        if self.value not in candidates:
            self.fail(f"Expected {self.describe()} to be one of {format_value(list(candidates))}, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_not_in(self, *candidates: Any) -> "Subject":
        if self.value in candidates:
            self.fail(f"Expected {self.describe()} to not be one of "
                      f"{format_value(list(candidates))}.")
        return self

    def is_instance_of(self, cls: type) -> "Subject":
        if not isinstance(self.value, cls):
            self.fail(f"Expected {self.describe()} to be an instance of {cls.__name__}, "
                      f"actual type was {type(self.value).__name__}.")
        return self


class _SizedSubject(Subject):
    """Assertions shared by strings and sequences."""

    def is_empty(self) -> "Subject":
        if len(self.value) != 0:
            self.fail(f"Expected {self.describe()} to be empty, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def is_not_empty(self) -> "Subject":
        if len(self.value) == 0:
            self.fail(f"Expected {self.describe()} to not be empty.")
        return self

    def has_length(self, length: int) -> "Subject":
        if len(self.value) != length:
            self.fail(f"Expected {self.describe()} to have length {length}, "
                      f"actual length was {len(self.value)}.")
        return self

    def contains(self, item: Any) -> "Subject":
        if item not in self.value:
            self.fail(f"Expected {self.describe()} to contain {format_value(item)}.")
        return self

    def does_not_contain(self, item: Any) -> "Subject":
        if item in self.value:
            self.fail(f"Expected {self.describe()} to not contain {format_value(item)}.")
        return self


class StringSubject(_SizedSubject):
    """Assertions for string values (element text, ids, attribute values)."""

    def starts_with(self, prefix: str) -> "StringSubject":
        if not self.value.startswith(prefix):
            self.fail(f"Expected {self.describe()} to start with {format_value(prefix)}, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def ends_with(self, suffix: str) -> "StringSubject":
        if not self.value.endswith(suffix):
            self.fail(f"Expected {self.describe()} to end with {format_value(suffix)}, "
                      f"actual value was {format_value(self.value)}.")
        return self

    def matches(self, pattern: Union[str, Pattern]) -> "StringSubject":
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        if not regex.search(self.value):
            self.fail(f"Expected {self.describe()} to match pattern {format_value(regex.pattern)}, "
                      f"actual value was {format_value(self.value)}.")
        return self


class ListSubject(_SizedSubject):
    """Assertions for lists and tuples (for example an element's class list)."""

    def contains_all(self, items: Iterable[Any]) -> "ListSubject":
        items = list(items)
        missing = [item for item in items if item not in self.value]
        if missing:
            self.fail(f"Expected {self.describe()} to contain all of {format_value(items)}, "
                      f"missing {format_value(missing)}.")
        return self

    def contains_exactly(self, *items: Any) -> "ListSubject":
        if list(self.value) != list(items):
            self.fail(f"Expected {self.describe()} to contain exactly {format_value(list(items))}, "
                      f"actual value was {format_value(list(self.value))}.")
        return self
