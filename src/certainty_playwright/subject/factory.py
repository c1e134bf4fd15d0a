# src/certainty_playwright/subject/factory.py
"""
Subject Factory

Chooses the most specific subject class for a value. Extensions register
their own types with add_type(); the most recently registered matching
predicate wins, then the built-in string and sequence subjects, then the
generic Subject.
"""

from typing import Any, Callable, FrozenSet, List, Tuple, Type

from certainty_playwright.core.logger import get_logger
from certainty_playwright.subject.base import ListSubject, StringSubject, Subject
from certainty_playwright.subject.failure import FailureStrategy

TypePredicate = Callable[[Any], bool]

# Public subject methods that describe or report rather than assert.
NON_RECORDABLE = frozenset({"describe", "fail"})


class SubjectFactory:
    """Registry mapping value shapes to subject classes."""

    def __init__(self):
        self._types: List[Tuple[TypePredicate, Type[Subject]]] = []
        self.logger = get_logger("factory")

    def add_type(self, predicate: TypePredicate, subject_class: Type[Subject]) -> None:
        """
        Register a subject class for values matching predicate.

        Args:
            predicate: Returns True for values the subject class handles
            subject_class: Subject subclass constructed as (failure_strategy, value)
        """
        self._types.insert(0, (predicate, subject_class))
        self.logger.debug("Subject type registered", subject_class=subject_class.__name__)

    def subject_class_for(self, value: Any) -> Type[Subject]:
        for predicate, subject_class in self._types:
            if predicate(value):
                return subject_class
        if isinstance(value, str):
            return StringSubject
        if isinstance(value, (list, tuple)):
            return ListSubject
        return Subject

    def new_subject(self, failure_strategy: FailureStrategy, value: Any) -> Subject:
        """Create the most specific subject registered for value."""
        return self.subject_class_for(value)(failure_strategy, value)

    def subject_classes(self) -> List[Type[Subject]]:
        return [subject_class for _, subject_class in self._types] + [
            StringSubject, ListSubject, Subject
        ]

    def assertion_vocabulary(self) -> FrozenSet[str]:
        """
        Names of every public assertion method any produced subject exposes.

        Eventual subjects accept exactly these names for recording.
        """
        names = set()
        for subject_class in self.subject_classes():
            for name in dir(subject_class):
                if name.startswith("_") or name in NON_RECORDABLE:
                    continue
                if callable(getattr(subject_class, name)):
                    names.add(name)
        return frozenset(names)


_default_factory = SubjectFactory()


def default_factory() -> SubjectFactory:
    """The process-wide factory used by assert_that() and eventual subjects."""
    return _default_factory
