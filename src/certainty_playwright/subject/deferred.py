# src/certainty_playwright/subject/deferred.py
"""
Deferred Calls

A deferred subject stands in for a subject whose value is not known yet.
Assertion calls made on it are queued as DeferredCall records and replayed,
in the order they were made, once a concrete target exists.

Only names from an explicit vocabulary can be queued. Anything else fails
at the call site with AttributeError instead of surfacing later during
replay.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Tuple

from certainty_playwright.core.exceptions import DeferredCallError, UnsupportedOperationError
from certainty_playwright.core.logger import get_logger


@dataclass(frozen=True)
class DeferredCall:
    """A single queued call: the method name and its arguments."""

    selector: str
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def apply(self, target: Any) -> Any:
        """Invoke this call on target."""
        method = getattr(target, self.selector, None)
        if method is None or not callable(method):
            raise UnsupportedOperationError(self.selector, target)
        return method(*self.args, **self.kwargs)


class CallRecorder:
    """
    Append-only queue of deferred calls, replayed at most once.

    Once replay() or discard() has been called the recorder is closed and
    any further record() raises DeferredCallError.
    """

    def __init__(self):
        self._calls: List[DeferredCall] = []
        self._closed = False
        self.logger = get_logger("recorder")

    @property
    def pending(self) -> bool:
        """True while calls can still be recorded."""
        return not self._closed

    @property
    def calls(self) -> Tuple[DeferredCall, ...]:
        return tuple(self._calls)

    def record(self, selector: str, *args: Any, **kwargs: Any) -> DeferredCall:
        if self._closed:
            raise DeferredCallError(
                f"Cannot record '{selector}': the eventual subject has already settled",
                selector=selector
            )
        call = DeferredCall(selector, args, kwargs)
        self._calls.append(call)
        return call

    async def replay(self, target: Any) -> int:
        """
        Replay every recorded call on target, in recording order.

        Awaitable results are awaited before the next call is replayed.

        Returns:
            int: Number of calls replayed

        Raises:
            DeferredCallError: The recorder was already replayed or discarded
            UnsupportedOperationError: target has no such assertion method
        """
        if self._closed:
            raise DeferredCallError("Recorded calls have already been replayed or discarded")
        self._closed = True
        calls, self._calls = self._calls, []

        self.logger.debug(
            "Replaying deferred calls",
            count=len(calls),
            target=type(target).__name__
        )
        for call in calls:
            result = call.apply(target)
            if inspect.isawaitable(result):
                await result
        return len(calls)

    def discard(self) -> int:
        """Close the recorder without replaying anything. Returns the number dropped."""
        self._closed = True
        dropped, self._calls = len(self._calls), []
        if dropped:
            self.logger.debug("Discarding deferred calls", count=dropped)
        return dropped


class DeferredSubject:
    """
    Base class for subjects whose calls are recorded for later replay.

    Accessing a name from ``vocabulary`` returns a function that records the
    call and returns the deferred subject itself, so calls chain:

        >>> deferred.is_not_none().starts_with("Sa")
    """

    def __init__(self, vocabulary: Iterable[str]):
        self._recorder = CallRecorder()
        self._vocabulary: FrozenSet[str] = frozenset(vocabulary)

    @property
    def recorder(self) -> CallRecorder:
        return self._recorder

    def __getattr__(self, name: str) -> Callable[..., "DeferredSubject"]:
        if name.startswith("_") or name not in self._vocabulary:
            raise AttributeError(
                f"{type(self).__name__} does not support '{name}'"
            )

        def record(*args: Any, **kwargs: Any) -> "DeferredSubject":
            self._recorder.record(name, *args, **kwargs)
            return self

        record.__name__ = name
        return record
