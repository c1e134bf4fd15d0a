# src/certainty_playwright/element/driver.py
"""
Element Handle Contract

What ElementSubject needs from the browser-automation driver. Playwright's
async ``ElementHandle`` and ``Locator`` both satisfy it.

Ordering: operations issued against elements of the same browser session
must execute in submission order. ElementSubject starts every driver call
from an asyncio task created at the moment the assertion is issued, and
asyncio starts ready tasks in creation order, so issue order becomes
submission order. Playwright then processes the commands of one connection
in the order they were sent. Nothing is promised across sessions.
"""

from typing import Any, Optional, Protocol, runtime_checkable

TAG_NAME_EXPRESSION = "el => el.tagName.toLowerCase()"


@runtime_checkable
class ElementHandle(Protocol):
    """Asynchronous, single-shot element operations (no retry built in)."""

    async def get_attribute(self, name: str) -> Optional[str]:
        """Return the attribute value, or ``None`` when the attribute is absent."""
        ...

    async def inner_text(self) -> str:
        """Return the rendered text of the element."""
        ...

    async def is_visible(self) -> bool:
        """Return whether the element is currently displayed."""
        ...

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript function with the element as its first argument."""
        ...
