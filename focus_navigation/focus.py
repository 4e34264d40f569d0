"""Tracks which selectable currently holds focus on the host."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from focus_navigation.logging_utils import get_logger

LOGGER = get_logger("Focus")

FocusChangeFn = Callable[[Optional[Any], Optional[Any]], None]


class Selectable(Protocol):
    """The only host primitive the engine drives."""

    def select(self) -> None: ...


class FocusTracker:
    """Holds the host's "currently focused" handle and applies selection."""

    def __init__(self, on_change: Optional[FocusChangeFn] = None) -> None:
        self._current: Optional[Any] = None
        self._on_change = on_change

    @property
    def current(self) -> Optional[Any]:
        return self._current

    def select(self, selectable: Any) -> None:
        """Select ``selectable`` on the host; repeated calls are harmless."""
        selectable.select()
        self._set(selectable)

    def observe(self, selectable: Optional[Any]) -> None:
        """Record a focus change the host made on its own (mouse click, etc.)."""
        self._set(selectable)

    def clear(self) -> None:
        self._set(None)

    def _set(self, selectable: Optional[Any]) -> None:
        previous = self._current
        if previous is selectable:
            return
        self._current = selectable
        LOGGER.debug("Focus moved: %r -> %r", previous, selectable)
        if self._on_change is not None:
            self._on_change(previous, selectable)
