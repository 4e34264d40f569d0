"""Per-tick loop: poll input once, route it, then close the frame."""

from __future__ import annotations

from typing import Callable, Optional

from focus_navigation.context import NavigationContext
from focus_navigation.element import NavigationElement
from focus_navigation.group import NavigationGroup
from focus_navigation.inputs import InputSnapshot, NavigationInput, poll_input
from focus_navigation.logging_utils import get_logger

LOGGER = get_logger()

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]


class NavigationDriver:
    """Feeds one input device into the group that owns the current focus.

    ``after``/``after_cancel`` are the host's timer primitives (Tk ``after`` in
    practice); without them the host calls :meth:`tick` itself once per frame.
    """

    def __init__(
        self,
        context: NavigationContext,
        navigation_input: Optional[NavigationInput] = None,
        *,
        after: Optional[AfterFn] = None,
        after_cancel: Optional[AfterCancelFn] = None,
        interval_ms: Optional[int] = None,
    ) -> None:
        self.context = context
        self.navigation_input = navigation_input
        self._after = after
        self._after_cancel = after_cancel
        self.interval_ms = max(1, int(interval_ms if interval_ms is not None else context.settings.tick_interval_ms))
        self._handle: object | None = None
        self.frame = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def active_group(self) -> Optional[NavigationGroup]:
        return self.context.owner_of(self.context.focus.current)

    def tick(self) -> Optional[NavigationElement]:
        moved: Optional[NavigationElement] = None
        group = self.active_group()
        if group is not None:
            source = group.navigation_input or self.navigation_input
            if source is not None:
                snapshot = poll_input(source)
                if not snapshot.idle:
                    moved = group.handle_input(snapshot)
        elif self.navigation_input is not None:
            # Drain the device so stale presses do not fire once focus lands.
            poll_input(self.navigation_input)
        committed = self.context.end_frame()
        if committed:
            LOGGER.debug("Frame %d committed %d deferred registration(s)", self.frame, committed)
        self.frame += 1
        return moved

    def dispatch(self, snapshot: InputSnapshot) -> Optional[NavigationElement]:
        """Route an already-polled snapshot without advancing the frame."""
        group = self.active_group()
        if group is None:
            return None
        return group.handle_input(snapshot)

    def start(self) -> object:
        if self._after is None:
            raise RuntimeError("NavigationDriver.start() requires an 'after' scheduler")
        if self._handle is None:
            self._handle = self._after(self.interval_ms, self._run)
        return self._handle

    def stop(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None and self._after_cancel is not None:
            try:
                self._after_cancel(handle)
            except Exception as exc:
                LOGGER.debug("Failed to cancel navigation tick %r: %s", handle, exc)

    def _run(self) -> None:
        if self._handle is None:
            return
        try:
            self.tick()
        finally:
            if self._handle is not None and self._after is not None:
                self._handle = self._after(self.interval_ms, self._run)
