"""Focusable leaf elements and their activation lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Tuple

from focus_navigation.deferred import PendingRegistration

if TYPE_CHECKING:
    from focus_navigation.group import NavigationGroup


class NavigationElement:
    """A selectable handle owned by exactly one navigation group.

    Enabling an element queues a deferred registration so the position is read
    only after layout settles; disabling it cancels that registration or
    unregisters the element.
    """

    def __init__(self, selectable: Any, group: "NavigationGroup", *, enabled: bool = True) -> None:
        self.selectable = selectable
        self._group = group
        self.priority: Optional[int] = None
        self._enabled = False
        self._pending: Optional[PendingRegistration] = None
        group.context.attach_element(self)
        if enabled:
            self.enable()

    def __repr__(self) -> str:
        return f"NavigationElement({self.selectable!r}, priority={self.priority})"

    @property
    def group(self) -> "NavigationGroup":
        return self._group

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def registered(self) -> bool:
        return self in self._group.registry

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def position(self) -> Tuple[float, float]:
        return self._group.context.position_of(self.selectable)

    def enable(self) -> Optional[PendingRegistration]:
        if self._enabled:
            return self._pending
        self._enabled = True
        self._pending = self._group.context.registrations.begin(self, self._complete_registration)  # type: ignore[union-attr]
        return self._pending

    def disable(self) -> None:
        if not self._enabled:
            return
        self._enabled = False
        if self._pending is not None:
            self._group.context.registrations.cancel(self._pending)  # type: ignore[union-attr]
            self._pending = None
        self._group.unregister_element(self)

    def destroy(self) -> None:
        self.disable()
        self._group.context.detach_element(self)

    def recalculate_priority(self) -> None:
        """Re-measure after a layout change by running the registration cycle again."""
        if not self._enabled:
            return
        self.disable()
        self.enable()

    def _complete_registration(self) -> bool:
        self._pending = None
        self.priority = self._group.calculate_priority(self)
        return self._group.register_element(self)

    def select(self) -> None:
        self._group.select(self)

    def is_selected(self) -> bool:
        return self._group.context.focus.current is self.selectable

    def next_element(self) -> Optional["NavigationElement"]:
        """Next element by priority in the same group, without wrapping."""
        elements = self._group.elements
        if self not in elements:
            return None
        index = elements.index(self)
        return elements[index + 1] if index + 1 < len(elements) else None

    def previous_element(self) -> Optional["NavigationElement"]:
        elements = self._group.elements
        if self not in elements:
            return None
        index = elements.index(self)
        return elements[index - 1] if index > 0 else None
