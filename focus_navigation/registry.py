"""Per-group storage of registered elements, ordered by priority."""

from __future__ import annotations

import bisect
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, TypeVar

from focus_navigation.logging_utils import get_logger

LOGGER = get_logger("Registry")

E = TypeVar("E", bound=Hashable)


class ElementRegistry(Generic[E]):
    """Maps elements to unique priorities and keeps them in priority order.

    A priority already held by another element is rejected; the rejected
    element is left completely unregistered.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._priority_of: Dict[E, int] = {}
        self._by_priority: Dict[int, E] = {}
        self._keys: List[int] = []

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, element: object) -> bool:
        return element in self._priority_of

    def __iter__(self) -> Iterator[E]:
        return iter(self.elements())

    def elements(self) -> List[E]:
        return [self._by_priority[key] for key in self._keys]

    def priorities(self) -> List[int]:
        return list(self._keys)

    def priority_of(self, element: E) -> Optional[int]:
        return self._priority_of.get(element)

    def at_priority(self, priority: int) -> Optional[E]:
        return self._by_priority.get(priority)

    def index_of(self, element: E) -> int:
        priority = self._priority_of.get(element)
        if priority is None:
            return -1
        return bisect.bisect_left(self._keys, priority)

    def first(self) -> Optional[E]:
        return self._by_priority[self._keys[0]] if self._keys else None

    def last(self) -> Optional[E]:
        return self._by_priority[self._keys[-1]] if self._keys else None

    def register(self, element: E, priority: int) -> bool:
        """Store ``element`` under ``priority``; ``False`` on a collision."""
        holder = self._by_priority.get(priority)
        if holder is not None and holder is not element:
            LOGGER.warning(
                "Rejected registration in %s: priority %d already held by %r (conflicting %r)",
                self.name or "group",
                priority,
                holder,
                element,
            )
            return False
        if element in self._priority_of:
            self._remove(element)
        self._priority_of[element] = priority
        self._by_priority[priority] = element
        bisect.insort(self._keys, priority)
        return True

    def unregister(self, element: E) -> bool:
        if element not in self._priority_of:
            return False
        self._remove(element)
        return True

    def recalculate_all(self, derive: Callable[[E], int]) -> List[E]:
        """Re-derive every member's priority and re-register it.

        Returns the members that collided and are therefore no longer registered.
        """
        members = self.elements()
        fresh = [(element, derive(element)) for element in members]
        self.clear()
        rejected: List[E] = []
        for element, priority in fresh:
            if not self.register(element, priority):
                rejected.append(element)
        return rejected

    def clear(self) -> None:
        self._priority_of.clear()
        self._by_priority.clear()
        self._keys.clear()

    def _remove(self, element: E) -> None:
        priority = self._priority_of.pop(element)
        self._by_priority.pop(priority, None)
        index = bisect.bisect_left(self._keys, priority)
        if index < len(self._keys) and self._keys[index] == priority:
            del self._keys[index]
