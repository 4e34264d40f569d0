from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

import pytest

from focus_navigation.context import NavigationContext
from focus_navigation.group import NavigationGroup
from focus_navigation.settings import NavigationSettings


class FakeSelectable:
    """Stand-in for a host widget with a mutable screen position."""

    def __init__(self, name: str, x: float, y: float) -> None:
        self.name = name
        self.x = x
        self.y = y
        self.select_calls = 0
        self.activations = 0
        self.interactable = True

    def __repr__(self) -> str:
        return f"<{self.name} @({self.x:g},{self.y:g})>"

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def select(self) -> None:
        self.select_calls += 1

    def activate(self) -> None:
        self.activations += 1


@pytest.fixture
def context() -> NavigationContext:
    # Zero delay: registrations commit at the end of the current frame.
    return NavigationContext(settings=NavigationSettings(registration_delay_frames=0))


@pytest.fixture
def populate() -> Callable[..., List[FakeSelectable]]:
    def _populate(group: NavigationGroup, points: Iterable[Tuple[float, float]], prefix: str = "") -> List[FakeSelectable]:
        prefix = prefix or group.name
        selectables = []
        for index, (x, y) in enumerate(points):
            selectable = FakeSelectable(f"{prefix}{index}", x, y)
            group.add_element(selectable)
            selectables.append(selectable)
        group.context.end_frame()
        return selectables

    return _populate


@pytest.fixture
def make_selectable() -> Callable[[str, float, float], FakeSelectable]:
    return FakeSelectable
