"""Shortcuts for building common navigation layouts."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from focus_navigation.context import NavigationContext
from focus_navigation.element import NavigationElement
from focus_navigation.group import NavigationGroup
from focus_navigation.modes import NavigationMode


def add_navigation_group(
    name: Optional[str] = None,
    *,
    mode: NavigationMode | str = NavigationMode.AUTOMATIC,
    cycle: bool = True,
    context: Optional[NavigationContext] = None,
    parent: Optional[NavigationGroup] = None,
    modal: bool = False,
) -> NavigationGroup:
    return NavigationGroup(name, context=context, parent=parent, mode=mode, cycle=cycle, modal=modal)


def add_navigation_element(group: NavigationGroup, selectable: Any, *, enabled: bool = True) -> NavigationElement:
    """Wrap ``selectable``, reusing the existing element when it is already in ``group``."""
    existing = group.context.element_for(selectable)
    if existing is not None and existing.group is group:
        if enabled:
            existing.enable()
        return existing
    return group.add_element(selectable, enabled=enabled)


def has_navigation(selectable: Any, context: NavigationContext) -> bool:
    return context.element_for(selectable) is not None


def setup_navigation(
    selectables: Iterable[Any],
    name: Optional[str] = None,
    *,
    mode: NavigationMode | str = NavigationMode.AUTOMATIC,
    cycle: bool = True,
    context: Optional[NavigationContext] = None,
    parent: Optional[NavigationGroup] = None,
) -> NavigationGroup:
    """Create a group and enrol every selectable that has no element yet."""
    group = add_navigation_group(name, mode=mode, cycle=cycle, context=context, parent=parent)
    for selectable in selectables:
        if not has_navigation(selectable, group.context):
            group.add_element(selectable)
    return group


def create_navigation_grid(
    rows: Sequence[Sequence[Any]],
    name: Optional[str] = None,
    *,
    cycle: bool = True,
    context: Optional[NavigationContext] = None,
    parent: Optional[NavigationGroup] = None,
) -> NavigationGroup:
    """Grid-mode group from a row-major 2D layout; ``None`` cells are skipped."""
    cells: List[Any] = [cell for row in rows for cell in row if cell is not None]
    return setup_navigation(cells, name, mode=NavigationMode.GRID, cycle=cycle, context=context, parent=parent)


def create_vertical_menu(
    items: Iterable[Any],
    name: Optional[str] = None,
    *,
    cycle: bool = True,
    context: Optional[NavigationContext] = None,
    parent: Optional[NavigationGroup] = None,
) -> NavigationGroup:
    return setup_navigation(items, name, mode=NavigationMode.VERTICAL, cycle=cycle, context=context, parent=parent)


def create_horizontal_toolbar(
    items: Iterable[Any],
    name: Optional[str] = None,
    *,
    cycle: bool = True,
    context: Optional[NavigationContext] = None,
    parent: Optional[NavigationGroup] = None,
) -> NavigationGroup:
    return setup_navigation(items, name, mode=NavigationMode.HORIZONTAL, cycle=cycle, context=context, parent=parent)
