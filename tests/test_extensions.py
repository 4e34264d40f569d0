from __future__ import annotations

from focus_navigation.context import NavigationContext
from focus_navigation.extensions import (
    add_navigation_element,
    add_navigation_group,
    create_horizontal_toolbar,
    create_navigation_grid,
    create_vertical_menu,
    has_navigation,
    setup_navigation,
)
from focus_navigation.modes import NavigationMode


def test_add_navigation_group_defaults(context: NavigationContext) -> None:
    group = add_navigation_group("menu", context=context)
    assert group.mode is NavigationMode.AUTOMATIC
    assert group.cycle is True

    grid = add_navigation_group("grid", context=context, mode="grid", cycle=False)
    assert grid.mode is NavigationMode.GRID
    assert grid.cycle is False


def test_setup_navigation_skips_already_enrolled(context: NavigationContext, make_selectable) -> None:
    shared = make_selectable("shared", 0, 0)
    first = setup_navigation([shared, make_selectable("a", 100, 0)], "first", context=context)
    second = setup_navigation([shared, make_selectable("b", 0, 100)], "second", context=context)
    context.end_frame()

    assert len(first.elements) == 2
    assert [element.selectable.name for element in second.elements] == ["b"]
    assert has_navigation(shared, context)


def test_add_navigation_element_reuses_existing(context: NavigationContext, make_selectable) -> None:
    group = add_navigation_group("menu", context=context)
    selectable = make_selectable("x", 0, 0)

    element = add_navigation_element(group, selectable)
    assert add_navigation_element(group, selectable) is element


def test_vertical_menu_navigates_down_the_column(context: NavigationContext, make_selectable) -> None:
    items = [make_selectable(name, 0, y) for name, y in (("new", 0), ("load", 40), ("quit", 80))]
    menu = create_vertical_menu(items, "main", context=context)
    context.end_frame()

    menu.select_first()
    menu.navigate(1)
    assert context.focus.current is items[1]
    menu.navigate(1)
    menu.navigate(1)
    assert context.focus.current is items[0]


def test_horizontal_toolbar_mode(context: NavigationContext, make_selectable) -> None:
    toolbar = create_horizontal_toolbar([make_selectable("cut", 0, 0)], context=context, cycle=False)
    assert toolbar.mode is NavigationMode.HORIZONTAL
    assert toolbar.cycle is False


def test_navigation_grid_skips_empty_cells(context: NavigationContext, make_selectable) -> None:
    rows = [
        [make_selectable("a", 0, 0), None, make_selectable("c", 200, 0)],
        [make_selectable("d", 0, 50), make_selectable("e", 100, 50), None],
    ]
    grid = create_navigation_grid(rows, "inventory", context=context)
    context.end_frame()

    assert grid.mode is NavigationMode.GRID
    assert len(grid.elements) == 4
    grid.select(grid.element_for(rows[0][2]))
    grid.navigate(1)
    assert context.focus.current is rows[1][0]
