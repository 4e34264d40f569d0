from __future__ import annotations

from focus_navigation.context import NavigationContext
from focus_navigation.group import NavigationGroup
from focus_navigation.settings import NavigationSettings
from focus_navigation.tk_host import TkSelectable, tk_focus_observer, tk_widget_position


class FakeWidget:
    def __init__(self, x: int, y: int, width: int = 80, height: int = 20, state: str = "normal") -> None:
        self.x, self.y, self.width, self.height = x, y, width, height
        self.state = state
        self.focused = 0
        self.invoked = 0

    def update_idletasks(self) -> None:
        return None

    def winfo_rootx(self) -> int:
        return self.x

    def winfo_rooty(self) -> int:
        return self.y

    def winfo_width(self) -> int:
        return self.width

    def winfo_height(self) -> int:
        return self.height

    def focus_set(self) -> None:
        self.focused += 1

    def invoke(self) -> None:
        self.invoked += 1

    def cget(self, option: str) -> str:
        return self.state


class FakeRoot:
    def __init__(self) -> None:
        self.bindings = {}

    def bind_all(self, sequence, callback, add=None):
        self.bindings[sequence] = callback
        return "funcid"


def test_widget_position_is_its_centre() -> None:
    widget = FakeWidget(10, 30, width=100, height=40)
    assert tk_widget_position(widget) == (60.0, 50.0)
    assert tk_widget_position(TkSelectable(widget)) == (60.0, 50.0)


def test_selectable_wraps_focus_and_invoke() -> None:
    widget = FakeWidget(0, 0)
    selectable = TkSelectable(widget)

    selectable.select()
    selectable.activate()

    assert widget.focused == 1
    assert widget.invoked == 1
    assert selectable.interactable
    assert TkSelectable(widget) == selectable
    assert hash(TkSelectable(widget)) == hash(selectable)
    assert not TkSelectable(FakeWidget(0, 0, state="disabled")).interactable


def test_tk_widgets_navigate_in_a_group() -> None:
    context = NavigationContext(position=tk_widget_position, settings=NavigationSettings(registration_delay_frames=0))
    group = NavigationGroup("buttons", context=context)
    widgets = [FakeWidget(x, 0) for x in (0, 100, 200)]
    for widget in widgets:
        group.add_element(TkSelectable(widget))
    context.end_frame()

    group.select_first()
    group.navigate(1)

    assert widgets[1].focused == 1
    assert context.focus.current == TkSelectable(widgets[1])


def test_focus_observer_tracks_mouse_focus() -> None:
    context = NavigationContext(position=tk_widget_position, settings=NavigationSettings(registration_delay_frames=0))
    group = NavigationGroup("buttons", context=context)
    widget = FakeWidget(0, 0)
    group.add_element(TkSelectable(widget))
    root = FakeRoot()

    tk_focus_observer(root, context)
    root.bindings["<FocusIn>"](type("Event", (), {"widget": widget})())

    assert context.focus.current == TkSelectable(widget)
    assert widget.focused == 0
