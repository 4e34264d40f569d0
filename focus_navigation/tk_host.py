"""Tk glue: widgets as selectables and widget geometry as the position oracle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    import tkinter as tk


class TkSelectable:
    """Wraps a Tk widget so the engine can select and activate it."""

    def __init__(self, widget: "tk.Misc") -> None:
        self.widget = widget

    def __repr__(self) -> str:
        return f"TkSelectable({self.widget!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TkSelectable) and other.widget is self.widget

    def __hash__(self) -> int:
        return hash(id(self.widget))

    @property
    def interactable(self) -> bool:
        try:
            return str(self.widget.cget("state")) != "disabled"  # type: ignore[attr-defined]
        except Exception:
            return True

    def select(self) -> None:
        self.widget.focus_set()

    def activate(self) -> None:
        invoke = getattr(self.widget, "invoke", None)
        if callable(invoke):
            invoke()

    @property
    def position(self) -> Tuple[float, float]:
        return tk_widget_position(self.widget)


def tk_widget_position(widget: Any) -> Tuple[float, float]:
    """Centre of ``widget`` in screen pixels (Y grows downward)."""
    if isinstance(widget, TkSelectable):
        widget = widget.widget
    widget.update_idletasks()
    x = widget.winfo_rootx() + widget.winfo_width() / 2.0
    y = widget.winfo_rooty() + widget.winfo_height() / 2.0
    return float(x), float(y)


def tk_focus_observer(root: "tk.Misc", context: Any) -> str:
    """Mirror Tk focus changes made by the mouse into ``context.focus``."""

    def _on_focus_in(event: Any) -> None:
        widget = getattr(event, "widget", None)
        if widget is None:
            return
        element = context.element_for(TkSelectable(widget))
        if element is not None:
            context.focus.observe(element.selectable)

    return root.bind_all("<FocusIn>", _on_focus_in, add="+")
