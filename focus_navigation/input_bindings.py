"""Keyboard control schemes and the Tk-bound keyboard navigation input."""

from __future__ import annotations

import copy
import inspect
import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from focus_navigation.logging_utils import get_logger

if TYPE_CHECKING:
    import tkinter as tk

LOGGER = get_logger("Input")

ACTION_NEXT = "navigate_next"
ACTION_PREVIOUS = "navigate_previous"
ACTION_SUBMIT = "submit"
ACTION_CANCEL = "cancel"

# Default layout that can be extended by the user later on.
DEFAULT_CONFIG: Dict[str, Any] = {
    "active_scheme": "keyboard_default",
    "schemes": {
        "keyboard_default": {
            "device_type": "keyboard",
            "display_name": "Keyboard (default)",
            "bindings": {
                ACTION_NEXT: ["<Tab>", "<Right>", "<Down>"],
                ACTION_PREVIOUS: ["<Shift-Tab>", "<ISO_Left_Tab>", "<Left>", "<Up>"],
                ACTION_SUBMIT: ["<Return>", "<KP_Enter>", "<space>"],
                ACTION_CANCEL: ["<Escape>"],
            },
        }
    },
}

# Tk event.state bits for Control, Mod1 (Alt on X11) and Alt on Windows.
_CONTROL_MASK = 0x0004
_ALT_MASKS = 0x0008 | 0x20000
_TAB_KEYSYMS = {"Tab", "ISO_Left_Tab"}


@dataclass
class ControlScheme:
    """Container for a set of bindings and some metadata."""

    name: str
    device_type: str
    display_name: str
    bindings: Dict[str, List[str]]


@dataclass
class BindingConfig:
    """Representation of the key binding configuration."""

    schemes: Dict[str, ControlScheme]
    active_scheme: str
    source_path: Optional[Path] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], source_path: Optional[Path] = None) -> "BindingConfig":
        schemes = {
            name: ControlScheme(
                name=name,
                device_type=spec.get("device_type", "keyboard"),
                display_name=spec.get("display_name", name),
                bindings={
                    action: list(inputs or [])
                    for action, inputs in (spec.get("bindings") or {}).items()
                },
            )
            for name, spec in (payload.get("schemes") or {}).items()
        }

        active = payload.get("active_scheme")
        if active not in schemes:
            where = f" in keybindings file {source_path}" if source_path else ""
            raise ValueError(f"Active scheme '{active}' is not defined{where}")

        return cls(schemes=schemes, active_scheme=active, source_path=source_path)

    @classmethod
    def default(cls) -> "BindingConfig":
        return cls.from_payload(copy.deepcopy(DEFAULT_CONFIG))

    @classmethod
    def load(cls, path: Path) -> "BindingConfig":
        """Load config from disk, creating the default file if missing."""

        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(DEFAULT_CONFIG, indent=2), encoding="utf-8")

        payload = json.loads(path.read_text(encoding="utf-8"))
        return cls.from_payload(payload, source_path=path)

    def get_scheme(self, name: Optional[str] = None) -> ControlScheme:
        """Return the requested scheme or the currently active one."""

        scheme_name = name or self.active_scheme
        try:
            return self.schemes[scheme_name]
        except KeyError as exc:
            raise ValueError(f"Unknown control scheme '{scheme_name}'") from exc


class BindingManager:
    """Handles applying bindings for the active scheme to a Tk widget."""

    def __init__(self, widget: "tk.Misc", config: BindingConfig) -> None:  # type: ignore[name-defined]
        self.widget = widget
        self.config = config
        self._handlers: Dict[str, Callable] = {}
        self._action_widgets: Dict[str, List["tk.Misc"]] = {}
        self._bound_sequences: List[Tuple["tk.Misc", str]] = []
        self._cached_wrappers: Dict[str, Callable] = {}

    def register_action(
        self,
        action_name: str,
        handler: Callable,
        *,
        widget: Optional["tk.Misc"] = None,
        widgets: Optional[Iterable["tk.Misc"]] = None,
    ) -> None:
        """Associate an action identifier with a callable."""

        self._handlers[action_name] = handler
        targets: List["tk.Misc"] = []
        if widget is not None:
            targets.append(widget)
        if widgets is not None:
            targets.extend(widgets)
        if targets:
            self._action_widgets[action_name] = targets
        elif action_name in self._action_widgets:
            del self._action_widgets[action_name]
        # Drop cached wrapper so a future activate() re-evaluates the signature.
        self._cached_wrappers.pop(action_name, None)

    def activate(self, scheme_name: Optional[str] = None) -> None:
        """Apply the bindings for the requested or active scheme."""

        self.deactivate()

        scheme = self.config.get_scheme(scheme_name)
        for action, sequences in scheme.bindings.items():
            if action not in self._handlers:
                continue
            target_widgets = self._action_widgets.get(action) or [self.widget]
            callback = self._get_wrapped_handler(action)
            for sequence in sequences:
                try:
                    normalized = self._normalize_sequence(sequence)
                except ValueError:
                    LOGGER.warning("Skipping invalid binding %r for action '%s'", sequence, action)
                    continue
                for target_widget in target_widgets:
                    try:
                        target_widget.bind(normalized, callback, add="+")
                    except Exception as exc:
                        LOGGER.warning("Skipping invalid binding %s for action '%s': %s", normalized, action, exc)
                        continue
                    self._bound_sequences.append((target_widget, normalized))

    def deactivate(self) -> None:
        self._unbind_sequences(self._bound_sequences)
        self._bound_sequences.clear()

    def _unbind_sequences(self, sequences: Iterable[Tuple["tk.Misc", str]]) -> None:
        for widget, sequence in sequences:
            try:
                widget.unbind(sequence)
            except Exception:
                # Some widgets do not implement unbind; ignore in that case.
                pass

    def _get_wrapped_handler(self, action: str) -> Callable:
        if action in self._cached_wrappers:
            return self._cached_wrappers[action]

        handler = self._handlers[action]
        takes_event = self._handler_accepts_event(handler)

        def _callback(event: object) -> object:
            if takes_event:
                return handler(event)
            return handler()

        self._cached_wrappers[action] = _callback
        return _callback

    @staticmethod
    def _handler_accepts_event(handler: Callable) -> bool:
        try:
            signature = inspect.signature(handler)
        except (TypeError, ValueError):
            return False
        params = list(signature.parameters.values())
        return len(params) >= 1

    @staticmethod
    def _normalize_sequence(sequence: str) -> str:
        seq = sequence.strip()
        if not seq:
            raise ValueError("Binding sequence cannot be empty")
        if not seq.startswith("<"):
            seq = f"<{seq}>"
        return seq


def _tab_with_modifier(event: object) -> bool:
    if getattr(event, "keysym", None) not in _TAB_KEYSYMS:
        return False
    state = getattr(event, "state", 0)
    if not isinstance(state, int):
        return False
    return bool(state & (_CONTROL_MASK | _ALT_MASKS))


class KeyboardNavigationInput:
    """Latches Tk key events until the next tick polls them.

    Each getter reports a press at most once, mirroring "pressed this frame"
    semantics. Tab is ignored while Control or Alt is held so host shortcuts
    such as Ctrl+Tab keep working.
    """

    def __init__(
        self,
        widget: Optional["tk.Misc"] = None,
        *,
        config: Optional[BindingConfig] = None,
        scheme: Optional[str] = None,
    ) -> None:
        self.config = config or BindingConfig.default()
        self.binding_manager: Optional[BindingManager] = None
        self._direction = 0
        self._submit = False
        self._cancel = False
        if widget is not None:
            self.attach(widget, scheme=scheme)

    def attach(self, widget: "tk.Misc", *, scheme: Optional[str] = None) -> BindingManager:
        self.detach()
        manager = BindingManager(widget, self.config)
        manager.register_action(ACTION_NEXT, self._on_next)
        manager.register_action(ACTION_PREVIOUS, self._on_previous)
        manager.register_action(ACTION_SUBMIT, self._on_submit)
        manager.register_action(ACTION_CANCEL, self._on_cancel)
        manager.activate(scheme)
        self.binding_manager = manager
        return manager

    def detach(self) -> None:
        if self.binding_manager is not None:
            self.binding_manager.deactivate()
            self.binding_manager = None

    def press(self, action: str) -> None:
        """Feed an action without a Tk event, e.g. from a host's own key handling."""
        handlers = {
            ACTION_NEXT: self._on_next,
            ACTION_PREVIOUS: self._on_previous,
            ACTION_SUBMIT: self._on_submit,
            ACTION_CANCEL: self._on_cancel,
        }
        try:
            handler = handlers[action]
        except KeyError as exc:
            raise ValueError(f"Unknown navigation action '{action}'") from exc
        handler(None)

    def _on_next(self, event: object) -> Optional[str]:
        if _tab_with_modifier(event):
            return None
        self._direction = 1
        return "break"

    def _on_previous(self, event: object) -> Optional[str]:
        if _tab_with_modifier(event):
            return None
        self._direction = -1
        return "break"

    def _on_submit(self, event: object) -> str:
        self._submit = True
        return "break"

    def _on_cancel(self, event: object) -> str:
        self._cancel = True
        return "break"

    def get_direction(self) -> int:
        direction, self._direction = self._direction, 0
        return direction

    def get_submit(self) -> bool:
        submit, self._submit = self._submit, False
        return submit

    def get_cancel(self) -> bool:
        cancel, self._cancel = self._cancel, False
        return cancel
