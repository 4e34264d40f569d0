from __future__ import annotations

import json
import logging
import types
from pathlib import Path

import pytest

from focus_navigation.input_bindings import (
    ACTION_CANCEL,
    ACTION_NEXT,
    ACTION_PREVIOUS,
    ACTION_SUBMIT,
    BindingConfig,
    BindingManager,
    ControlScheme,
    KeyboardNavigationInput,
)
from focus_navigation.inputs import InputSnapshot, create_navigation_input, poll_input


class DummyWidget:
    """Minimal stand-in for a Tk widget that can simulate bind failures."""

    def __init__(self, *, fail_sequences: set[str] | None = None) -> None:
        self.bound_sequences: list[str] = []
        self.unbound_sequences: list[str] = []
        self.callbacks: dict[str, object] = {}
        self.fail_sequences = fail_sequences or set()

    def bind(self, sequence: str, callback, add: str | None = None):  # type: ignore[override]
        if sequence in self.fail_sequences:
            raise RuntimeError(f"Cannot bind {sequence}")
        self.bound_sequences.append(sequence)
        self.callbacks[sequence] = callback
        return "ok"

    def unbind(self, sequence: str):  # type: ignore[override]
        self.unbound_sequences.append(sequence)

    def fire(self, sequence: str, **event_fields):
        return self.callbacks[sequence](types.SimpleNamespace(**event_fields))


def _make_config(bindings: dict[str, list[str]]) -> BindingConfig:
    scheme = ControlScheme(
        name="test",
        device_type="keyboard",
        display_name="Test",
        bindings=bindings,
    )
    return BindingConfig(
        schemes={"test": scheme},
        active_scheme="test",
        source_path=Path("dummy"),
    )


def test_activate_skips_invalid_sequences_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    widget = DummyWidget(fail_sequences={"<ISO_Left_Tab>"})
    config = _make_config({"cycle": ["<Shift-Tab>", "<ISO_Left_Tab>"]})
    manager = BindingManager(widget, config)
    manager.register_action("cycle", lambda: None, widget=widget)

    with caplog.at_level(logging.WARNING, logger="FocusNavigation.Input"):
        manager.activate()

    assert widget.bound_sequences == ["<Shift-Tab>"]
    assert any("ISO_Left_Tab" in record.getMessage() for record in caplog.records)


def test_activate_skips_empty_sequences(caplog: pytest.LogCaptureFixture) -> None:
    widget = DummyWidget()
    config = _make_config({"move": ["", "   ", "<Left>"]})
    manager = BindingManager(widget, config)
    manager.register_action("move", lambda: None, widget=widget)

    with caplog.at_level(logging.WARNING, logger="FocusNavigation.Input"):
        manager.activate()

    assert widget.bound_sequences == ["<Left>"]
    empty_warnings = [record for record in caplog.records if "Skipping invalid binding" in record.getMessage()]
    assert len(empty_warnings) == 2


def test_reactivate_unbinds_previous_sequences() -> None:
    widget = DummyWidget()
    manager = BindingManager(widget, _make_config({"go": ["Right"]}))
    manager.register_action("go", lambda event: event)

    manager.activate()
    manager.activate()

    assert widget.bound_sequences == ["<Right>", "<Right>"]
    assert widget.unbound_sequences == ["<Right>"]


def test_keyboard_input_latches_until_polled() -> None:
    widget = DummyWidget()
    keyboard = KeyboardNavigationInput(widget)

    assert widget.fire("<Tab>", keysym="Tab", state=0) == "break"
    widget.fire("<Return>", keysym="Return", state=0)

    snapshot = poll_input(keyboard)
    assert (snapshot.direction, snapshot.submit, snapshot.cancel) == (1, True, False)
    assert poll_input(keyboard).idle


def test_keyboard_previous_and_cancel() -> None:
    widget = DummyWidget()
    keyboard = KeyboardNavigationInput(widget)

    widget.fire("<ISO_Left_Tab>", keysym="ISO_Left_Tab", state=0x0001)
    widget.fire("<Escape>", keysym="Escape", state=0)

    assert keyboard.get_direction() == -1
    assert keyboard.get_cancel() is True


def test_tab_with_control_or_alt_is_ignored() -> None:
    widget = DummyWidget()
    keyboard = KeyboardNavigationInput(widget)

    assert widget.fire("<Tab>", keysym="Tab", state=0x0004) is None
    widget.fire("<Tab>", keysym="Tab", state=0x0008)
    assert keyboard.get_direction() == 0

    # Arrow keys are not filtered.
    widget.fire("<Down>", keysym="Down", state=0x0004)
    assert keyboard.get_direction() == 1


def test_press_feeds_actions_without_events() -> None:
    keyboard = KeyboardNavigationInput()
    keyboard.press(ACTION_PREVIOUS)
    keyboard.press(ACTION_SUBMIT)
    keyboard.press(ACTION_CANCEL)

    assert poll_input(keyboard) == InputSnapshot(direction=-1, submit=True, cancel=True)
    with pytest.raises(ValueError):
        keyboard.press("jump")


def test_detach_unbinds_everything() -> None:
    widget = DummyWidget()
    keyboard = KeyboardNavigationInput(widget)
    bound = list(widget.bound_sequences)

    keyboard.detach()

    assert sorted(widget.unbound_sequences) == sorted(bound)
    assert keyboard.binding_manager is None


def test_default_scheme_covers_every_action() -> None:
    scheme = BindingConfig.default().get_scheme()
    assert {ACTION_NEXT, ACTION_PREVIOUS, ACTION_SUBMIT, ACTION_CANCEL} <= set(scheme.bindings)


def test_load_writes_default_file(tmp_path: Path) -> None:
    path = tmp_path / "config" / "keybindings.json"

    config = BindingConfig.load(path)

    assert path.exists()
    assert config.active_scheme == "keyboard_default"
    assert config.source_path == path


def test_load_rejects_undefined_active_scheme(tmp_path: Path) -> None:
    path = tmp_path / "keybindings.json"
    path.write_text(json.dumps({"active_scheme": "missing", "schemes": {}}))

    with pytest.raises(ValueError):
        BindingConfig.load(path)
    with pytest.raises(ValueError):
        BindingConfig.default().get_scheme("missing")


def test_create_navigation_input_registry() -> None:
    assert isinstance(create_navigation_input("keyboard"), KeyboardNavigationInput)
    with pytest.raises(ValueError):
        create_navigation_input("theremin")
