from __future__ import annotations

import logging
import types

import pytest

pygame = pytest.importorskip("pygame")

from focus_navigation import gamepad  # noqa: E402
from focus_navigation.gamepad import GamepadNavigationInput  # noqa: E402


def _event(event_type: int, **fields) -> types.SimpleNamespace:
    return types.SimpleNamespace(type=event_type, **fields)


def _pad() -> GamepadNavigationInput:
    return GamepadNavigationInput(enabled=True, autostart=False)


def test_hat_maps_right_and_down_forward_left_and_up_backward() -> None:
    pad = _pad()
    expected = {(1, 0): 1, (0, -1): 1, (-1, 0): -1, (0, 1): -1, (0, 0): 0}
    for value, direction in expected.items():
        pad.handle_event(_event(pygame.JOYHATMOTION, value=value))
        assert pad.get_direction() == direction


def test_bumpers_and_face_buttons() -> None:
    pad = _pad()

    pad.handle_event(_event(pygame.JOYBUTTONDOWN, button=5))
    assert pad.get_direction() == 1
    pad.handle_event(_event(pygame.JOYBUTTONDOWN, button=4))
    assert pad.get_direction() == -1

    pad.handle_event(_event(pygame.JOYBUTTONDOWN, button=0))
    pad.handle_event(_event(pygame.JOYBUTTONDOWN, button=1))
    assert pad.get_submit() is True
    assert pad.get_cancel() is True
    assert pad.get_submit() is False


def test_stick_fires_once_per_threshold_crossing() -> None:
    pad = _pad()

    pad.handle_event(_event(pygame.JOYAXISMOTION, axis=1, value=0.8))
    assert pad.get_direction() == 1
    pad.handle_event(_event(pygame.JOYAXISMOTION, axis=1, value=0.95))
    assert pad.get_direction() == 0

    pad.handle_event(_event(pygame.JOYAXISMOTION, axis=1, value=0.1))
    pad.handle_event(_event(pygame.JOYAXISMOTION, axis=0, value=-0.7))
    assert pad.get_direction() == -1

    # Triggers and the right stick are not navigation axes.
    pad.handle_event(_event(pygame.JOYAXISMOTION, axis=4, value=1.0))
    assert pad.get_direction() == 0


def test_disabled_adapter_never_starts(caplog: pytest.LogCaptureFixture) -> None:
    pad = GamepadNavigationInput(enabled=False)
    assert pad.start() is False
    assert not pad.active


def test_missing_joystick_logs_and_stays_inert(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(gamepad.pygame, "init", lambda: (0, 0))
    monkeypatch.setattr(gamepad.pygame.joystick, "init", lambda: None)
    monkeypatch.setattr(gamepad.pygame.joystick, "get_count", lambda: 0)

    with caplog.at_level(logging.INFO, logger="FocusNavigation.Input"):
        pad = GamepadNavigationInput(enabled=True)

    assert not pad.active
    assert pad.get_direction() == 0
    assert any("no joystick" in record.getMessage() for record in caplog.records)


def test_env_flag_disables_gamepad(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOCUS_NAV_GAMEPAD", "off")
    pad = GamepadNavigationInput(autostart=False)
    assert pad.start() is False


def test_stop_clears_latched_input() -> None:
    pad = _pad()
    pad.handle_event(_event(pygame.JOYBUTTONDOWN, button=5))
    pad.stop()
    assert pad.get_direction() == 0
