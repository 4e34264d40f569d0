"""Optional gamepad navigation input backed by pygame's joystick events."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

try:
    import pygame
except Exception:  # pragma: no cover - optional dependency
    pygame = None  # type: ignore

from focus_navigation.logging_utils import get_logger

LOGGER = get_logger("Input")

# Xbox-style mapping based on SDL/pygame defaults.
_BUTTON_SUBMIT = 0  # A
_BUTTON_CANCEL = 1  # B
_BUTTON_DIRECTIONS: Dict[int, int] = {
    4: -1,  # LB
    5: 1,  # RB
}
_HAT_DIRECTIONS: Dict[Tuple[int, int], int] = {
    (1, 0): 1,  # right
    (0, -1): 1,  # down
    (-1, 0): -1,  # left
    (0, 1): -1,  # up
}
# Left stick: axis 0 grows to the right, axis 1 grows downward.
_NAVIGATION_AXES = (0, 1)
AXIS_THRESHOLD = 0.5


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "off", "no", ""}


class GamepadNavigationInput:
    """Drain pygame joystick events each poll and report them as navigation input.

    D-pad right/down and RB move forward, left/up and LB move backward; the
    left stick counts once each time it crosses ``AXIS_THRESHOLD``. A submits,
    B cancels. Without pygame or a joystick the adapter stays inert.
    """

    def __init__(
        self,
        *,
        enabled: Optional[bool] = None,
        joystick_index: int = 0,
        autostart: bool = True,
    ) -> None:
        self.joystick_index = joystick_index
        self._enabled = enabled if enabled is not None else _env_flag("FOCUS_NAV_GAMEPAD", True)
        self._joystick: Any = None
        self._active = False
        self._direction = 0
        self._submit = False
        self._cancel = False
        self._axis_engaged: Dict[int, int] = {}
        if autostart:
            self.start()

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> bool:
        if not self._enabled or self._active:
            return self._active
        if pygame is None:
            LOGGER.info("Gamepad input disabled: pygame not available")
            return False
        try:
            pygame.init()
            pygame.joystick.init()
        except Exception as exc:
            LOGGER.info("Gamepad input disabled: pygame init failed (%s)", exc)
            return False
        if pygame.joystick.get_count() <= self.joystick_index:
            LOGGER.info("Gamepad input disabled: no joystick at index %d", self.joystick_index)
            return False
        try:
            joystick = pygame.joystick.Joystick(self.joystick_index)
            joystick.init()
        except Exception as exc:
            LOGGER.info("Gamepad input disabled: joystick init failed (%s)", exc)
            return False
        LOGGER.info("Gamepad input active with '%s'", joystick.get_name())
        self._joystick = joystick
        self._active = True
        return True

    def stop(self) -> None:
        self._enabled = False
        self._active = False
        self._joystick = None
        self._reset()

    def _reset(self) -> None:
        self._direction = 0
        self._submit = False
        self._cancel = False
        self._axis_engaged.clear()

    def pump(self) -> None:
        if not self._active:
            return
        try:
            events = pygame.event.get()  # type: ignore[union-attr]
        except Exception as exc:
            LOGGER.info("Gamepad input stopped after error: %s", exc)
            self._active = False
            return
        for event in events:
            self.handle_event(event)

    def handle_event(self, event: Any) -> None:
        if pygame is None:
            return
        etype = getattr(event, "type", None)
        if etype is None:
            return
        if etype == pygame.JOYBUTTONDOWN:
            self._handle_button_down(getattr(event, "button", -1))
        elif etype == pygame.JOYHATMOTION:
            self._handle_hat(tuple(getattr(event, "value", (0, 0))))
        elif etype == pygame.JOYAXISMOTION:
            self._handle_axis(getattr(event, "axis", -1), float(getattr(event, "value", 0.0)))

    def _handle_button_down(self, button: int) -> None:
        if button == _BUTTON_SUBMIT:
            self._submit = True
        elif button == _BUTTON_CANCEL:
            self._cancel = True
        elif button in _BUTTON_DIRECTIONS:
            self._direction = _BUTTON_DIRECTIONS[button]

    def _handle_hat(self, value: Tuple[int, ...]) -> None:
        direction = _HAT_DIRECTIONS.get((value[0], value[1]) if len(value) >= 2 else (0, 0))
        if direction:
            self._direction = direction

    def _handle_axis(self, axis: int, value: float) -> None:
        if axis not in _NAVIGATION_AXES:
            return
        if abs(value) <= AXIS_THRESHOLD:
            self._axis_engaged.pop(axis, None)
            return
        sign = 1 if value > 0 else -1
        if self._axis_engaged.get(axis) == sign:
            return
        self._axis_engaged[axis] = sign
        self._direction = sign

    def get_direction(self) -> int:
        self.pump()
        direction, self._direction = self._direction, 0
        return direction

    def get_submit(self) -> bool:
        self.pump()
        submit, self._submit = self._submit, False
        return submit

    def get_cancel(self) -> bool:
        self.pump()
        cancel, self._cancel = self._cancel, False
        return cancel
