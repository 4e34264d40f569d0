"""The directional/submit/cancel input contract and its built-in devices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol, runtime_checkable


@runtime_checkable
class NavigationInput(Protocol):
    """Polled once per tick by the group that owns focus."""

    def get_direction(self) -> int:
        """-1 for previous, 1 for next, 0 for no navigation this tick."""
        ...

    def get_submit(self) -> bool: ...

    def get_cancel(self) -> bool: ...


@dataclass(frozen=True)
class InputSnapshot:
    direction: int = 0
    submit: bool = False
    cancel: bool = False

    @property
    def idle(self) -> bool:
        return not (self.direction or self.submit or self.cancel)


def poll_input(source: NavigationInput) -> InputSnapshot:
    direction = int(source.get_direction())
    if direction > 0:
        direction = 1
    elif direction < 0:
        direction = -1
    return InputSnapshot(
        direction=direction,
        submit=bool(source.get_submit()),
        cancel=bool(source.get_cancel()),
    )


def _keyboard_factory(**kwargs: Any) -> NavigationInput:
    from focus_navigation.input_bindings import KeyboardNavigationInput

    return KeyboardNavigationInput(**kwargs)


def _gamepad_factory(**kwargs: Any) -> NavigationInput:
    from focus_navigation.gamepad import GamepadNavigationInput

    return GamepadNavigationInput(**kwargs)


INPUT_DEVICES: Dict[str, Callable[..., NavigationInput]] = {
    "keyboard": _keyboard_factory,
    "gamepad": _gamepad_factory,
}


def create_navigation_input(device_type: str, **kwargs: Any) -> NavigationInput:
    """Build the built-in adapter for ``device_type`` ("keyboard" or "gamepad")."""
    try:
        factory = INPUT_DEVICES[device_type]
    except KeyError as exc:
        raise ValueError(f"Unknown input device '{device_type}'") from exc
    return factory(**kwargs)
