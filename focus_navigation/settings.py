"""Tunable constants for navigation resolution and the tick loop."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class NavigationSettings:
    """Container for navigation tolerances and timing settings."""

    row_tolerance: float = 10.0
    column_tolerance: float = 10.0
    coordinate_bits: int = 16
    registration_delay_frames: int = 1
    screen_height: Optional[float] = None
    tick_interval_ms: int = 16
    debug: bool = False


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "off", "no", ""}


def _coerce_int(raw: object, fallback: int, *, minimum: int, maximum: int | None = None) -> int:
    try:
        value = int(raw)  # type: ignore[call-overload]
    except Exception:
        value = fallback
    value = max(minimum, value)
    if maximum is not None:
        value = min(maximum, value)
    return value


def _coerce_float(raw: object, fallback: float, *, minimum: float) -> float:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except Exception:
        value = fallback
    return max(minimum, value)


def load_settings(env: Optional[Mapping[str, str]] = None) -> NavigationSettings:
    """Build settings from FOCUS_NAV_* environment variables, falling back to defaults."""

    env = os.environ if env is None else env
    base = NavigationSettings()
    screen_height: Optional[float] = None
    raw_height = env.get("FOCUS_NAV_SCREEN_HEIGHT")
    if raw_height:
        try:
            screen_height = max(0.0, float(raw_height))
        except ValueError:
            screen_height = None
    return NavigationSettings(
        row_tolerance=_coerce_float(env.get("FOCUS_NAV_ROW_TOLERANCE"), base.row_tolerance, minimum=0.0),
        column_tolerance=_coerce_float(env.get("FOCUS_NAV_COLUMN_TOLERANCE"), base.column_tolerance, minimum=0.0),
        coordinate_bits=_coerce_int(env.get("FOCUS_NAV_COORDINATE_BITS"), base.coordinate_bits, minimum=1, maximum=31),
        registration_delay_frames=_coerce_int(
            env.get("FOCUS_NAV_REGISTRATION_DELAY"), base.registration_delay_frames, minimum=0
        ),
        screen_height=screen_height,
        tick_interval_ms=_coerce_int(env.get("FOCUS_NAV_TICK_MS"), base.tick_interval_ms, minimum=1),
        debug=_env_flag(env, "FOCUS_NAV_DEBUG", base.debug),
    )
