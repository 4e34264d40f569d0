"""Directional focus navigation across a tree of navigation groups."""

from __future__ import annotations

from focus_navigation.context import NavigationContext, build_navigation_context
from focus_navigation.driver import NavigationDriver
from focus_navigation.element import NavigationElement
from focus_navigation.errors import NavigationConfigError
from focus_navigation.focus import FocusTracker
from focus_navigation.group import NavigationGroup
from focus_navigation.inputs import InputSnapshot, NavigationInput, create_navigation_input
from focus_navigation.modes import NavigationMode
from focus_navigation.priority import PriorityCalculator
from focus_navigation.settings import NavigationSettings, load_settings

__all__ = [
    "FocusTracker",
    "InputSnapshot",
    "NavigationConfigError",
    "NavigationContext",
    "NavigationDriver",
    "NavigationElement",
    "NavigationGroup",
    "NavigationInput",
    "NavigationMode",
    "NavigationSettings",
    "PriorityCalculator",
    "build_navigation_context",
    "create_navigation_input",
    "load_settings",
]
