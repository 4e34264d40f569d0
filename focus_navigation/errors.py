from __future__ import annotations


class NavigationConfigError(ValueError):
    """Raised when a group or element is wired inconsistently at construction time."""
