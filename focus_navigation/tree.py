"""Boundary crossing between a group, its children and its parent.

Crossing is always one hop (child or parent) and may cascade upward. These
functions only read registries; selection is applied by the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from focus_navigation.logging_utils import get_logger

if TYPE_CHECKING:
    from focus_navigation.element import NavigationElement
    from focus_navigation.group import NavigationGroup

LOGGER = get_logger("Group")


def _edge(group: "NavigationGroup", direction: int) -> Optional["NavigationElement"]:
    # Entering a group forward lands on its first element, backward on its last.
    return group.registry.first() if direction > 0 else group.registry.last()


def handle_boundary(
    group: "NavigationGroup",
    from_element: "NavigationElement",
    direction: int,
) -> Optional["NavigationElement"]:
    """Resolve a traversal that ran off the edge of ``group``; ``None`` absorbs it.

    Targets are picked by tree position only. The modal gate is not consulted,
    so focus can land in a group that then ignores input (an inactive modal, or
    a group beside an active one) until the host moves focus elsewhere.
    """
    if direction == 0:
        return None
    children = group.children
    if children:
        boundary = group.registry.last() if direction > 0 else group.registry.first()
        if from_element is boundary:
            target_group = children[0] if direction > 0 else children[-1]
            target = _edge(target_group, direction)
            if target is not None:
                LOGGER.debug("Boundary %s -> child %s", group.name, target_group.name)
                return target
    if group.parent is not None:
        return boundary_request_from_child(group.parent, group, direction)
    LOGGER.debug("Boundary at root %s absorbed (direction=%d)", group.name, direction)
    return None


def boundary_request_from_child(
    parent: "NavigationGroup",
    child: "NavigationGroup",
    direction: int,
) -> Optional["NavigationElement"]:
    siblings = parent.children
    try:
        index = siblings.index(child)
    except ValueError:
        return None

    if direction > 0:
        candidates = siblings[index + 1:]
    else:
        candidates = list(reversed(siblings[:index]))
    for sibling in candidates:
        target = _edge(sibling, direction)
        if target is not None:
            LOGGER.debug("Boundary %s -> sibling %s", child.name, sibling.name)
            return target

    target = _edge(parent, direction)
    if target is not None:
        LOGGER.debug("Boundary %s -> parent %s", child.name, parent.name)
        return target

    if parent.parent is not None:
        return boundary_request_from_child(parent.parent, parent, direction)
    LOGGER.debug("Boundary request from %s exhausted the tree at %s", child.name, parent.name)
    return None
