"""Eligibility rules for modal navigation groups.

Eligibility is derived fresh from the tree on every query; nothing is cached.
"""

from __future__ import annotations

from typing import Iterator, Optional, Protocol, Sequence


class ModalNode(Protocol):
    @property
    def is_modal(self) -> bool: ...

    @property
    def is_modal_active(self) -> bool: ...

    @property
    def parent(self) -> Optional["ModalNode"]: ...

    @property
    def children(self) -> Sequence["ModalNode"]: ...


def _active(group: ModalNode) -> bool:
    return group.is_modal and group.is_modal_active


def iter_ancestors(group: ModalNode) -> Iterator[ModalNode]:
    current = group.parent
    while current is not None:
        yield current
        current = current.parent


def iter_descendants(group: ModalNode) -> Iterator[ModalNode]:
    for child in group.children:
        yield child
        yield from iter_descendants(child)


def root_of(group: ModalNode) -> ModalNode:
    current = group
    while current.parent is not None:
        current = current.parent
    return current


def has_active_modal_ancestor(group: ModalNode) -> bool:
    return any(_active(ancestor) for ancestor in iter_ancestors(group))


def has_active_modal_descendant(group: ModalNode) -> bool:
    return any(_active(descendant) for descendant in iter_descendants(group))


def has_active_modal_beside(group: ModalNode) -> bool:
    """True when an active modal elsewhere in the tree is neither above nor below ``group``."""
    related = {id(group)}
    related.update(id(node) for node in iter_ancestors(group))
    related.update(id(node) for node in iter_descendants(group))
    root = root_of(group)
    for node in (root, *iter_descendants(root)):
        if id(node) not in related and _active(node):
            return True
    return False


def blocking_reason(group: ModalNode) -> Optional[str]:
    """Why ``group`` may not consume input right now, or ``None`` if it may."""
    if group.is_modal and not group.is_modal_active:
        return "inactive modal"
    if has_active_modal_ancestor(group):
        return "active modal ancestor"
    if has_active_modal_descendant(group):
        return "active modal descendant"
    if has_active_modal_beside(group):
        return "active modal elsewhere in tree"
    return None


def is_eligible(group: ModalNode) -> bool:
    return blocking_reason(group) is None
