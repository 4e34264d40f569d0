"""Navigation groups: one scope of focusable elements in a tree of scopes."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from focus_navigation import modal as modal_gate
from focus_navigation.context import NavigationContext, build_navigation_context
from focus_navigation.element import NavigationElement
from focus_navigation.errors import NavigationConfigError
from focus_navigation.inputs import InputSnapshot, NavigationInput, poll_input
from focus_navigation.logging_utils import get_logger
from focus_navigation.modes import NavigationMode, NavigationRequest, resolve_next
from focus_navigation.registry import ElementRegistry
from focus_navigation.tree import handle_boundary

LOGGER = get_logger("Group")

FindParentFn = Callable[["NavigationGroup"], Optional["NavigationGroup"]]
CancelFn = Callable[["NavigationGroup"], None]


class NavigationGroup:
    """Owns a set of elements, a navigation mode and a place in the group tree.

    The parent is fixed at construction, either passed explicitly or found by
    ``find_parent`` (the host's tree-membership lookup). Both may be given only
    if they agree.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        *,
        context: Optional[NavigationContext] = None,
        parent: Optional["NavigationGroup"] = None,
        find_parent: Optional[FindParentFn] = None,
        mode: NavigationMode | str = NavigationMode.AUTOMATIC,
        cycle: bool = True,
        modal: bool = False,
        navigation_input: Optional[NavigationInput] = None,
        on_cancel: Optional[CancelFn] = None,
    ) -> None:
        self.name = name or f"group-{id(self):x}"
        self._mode = NavigationMode(mode)
        self.cycle = cycle
        self._is_modal = bool(modal)
        self._is_modal_active = False
        self.navigation_input = navigation_input
        self.on_cancel = on_cancel
        self._children: List[NavigationGroup] = []
        self._destroyed = False
        self._parent: Optional[NavigationGroup] = None
        self.registry: ElementRegistry[NavigationElement] = ElementRegistry(self.name)

        resolved_parent = self._resolve_parent(parent, find_parent)
        if context is None:
            context = resolved_parent.context if resolved_parent is not None else build_navigation_context()
        elif resolved_parent is not None and resolved_parent.context is not context:
            raise NavigationConfigError(
                f"Group {self.name!r} and its parent {resolved_parent.name!r} use different contexts"
            )
        self.context = context
        self._parent = resolved_parent
        if resolved_parent is not None:
            resolved_parent._children.append(self)

    def __repr__(self) -> str:
        return f"NavigationGroup({self.name!r}, mode={self._mode.value}, elements={len(self.registry)})"

    def _resolve_parent(
        self,
        parent: Optional["NavigationGroup"],
        find_parent: Optional[FindParentFn],
    ) -> Optional["NavigationGroup"]:
        found = find_parent(self) if find_parent is not None else None
        if parent is not None and find_parent is not None and found is not parent:
            raise NavigationConfigError(
                f"Group {self.name!r}: explicit parent {parent.name!r} disagrees with hierarchy lookup {found!r}"
            )
        resolved = parent if parent is not None else found
        if resolved is None:
            return None
        if resolved is self:
            raise NavigationConfigError(f"Group {self.name!r} cannot be its own parent")
        if resolved.destroyed:
            raise NavigationConfigError(f"Group {self.name!r}: parent {resolved.name!r} was destroyed")
        return resolved

    # Tree ---------------------------------------------------------------

    @property
    def parent(self) -> Optional["NavigationGroup"]:
        return self._parent

    @property
    def children(self) -> Tuple["NavigationGroup", ...]:
        return tuple(self._children)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Tear down this group and its subtree, releasing every element it owns."""
        if self._destroyed:
            return
        self._destroyed = True
        for child in list(self._children):
            child.destroy()
        for element in self.context.elements_of(self):
            element.destroy()
        self.registry.clear()
        LOGGER.debug("Destroyed group %s", self.name)
        if self._parent is not None and self in self._parent._children:
            self._parent._children.remove(self)

    # Configuration ------------------------------------------------------

    @property
    def mode(self) -> NavigationMode:
        return self._mode

    @mode.setter
    def mode(self, value: NavigationMode | str) -> None:
        value = NavigationMode(value)
        if value is self._mode:
            return
        self._mode = value
        self.recalculate()

    @property
    def is_modal(self) -> bool:
        return self._is_modal

    @property
    def is_modal_active(self) -> bool:
        return self._is_modal_active

    def set_modal_active(self, active: bool) -> bool:
        """Enter or leave modal mode; ignored for non-modal groups and no-op toggles."""
        active = bool(active)
        if not self._is_modal or self._is_modal_active == active:
            return False
        self._is_modal_active = active
        LOGGER.debug("Modal %s %s", self.name, "activated" if active else "released")
        return True

    def is_eligible(self) -> bool:
        return modal_gate.is_eligible(self)

    # Registry -----------------------------------------------------------

    @property
    def elements(self) -> List[NavigationElement]:
        return self.registry.elements()

    def add_element(self, selectable: Any, *, enabled: bool = True) -> NavigationElement:
        return NavigationElement(selectable, self, enabled=enabled)

    def calculate_priority(self, element: NavigationElement) -> int:
        return self.context.priority_of(element.selectable)

    def register_element(self, element: NavigationElement) -> bool:
        if element.group is not self:
            raise NavigationConfigError(f"{element!r} belongs to {element.group.name!r}, not {self.name!r}")
        if element.priority is None:
            element.priority = self.calculate_priority(element)
        return self.registry.register(element, element.priority)

    def unregister_element(self, element: NavigationElement) -> bool:
        return self.registry.unregister(element)

    def recalculate(self) -> List[NavigationElement]:
        """Re-measure every registered element; returns any that now collide."""

        def derive(element: NavigationElement) -> int:
            element.priority = self.calculate_priority(element)
            return element.priority

        rejected = self.registry.recalculate_all(derive)
        if rejected:
            LOGGER.warning("Recalculation in %s dropped %d colliding element(s)", self.name, len(rejected))
        return rejected

    def element_for(self, selectable: Any) -> Optional[NavigationElement]:
        element = self.context.element_for(selectable)
        if element is None or element.group is not self or element not in self.registry:
            return None
        return element

    def first_element(self) -> Optional[NavigationElement]:
        return self.registry.first()

    def last_element(self) -> Optional[NavigationElement]:
        return self.registry.last()

    def find_element_by_priority(self, priority: int) -> Optional[NavigationElement]:
        return self.registry.at_priority(priority)

    def current_element(self) -> Optional[NavigationElement]:
        return self.element_for(self.context.focus.current)

    # Selection ----------------------------------------------------------

    def select(self, element: NavigationElement) -> None:
        self.context.focus.select(element.selectable)

    def select_first(self) -> bool:
        element = self.first_element()
        if element is None:
            return False
        self.select(element)
        return True

    def select_last(self) -> bool:
        element = self.last_element()
        if element is None:
            return False
        self.select(element)
        return True

    # Navigation ---------------------------------------------------------

    def next_element(self, current: NavigationElement, direction: int) -> Optional[NavigationElement]:
        """Mode-specific step inside this group only; ``current`` back means held."""
        settings = self.context.settings
        request = NavigationRequest(
            elements=self.registry.elements(),
            current=current,
            direction=direction,
            cycle=self.cycle,
            position=lambda element: self.context.position_of(element.selectable),
            row_tolerance=settings.row_tolerance,
            column_tolerance=settings.column_tolerance,
        )
        return resolve_next(self._mode, request)

    def navigate(self, direction: int) -> Optional[NavigationElement]:
        current = self.current_element()
        if current is None:
            return None
        return self.navigate_from(current, direction)

    def navigate_from(self, current: NavigationElement, direction: int) -> Optional[NavigationElement]:
        """Move from ``current``; returns the newly selected element or ``None``."""
        if direction == 0 or current not in self.registry:
            return None
        target = self.next_element(current, direction)
        if target is None:
            return None
        if target is not current:
            self.select(target)
            return target
        # Cycling groups are self-contained; only held, non-cycling groups cross out.
        if self.cycle:
            return None
        target = handle_boundary(self, current, direction)
        if target is None:
            return None
        self.select(target)
        return target

    def submit(self) -> bool:
        current = self.current_element()
        if current is None:
            return False
        selectable = current.selectable
        if not getattr(selectable, "interactable", True):
            return False
        activate = getattr(selectable, "activate", None)
        if not callable(activate):
            return False
        activate()
        self.select(current)
        return True

    def cancel(self) -> bool:
        if self.on_cancel is None:
            return False
        self.on_cancel(self)
        return True

    def handle_input(self, snapshot: InputSnapshot) -> Optional[NavigationElement]:
        """Apply one tick of input if this group is allowed to consume it."""
        reason = modal_gate.blocking_reason(self)
        if reason is not None:
            if not snapshot.idle:
                LOGGER.debug("Group %s ignored input: %s", self.name, reason)
            return None
        moved = None
        if snapshot.direction:
            moved = self.navigate(snapshot.direction)
        if snapshot.submit:
            self.submit()
        if snapshot.cancel:
            self.cancel()
        return moved

    def update(self, navigation_input: Optional[NavigationInput] = None) -> Optional[NavigationElement]:
        source = navigation_input or self.navigation_input
        if source is None or not self.is_eligible():
            return None
        return self.handle_input(poll_input(source))
