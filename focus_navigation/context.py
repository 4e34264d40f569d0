from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple

from focus_navigation.deferred import DeferredRegistrationQueue
from focus_navigation.errors import NavigationConfigError
from focus_navigation.focus import FocusTracker
from focus_navigation.priority import PriorityCalculator
from focus_navigation.settings import NavigationSettings, load_settings

if TYPE_CHECKING:
    from focus_navigation.element import NavigationElement
    from focus_navigation.group import NavigationGroup

Point = Tuple[float, float]
PositionOracle = Callable[[Any], Point]


def attribute_position(selectable: Any) -> Point:
    """Read ``selectable.position``, calling it when it is a method."""
    value = getattr(selectable, "position")
    if callable(value):
        value = value()
    x, y = value
    return float(x), float(y)


@dataclass
class NavigationContext:
    """Shared collaborators for every group in one navigation tree."""

    position: PositionOracle = attribute_position
    settings: NavigationSettings = field(default_factory=NavigationSettings)
    focus: FocusTracker = field(default_factory=FocusTracker)
    registrations: Optional[DeferredRegistrationQueue] = None
    priority_calculator: Optional[PriorityCalculator] = None

    def __post_init__(self) -> None:
        if self.registrations is None:
            self.registrations = DeferredRegistrationQueue(self.settings.registration_delay_frames)
        if self.priority_calculator is None:
            self.priority_calculator = PriorityCalculator(
                bits=self.settings.coordinate_bits,
                screen_height=self.settings.screen_height,
            )
        self._elements: Dict[Any, "NavigationElement"] = {}

    def position_of(self, selectable: Any) -> Point:
        return self.position(selectable)

    def priority_of(self, selectable: Any) -> int:
        return self.priority_calculator.priority(self.position_of(selectable))  # type: ignore[union-attr]

    def element_for(self, selectable: Any) -> Optional["NavigationElement"]:
        if selectable is None:
            return None
        return self._elements.get(selectable)

    def attach_element(self, element: "NavigationElement") -> None:
        existing = self._elements.get(element.selectable)
        if existing is not None and existing is not element:
            raise NavigationConfigError(
                f"{element.selectable!r} already belongs to group {existing.group.name!r}"
            )
        self._elements[element.selectable] = element

    def elements_of(self, group: "NavigationGroup") -> List["NavigationElement"]:
        """Every attached element owned by ``group``, registered or not."""
        return [element for element in self._elements.values() if element.group is group]

    def detach_element(self, element: "NavigationElement") -> None:
        if self._elements.get(element.selectable) is element:
            del self._elements[element.selectable]

    def owner_of(self, selectable: Any) -> Optional["NavigationGroup"]:
        """Group whose registered element wraps ``selectable``, if any."""
        element = self.element_for(selectable)
        if element is None or not element.registered:
            return None
        return element.group

    def end_frame(self) -> int:
        return len(self.registrations.end_frame())  # type: ignore[union-attr]


def build_navigation_context(
    *,
    position: Optional[PositionOracle] = None,
    settings: Optional[NavigationSettings] = None,
    env: Optional[Mapping[str, str]] = None,
    focus: Optional[FocusTracker] = None,
) -> NavigationContext:
    """Assemble a context, reading FOCUS_NAV_* settings when none are given."""
    resolved = settings if settings is not None else load_settings(env)
    return NavigationContext(
        position=position or attribute_position,
        settings=resolved,
        focus=focus or FocusTracker(),
    )
