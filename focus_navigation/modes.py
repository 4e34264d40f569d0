"""Next-element strategies for the four navigation modes.

Each resolver is a pure function of the group's priority-ordered elements, the
current element, a direction (+1 forward, -1 backward) and the cycle flag.
Returning the current element means the traversal is held at a boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

E = TypeVar("E", bound=Hashable)

Point = Tuple[float, float]


class NavigationMode(str, Enum):
    AUTOMATIC = "automatic"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    GRID = "grid"


@dataclass
class NavigationRequest(Generic[E]):
    """Everything a resolver needs for one step."""

    elements: Sequence[E]
    current: E
    direction: int
    cycle: bool
    position: Callable[[E], Point]
    row_tolerance: float = 10.0
    column_tolerance: float = 10.0

    def __post_init__(self) -> None:
        self._positions: Dict[E, Point] = {}

    def position_of(self, element: E) -> Point:
        # One oracle read per element per resolution pass.
        cached = self._positions.get(element)
        if cached is None:
            cached = self.position(element)
            self._positions[element] = cached
        return cached


def cluster_by(
    elements: Sequence[E],
    coordinate: Callable[[E], float],
    tolerance: float,
) -> Dict[float, List[E]]:
    """Bucket elements whose coordinate lies within ``tolerance`` of a bucket key.

    The key of a bucket is the coordinate of its first member. An element joins
    the first existing bucket it is close enough to; buckets are never merged
    afterwards, so results near the tolerance edge depend on input order.
    """
    clusters: Dict[float, List[E]] = {}
    for element in elements:
        value = coordinate(element)
        for key, members in clusters.items():
            if abs(key - value) <= tolerance:
                members.append(element)
                break
        else:
            clusters[value] = [element]
    return clusters


def _step(ordered: Sequence[E], index: int, current: E, direction: int, cycle: bool) -> E:
    if direction > 0:
        if index == len(ordered) - 1:
            return ordered[0] if cycle else current
        return ordered[index + 1]
    if index == 0:
        return ordered[-1] if cycle else current
    return ordered[index - 1]


def resolve_automatic(request: NavigationRequest[E]) -> Optional[E]:
    elements = request.elements
    if not elements:
        return None
    try:
        index = list(elements).index(request.current)
    except ValueError:
        return None
    return _step(elements, index, request.current, request.direction, request.cycle)


def _find_cluster(clusters: Dict[float, List[E]], element: E) -> Optional[Tuple[float, List[E]]]:
    for key, members in clusters.items():
        if element in members:
            return key, members
    return None


def rows_of(request: NavigationRequest[E]) -> Dict[float, List[E]]:
    rows = cluster_by(request.elements, lambda e: request.position_of(e)[1], request.row_tolerance)
    for members in rows.values():
        members.sort(key=lambda e: request.position_of(e)[0])
    return rows


def columns_of(request: NavigationRequest[E]) -> Dict[float, List[E]]:
    columns = cluster_by(request.elements, lambda e: request.position_of(e)[0], request.column_tolerance)
    for members in columns.values():
        members.sort(key=lambda e: request.position_of(e)[1])
    return columns


def _resolve_in_line(request: NavigationRequest[E], lines: Dict[float, List[E]]) -> Optional[E]:
    found = _find_cluster(lines, request.current)
    if found is None:
        return resolve_automatic(request)
    _key, members = found
    return _step(members, members.index(request.current), request.current, request.direction, request.cycle)


def resolve_horizontal(request: NavigationRequest[E]) -> Optional[E]:
    if not request.elements:
        return None
    return _resolve_in_line(request, rows_of(request))


def resolve_vertical(request: NavigationRequest[E]) -> Optional[E]:
    if not request.elements:
        return None
    return _resolve_in_line(request, columns_of(request))


def resolve_grid(request: NavigationRequest[E]) -> Optional[E]:
    if not request.elements:
        return None
    rows = rows_of(request)
    found = _find_cluster(rows, request.current)
    if found is None:
        return resolve_automatic(request)
    row_keys = sorted(rows)
    key, row = found
    row_index = row_keys.index(key)
    column_index = row.index(request.current)

    if request.direction > 0:
        if column_index < len(row) - 1:
            return row[column_index + 1]
        if row_index < len(row_keys) - 1:
            return rows[row_keys[row_index + 1]][0]
        if request.cycle:
            return rows[row_keys[0]][0]
        return request.current

    if column_index > 0:
        return row[column_index - 1]
    if row_index > 0:
        return rows[row_keys[row_index - 1]][-1]
    if request.cycle:
        return rows[row_keys[-1]][-1]
    return request.current


RESOLVERS: Dict[NavigationMode, Callable[[NavigationRequest], Optional[object]]] = {
    NavigationMode.AUTOMATIC: resolve_automatic,
    NavigationMode.HORIZONTAL: resolve_horizontal,
    NavigationMode.VERTICAL: resolve_vertical,
    NavigationMode.GRID: resolve_grid,
}


def resolve_next(mode: NavigationMode, request: NavigationRequest[E]) -> Optional[E]:
    """Dispatch to the resolver for ``mode``; ``None`` when nothing applies."""
    resolver = RESOLVERS[NavigationMode(mode)]
    return resolver(request)  # type: ignore[return-value]
