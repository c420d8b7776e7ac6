"""
Graph edges and the intersections recorded on them.
"""

import bisect
from typing import Iterator, List, NamedTuple, Optional

from .coordinate import Coordinate, Envelope
from .label import Label
from .line_intersector import IntersectionResult, edge_distance


class EdgeIntersection(NamedTuple):
    """
    A point where an edge is intersected.

    Ordered by (segment_index, distance), i.e. by position along the edge.
    """
    segment_index: int
    distance: float
    coordinate: Coordinate

    @property
    def key(self) -> tuple[int, float]:
        return (self.segment_index, self.distance)


class EdgeIntersectionList:
    """Intersections of one edge, kept sorted by position along the edge and unique by position."""

    def __init__(self, edge: "Edge"):
        self.edge = edge
        self._keys: List[tuple[int, float]] = []
        self._items: List[EdgeIntersection] = []

    def add(self, coordinate: Coordinate, segment_index: int, distance: float) -> EdgeIntersection:
        """Insert an intersection; returns the existing one if the position is already recorded."""
        key = (segment_index, distance)
        i = bisect.bisect_left(self._keys, key)
        if i < len(self._keys) and self._keys[i] == key:
            return self._items[i]
        item = EdgeIntersection(segment_index, distance, coordinate)
        self._keys.insert(i, key)
        self._items.insert(i, item)
        return item

    def add_endpoints(self) -> None:
        last = len(self.edge.coords) - 1
        self.add(self.edge.coords[0], 0, 0.0)
        self.add(self.edge.coords[last], last, 0.0)

    def on_segment(self, segment_index: int) -> Iterator[Coordinate]:
        """Coordinates recorded on segment ``segment_index``, in order along it."""
        i = bisect.bisect_left(self._keys, (segment_index, 0.0))
        while i < len(self._items) and self._items[i].segment_index == segment_index:
            yield self._items[i].coordinate
            i += 1

    def is_intersection(self, coordinate: Coordinate) -> bool:
        return any(ei.coordinate == coordinate for ei in self._items)

    def __iter__(self) -> Iterator[EdgeIntersection]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class Edge:
    """
    A directed chain of coordinates forming one boundary component
    (a ring, a line, or a piece of one after noding).

    Attributes:
        coords: Coordinates, neighbours always distinct
        label: Topological label of the edge
        intersections: EdgeIntersectionList recorded during intersection
        is_isolated: False once the edge has intersected the other geometry
    """

    def __init__(self, coords: List[Coordinate], label: Optional[Label] = None):
        if len(coords) < 2:
            raise ValueError("An edge needs at least two coordinates")
        self.coords = list(coords)
        self.label = label if label is not None else Label.empty_line()
        self.intersections = EdgeIntersectionList(self)
        self.is_isolated = True
        self._envelope: Optional[Envelope] = None

    @property
    def num_points(self) -> int:
        return len(self.coords)

    @property
    def max_segment_index(self) -> int:
        return len(self.coords) - 1

    @property
    def coordinate(self) -> Coordinate:
        """A representative coordinate of the edge (its first point)."""
        return self.coords[0]

    @property
    def envelope(self) -> Envelope:
        if self._envelope is None:
            self._envelope = Envelope.of(self.coords)
        return self._envelope

    def is_closed(self) -> bool:
        return self.coords[0] == self.coords[-1]

    def segment(self, index: int) -> tuple[Coordinate, Coordinate]:
        return self.coords[index], self.coords[index + 1]

    def mark_as_unisolated(self) -> None:
        self.is_isolated = False

    def add_intersections(self, intersection: IntersectionResult, segment_index: int) -> None:
        """Record every point of ``intersection`` lying on segment ``segment_index``."""
        for coordinate in intersection.coordinates:
            self.add_intersection(coordinate, segment_index)

    def add_intersection(self, coordinate: Coordinate, segment_index: int) -> EdgeIntersection:
        """
        Record one intersection point on segment ``segment_index``.

        A point equal to the segment's end vertex is normalised to the start
        of the next segment, so each vertex has exactly one position key.
        """
        p0, p1 = self.segment(segment_index)
        distance = edge_distance(coordinate, p0, p1)
        next_index = segment_index + 1
        if next_index < len(self.coords) and coordinate == self.coords[next_index]:
            segment_index = next_index
            distance = 0.0
        return self.intersections.add(coordinate, segment_index, distance)

    def __eq__(self, other) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        pts = ", ".join(f"{c.x} {c.y}" for c in self.coords)
        return f"Edge({self.label}, LINESTRING ({pts}))"
