"""
Edge ends and the angular star of edge ends around a node.

Ordering of edge ends around a node
-----------------------------------
Edge ends are ordered counter-clockwise starting at the +x axis. The primary
key is the quadrant of the direction vector: NE=0 (angles 0 to 90 degrees,
both axes included), NW=1 (above 90 up to 180), SW=2 (above 180 below 270),
SE=3 (270 up to 360). Within a quadrant the order is decided by the exact
orientation of one direction point relative to the other direction ray. Two
edge ends compare equal only when their directions coincide; such edge ends
are grouped into one EdgeEndBundle, so the order over bundles is total and
strict.
"""

import math
from functools import cmp_to_key
from typing import Callable, Iterator, List, Optional, Sequence

from .coordinate import Coordinate, orientation_index
from .edge import Edge
from .errors import TopologyError
from .label import Label, Location, Position
from .point_locator import boundary_location

NE, NW, SW, SE = 0, 1, 2, 3


def quadrant(dx: float, dy: float) -> int:
    """
    Quadrant of a direction vector.

    Raises:
        ValueError: For the zero vector
    """
    if dx == 0.0 and dy == 0.0:
        raise ValueError(f"Cannot compute the quadrant of a zero-length direction ({dx}, {dy})")
    if dx >= 0.0:
        return NE if dy >= 0.0 else SE
    return NW if dy >= 0.0 else SW


class EdgeEnd:
    """
    One directed incidence of an edge at a node.

    Attributes:
        edge: The edge this end belongs to
        coordinate: The node coordinate
        direction_point: The next distinct point along the edge from the node
        label: Label of the edge as seen leaving the node
    """

    def __init__(self, edge: Edge, coordinate: Coordinate, direction_point: Coordinate,
                 label: Optional[Label] = None):
        self.edge = edge
        self.coordinate = coordinate
        self.direction_point = direction_point
        self.label = label
        self.dx = direction_point.x - coordinate.x
        self.dy = direction_point.y - coordinate.y
        self.quadrant = quadrant(self.dx, self.dy)

    @property
    def angle(self) -> float:
        """Incidence angle in radians, in [0, 2π)."""
        return math.atan2(self.dy, self.dx) % (2.0 * math.pi)

    def compare_direction(self, other: "EdgeEnd") -> int:
        """-1, 0 or 1 as this direction comes before, equals, or follows ``other`` counter-clockwise."""
        if self.dx == other.dx and self.dy == other.dy:
            return 0
        if self.quadrant > other.quadrant:
            return 1
        if self.quadrant < other.quadrant:
            return -1
        # same quadrant: this follows other if it is counter-clockwise of it
        return orientation_index(other.coordinate, other.direction_point, self.direction_point)

    def __repr__(self) -> str:
        return (f"EdgeEnd({self.coordinate} -> {self.direction_point}: "
                f"q{self.quadrant} {self.angle:.4f} {self.label})")


class EdgeEndBundle:
    """
    The edge ends at a node sharing one direction, with a summary label.
    """

    def __init__(self, edge_end: EdgeEnd):
        self.edge_ends: List[EdgeEnd] = [edge_end]
        self.coordinate = edge_end.coordinate
        self.direction_point = edge_end.direction_point
        self.quadrant = edge_end.quadrant
        self.label: Optional[Label] = None

    @property
    def representative(self) -> EdgeEnd:
        return self.edge_ends[0]

    def insert(self, edge_end: EdgeEnd) -> None:
        self.edge_ends.append(edge_end)

    def compute_label(self) -> None:
        """
        Summarise the labels of the bundled edge ends.

        ON is determined by boundary counting: any boundary incidences decide by
        the Mod-2 rule, otherwise any interior incidence gives INTERIOR. Side
        locations take INTERIOR if any area edge has it, else EXTERIOR if any
        has that.
        """
        is_area = any(e.label.is_area() for e in self.edge_ends)
        self.label = Label.empty_area() if is_area else Label.empty_line()
        for geom_index in (0, 1):
            self._compute_label_on(geom_index)
            if is_area:
                self._compute_label_side(geom_index, Position.LEFT)
                self._compute_label_side(geom_index, Position.RIGHT)

    def _compute_label_on(self, geom_index: int) -> None:
        boundary_count = 0
        found_interior = False
        for e in self.edge_ends:
            loc = e.label.location(geom_index)
            if loc == Location.BOUNDARY:
                boundary_count += 1
            elif loc == Location.INTERIOR:
                found_interior = True
        loc = Location.NONE
        if found_interior:
            loc = Location.INTERIOR
        if boundary_count > 0:
            loc = boundary_location(boundary_count)
        self.label.set_location(geom_index, loc)

    def _compute_label_side(self, geom_index: int, side: Position) -> None:
        for e in self.edge_ends:
            if not e.label.is_area():
                continue
            loc = e.label.location(geom_index, side)
            if loc == Location.INTERIOR:
                self.label.set_location(geom_index, Location.INTERIOR, side)
                return
            if loc == Location.EXTERIOR:
                self.label.set_location(geom_index, Location.EXTERIOR, side)


class EdgeEndBundleStar:
    """
    The bundles of edge ends around one node, in counter-clockwise order.
    """

    def __init__(self):
        self._bundles: List[EdgeEndBundle] = []
        self._sorted = True

    def insert(self, edge_end: EdgeEnd) -> None:
        for bundle in self._bundles:
            if edge_end.compare_direction(bundle.representative) == 0:
                bundle.insert(edge_end)
                return
        self._bundles.append(EdgeEndBundle(edge_end))
        self._sorted = False

    def bundles(self) -> List[EdgeEndBundle]:
        if not self._sorted:
            self._bundles.sort(key=cmp_to_key(
                lambda a, b: a.representative.compare_direction(b.representative)))
            self._sorted = True
        return self._bundles

    def __iter__(self) -> Iterator[EdgeEndBundle]:
        return iter(self.bundles())

    def __len__(self) -> int:
        return len(self._bundles)

    def compute_labelling(self, locate_in_area: Sequence[Callable[[Coordinate], Location]]) -> None:
        """
        Label every bundle for both geometries.

        Args:
            locate_in_area: Per geometry, a function locating a coordinate
                against that geometry's polygonal components
        """
        bundles = self.bundles()
        for bundle in bundles:
            bundle.compute_label()
        self._propagate_side_labels(0)
        self._propagate_side_labels(1)

        # an edge labelled BOUNDARY on a line label is a dimensional collapse
        has_collapse = [False, False]
        for bundle in bundles:
            for geom_index in (0, 1):
                if bundle.label.is_line(geom_index) and bundle.label.location(geom_index) == Location.BOUNDARY:
                    has_collapse[geom_index] = True

        area_location: List[Optional[Location]] = [None, None]
        for bundle in bundles:
            for geom_index in (0, 1):
                if not bundle.label.is_any_null(geom_index):
                    continue
                if has_collapse[geom_index]:
                    loc = Location.EXTERIOR
                else:
                    if area_location[geom_index] is None:
                        area_location[geom_index] = locate_in_area[geom_index](bundle.coordinate)
                    loc = area_location[geom_index]
                bundle.label.set_all_locations_if_null(geom_index, loc)

    def _propagate_side_labels(self, geom_index: int) -> None:
        """
        Walk counter-clockwise around the node carrying the current side location.

        Moving counter-clockwise crosses each edge from its right side to its
        left side. Edges without side locations for this geometry lie wholly
        in the current location.
        """
        bundles = self.bundles()
        start_loc = Location.NONE
        for bundle in bundles:
            label = bundle.label
            if label.is_area(geom_index) and label.location(geom_index, Position.LEFT) != Location.NONE:
                start_loc = label.location(geom_index, Position.LEFT)
        if start_loc == Location.NONE:
            return

        current = start_loc
        for bundle in bundles:
            label = bundle.label
            if label.location(geom_index, Position.ON) == Location.NONE:
                label.set_location(geom_index, current, Position.ON)
            if not label.is_area(geom_index):
                continue
            left = label.location(geom_index, Position.LEFT)
            right = label.location(geom_index, Position.RIGHT)
            if right != Location.NONE:
                if right != current:
                    raise TopologyError("Side location conflict", bundle.coordinate)
                if left == Location.NONE:
                    raise TopologyError("Found single null side", bundle.coordinate)
                current = left
            else:
                if left != Location.NONE:
                    raise TopologyError("Found single null side", bundle.coordinate)
                label.set_location(geom_index, current, Position.RIGHT)
                label.set_location(geom_index, current, Position.LEFT)
