"""
Pairwise segment intersection with side effects on the owning edges.
"""

from typing import Iterable, Optional

from .coordinate import Coordinate
from .edge import Edge
from .line_intersector import (
    CollinearOverlap,
    IntersectionResult,
    PointIntersection,
    compute_intersection,
    snap_to_nearest,
)
from .precision import DEFAULT_PRECISION, Precision


class SegmentIntersector:
    """
    Intersects pairs of edge segments and records the results on the edges.

    Args:
        include_proper: Record proper intersections on the edges as well
            (improper ones are always recorded)
        record_isolated: Mark intersecting edges as non-isolated; used when
            the two edges come from different geometries
        precision: Precision model for endpoint snapping

    Attributes:
        has_intersection: Any non-trivial intersection was found
        has_proper_intersection: A proper intersection was found
        has_proper_interior_intersection: A proper intersection was found
            that is not a boundary node of either geometry
        proper_intersection_point: The last proper intersection point found
        num_tests: Number of segment pairs tested
    """

    def __init__(self, include_proper: bool = True, record_isolated: bool = False,
                 precision: Precision = DEFAULT_PRECISION):
        self.include_proper = include_proper
        self.record_isolated = record_isolated
        self.precision = precision
        self.has_intersection = False
        self.has_proper_intersection = False
        self.has_proper_interior_intersection = False
        self.proper_intersection_point: Optional[Coordinate] = None
        self.num_tests = 0
        self._boundary_nodes: Optional[tuple[frozenset, frozenset]] = None

    def set_boundary_nodes(self, nodes_a: Iterable[Coordinate], nodes_b: Iterable[Coordinate]) -> None:
        """Boundary node coordinates of both geometries, used to qualify proper intersections."""
        self._boundary_nodes = (frozenset(nodes_a), frozenset(nodes_b))

    def _is_boundary_point(self, coordinate: Coordinate) -> bool:
        if self._boundary_nodes is None:
            return False
        return any(coordinate in nodes for nodes in self._boundary_nodes)

    @staticmethod
    def _is_trivial_intersection(intersection: IntersectionResult, edge0: Edge, segment_index0: int,
                                 edge1: Edge, segment_index1: int) -> bool:
        """Adjacent segments of one edge always share their common vertex."""
        if edge0 is not edge1:
            return False
        if isinstance(intersection, CollinearOverlap):
            return False
        if abs(segment_index0 - segment_index1) == 1:
            return True
        if edge0.is_closed():
            max_index = edge0.num_points - 1
            if {segment_index0, segment_index1} == {0, max_index - 1}:
                return True
        return False

    def _snap_to_recorded(self, intersection: PointIntersection, edge0: Edge, segment_index0: int,
                          edge1: Edge, segment_index1: int) -> PointIntersection:
        """
        Reuse a point already recorded on either segment if the crossing lies within
        the snap tolerance of it, so a crossing found by several segment pairs
        becomes one node.
        """
        recorded = list(edge0.intersections.on_segment(segment_index0))
        recorded.extend(edge1.intersections.on_segment(segment_index1))
        snapped = snap_to_nearest(intersection.coordinate, recorded, self.precision)
        if snapped is None or snapped == intersection.coordinate:
            return intersection
        endpoints = edge0.segment(segment_index0) + edge1.segment(segment_index1)
        return PointIntersection(snapped, snapped not in endpoints)

    def add_intersections(self, edge0: Edge, segment_index0: int, edge1: Edge, segment_index1: int) -> None:
        """Intersect segment ``segment_index0`` of ``edge0`` with segment ``segment_index1`` of ``edge1``."""
        if edge0 is edge1 and segment_index0 == segment_index1:
            return
        self.num_tests += 1
        intersection = compute_intersection(
            edge0.segment(segment_index0), edge1.segment(segment_index1), self.precision
        )
        if intersection is None:
            return

        if self.record_isolated:
            edge0.mark_as_unisolated()
            edge1.mark_as_unisolated()

        if self._is_trivial_intersection(intersection, edge0, segment_index0, edge1, segment_index1):
            return

        if intersection.is_proper:
            intersection = self._snap_to_recorded(intersection, edge0, segment_index0, edge1, segment_index1)

        self.has_intersection = True
        if self.include_proper or not intersection.is_proper:
            edge0.add_intersections(intersection, segment_index0)
            edge1.add_intersections(intersection, segment_index1)

        if intersection.is_proper:
            self.proper_intersection_point = intersection.coordinate
            self.has_proper_intersection = True
            if not self._is_boundary_point(intersection.coordinate):
                self.has_proper_interior_intersection = True
