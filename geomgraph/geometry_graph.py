"""
GeometryGraph: the edges and nodes of one input geometry.
"""

from typing import List, Optional

from .coordinate import Coordinate, is_ccw
from .edge import Edge
from .edge_set_intersector import EdgeSetIntersector, create_edge_set_intersector
from .geometry import RelateGeometry
from .label import Label, Location
from .node import NodeMap
from .point_locator import boundary_location, locate, locate_in_area
from .precision import DEFAULT_PRECISION, Precision
from .segment_intersector import SegmentIntersector


class GeometryGraph:
    """
    Planar graph of one geometry's components.

    Polygon rings and lines become edges; points, line endpoints and the start
    of every ring become nodes. Ring orientation is tracked in the edge labels
    rather than normalised: a clockwise shell has the polygon interior on its
    right, a counter-clockwise one on its left, and holes the opposite.

    Args:
        geom_index: 0 for geometry A, 1 for geometry B
        geometry: Decomposed input geometry
        edge_set_intersector: Strategy used for intersection enumeration
        precision: Precision model for segment intersection

    Example:
        >>> graph = GeometryGraph(0, geometry)
        >>> graph.compute_self_nodes()
        >>> len(graph.edges)
        1
    """

    def __init__(self, geom_index: int, geometry: RelateGeometry,
                 edge_set_intersector: Optional[EdgeSetIntersector] = None,
                 precision: Precision = DEFAULT_PRECISION):
        self.geom_index = geom_index
        self.geometry = geometry
        self.edge_set_intersector = edge_set_intersector or create_edge_set_intersector()
        self.precision = precision
        self.edges: List[Edge] = []
        self.nodes = NodeMap()
        # MultiPolygon boundaries are not subject to the Mod-2 rule for self-intersection nodes
        self.use_boundary_determination_rule = geometry.kind != "MultiPolygon"
        self._build()

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _build(self) -> None:
        for point in self.geometry.points:
            self._insert_point(point, Location.INTERIOR)
        for line in self.geometry.lines:
            self._add_line(line)
        for polygon in self.geometry.polygons:
            self._add_polygon_ring(polygon.shell, Location.EXTERIOR, Location.INTERIOR)
            for hole in polygon.holes:
                self._add_polygon_ring(hole, Location.INTERIOR, Location.EXTERIOR)

    def _add_polygon_ring(self, ring: List[Coordinate], cw_left: Location, cw_right: Location) -> None:
        left, right = cw_left, cw_right
        if is_ccw(ring):
            left, right = cw_right, cw_left
        edge = Edge(ring, Label.for_area(self.geom_index, Location.BOUNDARY, left, right))
        self.edges.append(edge)
        self._insert_point(ring[0], Location.BOUNDARY)

    def _add_line(self, line: List[Coordinate]) -> None:
        edge = Edge(line, Label.for_on(self.geom_index, Location.INTERIOR))
        self.edges.append(edge)
        # closed lines get both endpoints too, so the Mod-2 rule cancels them
        self._insert_boundary_point(line[0])
        self._insert_boundary_point(line[-1])

    def _insert_point(self, coordinate: Coordinate, location: Location) -> None:
        node = self.nodes.add_node(coordinate)
        node.label.set_location(self.geom_index, location)

    def _insert_boundary_point(self, coordinate: Coordinate) -> None:
        node = self.nodes.add_node(coordinate)
        boundary_count = 1
        if node.label.location(self.geom_index) == Location.BOUNDARY:
            boundary_count += 1
        node.label.set_location(self.geom_index, boundary_location(boundary_count))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        return self.geometry.dimension

    def boundary_nodes(self) -> List[Coordinate]:
        return [node.coordinate for node in self.nodes.boundary_nodes(self.geom_index)]

    def is_boundary_node(self, coordinate: Coordinate) -> bool:
        node = self.nodes.find(coordinate)
        return node is not None and node.label.location(self.geom_index) == Location.BOUNDARY

    def locate(self, coordinate: Coordinate) -> Location:
        return locate(coordinate, self.geometry)

    def locate_in_area(self, coordinate: Coordinate) -> Location:
        return locate_in_area(coordinate, self.geometry)

    # -------------------------------------------------------------------------
    # Noding
    # -------------------------------------------------------------------------

    def compute_self_nodes(self) -> SegmentIntersector:
        """
        Intersect the geometry's edges with each other and add nodes at the results.

        Polygonal input is assumed to consist of simple rings, so segments of
        the same ring are not tested against each other.
        """
        intersector = SegmentIntersector(include_proper=True, record_isolated=False,
                                         precision=self.precision)
        check_self = not self.geometry.is_polygonal()
        self.edge_set_intersector.compute_intersections_within_set(self.edges, check_self, intersector)
        self._add_self_intersection_nodes()
        return intersector

    def compute_edge_intersections(self, other: "GeometryGraph",
                                   include_proper: bool = True) -> SegmentIntersector:
        """
        Intersect this graph's edges with ``other``'s.

        Args:
            other: Graph of the other geometry
            include_proper: Record proper crossings on the edges as well; when
                False they are only reported through the intersector flags
        """
        intersector = SegmentIntersector(include_proper=include_proper, record_isolated=True,
                                         precision=self.precision)
        intersector.set_boundary_nodes(self.boundary_nodes(), other.boundary_nodes())
        self.edge_set_intersector.compute_intersections_between_sets(self.edges, other.edges, intersector)
        return intersector

    def _add_self_intersection_nodes(self) -> None:
        for edge in self.edges:
            edge_location = edge.label.location(self.geom_index)
            for ei in edge.intersections:
                self._add_self_intersection_node(ei.coordinate, edge_location)

    def _add_self_intersection_node(self, coordinate: Coordinate, location: Location) -> None:
        if self.is_boundary_node(coordinate):
            return
        if location == Location.BOUNDARY and self.use_boundary_determination_rule:
            self._insert_boundary_point(coordinate)
        else:
            self._insert_point(coordinate, location)

    def __repr__(self) -> str:
        return (f"GeometryGraph({self.geom_index}, {self.geometry.kind}, "
                f"{len(self.edges)} edges, {len(self.nodes)} nodes)")
