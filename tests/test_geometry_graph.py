import pytest
from shapely.geometry import LineString, MultiLineString, MultiPolygon, Polygon

from converter import convert_geometry
from geomgraph.coordinate import Coordinate
from geomgraph.edge import Edge
from geomgraph.edge_end import NE, NW, SE, SW, EdgeEnd, EdgeEndBundleStar, quadrant
from geomgraph.geometry_graph import GeometryGraph
from geomgraph.label import Location, Position
from geomgraph.node import RelateNode, RelateNodeMap


def test_polygon_ring_labels_follow_orientation():
    ccw = GeometryGraph(0, convert_geometry(Polygon([(0, 0), (4, 0), (4, 4), (0, 4)])))
    cw = GeometryGraph(0, convert_geometry(Polygon([(0, 0), (0, 4), (4, 4), (4, 0)])))
    for graph, left, right in ((ccw, Location.INTERIOR, Location.EXTERIOR),
                               (cw, Location.EXTERIOR, Location.INTERIOR)):
        assert len(graph.edges) == 1
        label = graph.edges[0].label
        assert label.location(0, Position.ON) == Location.BOUNDARY
        assert label.location(0, Position.LEFT) == left
        assert label.location(0, Position.RIGHT) == right
        assert graph.is_boundary_node(Coordinate(0.0, 0.0))


def test_hole_sides_are_reversed():
    polygon = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)], [[(4, 4), (6, 4), (6, 6), (4, 6)]])
    graph = GeometryGraph(0, convert_geometry(polygon))
    shell, hole = graph.edges
    # both rings are counter-clockwise, so the hole has the polygon interior on its right
    assert shell.label.location(0, Position.LEFT) == Location.INTERIOR
    assert hole.label.location(0, Position.LEFT) == Location.EXTERIOR
    assert hole.label.location(0, Position.RIGHT) == Location.INTERIOR


def test_line_endpoints_follow_mod2_rule():
    lines = MultiLineString([[(0, 0), (1, 0)], [(1, 0), (2, 0)]])
    graph = GeometryGraph(0, convert_geometry(lines))
    assert graph.nodes.find(Coordinate(0.0, 0.0)).label.location(0) == Location.BOUNDARY
    assert graph.nodes.find(Coordinate(1.0, 0.0)).label.location(0) == Location.INTERIOR
    assert graph.nodes.find(Coordinate(2.0, 0.0)).label.location(0) == Location.BOUNDARY


def test_closed_line_has_no_boundary():
    ring = LineString([(0, 0), (1, 0), (1, 1), (0, 0)])
    graph = GeometryGraph(0, convert_geometry(ring))
    assert graph.boundary_nodes() == []
    assert graph.geometry.boundary_dimension == -1


def test_self_crossing_line_gets_interior_node():
    graph = GeometryGraph(0, convert_geometry(LineString([(0, 0), (2, 2), (2, 0), (0, 2)])))
    graph.compute_self_nodes()
    node = graph.nodes.find(Coordinate(1.0, 1.0))
    assert node is not None
    assert node.label.location(0) == Location.INTERIOR


def test_multipolygon_touching_vertex_stays_boundary():
    polygons = MultiPolygon([
        Polygon([(0, 0), (1, 0), (1, 1), (0, 1)]),
        Polygon([(1, 1), (2, 1), (2, 2), (1, 2)]),
    ])
    graph = GeometryGraph(0, convert_geometry(polygons))
    assert not graph.use_boundary_determination_rule
    graph.compute_self_nodes()
    assert graph.is_boundary_node(Coordinate(1.0, 1.0))


def test_quadrants():
    assert quadrant(1.0, 0.0) == NE
    assert quadrant(0.0, 1.0) == NE
    assert quadrant(-1.0, 0.0) == NW
    assert quadrant(-1.0, -1.0) == SW
    assert quadrant(0.0, -1.0) == SE
    with pytest.raises(ValueError):
        quadrant(0.0, 0.0)


def test_star_orders_counter_clockwise_and_bundles_equal_directions():
    origin = Coordinate(0.0, 0.0)
    targets = [Coordinate(10.0, -1.0), Coordinate(-1.0, 10.0), Coordinate(10.0, 1.0),
               Coordinate(-10.0, -2.0), Coordinate(20.0, 2.0)]
    star = EdgeEndBundleStar()
    for target in targets:
        star.insert(EdgeEnd(Edge([origin, target]), origin, target))
    bundles = star.bundles()
    assert len(bundles) == 4
    assert [b.direction_point for b in bundles] == [
        Coordinate(10.0, 1.0), Coordinate(-1.0, 10.0), Coordinate(-10.0, -2.0), Coordinate(10.0, -1.0)
    ]
    assert [b.quadrant for b in bundles] == [NE, NW, SW, SE]
    assert len(bundles[0].edge_ends) == 2


def test_relate_node_map_collects_edge_ends_per_node():
    origin, east, north = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0), Coordinate(0.0, 1.0)
    nodes = RelateNodeMap()
    nodes.add_edge_end(EdgeEnd(Edge([origin, east]), origin, east))
    nodes.add_edge_end(EdgeEnd(Edge([origin, north]), origin, north))
    nodes.add_edge_end(EdgeEnd(Edge([east, origin]), east, origin))
    assert len(nodes) == 2
    node = nodes.find(origin)
    assert isinstance(node, RelateNode)
    assert [b.direction_point for b in node.edges] == [east, north]

    # a geometry graph only keeps labelled nodes
    graph = GeometryGraph(0, convert_geometry(LineString([(0, 0), (1, 0)])))
    assert not hasattr(graph.nodes, "add_edge_end")
