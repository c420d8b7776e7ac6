import math

import numpy as np

from geomgraph.coordinate import Coordinate
from geomgraph.edge import Edge
from geomgraph.errors import TopologyError
from geomgraph.edge_set_intersector import (
    IndexedEdgeSetIntersector,
    SimpleEdgeSetIntersector,
    create_edge_set_intersector,
)
from geomgraph.label import Label, Location
from geomgraph.noder import Noder
from geomgraph.segment_intersector import SegmentIntersector

import pytest


def make_edge(*points):
    return Edge([Coordinate(float(x), float(y)) for x, y in points], Label.for_on(0, Location.INTERIOR))


def test_intersection_at_next_vertex_is_normalised():
    edge = make_edge((0, 0), (2, 0), (2, 2))
    ei = edge.add_intersection(Coordinate(2.0, 0.0), 0)
    assert ei.key == (1, 0.0)
    # the same vertex seen from the next segment is the same intersection
    edge.add_intersection(Coordinate(2.0, 0.0), 1)
    assert len(edge.intersections) == 1


def test_intersection_list_is_sorted_along_the_edge():
    edge = make_edge((0, 0), (4, 0), (4, 4))
    edge.add_intersection(Coordinate(4.0, 2.0), 1)
    edge.add_intersection(Coordinate(3.0, 0.0), 0)
    edge.add_intersection(Coordinate(1.0, 0.0), 0)
    assert [ei.coordinate for ei in edge.intersections] == [
        Coordinate(1.0, 0.0), Coordinate(3.0, 0.0), Coordinate(4.0, 2.0)
    ]


def test_split_edge_at_intersections():
    edge = make_edge((0, 0), (4, 0))
    edge.add_intersection(Coordinate(3.0, 0.0), 0)
    edge.add_intersection(Coordinate(1.0, 0.0), 0)
    parts = Noder().split_edge(edge)
    assert [p.coords for p in parts] == [
        [Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)],
        [Coordinate(1.0, 0.0), Coordinate(3.0, 0.0)],
        [Coordinate(3.0, 0.0), Coordinate(4.0, 0.0)],
    ]
    for part in parts:
        assert part.label == edge.label
        assert part.label is not edge.label


def test_split_keeps_interior_vertices():
    edge = make_edge((0, 0), (2, 0), (2, 2))
    edge.add_intersection(Coordinate(2.0, 1.0), 1)
    parts = Noder().split_edge(edge)
    assert [p.coords for p in parts] == [
        [Coordinate(0.0, 0.0), Coordinate(2.0, 0.0), Coordinate(2.0, 1.0)],
        [Coordinate(2.0, 1.0), Coordinate(2.0, 2.0)],
    ]


def test_split_without_intersections_returns_whole_edge():
    edge = make_edge((0, 0), (1, 1), (2, 0))
    parts = Noder().split_edge(edge)
    assert len(parts) == 1
    assert parts[0].coords == edge.coords


def test_noding_is_idempotent():
    edges = [make_edge((0, 0), (4, 4)), make_edge((0, 4), (4, 0))]
    intersector = SegmentIntersector(include_proper=True)
    SimpleEdgeSetIntersector().compute_intersections_within_set(edges, True, intersector)
    noded = Noder().node(edges)
    assert len(noded) == 4
    renoded = Noder().node(noded)
    assert [e.coords for e in renoded] == [e.coords for e in noded]


def random_edges(rng, count, points):
    return [make_edge(*rng.uniform(0.0, 10.0, size=(points, 2))) for _ in range(count)]


def intersection_lists(edges):
    return [[(ei.key, ei.coordinate) for ei in e.intersections] for e in edges]


@pytest.mark.parametrize("check_self", [True, False])
def test_indexed_and_simple_agree_within_set(check_self):
    edges_simple = random_edges(np.random.default_rng(42), 6, 6)
    edges_indexed = random_edges(np.random.default_rng(42), 6, 6)
    si_simple = SegmentIntersector(include_proper=True)
    si_indexed = SegmentIntersector(include_proper=True)
    SimpleEdgeSetIntersector().compute_intersections_within_set(edges_simple, check_self, si_simple)
    IndexedEdgeSetIntersector().compute_intersections_within_set(edges_indexed, check_self, si_indexed)
    assert intersection_lists(edges_simple) == intersection_lists(edges_indexed)
    assert si_simple.has_proper_intersection == si_indexed.has_proper_intersection
    assert si_indexed.num_tests <= si_simple.num_tests


def test_indexed_and_simple_agree_between_sets():
    rng_simple, rng_indexed = np.random.default_rng(7), np.random.default_rng(7)
    a_simple, b_simple = random_edges(rng_simple, 4, 5), random_edges(rng_simple, 4, 5)
    a_indexed, b_indexed = random_edges(rng_indexed, 4, 5), random_edges(rng_indexed, 4, 5)
    SimpleEdgeSetIntersector().compute_intersections_between_sets(
        a_simple, b_simple, SegmentIntersector(include_proper=True, record_isolated=True))
    IndexedEdgeSetIntersector().compute_intersections_between_sets(
        a_indexed, b_indexed, SegmentIntersector(include_proper=True, record_isolated=True))
    assert intersection_lists(a_simple) == intersection_lists(a_indexed)
    assert intersection_lists(b_simple) == intersection_lists(b_indexed)
    assert [e.is_isolated for e in a_simple + b_simple] == [e.is_isolated for e in a_indexed + b_indexed]


def test_adjacent_segments_are_trivial():
    edge = make_edge((0, 0), (1, 0), (1, 1))
    intersector = SegmentIntersector(include_proper=True)
    SimpleEdgeSetIntersector().compute_intersections_within_set([edge], True, intersector)
    assert not intersector.has_intersection
    assert len(edge.intersections) == 0


def test_self_crossing_line_is_noded():
    edge = make_edge((0, 0), (2, 2), (2, 0), (0, 2))
    intersector = SegmentIntersector(include_proper=True)
    SimpleEdgeSetIntersector().compute_intersections_within_set([edge], True, intersector)
    assert intersector.has_proper_intersection
    assert [ei.coordinate for ei in edge.intersections] == [Coordinate(1.0, 1.0), Coordinate(1.0, 1.0)]


def test_unknown_strategy():
    assert create_edge_set_intersector("simple").get_name() == "simple"
    with pytest.raises(ValueError):
        create_edge_set_intersector("quadtree")


def test_concurrent_crossing_becomes_one_node():
    edges = [make_edge((0, 0), (1, 1)), make_edge((0, 1), (1, -1)), make_edge((1, 0), (-1, 1))]
    intersector = SegmentIntersector(include_proper=True)
    IndexedEdgeSetIntersector().compute_intersections_within_set(edges, True, intersector)
    for edge in edges:
        assert [ei.coordinate for ei in edge.intersections] == [Coordinate(1 / 3, 1 / 3)]


def test_crossing_reuses_point_recorded_on_segment():
    a = make_edge((0, 0), (2, 2))
    b = make_edge((0, 2), (2, 0))
    recorded = Coordinate(1.0, math.nextafter(1.0, 2.0))
    a.add_intersection(recorded, 0)
    intersector = SegmentIntersector(include_proper=True, record_isolated=True)
    intersector.add_intersections(a, 0, b, 0)
    assert [ei.coordinate for ei in a.intersections] == [recorded]
    assert [ei.coordinate for ei in b.intersections] == [recorded]
    assert intersector.has_proper_intersection


def test_inconsistent_split_positions_raise():
    edge = make_edge((0, 0), (4, 0))
    # a point recorded before the start vertex of its segment
    edge.intersections.add(Coordinate(9.0, 9.0), 0, -1.0)
    with pytest.raises(TopologyError):
        Noder().split_edge(edge)
