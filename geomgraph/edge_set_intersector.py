"""
Enumeration of the segment pairs that must be intersection-tested.

Two interchangeable strategies are provided: a brute-force one and one that
uses a shapely STRtree over segment envelopes to skip pairs that cannot meet.
Both visit candidate pairs in the same canonical order (edge index, then
segment index, each unordered pair once), so they record identical
intersections on the edges.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np
import shapely
from shapely import STRtree

from .edge import Edge
from .segment_intersector import SegmentIntersector


class EdgeSetIntersector(ABC):
    """
    Abstract base class for edge set intersection strategies.
    """

    @abstractmethod
    def compute_intersections_within_set(self, edges: Sequence[Edge], check_self: bool,
                                         segment_intersector: SegmentIntersector) -> None:
        """
        Compute all intersections between the edges of one set.

        Args:
            edges: Edges to test; intersections are recorded on them
            check_self: If False, segments of the same edge are never tested
                against each other
            segment_intersector: Intersector accumulating the results
        """
        pass

    @abstractmethod
    def compute_intersections_between_sets(self, edges_a: Sequence[Edge], edges_b: Sequence[Edge],
                                           segment_intersector: SegmentIntersector) -> None:
        """Compute all intersections between an edge of ``edges_a`` and an edge of ``edges_b``."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        pass


class SimpleEdgeSetIntersector(EdgeSetIntersector):
    """Tests every segment pair. O(n²) in the number of segments."""

    def compute_intersections_within_set(self, edges, check_self, segment_intersector):
        for i, edge0 in enumerate(edges):
            for s0 in range(edge0.num_points - 1):
                for j in range(i, len(edges)):
                    if i == j and not check_self:
                        continue
                    edge1 = edges[j]
                    start = s0 + 1 if i == j else 0
                    for s1 in range(start, edge1.num_points - 1):
                        segment_intersector.add_intersections(edge0, s0, edge1, s1)

    def compute_intersections_between_sets(self, edges_a, edges_b, segment_intersector):
        for edge0 in edges_a:
            for s0 in range(edge0.num_points - 1):
                for edge1 in edges_b:
                    for s1 in range(edge1.num_points - 1):
                        segment_intersector.add_intersections(edge0, s0, edge1, s1)

    def get_name(self) -> str:
        return "simple"


class _SegmentIndex:
    """Flattened (edge, segment) handles of an edge set plus their STRtree."""

    def __init__(self, edges: Sequence[Edge]):
        self.edges = list(edges)
        edge_ids: List[int] = []
        segment_ids: List[int] = []
        coords: List[list] = []
        for i, edge in enumerate(self.edges):
            for s in range(edge.num_points - 1):
                p0, p1 = edge.segment(s)
                edge_ids.append(i)
                segment_ids.append(s)
                coords.append([[p0.x, p0.y], [p1.x, p1.y]])
        self.edge_ids = np.asarray(edge_ids, dtype=np.intp)
        self.segment_ids = np.asarray(segment_ids, dtype=np.intp)
        self.geometries = shapely.linestrings(np.asarray(coords, dtype=float).reshape(-1, 2, 2))
        self.tree = STRtree(self.geometries)

    def __len__(self) -> int:
        return len(self.edge_ids)

    def handle(self, flat_index: int) -> tuple[Edge, int]:
        return self.edges[self.edge_ids[flat_index]], int(self.segment_ids[flat_index])


def _sorted_pairs(pairs: np.ndarray) -> np.ndarray:
    order = np.lexsort((pairs[1], pairs[0]))
    return pairs[:, order]


class IndexedEdgeSetIntersector(EdgeSetIntersector):
    """
    Uses an STRtree of segment envelopes to find candidate pairs.

    Only pairs whose closed envelopes overlap are tested, which brings typical
    inputs close to O(n log n). Pairs are never pruned on anything other than
    envelope disjointness.
    """

    def compute_intersections_within_set(self, edges, check_self, segment_intersector):
        if not edges:
            return
        index = _SegmentIndex(edges)
        pairs = index.tree.query(index.geometries)
        keep = pairs[0] < pairs[1]
        if not check_self:
            keep &= index.edge_ids[pairs[0]] != index.edge_ids[pairs[1]]
        for a, b in _sorted_pairs(pairs[:, keep]).T:
            edge0, s0 = index.handle(a)
            edge1, s1 = index.handle(b)
            segment_intersector.add_intersections(edge0, s0, edge1, s1)

    def compute_intersections_between_sets(self, edges_a, edges_b, segment_intersector):
        if not edges_a or not edges_b:
            return
        index_a = _SegmentIndex(edges_a)
        index_b = _SegmentIndex(edges_b)
        pairs = index_b.tree.query(index_a.geometries)
        for a, b in _sorted_pairs(pairs).T:
            edge0, s0 = index_a.handle(a)
            edge1, s1 = index_b.handle(b)
            segment_intersector.add_intersections(edge0, s0, edge1, s1)

    def get_name(self) -> str:
        return "indexed"


EDGE_SET_INTERSECTORS: dict[str, type] = {
    "simple": SimpleEdgeSetIntersector,
    "indexed": IndexedEdgeSetIntersector,
}


def create_edge_set_intersector(name: str = "indexed") -> EdgeSetIntersector:
    """
    Create an edge set intersector by strategy name.

    Raises:
        ValueError: If the strategy name is unknown
    """
    try:
        return EDGE_SET_INTERSECTORS[name]()
    except KeyError:
        raise ValueError(f"Unknown edge set intersector: {name}") from None
