"""
Noding: splitting edges at their recorded intersections.
"""

from typing import Iterable, List

from .coordinate import Coordinate
from .edge import Edge, EdgeIntersection
from .errors import TopologyError


class Noder:
    """
    Splits edges at every intersection recorded on them.

    The sub-edges of one edge are returned in order along the edge; their
    concatenation reproduces the edge, and each carries a copy of its label.
    Split points that coincide without a vertex between them are merged, so
    no sub-edge has zero length.

    Example:
        >>> edge = Edge([Coordinate(0.0, 0.0), Coordinate(4.0, 0.0)])
        >>> _ = edge.add_intersection(Coordinate(1.0, 0.0), 0)
        >>> [len(e.coords) for e in Noder().split_edge(edge)]
        [2, 2]
    """

    def node(self, edges: Iterable[Edge]) -> List[Edge]:
        """Split every edge of ``edges`` and return all sub-edges."""
        result: List[Edge] = []
        for edge in edges:
            result.extend(self.split_edge(edge))
        return result

    def split_edge(self, edge: Edge) -> List[Edge]:
        edge.intersections.add_endpoints()
        sub_edges: List[Edge] = []
        start = None
        for ei in edge.intersections:
            if start is None:
                start = ei
                continue
            coords = self._split_coordinates(edge, start, ei)
            if len(coords) < 2:
                # one point recorded under two positions is split only once
                if ei.coordinate == start.coordinate:
                    continue
                raise TopologyError("Noding produced a zero-length sub-edge", ei.coordinate)
            sub_edges.append(Edge(coords, edge.label.copy()))
            start = ei
        if not sub_edges:
            raise TopologyError("Noding collapsed an edge to zero length", edge.coordinate)
        return sub_edges

    @staticmethod
    def _split_coordinates(edge: Edge, start: EdgeIntersection,
                           end: EdgeIntersection) -> List[Coordinate]:
        coords = [start.coordinate]
        coords.extend(edge.coords[start.segment_index + 1:end.segment_index + 1])
        if end.distance > 0.0 or end.coordinate != edge.coords[end.segment_index]:
            coords.append(end.coordinate)
        deduped = [coords[0]]
        for c in coords[1:]:
            if c != deduped[-1]:
                deduped.append(c)
        return deduped
