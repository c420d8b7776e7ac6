"""
Graph nodes and the coordinate-keyed node map.
"""

from typing import Callable, Dict, Iterator, Optional, cast

from .coordinate import Coordinate
from .edge_end import EdgeEnd, EdgeEndBundleStar
from .errors import TopologyError
from .label import Label, Location


class Node:
    """A graph vertex at a coordinate, with its label."""

    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate
        self.label = Label.empty_line()

    def is_isolated(self) -> bool:
        """A node is isolated when it is known for exactly one geometry."""
        return self.label.geometry_count() == 1

    def set_label(self, geom_index: int, location: Location) -> None:
        self.label.set_location(geom_index, location)

    def set_label_boundary(self, geom_index: int) -> None:
        """Mark the node as a boundary node of the geometry, flipping BOUNDARY to INTERIOR on repetition."""
        current = self.label.location(geom_index)
        if current == Location.BOUNDARY:
            new_location = Location.INTERIOR
        elif current == Location.INTERIOR:
            new_location = Location.BOUNDARY
        else:
            new_location = Location.BOUNDARY
        self.label.set_location(geom_index, new_location)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.coordinate}, {self.label})"


class RelateNode(Node):
    """A node of the relate graph, holding the star of incident edge-end bundles."""

    def __init__(self, coordinate: Coordinate):
        super().__init__(coordinate)
        self.edges = EdgeEndBundleStar()

    def add(self, edge_end: EdgeEnd) -> None:
        self.edges.insert(edge_end)

    def update_im(self, im) -> None:
        """Account for the node itself: a point shared by both geometries."""
        if self.label.geometry_count() < 2:
            raise TopologyError("Found a partially labelled node", self.coordinate)
        im.set_at_least(self.label.location(0), self.label.location(1), 0)

    def update_im_from_edges(self, im) -> None:
        for bundle in self.edges:
            im.update_from_label(bundle.label, bundle.coordinate)


class NodeMap:
    """
    Maps coordinates to nodes; one node per distinct coordinate.

    Args:
        node_factory: Callable building a new node for a coordinate
    """

    def __init__(self, node_factory: Callable[[Coordinate], Node] = Node):
        self.node_factory = node_factory
        self._nodes: Dict[Coordinate, Node] = {}

    def add_node(self, coordinate: Coordinate) -> Node:
        node = self._nodes.get(coordinate)
        if node is None:
            node = self.node_factory(coordinate)
            self._nodes[coordinate] = node
        return node

    def find(self, coordinate: Coordinate) -> Optional[Node]:
        return self._nodes.get(coordinate)

    def boundary_nodes(self, geom_index: int) -> Iterator[Node]:
        for node in self._nodes.values():
            if node.label.location(geom_index) == Location.BOUNDARY:
                yield node

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, coordinate: Coordinate) -> bool:
        return coordinate in self._nodes


class RelateNodeMap(NodeMap):
    """Node map of the relate graph; every node holds an edge-end star."""

    def __init__(self):
        super().__init__(RelateNode)

    def add_node(self, coordinate: Coordinate) -> RelateNode:
        return cast(RelateNode, super().add_node(coordinate))

    def add_edge_end(self, edge_end: EdgeEnd) -> None:
        self.add_node(edge_end.coordinate).add(edge_end)
