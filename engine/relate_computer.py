"""
RelateComputer - computes the DE-9IM matrix of two geometries.

Pipeline:
    1. Build a GeometryGraph per geometry and node each graph against itself
    2. Intersect the edges of A with the edges of B, recording every crossing
    3. Create relate nodes at all intersections and copy the graph nodes
    4. Locate nodes known to only one geometry against the other geometry
    5. Split the edges at their intersections into edge ends, insert them
       into the relate nodes and label every node star
    6. Locate edges that do not meet the other geometry as a whole
    7. Fill the matrix from isolated edges, nodes and edge bundles

Usage:
    from converter import convert_geometry
    from engine.relate_computer import RelateComputer

    im = RelateComputer(convert_geometry(a), convert_geometry(b)).compute_im()
    print(im)  # e.g. 212101212
"""

from typing import List

from geomgraph.edge import Edge
from geomgraph.edge_end import EdgeEnd
from geomgraph.geometry import RelateGeometry
from geomgraph.geometry_graph import GeometryGraph
from geomgraph.label import Location
from geomgraph.node import RelateNodeMap
from geomgraph.noder import Noder

from .config import DEFAULT_CONFIG, RelateConfig
from .intersection_matrix import IntersectionMatrix


class RelateComputer:
    """
    Computes the intersection matrix of geometry A (index 0) and B (index 1).

    A RelateComputer is single-use: the graphs are noded in place, so call
    :meth:`compute_im` once per instance.

    Args:
        geom_a: Geometry A
        geom_b: Geometry B
        config: Relate settings (intersection strategy, precision, verbosity)
    """

    def __init__(self, geom_a: RelateGeometry, geom_b: RelateGeometry,
                 config: RelateConfig = DEFAULT_CONFIG):
        self.config = config
        precision = config.make_precision()
        intersector = config.make_edge_set_intersector()
        self.graphs = [
            GeometryGraph(0, geom_a, intersector, precision),
            GeometryGraph(1, geom_b, intersector, precision),
        ]
        self.nodes = RelateNodeMap()
        self.isolated_edges: List[Edge] = []
        self.noder = Noder()

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(f"[RelateComputer] {message}")

    def compute_im(self) -> IntersectionMatrix:
        im = IntersectionMatrix()
        # both geometries are bounded, so their exteriors always share an area
        im.set(Location.EXTERIOR, Location.EXTERIOR, 2)

        geom_a, geom_b = self.graphs[0].geometry, self.graphs[1].geometry
        env_a, env_b = geom_a.envelope, geom_b.envelope
        if env_a is None or env_b is None or not env_a.intersects(env_b):
            self._log("Envelopes disjoint, skipping graph construction")
            self._compute_disjoint_im(im)
            return im

        self._log(f"A: {self.graphs[0]}")
        self._log(f"B: {self.graphs[1]}")

        self.graphs[0].compute_self_nodes()
        self.graphs[1].compute_self_nodes()

        intersector = self.graphs[0].compute_edge_intersections(self.graphs[1])
        self._log(f"Edge intersections: {intersector.num_tests} segment pairs tested, "
                  f"proper={intersector.has_proper_intersection}, "
                  f"proper interior={intersector.has_proper_interior_intersection}")

        self._compute_intersection_nodes(0)
        self._compute_intersection_nodes(1)
        self._copy_nodes_and_labels(0)
        self._copy_nodes_and_labels(1)
        self._label_isolated_nodes()

        for graph in self.graphs:
            self._insert_edge_ends(graph.edges)
        self._log(f"Relate graph: {len(self.nodes)} nodes")

        self._label_node_edges()
        self._label_isolated_edges(0, 1)
        self._label_isolated_edges(1, 0)

        self._update_im(im)
        self._log(f"Result: {im}")
        return im

    # -------------------------------------------------------------------------
    # Disjoint shortcut
    # -------------------------------------------------------------------------

    def _compute_disjoint_im(self, im: IntersectionMatrix) -> None:
        geom_a, geom_b = self.graphs[0].geometry, self.graphs[1].geometry
        if not geom_a.is_empty():
            im.set(Location.INTERIOR, Location.EXTERIOR, geom_a.dimension)
            im.set(Location.BOUNDARY, Location.EXTERIOR, geom_a.boundary_dimension)
        if not geom_b.is_empty():
            im.set(Location.EXTERIOR, Location.INTERIOR, geom_b.dimension)
            im.set(Location.EXTERIOR, Location.BOUNDARY, geom_b.boundary_dimension)

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def _compute_intersection_nodes(self, geom_index: int) -> None:
        """Create a node at every intersection recorded on the geometry's edges."""
        for edge in self.graphs[geom_index].edges:
            edge_location = edge.label.location(geom_index)
            for ei in edge.intersections:
                node = self.nodes.add_node(ei.coordinate)
                if edge_location == Location.BOUNDARY:
                    node.set_label_boundary(geom_index)
                elif node.label.is_null(geom_index):
                    node.set_label(geom_index, Location.INTERIOR)

    def _copy_nodes_and_labels(self, geom_index: int) -> None:
        """The graph's own node labels take precedence over intersection labels."""
        for graph_node in self.graphs[geom_index].nodes:
            node = self.nodes.add_node(graph_node.coordinate)
            node.set_label(geom_index, graph_node.label.location(geom_index))

    def _label_isolated_nodes(self) -> None:
        for node in self.nodes:
            if not node.is_isolated():
                continue
            target = 0 if node.label.is_null(0) else 1
            location = self.graphs[target].locate(node.coordinate)
            node.label.set_all_locations(target, location)

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def _insert_edge_ends(self, edges: List[Edge]) -> None:
        """Split the edges at their intersections and add both ends of every piece."""
        for sub_edge in self.noder.node(edges):
            coords = sub_edge.coords
            forward = EdgeEnd(sub_edge, coords[0], coords[1], sub_edge.label.copy())
            backward_label = sub_edge.label.copy()
            backward_label.flip()
            backward = EdgeEnd(sub_edge, coords[-1], coords[-2], backward_label)
            self.nodes.add_edge_end(forward)
            self.nodes.add_edge_end(backward)

    def _label_node_edges(self) -> None:
        locators = [graph.locate_in_area for graph in self.graphs]
        for node in self.nodes:
            node.edges.compute_labelling(locators)

    def _label_isolated_edges(self, this_index: int, target_index: int) -> None:
        """Edges not meeting the other geometry lie wholly in one of its locations."""
        target = self.graphs[target_index]
        for edge in self.graphs[this_index].edges:
            if not edge.is_isolated:
                continue
            if target.dimension > 0:
                location = target.locate(edge.coordinate)
            else:
                location = Location.EXTERIOR
            edge.label.set_all_locations(target_index, location)
            self.isolated_edges.append(edge)

    # -------------------------------------------------------------------------

    def _update_im(self, im: IntersectionMatrix) -> None:
        for edge in self.isolated_edges:
            im.update_from_label(edge.label, edge.coordinate)
        for node in self.nodes:
            node.update_im(im)
            node.update_im_from_edges(im)
