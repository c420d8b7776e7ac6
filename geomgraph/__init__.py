"""
Planar topology graph: edges, nodes and labels of the relate computation.
"""

from .coordinate import Coordinate, Envelope, orientation_index
from .edge import Edge, EdgeIntersection
from .edge_set_intersector import (
    EdgeSetIntersector,
    SimpleEdgeSetIntersector,
    IndexedEdgeSetIntersector,
    create_edge_set_intersector,
)
from .errors import RelateError, InvalidGeometryError, TopologyError
from .geometry import PolygonPart, RelateGeometry
from .geometry_graph import GeometryGraph
from .label import Label, Location, Position
from .noder import Noder
from .precision import Precision
from .segment_intersector import SegmentIntersector

__all__ = [
    "Coordinate",
    "Envelope",
    "orientation_index",
    "Edge",
    "EdgeIntersection",
    "EdgeSetIntersector",
    "SimpleEdgeSetIntersector",
    "IndexedEdgeSetIntersector",
    "create_edge_set_intersector",
    "RelateError",
    "InvalidGeometryError",
    "TopologyError",
    "PolygonPart",
    "RelateGeometry",
    "GeometryGraph",
    "Label",
    "Location",
    "Position",
    "Noder",
    "Precision",
    "SegmentIntersector",
]
