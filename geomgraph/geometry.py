"""
Normalised input geometry consumed by the relate engine.

A RelateGeometry is a flat decomposition of any supported geometry into
points, lines and polygons, with repeated coordinates removed. It is built by
the converter after validation and is never modified afterwards.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from .coordinate import Coordinate, Envelope

POLYGONAL_KINDS = ("Polygon", "MultiPolygon", "LinearRing")


@dataclass
class PolygonPart:
    """One polygon: a closed shell ring and zero or more closed hole rings."""
    shell: List[Coordinate]
    holes: List[List[Coordinate]] = field(default_factory=list)

    @property
    def envelope(self) -> Envelope:
        return Envelope.of(self.shell)


@dataclass
class RelateGeometry:
    """
    Decomposed geometry.

    Attributes:
        kind: Geometry type name of the source geometry (shapely's geom_type)
        points: Point components
        lines: Linestring components (at least two distinct coordinates each)
        polygons: Polygon components
    """
    kind: str
    points: List[Coordinate] = field(default_factory=list)
    lines: List[List[Coordinate]] = field(default_factory=list)
    polygons: List[PolygonPart] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.points or self.lines or self.polygons)

    @property
    def dimension(self) -> int:
        """Topological dimension: 2 areal, 1 linear, 0 puntal, -1 empty."""
        if self.polygons:
            return 2
        if self.lines:
            return 1
        if self.points:
            return 0
        return -1

    @property
    def envelope(self) -> Optional[Envelope]:
        env = Envelope.of(self.points)
        for line in self.lines:
            env = Envelope.of(line) if env is None else env.expand_to_include(Envelope.of(line))
        for polygon in self.polygons:
            env = polygon.envelope if env is None else env.expand_to_include(polygon.envelope)
        return env

    def is_polygonal(self) -> bool:
        """Only rings and polygons; self-noding of such input can skip same-edge tests."""
        return self.kind in POLYGONAL_KINDS

    def linear_boundary(self) -> List[Coordinate]:
        """Endpoints of open line components occurring an odd number of times (Mod-2 rule)."""
        counts: Counter = Counter()
        for line in self.lines:
            counts[line[0]] += 1
            counts[line[-1]] += 1
        return [c for c, n in counts.items() if n % 2 == 1]

    @property
    def boundary_dimension(self) -> int:
        dim = self.dimension
        if dim == 2:
            return 1
        if dim == 1:
            return 0 if self.linear_boundary() else -1
        return -1
