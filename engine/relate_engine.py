"""
DE-9IM implementation of the spatial predicate engine.

This module provides a concrete implementation of SpatialPredicateEngine
backed by the planar relate graph.
"""

from pathlib import Path
from typing import Optional, Union

from . import predicates
from .config import RelateConfig, load_config
from .intersection_matrix import IntersectionMatrix
from .predicates import GeometryInput
from .spatial_engine import SpatialPredicateEngine


class RelatePredicateEngine(SpatialPredicateEngine):
    """
    Spatial predicate engine using the DE-9IM relate computation.

    Expected input: shapely geometries, GeoJSON-like mappings or
    RelateGeometry objects.

    Args:
        config: Relate settings; if omitted they are read from ``config_path``
        config_path: YAML config file (default: config.yaml in the project root)
    """

    def __init__(self, config: Optional[RelateConfig] = None,
                 config_path: Optional[Union[str, Path]] = None):
        self.config = config if config is not None else load_config(config_path)

    def relate(self, a: GeometryInput, b: GeometryInput) -> IntersectionMatrix:
        """
        Compute the full intersection matrix of a and b.

        All predicates of this engine are evaluated from this matrix; call it
        directly to test several predicates on the same pair.
        """
        return predicates.relate(a, b, self.config)

    def relate_pattern(self, a: GeometryInput, b: GeometryInput, pattern: str) -> bool:
        return predicates.relate_pattern(a, b, pattern, self.config)

    def intersects(self, a: GeometryInput, b: GeometryInput) -> bool:
        """
        Test if two geometries intersect.

        Args:
            a: Geometry A
            b: Geometry B

        Returns:
            True if the geometries share at least one point, False otherwise
        """
        return predicates.intersects(a, b, self.config)

    def disjoint(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.disjoint(a, b, self.config)

    def within(self, a: GeometryInput, b: GeometryInput) -> bool:
        """
        Test if geometry a is within geometry b.

        Args:
            a: Geometry A
            b: Geometry B

        Returns:
            True if a is within b, False otherwise
        """
        return predicates.within(a, b, self.config)

    def contains(self, a: GeometryInput, b: GeometryInput) -> bool:
        """
        Test if geometry a contains geometry b.

        Returns:
            True if a contains b, False otherwise
        """
        return predicates.contains(a, b, self.config)

    def touches(self, a: GeometryInput, b: GeometryInput) -> bool:
        """
        Test if two geometries touch (meet only in their boundaries).

        Returns:
            True if the geometries touch, False otherwise
        """
        return predicates.touches(a, b, self.config)

    def covers(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.covers(a, b, self.config)

    def covered_by(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.covered_by(a, b, self.config)

    def crosses(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.crosses(a, b, self.config)

    def overlaps(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.overlaps(a, b, self.config)

    def equals(self, a: GeometryInput, b: GeometryInput) -> bool:
        return predicates.equals(a, b, self.config)

    def get_name(self) -> str:
        """Return the name of this engine."""
        return f"DE-9IM Relate Engine ({self.config.edge_set_intersector})"
