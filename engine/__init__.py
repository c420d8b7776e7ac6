"""
Relate Engine - DE-9IM spatial predicates for planar vector geometries.
"""

from .config import RelateConfig, load_config
from .geodesic import geodesic_bearing, geodesic_bearing_distance
from .intersection_matrix import IntersectionMatrix
from .predicates import (
    relate,
    relate_pattern,
    intersects,
    disjoint,
    contains,
    within,
    covers,
    covered_by,
    touches,
    crosses,
    overlaps,
    equals,
    locate_point,
)
from .relate_computer import RelateComputer
from .relate_engine import RelatePredicateEngine
from .spatial_engine import SpatialPredicateEngine

__all__ = [
    "RelateConfig",
    "load_config",
    "geodesic_bearing",
    "geodesic_bearing_distance",
    "IntersectionMatrix",
    "relate",
    "relate_pattern",
    "intersects",
    "disjoint",
    "contains",
    "within",
    "covers",
    "covered_by",
    "touches",
    "crosses",
    "overlaps",
    "equals",
    "locate_point",
    "RelateComputer",
    "RelatePredicateEngine",
    "SpatialPredicateEngine",
]
