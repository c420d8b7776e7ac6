"""
Spatial predicates for vector geometries, evaluated through the DE-9IM matrix.

Every predicate converts its inputs, computes the full intersection matrix
with a RelateComputer and evaluates the matrix. Inputs may be shapely
geometries, GeoJSON-like mappings or already converted RelateGeometry objects.

Example:
    >>> from shapely.geometry import Point, Polygon
    >>> square = Polygon([(0, 0), (4, 0), (4, 4), (0, 4)])
    >>> within(Point(2, 2), square)
    True
    >>> str(relate(Point(2, 2), square))
    '0FFFFF212'
"""

from typing import Optional, Union

from converter.converter import GeometryLike, convert_geometry, convert_point
from geomgraph.geometry import RelateGeometry
from geomgraph.label import Location
from geomgraph.point_locator import locate

from .config import DEFAULT_CONFIG, RelateConfig
from .intersection_matrix import IntersectionMatrix, validate_pattern
from .relate_computer import RelateComputer

GeometryInput = Union[GeometryLike, RelateGeometry]


def prepare_geometry(geometry: GeometryInput, config: RelateConfig) -> RelateGeometry:
    if isinstance(geometry, RelateGeometry):
        return geometry
    return convert_geometry(geometry, config.make_precision())


def relate(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> IntersectionMatrix:
    """
    Compute the DE-9IM intersection matrix of ``a`` and ``b``.

    Args:
        a: Geometry A
        b: Geometry B
        config: Relate settings (default: built-in defaults)

    Returns:
        IntersectionMatrix with A as rows and B as columns

    Raises:
        InvalidGeometryError: If either geometry is degenerate
        ValueError: If a geometry type is not supported
    """
    config = config or DEFAULT_CONFIG
    computer = RelateComputer(prepare_geometry(a, config), prepare_geometry(b, config), config)
    return computer.compute_im()


def relate_pattern(a: GeometryInput, b: GeometryInput, pattern: str,
                   config: Optional[RelateConfig] = None) -> bool:
    """
    Test the relationship of ``a`` and ``b`` against a DE-9IM pattern.

    Example:
        >>> relate_pattern(Point(2, 2), square, "T*F**F***")  # within
        True
    """
    validate_pattern(pattern)
    return relate(a, b, config).matches(pattern)


def intersects(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """True if the geometries share at least one point."""
    return relate(a, b, config).is_intersects()


def disjoint(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """True if the geometries share no point."""
    return relate(a, b, config).is_disjoint()


def contains(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """True if no point of B lies outside A and the interiors meet."""
    return relate(a, b, config).is_contains()


def within(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """True if no point of A lies outside B and the interiors meet."""
    return relate(a, b, config).is_within()


def covers(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """True if no point of B lies outside A (B may lie entirely in A's boundary)."""
    return relate(a, b, config).is_covers()


def covered_by(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    return relate(a, b, config).is_covered_by()


def touches(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """
    True if the geometries meet only in their boundaries.

    Always False for two point geometries.
    """
    return relate(a, b, config).is_touches()


def crosses(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """
    True if the interiors meet in a lower dimension than the larger geometry
    and each geometry has points outside the other.
    """
    return relate(a, b, config).is_crosses()


def overlaps(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """
    True for geometries of equal dimension whose interiors meet in that
    dimension while each has points outside the other.
    """
    return relate(a, b, config).is_overlaps()


def equals(a: GeometryInput, b: GeometryInput, config: Optional[RelateConfig] = None) -> bool:
    """Topological equality: the same point set, regardless of vertex order or count."""
    return relate(a, b, config).is_equal_topo()


def locate_point(point, geometry: GeometryInput, config: Optional[RelateConfig] = None) -> Location:
    """
    Locate a point (shapely Point or (x, y) pair) relative to a geometry.

    Example:
        >>> locate_point((4, 2), square)
        <Location.BOUNDARY: 1>
    """
    config = config or DEFAULT_CONFIG
    precision = config.make_precision()
    return locate(convert_point(point, precision), prepare_geometry(geometry, config))
