"""
Vector geometry to relate-graph input conversion.

Decomposes shapely geometries (or GeoJSON-like mappings) into the flat
RelateGeometry model, rounding coordinates through the configured precision
and rejecting structurally degenerate input. Optionally re-projects the
geometry first.
"""

import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    shape,
)
from shapely.geometry.base import BaseGeometry
from shapely.ops import transform
from pyproj import CRS, Transformer

from geomgraph.coordinate import Coordinate, remove_repeated_points, signed_area
from geomgraph.errors import InvalidGeometryError
from geomgraph.geometry import PolygonPart, RelateGeometry
from geomgraph.precision import DEFAULT_PRECISION, Precision

CrsLike = Union[str, int, CRS]

GeometryLike = Union[BaseGeometry, Mapping[str, Any]]


# =============================================================================
# CRS HANDLING
# =============================================================================

def _to_crs(crs: CrsLike) -> CRS:
    if isinstance(crs, int):
        crs = f"EPSG:{crs}"
    return CRS.from_user_input(crs)


def _ensure_crs(geometry: BaseGeometry, source_crs: Optional[CrsLike] = None,
                target_crs: Optional[CrsLike] = None) -> BaseGeometry:
    """
    Transform geometry from ``source_crs`` to ``target_crs`` if needed.

    Args:
        geometry: Shapely geometry object
        source_crs: Source CRS (EPSG code as int, string like 'EPSG:2056', or None to skip)
        target_crs: Target CRS (default WGS84)

    Returns:
        Transformed geometry
    """
    if source_crs is None:
        return geometry

    source = _to_crs(source_crs)
    target = _to_crs(target_crs) if target_crs is not None else CRS.from_epsg(4326)
    if source == target:
        return geometry

    transformer = Transformer.from_crs(source, target, always_xy=True)
    return transform(transformer.transform, geometry)


# =============================================================================
# COORDINATE VALIDATION
# =============================================================================

def _to_coordinates(coords: Sequence[Sequence[float]], precision: Precision) -> List[Coordinate]:
    """Round, validate and de-duplicate a coordinate sequence (z is dropped)."""
    result = []
    for c in coords:
        x, y = float(c[0]), float(c[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidGeometryError("Non-finite coordinate", (x, y))
        result.append(Coordinate(precision.round(x), precision.round(y)))
    return remove_repeated_points(result)


def _line_coordinates(line: LineString, precision: Precision) -> List[Coordinate]:
    coords = _to_coordinates(line.coords, precision)
    if len(coords) < 2:
        raise InvalidGeometryError("Zero-length line", coords[0] if coords else None)
    return coords


def _ring_coordinates(ring: Union[LinearRing, Sequence], precision: Precision) -> List[Coordinate]:
    coords = _to_coordinates(getattr(ring, "coords", ring), precision)
    if coords and coords[0] != coords[-1]:
        coords.append(coords[0])
    # closed ring: first and last coordinate are the same vertex
    if len(coords) < 4:
        raise InvalidGeometryError("Ring has fewer than 3 distinct vertices",
                                   coords[0] if coords else None)
    if signed_area(coords) == 0.0:
        raise InvalidGeometryError("Ring has zero area", coords[0])
    return coords


# =============================================================================
# DECOMPOSITION
# =============================================================================

def _add_component(geometry: BaseGeometry, result: RelateGeometry, precision: Precision) -> None:
    if geometry.is_empty:
        return

    if isinstance(geometry, Point):
        result.points.extend(_to_coordinates([geometry.coords[0]], precision))

    elif isinstance(geometry, LinearRing):
        result.lines.append(_ring_coordinates(geometry, precision))

    elif isinstance(geometry, LineString):
        result.lines.append(_line_coordinates(geometry, precision))

    elif isinstance(geometry, Polygon):
        shell = _ring_coordinates(geometry.exterior, precision)
        holes = [_ring_coordinates(hole, precision) for hole in geometry.interiors]
        result.polygons.append(PolygonPart(shell, holes))

    elif isinstance(geometry, (MultiPoint, MultiLineString, MultiPolygon, GeometryCollection)):
        for part in geometry.geoms:
            _add_component(part, result, precision)

    else:
        raise ValueError(f"Unsupported geometry type: {type(geometry)}")


def to_shapely(geometry: GeometryLike) -> BaseGeometry:
    """
    Accept a shapely geometry or a GeoJSON-like mapping.

    Raises:
        ValueError: If the input is neither
    """
    if isinstance(geometry, BaseGeometry):
        return geometry
    if isinstance(geometry, Mapping):
        return shape(geometry)
    raise ValueError(f"Unsupported geometry type: {type(geometry)}")


def convert_geometry(
    geometry: GeometryLike,
    precision: Precision = DEFAULT_PRECISION,
    source_crs: Optional[CrsLike] = None,
    target_crs: Optional[CrsLike] = None,
) -> RelateGeometry:
    """
    Convert any supported geometry to the relate engine's input model.

    Handles Point, LineString, LinearRing, Polygon, the Multi* variants and
    GeometryCollection. Repeated consecutive coordinates are removed; empty
    components are skipped.

    Args:
        geometry: Shapely geometry object or GeoJSON-like mapping
        precision: Precision model coordinates are rounded through
        source_crs: Source CRS (e.g., 2056 for LV95, None for no re-projection)
        target_crs: Target CRS (default WGS84 when source_crs is given)

    Returns:
        RelateGeometry

    Raises:
        ValueError: If geometry type is not supported
        InvalidGeometryError: For non-finite coordinates, zero-length lines,
            and rings with fewer than three distinct vertices or zero area

    Example:
        >>> from shapely.geometry import Polygon
        >>> geom = convert_geometry(Polygon([(0, 0), (4, 0), (4, 4), (0, 4)]))
        >>> geom.dimension
        2
    """
    geometry = _ensure_crs(to_shapely(geometry), source_crs, target_crs)
    result = RelateGeometry(geometry.geom_type)
    _add_component(geometry, result, precision)
    return result


def convert_point(point: Union[Point, Sequence[float]], precision: Precision = DEFAULT_PRECISION) -> Coordinate:
    """Convert a shapely Point or an (x, y) pair to a validated Coordinate."""
    if isinstance(point, Point):
        if point.is_empty:
            raise InvalidGeometryError("Empty point")
        point = point.coords[0]
    return _to_coordinates([point], precision)[0]
