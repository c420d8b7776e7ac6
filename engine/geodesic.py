"""
Geodesic bearing on the WGS84 ellipsoid.

Points are (longitude, latitude) in degrees: shapely Points or pairs. The
relate engine itself is purely planar and does not use these functions.
"""

from typing import Sequence, Tuple, Union

from pyproj import Geod
from shapely.geometry import Point

# WGS84 ellipsoid for geodesic calculations
_WGS84_GEOD = Geod(ellps='WGS84')

PointLike = Union[Point, Sequence[float]]


def _lon_lat(point: PointLike) -> Tuple[float, float]:
    if isinstance(point, Point):
        return point.x, point.y
    return float(point[0]), float(point[1])


def geodesic_bearing_distance(p1: PointLike, p2: PointLike) -> Tuple[float, float]:
    """
    Forward azimuth and distance from p1 to p2 along the geodesic.

    Args:
        p1: Start point (lon, lat)
        p2: End point (lon, lat)

    Returns:
        Tuple of (bearing in degrees, distance in meters). North is 0°, East
        is 90°; the bearing lies in [-180, 180].

    Example:
        >>> bearing, distance = geodesic_bearing_distance((9.0, 47.0), (9.0, 48.0))
        >>> round(bearing, 6), round(distance / 1000, 1)
        (0.0, 111.2)
    """
    lon1, lat1 = _lon_lat(p1)
    lon2, lat2 = _lon_lat(p2)
    azimuth, _, distance = _WGS84_GEOD.inv(lon1, lat1, lon2, lat2)
    return azimuth, distance


def geodesic_bearing(p1: PointLike, p2: PointLike) -> float:
    """Forward azimuth from p1 to p2 in degrees (North 0°, East 90°)."""
    return geodesic_bearing_distance(p1, p2)[0]
