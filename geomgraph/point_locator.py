"""
Point-in-geometry location.

Polygon containment uses ray crossing with exact orientation. Boundaries of
multi-component geometries follow the Mod-2 rule: a point lying on the
boundary of an odd number of components is on the boundary, an even
non-zero number puts it in the interior.
"""

from typing import Sequence

from .coordinate import COLLINEAR, COUNTERCLOCKWISE, Coordinate, Envelope, orientation_index, point_on_segment
from .geometry import PolygonPart, RelateGeometry
from .label import Location


def is_in_boundary(boundary_count: int) -> bool:
    """Mod-2 boundary determination rule."""
    return boundary_count % 2 == 1


def boundary_location(boundary_count: int) -> Location:
    return Location.BOUNDARY if is_in_boundary(boundary_count) else Location.INTERIOR


def locate_in_ring(p: Coordinate, ring: Sequence[Coordinate]) -> Location:
    """
    Locate ``p`` relative to a closed ring.

    Counts crossings of a ray running from ``p`` in the +x direction. Upward
    segments include their start and exclude their end, downward segments the
    reverse, so shared vertices are counted once.
    """
    crossings = 0
    for p1, p2 in zip(ring, ring[1:]):
        if p1.x < p.x and p2.x < p.x:
            continue
        if p == p2:
            return Location.BOUNDARY
        if p1.y == p.y and p2.y == p.y:
            if min(p1.x, p2.x) <= p.x <= max(p1.x, p2.x):
                return Location.BOUNDARY
            continue
        if (p1.y > p.y >= p2.y) or (p2.y > p.y >= p1.y):
            orient = orientation_index(p1, p2, p)
            if orient == COLLINEAR:
                return Location.BOUNDARY
            if p2.y < p1.y:
                orient = -orient
            if orient == COUNTERCLOCKWISE:
                crossings += 1
    return Location.INTERIOR if crossings % 2 == 1 else Location.EXTERIOR


def locate_in_polygon(p: Coordinate, polygon: PolygonPart) -> Location:
    if not polygon.envelope.contains_coordinate(p):
        return Location.EXTERIOR
    shell_location = locate_in_ring(p, polygon.shell)
    if shell_location != Location.INTERIOR:
        return shell_location
    for hole in polygon.holes:
        if not Envelope.of(hole).contains_coordinate(p):
            continue
        hole_location = locate_in_ring(p, hole)
        if hole_location == Location.INTERIOR:
            return Location.EXTERIOR
        if hole_location == Location.BOUNDARY:
            return Location.BOUNDARY
    return Location.INTERIOR


def locate_on_line(p: Coordinate, line: Sequence[Coordinate]) -> Location:
    if not Envelope.of(line).contains_coordinate(p):
        return Location.EXTERIOR
    if line[0] != line[-1] and (p == line[0] or p == line[-1]):
        return Location.BOUNDARY
    for p0, p1 in zip(line, line[1:]):
        if point_on_segment(p, p0, p1):
            return Location.INTERIOR
    return Location.EXTERIOR


def locate_in_area(p: Coordinate, geometry: RelateGeometry) -> Location:
    """Location of ``p`` relative to the polygonal components only (EXTERIOR if there are none)."""
    for polygon in geometry.polygons:
        location = locate_in_polygon(p, polygon)
        if location != Location.EXTERIOR:
            return location
    return Location.EXTERIOR


def locate(p: Coordinate, geometry: RelateGeometry) -> Location:
    """
    Location of ``p`` relative to the full geometry.

    Example:
        >>> square = RelateGeometry("Polygon", polygons=[PolygonPart(
        ...     [Coordinate(0, 0), Coordinate(4, 0), Coordinate(4, 4), Coordinate(0, 4), Coordinate(0, 0)])])
        >>> locate(Coordinate(2, 2), square)
        <Location.INTERIOR: 0>
    """
    if geometry.is_empty():
        return Location.EXTERIOR
    envelope = geometry.envelope
    if not envelope.contains_coordinate(p):
        return Location.EXTERIOR

    is_in = False
    boundary_count = 0

    def update(location: Location) -> None:
        nonlocal is_in, boundary_count
        if location == Location.INTERIOR:
            is_in = True
        elif location == Location.BOUNDARY:
            boundary_count += 1

    for point in geometry.points:
        if point == p:
            update(Location.INTERIOR)
    for line in geometry.lines:
        update(locate_on_line(p, line))
    for polygon in geometry.polygons:
        update(locate_in_polygon(p, polygon))

    if is_in_boundary(boundary_count):
        return Location.BOUNDARY
    if boundary_count > 0 or is_in:
        return Location.INTERIOR
    return Location.EXTERIOR
