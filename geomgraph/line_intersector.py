"""
Segment-segment intersection.

Classifies the intersection of two closed segments as none, a single point
(proper or not) or a collinear overlap. A point is proper when it is not an
endpoint of either segment. Endpoint equality is exact; computed points that
land within the snap tolerance of an endpoint are replaced by that endpoint.
Proper crossing points are solved exactly and rounded once.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Optional, Tuple, Union

from .coordinate import COLLINEAR, Coordinate, Envelope, orientation_index
from .precision import DEFAULT_PRECISION, Precision

Segment = Tuple[Coordinate, Coordinate]


@dataclass(frozen=True)
class PointIntersection:
    """The segments meet in a single point."""
    coordinate: Coordinate
    is_proper: bool

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        return (self.coordinate,)


@dataclass(frozen=True)
class CollinearOverlap:
    """The segments are collinear and share the sub-segment ``start -> end``."""
    start: Coordinate
    end: Coordinate

    is_proper = False

    @property
    def coordinates(self) -> Tuple[Coordinate, ...]:
        return (self.start, self.end)


IntersectionResult = Union[PointIntersection, CollinearOverlap]


def compute_intersection(
    p: Segment,
    q: Segment,
    precision: Precision = DEFAULT_PRECISION,
) -> Optional[IntersectionResult]:
    """
    Intersect segment ``p`` with segment ``q``.

    Args:
        p: First segment as (start, end)
        q: Second segment as (start, end)
        precision: Precision model supplying the endpoint snap tolerance

    Returns:
        None, a PointIntersection or a CollinearOverlap

    Example:
        >>> a = (Coordinate(0, 0), Coordinate(2, 2))
        >>> b = (Coordinate(0, 2), Coordinate(2, 0))
        >>> compute_intersection(a, b)
        PointIntersection(coordinate=Coordinate(x=1.0, y=1.0), is_proper=True)
    """
    p0, p1 = p
    q0, q1 = q
    if not Envelope.of_segment(p0, p1).intersects(Envelope.of_segment(q0, q1)):
        return None

    p_q0 = orientation_index(p0, p1, q0)
    p_q1 = orientation_index(p0, p1, q1)
    if p_q0 == p_q1 and p_q0 != COLLINEAR:
        return None

    q_p0 = orientation_index(q0, q1, p0)
    q_p1 = orientation_index(q0, q1, p1)
    if q_p0 == q_p1 and q_p0 != COLLINEAR:
        return None

    if p_q0 == COLLINEAR and p_q1 == COLLINEAR and q_p0 == COLLINEAR and q_p1 == COLLINEAR:
        return _collinear_intersection(p, q)

    # A single intersection point. If any orientation is collinear it is an endpoint.
    if COLLINEAR in (p_q0, p_q1, q_p0, q_p1):
        if p0 == q0 or p0 == q1:
            point = p0
        elif p1 == q0 or p1 == q1:
            point = p1
        elif p_q0 == COLLINEAR:
            point = q0
        elif p_q1 == COLLINEAR:
            point = q1
        elif q_p0 == COLLINEAR:
            point = p0
        else:
            point = p1
        return PointIntersection(point, False)

    point = _proper_intersection(p, q)
    snapped = _snap_to_endpoint(point, p, q, precision)
    if snapped is not None:
        return PointIntersection(snapped, False)
    return PointIntersection(point, True)


def _collinear_intersection(p: Segment, q: Segment) -> Optional[IntersectionResult]:
    p0, p1 = p
    q0, q1 = q
    p_env = Envelope.of_segment(p0, p1)
    q_env = Envelope.of_segment(q0, q1)
    q0_in_p = p_env.contains_coordinate(q0)
    q1_in_p = p_env.contains_coordinate(q1)
    p0_in_q = q_env.contains_coordinate(p0)
    p1_in_q = q_env.contains_coordinate(p1)

    if q0_in_p and q1_in_p:
        return CollinearOverlap(q0, q1)
    if p0_in_q and p1_in_q:
        return CollinearOverlap(p0, p1)
    if q0_in_p and p0_in_q:
        if q0 == p0 and not q1_in_p and not p1_in_q:
            return PointIntersection(q0, False)
        return CollinearOverlap(q0, p0)
    if q0_in_p and p1_in_q:
        if q0 == p1 and not q1_in_p and not p0_in_q:
            return PointIntersection(q0, False)
        return CollinearOverlap(q0, p1)
    if q1_in_p and p0_in_q:
        if q1 == p0 and not q0_in_p and not p1_in_q:
            return PointIntersection(q1, False)
        return CollinearOverlap(q1, p0)
    if q1_in_p and p1_in_q:
        if q1 == p1 and not q0_in_p and not p0_in_q:
            return PointIntersection(q1, False)
        return CollinearOverlap(q1, p1)
    return None


def _proper_intersection(p: Segment, q: Segment) -> Coordinate:
    """
    The crossing point of two properly intersecting segments, correctly rounded.

    The point is solved in rational arithmetic, so every pair of segments
    through the same exact crossing yields the same coordinate.
    """
    p0x, p0y = Fraction(p[0].x), Fraction(p[0].y)
    q0x, q0y = Fraction(q[0].x), Fraction(q[0].y)
    dpx, dpy = Fraction(p[1].x) - p0x, Fraction(p[1].y) - p0y
    dqx, dqy = Fraction(q[1].x) - q0x, Fraction(q[1].y) - q0y
    t = ((q0x - p0x) * dqy - (q0y - p0y) * dqx) / (dpx * dqy - dpy * dqx)
    return Coordinate(float(p0x + t * dpx), float(p0y + t * dpy))


def _snap_to_endpoint(point: Coordinate, p: Segment, q: Segment,
                      precision: Precision) -> Optional[Coordinate]:
    return snap_to_nearest(point, (p[0], p[1], q[0], q[1]), precision)


def snap_to_nearest(point: Coordinate, candidates: Iterable[Coordinate],
                    precision: Precision) -> Optional[Coordinate]:
    """The candidate nearest to ``point`` within the snap tolerance, if any."""
    best = None
    best_dist = None
    for candidate in candidates:
        scale = max(abs(point.x), abs(point.y), abs(candidate.x), abs(candidate.y))
        dist = max(abs(point.x - candidate.x), abs(point.y - candidate.y))
        if dist <= precision.snap_tolerance(scale) and (best_dist is None or dist < best_dist):
            best, best_dist = candidate, dist
    return best


def edge_distance(point: Coordinate, p0: Coordinate, p1: Coordinate) -> float:
    """
    Distance of ``point`` along segment ``p0 -> p1``, measured on the dominant axis.

    Robust and monotone along the segment; any point other than ``p0`` gets a
    non-zero distance.
    """
    dx = abs(p1.x - p0.x)
    dy = abs(p1.y - p0.y)
    if point == p0:
        return 0.0
    if point == p1:
        return dx if dx > dy else dy
    pdx = abs(point.x - p0.x)
    pdy = abs(point.y - p0.y)
    dist = pdx if dx > dy else pdy
    if dist == 0.0:
        dist = max(pdx, pdy)
    return dist
