"""
Planar coordinate primitives and exact orientation predicates.

Orientation is evaluated with a floating-point filter and falls back to exact
rational arithmetic (``fractions.Fraction``) when the filter cannot certify the
sign, so near-collinear configurations always classify the same way.
"""

import math
from fractions import Fraction
from typing import Iterable, List, NamedTuple, Optional, Sequence

# Orientation indices
CLOCKWISE = -1
COLLINEAR = 0
COUNTERCLOCKWISE = 1

# Error bound for the orient2d float filter (Shewchuk)
_EPSILON = 2.0 ** -53
_CCW_ERR_BOUND = (3.0 + 16.0 * _EPSILON) * _EPSILON


class Coordinate(NamedTuple):
    """A 2D coordinate. Orders lexicographically by x, then y."""

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class Envelope:
    """Closed axis-aligned bounding rectangle."""

    __slots__ = ("min_x", "min_y", "max_x", "max_y")

    def __init__(self, min_x: float, min_y: float, max_x: float, max_y: float):
        self.min_x = min_x
        self.min_y = min_y
        self.max_x = max_x
        self.max_y = max_y

    @classmethod
    def of(cls, coords: Iterable[Coordinate]) -> Optional["Envelope"]:
        """Envelope of a coordinate iterable, or None when it is empty."""
        coords = list(coords)
        if not coords:
            return None
        xs = [c.x for c in coords]
        ys = [c.y for c in coords]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def of_segment(cls, p0: Coordinate, p1: Coordinate) -> "Envelope":
        return cls(min(p0.x, p1.x), min(p0.y, p1.y), max(p0.x, p1.x), max(p0.y, p1.y))

    def expand_to_include(self, other: Optional["Envelope"]) -> "Envelope":
        if other is None:
            return self
        return Envelope(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def intersects(self, other: Optional["Envelope"]) -> bool:
        if other is None:
            return False
        return not (
            other.min_x > self.max_x
            or other.max_x < self.min_x
            or other.min_y > self.max_y
            or other.max_y < self.min_y
        )

    def contains_coordinate(self, p: Coordinate) -> bool:
        """True if ``p`` lies inside or on the border of the envelope."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def __eq__(self, other) -> bool:
        return isinstance(other, Envelope) and self.as_tuple() == other.as_tuple()

    def __repr__(self) -> str:
        return f"Envelope{self.as_tuple()}"


# =============================================================================
# ORIENTATION
# =============================================================================

def _orientation_exact(p1: Coordinate, p2: Coordinate, q: Coordinate) -> int:
    ax, ay = Fraction(p1.x) - Fraction(q.x), Fraction(p1.y) - Fraction(q.y)
    bx, by = Fraction(p2.x) - Fraction(q.x), Fraction(p2.y) - Fraction(q.y)
    det = ax * by - ay * bx
    if det > 0:
        return COUNTERCLOCKWISE
    if det < 0:
        return CLOCKWISE
    return COLLINEAR


def orientation_index(p1: Coordinate, p2: Coordinate, q: Coordinate) -> int:
    """
    Orientation of point ``q`` relative to the directed line ``p1 -> p2``.

    Returns:
        COUNTERCLOCKWISE (1) if q is to the left, CLOCKWISE (-1) if it is to
        the right, COLLINEAR (0) if it lies on the line
    """
    det_left = (p1.x - q.x) * (p2.y - q.y)
    det_right = (p1.y - q.y) * (p2.x - q.x)
    det = det_left - det_right

    if det_left > 0.0:
        if det_right <= 0.0:
            return _sign(det)
        det_sum = det_left + det_right
    elif det_left < 0.0:
        if det_right >= 0.0:
            return _sign(det)
        det_sum = -det_left - det_right
    else:
        return _sign(det)

    if abs(det) >= _CCW_ERR_BOUND * det_sum:
        return _sign(det)
    return _orientation_exact(p1, p2, q)


def _sign(value: float) -> int:
    if value > 0.0:
        return COUNTERCLOCKWISE
    if value < 0.0:
        return CLOCKWISE
    return COLLINEAR


# =============================================================================
# SEGMENTS AND RINGS
# =============================================================================

def point_on_segment(p: Coordinate, p0: Coordinate, p1: Coordinate) -> bool:
    """True if ``p`` lies on the closed segment ``p0 -> p1``."""
    if not Envelope.of_segment(p0, p1).contains_coordinate(p):
        return False
    return orientation_index(p0, p1, p) == COLLINEAR


def remove_repeated_points(coords: Sequence[Coordinate]) -> List[Coordinate]:
    """Drop coordinates equal to their immediate predecessor."""
    result: List[Coordinate] = []
    for c in coords:
        if not result or result[-1] != c:
            result.append(c)
    return result


def signed_area(ring: Sequence[Coordinate]) -> float:
    """
    Signed area of a closed ring (shoelace formula).

    Positive for counter-clockwise rings, negative for clockwise ones. The
    ordinates are shifted to the first vertex to limit cancellation.
    """
    if len(ring) < 3:
        return 0.0
    x0, y0 = ring[0].x, ring[0].y
    terms = []
    for a, b in zip(ring, ring[1:]):
        terms.append((a.x - x0) * (b.y - y0) - (b.x - x0) * (a.y - y0))
    return math.fsum(terms) / 2.0


def is_ccw(ring: Sequence[Coordinate]) -> bool:
    """True if the closed ring is oriented counter-clockwise."""
    return signed_area(ring) > 0.0
