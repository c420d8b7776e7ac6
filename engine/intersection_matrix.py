"""
DE-9IM intersection matrix.

Rows are the interior, boundary and exterior of geometry A, columns those of
geometry B. Each entry holds the dimension of the intersection of the two
point sets: -1 (empty, written F), 0, 1 or 2.

Named predicates are pure functions of the matrix. The dimensions of the
input geometries are recovered from the matrix itself: the interior of a
geometry always meets the other geometry's interior, boundary or exterior
in its full dimension.
"""

from typing import List, Optional

from geomgraph.coordinate import Coordinate
from geomgraph.errors import TopologyError
from geomgraph.label import Label, Location, Position

FALSE = -1

_SYMBOLS = {-1: "F", 0: "0", 1: "1", 2: "2"}
_VALUES = {"F": -1, "0": 0, "1": 1, "2": 2}

_CELLS = [(a, b) for a in (Location.INTERIOR, Location.BOUNDARY, Location.EXTERIOR)
          for b in (Location.INTERIOR, Location.BOUNDARY, Location.EXTERIOR)]


def validate_pattern(pattern: str) -> str:
    if not isinstance(pattern, str) or len(pattern) != 9:
        raise ValueError(f"DE-9IM pattern must have exactly 9 symbols, got {pattern!r}")
    pattern = pattern.upper()
    invalid = set(pattern) - set("TF*012")
    if invalid:
        raise ValueError(f"Invalid DE-9IM pattern symbol(s) {sorted(invalid)} in {pattern!r}")
    return pattern


def _matches_symbol(dimension: int, symbol: str) -> bool:
    if symbol == "*":
        return True
    if symbol == "T":
        return dimension >= 0
    if symbol == "F":
        return dimension == FALSE
    return dimension == int(symbol)


class IntersectionMatrix:
    """
    3×3 matrix of intersection dimensions between two geometries.

    Args:
        elements: Optional initial 3×3 dimensions (defaults to all F)

    Example:
        >>> im = IntersectionMatrix.from_string("212101212")
        >>> im.matches("T*T***T**")
        True
        >>> im.is_overlaps()
        True
    """

    def __init__(self, elements: Optional[List[List[int]]] = None):
        if elements is None:
            self._matrix = [[FALSE] * 3 for _ in range(3)]
        else:
            self._matrix = [list(row) for row in elements]

    @classmethod
    def from_string(cls, value: str) -> "IntersectionMatrix":
        """
        Parse a DE-9IM string of dimension symbols (F, 0, 1, 2).

        Raises:
            ValueError: If the string is not 9 dimension symbols
        """
        if not isinstance(value, str) or len(value) != 9:
            raise ValueError(f"DE-9IM string must have exactly 9 symbols, got {value!r}")
        im = cls()
        for (a, b), symbol in zip(_CELLS, value.upper()):
            if symbol not in _VALUES:
                raise ValueError(f"Invalid dimension symbol {symbol!r} in {value!r}")
            im.set(a, b, _VALUES[symbol])
        return im

    # -------------------------------------------------------------------------
    # Access and update
    # -------------------------------------------------------------------------

    def get(self, loc_a: Location, loc_b: Location) -> int:
        return self._matrix[loc_a][loc_b]

    def set(self, loc_a: Location, loc_b: Location, dimension: int) -> None:
        self._matrix[loc_a][loc_b] = dimension

    def set_at_least(self, loc_a: Location, loc_b: Location, dimension: int) -> None:
        """Raise an entry to ``dimension`` if it is currently lower."""
        if self._matrix[loc_a][loc_b] < dimension:
            self._matrix[loc_a][loc_b] = dimension

    def set_at_least_if_valid(self, loc_a: Location, loc_b: Location, dimension: int) -> None:
        if loc_a != Location.NONE and loc_b != Location.NONE:
            self.set_at_least(loc_a, loc_b, dimension)

    def set_at_least_from_string(self, minimum: str) -> None:
        """Apply a 9-symbol lower bound; only the digit symbols raise entries."""
        minimum = validate_pattern(minimum)
        for (a, b), symbol in zip(_CELLS, minimum):
            if symbol in "012":
                self.set_at_least(a, b, int(symbol))

    def update_from_label(self, label: Label, coordinate: Optional[Coordinate] = None) -> None:
        """
        Account for a labelled edge: ON locations meet in dimension 1, side
        locations of area edges in dimension 2.

        Raises:
            TopologyError: If the label still has an unknown location
        """
        on_a = label.location(0, Position.ON)
        on_b = label.location(1, Position.ON)
        if on_a == Location.NONE or on_b == Location.NONE:
            raise TopologyError(f"Unresolved edge label {label}", coordinate)
        self.set_at_least(on_a, on_b, 1)
        if not label.is_area():
            return
        for side in (Position.LEFT, Position.RIGHT):
            side_a = label.location(0, side)
            side_b = label.location(1, side)
            if (label.is_area(0) and side_a == Location.NONE) or (label.is_area(1) and side_b == Location.NONE):
                raise TopologyError(f"Unresolved side location in edge label {label}", coordinate)
            self.set_at_least_if_valid(side_a, side_b, 2)

    def transpose(self) -> "IntersectionMatrix":
        """The matrix of the same relation with A and B exchanged."""
        return IntersectionMatrix([[self._matrix[b][a] for b in range(3)] for a in range(3)])

    # -------------------------------------------------------------------------
    # Pattern matching
    # -------------------------------------------------------------------------

    def matches(self, pattern: str) -> bool:
        """
        Test the matrix against a DE-9IM pattern.

        ``T`` matches any non-empty intersection, ``F`` an empty one, ``*``
        anything, and a digit exactly that dimension.

        Raises:
            ValueError: If the pattern is not 9 valid symbols
        """
        pattern = validate_pattern(pattern)
        return all(_matches_symbol(self.get(a, b), symbol) for (a, b), symbol in zip(_CELLS, pattern))

    # -------------------------------------------------------------------------
    # Named predicates
    # -------------------------------------------------------------------------

    @property
    def dimension_a(self) -> int:
        """Dimension of geometry A: the largest entry of the interior row."""
        return max(self._matrix[Location.INTERIOR])

    @property
    def dimension_b(self) -> int:
        """Dimension of geometry B: the largest entry of the interior column."""
        return max(row[Location.INTERIOR] for row in self._matrix)

    def _is_true(self, loc_a: Location, loc_b: Location) -> bool:
        return self._matrix[loc_a][loc_b] >= 0

    def _is_false(self, loc_a: Location, loc_b: Location) -> bool:
        return self._matrix[loc_a][loc_b] == FALSE

    def _has_point_in_common(self) -> bool:
        return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                or self._is_true(Location.INTERIOR, Location.BOUNDARY)
                or self._is_true(Location.BOUNDARY, Location.INTERIOR)
                or self._is_true(Location.BOUNDARY, Location.BOUNDARY))

    def is_disjoint(self) -> bool:
        return not self._has_point_in_common()

    def is_intersects(self) -> bool:
        return self._has_point_in_common()

    def is_within(self) -> bool:
        return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                and self._is_false(Location.INTERIOR, Location.EXTERIOR)
                and self._is_false(Location.BOUNDARY, Location.EXTERIOR))

    def is_contains(self) -> bool:
        return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                and self._is_false(Location.EXTERIOR, Location.INTERIOR)
                and self._is_false(Location.EXTERIOR, Location.BOUNDARY))

    def is_covers(self) -> bool:
        return (self._has_point_in_common()
                and self._is_false(Location.EXTERIOR, Location.INTERIOR)
                and self._is_false(Location.EXTERIOR, Location.BOUNDARY))

    def is_covered_by(self) -> bool:
        return (self._has_point_in_common()
                and self._is_false(Location.INTERIOR, Location.EXTERIOR)
                and self._is_false(Location.BOUNDARY, Location.EXTERIOR))

    def is_touches(self) -> bool:
        """
        Interiors are disjoint but the geometries meet.

        Undefined, and so False, when both geometries are points.
        """
        dim_a, dim_b = sorted((self.dimension_a, self.dimension_b))
        if (dim_a, dim_b) not in ((2, 2), (1, 1), (1, 2), (0, 2), (0, 1)):
            return False
        return (self._is_false(Location.INTERIOR, Location.INTERIOR)
                and (self._is_true(Location.INTERIOR, Location.BOUNDARY)
                     or self._is_true(Location.BOUNDARY, Location.INTERIOR)
                     or self._is_true(Location.BOUNDARY, Location.BOUNDARY)))

    def is_crosses(self) -> bool:
        dims = (self.dimension_a, self.dimension_b)
        if dims in ((0, 1), (0, 2), (1, 2)):
            return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                    and self._is_true(Location.INTERIOR, Location.EXTERIOR))
        if dims in ((1, 0), (2, 0), (2, 1)):
            return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                    and self._is_true(Location.EXTERIOR, Location.INTERIOR))
        if dims == (1, 1):
            return self.get(Location.INTERIOR, Location.INTERIOR) == 0
        return False

    def is_overlaps(self) -> bool:
        dims = (self.dimension_a, self.dimension_b)
        if dims in ((0, 0), (2, 2)):
            return (self._is_true(Location.INTERIOR, Location.INTERIOR)
                    and self._is_true(Location.INTERIOR, Location.EXTERIOR)
                    and self._is_true(Location.EXTERIOR, Location.INTERIOR))
        if dims == (1, 1):
            return (self.get(Location.INTERIOR, Location.INTERIOR) == 1
                    and self._is_true(Location.INTERIOR, Location.EXTERIOR)
                    and self._is_true(Location.EXTERIOR, Location.INTERIOR))
        return False

    def is_equal_topo(self) -> bool:
        if self.dimension_a != self.dimension_b:
            return False
        return self.matches("T*F**FFF*")

    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        return isinstance(other, IntersectionMatrix) and self._matrix == other._matrix

    def __str__(self) -> str:
        return "".join(_SYMBOLS[self.get(a, b)] for a, b in _CELLS)

    def __repr__(self) -> str:
        return f"IntersectionMatrix('{self}')"
