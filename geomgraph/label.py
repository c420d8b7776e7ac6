"""
Topological locations and labels.

A Label records, for each of the two input geometries, where a graph element
lies: the ON location for every element, plus LEFT and RIGHT locations for
edges that bound an area.
"""

from enum import IntEnum
from typing import List, Optional


class Location(IntEnum):
    """Location of a point relative to a geometry. Values index matrix rows/columns."""
    INTERIOR = 0
    BOUNDARY = 1
    EXTERIOR = 2
    NONE = -1

    def symbol(self) -> str:
        return {
            Location.INTERIOR: "i",
            Location.BOUNDARY: "b",
            Location.EXTERIOR: "e",
            Location.NONE: "_",
        }[self]


class Position(IntEnum):
    """Position relative to a directed edge."""
    ON = 0
    LEFT = 1
    RIGHT = 2

    @staticmethod
    def opposite(position: "Position") -> "Position":
        if position == Position.LEFT:
            return Position.RIGHT
        if position == Position.RIGHT:
            return Position.LEFT
        return position


class TopologyLocation:
    """
    The location triple of one graph element relative to one geometry.

    Holds a single ON location for point and line elements, or ON/LEFT/RIGHT
    for elements bounding an area.
    """

    __slots__ = ("locations",)

    def __init__(self, on: Location = Location.NONE,
                 left: Optional[Location] = None, right: Optional[Location] = None):
        if left is None and right is None:
            self.locations: List[Location] = [on]
        else:
            self.locations = [
                on,
                Location.NONE if left is None else left,
                Location.NONE if right is None else right,
            ]

    def copy(self) -> "TopologyLocation":
        other = TopologyLocation()
        other.locations = list(self.locations)
        return other

    def get(self, position: Position) -> Location:
        if position < len(self.locations):
            return self.locations[position]
        return Location.NONE

    def set(self, position: Position, location: Location) -> None:
        self.locations[position] = location

    @property
    def on(self) -> Location:
        return self.locations[Position.ON]

    def is_null(self) -> bool:
        """True if no location is known."""
        return all(loc == Location.NONE for loc in self.locations)

    def is_any_null(self) -> bool:
        return any(loc == Location.NONE for loc in self.locations)

    def is_area(self) -> bool:
        return len(self.locations) > 1

    def is_line(self) -> bool:
        return len(self.locations) == 1

    def flip(self) -> None:
        if self.is_area():
            left, right = self.locations[Position.LEFT], self.locations[Position.RIGHT]
            self.locations[Position.LEFT] = right
            self.locations[Position.RIGHT] = left

    def set_all_locations(self, location: Location) -> None:
        self.locations = [location] * len(self.locations)

    def set_all_locations_if_null(self, location: Location) -> None:
        self.locations = [location if loc == Location.NONE else loc for loc in self.locations]

    def to_line(self) -> None:
        """Drop the side locations, keeping only ON."""
        self.locations = [self.locations[Position.ON]]

    def merge(self, other: "TopologyLocation") -> None:
        """Fill unknown locations from ``other``, promoting to an area triple if needed."""
        if len(other.locations) > len(self.locations):
            self.locations = [self.locations[0], Location.NONE, Location.NONE]
        for i, loc in enumerate(self.locations):
            if loc == Location.NONE and i < len(other.locations):
                self.locations[i] = other.locations[i]

    def __eq__(self, other) -> bool:
        return isinstance(other, TopologyLocation) and self.locations == other.locations

    def __str__(self) -> str:
        if self.is_area():
            return (self.locations[Position.LEFT].symbol()
                    + self.locations[Position.ON].symbol()
                    + self.locations[Position.RIGHT].symbol())
        return self.locations[Position.ON].symbol()


class Label:
    """
    Per-geometry topological locations of a graph element.

    Index 0 refers to geometry A, index 1 to geometry B.

    Example:
        >>> label = Label.for_area(0, Location.BOUNDARY, Location.EXTERIOR, Location.INTERIOR)
        >>> str(label)
        'A:ebi B:___'
    """

    __slots__ = ("elements",)

    def __init__(self, a: TopologyLocation, b: TopologyLocation):
        self.elements = [a, b]

    @classmethod
    def for_on(cls, geom_index: int, on: Location) -> "Label":
        """Line-style label known for one geometry only."""
        label = cls(TopologyLocation(Location.NONE), TopologyLocation(Location.NONE))
        label.elements[geom_index].set(Position.ON, on)
        return label

    @classmethod
    def for_area(cls, geom_index: int, on: Location, left: Location, right: Location) -> "Label":
        """Area-style label known for one geometry only."""
        label = cls(
            TopologyLocation(Location.NONE, Location.NONE, Location.NONE),
            TopologyLocation(Location.NONE, Location.NONE, Location.NONE),
        )
        label.elements[geom_index] = TopologyLocation(on, left, right)
        return label

    @classmethod
    def empty_line(cls) -> "Label":
        return cls(TopologyLocation(Location.NONE), TopologyLocation(Location.NONE))

    @classmethod
    def empty_area(cls) -> "Label":
        return cls(
            TopologyLocation(Location.NONE, Location.NONE, Location.NONE),
            TopologyLocation(Location.NONE, Location.NONE, Location.NONE),
        )

    def copy(self) -> "Label":
        return Label(self.elements[0].copy(), self.elements[1].copy())

    def flip(self) -> None:
        for element in self.elements:
            element.flip()

    def location(self, geom_index: int, position: Position = Position.ON) -> Location:
        return self.elements[geom_index].get(position)

    def set_location(self, geom_index: int, location: Location,
                     position: Position = Position.ON) -> None:
        self.elements[geom_index].set(position, location)

    def set_all_locations(self, geom_index: int, location: Location) -> None:
        self.elements[geom_index].set_all_locations(location)

    def set_all_locations_if_null(self, geom_index: int, location: Location) -> None:
        self.elements[geom_index].set_all_locations_if_null(location)

    def merge(self, other: "Label") -> None:
        for mine, theirs in zip(self.elements, other.elements):
            mine.merge(theirs)

    def geometry_count(self) -> int:
        """Number of geometries this label has any location for."""
        return sum(1 for element in self.elements if not element.is_null())

    def is_null(self, geom_index: int) -> bool:
        return self.elements[geom_index].is_null()

    def is_any_null(self, geom_index: int) -> bool:
        return self.elements[geom_index].is_any_null()

    def is_area(self, geom_index: Optional[int] = None) -> bool:
        if geom_index is None:
            return self.elements[0].is_area() or self.elements[1].is_area()
        return self.elements[geom_index].is_area()

    def is_line(self, geom_index: int) -> bool:
        return self.elements[geom_index].is_line()

    def to_line(self, geom_index: int) -> None:
        if self.elements[geom_index].is_area():
            self.elements[geom_index].to_line()

    def __eq__(self, other) -> bool:
        return isinstance(other, Label) and self.elements == other.elements

    def __str__(self) -> str:
        return f"A:{self.elements[0]} B:{self.elements[1]}"

    def __repr__(self) -> str:
        return f"Label({self})"
