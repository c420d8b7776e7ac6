"""
Exceptions raised by the relate engine.

InvalidGeometryError signals bad input and is raised before any graph is built.
TopologyError signals that an internal invariant failed during relate and
points at a bug in the engine rather than in the caller's data.
"""

from typing import Optional


class RelateError(Exception):
    """Base class for all relate engine errors."""

    def __init__(self, message: str, coordinate: Optional[tuple] = None):
        self.coordinate = coordinate
        if coordinate is not None:
            message = f"{message} [ ({coordinate[0]}, {coordinate[1]}) ]"
        super().__init__(message)


class InvalidGeometryError(RelateError, ValueError):
    """Input geometry is structurally unusable (NaN coordinate, degenerate ring, ...)."""


class TopologyError(RelateError):
    """An internal topology invariant was violated while relating two geometries."""
