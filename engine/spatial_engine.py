"""
Abstract interface of a spatial predicate engine.

Engines evaluate the named spatial predicates between two geometries; the
representation of a geometry is up to the concrete engine.
"""

from abc import ABC, abstractmethod
from typing import Any


class SpatialPredicateEngine(ABC):
    """
    Base class for spatial predicate engines.

    Concrete engines implement the four core predicates and provide a name.
    The remaining predicates have defaults expressed through the core ones
    and may be overridden with direct implementations.
    """

    @abstractmethod
    def intersects(self, a: Any, b: Any) -> bool:
        """Test if a and b share at least one point."""

    @abstractmethod
    def within(self, a: Any, b: Any) -> bool:
        """Test if a lies within b."""

    @abstractmethod
    def contains(self, a: Any, b: Any) -> bool:
        """Test if a contains b."""

    @abstractmethod
    def touches(self, a: Any, b: Any) -> bool:
        """Test if a and b meet only in their boundaries."""

    def disjoint(self, a: Any, b: Any) -> bool:
        return not self.intersects(a, b)

    @abstractmethod
    def get_name(self) -> str:
        """Return the name of this engine."""
