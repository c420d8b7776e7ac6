"""
Vector geometry conversion and validation module.
"""

from .converter import (
    convert_geometry,
    convert_point,
    to_shapely,
)

__all__ = [
    "convert_geometry",
    "convert_point",
    "to_shapely",
]
