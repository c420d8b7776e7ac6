"""
Floating precision model for the relate engine.

The engine computes in Python floats, but coordinates are rounded through the
configured numpy dtype when they enter the graph, and the endpoint snapping
tolerance is derived from that dtype's machine epsilon.
"""

from typing import Union

import numpy as np

SUPPORTED_DTYPES: dict[str, type] = {
    "float64": np.float64,
    "float32": np.float32,
}


class Precision:
    """
    Numeric precision used for one relate computation.

    Args:
        dtype: Name of the floating type ("float64" or "float32")
        snap_factor: Snap tolerance in multiples of the dtype's epsilon,
            scaled by the magnitude of the coordinates involved

    Example:
        >>> precision = Precision("float32")
        >>> precision.round(0.1)
        0.10000000149011612
    """

    def __init__(self, dtype: str = "float64", snap_factor: float = 4.0):
        if dtype not in SUPPORTED_DTYPES:
            raise ValueError(f"Unsupported precision: {dtype}")
        if snap_factor < 0:
            raise ValueError(f"snap_factor must be >= 0, got {snap_factor}")
        self.dtype_name = dtype
        self.dtype = SUPPORTED_DTYPES[dtype]
        self.eps = float(np.finfo(self.dtype).eps)
        self.snap_factor = float(snap_factor)

    def round(self, value: Union[float, int]) -> float:
        """Round a scalar through the precision's dtype."""
        return float(self.dtype(value))

    def snap_tolerance(self, scale: float) -> float:
        """Absolute snapping distance for coordinates of magnitude ``scale``."""
        return self.snap_factor * self.eps * max(1.0, abs(scale))

    def __repr__(self) -> str:
        return f"Precision({self.dtype_name!r}, snap_factor={self.snap_factor})"


DEFAULT_PRECISION = Precision()
