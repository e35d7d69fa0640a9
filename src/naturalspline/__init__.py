"""naturalspline: natural-tension cubic splines on PyTorch tensors."""

from . import (
    search,
    spline,
)

__all__ = [
    "search",
    "spline",
]

__version__ = "0.1.0"
