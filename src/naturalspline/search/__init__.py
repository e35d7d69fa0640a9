"""Search primitives shared by the spline queries.

Functions
---------
find_first_good
    Bisect an index range for the first index where a monotonic
    predicate holds.
"""

from ._find_first_good import find_first_good

__all__ = [
    "find_first_good",
]
