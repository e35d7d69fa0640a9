"""Piecewise cubic Bezier path representation."""

from tensordict.tensorclass import tensorclass
from torch import Tensor


@tensorclass
class CubicBezierPath:
    """Chain of 2-D cubic Bezier segments.

    Segment ``j`` runs from ``control_points[j, 0]`` to
    ``control_points[j, 3]`` and starts where segment ``j - 1`` ends. The
    path parameter ``s`` ranges from 0 to ``n_segments``: its integer part
    selects the segment and its fractional part is the local Bezier
    parameter.

    Attributes
    ----------
    control_points : Tensor
        Control points ``(P0, P1, P2, P3)`` of every segment, shape
        (n_segments, 4, 2).
    """

    control_points: Tensor

    @property
    def n_segments(self) -> int:
        """Return the number of cubic segments."""
        return self.control_points.shape[0]
