"""Cubic Bezier path evaluation using De Casteljau's algorithm."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from .._extrapolation_error import ExtrapolationError

if TYPE_CHECKING:
    from ._cubic_bezier_path import CubicBezierPath


def cubic_bezier_path_evaluate(
    path: CubicBezierPath,
    s: Union[Tensor, float],
) -> Tensor:
    """
    Evaluate a cubic Bezier path at path parameters.

    Parameters
    ----------
    path : CubicBezierPath
        Path with control points of shape (n_segments, 4, 2).
    s : Tensor or float
        Path parameters in ``[0, n_segments]``, shape (*query_shape).

    Returns
    -------
    points : Tensor
        Points on the path, shape (*query_shape, 2).

    Raises
    ------
    ExtrapolationError
        If any parameter is outside ``[0, n_segments]``.

    Notes
    -----
    Segment ``j = min(floor(s), n_segments - 1)`` is evaluated at the
    local parameter ``t = s - j``, so ``s = n_segments`` is the end of the
    last segment. For every segment, with P_0, ..., P_3 its control points:

    1. Set b_i^(0) = P_i for i = 0, ..., 3
    2. For r = 1, 2, 3:
       b_i^(r) = (1-t) * b_i^(r-1) + t * b_{i+1}^(r-1)  for i = 0, ..., 3-r
    3. Result: B(t) = b_0^(3)
    """
    control_points = path.control_points
    n_segments = control_points.shape[0]

    if not isinstance(s, Tensor):
        s = torch.tensor(
            s, dtype=control_points.dtype, device=control_points.device
        )

    is_scalar = s.dim() == 0
    if is_scalar:
        s = s.unsqueeze(0)

    query_shape = s.shape
    s_flat = s.flatten().to(control_points.dtype)

    if torch.any(s_flat < 0) or torch.any(s_flat > n_segments):
        raise ExtrapolationError(
            f"Path parameters outside [0, {n_segments}]"
        )

    segment_idx = torch.clamp(torch.floor(s_flat).long(), 0, n_segments - 1)
    t = (s_flat - segment_idx.to(s_flat.dtype)).view(-1, 1, 1)

    # (n_points, 4, 2)
    work = control_points[segment_idx]
    for r in range(1, 4):
        work = (1 - t) * work[:, : 4 - r] + t * work[:, 1 : 5 - r]

    result = work[:, 0].view(*query_shape, 2)

    if is_scalar:
        result = result.squeeze(0)

    return result
