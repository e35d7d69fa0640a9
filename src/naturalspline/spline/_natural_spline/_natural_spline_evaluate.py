"""Natural spline evaluation in Bezier form."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from ._queries import flatten_queries, locate, restore_queries

if TYPE_CHECKING:
    from ._natural_spline import NaturalSpline


def natural_spline_evaluate(
    spline: NaturalSpline,
    t: Union[Tensor, float],
) -> Union[Tensor, float]:
    """
    Evaluate a natural spline at query points.

    On the interval [x_l, x_c] with u = (t - x_l) / h, h = x_c - x_l,
    dy = y_c - y_l and q = 1 - u the cubic is written as

        p(t) = q * (y_l + u * (a*q + b*u)) + u * y_c

    with a = k_l*h - dy and b = dy - k_c*h. This is the Hermite cubic
    rearranged around the Bezier control values, and it returns y_l and
    y_c exactly at u = 0 and u = 1.

    Outside the sample range the spline continues along the tangent at
    the nearest end sample.

    Parameters
    ----------
    spline : NaturalSpline
        Fitted spline from natural_spline_fit.
    t : Tensor or float
        Query abscissas. A tensor of any shape or a single number.

    Returns
    -------
    y : Tensor or float
        Spline values shaped like ``t`` with the spline's dtype and
        device, or a float for a numeric ``t``. Differentiable with
        respect to ``t`` and the spline's samples.
    """
    knots = spline.knots
    y_vals = spline.y
    derivatives = spline.dydx
    n_points = knots.shape[0]

    t_flat, query_shape = flatten_queries(t, knots)

    # i is the first sample at or right of t; segment il..il+1 contains t.
    i = locate(knots, t_flat)
    il = torch.clamp(i - 1, 0, n_points - 2)

    x_l = knots[il]
    h = knots[il + 1] - x_l
    y_l = y_vals[il]
    y_c = y_vals[il + 1]
    dy = y_c - y_l

    u = (t_flat - x_l) / h
    a = derivatives[il] * h - dy
    b = dy - derivatives[il + 1] * h
    q = 1 - u
    inner = q * (y_l + u * (a * q + b * u)) + u * y_c

    before = derivatives[0] * (t_flat - knots[0]) + y_vals[0]
    after = derivatives[-1] * (t_flat - knots[-1]) + y_vals[-1]

    y = torch.where(i == 0, before, torch.where(i >= n_points, after, inner))

    return restore_queries(y, query_shape, t)
