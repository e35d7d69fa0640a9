"""Curve parameter of a natural spline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from ._queries import flatten_queries, locate, restore_queries

if TYPE_CHECKING:
    from ._natural_spline import NaturalSpline


def natural_spline_param(
    spline: NaturalSpline,
    t: Union[Tensor, float],
) -> Union[Tensor, float]:
    """
    Find the curve parameter for query abscissas.

    The curve parameter is the fractional sample index: ``param(x[i]) == i``
    for every sample, linear in between, and linear along the first or
    last interval outside the sample range.

    Parameters
    ----------
    spline : NaturalSpline
        Fitted spline from natural_spline_fit.
    t : Tensor or float
        Query abscissas.

    Returns
    -------
    Tensor or float
        Curve parameter, shaped like ``t``.
    """
    knots = spline.knots
    n_points = knots.shape[0]

    t_flat, query_shape = flatten_queries(t, knots)

    i = locate(knots, t_flat)
    il = torch.clamp(i - 1, 0, n_points - 2)

    x_l = knots[il]
    inner = il.to(knots.dtype) + (t_flat - x_l) / (knots[il + 1] - x_l)

    last = n_points - 1
    after = last + (t_flat - knots[last]) / (knots[last] - knots[last - 1])

    s = torch.where(i >= n_points, after, inner)

    return restore_queries(s, query_shape, t)
