"""Natural spline inversion with safeguarded Newton iteration."""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from .._inverse_convergence_warning import InverseConvergenceWarning
from .._not_increasing_error import NotIncreasingError
from ._queries import flatten_queries, locate, restore_queries

if TYPE_CHECKING:
    from ._natural_spline import NaturalSpline


def _segment_value(
    u: Tensor, y_l: Tensor, y_c: Tensor, a: Tensor, b: Tensor
) -> Tensor:
    q = 1 - u
    return q * (y_l + u * (a * q + b * u)) + u * y_c


def _segment_slope(
    u: Tensor, y_l: Tensor, y_c: Tensor, a: Tensor, b: Tensor
) -> Tensor:
    # d/du of _segment_value
    q = 1 - u
    return (y_c - y_l) + q * (a * q - 2 * u * (a - b)) - b * u * u


def _solve_segment(
    y_l: Tensor,
    y_c: Tensor,
    a: Tensor,
    b: Tensor,
    target: Tensor,
    max_error: float,
    maxiter: int,
) -> Tensor:
    """Solve p(u) = target for u in [0, 1], one segment per element.

    p(u) = q * (y_l + u * (a*q + b*u)) + u * y_c with q = 1 - u and
    y_l < target < y_c. Every element keeps a bracket [u_l, u_r] around
    its root; a Newton step is taken only while the error keeps halving
    and the step lands strictly inside the bracket, otherwise the bracket
    is bisected. Elements stop moving once their error is below
    ``max_error``.

    Runs without autograd; the result carries no gradient.
    """
    with torch.no_grad():
        dy = y_c - y_l
        u = (target - y_l) / dy
        u_l = torch.zeros_like(u)
        u_r = torch.ones_like(u)
        expected_error = dy
        converged = torch.zeros_like(u, dtype=torch.bool)

        for _ in range(maxiter):
            residual = _segment_value(u, y_l, y_c, a, b) - target
            u_r = torch.where(residual > 0, u, u_r)
            u_l = torch.where(residual > 0, u_l, u)
            error = torch.abs(residual)

            converged = converged | (error < max_error)
            if torch.all(converged):
                return u

            slope = _segment_slope(u, y_l, y_c, a, b)
            newton = u - residual / slope
            use_newton = (
                (error < expected_error)
                & (slope != 0)
                & (u_l < newton)
                & (newton < u_r)
            )

            step = torch.where(use_newton, newton, 0.5 * (u_l + u_r))
            expected_error = torch.where(use_newton, 0.5 * error, error)
            u = torch.where(converged, u, step)

    n_failed = int((~converged).sum().item())
    if n_failed:
        warnings.warn(
            f"Spline inversion did not reach max_error={max_error} within "
            f"{maxiter} iterations for {n_failed} of {u.numel()} values; "
            f"returning the current estimates.",
            InverseConvergenceWarning,
        )
    return u


def _attach_implicit_grad(
    u: Tensor,
    y_l: Tensor,
    y_c: Tensor,
    a: Tensor,
    b: Tensor,
    target: Tensor,
) -> Tensor:
    """Give the solver result the gradient of the root of p(u) = target.

    By the implicit function theorem du = (d target - dp) / p'(u). The
    correction below is zero in value and carries exactly that gradient.
    """
    slope = _segment_slope(u, y_l, y_c, a, b)
    eps = torch.finfo(slope.dtype).eps * 10
    safe_slope = torch.where(slope == 0, eps, slope)

    correction = (target - _segment_value(u, y_l, y_c, a, b)) / safe_slope
    return u + (correction - correction.detach())


def natural_spline_inverse(
    spline: NaturalSpline,
    y: Union[Tensor, float],
    max_error: float = 1e-8,
    maxiter: int = 100,
) -> Union[Tensor, float]:
    """
    Find abscissas at which a natural spline takes the given values.

    Only splines fitted to samples with increasing y can be inverted. The
    curve itself may still wiggle between samples, in which case any one
    of the solutions inside the located interval is returned.

    Parameters
    ----------
    spline : NaturalSpline
        Fitted spline with ``increasing_y``.
    y : Tensor or float
        Target values.
    max_error : float
        Stop once ``|spline(x) - y|`` is below this. Default is 1e-8.
    maxiter : int
        Maximum number of iterations. Default is 100.

    Returns
    -------
    Tensor or float
        Abscissas, shaped like ``y``.

    Raises
    ------
    NotIncreasingError
        If the spline samples are not increasing in y.

    Warns
    -----
    InverseConvergenceWarning
        If some target was not reached within ``maxiter`` iterations.

    Notes
    -----
    Outside the sample range the inverse of the linear extension is
    returned; a zero boundary slope gives a signed infinity. Inside, the
    interval containing the target is found by bisection over the
    samples, then the cubic is solved for its local parameter with
    Newton's method, falling back to bisection of a bracket whenever a
    Newton step would leave the bracket or the error stops halving.
    Bisection alone halves the bracket every iteration, so the loop
    converges even near inflection points or flat segments.

    **Autograd Support**: The iteration itself is not differentiated.
    Gradients with respect to ``y`` and the spline's tensors come from
    implicit differentiation of spline(x) = y at the solution, so
    ``dx/dy = 1 / spline'(x)``.
    """
    if not spline.increasing_y:
        raise NotIncreasingError("Function is not increasing in y")

    knots = spline.knots
    y_vals = spline.y
    derivatives = spline.dydx
    n_points = knots.shape[0]

    target, query_shape = flatten_queries(y, y_vals)

    i = locate(y_vals, target)
    ic = torch.clamp(i, max=n_points - 1)
    hit = (i < n_points) & (y_vals[ic] == target)
    interior = ~hit & (i > 0) & (i < n_points)

    before = (target - y_vals[0]) / derivatives[0] + knots[0]
    after = (target - y_vals[-1]) / derivatives[-1] + knots[-1]

    il = torch.clamp(i - 1, 0, n_points - 2)
    x_l = knots[il]
    h = knots[il + 1] - x_l
    y_l = y_vals[il]
    y_c = y_vals[il + 1]
    dy = y_c - y_l
    a = derivatives[il] * h - dy
    b = dy - derivatives[il + 1] * h

    # Only interior targets are iterated on.
    u_inner = _solve_segment(
        y_l[interior].detach(),
        y_c[interior].detach(),
        a[interior].detach(),
        b[interior].detach(),
        target[interior].detach(),
        max_error,
        maxiter,
    )
    u = torch.zeros_like(target).masked_scatter(interior, u_inner)
    # Other elements sit at u = 0, where p(0) = y_l.
    u = _attach_implicit_grad(
        u, y_l, y_c, a, b, torch.where(interior, target, y_l)
    )
    inner = x_l + u * h

    x = torch.where(
        hit,
        knots[ic],
        torch.where(i == 0, before, torch.where(i >= n_points, after, inner)),
    )

    return restore_queries(x, query_shape, y)
