"""Natural-tension spline fitting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence, Union

import torch
from torch import Tensor

from .._invalid_input_error import InvalidInputError

if TYPE_CHECKING:
    from ._natural_spline import NaturalSpline


def _as_samples(
    values: Union[Tensor, Sequence[float]],
    name: str,
    device: Optional[torch.device] = None,
) -> Tensor:
    """Copy sample values into a fresh one-dimensional floating tensor.

    Floating tensors keep their dtype and autograd graph; sequences and
    integer tensors become float64.
    """
    if isinstance(values, Tensor):
        samples = values if device is None else values.to(device=device)
        if not torch.is_floating_point(samples):
            samples = samples.to(torch.float64)
    else:
        samples = torch.as_tensor(values, dtype=torch.float64, device=device)

    if samples.dim() != 1:
        raise InvalidInputError(
            f"{name} must be one-dimensional, got shape {tuple(samples.shape)}"
        )

    return samples.clone()


def _solve_slopes(x: Tensor, y: Tensor) -> Tensor:
    """Solve for the tangent slopes k[0], ..., k[n] of the spline.

    With s[i] = 1 / (x[i+1] - x[i]) and r[i] = 3 * (y[i+1] - y[i]) * s[i]^2
    the slopes satisfy

        2*s[0]*k[0] + s[0]*k[1] = r[0]
        s[i-1]*k[i-1] + 2*(s[i-1] + s[i])*k[i] + s[i]*k[i+1] = r[i-1] + r[i]
        s[n-1]*k[n-1] + 2*s[n-1]*k[n] = r[n-1]

    Forward elimination finds a[i], b[i] with k[i-1] = a[i]*k[i] + b[i]
    for i = 1..n, back substitution then recovers k from k[n].
    """
    n = x.shape[0] - 1

    s = 1 / (x[1:] - x[:-1])
    r = 3 * (y[1:] - y[:-1]) * s * s

    # Lists of 0-d tensors keep the recurrence free of in-place updates.
    a = [None, torch.full_like(s[0], -0.5)]
    b = [None, r[0] / (2 * s[0])]

    for i in range(1, n):
        d = s[i - 1] * a[i] + 2 * (s[i] + s[i - 1])
        a.append(-s[i] / d)
        b.append((r[i - 1] + r[i] - s[i - 1] * b[i]) / d)

    k = [None] * (n + 1)
    k[n] = (r[n - 1] - s[n - 1] * b[n]) / (s[n - 1] * (2 + a[n]))
    for i in range(n, 0, -1):
        k[i - 1] = a[i] * k[i] + b[i]

    return torch.stack(k)


def natural_spline_fit(
    x: Union[Tensor, Sequence[float]],
    y: Union[Tensor, Sequence[float]],
) -> NaturalSpline:
    """
    Fit a natural-tension cubic spline through sample points.

    Parameters
    ----------
    x : Tensor or sequence of float
        Sample abscissas, shape (n_points,). Must be strictly increasing.
    y : Tensor or sequence of float
        Sample ordinates, shape (n_points,).

    Returns
    -------
    NaturalSpline
        Fitted spline on the device of ``x`` with the common floating dtype
        of ``x`` and ``y`` (float64 for sequences). Inputs are copied;
        later in-place changes to ``x`` or ``y`` do not affect it, while
        gradients still flow back to them.

    Raises
    ------
    InvalidInputError
        If there are fewer than 2 points, x and y differ in length, x is
        not strictly increasing, or any value is not finite.

    Notes
    -----
    On every interval the curve is the cubic Hermite polynomial through
    the two end samples with end slopes ``dydx``. The slopes make the
    first derivative continuous at interior samples and the second
    derivative vanish at both ends, which leads to a tridiagonal system
    solved in O(n). With only two samples the curve is the straight line
    through them.
    """
    knots = _as_samples(x, "x")
    values = _as_samples(y, "y", device=knots.device)

    dtype = torch.promote_types(knots.dtype, values.dtype)
    knots = knots.to(dtype)
    values = values.to(dtype)

    n_points = knots.shape[0]

    if n_points == 1:
        raise InvalidInputError("Need at least 2 points: only a single point provided")
    if n_points < 2:
        raise InvalidInputError(f"Need at least 2 points, got {n_points}")
    if values.shape[0] != n_points:
        raise InvalidInputError(
            f"Different number of points: {n_points} x values "
            f"and {values.shape[0]} y values"
        )
    if not (torch.all(torch.isfinite(knots)) and torch.all(torch.isfinite(values))):
        raise InvalidInputError("Sample values must be finite")

    steps = knots[1:] - knots[:-1]
    if not torch.all(steps > 0):
        index = int(torch.nonzero(steps <= 0)[0].item())
        raise InvalidInputError(
            f"Non-increasing x values: x[{index + 1}] = {knots[index + 1].item()} "
            f"follows x[{index}] = {knots[index].item()}"
        )

    if n_points == 2:
        slope = (values[1] - values[0]) / (knots[1] - knots[0])
        dydx = torch.stack([slope, slope])
    else:
        dydx = _solve_slopes(knots, values)

    from ._natural_spline import NaturalSpline

    return NaturalSpline(
        knots=knots,
        y=values,
        dydx=dydx,
        increasing_y=torch.all(values[1:] > values[:-1]),
        batch_size=[],
    )
