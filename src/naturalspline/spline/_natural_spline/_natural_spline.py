"""Natural-tension cubic spline through sample points."""

from typing import Callable, Sequence, Union

from tensordict.tensorclass import tensorclass
from torch import Tensor

from ._natural_spline_evaluate import natural_spline_evaluate
from ._natural_spline_fit import natural_spline_fit


@tensorclass
class NaturalSpline:
    """Piecewise cubic Hermite curve with continuous first derivative.

    The curve passes exactly through every sample ``(knots[i], y[i])``.
    The slopes ``dydx`` are solved from the samples when the spline is
    fitted, so that adjacent cubic pieces meet with equal tangents.
    Outside ``[knots[0], knots[-1]]`` the curve continues as a straight
    line along the boundary tangent.

    A fitted spline is never modified; fit a new one when the samples
    change.

    Attributes
    ----------
    knots : Tensor
        Sample abscissas, shape (n_points,). Strictly increasing.
    y : Tensor
        Sample ordinates, shape (n_points,).
    dydx : Tensor
        Tangent slope at every sample, shape (n_points,).
    increasing_y : Tensor
        0-d bool tensor, True if every sample is above the previous one.
        Inversion is only defined for such splines.
    """

    knots: Tensor
    y: Tensor
    dydx: Tensor
    increasing_y: Tensor


def natural_spline(
    x: Union[Tensor, Sequence[float]],
    y: Union[Tensor, Sequence[float]],
) -> Callable[[Union[Tensor, float]], Union[Tensor, float]]:
    """Create a natural-tension spline interpolator from sample points.

    Parameters
    ----------
    x : Tensor or sequence of float
        Sample abscissas. Must be strictly increasing.
    y : Tensor or sequence of float
        Sample ordinates, same length as x.

    Returns
    -------
    spline : Callable
        Function that evaluates the spline at a float or a tensor of points.

    Examples
    --------
    >>> f = natural_spline([0.0, 1.0], [0.0, 2.0])
    >>> f(0.25)
    0.5
    >>> f(torch.tensor([0.0, 0.5, 1.0], dtype=torch.float64))
    tensor([0., 1., 2.], dtype=torch.float64)
    """
    fitted = natural_spline_fit(x, y)
    return lambda t: natural_spline_evaluate(fitted, t)
