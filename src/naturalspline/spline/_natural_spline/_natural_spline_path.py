"""Export of natural splines as cubic Bezier paths."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import torch
from torch import Tensor

from .._inconsistent_axes_error import InconsistentAxesError

if TYPE_CHECKING:
    from .._cubic_bezier_path import CubicBezierPath
    from ._natural_spline import NaturalSpline


class PathCommand(NamedTuple):
    """One vector path command.

    ``"M"`` (move to) carries one point ``(x, y)``, ``"C"`` (cubic curve
    to) carries ``(x1, y1, x2, y2, x, y)``: two control points and the
    end point.
    """

    command: str
    points: tuple[float, ...]


def _control_points(
    t: Tensor,
    x: Tensor,
    dxdt: Tensor,
    y: Tensor,
    dydt: Tensor,
    scale: float = 1.0,
) -> Tensor:
    """Bezier control points of the Hermite curve t -> (x(t), y(t)).

    Between parameter samples l and c, with h = t_c - t_l,

        P1 = P_l + (dxdt_l, dydt_l) * h/3
        P2 = P_c - (dxdt_c, dydt_c) * h/3

    Returns a tensor of shape (n_points - 1, 4, 2).
    """
    h3 = (t[1:] - t[:-1]) / 3

    p_0 = torch.stack([x[:-1], y[:-1]], dim=-1)
    p_1 = torch.stack(
        [x[:-1] + dxdt[:-1] * h3, y[:-1] + dydt[:-1] * h3], dim=-1
    )
    p_2 = torch.stack(
        [x[1:] - dxdt[1:] * h3, y[1:] - dydt[1:] * h3], dim=-1
    )
    p_3 = torch.stack([x[1:], y[1:]], dim=-1)

    return scale * torch.stack([p_0, p_1, p_2, p_3], dim=1)


def _spline_control_points(spline: NaturalSpline, flip: bool) -> Tensor:
    knots = spline.knots
    control_points = _control_points(
        knots, knots, torch.ones_like(knots), spline.y, spline.dydx
    )
    if flip:
        control_points = control_points.flip(-1)
    return control_points


def _pair_control_points(
    spline_x: NaturalSpline,
    spline_y: NaturalSpline,
    scale: float,
) -> Tensor:
    t = spline_x.knots
    other = spline_y.knots
    if t.shape[0] != other.shape[0]:
        raise InconsistentAxesError(
            f"Inconsistent spline lengths: {t.shape[0]} and {other.shape[0]}"
        )
    mismatch = torch.nonzero(t != other.to(t.device))
    if mismatch.numel() > 0:
        index = int(mismatch[0].item())
        raise InconsistentAxesError(
            f"Inconsistent spline parameters at index {index}: "
            f"{t[index].item()} and {other[index].item()}"
        )

    return _control_points(
        t,
        spline_x.y,
        spline_x.dydx,
        spline_y.y.to(t.device),
        spline_y.dydx.to(t.device),
        scale,
    )


def _commands(control_points: Tensor) -> list[PathCommand]:
    segments = control_points.tolist()
    commands = [PathCommand("M", tuple(segments[0][0]))]
    for _, (x_1, y_1), (x_2, y_2), (x_3, y_3) in segments:
        commands.append(PathCommand("C", (x_1, y_1, x_2, y_2, x_3, y_3)))
    return commands


def _bezier_path(control_points: Tensor) -> CubicBezierPath:
    from .._cubic_bezier_path import CubicBezierPath

    return CubicBezierPath(control_points=control_points, batch_size=[])


def natural_spline_path(
    spline: NaturalSpline,
    flip: bool = False,
) -> list[PathCommand]:
    """
    Convert a natural spline into vector path commands.

    The path starts with a move to the first sample followed by one cubic
    curve command per following sample. Between samples l and c, with
    h = x_c - x_l, the Bezier control points are

        P1 = (x_l + h/3, y_l + k_l * h/3)
        P2 = (x_c - h/3, y_c - k_c * h/3)

    which describe exactly the Hermite cubic of the spline.

    Parameters
    ----------
    spline : NaturalSpline
        Fitted spline.
    flip : bool
        If True, swap x and y of every point. Default is False.

    Returns
    -------
    list of PathCommand
        One ``"M"`` command and ``n_points - 1`` ``"C"`` commands.

    Examples
    --------
    >>> spline = natural_spline_fit([0.0, 3.0], [0.0, 3.0])
    >>> path_to_svg(natural_spline_path(spline))
    'M0 0C1 1 2 2 3 3'
    """
    return _commands(_spline_control_points(spline, flip))


def natural_spline_path2(
    spline_x: NaturalSpline,
    spline_y: NaturalSpline,
    scale: float = 1.0,
) -> list[PathCommand]:
    """
    Convert a parametric spline pair into vector path commands.

    ``spline_x`` maps the parameter t to x and ``spline_y`` maps the same
    t to y; both must have been fitted over identical parameter samples.
    Between parameter samples l and c, with h = t_c - t_l,

        P1 = (x_l + kx_l * h/3, y_l + ky_l * h/3)
        P2 = (x_c - kx_c * h/3, y_c - ky_c * h/3)

    Parameters
    ----------
    spline_x : NaturalSpline
        Spline for the x coordinate.
    spline_y : NaturalSpline
        Spline for the y coordinate.
    scale : float
        Factor applied to every coordinate. Default is 1.0.

    Returns
    -------
    list of PathCommand
        One ``"M"`` command and ``n_points - 1`` ``"C"`` commands.

    Raises
    ------
    InconsistentAxesError
        If the two splines have different parameter samples.
    """
    return _commands(_pair_control_points(spline_x, spline_y, scale))


def natural_spline_to_bezier(
    spline: NaturalSpline,
    flip: bool = False,
) -> CubicBezierPath:
    """
    Convert a natural spline into a cubic Bezier path.

    Returns the control points of ``natural_spline_path`` as a tensor. As
    the control abscissas are evenly spaced, the path parameter equals the
    spline's curve parameter, i.e. the path evaluated at
    ``natural_spline_param(spline, x)`` is ``(x, spline(x))``.
    """
    return _bezier_path(_spline_control_points(spline, flip))


def natural_spline_pair_to_bezier(
    spline_x: NaturalSpline,
    spline_y: NaturalSpline,
    scale: float = 1.0,
) -> CubicBezierPath:
    """Convert a parametric spline pair into a cubic Bezier path.

    Same control points as ``natural_spline_path2``.
    """
    return _bezier_path(_pair_control_points(spline_x, spline_y, scale))


def _format_number(value: float) -> str:
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def path_to_svg(commands: list[PathCommand]) -> str:
    """Render path commands as an SVG path ``d`` attribute."""
    return "".join(
        command.command + " ".join(_format_number(v) for v in command.points)
        for command in commands
    )
