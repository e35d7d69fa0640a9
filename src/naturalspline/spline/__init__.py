"""Natural-tension cubic splines for PyTorch tensors.

This module fits smooth cubic curves exactly through sample points,
evaluates and inverts them, and exports them as cubic Bezier paths.

Convenience Functions
---------------------
natural_spline
    Create a spline interpolator from data (fit + callable).

Natural Splines
---------------
natural_spline_fit
    Fit a natural spline to sample points.
natural_spline_evaluate
    Evaluate a natural spline at query points.
natural_spline_param
    Fractional sample index (curve parameter) of query points.
natural_spline_inverse
    Solve spline(x) = y for x on splines increasing in y.

Path Export
-----------
natural_spline_path
    Vector path commands for a spline.
natural_spline_path2
    Vector path commands for a parametric pair of splines.
natural_spline_to_bezier
    Cubic Bezier path tensor for a spline.
natural_spline_pair_to_bezier
    Cubic Bezier path tensor for a parametric pair of splines.
cubic_bezier_path_evaluate
    Evaluate a cubic Bezier path.
path_to_svg
    Render path commands as an SVG path string.

Data Types
----------
NaturalSpline
    Fitted natural-tension spline.
CubicBezierPath
    Chain of cubic Bezier segments.
PathCommand
    Single move or cubic curve command.

Exceptions
----------
SplineError
    Base exception for spline operations.
InvalidInputError
    Sample points a spline cannot be fitted to.
NotIncreasingError
    Inversion of a spline not increasing in y.
InconsistentAxesError
    Parametric spline pair with different parameter samples.
ExtrapolationError
    Bezier path parameter outside the path.

Warnings
--------
InverseConvergenceWarning
    Inversion stopped at its iteration limit.
"""

from ._cubic_bezier_path import CubicBezierPath, cubic_bezier_path_evaluate
from ._extrapolation_error import ExtrapolationError
from ._inconsistent_axes_error import InconsistentAxesError
from ._invalid_input_error import InvalidInputError
from ._inverse_convergence_warning import InverseConvergenceWarning
from ._natural_spline import (
    NaturalSpline,
    PathCommand,
    natural_spline,
    natural_spline_evaluate,
    natural_spline_fit,
    natural_spline_inverse,
    natural_spline_pair_to_bezier,
    natural_spline_param,
    natural_spline_path,
    natural_spline_path2,
    natural_spline_to_bezier,
    path_to_svg,
)
from ._not_increasing_error import NotIncreasingError
from ._spline_error import SplineError

__all__ = [
    "CubicBezierPath",
    "ExtrapolationError",
    "InconsistentAxesError",
    "InvalidInputError",
    "InverseConvergenceWarning",
    "NaturalSpline",
    "NotIncreasingError",
    "PathCommand",
    "SplineError",
    "cubic_bezier_path_evaluate",
    "natural_spline",
    "natural_spline_evaluate",
    "natural_spline_fit",
    "natural_spline_inverse",
    "natural_spline_pair_to_bezier",
    "natural_spline_param",
    "natural_spline_path",
    "natural_spline_path2",
    "natural_spline_to_bezier",
    "path_to_svg",
]
