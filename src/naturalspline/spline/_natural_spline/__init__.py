"""Natural-tension cubic spline through sample points."""

from ._natural_spline import NaturalSpline, natural_spline
from ._natural_spline_evaluate import natural_spline_evaluate
from ._natural_spline_fit import natural_spline_fit
from ._natural_spline_inverse import natural_spline_inverse
from ._natural_spline_param import natural_spline_param
from ._natural_spline_path import (
    PathCommand,
    natural_spline_pair_to_bezier,
    natural_spline_path,
    natural_spline_path2,
    natural_spline_to_bezier,
    path_to_svg,
)

__all__ = [
    "NaturalSpline",
    "PathCommand",
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
