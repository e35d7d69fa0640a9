from ._cubic_bezier_path import CubicBezierPath
from ._cubic_bezier_path_evaluate import cubic_bezier_path_evaluate

__all__ = [
    "CubicBezierPath",
    "cubic_bezier_path_evaluate",
]
