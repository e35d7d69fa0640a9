from ._spline_error import SplineError


class InconsistentAxesError(SplineError):
    """Raised when a parametric spline pair does not share its parameter axis."""

    pass
