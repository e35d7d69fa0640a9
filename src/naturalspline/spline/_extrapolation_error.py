from ._spline_error import SplineError


class ExtrapolationError(SplineError):
    """Raised when a Bezier path parameter is outside the path's domain."""

    pass
