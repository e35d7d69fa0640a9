from ._spline_error import SplineError


class NotIncreasingError(SplineError):
    """Raised when inverting a spline whose samples do not increase in y."""

    pass
