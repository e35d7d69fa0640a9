from ._spline_error import SplineError


class InvalidInputError(SplineError):
    """Raised for sample points a spline cannot be fitted to.

    Too few points, different numbers of abscissas and ordinates,
    non-increasing abscissas, or non-finite values.
    """

    pass
