class InverseConvergenceWarning(UserWarning):
    """Warning emitted when spline inversion stops at its iteration limit."""

    pass
