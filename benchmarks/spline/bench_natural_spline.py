"""Benchmark natural spline fitting, evaluation and inversion.

Fitting is a single linear pass over the samples; evaluation and inversion
add a binary search per query, so times should grow as n and log(n).
"""

import time

import torch

from naturalspline.spline import (
    natural_spline_evaluate,
    natural_spline_fit,
    natural_spline_inverse,
)


def _samples(n_points: int):
    x = torch.cumsum(torch.rand(n_points, dtype=torch.float64) + 0.1, dim=0)
    y = torch.cumsum(torch.rand(n_points, dtype=torch.float64) + 0.1, dim=0)
    return x, y


def _time(fn, n_iterations: int) -> float:
    # Warmup
    for _ in range(3):
        fn()

    start = time.perf_counter()
    for _ in range(n_iterations):
        fn()

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def benchmark_spline(
    n_points: int, n_queries: int = 256, n_iterations: int = 10
) -> tuple[float, float, float]:
    """Benchmark the spline operations at a given number of samples.

    Parameters
    ----------
    n_points : int
        Number of sample points.
    n_queries : int
        Number of query points for evaluation and inversion.
    n_iterations : int
        Number of iterations for timing.

    Returns
    -------
    tuple of float
        Average fit, evaluate and inverse times in milliseconds.
    """
    x, y = _samples(n_points)
    spline = natural_spline_fit(x, y)

    xt = x[0] + (x[-1] - x[0]) * torch.rand(n_queries, dtype=torch.float64)
    yt = y[0] + (y[-1] - y[0]) * torch.rand(n_queries, dtype=torch.float64)

    ms_fit = _time(lambda: natural_spline_fit(x, y), n_iterations)
    ms_evaluate = _time(lambda: natural_spline_evaluate(spline, xt), n_iterations)
    ms_inverse = _time(lambda: natural_spline_inverse(spline, yt), n_iterations)

    return ms_fit, ms_evaluate, ms_inverse


def main():
    """Run natural spline benchmarks across sample counts."""
    sizes = [8, 64, 512, 4096]

    print("Natural Spline Benchmark (256 queries)")
    print("=" * 62)
    print(
        f"{'Points':>8} {'Fit (ms)':>16} {'Evaluate (ms)':>16} {'Inverse (ms)':>16}"
    )
    print("-" * 62)

    for n_points in sizes:
        ms_fit, ms_evaluate, ms_inverse = benchmark_spline(n_points)
        print(
            f"{n_points:>8} {ms_fit:>16.3f} {ms_evaluate:>16.3f} {ms_inverse:>16.3f}"
        )

    print("=" * 62)


if __name__ == "__main__":
    main()
