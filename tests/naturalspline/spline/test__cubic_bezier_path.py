"""Tests for cubic Bezier paths and their export from natural splines."""

import pytest
import torch

from naturalspline.spline import (
    CubicBezierPath,
    ExtrapolationError,
    InconsistentAxesError,
    cubic_bezier_path_evaluate,
    natural_spline_evaluate,
    natural_spline_fit,
    natural_spline_pair_to_bezier,
    natural_spline_param,
    natural_spline_path,
    natural_spline_path2,
    natural_spline_to_bezier,
)

X = [0.0, 0.7, 1.3, 2.9, 3.1, 5.0]
Y = [0.3, -1.2, 4.4, 2.0, 2.1, -0.7]


class TestCubicBezierPath:
    def test_n_segments_property(self):
        cp = torch.zeros(3, 4, 2, dtype=torch.float64)
        path = CubicBezierPath(control_points=cp, batch_size=[])

        assert path.n_segments == 3


class TestCubicBezierPathEvaluate:
    def test_straight_segment(self):
        """Evenly spaced collinear control points give a straight line."""
        cp = torch.tensor(
            [[[0.0, 0.0], [1.0, 2.0], [2.0, 4.0], [3.0, 6.0]]], dtype=torch.float64
        )
        path = CubicBezierPath(control_points=cp, batch_size=[])

        s = torch.tensor([0.0, 0.25, 0.5, 1.0], dtype=torch.float64)
        result = cubic_bezier_path_evaluate(path, s)

        expected = torch.stack([3 * s, 6 * s], dim=-1)
        torch.testing.assert_close(result, expected)

    def test_cubic_segment(self):
        cp = torch.tensor(
            [[[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0]]], dtype=torch.float64
        )
        path = CubicBezierPath(control_points=cp, batch_size=[])

        # B(0.5) = (P0 + 3 P1 + 3 P2 + P3) / 8
        result = cubic_bezier_path_evaluate(path, 0.5)

        torch.testing.assert_close(
            result, torch.tensor([0.5, 0.75], dtype=torch.float64)
        )

    def test_scalar_and_batch_shapes(self):
        path = natural_spline_to_bezier(natural_spline_fit(X, Y))

        assert cubic_bezier_path_evaluate(path, 1.5).shape == (2,)
        s = torch.rand(3, 4, dtype=torch.float64) * path.n_segments
        assert cubic_bezier_path_evaluate(path, s).shape == (3, 4, 2)

    def test_integer_parameters_hit_samples(self):
        path = natural_spline_to_bezier(natural_spline_fit(X, Y))

        s = torch.arange(len(X), dtype=torch.float64)
        result = cubic_bezier_path_evaluate(path, s)

        expected = torch.tensor(list(zip(X, Y)), dtype=torch.float64)
        torch.testing.assert_close(result, expected, atol=0, rtol=0)

    def test_out_of_range_raises(self):
        path = natural_spline_to_bezier(natural_spline_fit(X, Y))

        with pytest.raises(ExtrapolationError):
            cubic_bezier_path_evaluate(path, -0.1)
        with pytest.raises(ExtrapolationError):
            cubic_bezier_path_evaluate(path, path.n_segments + 0.1)


class TestNaturalSplineToBezier:
    def test_shape(self):
        path = natural_spline_to_bezier(natural_spline_fit(X, Y))

        assert path.control_points.shape == (len(X) - 1, 4, 2)
        assert path.control_points.dtype == torch.float64

    def test_matches_path_commands(self):
        """The tensor export and the path commands are the same numbers."""
        spline = natural_spline_fit(X, Y)

        for flip in (False, True):
            cp = natural_spline_to_bezier(spline, flip=flip).control_points.tolist()
            commands = natural_spline_path(spline, flip=flip)

            assert tuple(cp[0][0]) == commands[0].points
            for segment, command in zip(cp, commands[1:]):
                flat = tuple(v for point in segment[1:] for v in point)
                assert flat == command.points

    def test_reproduces_spline(self):
        """At the curve parameter of x the path passes through (x, spline(x))."""
        spline = natural_spline_fit(X, Y)
        path = natural_spline_to_bezier(spline)

        xt = torch.linspace(0.0, 5.0, 41, dtype=torch.float64)
        result = cubic_bezier_path_evaluate(path, natural_spline_param(spline, xt))

        expected = torch.stack([xt, natural_spline_evaluate(spline, xt)], dim=-1)
        torch.testing.assert_close(result, expected, atol=1e-10, rtol=0)


class TestNaturalSplinePairToBezier:
    T = [0.0, 1.0, 2.0, 3.0]
    PX = [0.0, 1.0, 0.0, -1.0]
    PY = [0.0, 1.0, 2.0, 1.0]

    def test_matches_path_commands(self):
        spline_x = natural_spline_fit(self.T, self.PX)
        spline_y = natural_spline_fit(self.T, self.PY)

        cp = natural_spline_pair_to_bezier(spline_x, spline_y, scale=0.5)
        commands = natural_spline_path2(spline_x, spline_y, scale=0.5)

        for segment, command in zip(cp.control_points.tolist(), commands[1:]):
            assert tuple(v for point in segment[1:] for v in point) == command.points

    def test_reproduces_both_splines(self):
        """The path at parameter t is (spline_x(t), spline_y(t))."""
        spline_x = natural_spline_fit(self.T, self.PX)
        spline_y = natural_spline_fit(self.T, self.PY)
        path = natural_spline_pair_to_bezier(spline_x, spline_y)

        t = torch.linspace(0.0, 3.0, 31, dtype=torch.float64)
        result = cubic_bezier_path_evaluate(path, t)

        expected = torch.stack(
            [
                natural_spline_evaluate(spline_x, t),
                natural_spline_evaluate(spline_y, t),
            ],
            dim=-1,
        )
        torch.testing.assert_close(result, expected, atol=1e-10, rtol=0)

    def test_inconsistent_axes(self):
        spline_x = natural_spline_fit(self.T, self.PX)
        spline_y = natural_spline_fit([0.0, 1.0, 2.0, 4.0], self.PY)

        with pytest.raises(InconsistentAxesError):
            natural_spline_pair_to_bezier(spline_x, spline_y)


class TestBezierExportGradients:
    def test_control_points_require_grad(self):
        y = torch.tensor(Y, dtype=torch.float64, requires_grad=True)

        path = natural_spline_to_bezier(natural_spline_fit(X, y))

        assert path.control_points.requires_grad
        path.control_points.sum().backward()
        assert y.grad is not None

    def test_keeps_spline_dtype(self):
        x = torch.tensor(X, dtype=torch.float32)
        y = torch.tensor(Y, dtype=torch.float32)

        path = natural_spline_to_bezier(natural_spline_fit(x, y))

        assert path.control_points.dtype == torch.float32
        assert path.control_points[0, 0].tolist() == [x[0].item(), y[0].item()]
