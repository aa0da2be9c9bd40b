"""Unit tests for the Catmull-Rom curve model."""

from __future__ import annotations

import unittest

import numpy as np

from coastersim.track import (
    ControlPoint,
    build_circular_arc_layout,
    build_curve,
    build_straight_layout,
)
from coastersim.utils.exceptions import InvalidCurveError, TrackDataError
from tests.helpers import sample_control_points, sample_curve


class CurveModelTests(unittest.TestCase):
    """Curve construction, evaluation, and length checks."""

    def test_endpoints_match_first_and_last_control_points_exactly(self) -> None:
        """Return the end control points verbatim at ``u = 0`` and ``u = 1``."""
        points = sample_control_points()
        for curve_type in ("centripetal", "chordal", "uniform"):
            curve = build_curve(points, curve_type=curve_type)
            self.assertTrue(np.array_equal(curve.point_at(0.0), points[0].position))
            self.assertTrue(np.array_equal(curve.point_at(1.0), points[-1].position))

    def test_curve_passes_through_interior_control_points(self) -> None:
        """Place control point ``j`` at parameter ``j / (n - 1)``."""
        points = sample_control_points()
        curve = build_curve(points)
        segment_count = len(points) - 1
        for idx, point in enumerate(points):
            np.testing.assert_allclose(
                curve.point_at(idx / segment_count), point.position, atol=1e-9
            )

    def test_dense_sampling_has_no_discontinuities(self) -> None:
        """Bound the displacement between neighbouring dense samples."""
        curve = sample_curve()
        count = 20_001
        samples = curve.sample_points(count)
        steps = np.linalg.norm(np.diff(samples, axis=0), axis=1)
        mean_step = curve.total_length / (count - 1)
        self.assertLess(float(np.max(steps)), 5.0 * mean_step)

    def test_out_of_range_parameters_are_clamped(self) -> None:
        """Evaluate parameters outside ``[0, 1]`` at the nearest end."""
        curve = sample_curve()
        np.testing.assert_array_equal(curve.point_at(-0.5), curve.point_at(0.0))
        np.testing.assert_array_equal(curve.point_at(1.5), curve.point_at(1.0))
        np.testing.assert_array_equal(curve.tangent_at(2.0), curve.tangent_at(1.0))

    def test_tangents_are_unit_vectors(self) -> None:
        """Normalize tangents everywhere along the curve."""
        curve = sample_curve()
        for u in np.linspace(0.0, 1.0, 101):
            self.assertAlmostEqual(float(np.linalg.norm(curve.tangent_at(float(u)))), 1.0, places=12)

    def test_straight_curve_has_exact_length_and_axis_tangent(self) -> None:
        """Build a two-point straight with uniform parametrization."""
        curve = build_curve(build_straight_layout(length=100.0, height=3.0))

        self.assertAlmostEqual(curve.total_length, 100.0, delta=1e-9)
        np.testing.assert_allclose(curve.tangent_at(0.37), [1.0, 0.0, 0.0], atol=1e-12)
        np.testing.assert_allclose(curve.point_at(0.25), [25.0, 3.0, 0.0], atol=1e-9)

    def test_arc_length_matches_circle_arc(self) -> None:
        """Approximate a circular arc length from the sampled table."""
        radius = 30.0
        sweep = 0.5 * np.pi
        curve = build_curve(build_circular_arc_layout(radius=radius, sweep=sweep))
        self.assertAlmostEqual(curve.total_length, radius * sweep, delta=0.005 * radius * sweep)

    def test_arc_length_table_is_cached_and_monotonic(self) -> None:
        """Expose a non-decreasing cumulative table ending at the total length."""
        curve = sample_curve()
        self.assertGreaterEqual(curve.arc_lengths.size, 1_001)
        self.assertEqual(curve.arc_lengths[0], 0.0)
        self.assertEqual(curve.total_length, float(curve.arc_lengths[-1]))
        self.assertTrue(np.all(np.diff(curve.arc_lengths) >= 0.0))

    def test_sample_points_shape(self) -> None:
        """Return one row per requested sample."""
        self.assertEqual(sample_curve().sample_points(64).shape, (64, 3))

    def test_build_rejects_fewer_than_two_points(self) -> None:
        """Raise ``InvalidCurveError`` for empty and single-point inputs."""
        with self.assertRaises(InvalidCurveError):
            build_curve([])
        with self.assertRaises(InvalidCurveError):
            build_curve([ControlPoint(0.0, 0.0, 0.0)])

    def test_invalid_curve_error_is_track_data_error(self) -> None:
        """Keep curve errors catchable as track data errors."""
        self.assertTrue(issubclass(InvalidCurveError, TrackDataError))

    def test_build_rejects_invalid_inputs(self) -> None:
        """Reject degenerate geometry and unsupported options."""
        points = sample_control_points()
        with self.assertRaises(InvalidCurveError):
            build_curve([ControlPoint(1.0, 1.0, 1.0), ControlPoint(1.0, 1.0, 1.0)])
        with self.assertRaises(InvalidCurveError):
            build_curve([ControlPoint(0.0, 0.0, 0.0), ControlPoint(float("nan"), 0.0, 0.0)])
        with self.assertRaises(InvalidCurveError):
            build_curve(points, curve_type="bezier")
        with self.assertRaises(InvalidCurveError):
            build_curve(points, arc_length_divisions=100)


if __name__ == "__main__":
    unittest.main()
