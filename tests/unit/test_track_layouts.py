"""Tests for built-in ride and synthetic track layouts."""

from __future__ import annotations

import unittest

import numpy as np

from coastersim.track import (
    build_circular_arc_layout,
    build_curve,
    build_drop_layout,
    build_straight_layout,
    default_ride_layout,
)
from coastersim.utils.exceptions import TrackDataError


class TrackLayoutTests(unittest.TestCase):
    """Shape checks for layout builders."""

    def test_default_ride_shape(self) -> None:
        """Start on a crest above the rest of the ride and end level."""
        points = default_ride_layout()
        self.assertEqual(len(points), 19)
        heights = [p.y for p in points]
        self.assertEqual(heights[0], max(heights))
        self.assertGreater(points[0].y, points[1].y)
        self.assertEqual(points[-1].y, points[-2].y)
        self.assertEqual(points[-1].banking, 0.0)

        curve = build_curve(points)
        self.assertGreater(curve.total_length, 250.0)

    def test_straight_layout(self) -> None:
        """Build two level points along +x."""
        points = build_straight_layout(length=40.0, height=2.0, banking=0.1)
        self.assertEqual(len(points), 2)
        self.assertEqual(points[1].x, 40.0)
        self.assertTrue(all(p.y == 2.0 and p.banking == 0.1 for p in points))

    def test_drop_layout_is_level_after_the_drop(self) -> None:
        """Keep the curve at zero height beyond the fifth control point."""
        curve = build_curve(build_drop_layout(height=12.0))
        self.assertEqual(curve.point_at(0.0)[1], 12.0)
        for u in np.linspace(0.82, 1.0, 37):
            self.assertEqual(curve.point_at(float(u))[1], 0.0)

    def test_circular_arc_layout_lies_on_circle(self) -> None:
        """Place every point at the requested radius from the turn centre."""
        radius = 25.0
        points = build_circular_arc_layout(radius=radius, sweep=np.pi, point_count=9)
        self.assertEqual(len(points), 9)
        centre = np.array([0.0, 0.0, -radius])
        for point in points:
            self.assertAlmostEqual(float(np.linalg.norm(point.position - centre)), radius, places=9)
        self.assertAlmostEqual(points[-1].z, -2.0 * radius, places=9)

    def test_layout_builders_reject_invalid_parameters(self) -> None:
        """Raise track-data errors for non-positive dimensions."""
        with self.assertRaises(TrackDataError):
            build_straight_layout(length=0.0)
        with self.assertRaises(TrackDataError):
            build_drop_layout(height=-1.0)
        with self.assertRaises(TrackDataError):
            build_drop_layout(run=0.0)
        with self.assertRaises(TrackDataError):
            build_circular_arc_layout(radius=0.0)
        with self.assertRaises(TrackDataError):
            build_circular_arc_layout(point_count=2)


if __name__ == "__main__":
    unittest.main()
