"""Tests for public package exports."""

from __future__ import annotations

import unittest

import coastersim
import coastersim.analysis as analysis_pkg
import coastersim.simulation as simulation_pkg
import coastersim.track as track_pkg
import coastersim.utils as utils_pkg
import coastersim.vehicle as vehicle_pkg


class PackageExportTests(unittest.TestCase):
    """Validate that every name in ``__all__`` resolves."""

    def test_all_exports_resolve(self) -> None:
        """Resolve every advertised export of each subpackage."""
        for package in (
            coastersim,
            analysis_pkg,
            simulation_pkg,
            track_pkg,
            utils_pkg,
            vehicle_pkg,
        ):
            for name in package.__all__:
                with self.subTest(package=package.__name__, name=name):
                    self.assertIsNotNone(getattr(package, name))

    def test_top_level_exports(self) -> None:
        """Expose the curve builder and ride drivers at the top level."""
        self.assertIs(coastersim.build_curve, track_pkg.build_curve)
        self.assertIs(coastersim.RideSimulation, simulation_pkg.RideSimulation)
        self.assertIs(coastersim.simulate_ride, simulation_pkg.simulate_ride)


if __name__ == "__main__":
    unittest.main()
