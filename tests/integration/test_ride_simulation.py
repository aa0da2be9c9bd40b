"""Integration tests for the scheduler-facing ride driver and trace runner."""

from __future__ import annotations

import unittest

import numpy as np

from coastersim.simulation import (
    RideSimulation,
    build_simulation_config,
    initial_vehicle_state,
    simulate_ride,
)
from coastersim.utils.constants import MPS_TO_KMH
from coastersim.utils.exceptions import ConfigurationError
from coastersim.vehicle import CartParameters, build_frame
from tests.helpers import DEFAULT_TICK, default_ride_curve, sample_cart, sample_config


class RideSimulationTests(unittest.TestCase):
    """End-to-end behaviour of :class:`RideSimulation`."""

    def setUp(self) -> None:
        self.curve = default_ride_curve()

    def test_reset_places_cart_at_rest_on_first_control_point(self) -> None:
        """Rebuild the resting state and frame at the curve start."""
        sim = RideSimulation(self.curve, sample_cart(), sample_config())
        for _ in range(30):
            sim.step(DEFAULT_TICK)
        self.assertGreater(sim.state.distance, 0.0)

        with self.assertLogs("coastersim.simulation.runner", level="INFO"):
            snapshot = sim.reset()

        expected = build_frame(self.curve.tangent_at(0.0), self.curve.banking_at(0.0))
        np.testing.assert_array_equal(snapshot.position, [0.0, 30.0, 0.0])
        np.testing.assert_allclose(snapshot.frame.as_matrix(), expected.as_matrix(), atol=1e-12)
        self.assertEqual(snapshot.velocity, 0.0)
        self.assertEqual(snapshot.distance, 0.0)
        self.assertEqual(snapshot.forces.vertical, 1.0)
        self.assertEqual(sim.time, 0.0)

    def test_cart_rolls_down_first_drop(self) -> None:
        """Accelerate from rest on the opening descent."""
        sim = RideSimulation(self.curve)
        snapshot = sim.step(DEFAULT_TICK)
        self.assertGreater(snapshot.velocity, 0.0)
        for _ in range(59):
            snapshot = sim.step(DEFAULT_TICK)
        self.assertGreater(snapshot.velocity, 1.0)
        self.assertAlmostEqual(snapshot.speed_kmh, abs(snapshot.velocity) * MPS_TO_KMH)
        self.assertAlmostEqual(sim.time, 1.0, places=9)
        np.testing.assert_allclose(
            snapshot.position, self.curve.point_at(snapshot.parameter), atol=1e-12
        )

    def test_pause_freezes_state_and_resume_continues(self) -> None:
        """Ignore steps while paused."""
        sim = RideSimulation(self.curve)
        sim.step(DEFAULT_TICK)
        sim.pause()
        self.assertFalse(sim.running)
        before = sim.state
        for _ in range(10):
            sim.step(DEFAULT_TICK)
        self.assertIs(sim.state, before)

        sim.resume()
        self.assertTrue(sim.running)
        sim.step(DEFAULT_TICK)
        self.assertGreater(sim.state.distance, before.distance)

    def test_large_time_step_is_clamped(self) -> None:
        """Clamp frame hitches to the configured maximum time step."""
        sim = RideSimulation(self.curve)
        sim.step(5.0)
        self.assertAlmostEqual(sim.time, 0.1)

    def test_non_positive_time_step_is_ignored(self) -> None:
        """Leave the state untouched for zero or negative steps."""
        sim = RideSimulation(self.curve)
        before = sim.state
        sim.step(0.0)
        sim.step(-0.5)
        self.assertIs(sim.state, before)
        self.assertEqual(sim.time, 0.0)

    def test_cart_update_applies_at_next_tick(self) -> None:
        """Queue tuning changes until the next step."""
        sim = RideSimulation(self.curve, sample_cart())
        sim.update_cart(mass=500.0)
        sim.update_cart(friction=0.03)
        self.assertEqual(sim.cart.mass, 228.6)

        sim.pause()
        sim.step(DEFAULT_TICK)
        self.assertEqual(sim.cart.mass, 228.6)

        sim.resume()
        sim.step(DEFAULT_TICK)
        self.assertEqual(sim.cart, CartParameters(mass=500.0, friction=0.03))

    def test_cart_update_clips_out_of_range_values(self) -> None:
        """Clip tuning input instead of raising."""
        sim = RideSimulation(self.curve)
        with self.assertLogs("coastersim.vehicle.params", level="WARNING"):
            sim.update_cart(mass=5_000.0, friction=-1.0)
        sim.step(DEFAULT_TICK)
        self.assertEqual(sim.cart.mass, 1_000.0)
        self.assertEqual(sim.cart.friction, 0.0)

    def test_constructor_rejects_invalid_input(self) -> None:
        """Raise configuration errors for invalid construction arguments."""
        with self.assertRaises(ConfigurationError):
            RideSimulation(self.curve, CartParameters(mass=0.0))
        with self.assertRaises(ConfigurationError):
            RideSimulation(self.curve, start_distance=-1.0)
        with self.assertRaises(ConfigurationError):
            RideSimulation(self.curve, start_distance=self.curve.total_length + 1.0)

    def test_driver_matches_fixed_step_runner(self) -> None:
        """Produce the same motion as the trace runner at equal steps."""
        cart = sample_cart()
        config = sample_config()
        sim = RideSimulation(self.curve, cart, config)
        for _ in range(32):
            sim.step(0.0625)

        trace = simulate_ride(self.curve, cart, config, duration=2.0, dt=0.0625)
        self.assertEqual(trace.sample_count, 32)
        self.assertAlmostEqual(sim.state.distance, float(trace.distance[-1]), delta=1e-3)
        self.assertAlmostEqual(sim.state.velocity, float(trace.velocity[-1]), delta=1e-3)


class SimulateRideTests(unittest.TestCase):
    """Input handling of :func:`simulate_ride`."""

    def test_invalid_run_settings_raise(self) -> None:
        """Reject non-positive durations and out-of-range steps."""
        curve = default_ride_curve()
        cart = sample_cart()
        config = sample_config()
        with self.assertRaises(ConfigurationError):
            simulate_ride(curve, cart, config, duration=0.0, dt=DEFAULT_TICK)
        with self.assertRaises(ConfigurationError):
            simulate_ride(curve, cart, config, duration=1.0, dt=0.0)
        with self.assertRaises(ConfigurationError):
            simulate_ride(curve, cart, config, duration=1.0, dt=0.2)
        with self.assertRaises(ConfigurationError):
            simulate_ride(curve, CartParameters(friction=-0.1), config, duration=1.0, dt=DEFAULT_TICK)

    def test_trace_arrays_share_length(self) -> None:
        """Record one sample per tick with monotonically increasing time."""
        curve = default_ride_curve()
        trace = simulate_ride(
            curve,
            sample_cart(),
            build_simulation_config(),
            duration=1.0,
            dt=0.0625,
            initial_state=initial_vehicle_state(distance=5.0, velocity=2.0),
        )
        self.assertEqual(trace.sample_count, 16)
        for channel in (
            trace.distance,
            trace.parameter,
            trace.velocity,
            trace.acceleration,
            trace.vertical_g,
            trace.lateral_g,
            trace.longitudinal_g,
            trace.curvature,
        ):
            self.assertEqual(channel.shape, (16,))
        self.assertEqual(trace.position.shape, (16, 3))
        self.assertTrue(np.all(np.diff(trace.time) > 0.0))
        self.assertGreater(trace.distance[0], 5.0)


if __name__ == "__main__":
    unittest.main()
