"""Shared test helpers."""

from __future__ import annotations

from coastersim.simulation.config import SimulationConfig, build_simulation_config
from coastersim.track.curve import Curve, build_curve
from coastersim.track.layouts import build_drop_layout, default_ride_layout
from coastersim.track.models import ControlPoint
from coastersim.vehicle.params import CartParameters

DEFAULT_TICK = 1.0 / 60.0


def sample_control_points() -> list[ControlPoint]:
    """Create a short banked S-bend with a height change.

    Returns:
        Five control points used by unit tests.
    """
    return [
        ControlPoint(0.0, 10.0, 0.0, 0.0),
        ControlPoint(15.0, 6.0, 4.0, 0.2),
        ControlPoint(30.0, 4.0, 0.0, -0.3),
        ControlPoint(45.0, 5.0, -6.0, 0.1),
        ControlPoint(60.0, 2.0, 0.0, 0.0),
    ]


def sample_curve() -> Curve:
    """Build the curve through :func:`sample_control_points`.

    Returns:
        Centripetal Catmull-Rom curve.
    """
    return build_curve(sample_control_points())


def default_ride_curve() -> Curve:
    """Build the default 19-point ride.

    Returns:
        Curve through :func:`coastersim.track.layouts.default_ride_layout`.
    """
    return build_curve(default_ride_layout())


def drop_curve(height: float = 10.0) -> Curve:
    """Build a flat-slope-flat drop curve.

    Args:
        height: Drop height [m].

    Returns:
        Curve through :func:`coastersim.track.layouts.build_drop_layout`.
    """
    return build_curve(build_drop_layout(height=height))


def sample_cart() -> CartParameters:
    """Create the reference cart.

    Returns:
        Cart with 228.6 kg mass and 0.015 friction coefficient.
    """
    return CartParameters(mass=228.6, friction=0.015)


def sample_config(max_speed: float = 50.0) -> SimulationConfig:
    """Create a validated default configuration.

    Args:
        max_speed: Speed clamp [m/s].

    Returns:
        Simulation configuration with default numerics.
    """
    return build_simulation_config(max_speed=max_speed)
