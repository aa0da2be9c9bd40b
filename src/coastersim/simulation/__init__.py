"""Ride state, per-tick integrator, and drivers."""

from coastersim.simulation.config import (
    NumericsConfig,
    PhysicsConfig,
    SimulationConfig,
    build_simulation_config,
)
from coastersim.simulation.integrator import (
    CurvatureEstimate,
    TickResult,
    TrackBoundary,
    estimate_curvature,
    tick,
)
from coastersim.simulation.runner import RideSimulation, RideSnapshot, RideTrace, simulate_ride
from coastersim.simulation.state import GForces, VehicleState, initial_vehicle_state

__all__ = [
    "CurvatureEstimate",
    "GForces",
    "NumericsConfig",
    "PhysicsConfig",
    "RideSimulation",
    "RideSnapshot",
    "RideTrace",
    "SimulationConfig",
    "TickResult",
    "TrackBoundary",
    "VehicleState",
    "build_simulation_config",
    "estimate_curvature",
    "initial_vehicle_state",
    "simulate_ride",
    "tick",
]
