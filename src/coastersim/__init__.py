"""Path-following ride physics package."""

from coastersim.simulation.runner import RideSimulation, RideTrace, simulate_ride
from coastersim.track.curve import Curve, build_curve
from coastersim.track.models import ControlPoint

__all__ = [
    "ControlPoint",
    "Curve",
    "RideSimulation",
    "RideTrace",
    "build_curve",
    "simulate_ride",
]
