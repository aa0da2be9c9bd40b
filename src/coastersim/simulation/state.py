"""Cart state carried between integrator ticks."""

from __future__ import annotations

from dataclasses import dataclass, field

from coastersim.utils.constants import MPS_TO_KMH

RESTING_VERTICAL_G = 1.0


@dataclass(frozen=True)
class GForces:
    """Accelerations felt by a rider, in multiples of gravity.

    Args:
        vertical: Seat-normal load along the cart up axis (1.0 at rest on
            level track) (-).
        lateral: Load along the cart right axis (-).
        longitudinal: Along-track acceleration (-).
    """

    vertical: float = RESTING_VERTICAL_G
    lateral: float = 0.0
    longitudinal: float = 0.0


@dataclass(frozen=True)
class VehicleState:
    """Cart state along the track.

    Args:
        distance: Arc length travelled from the curve start, in
            ``[0, curve.total_length]`` [m].
        velocity: Signed speed along the curve; positive in the direction of
            increasing curve parameter [m/s].
        acceleration: Signed along-curve acceleration of the last tick [m/s^2].
        forces: G-force readouts of the last tick.
        curvature: Last curvature estimate [1/m].
    """

    distance: float = 0.0
    velocity: float = 0.0
    acceleration: float = 0.0
    forces: GForces = field(default_factory=GForces)
    curvature: float = 0.0

    @property
    def speed_kmh(self) -> float:
        """Absolute speed for display [km/h]."""
        return abs(self.velocity) * MPS_TO_KMH


def initial_vehicle_state(distance: float = 0.0, velocity: float = 0.0) -> VehicleState:
    """Create a resting state.

    Args:
        distance: Starting arc length [m].
        velocity: Starting signed velocity [m/s].

    Returns:
        State with zero acceleration and resting G-forces.
    """
    return VehicleState(distance=float(distance), velocity=float(velocity))
