"""Ride KPI calculation from fixed-step traces."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from coastersim.simulation.runner import RideTrace
from coastersim.utils.constants import MPS_TO_KMH


@dataclass(frozen=True)
class RideKpis:
    """Summary metrics for a ride.

    Args:
        ride_time: Simulated duration [s].
        distance: Final arc length reached [m].
        max_speed_kmh: Peak absolute speed [km/h].
        max_vertical_g: Peak vertical G-force (-).
        min_vertical_g: Lowest vertical G-force, negative for airtime (-).
        max_lateral_g: Peak absolute lateral G-force (-).
        max_longitudinal_g: Peak absolute longitudinal G-force (-).
    """

    ride_time: float
    distance: float
    max_speed_kmh: float
    max_vertical_g: float
    min_vertical_g: float
    max_lateral_g: float
    max_longitudinal_g: float


def compute_ride_kpis(trace: RideTrace) -> RideKpis:
    """Compute ride KPIs from a recorded trace.

    Args:
        trace: Output of :func:`coastersim.simulation.runner.simulate_ride`.

    Returns:
        Aggregated ride KPI summary.
    """
    return RideKpis(
        ride_time=float(trace.time[-1]),
        distance=float(trace.distance[-1]),
        max_speed_kmh=float(np.max(np.abs(trace.velocity)) * MPS_TO_KMH),
        max_vertical_g=float(np.max(trace.vertical_g)),
        min_vertical_g=float(np.min(trace.vertical_g)),
        max_lateral_g=float(np.max(np.abs(trace.lateral_g))),
        max_longitudinal_g=float(np.max(np.abs(trace.longitudinal_g))),
    )
