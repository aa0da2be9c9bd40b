"""Drive a ride at a render frame rate with live tuning and frame hitches."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from coastersim.simulation import RideSimulation, TrackBoundary, build_simulation_config
from coastersim.track import build_curve, load_control_points_csv
from coastersim.track.curve import VALID_CURVE_TYPES
from coastersim.utils import configure_logging
from coastersim.vehicle import CartParameters

DEFAULT_TRACK = Path(__file__).resolve().parent / "data" / "camelback.csv"
HITCH_DURATION = 0.5


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments for the live ride example.

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--track-csv", type=Path, default=DEFAULT_TRACK)
    parser.add_argument("--curve-type", choices=VALID_CURVE_TYPES, default="centripetal")
    parser.add_argument("--frame-rate", type=float, default=60.0)
    parser.add_argument("--duration", type=float, default=20.0)
    parser.add_argument("--mass", type=float, default=228.6)
    parser.add_argument("--friction", type=float, default=0.015)
    parser.add_argument(
        "--tuned-friction",
        type=float,
        default=0.04,
        help="Friction applied halfway through the ride; clipped to the tuning range.",
    )
    return parser.parse_args()


def main() -> None:
    """Run the live driver and log per-second readouts."""
    args = _parse_args()
    configure_logging(logging.INFO)
    logger = logging.getLogger("live_ride")

    curve = build_curve(load_control_points_csv(args.track_csv), curve_type=args.curve_type)
    sim = RideSimulation(
        curve,
        CartParameters(mass=args.mass, friction=args.friction),
        build_simulation_config(),
    )
    logger.info("Loaded %s: %.1f m of track", args.track_csv.name, curve.total_length)

    frame_dt = 1.0 / args.frame_rate
    frame_count = int(args.duration * args.frame_rate)
    frames_per_second = max(int(args.frame_rate), 1)
    for frame_idx in range(frame_count):
        if frame_idx == frame_count // 2:
            sim.update_cart(friction=args.tuned_friction)
            # One stalled render frame; the driver clamps it.
            snapshot = sim.step(HITCH_DURATION)
        else:
            snapshot = sim.step(frame_dt)

        if frame_idx % frames_per_second == 0:
            logger.info(
                "t=%5.2f s  s=%6.1f m  v=%5.1f km/h  Gz=%5.2f  Gy=%5.2f  Gx=%5.2f",
                sim.time,
                snapshot.distance,
                snapshot.speed_kmh,
                snapshot.forces.vertical,
                snapshot.forces.lateral,
                snapshot.forces.longitudinal,
            )
        if snapshot.boundary is TrackBoundary.END:
            logger.info("Cart reached the end of the track after %.2f s", sim.time)
            break


if __name__ == "__main__":
    main()
