"""Run the default 19-point ride and export plots plus a KPI summary."""

from __future__ import annotations

import logging
from pathlib import Path

from coastersim.analysis import compute_ride_kpis, export_kpi_json, export_standard_plots
from coastersim.simulation import build_simulation_config, simulate_ride
from coastersim.track import build_curve, default_ride_layout
from coastersim.utils import configure_logging
from coastersim.vehicle import CartParameters

RIDE_DURATION = 60.0
TIME_STEP = 1.0 / 60.0


def main() -> None:
    """Simulate the default ride and write results under ``examples/output``."""
    configure_logging(logging.INFO)
    logger = logging.getLogger("default_ride")

    project_root = Path(__file__).resolve().parents[1]
    output_dir = project_root / "examples" / "output" / "default_ride"
    output_dir.mkdir(parents=True, exist_ok=True)

    curve = build_curve(default_ride_layout())
    cart = CartParameters(mass=228.6, friction=0.015)
    config = build_simulation_config()

    trace = simulate_ride(curve, cart, config, duration=RIDE_DURATION, dt=TIME_STEP)
    kpis = compute_ride_kpis(trace)

    export_standard_plots(trace, output_dir)
    export_kpi_json(kpis, output_dir / "kpis.json")

    logger.info("Track length: %.1f m", curve.total_length)
    logger.info("Max speed: %.1f km/h", kpis.max_speed_kmh)
    logger.info(
        "Vertical load: %.2f g to %.2f g",
        kpis.min_vertical_g,
        kpis.max_vertical_g,
    )
    logger.info("Peak lateral load: %.2f g", kpis.max_lateral_g)


if __name__ == "__main__":
    main()
