"""Plot generation for ride traces."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from coastersim.simulation.runner import RideTrace
from coastersim.utils.constants import MPS_TO_KMH

matplotlib.use("Agg")


def _save_dual_format(fig: Figure, out_base: Path) -> None:
    """Write a figure to PNG and PDF with a shared base path.

    Args:
        fig: Figure object to persist.
        out_base: Output path without suffix.
    """
    out_base.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_base.with_suffix(".png"), dpi=180, bbox_inches="tight")
    fig.savefig(out_base.with_suffix(".pdf"), bbox_inches="tight")


def plot_speed_trace(trace: RideTrace, out_base: Path) -> None:
    """Plot signed velocity over time.

    Args:
        trace: Ride trace containing ``time`` and ``velocity``.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.velocity * MPS_TO_KMH, lw=2.0)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Velocity [km/h]")
    ax.set_title("Speed Trace")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_g_forces(trace: RideTrace, out_base: Path) -> None:
    """Plot vertical, lateral and longitudinal G-forces over time.

    Args:
        trace: Ride trace containing the G-force channels.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(9, 4))
    ax.plot(trace.time, trace.vertical_g, lw=1.6, label="vertical")
    ax.plot(trace.time, trace.lateral_g, lw=1.6, label="lateral")
    ax.plot(trace.time, trace.longitudinal_g, lw=1.6, label="longitudinal")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("Load [g]")
    ax.set_title("Rider G-Forces")
    ax.grid(True, alpha=0.3)
    ax.legend()
    _save_dual_format(fig, out_base)
    plt.close(fig)


def plot_ride_path(trace: RideTrace, out_base: Path) -> None:
    """Plot the travelled path in plan view, coloured by vertical G.

    Args:
        trace: Ride trace containing cart positions.
        out_base: Output path without suffix.
    """
    fig, ax = plt.subplots(figsize=(6, 6))
    points = ax.scatter(
        trace.position[:, 0],
        trace.position[:, 2],
        c=trace.vertical_g,
        s=6,
        cmap="coolwarm",
    )
    fig.colorbar(points, ax=ax, label="Vertical load [g]")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("z [m]")
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title("Ride Path")
    ax.grid(True, alpha=0.3)
    _save_dual_format(fig, out_base)
    plt.close(fig)


def export_standard_plots(trace: RideTrace, output_dir: str | Path) -> None:
    """Export the default ride plot set.

    Args:
        trace: Ride trace to plot.
        output_dir: Directory receiving ``speed_trace``, ``g_forces`` and
            ``ride_path`` in PNG and PDF format.
    """
    out_dir = Path(output_dir)
    plot_speed_trace(trace, out_dir / "speed_trace")
    plot_g_forces(trace, out_dir / "g_forces")
    plot_ride_path(trace, out_dir / "ride_path")
