"""Ride analysis tools."""

from coastersim.analysis.export import export_kpi_json
from coastersim.analysis.kpi import RideKpis, compute_ride_kpis
from coastersim.analysis.plots import export_standard_plots

__all__ = [
    "RideKpis",
    "compute_ride_kpis",
    "export_kpi_json",
    "export_standard_plots",
]
