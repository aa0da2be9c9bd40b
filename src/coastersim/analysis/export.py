"""Export helpers for ride outputs."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from coastersim.analysis.kpi import RideKpis


def export_kpi_json(kpis: RideKpis, path: str | Path) -> None:
    """Persist a ride KPI summary as JSON.

    Args:
        kpis: KPI dataclass returned by :func:`coastersim.analysis.kpi.compute_ride_kpis`.
        path: Output file path for the JSON document.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(asdict(kpis), indent=2), encoding="utf-8")
