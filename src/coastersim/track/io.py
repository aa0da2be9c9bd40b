"""Control-point loading from CSV files."""

from __future__ import annotations

import csv
from pathlib import Path

from coastersim.track.models import MIN_CONTROL_POINT_COUNT, ControlPoint
from coastersim.utils.exceptions import InvalidCurveError, TrackDataError

REQUIRED_COLUMNS = ("x", "y", "z", "banking")


def load_control_points_csv(path: str | Path) -> list[ControlPoint]:
    """Load ordered control points from a CSV file.

    Args:
        path: Path to a CSV containing ``x``, ``y``, ``z``, and ``banking``
            columns. Rows are read in file order.

    Returns:
        Ordered control points.

    Raises:
        coastersim.utils.exceptions.TrackDataError: If the file does not exist,
            has an invalid schema, or contains non-numeric values.
        coastersim.utils.exceptions.InvalidCurveError: If fewer than two rows
            are present.
    """
    file_path = Path(path)
    if not file_path.exists():
        msg = f"Control-point file not found: {file_path}"
        raise TrackDataError(msg)

    points: list[ControlPoint] = []
    with file_path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if reader.fieldnames is None:
            msg = f"CSV has no header: {file_path}"
            raise TrackDataError(msg)

        missing = [col for col in REQUIRED_COLUMNS if col not in reader.fieldnames]
        if missing:
            msg = f"Control-point CSV missing required columns: {missing}"
            raise TrackDataError(msg)

        for line_number, row in enumerate(reader, start=2):
            try:
                points.append(
                    ControlPoint(
                        x=float(row["x"]),
                        y=float(row["y"]),
                        z=float(row["z"]),
                        banking=float(row["banking"]),
                    )
                )
            except (TypeError, ValueError) as exc:
                msg = f"Invalid numeric value on line {line_number} of {file_path}"
                raise TrackDataError(msg) from exc

    if len(points) < MIN_CONTROL_POINT_COUNT:
        msg = f"Control-point CSV must contain at least {MIN_CONTROL_POINT_COUNT} data rows"
        raise InvalidCurveError(msg)
    return points
