"""Control-point data models."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from coastersim.utils.exceptions import InvalidCurveError

MIN_CONTROL_POINT_COUNT = 2


@dataclass(frozen=True)
class ControlPoint:
    """Track control point with banking.

    Args:
        x: Global x-coordinate [m].
        y: Global y-coordinate (height) [m].
        z: Global z-coordinate [m].
        banking: Signed track banking angle about the direction of travel [rad].
    """

    x: float
    y: float
    z: float
    banking: float = 0.0

    @property
    def position(self) -> np.ndarray:
        """Control-point position vector.

        Returns:
            Position as a ``(3,)`` float array [m].
        """
        return np.array([self.x, self.y, self.z], dtype=np.float64)


def validate_control_points(points: Sequence[ControlPoint]) -> None:
    """Validate an ordered control-point sequence before curve construction.

    Args:
        points: Ordered control points.

    Raises:
        coastersim.utils.exceptions.InvalidCurveError: If fewer than two
            points are given or any coordinate is non-finite.
    """
    if len(points) < MIN_CONTROL_POINT_COUNT:
        msg = (
            f"Curve requires at least {MIN_CONTROL_POINT_COUNT} control points, "
            f"got {len(points)}"
        )
        raise InvalidCurveError(msg)
    values = np.array([[p.x, p.y, p.z, p.banking] for p in points], dtype=np.float64)
    if np.any(~np.isfinite(values)):
        msg = "Control points contain non-finite values"
        raise InvalidCurveError(msg)
