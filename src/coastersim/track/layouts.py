"""Built-in ride layouts and synthetic layouts for physics-focused scenarios."""

from __future__ import annotations

import numpy as np

from coastersim.track.models import ControlPoint
from coastersim.utils.exceptions import TrackDataError

DEFAULT_STRAIGHT_LENGTH = 100.0
DEFAULT_DROP_HEIGHT = 10.0
DEFAULT_DROP_RUN = 10.0
DEFAULT_ARC_RADIUS = 30.0
DEFAULT_ARC_SWEEP = 0.5 * np.pi
DEFAULT_ARC_POINT_COUNT = 13
MIN_ARC_POINT_COUNT = 3

# x, y, z [m], banking [rad]
_DEFAULT_RIDE_POINTS = (
    (0.0, 30.0, 0.0, 0.0),
    (10.0, 28.0, 0.0, 0.0),
    (25.0, 14.0, 0.0, 0.0),
    (40.0, 3.0, 0.0, 0.0),
    (55.0, 5.0, 5.0, 0.0),
    (68.0, 14.0, 12.0, 0.0),
    (80.0, 10.0, 25.0, 0.3),
    (85.0, 6.0, 40.0, 0.6),
    (78.0, 5.0, 55.0, 0.6),
    (62.0, 6.0, 62.0, 0.4),
    (45.0, 9.0, 60.0, 0.1),
    (30.0, 6.0, 55.0, 0.2),
    (18.0, 4.0, 45.0, 0.5),
    (12.0, 5.0, 30.0, 0.5),
    (15.0, 4.0, 18.0, 0.2),
    (25.0, 2.5, 10.0, 0.0),
    (40.0, 2.0, 8.0, 0.0),
    (55.0, 2.0, 8.0, 0.0),
    (70.0, 2.0, 8.0, 0.0),
)


def _validate_positive(name: str, value: float) -> None:
    """Validate that a scalar parameter is strictly positive.

    Args:
        name: Parameter name used in error messages.
        value: Parameter value to validate.

    Raises:
        coastersim.utils.exceptions.TrackDataError: If ``value`` is not
            strictly positive.
    """
    if value <= 0.0:
        msg = f"{name} must be positive"
        raise TrackDataError(msg)


def default_ride_layout() -> list[ControlPoint]:
    """Return the default 19-point ride.

    The ride starts on the crest of a 28 m first drop, climbs a camelback,
    runs two right-banked turns that bring it back past the station, and
    ends on a level brake run at 2 m height. Positive banking rolls the cart
    to the right of its direction of travel.

    Returns:
        Ordered control points.
    """
    return [ControlPoint(x, y, z, banking) for x, y, z, banking in _DEFAULT_RIDE_POINTS]


def build_straight_layout(
    length: float = DEFAULT_STRAIGHT_LENGTH,
    height: float = 0.0,
    banking: float = 0.0,
) -> list[ControlPoint]:
    """Build a level straight along +x.

    Args:
        length: Straight length [m].
        height: Constant height [m].
        banking: Constant banking angle [rad].

    Returns:
        Two control points.

    Raises:
        coastersim.utils.exceptions.TrackDataError: If ``length`` is not
            positive.
    """
    _validate_positive("length", length)
    return [
        ControlPoint(0.0, float(height), 0.0, float(banking)),
        ControlPoint(float(length), float(height), 0.0, float(banking)),
    ]


def build_drop_layout(
    height: float = DEFAULT_DROP_HEIGHT,
    run: float = DEFAULT_DROP_RUN,
) -> list[ControlPoint]:
    """Build a flat-slope-flat drop profile in the x-y plane.

    The layout is level before the drop and exactly level (zero height)
    beyond its fifth control point, which makes it suitable for energy
    checks.

    Args:
        height: Drop height [m].
        run: Horizontal spacing between control points [m].

    Returns:
        Six control points.

    Raises:
        coastersim.utils.exceptions.TrackDataError: If ``height`` or ``run``
            is not positive.
    """
    _validate_positive("height", height)
    _validate_positive("run", run)
    h = float(height)
    r = float(run)
    return [
        ControlPoint(0.0, h, 0.0),
        ControlPoint(r, h, 0.0),
        ControlPoint(2.0 * r, 0.5 * h, 0.0),
        ControlPoint(3.0 * r, 0.0, 0.0),
        ControlPoint(4.0 * r, 0.0, 0.0),
        ControlPoint(6.0 * r, 0.0, 0.0),
    ]


def build_circular_arc_layout(
    radius: float = DEFAULT_ARC_RADIUS,
    sweep: float = DEFAULT_ARC_SWEEP,
    point_count: int = DEFAULT_ARC_POINT_COUNT,
    banking: float = 0.0,
    height: float = 0.0,
) -> list[ControlPoint]:
    """Build a level circular arc turning left from the +x direction.

    Args:
        radius: Arc radius [m].
        sweep: Swept angle [rad].
        point_count: Number of control points along the arc.
        banking: Constant banking angle [rad].
        height: Constant height [m].

    Returns:
        Control points on the arc.

    Raises:
        coastersim.utils.exceptions.TrackDataError: If a geometric parameter
            is out of bounds.
    """
    _validate_positive("radius", radius)
    _validate_positive("sweep", sweep)
    if point_count < MIN_ARC_POINT_COUNT:
        msg = f"point_count must be at least {MIN_ARC_POINT_COUNT}"
        raise TrackDataError(msg)

    angle = np.linspace(0.0, float(sweep), int(point_count))
    x = float(radius) * np.sin(angle)
    z = -float(radius) * (1.0 - np.cos(angle))
    return [
        ControlPoint(float(xi), float(height), float(zi), float(banking))
        for xi, zi in zip(x, z)
    ]
