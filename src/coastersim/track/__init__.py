"""Track curve model, banking, arc-length conversion, and built-in layouts."""

from coastersim.track.arc_length import distance_for_parameter, parameter_for_distance
from coastersim.track.banking import banking_at
from coastersim.track.curve import Curve, build_curve
from coastersim.track.io import load_control_points_csv
from coastersim.track.layouts import (
    build_circular_arc_layout,
    build_drop_layout,
    build_straight_layout,
    default_ride_layout,
)
from coastersim.track.models import ControlPoint

__all__ = [
    "ControlPoint",
    "Curve",
    "banking_at",
    "build_circular_arc_layout",
    "build_curve",
    "build_drop_layout",
    "build_straight_layout",
    "default_ride_layout",
    "distance_for_parameter",
    "load_control_points_csv",
    "parameter_for_distance",
]
