"""Cart parameters and orientation frames."""

from coastersim.vehicle.frame import OrientationFrame, build_frame
from coastersim.vehicle.params import CartParameters

__all__ = [
    "CartParameters",
    "OrientationFrame",
    "build_frame",
]
