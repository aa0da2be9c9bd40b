"""Utility helpers."""

from coastersim.utils.constants import GRAVITY, MPS_TO_KMH
from coastersim.utils.logging import configure_logging

__all__ = ["GRAVITY", "MPS_TO_KMH", "configure_logging"]
