"""Physical constants used across the library."""

GRAVITY: float = 9.80665
MPS_TO_KMH: float = 3.6
SMALL_EPS: float = 1e-9
