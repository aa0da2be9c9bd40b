"""Simulation configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from coastersim.utils.constants import GRAVITY
from coastersim.utils.exceptions import ConfigurationError
from coastersim.vehicle.frame import DEFAULT_REUSE_ANGLE, WORLD_UP

DEFAULT_MAX_SPEED = 50.0
DEFAULT_CURVATURE_EPSILON = 1e-3
DEFAULT_MAX_TIME_STEP = 0.1
MAX_CURVATURE_EPSILON = 0.25


@dataclass(frozen=True)
class PhysicsConfig:
    """Physical constants injected into the integrator.

    Args:
        gravity: Gravitational acceleration magnitude [m/s^2].
        max_speed: Symmetric speed clamp along the track [m/s].
        world_up: Global up axis; gravity acts along its negative.
    """

    gravity: float = GRAVITY
    max_speed: float = DEFAULT_MAX_SPEED
    world_up: tuple[float, float, float] = WORLD_UP

    def validate(self) -> None:
        """Validate physical constants.

        Raises:
            coastersim.utils.exceptions.ConfigurationError: If gravity or the
                speed clamp is not positive, or ``world_up`` is not a unit
                vector.
        """
        if self.gravity <= 0.0:
            msg = "gravity must be positive"
            raise ConfigurationError(msg)
        if self.max_speed <= 0.0:
            msg = "max_speed must be positive"
            raise ConfigurationError(msg)
        if len(self.world_up) != 3 or not np.isclose(np.linalg.norm(self.world_up), 1.0):
            msg = "world_up must be a unit 3-vector"
            raise ConfigurationError(msg)

    @property
    def gravity_vector(self) -> np.ndarray:
        """Gravitational acceleration vector [m/s^2]."""
        return -self.gravity * np.asarray(self.world_up, dtype=np.float64)


@dataclass(frozen=True)
class NumericsConfig:
    """Numerical controls for the per-tick integrator.

    Args:
        curvature_epsilon: Half-width of the parameter interval used for the
            finite-difference curvature estimate (-).
        frame_reuse_angle: Tangent change below which the previous right axis
            is reused [rad].
        max_time_step: Largest time step accepted by the driver; larger steps
            are clamped [s].
    """

    curvature_epsilon: float = DEFAULT_CURVATURE_EPSILON
    frame_reuse_angle: float = DEFAULT_REUSE_ANGLE
    max_time_step: float = DEFAULT_MAX_TIME_STEP

    def validate(self) -> None:
        """Validate numerical settings.

        Raises:
            coastersim.utils.exceptions.ConfigurationError: If any setting
                violates its bound.
        """
        if not 0.0 < self.curvature_epsilon <= MAX_CURVATURE_EPSILON:
            msg = f"curvature_epsilon must be in (0, {MAX_CURVATURE_EPSILON}]"
            raise ConfigurationError(msg)
        if self.frame_reuse_angle < 0.0:
            msg = "frame_reuse_angle must be non-negative"
            raise ConfigurationError(msg)
        if self.max_time_step <= 0.0:
            msg = "max_time_step must be positive"
            raise ConfigurationError(msg)


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level config composed of physics and numerics.

    Args:
        physics: Physical constants and limits.
        numerics: Discretization controls.
    """

    physics: PhysicsConfig
    numerics: NumericsConfig

    def validate(self) -> None:
        """Validate combined simulation settings.

        Raises:
            coastersim.utils.exceptions.ConfigurationError: If physics or
                numerics values violate their bounds.
        """
        self.physics.validate()
        self.numerics.validate()


def build_simulation_config(
    gravity: float = GRAVITY,
    max_speed: float = DEFAULT_MAX_SPEED,
    numerics: NumericsConfig | None = None,
) -> SimulationConfig:
    """Build a validated simulation config with sensible numerical defaults.

    Args:
        gravity: Gravitational acceleration magnitude [m/s^2].
        max_speed: Speed clamp along the track [m/s].
        numerics: Optional numerical settings. Defaults to :class:`NumericsConfig`.

    Returns:
        Fully validated simulation configuration.

    Raises:
        coastersim.utils.exceptions.ConfigurationError: If assembled settings
            are out of bounds.
    """
    config = SimulationConfig(
        physics=PhysicsConfig(gravity=gravity, max_speed=max_speed),
        numerics=numerics or NumericsConfig(),
    )
    config.validate()
    return config
