"""Scheduler-facing ride driver and fixed-step trace runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

import numpy as np

from coastersim.simulation.config import SimulationConfig, build_simulation_config
from coastersim.simulation.integrator import TrackBoundary, tick
from coastersim.simulation.state import GForces, VehicleState, initial_vehicle_state
from coastersim.track.arc_length import parameter_for_distance
from coastersim.track.curve import Curve
from coastersim.utils.exceptions import ConfigurationError
from coastersim.vehicle.frame import OrientationFrame, build_frame
from coastersim.vehicle.params import CartParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RideSnapshot:
    """Per-tick outputs handed to renderers and readouts.

    Args:
        position: Cart position [m].
        frame: Cart orientation.
        parameter: Normalized curve parameter at the cart position.
        distance: Arc length travelled [m].
        velocity: Signed velocity along the curve [m/s].
        speed_kmh: Absolute speed for display [km/h].
        forces: G-force readouts.
        boundary: Track end the cart is held at, if any.
    """

    position: np.ndarray
    frame: OrientationFrame
    parameter: float
    distance: float
    velocity: float
    speed_kmh: float
    forces: GForces
    boundary: TrackBoundary | None = None


class RideSimulation:
    """Single-writer owner of the cart state for a render or control loop.

    The driver keeps the state and the frame continuity hint, clamps time
    steps, honours pause, and applies tuning updates atomically at the start
    of the next tick.

    Args:
        curve: Track curve, shared read-only.
        cart: Initial cart parameters.
        config: Validated simulation configuration.
        start_distance: Arc length the cart starts and resets at [m].
    """

    def __init__(
        self,
        curve: Curve,
        cart: CartParameters | None = None,
        config: SimulationConfig | None = None,
        start_distance: float = 0.0,
    ) -> None:
        config = config or build_simulation_config()
        cart = cart or CartParameters()
        cart.validate()
        config.validate()
        if not 0.0 <= start_distance <= curve.total_length:
            msg = "start_distance must lie within the track length"
            raise ConfigurationError(msg)

        self.curve = curve
        self.config = config
        self._cart = cart
        self._pending_cart: CartParameters | None = None
        self._start_distance = float(start_distance)
        self._running = True
        self._time = 0.0
        self._state = initial_vehicle_state(self._start_distance)
        self._frame = self._resting_frame()
        self._boundary: TrackBoundary | None = None

    @property
    def state(self) -> VehicleState:
        """Current cart state."""
        return self._state

    @property
    def frame(self) -> OrientationFrame:
        """Current cart orientation."""
        return self._frame

    @property
    def cart(self) -> CartParameters:
        """Cart parameters applied to the most recent tick."""
        return self._cart

    @property
    def running(self) -> bool:
        """Whether :meth:`step` advances the simulation."""
        return self._running

    @property
    def time(self) -> float:
        """Simulated time since the last reset [s]."""
        return self._time

    def pause(self) -> None:
        self._running = False

    def resume(self) -> None:
        self._running = True

    def _resting_frame(self) -> OrientationFrame:
        u = parameter_for_distance(self._state.distance, self.curve)
        return build_frame(
            self.curve.tangent_at(u),
            self.curve.banking_at(u),
            world_up=self.config.physics.world_up,
            reuse_angle_threshold=self.config.numerics.frame_reuse_angle,
        )

    def reset(self) -> RideSnapshot:
        """Return the cart to its start position at rest.

        Returns:
            Snapshot of the reset state. The frame is rebuilt without a
            continuity hint.
        """
        self._state = initial_vehicle_state(self._start_distance)
        self._frame = self._resting_frame()
        self._boundary = None
        self._time = 0.0
        logger.info("Ride reset to %.2f m", self._start_distance)
        return self.snapshot()

    def update_cart(self, mass: float | None = None, friction: float | None = None) -> None:
        """Queue new cart parameters for the next tick.

        Values outside the tuning ranges are clipped; this method never
        raises for out-of-range input.

        Args:
            mass: New cart mass [kg], or ``None`` to keep the current value.
            friction: New friction coefficient, or ``None`` to keep it.
        """
        base = self._pending_cart or self._cart
        updated = replace(
            base,
            mass=base.mass if mass is None else float(mass),
            friction=base.friction if friction is None else float(friction),
        )
        self._pending_cart = updated.bounded()

    def step(self, dt: float) -> RideSnapshot:
        """Advance the ride by one scheduler frame.

        Args:
            dt: Elapsed wall time since the previous frame [s]. Values above
                ``numerics.max_time_step`` are clamped; non-positive values
                and paused rides leave the state untouched.

        Returns:
            Snapshot after the tick.
        """
        if not self._running or not dt > 0.0:
            return self.snapshot()

        max_step = self.config.numerics.max_time_step
        if dt > max_step:
            logger.debug("Clamping time step %.3f s to %.3f s", dt, max_step)
            dt = max_step

        if self._pending_cart is not None:
            self._cart = self._pending_cart
            self._pending_cart = None

        result = tick(
            self._state,
            self.curve,
            self._cart,
            self.config,
            dt,
            previous_frame=self._frame,
        )
        self._state = result.state
        self._frame = result.frame
        self._boundary = result.boundary
        self._time += dt
        return self.snapshot()

    def snapshot(self) -> RideSnapshot:
        """Current per-tick outputs.

        Returns:
            Position, orientation and readouts of the current state.
        """
        u = parameter_for_distance(self._state.distance, self.curve)
        return RideSnapshot(
            position=self.curve.point_at(u),
            frame=self._frame,
            parameter=u,
            distance=self._state.distance,
            velocity=self._state.velocity,
            speed_kmh=self._state.speed_kmh,
            forces=self._state.forces,
            boundary=self._boundary,
        )


@dataclass(frozen=True)
class RideTrace:
    """Fixed-step ride output arrays.

    Args:
        time: Simulated time after each tick [s].
        distance: Arc length travelled [m].
        parameter: Normalized curve parameter.
        velocity: Signed velocity [m/s].
        acceleration: Signed along-curve acceleration [m/s^2].
        vertical_g: Vertical G-force (-).
        lateral_g: Lateral G-force (-).
        longitudinal_g: Longitudinal G-force (-).
        curvature: Curvature estimate [1/m].
        position: Cart positions with shape ``(n, 3)`` [m].
    """

    time: np.ndarray
    distance: np.ndarray
    parameter: np.ndarray
    velocity: np.ndarray
    acceleration: np.ndarray
    vertical_g: np.ndarray
    lateral_g: np.ndarray
    longitudinal_g: np.ndarray
    curvature: np.ndarray
    position: np.ndarray

    @property
    def sample_count(self) -> int:
        """Number of recorded ticks."""
        return int(self.time.size)


def simulate_ride(
    curve: Curve,
    cart: CartParameters,
    config: SimulationConfig,
    duration: float,
    dt: float,
    initial_state: VehicleState | None = None,
) -> RideTrace:
    """Run the integrator at a fixed time step and record every tick.

    Args:
        curve: Track curve.
        cart: Cart parameters, constant for the run.
        config: Simulation configuration.
        duration: Simulated duration [s].
        dt: Fixed time step [s].
        initial_state: Starting state; defaults to rest at the curve start.

    Returns:
        Arrays of per-tick outputs.

    Raises:
        coastersim.utils.exceptions.ConfigurationError: If the configuration,
            cart parameters, duration or time step are invalid.
    """
    config.validate()
    cart.validate()
    if duration <= 0.0:
        msg = "duration must be positive"
        raise ConfigurationError(msg)
    if not 0.0 < dt <= config.numerics.max_time_step:
        msg = f"dt must be in (0, {config.numerics.max_time_step}]"
        raise ConfigurationError(msg)

    tick_count = int(np.ceil(duration / dt))
    time = np.arange(1, tick_count + 1, dtype=float) * dt
    distance = np.zeros(tick_count)
    parameter = np.zeros(tick_count)
    velocity = np.zeros(tick_count)
    acceleration = np.zeros(tick_count)
    vertical_g = np.zeros(tick_count)
    lateral_g = np.zeros(tick_count)
    longitudinal_g = np.zeros(tick_count)
    curvature = np.zeros(tick_count)
    position = np.zeros((tick_count, 3))

    state = initial_state or initial_vehicle_state()
    frame: OrientationFrame | None = None
    for idx in range(tick_count):
        result = tick(state, curve, cart, config, dt, previous_frame=frame)
        state = result.state
        frame = result.frame

        distance[idx] = state.distance
        parameter[idx] = result.parameter
        velocity[idx] = state.velocity
        acceleration[idx] = state.acceleration
        vertical_g[idx] = state.forces.vertical
        lateral_g[idx] = state.forces.lateral
        longitudinal_g[idx] = state.forces.longitudinal
        curvature[idx] = state.curvature
        position[idx] = result.position

    logger.debug("Simulated %d ticks of %.4f s", tick_count, dt)
    return RideTrace(
        time=time,
        distance=distance,
        parameter=parameter,
        velocity=velocity,
        acceleration=acceleration,
        vertical_g=vertical_g,
        lateral_g=lateral_g,
        longitudinal_g=longitudinal_g,
        curvature=curvature,
        position=position,
    )
