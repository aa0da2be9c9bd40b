"""Per-tick path-following physics integrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np
import numpy.typing as npt

from coastersim.simulation.config import SimulationConfig
from coastersim.simulation.state import GForces, VehicleState
from coastersim.track.arc_length import parameter_for_distance
from coastersim.track.curve import Curve
from coastersim.utils.constants import SMALL_EPS
from coastersim.vehicle.frame import OrientationFrame, build_frame
from coastersim.vehicle.params import CartParameters

logger = logging.getLogger(__name__)

FloatArray = npt.NDArray[np.float64]


class TrackBoundary(Enum):
    """Track end the cart is resting against."""

    START = "start"
    END = "end"


@dataclass(frozen=True)
class CurvatureEstimate:
    """Finite-difference curvature at one curve parameter.

    Args:
        curvature: Scalar curvature [1/m].
        normal: Unit vector towards the centre of curvature; zero on straight
            or degenerate track.
    """

    curvature: float
    normal: FloatArray


@dataclass(frozen=True)
class TickResult:
    """Output of one integrator tick.

    Args:
        state: Updated cart state.
        frame: Cart orientation; pass it back as ``previous_frame`` next tick.
        position: Cart position [m].
        parameter: Normalized curve parameter at the cart position.
        boundary: Track end the cart is held at, if any.
    """

    state: VehicleState
    frame: OrientationFrame
    position: FloatArray
    parameter: float
    boundary: TrackBoundary | None


def estimate_curvature(curve: Curve, u: float, epsilon: float) -> CurvatureEstimate:
    """Estimate curvature from the turn between two adjacent chords.

    Samples the curve at ``u - epsilon``, the interval midpoint, and
    ``u + epsilon`` (clamped to ``[0, 1]``). The change of the chord unit
    tangents divided by the mean chord length approximates ``dT/ds``.

    Args:
        curve: Curve to sample.
        u: Normalized curve parameter.
        epsilon: Half-width of the sampled parameter interval.

    Returns:
        Curvature estimate. Zero-length chords yield zero curvature.
    """
    lo = max(u - epsilon, 0.0)
    hi = min(u + epsilon, 1.0)
    mid = 0.5 * (lo + hi)
    p_lo = curve.point_at(lo)
    p_mid = curve.point_at(mid)
    p_hi = curve.point_at(hi)

    first = p_mid - p_lo
    second = p_hi - p_mid
    first_len = float(np.linalg.norm(first))
    second_len = float(np.linalg.norm(second))
    if first_len < SMALL_EPS or second_len < SMALL_EPS:
        logger.debug("Degenerate curvature interval at u=%.6f, skipping estimate", u)
        return CurvatureEstimate(curvature=0.0, normal=np.zeros(3))

    turn = second / second_len - first / first_len
    curvature_vector = turn / (0.5 * (first_len + second_len))
    curvature = float(np.linalg.norm(curvature_vector))
    if curvature < SMALL_EPS:
        return CurvatureEstimate(curvature=0.0, normal=np.zeros(3))
    return CurvatureEstimate(curvature=curvature, normal=curvature_vector / curvature)


def _advance_distance(
    state: VehicleState,
    total_length: float,
    dt: float,
) -> tuple[float, bool, TrackBoundary | None]:
    """Advance and clamp the travelled distance.

    Args:
        state: Cart state before the tick.
        total_length: Sampled curve length [m].
        dt: Time step [s].

    Returns:
        Tuple ``(distance, clamped, boundary)``. ``clamped`` is ``True`` when
        the cart ran past a track end during this tick.
    """
    distance = state.distance + state.velocity * dt
    clamped = distance < 0.0 or distance > total_length
    distance = float(np.clip(distance, 0.0, total_length))

    boundary = None
    if distance <= 0.0:
        boundary = TrackBoundary.START
    elif distance >= total_length:
        boundary = TrackBoundary.END
    return distance, clamped, boundary


def _integrate_velocity(
    velocity: float,
    acceleration: float,
    gravity_acceleration: float,
    dt: float,
    max_speed: float,
) -> float:
    """Integrate along-curve velocity without letting friction reverse motion.

    Args:
        velocity: Signed velocity before the update [m/s].
        acceleration: Signed net acceleration [m/s^2].
        gravity_acceleration: Signed acceleration from gravity alone [m/s^2].
        dt: Time step [s].
        max_speed: Symmetric speed clamp [m/s].

    Returns:
        Clamped signed velocity [m/s].
    """
    updated = velocity + acceleration * dt
    if velocity != 0.0 and np.sign(updated) != np.sign(velocity):
        without_friction = velocity + gravity_acceleration * dt
        if np.sign(without_friction) == np.sign(velocity):
            updated = 0.0
    return float(np.clip(updated, -max_speed, max_speed))


def tick(
    state: VehicleState,
    curve: Curve,
    cart: CartParameters,
    config: SimulationConfig,
    dt: float,
    previous_frame: OrientationFrame | None = None,
) -> TickResult:
    """Advance the cart by one time step.

    The position is advanced with the incoming velocity first. Frame, forces,
    curvature and G-forces are then evaluated at the advanced position, and
    the centripetal term uses the updated velocity, so every output of the
    returned state describes the end of the step.

    Args:
        state: Cart state before the tick.
        curve: Track curve.
        cart: Cart mass and friction coefficient.
        config: Physics constants and numerical controls.
        dt: Time step [s].
        previous_frame: Frame returned by the previous tick, if any.

    Returns:
        New state, frame, position, curve parameter and boundary contact.
    """
    physics = config.physics
    gravity = physics.gravity
    mass = cart.mass

    distance, clamped, boundary = _advance_distance(state, curve.total_length, dt)
    velocity = 0.0 if clamped else state.velocity
    if clamped and state.velocity != 0.0:
        logger.info(
            "Cart stopped at track %s (%.2f m) from %.2f m/s",
            boundary.value if boundary else "boundary",
            distance,
            state.velocity,
        )

    u = parameter_for_distance(distance, curve)
    position = curve.point_at(u)
    direction = -1.0 if velocity < 0.0 else 1.0
    frame = build_frame(
        direction * curve.tangent_at(u),
        curve.banking_at(u),
        previous_frame,
        world_up=physics.world_up,
        reuse_angle_threshold=config.numerics.frame_reuse_angle,
    )

    gravity_force = mass * physics.gravity_vector
    tangential_gravity = float(np.dot(gravity_force, frame.tangent))
    normal_gravity = float(np.dot(gravity_force, frame.up))
    lateral_gravity = float(np.dot(gravity_force, frame.right))

    friction_force = 0.0 if velocity == 0.0 else -cart.friction * abs(normal_gravity)
    acceleration = direction * (tangential_gravity + friction_force) / mass

    if clamped:
        new_velocity = 0.0
    else:
        new_velocity = _integrate_velocity(
            velocity,
            acceleration,
            direction * tangential_gravity / mass,
            dt,
            physics.max_speed,
        )
    if (boundary is TrackBoundary.START and new_velocity < 0.0) or (
        boundary is TrackBoundary.END and new_velocity > 0.0
    ):
        new_velocity = 0.0

    estimate = estimate_curvature(curve, u, config.numerics.curvature_epsilon)
    centripetal = estimate.curvature * new_velocity**2 * estimate.normal

    forces = GForces(
        vertical=(float(np.dot(centripetal, frame.up)) - normal_gravity / mass) / gravity,
        lateral=(float(np.dot(centripetal, frame.right)) - lateral_gravity / mass) / gravity,
        longitudinal=acceleration / gravity,
    )
    new_state = VehicleState(
        distance=distance,
        velocity=new_velocity,
        acceleration=acceleration,
        forces=forces,
        curvature=estimate.curvature,
    )
    return TickResult(
        state=new_state,
        frame=frame,
        position=position,
        parameter=u,
        boundary=boundary,
    )
