"""Orientation frame construction along the track."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from coastersim.utils.constants import SMALL_EPS
from coastersim.utils.exceptions import DegenerateFrameError

logger = logging.getLogger(__name__)

FloatArray = npt.NDArray[np.float64]

WORLD_UP = (0.0, 1.0, 0.0)
SECONDARY_REFERENCE_AXIS = (0.0, 0.0, -1.0)
DEFAULT_REUSE_ANGLE = 0.01
DEGENERATE_CROSS_NORM = 1e-6


@dataclass(frozen=True)
class OrientationFrame:
    """Right-handed orthonormal cart orientation.

    ``up = right x tangent`` and ``right = tangent x up``. The reference
    fields carry the continuity hint for the next frame.

    Args:
        tangent: Unit direction of travel.
        up: Unit cart up axis after banking.
        right: Unit cart right axis after banking.
        reference_tangent: Tangent the unbanked right axis was derived from.
        reference_right: Unbanked unit right axis.
    """

    tangent: FloatArray
    up: FloatArray
    right: FloatArray
    reference_tangent: FloatArray
    reference_right: FloatArray

    def as_matrix(self) -> FloatArray:
        """Rotation matrix mapping cart axes to world axes.

        Returns:
            ``(3, 3)`` matrix with columns ``(tangent, up, right)``.
        """
        return np.column_stack([self.tangent, self.up, self.right])


def _normalized(vector: FloatArray) -> FloatArray:
    norm = float(np.linalg.norm(vector))
    if norm < DEGENERATE_CROSS_NORM:
        msg = "Cannot normalize a near-zero vector"
        raise DegenerateFrameError(msg)
    return np.asarray(vector / norm, dtype=np.float64)


def _angle_between(a: FloatArray, b: FloatArray) -> float:
    return float(np.arccos(np.clip(np.dot(a, b), -1.0, 1.0)))


def _right_from_reference(tangent: FloatArray, reference_axis: FloatArray) -> FloatArray:
    """Derive an unbanked right axis from a reference up axis.

    Args:
        tangent: Unit direction of travel.
        reference_axis: Axis the right vector must be orthogonal to.

    Returns:
        Unit right axis ``normalize(tangent x reference_axis)``.

    Raises:
        coastersim.utils.exceptions.DegenerateFrameError: If ``tangent`` is
            parallel to ``reference_axis``.
    """
    return _normalized(np.cross(tangent, reference_axis))


def _project_orthogonal(vector: FloatArray, tangent: FloatArray) -> FloatArray:
    return _normalized(vector - np.dot(vector, tangent) * tangent)


def _rotate_about_axis(vector: FloatArray, axis: FloatArray, angle: float) -> FloatArray:
    """Rotate ``vector`` about unit ``axis`` by ``angle`` (right-hand rule)."""
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    return (
        vector * cos_a
        + np.cross(axis, vector) * sin_a
        + axis * np.dot(axis, vector) * (1.0 - cos_a)
    )


def _fallback_right(tangent: FloatArray, previous: OrientationFrame | None) -> FloatArray:
    if previous is not None:
        try:
            return _project_orthogonal(previous.reference_right, tangent)
        except DegenerateFrameError:
            logger.debug("Previous right axis parallel to tangent, using secondary axis")
    return _right_from_reference(tangent, np.asarray(SECONDARY_REFERENCE_AXIS, dtype=np.float64))


def build_frame(
    tangent: Sequence[float] | FloatArray,
    banking: float,
    previous: OrientationFrame | None = None,
    *,
    world_up: Sequence[float] = WORLD_UP,
    reuse_angle_threshold: float = DEFAULT_REUSE_ANGLE,
) -> OrientationFrame:
    """Build the cart frame for a tangent and banking angle.

    On near-straight track, i.e. when the tangent is within
    ``reuse_angle_threshold`` of ``previous.reference_tangent``, the previous
    unbanked right axis is reused so numerical noise in the tangent cannot
    flip or jitter the lateral axis. Otherwise the right axis is
    ``normalize(tangent x world_up)``. The right axis is then rotated about
    the tangent by ``banking`` and the frame is re-orthogonalized.

    A tangent parallel to ``world_up`` is recovered locally: the previous
    frame's right axis is reused when available, else a secondary reference
    axis is used.

    Args:
        tangent: Direction of travel (normalized internally).
        banking: Banking angle about the tangent [rad].
        previous: Frame returned by the previous call, if any.
        world_up: Global up axis.
        reuse_angle_threshold: Maximum tangent change for right-axis reuse [rad].

    Returns:
        New orientation frame. Store it and pass it back as ``previous``.
    """
    try:
        t = _normalized(np.asarray(tangent, dtype=np.float64))
    except DegenerateFrameError:
        if previous is not None:
            logger.debug("Zero tangent, reusing previous frame")
            return previous
        logger.debug("Zero tangent without previous frame, using +x")
        t = np.array([1.0, 0.0, 0.0])

    reference_tangent = t
    reference_right: FloatArray | None = None
    if previous is not None and _angle_between(previous.reference_tangent, t) < reuse_angle_threshold:
        try:
            reference_right = _project_orthogonal(previous.reference_right, t)
            reference_tangent = previous.reference_tangent
        except DegenerateFrameError:
            reference_right = None

    if reference_right is None:
        try:
            reference_right = _right_from_reference(t, np.asarray(world_up, dtype=np.float64))
        except DegenerateFrameError:
            logger.debug("Tangent %s parallel to world up, using fallback right axis", t)
            reference_right = _fallback_right(t, previous)

    banked_right = _rotate_about_axis(reference_right, t, float(banking))
    up = _normalized(np.cross(banked_right, t))
    right = np.cross(t, up)
    right = right / max(float(np.linalg.norm(right)), SMALL_EPS)

    return OrientationFrame(
        tangent=t,
        up=up,
        right=right,
        reference_tangent=reference_tangent,
        reference_right=reference_right,
    )
