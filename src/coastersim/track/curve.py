"""Catmull-Rom curve model through banked control points."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from coastersim.track.banking import banking_at
from coastersim.track.models import ControlPoint, validate_control_points
from coastersim.utils.constants import SMALL_EPS
from coastersim.utils.exceptions import InvalidCurveError

FloatArray = npt.NDArray[np.float64]

DEFAULT_CURVE_TYPE = "centripetal"
DEFAULT_TENSION = 0.5
DEFAULT_ARC_LENGTH_DIVISIONS = 1_000
MIN_ARC_LENGTH_DIVISIONS = 1_000
VALID_CURVE_TYPES = ("centripetal", "chordal", "uniform")
MIN_KNOT_SPACING = 1e-4
_KNOT_EXPONENTS = {"centripetal": 0.25, "chordal": 0.5}


def _padded_segments(
    positions: FloatArray,
) -> tuple[FloatArray, FloatArray, FloatArray, FloatArray]:
    """Split control positions into the four-point windows of each segment.

    Args:
        positions: Control-point positions with shape ``(n, 3)`` [m].

    Returns:
        Tuple ``(p0, p1, p2, p3)`` with shape ``(n - 1, 3)`` each. The open
        ends are extended by reflecting the neighbouring point.
    """
    first = 2.0 * positions[0] - positions[1]
    last = 2.0 * positions[-1] - positions[-2]
    padded = np.vstack([first, positions, last])
    return padded[:-3], padded[1:-2], padded[2:-1], padded[3:]


def _segment_tangents(
    p0: FloatArray,
    p1: FloatArray,
    p2: FloatArray,
    p3: FloatArray,
    curve_type: str,
    tension: float,
) -> tuple[FloatArray, FloatArray]:
    """Compute Hermite end tangents for each segment.

    Args:
        p0: Point before each segment start [m].
        p1: Segment start points [m].
        p2: Segment end points [m].
        p3: Point after each segment end [m].
        curve_type: Catmull-Rom variant (``centripetal``, ``chordal`` or ``uniform``).
        tension: Tangent scale used by the ``uniform`` variant.

    Returns:
        Tuple ``(t1, t2)`` of start and end tangents per segment, expressed
        per unit of local segment parameter.
    """
    if curve_type == "uniform":
        return tension * (p2 - p0), tension * (p3 - p1)

    exponent = _KNOT_EXPONENTS[curve_type]
    dt0 = np.power(np.sum((p1 - p0) ** 2, axis=1), exponent)[:, None]
    dt1 = np.power(np.sum((p2 - p1) ** 2, axis=1), exponent)[:, None]
    dt2 = np.power(np.sum((p3 - p2) ** 2, axis=1), exponent)[:, None]

    # coincident points collapse the knot spacing
    dt1 = np.where(dt1 < MIN_KNOT_SPACING, 1.0, dt1)
    dt0 = np.where(dt0 < MIN_KNOT_SPACING, dt1, dt0)
    dt2 = np.where(dt2 < MIN_KNOT_SPACING, dt1, dt2)

    t1 = (p1 - p0) / dt0 - (p2 - p0) / (dt0 + dt1) + (p2 - p1) / dt1
    t2 = (p2 - p1) / dt1 - (p3 - p1) / (dt1 + dt2) + (p3 - p2) / dt2
    return t1 * dt1, t2 * dt1


def _cubic_coefficients(positions: FloatArray, curve_type: str, tension: float) -> FloatArray:
    """Build cubic polynomial coefficients for every curve segment.

    Args:
        positions: Control-point positions with shape ``(n, 3)`` [m].
        curve_type: Catmull-Rom variant.
        tension: Tangent scale used by the ``uniform`` variant.

    Returns:
        Coefficient array with shape ``(n - 1, 4, 3)`` ordered by ascending
        power of the local segment parameter.
    """
    p0, p1, p2, p3 = _padded_segments(positions)
    t1, t2 = _segment_tangents(p0, p1, p2, p3, curve_type, tension)
    c0 = p1.copy()
    c1 = t1
    c2 = -3.0 * p1 + 3.0 * p2 - 2.0 * t1 - t2
    c3 = 2.0 * p1 - 2.0 * p2 + t1 + t2
    return np.stack([c0, c1, c2, c3], axis=1)


def _locate(
    segment_count: int,
    u: float | FloatArray,
) -> tuple[np.ndarray, FloatArray, FloatArray]:
    """Map normalized parameters to segment indices and local weights.

    Args:
        segment_count: Number of cubic segments.
        u: Normalized curve parameter(s); clamped to ``[0, 1]``.

    Returns:
        Tuple ``(segment_index, local_weight, clamped_u)``. ``u = 1`` maps to
        the last segment with weight one.
    """
    clamped = np.clip(np.asarray(u, dtype=np.float64), 0.0, 1.0)
    scaled = clamped * segment_count
    idx = np.minimum(np.floor(scaled).astype(np.int64), segment_count - 1)
    return idx, scaled - idx, clamped


def _evaluate_segments(
    coefficients: FloatArray,
    last_point: ControlPoint,
    u: float | FloatArray,
) -> FloatArray:
    """Evaluate segment polynomials at normalized parameter(s).

    Args:
        coefficients: Per-segment cubic coefficients, shape ``(n - 1, 4, 3)``.
        last_point: Final control point, returned verbatim for ``u >= 1``.
        u: Normalized curve parameter(s).

    Returns:
        Positions with shape ``(3,)`` for scalar input or ``(k, 3)`` for
        array input [m].
    """
    idx, weight, clamped = _locate(coefficients.shape[0], u)
    c = coefficients[idx]
    w = weight[..., None]
    points = c[..., 0, :] + w * (c[..., 1, :] + w * (c[..., 2, :] + w * c[..., 3, :]))
    end = np.array([last_point.x, last_point.y, last_point.z], dtype=np.float64)
    return np.asarray(np.where((clamped >= 1.0)[..., None], end, points), dtype=np.float64)


@dataclass(frozen=True)
class Curve:
    """Read-only interpolating curve through an ordered set of control points.

    Control point ``j`` of ``n`` sits at parameter ``u = j / (n - 1)``. The
    parametrization is not proportional to arc length; use
    :mod:`coastersim.track.arc_length` to convert travelled distance.

    Args:
        control_points: Ordered control points the curve passes through.
        curve_type: Catmull-Rom variant used to build the segments.
        tension: Tangent scale of the ``uniform`` variant.
        coefficients: Per-segment cubic coefficients, shape ``(n - 1, 4, 3)``.
        arc_length_parameters: Parameter samples of the arc-length table.
        arc_lengths: Cumulative sampled length at each parameter sample [m].
    """

    control_points: tuple[ControlPoint, ...]
    curve_type: str
    tension: float
    coefficients: FloatArray
    arc_length_parameters: FloatArray
    arc_lengths: FloatArray

    @property
    def segment_count(self) -> int:
        """Number of cubic segments.

        Returns:
            ``len(control_points) - 1``.
        """
        return int(self.coefficients.shape[0])

    @property
    def total_length(self) -> float:
        """Sampled curve length [m].

        Returns:
            Final value of the cached cumulative arc-length table [m].
        """
        return float(self.arc_lengths[-1])

    def point_at(self, u: float) -> FloatArray:
        """Evaluate the curve position.

        Args:
            u: Normalized curve parameter, clamped to ``[0, 1]``.

        Returns:
            Position as a ``(3,)`` array [m]. ``u = 0`` and ``u = 1`` return
            the first and last control point exactly.
        """
        return _evaluate_segments(self.coefficients, self.control_points[-1], float(u))

    def sample_points(self, count: int) -> FloatArray:
        """Evaluate the curve at equally spaced parameter values.

        Args:
            count: Number of samples including both endpoints.

        Returns:
            Position array with shape ``(count, 3)`` [m].
        """
        parameters = np.linspace(0.0, 1.0, int(count))
        return _evaluate_segments(self.coefficients, self.control_points[-1], parameters)

    def derivative_at(self, u: float) -> FloatArray:
        """Evaluate ``dP/du`` with respect to the normalized parameter.

        Args:
            u: Normalized curve parameter, clamped to ``[0, 1]``.

        Returns:
            Derivative vector [m].
        """
        idx, weight, _ = _locate(self.segment_count, float(u))
        c = self.coefficients[idx]
        w = float(weight)
        local = c[1] + w * (2.0 * c[2] + 3.0 * w * c[3])
        return np.asarray(local * self.segment_count, dtype=np.float64)

    def tangent_at(self, u: float) -> FloatArray:
        """Evaluate the unit tangent in the direction of increasing ``u``.

        Args:
            u: Normalized curve parameter, clamped to ``[0, 1]``.

        Returns:
            Unit tangent vector. Stationary points fall back to the segment
            chord direction.
        """
        derivative = self.derivative_at(u)
        norm = float(np.linalg.norm(derivative))
        if norm > SMALL_EPS:
            return derivative / norm

        idx, _, _ = _locate(self.segment_count, float(u))
        start = self.control_points[int(idx)].position
        end = self.control_points[int(idx) + 1].position
        for chord in (end - start, self.control_points[-1].position - self.control_points[0].position):
            chord_norm = float(np.linalg.norm(chord))
            if chord_norm > SMALL_EPS:
                return chord / chord_norm
        return np.array([1.0, 0.0, 0.0])

    def banking_at(self, u: float) -> float:
        """Interpolated banking angle at ``u`` [rad]."""
        return banking_at(u, self.control_points)


def build_curve(
    points: Sequence[ControlPoint],
    curve_type: str = DEFAULT_CURVE_TYPE,
    tension: float = DEFAULT_TENSION,
    arc_length_divisions: int = DEFAULT_ARC_LENGTH_DIVISIONS,
) -> Curve:
    """Build an interpolating curve and its arc-length table.

    Args:
        points: Ordered control points (at least two).
        curve_type: Catmull-Rom variant (``centripetal``, ``chordal`` or
            ``uniform``).
        tension: Tangent scale used by the ``uniform`` variant.
        arc_length_divisions: Number of sampled intervals used for the
            cached arc-length table.

    Returns:
        Curve with precomputed segment coefficients and arc-length table.

    Raises:
        coastersim.utils.exceptions.InvalidCurveError: If fewer than two
            points are given, points are non-finite, the variant is unknown,
            the sampling resolution is too coarse, or the curve has zero length.
    """
    control_points = tuple(points)
    validate_control_points(control_points)
    if curve_type not in VALID_CURVE_TYPES:
        msg = f"curve_type must be one of {VALID_CURVE_TYPES}, got: {curve_type!r}"
        raise InvalidCurveError(msg)
    if arc_length_divisions < MIN_ARC_LENGTH_DIVISIONS:
        msg = f"arc_length_divisions must be at least {MIN_ARC_LENGTH_DIVISIONS}"
        raise InvalidCurveError(msg)

    positions = np.array([p.position for p in control_points], dtype=np.float64)
    coefficients = _cubic_coefficients(positions, curve_type, float(tension))

    parameters = np.linspace(0.0, 1.0, int(arc_length_divisions) + 1)
    samples = _evaluate_segments(coefficients, control_points[-1], parameters)
    arc_lengths = np.zeros(parameters.size, dtype=np.float64)
    arc_lengths[1:] = np.cumsum(np.linalg.norm(np.diff(samples, axis=0), axis=1))
    if arc_lengths[-1] <= SMALL_EPS:
        msg = "Curve has zero length"
        raise InvalidCurveError(msg)

    return Curve(
        control_points=control_points,
        curve_type=curve_type,
        tension=float(tension),
        coefficients=coefficients,
        arc_length_parameters=parameters,
        arc_lengths=arc_lengths,
    )
