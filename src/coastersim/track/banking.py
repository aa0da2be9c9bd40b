"""Banking-angle interpolation between control points."""

from __future__ import annotations

from collections.abc import Sequence

from coastersim.track.models import ControlPoint


def banking_at(u: float, points: Sequence[ControlPoint]) -> float:
    """Interpolate the banking angle at a normalized curve parameter.

    The parameter range ``[0, 1]`` is split into ``len(points) - 1`` equal
    segments. The first segment containing ``u`` (scanning from index 0) is
    used, so a parameter on a segment boundary resolves to the earlier
    segment, where it evaluates to the shared control point's banking.

    Args:
        u: Normalized curve parameter.
        points: Ordered control points of the curve.

    Returns:
        Banking angle [rad]. Parameters past the final segment return the
        last control point's banking.
    """
    if u <= 0.0:
        return float(points[0].banking)

    segment_count = len(points) - 1
    for idx in range(segment_count):
        start = idx / segment_count
        end = (idx + 1) / segment_count
        if start <= u <= end:
            local = (u - start) / (end - start)
            return float((1.0 - local) * points[idx].banking + local * points[idx + 1].banking)

    return float(points[-1].banking)
