"""Conversion between travelled distance and curve parameter."""

from __future__ import annotations

import numpy as np

from coastersim.track.curve import Curve


def parameter_for_distance(distance: float, curve: Curve) -> float:
    """Map a travelled distance to the normalized curve parameter.

    Uses the curve's cached arc-length table, so the conversion is consistent
    with ``curve.total_length``. The caller is responsible for clamping
    ``distance`` to ``[0, curve.total_length]``.

    Args:
        distance: Distance travelled from the start of the curve [m].
        curve: Curve providing the sampled arc-length table.

    Returns:
        Parameter ``u`` where the accumulated length first reaches
        ``distance``, linearly interpolated inside the bracketing sample
        interval. Exactly ``0.0`` at the start and ``1.0`` at the end.
    """
    lengths = curve.arc_lengths
    parameters = curve.arc_length_parameters
    if distance <= 0.0:
        return 0.0
    if distance >= lengths[-1]:
        return 1.0

    idx = int(np.searchsorted(lengths, distance, side="left"))
    before = float(lengths[idx - 1])
    after = float(lengths[idx])
    span = after - before
    fraction = (distance - before) / span if span > 0.0 else 0.0
    u_before = float(parameters[idx - 1])
    u_after = float(parameters[idx])
    return u_before + fraction * (u_after - u_before)


def distance_for_parameter(u: float, curve: Curve) -> float:
    """Map a normalized curve parameter to the sampled distance from the start.

    Args:
        u: Normalized curve parameter, clamped to ``[0, 1]``.
        curve: Curve providing the sampled arc-length table.

    Returns:
        Accumulated arc length at ``u`` [m], linearly interpolated between
        table samples.
    """
    clamped = float(np.clip(u, 0.0, 1.0))
    return float(np.interp(clamped, curve.arc_length_parameters, curve.arc_lengths))
