"""
Transition-window blending primitives.

A tabulated normative value applies unchanged away from its bin edges; inside
a symmetric window around each edge it is blended linearly into the next one,
so a patient crossing a bin boundary never sees a step in reference values.
"""
from __future__ import annotations

from dspn.core.base import ReferenceStats


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation. t=0 returns start exactly, t=1 returns end exactly."""
    return start * (1 - t) + end * t


def transition_factor(value: float, threshold: float, window: float) -> float:
    """
    Position of `value` inside the window centred on `threshold`.

    Returns 0 at or below `threshold - window/2`, 1 at or above
    `threshold + window/2`, and a linear ramp in between (0.5 at the
    threshold itself).
    """
    half_window = window / 2
    start = threshold - half_window
    end = threshold + half_window

    if value <= start:
        return 0.0
    if value >= end:
        return 1.0
    return (value - start) / window


def blend_stats(a: ReferenceStats, b: ReferenceStats, t: float) -> ReferenceStats:
    """Blend mean and SD independently."""
    if t <= 0:
        return a
    if t >= 1:
        return b
    return ReferenceStats(mean=lerp(a.mean, b.mean, t), sd=lerp(a.sd, b.sd, t))
