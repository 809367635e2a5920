"""
Composable normative reference models.

Each model answers `stats(age, height) -> ReferenceStats`. Three shapes cover
every published table:

    FixedReference     constant pair, no demographic dependency
    AnchoredReference  clamped piecewise-linear curve through anchor points
    BandedReference    adjacent bins blended across symmetric transition
                       windows; bins may be constants or nested models, which
                       is how age x height tables are expressed

Models are immutable and hold no state between calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

from dspn.core.base import ReferenceStats
from .blending import blend_stats, transition_factor


class Axis(str, Enum):
    """Patient attribute a model varies along."""
    AGE    = "age"
    HEIGHT = "height"


def _axis_value(axis: Axis, age: float, height: float) -> float:
    return age if axis == Axis.AGE else height


class ReferenceModel:
    """Base class: a normative distribution as a function of age and height."""

    def stats(self, age: float, height: float) -> ReferenceStats:
        raise NotImplementedError


@dataclass(frozen=True)
class FixedReference(ReferenceModel):
    value: ReferenceStats

    def stats(self, age: float, height: float) -> ReferenceStats:
        return self.value


@dataclass(frozen=True)
class AnchoredReference(ReferenceModel):
    """
    Piecewise-linear interpolation between anchor points along one axis.

    Values outside the anchor range clamp to the nearest anchor.
    """
    axis: Axis
    anchors: Tuple[Tuple[float, ReferenceStats], ...]

    def __post_init__(self):
        if len(self.anchors) < 2:
            raise ValueError("AnchoredReference needs at least two anchors")
        positions = [x for x, _ in self.anchors]
        if positions != sorted(positions):
            raise ValueError("AnchoredReference anchors must be sorted")

    def stats(self, age: float, height: float) -> ReferenceStats:
        x = _axis_value(self.axis, age, height)
        first_x, first = self.anchors[0]
        last_x, last = self.anchors[-1]
        if x <= first_x:
            return first
        if x >= last_x:
            return last

        for (lo_x, lo), (hi_x, hi) in zip(self.anchors, self.anchors[1:]):
            if x < hi_x:
                return blend_stats(lo, hi, (x - lo_x) / (hi_x - lo_x))
        return last


Bin = Union[ReferenceStats, ReferenceModel]


@dataclass(frozen=True)
class BandedReference(ReferenceModel):
    """
    Adjacent bins separated by thresholds, blended across a window.

    `bins` has one more entry than `thresholds`. Far from every threshold the
    result equals the tabulated bin exactly; inside the window around
    thresholds[i] it ramps linearly from bins[i] to bins[i + 1].
    """
    axis: Axis
    bins: Tuple[Bin, ...]
    thresholds: Tuple[float, ...]
    window: float = 10.0

    def __post_init__(self):
        if len(self.bins) != len(self.thresholds) + 1:
            raise ValueError("BandedReference needs exactly one more bin than thresholds")
        if list(self.thresholds) != sorted(self.thresholds):
            raise ValueError("BandedReference thresholds must be sorted")
        # Overlapping windows would make the blend depend on three bins at once
        for lower, upper in zip(self.thresholds, self.thresholds[1:]):
            if upper - lower < self.window:
                raise ValueError("BandedReference transition windows overlap")

    def stats(self, age: float, height: float) -> ReferenceStats:
        x = _axis_value(self.axis, age, height)
        for i, threshold in enumerate(self.thresholds):
            t = transition_factor(x, threshold, self.window)
            if t < 1:
                lower = self._resolve(self.bins[i], age, height)
                if t == 0:
                    return lower
                upper = self._resolve(self.bins[i + 1], age, height)
                return blend_stats(lower, upper, t)
        return self._resolve(self.bins[-1], age, height)

    @staticmethod
    def _resolve(bin_: Bin, age: float, height: float) -> ReferenceStats:
        if isinstance(bin_, ReferenceStats):
            return bin_
        return bin_.stats(age, height)


def anchors(axis: Axis, points: Sequence[Tuple[float, float, float]]) -> AnchoredReference:
    """Build an AnchoredReference from (position, mean, sd) triples."""
    return AnchoredReference(
        axis=axis,
        anchors=tuple((x, ReferenceStats(mean, sd)) for x, mean, sd in points),
    )
