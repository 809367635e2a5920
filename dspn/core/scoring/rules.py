"""
Scoring Rules: percentile → points (0, 1, 2)

Cutoffs are strict inequalities: a percentile landing exactly on a cutoff
takes the less severe branch.

Evaluation order:
    1. Peak latency (Sural):   one-sided high tail, > 0.99 → 2, > 0.97 → 1
    2. Amplitude exceptions:   nerve (and age band) specific low-tail cutoffs
    3. Generic low-tail rule:  < 0.01 → 2, < 0.03 → 1
       (all velocities, and amplitudes with no matching exception)

The normative means are continuous in age, but the amplitude exception
cutoffs still switch at hard age-band edges.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from dspn.core.base import NerveId, Parameter

MAX_POINTS = 2


class Tail(str, Enum):
    LOW  = "low"     # small percentiles are abnormal
    HIGH = "high"    # large percentiles are abnormal (latency)


@dataclass(frozen=True)
class Cutoffs:
    """Two-step cutoff pair: `severe` gives 2 points, `mild` gives 1."""
    severe: float
    mild: float
    tail: Tail = Tail.LOW

    def points(self, percentile: float) -> int:
        if self.tail == Tail.HIGH:
            if percentile > self.severe:
                return 2
            if percentile > self.mild:
                return 1
            return 0
        if percentile < self.severe:
            return 2
        if percentile < self.mild:
            return 1
        return 0


@dataclass(frozen=True)
class AmplitudeException:
    """Amplitude cutoffs replacing the generic rule, optionally age-bounded (inclusive)."""
    cutoffs: Cutoffs
    min_age: Optional[int] = None
    max_age: Optional[int] = None

    def applies(self, age: float) -> bool:
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True


GENERIC_CUTOFFS = Cutoffs(severe=0.01, mild=0.03)
LATENCY_CUTOFFS = Cutoffs(severe=0.99, mild=0.97, tail=Tail.HIGH)


@dataclass(frozen=True)
class NerveProfile:
    """Static scoring identity of a supported nerve."""
    nerve: NerveId
    amplitude_exception: Optional[AmplitudeException] = None


# ── Registry: nerve → scoring profile ────────────────────────────────────────
NERVE_PROFILES: Dict[NerveId, NerveProfile] = {
    NerveId.TIBIAL: NerveProfile(
        nerve=NerveId.TIBIAL,
        amplitude_exception=AmplitudeException(
            Cutoffs(severe=0.018, mild=0.030), min_age=60, max_age=79
        ),
    ),
    NerveId.FIBULAR: NerveProfile(
        nerve=NerveId.FIBULAR,
        amplitude_exception=AmplitudeException(
            Cutoffs(severe=0.03, mild=0.055), min_age=40, max_age=79
        ),
    ),
    NerveId.ULNAR: NerveProfile(
        nerve=NerveId.ULNAR,
    ),
    NerveId.SURAL: NerveProfile(
        nerve=NerveId.SURAL,
        amplitude_exception=AmplitudeException(Cutoffs(severe=0.067, mild=0.097)),
    ),
}


def cutoffs_for(nerve: NerveId, parameter: Parameter, age: float) -> Cutoffs:
    """Select the cutoff pair that governs a nerve parameter at this age."""
    if parameter == Parameter.LATENCY:
        return LATENCY_CUTOFFS

    if parameter == Parameter.AMPLITUDE:
        exception = NERVE_PROFILES[nerve].amplitude_exception
        if exception is not None and exception.applies(age):
            return exception.cutoffs

    return GENERIC_CUTOFFS


def calculate_points(
    percentile: float,
    nerve: NerveId,
    parameter: Parameter,
    age: float,
) -> int:
    """Points (0, 1 or 2) for one percentile."""
    return cutoffs_for(nerve, parameter, age).points(percentile)
