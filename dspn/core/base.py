"""
Core Input Types

Nerve identities, measured parameters, the not-recordable sentinel and the
immutable patient / reading records shared by the reference models and the
scoring engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class NerveId(str, Enum):
    """Nerves covered by the Davies normative tables."""
    TIBIAL  = "tibial_motor"
    FIBULAR = "fibular_motor"
    ULNAR   = "ulnar_motor"
    SURAL   = "sural_sensory"


class NerveType(str, Enum):
    MOTOR   = "motor"
    SENSORY = "sensory"


class Parameter(str, Enum):
    """Measured conduction parameter."""
    VELOCITY  = "velocity"       # m/s, motor nerves
    AMPLITUDE = "amplitude"      # mV (motor) / uV (sensory)
    LATENCY   = "peak_latency"   # ms, Sural only


class NotRecordable(str, Enum):
    """
    Sentinel for a response that could not be elicited.

    NR is a first-class value, not missing data: it is always scored at the
    maximum point value of its score family.
    """
    NR = "NR"

    def __repr__(self) -> str:
        return "NR"


NR = NotRecordable.NR

# Parsed measurement: a finite number or the NR sentinel
Measurement = Union[float, NotRecordable]
# Raw form input before parsing ("12,5", "nr", 41, None ...)
RawValue = Union[str, float, int, None]


def is_nr(value: object) -> bool:
    return value is NR


NERVE_TYPES = {
    NerveId.TIBIAL:  NerveType.MOTOR,
    NerveId.FIBULAR: NerveType.MOTOR,
    NerveId.ULNAR:   NerveType.MOTOR,
    NerveId.SURAL:   NerveType.SENSORY,
}

# Parameters each nerve type contributes to the scores
NERVE_PARAMETERS = {
    NerveType.MOTOR:   (Parameter.VELOCITY, Parameter.AMPLITUDE),
    NerveType.SENSORY: (Parameter.LATENCY, Parameter.AMPLITUDE),
}


class NeuropathySigns(str, Enum):
    """Clinical signs of polyneuropathy reported by the examiner."""
    NONE      = "none"
    FEET_LEGS = "feet_legs"
    THIGH     = "thigh"


@dataclass(frozen=True)
class PatientData:
    """
    Patient attributes that select the normative distribution.

    Attributes:
        age:    Years (integer, >= 0).
        height: Centimetres.
        weight: Kilograms, informational only.
        signs:  Optional clinical signs, enables N staging when given.
    """
    age: int
    height: float
    weight: Optional[float] = None
    signs: Optional[NeuropathySigns] = None


@dataclass(frozen=True)
class NerveReading:
    """
    Raw measurements for one nerve, exactly as entered.

    Motor nerves carry velocity + amplitude; the Sural (sensory) nerve
    carries peak latency + amplitude. Values stay raw here and are parsed
    by the engine so that malformed input never prevents a result.
    """
    nerve: NerveId
    velocity: RawValue = None
    amplitude: RawValue = None
    peak_latency: RawValue = None

    @property
    def nerve_type(self) -> NerveType:
        return NERVE_TYPES[self.nerve]

    def raw(self, parameter: Parameter) -> RawValue:
        if parameter == Parameter.VELOCITY:
            return self.velocity
        if parameter == Parameter.LATENCY:
            return self.peak_latency
        return self.amplitude


@dataclass(frozen=True)
class ReferenceStats:
    """Mean / standard deviation of a normative Gaussian."""
    mean: float
    sd: float
