"""
Request / response schemas for the analysis API.

Measurement fields accept numbers or free text ("NR", "41,5") on purpose:
parsing is the engine's job, and it never rejects a measurement.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from dspn import config
from dspn.core.base import NerveId, NerveReading, NeuropathySigns, PatientData

RawField = Optional[Union[float, str]]


class PatientInput(BaseModel):
    """Patient attributes selecting the normative distributions."""
    age: int = Field(..., ge=0, le=120, description="Age in years")
    height: float = Field(..., gt=0, le=250, description="Height in cm")
    weight: Optional[float] = Field(default=None, gt=0, description="Weight in kg")
    signs: Optional[NeuropathySigns] = Field(
        default=None, description="Clinical signs of polyneuropathy, enables N staging"
    )

    def to_patient(self) -> PatientData:
        return PatientData(age=self.age, height=self.height, weight=self.weight, signs=self.signs)


class ReadingInput(BaseModel):
    """Raw measurements for one nerve."""
    nerve: NerveId
    velocity: RawField = Field(default=None, description="m/s (motor nerves)")
    amplitude: RawField = Field(default=None, description="mV motor / uV sensory")
    peak_latency: RawField = Field(default=None, description="ms (Sural)")

    def to_reading(self) -> NerveReading:
        return NerveReading(
            nerve=self.nerve,
            velocity=self.velocity,
            amplitude=self.amplitude,
            peak_latency=self.peak_latency,
        )


class AnalysisRequest(BaseModel):
    patient: PatientInput
    readings: List[ReadingInput] = Field(..., min_length=1)
    language: str = Field(default=config.DEFAULT_LANGUAGE, description="Phrase table (es/en)")


class NerveInfo(BaseModel):
    nerve: str
    type: str
    label: str
    parameters: List[str]


class NerveListResponse(BaseModel):
    nerves: List[NerveInfo]


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    uptime_seconds: float
