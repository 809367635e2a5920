"""
Scoring Result Types

Immutable records produced by the aggregator. `AnalysisResult` is the stable
contract consumed by report rendering and the clinical-summary collaborator.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from dspn.core.base import Measurement, NerveId, Parameter, is_nr


class Diagnosis(str, Enum):
    NORMAL   = "normal"
    ABNORMAL = "abnormal"


class ConductionPattern(str, Enum):
    """Sub-classification of an abnormal Score #2."""
    NONE         = "none"           # Score #2 normal
    SENSORIMOTOR = "sensorimotor"   # Sural and motor points
    SENSORY      = "sensory"        # Sural points only
    NON_SPECIFIC = "non_specific"   # motor points only


class SeverityGrade(str, Enum):
    NO_AXONAL_DAMAGE = "no_axonal_damage"   # 0
    MILD             = "mild"               # 1-2
    MODERATE         = "moderate"           # 3-5
    SEVERE           = "severe"             # >= 6


class NStage(str, Enum):
    N0 = "N0"
    N1 = "N1"
    N2 = "N2"
    N3 = "N3"


@dataclass(frozen=True)
class ScoreDetail:
    """
    One scored observation.

    `percentile` is None for NR values, which bypass the percentile engine.
    """
    nerve: NerveId
    parameter: Parameter
    label: str
    value: Measurement
    percentile: Optional[float]
    points: int

    def to_dict(self) -> dict:
        return {
            "nerve": self.nerve.value,
            "parameter": self.parameter.value,
            "label": self.label,
            "value": self.value.value if is_nr(self.value) else self.value,
            "percentile": self.percentile,
            "points": self.points,
        }


@dataclass(frozen=True)
class DiagnosticScore:
    """Score #2: conduction velocities plus Sural peak latency."""
    total: int
    is_abnormal: bool
    details: Tuple[ScoreDetail, ...]
    sensory_points: int
    motor_points: int
    diagnosis: Diagnosis
    pattern: ConductionPattern
    interpretation_body: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "is_abnormal": self.is_abnormal,
            "sensory_points": self.sensory_points,
            "motor_points": self.motor_points,
            "diagnosis": self.diagnosis.value,
            "pattern": self.pattern.value,
            "interpretation_body": self.interpretation_body,
            "details": [d.to_dict() for d in self.details],
        }


@dataclass(frozen=True)
class SeverityScore:
    """Score #4: amplitudes of all four nerves."""
    total: int
    is_abnormal: bool
    details: Tuple[ScoreDetail, ...]
    grade: SeverityGrade
    severity_label: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "is_abnormal": self.is_abnormal,
            "grade": self.grade.value,
            "severity_label": self.severity_label,
            "details": [d.to_dict() for d in self.details],
        }


@dataclass(frozen=True)
class AnalysisResult:
    score2: DiagnosticScore
    score4: SeverityScore
    diagnosis_class: str
    severity_class: str              # "{diagnosis} / {severity}"
    language: str
    n_stage: Optional[NStage] = None
    n_stage_description: Optional[str] = None

    def abnormal_findings(self) -> List[str]:
        """Labels of every detail that scored points, Score #2 first."""
        return [
            d.label
            for d in (*self.score2.details, *self.score4.details)
            if d.points > 0
        ]

    def to_dict(self) -> dict:
        return {
            "score2": self.score2.to_dict(),
            "score4": self.score4.to_dict(),
            "diagnosis_class": self.diagnosis_class,
            "severity_class": self.severity_class,
            "language": self.language,
            "n_stage": self.n_stage.value if self.n_stage else None,
            "n_stage_description": self.n_stage_description,
            "abnormal_findings": self.abnormal_findings(),
        }
