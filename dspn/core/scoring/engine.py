"""
Nerve Conduction Scoring Engine

Raw readings + patient attributes → reference stats → percentiles → points
→ Score #2 (diagnosis) and Score #4 (axonal severity).

Usage:
    from dspn.core.scoring import NerveConductionEngine

    engine = NerveConductionEngine()
    result = engine.analyze(readings, PatientData(age=58, height=172), language="en")
    print(result.severity_class)      # e.g. "ABNORMAL / MILD"

Stateless and free of shared mutable state: safe to call concurrently.
"""
from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple

from dspn import config
from dspn.core.base import (
    NR,
    NerveId,
    NerveReading,
    NerveType,
    Parameter,
    PatientData,
    RawValue,
)
from dspn.core.reference import get_reference_stats
from dspn.utils import get_logger
from .base import (
    AnalysisResult,
    ConductionPattern,
    Diagnosis,
    DiagnosticScore,
    ScoreDetail,
    SeverityGrade,
    SeverityScore,
)
from .inputs import is_entered, parse_input_value
from .messages import DEFAULT_CATALOGS, MessageCatalog, MessageKey
from .percentiles import percentile
from .rules import MAX_POINTS, calculate_points
from .staging import describe_stage, n_stage

logger = get_logger(__name__)

# ── Classification thresholds ────────────────────────────────────────────────
DIAGNOSTIC_ABNORMAL_TOTAL = 2      # Score #2 >= 2 → abnormal
SEVERITY_MILD_TOTAL       = 1      # Score #4 1-2
SEVERITY_MODERATE_TOTAL   = 3      # Score #4 3-5
SEVERITY_SEVERE_TOTAL     = 6      # Score #4 >= 6

_SEVERITY_KEYS = {
    SeverityGrade.NO_AXONAL_DAMAGE: MessageKey.NO_AXONAL_DAMAGE,
    SeverityGrade.MILD:             MessageKey.MILD,
    SeverityGrade.MODERATE:         MessageKey.MODERATE,
    SeverityGrade.SEVERE:           MessageKey.SEVERE,
}

_DIAGNOSIS_KEYS = {
    Diagnosis.NORMAL:   MessageKey.NORMAL,
    Diagnosis.ABNORMAL: MessageKey.ABNORMAL,
}

_PATTERN_KEYS = {
    ConductionPattern.NONE:         MessageKey.S2_NORMAL_BODY,
    ConductionPattern.SENSORIMOTOR: MessageKey.S2_SENSORIMOTOR_BODY,
    ConductionPattern.SENSORY:      MessageKey.S2_SENSORY_BODY,
    ConductionPattern.NON_SPECIFIC: MessageKey.S2_ABNORMAL_GENERIC,
}


def classify_diagnostic(
    total: int, sensory_points: int, motor_points: int
) -> Tuple[Diagnosis, ConductionPattern]:
    """
    Diagnosis and conduction pattern for a Score #2 total.

    An abnormal total reached without any Sural contribution is reported as
    a non-specific pattern.
    """
    if total < DIAGNOSTIC_ABNORMAL_TOTAL:
        return Diagnosis.NORMAL, ConductionPattern.NONE

    if sensory_points > 0 and motor_points > 0:
        return Diagnosis.ABNORMAL, ConductionPattern.SENSORIMOTOR
    if sensory_points > 0 and motor_points == 0:
        return Diagnosis.ABNORMAL, ConductionPattern.SENSORY
    # TODO: confirm with the clinical reviewers whether a motor-only abnormal
    # Score #2 should keep the generic wording.
    return Diagnosis.ABNORMAL, ConductionPattern.NON_SPECIFIC


def grade_severity(total: int) -> SeverityGrade:
    if total >= SEVERITY_SEVERE_TOTAL:
        return SeverityGrade.SEVERE
    if total >= SEVERITY_MODERATE_TOTAL:
        return SeverityGrade.MODERATE
    if total >= SEVERITY_MILD_TOTAL:
        return SeverityGrade.MILD
    return SeverityGrade.NO_AXONAL_DAMAGE


def diagnostic_parameter(nerve_type: NerveType) -> Parameter:
    """Parameter a nerve contributes to Score #2."""
    return Parameter.VELOCITY if nerve_type == NerveType.MOTOR else Parameter.LATENCY


class NerveConductionEngine:
    """
    Scores one nerve-conduction study.

    Phrase tables are injected as `catalogs` (language code → MessageCatalog);
    the language only selects phrases and never changes the numbers.
    """

    def __init__(
        self,
        catalogs: Mapping[str, MessageCatalog] = DEFAULT_CATALOGS,
        default_language: str = config.DEFAULT_LANGUAGE,
    ):
        if default_language not in catalogs:
            raise ValueError(f"No message catalog for default language '{default_language}'")
        self._catalogs = catalogs
        self._default_language = default_language

    def catalog(self, language: Optional[str] = None) -> MessageCatalog:
        """Catalog for `language`, falling back to the default language."""
        if language is None:
            return self._catalogs[self._default_language]
        catalog = self._catalogs.get(language.lower())
        if catalog is None:
            logger.warning(
                f"NerveConductionEngine: no catalog for language '{language}', "
                f"using '{self._default_language}'"
            )
            return self._catalogs[self._default_language]
        return catalog

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score_observation(
        self,
        nerve: NerveId,
        parameter: Parameter,
        raw: RawValue,
        patient: PatientData,
        label: str,
    ) -> Optional[ScoreDetail]:
        """
        Score a single raw value.

        Returns None when nothing was entered (empty, zero, negative or
        unparseable). NR skips the percentile engine and takes MAX_POINTS.
        """
        value = parse_input_value(raw)
        if not is_entered(value):
            logger.debug(f"{label} {parameter.value}: not entered ({raw!r}), skipped")
            return None

        if value is NR:
            logger.debug(f"{label} {parameter.value}: NR → {MAX_POINTS} pts")
            return ScoreDetail(
                nerve=nerve,
                parameter=parameter,
                label=label,
                value=NR,
                percentile=None,
                points=MAX_POINTS,
            )

        stats = get_reference_stats(nerve, parameter, patient.age, patient.height)
        p = percentile(value, stats.mean, stats.sd)
        points = calculate_points(p, nerve, parameter, patient.age)
        logger.debug(
            f"{label} {parameter.value}: value={value} mean={stats.mean:.2f} "
            f"sd={stats.sd:.2f} percentile={p:.4f} → {points} pts"
        )
        return ScoreDetail(
            nerve=nerve,
            parameter=parameter,
            label=label,
            value=value,
            percentile=p,
            points=points,
        )

    def analyze(
        self,
        readings: Sequence[NerveReading],
        patient: PatientData,
        language: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Run the full Score #2 / Score #4 analysis.

        Args:
            readings: One reading per supported nerve, in display order.
            patient:  Age and height select the normative distributions.
            language: Catalog code for the interpretation phrases.

        Returns:
            A fresh, immutable AnalysisResult.

        Raises:
            ReferenceModelError: the normative table is incomplete for a
                supported nerve. Never raised for malformed measurements.
        """
        catalog = self.catalog(language)

        score2_details: List[ScoreDetail] = []
        score4_details: List[ScoreDetail] = []
        sensory_points = 0
        motor_points = 0

        for reading in readings:
            nerve_type = reading.nerve_type
            nerve_label = catalog.nerve_label(reading.nerve)

            # Score #2: motor velocities and Sural peak latency
            parameter = diagnostic_parameter(nerve_type)
            label = (
                catalog[MessageKey.SURAL_LATENCY_LABEL]
                if parameter == Parameter.LATENCY
                else nerve_label
            )
            detail = self.score_observation(
                reading.nerve, parameter, reading.raw(parameter), patient, label
            )
            if detail is not None:
                score2_details.append(detail)
                if nerve_type == NerveType.MOTOR:
                    motor_points += detail.points
                else:
                    sensory_points += detail.points

            # Score #4: amplitudes of every nerve
            detail = self.score_observation(
                reading.nerve, Parameter.AMPLITUDE, reading.amplitude, patient, nerve_label
            )
            if detail is not None:
                score4_details.append(detail)

        score2 = self._build_diagnostic(score2_details, sensory_points, motor_points, catalog)
        score4 = self._build_severity(score4_details, catalog)

        stage = None
        stage_description = None
        if patient.signs is not None:
            stage = n_stage(score2.is_abnormal, patient.signs)
            stage_description = describe_stage(stage, catalog)

        diagnosis_class = catalog[_DIAGNOSIS_KEYS[score2.diagnosis]]
        result = AnalysisResult(
            score2=score2,
            score4=score4,
            diagnosis_class=diagnosis_class,
            severity_class=f"{diagnosis_class} / {score4.severity_label}",
            language=catalog.language,
            n_stage=stage,
            n_stage_description=stage_description,
        )

        logger.info(
            f"NerveConductionEngine: Score #2={score2.total} "
            f"(sensory={sensory_points}, motor={motor_points}), "
            f"Score #4={score4.total} → {result.severity_class}"
        )
        return result

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    @staticmethod
    def _build_diagnostic(
        details: List[ScoreDetail],
        sensory_points: int,
        motor_points: int,
        catalog: MessageCatalog,
    ) -> DiagnosticScore:
        total = sum(d.points for d in details)
        diagnosis, pattern = classify_diagnostic(total, sensory_points, motor_points)
        return DiagnosticScore(
            total=total,
            is_abnormal=diagnosis == Diagnosis.ABNORMAL,
            details=tuple(details),
            sensory_points=sensory_points,
            motor_points=motor_points,
            diagnosis=diagnosis,
            pattern=pattern,
            interpretation_body=catalog[_PATTERN_KEYS[pattern]],
        )

    @staticmethod
    def _build_severity(details: List[ScoreDetail], catalog: MessageCatalog) -> SeverityScore:
        total = sum(d.points for d in details)
        grade = grade_severity(total)
        return SeverityScore(
            total=total,
            is_abnormal=total >= SEVERITY_MILD_TOTAL,
            details=tuple(details),
            grade=grade,
            severity_label=catalog[_SEVERITY_KEYS[grade]],
        )


_default_engine = NerveConductionEngine()


def run_full_analysis(
    readings: Sequence[NerveReading],
    patient: PatientData,
    language: Optional[str] = None,
) -> AnalysisResult:
    """Functional entry point using the built-in phrase catalogs."""
    return _default_engine.analyze(readings, patient, language)
