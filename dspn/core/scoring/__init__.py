"""
Scoring Layer

Percentile engine, point rules and the Score #2 / Score #4 aggregator.

Usage:
    from dspn.core.scoring import run_full_analysis

    result = run_full_analysis(readings, patient, language="es")
"""
from .base import (
    AnalysisResult,
    ConductionPattern,
    Diagnosis,
    DiagnosticScore,
    NStage,
    ScoreDetail,
    SeverityGrade,
    SeverityScore,
)
from .engine import NerveConductionEngine, run_full_analysis
from .messages import DEFAULT_CATALOGS, MessageCatalog, MessageKey
from .percentiles import normal_cdf, percentile, z_score
from .rules import calculate_points

__all__ = [
    "AnalysisResult",
    "ConductionPattern",
    "Diagnosis",
    "DiagnosticScore",
    "NStage",
    "ScoreDetail",
    "SeverityGrade",
    "SeverityScore",
    "NerveConductionEngine",
    "run_full_analysis",
    "DEFAULT_CATALOGS",
    "MessageCatalog",
    "MessageKey",
    "normal_cdf",
    "percentile",
    "z_score",
    "calculate_points",
]
