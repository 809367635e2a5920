"""
API Schemas
"""
from .analysis import (
    PatientInput,
    ReadingInput,
    AnalysisRequest,
    NerveInfo,
    NerveListResponse,
    HealthResponse,
)

__all__ = [
    "PatientInput",
    "ReadingInput",
    "AnalysisRequest",
    "NerveInfo",
    "NerveListResponse",
    "HealthResponse",
]
