"""
Reference-Model Provider

Age/height-adjusted normative distributions (mean, SD) for every supported
nerve and parameter, expressed as continuous blends over tabulated anchors.

Usage:
    from dspn.core.reference import get_reference_stats

    stats = get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, age=58, height=170)
"""
from .blending import transition_factor, lerp, blend_stats
from .models import ReferenceModel, FixedReference, AnchoredReference, BandedReference
from .normative import NORMATIVE_MODELS, get_reference_model, get_reference_stats

__all__ = [
    "transition_factor",
    "lerp",
    "blend_stats",
    "ReferenceModel",
    "FixedReference",
    "AnchoredReference",
    "BandedReference",
    "NORMATIVE_MODELS",
    "get_reference_model",
    "get_reference_stats",
]
