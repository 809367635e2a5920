"""
N staging from conduction results and clinical signs.

    N0  Score #2 normal
    N1  abnormal conductions, no signs of neuropathy
    N2  abnormal conductions, signs in feet or legs
    N3  abnormal conductions, thigh involvement
"""
from __future__ import annotations

from dspn.core.base import NeuropathySigns
from .base import NStage
from .messages import MessageCatalog, MessageKey

_STAGE_BY_SIGNS = {
    NeuropathySigns.NONE:      NStage.N1,
    NeuropathySigns.FEET_LEGS: NStage.N2,
    NeuropathySigns.THIGH:     NStage.N3,
}

_DESCRIPTION_KEYS = {
    NStage.N0: MessageKey.N0_DESC,
    NStage.N1: MessageKey.N1_DESC,
    NStage.N2: MessageKey.N2_DESC,
    NStage.N3: MessageKey.N3_DESC,
}


def n_stage(conductions_abnormal: bool, signs: NeuropathySigns) -> NStage:
    if not conductions_abnormal:
        return NStage.N0
    return _STAGE_BY_SIGNS[signs]


def describe_stage(stage: NStage, catalog: MessageCatalog) -> str:
    return catalog[_DESCRIPTION_KEYS[stage]]
