"""
Interpretation phrase tables.

The engine never reads a global string table: a `MessageCatalog` (key →
localized phrase) is injected into the aggregator and selected per call by
language code. Phrase choice never affects numeric results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from dspn.core.base import NerveId


class MessageKey(str, Enum):
    # Score #2 diagnosis
    NORMAL               = "normal"
    ABNORMAL             = "abnormal"
    S2_NORMAL_BODY       = "s2_normal_body"
    S2_SENSORY_BODY      = "s2_sensory_body"
    S2_SENSORIMOTOR_BODY = "s2_sensorimotor_body"
    S2_ABNORMAL_GENERIC  = "s2_abnormal_generic"
    # Score #4 severity
    NO_AXONAL_DAMAGE     = "no_axonal_damage"
    MILD                 = "mild"
    MODERATE             = "moderate"
    SEVERE               = "severe"
    # Detail labels
    TIBIAL_LABEL         = "tibial_label"
    FIBULAR_LABEL        = "fibular_label"
    ULNAR_LABEL          = "ulnar_label"
    SURAL_LABEL          = "sural_label"
    SURAL_LATENCY_LABEL  = "sural_latency_label"
    # N staging
    N0_DESC              = "n0_desc"
    N1_DESC              = "n1_desc"
    N2_DESC              = "n2_desc"
    N3_DESC              = "n3_desc"


NERVE_LABEL_KEYS = {
    NerveId.TIBIAL:  MessageKey.TIBIAL_LABEL,
    NerveId.FIBULAR: MessageKey.FIBULAR_LABEL,
    NerveId.ULNAR:   MessageKey.ULNAR_LABEL,
    NerveId.SURAL:   MessageKey.SURAL_LABEL,
}


@dataclass(frozen=True)
class MessageCatalog:
    """Immutable, complete phrase table for one language."""
    language: str
    messages: Mapping[MessageKey, str] = field(default_factory=dict)

    def __post_init__(self):
        missing = [k.value for k in MessageKey if k not in self.messages]
        if missing:
            raise ValueError(
                f"MessageCatalog '{self.language}' is missing keys: {', '.join(missing)}"
            )
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    def __getitem__(self, key: MessageKey) -> str:
        return self.messages[key]

    def nerve_label(self, nerve: NerveId) -> str:
        return self.messages[NERVE_LABEL_KEYS[nerve]]


SPANISH = MessageCatalog(
    language="es",
    messages={
        MessageKey.NORMAL: "NORMAL",
        MessageKey.ABNORMAL: "ANORMAL",
        MessageKey.S2_NORMAL_BODY: "NEUROCONDUCCIONES NORMALES, NEGATIVO PARA POLINEUROPATÍA",
        MessageKey.S2_SENSORY_BODY: (
            "NEUROCONDUCCIONES ANORMALES COMPATIBLES CON POLINEUROPATÍA DIABÉTICA SENSITIVA"
        ),
        MessageKey.S2_SENSORIMOTOR_BODY: (
            "NEUROCONDUCCIONES ANORMALES COMPATIBLES CON POLINEUROPATÍA DIABÉTICA SENSITIVO MOTORA"
        ),
        MessageKey.S2_ABNORMAL_GENERIC: "NEUROCONDUCCIONES ANORMALES (Patrón No Específico)",
        MessageKey.NO_AXONAL_DAMAGE: "SIN EVIDENCIA DE DAÑO AXONAL",
        MessageKey.MILD: "LEVE",
        MessageKey.MODERATE: "MODERADA",
        MessageKey.SEVERE: "SEVERA",
        MessageKey.TIBIAL_LABEL: "Tibial (Motor)",
        MessageKey.FIBULAR_LABEL: "Fibular (Motor)",
        MessageKey.ULNAR_LABEL: "Ulnar (Motor)",
        MessageKey.SURAL_LABEL: "Sural (Sensitivo)",
        MessageKey.SURAL_LATENCY_LABEL: "Sural (Latencia)",
        MessageKey.N0_DESC: "Sin anomalías en las neuroconducciones",
        MessageKey.N1_DESC: "Neuroconducciones anormales sin signos de neuropatía",
        MessageKey.N2_DESC: (
            "Neuroconducciones anormales y signos de polineuropatía en pies o piernas"
        ),
        MessageKey.N3_DESC: "Neuroconducciones anormales y signos de afectación del muslo",
    },
)

ENGLISH = MessageCatalog(
    language="en",
    messages={
        MessageKey.NORMAL: "NORMAL",
        MessageKey.ABNORMAL: "ABNORMAL",
        MessageKey.S2_NORMAL_BODY: "NORMAL NERVE CONDUCTIONS, NEGATIVE FOR POLYNEUROPATHY",
        MessageKey.S2_SENSORY_BODY: (
            "ABNORMAL NERVE CONDUCTIONS COMPATIBLE WITH SENSORY DIABETIC POLYNEUROPATHY"
        ),
        MessageKey.S2_SENSORIMOTOR_BODY: (
            "ABNORMAL NERVE CONDUCTIONS COMPATIBLE WITH SENSORIMOTOR DIABETIC POLYNEUROPATHY"
        ),
        MessageKey.S2_ABNORMAL_GENERIC: "ABNORMAL NERVE CONDUCTIONS (Non-specific Pattern)",
        MessageKey.NO_AXONAL_DAMAGE: "NO EVIDENCE OF AXONAL DAMAGE",
        MessageKey.MILD: "MILD",
        MessageKey.MODERATE: "MODERATE",
        MessageKey.SEVERE: "SEVERE",
        MessageKey.TIBIAL_LABEL: "Tibial (Motor)",
        MessageKey.FIBULAR_LABEL: "Fibular (Motor)",
        MessageKey.ULNAR_LABEL: "Ulnar (Motor)",
        MessageKey.SURAL_LABEL: "Sural (Sensory)",
        MessageKey.SURAL_LATENCY_LABEL: "Sural (Latency)",
        MessageKey.N0_DESC: "No anomalies in nerve conductions",
        MessageKey.N1_DESC: "Abnormal nerve conductions without signs of neuropathy",
        MessageKey.N2_DESC: (
            "Abnormal nerve conductions and signs of polyneuropathy in feet or legs"
        ),
        MessageKey.N3_DESC: "Abnormal nerve conductions and signs of thigh involvement",
    },
)

DEFAULT_CATALOGS: Mapping[str, MessageCatalog] = MappingProxyType({
    SPANISH.language: SPANISH,
    ENGLISH.language: ENGLISH,
})
