"""
Normative Reference Tables: Davies et al.

Published age/height-stratified norms re-expressed as continuous models:

    Tibial amplitude   age bins <30 / 30-59 / >=60, windows at 30 and 60
    Fibular amplitude  age bins <40 / >=40, window at 40
    Tibial velocity    height anchors 155 / 165 / 175 cm per age group
                       (<50, >=50), groups blended across a window at 50
    Fibular velocity   height bins split at 170 cm per age group (<40, >=40),
                       groups blended across a window at 40
    Ulnar, Sural       fixed pairs

All windows are 10 units wide (+/- 5 years or cm around the edge).
"""
from __future__ import annotations

from typing import Dict, Tuple

from dspn.core.base import NerveId, Parameter, ReferenceStats
from dspn.utils import get_logger, ReferenceModelError
from .models import Axis, BandedReference, FixedReference, ReferenceModel, anchors

logger = get_logger(__name__)

TRANSITION_WINDOW = 10.0

# ── Amplitude ─────────────────────────────────────────────────────────────────

TIBIAL_AMPLITUDE = BandedReference(
    axis=Axis.AGE,
    bins=(
        ReferenceStats(15.3, 4.5),   # < 30
        ReferenceStats(12.9, 4.5),   # 30-59
        ReferenceStats(9.8, 4.2),    # >= 60
    ),
    thresholds=(30, 60),
    window=TRANSITION_WINDOW,
)

FIBULAR_AMPLITUDE = BandedReference(
    axis=Axis.AGE,
    bins=(
        ReferenceStats(6.8, 2.5),    # < 40
        ReferenceStats(5.1, 2.5),    # >= 40
    ),
    thresholds=(40,),
    window=TRANSITION_WINDOW,
)

# ── Velocity ──────────────────────────────────────────────────────────────────

TIBIAL_VELOCITY = BandedReference(
    axis=Axis.AGE,
    bins=(
        # < 50
        anchors(Axis.HEIGHT, [(155, 51, 4), (165, 49, 6), (175, 47, 5)]),
        # >= 50
        anchors(Axis.HEIGHT, [(155, 49, 5), (165, 45, 5), (175, 44, 5)]),
    ),
    thresholds=(50,),
    window=TRANSITION_WINDOW,
)

FIBULAR_VELOCITY = BandedReference(
    axis=Axis.AGE,
    bins=(
        # < 40
        BandedReference(
            axis=Axis.HEIGHT,
            bins=(ReferenceStats(49, 4), ReferenceStats(46, 4)),
            thresholds=(170,),
            window=TRANSITION_WINDOW,
        ),
        # >= 40
        BandedReference(
            axis=Axis.HEIGHT,
            bins=(ReferenceStats(47, 5), ReferenceStats(44, 4)),
            thresholds=(170,),
            window=TRANSITION_WINDOW,
        ),
    ),
    thresholds=(40,),
    window=TRANSITION_WINDOW,
)

# ── Fixed references ──────────────────────────────────────────────────────────

ULNAR_AMPLITUDE = FixedReference(ReferenceStats(11.6, 2.1))     # mV
ULNAR_VELOCITY  = FixedReference(ReferenceStats(61, 5))         # m/s
SURAL_LATENCY   = FixedReference(ReferenceStats(3.8, 0.3))      # ms
SURAL_AMPLITUDE = FixedReference(ReferenceStats(17, 10))        # uV

# ── Registry: (nerve, parameter) → model ─────────────────────────────────────
NORMATIVE_MODELS: Dict[Tuple[NerveId, Parameter], ReferenceModel] = {
    (NerveId.TIBIAL, Parameter.AMPLITUDE):  TIBIAL_AMPLITUDE,
    (NerveId.TIBIAL, Parameter.VELOCITY):   TIBIAL_VELOCITY,
    (NerveId.FIBULAR, Parameter.AMPLITUDE): FIBULAR_AMPLITUDE,
    (NerveId.FIBULAR, Parameter.VELOCITY):  FIBULAR_VELOCITY,
    (NerveId.ULNAR, Parameter.AMPLITUDE):   ULNAR_AMPLITUDE,
    (NerveId.ULNAR, Parameter.VELOCITY):    ULNAR_VELOCITY,
    (NerveId.SURAL, Parameter.LATENCY):     SURAL_LATENCY,
    (NerveId.SURAL, Parameter.AMPLITUDE):   SURAL_AMPLITUDE,
}


def get_reference_model(nerve: NerveId, parameter: Parameter) -> ReferenceModel:
    model = NORMATIVE_MODELS.get((nerve, parameter))
    if model is None:
        raise ReferenceModelError(
            f"No normative model for {nerve.value} {parameter.value}",
            nerve=nerve.value,
            parameter=parameter.value,
        )
    return model


def get_reference_stats(
    nerve: NerveId,
    parameter: Parameter,
    age: float,
    height: float,
) -> ReferenceStats:
    """
    Normative mean/SD for a nerve parameter at the given age and height.

    Raises:
        ReferenceModelError: no model for the pair, or the model produced a
            non-positive SD. Both mean the normative table itself is broken.
    """
    stats = get_reference_model(nerve, parameter).stats(age, height)
    if not stats.sd > 0:
        raise ReferenceModelError(
            f"Non-positive SD for {nerve.value} {parameter.value}",
            nerve=nerve.value,
            parameter=parameter.value,
            details={"age": age, "height": height, "sd": stats.sd},
        )
    logger.debug(
        f"Reference {nerve.value}/{parameter.value} age={age} height={height}: "
        f"mean={stats.mean:.3f} sd={stats.sd:.3f}"
    )
    return stats
