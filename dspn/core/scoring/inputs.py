"""
Raw measurement parsing.

Form values arrive as numbers or free text. Parsing is total: the NR
sentinel is recognised case-insensitively, decimal commas are accepted, a
leading numeric prefix is honoured ("41.5 m/s" → 41.5) and anything else
collapses to 0. Callers needing strict validation must validate upstream.
"""
from __future__ import annotations

import math
import re

from dspn.core.base import NR, Measurement, RawValue, NotRecordable

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_input_value(raw: RawValue) -> Measurement:
    """Parse a raw field into a finite float or NR. Malformed input gives 0.0."""
    if raw is NR:
        return NR
    if raw is None:
        return 0.0

    if isinstance(raw, str):
        text = raw.strip()
        if text.upper() == NotRecordable.NR.value:
            return NR
        match = _LEADING_NUMBER.match(text.replace(",", ".", 1))
        if match is None:
            return 0.0
        value = float(match.group(0))
    elif isinstance(raw, bool):
        return 0.0
    elif isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            # int beyond float range
            return 0.0
    else:
        return 0.0

    return value if math.isfinite(value) else 0.0


def is_entered(value: Measurement) -> bool:
    """NR or a positive number; zero and negatives count as not entered."""
    return value is NR or value > 0
