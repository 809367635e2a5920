"""
Percentile Engine

Converts a measurement into its cumulative probability under a normative
Gaussian, using the Zelen & Severo polynomial approximation of the standard
normal CDF (Abramowitz & Stegun 26.2.17, |error| < 7.5e-8).

Beyond roughly 8 SD the approximation saturates to exactly 0 or 1, which is
harmless because every scoring cutoff sits well inside that range.
"""
from __future__ import annotations

import math

_P = 0.2316419
_B1 = 0.319381530
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429
_INV_SQRT_2PI = 0.3989422804014327


def z_score(value: float, mean: float, sd: float) -> float:
    return (value - mean) / sd


def _upper_tail(x: float) -> float:
    """P(Z > |x|)."""
    ax = abs(x)
    t = 1.0 / (1.0 + _P * ax)
    density = _INV_SQRT_2PI * math.exp(-ax * ax / 2.0)
    poly = t * (_B1 + t * (_B2 + t * (_B3 + t * (_B4 + t * _B5))))
    return density * poly


def normal_cdf(x: float) -> float:
    """Standard normal CDF. Symmetric by construction: cdf(x) + cdf(-x) == 1."""
    tail = _upper_tail(x)
    return 1.0 - tail if x >= 0 else tail


def percentile(value: float, mean: float, sd: float) -> float:
    """Cumulative probability of `value` under N(mean, sd)."""
    return normal_cdf(z_score(value, mean, sd))
