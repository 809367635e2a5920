"""
Unit Tests for the Reference-Model Provider

Transition windows, anchor interpolation and the Davies normative tables.
"""
import pytest
import numpy as np

from dspn.core.base import NerveId, Parameter, ReferenceStats
from dspn.core.reference import (
    transition_factor,
    lerp,
    blend_stats,
    FixedReference,
    AnchoredReference,
    BandedReference,
    NORMATIVE_MODELS,
    get_reference_stats,
)
from dspn.core.reference import normative
from dspn.core.reference.models import Axis, anchors
from dspn.utils import ReferenceModelError


class TestTransitionFactor:
    """Tests for transition_factor()."""

    @pytest.mark.parametrize("value", [0, 20, 24.9, 25])
    def test_below_window_is_zero(self, value):
        assert transition_factor(value, 30, 10) == 0.0

    @pytest.mark.parametrize("value", [35, 35.1, 50, 120])
    def test_above_window_is_one(self, value):
        assert transition_factor(value, 30, 10) == 1.0

    def test_threshold_is_exactly_half(self):
        assert transition_factor(30, 30, 10) == 0.5
        assert transition_factor(170, 170, 10) == 0.5

    def test_linear_ramp(self):
        assert transition_factor(27.5, 30, 10) == pytest.approx(0.25)
        assert transition_factor(32.5, 30, 10) == pytest.approx(0.75)


class TestBlending:
    """Tests for lerp() and blend_stats()."""

    def test_lerp_endpoints_exact(self):
        assert lerp(15.3, 12.9, 0) == 15.3
        assert lerp(15.3, 12.9, 1) == 12.9

    def test_lerp_midpoint(self):
        assert lerp(10, 20, 0.5) == 15

    def test_blend_stats_independent(self):
        a = ReferenceStats(10, 2)
        b = ReferenceStats(20, 4)
        blended = blend_stats(a, b, 0.25)
        assert blended.mean == pytest.approx(12.5)
        assert blended.sd == pytest.approx(2.5)

    def test_blend_stats_outside_returns_anchor(self):
        a = ReferenceStats(10, 2)
        b = ReferenceStats(20, 4)
        assert blend_stats(a, b, 0) is a
        assert blend_stats(a, b, 1) is b


class TestModels:
    """Tests for the composable reference models."""

    def test_fixed_ignores_demographics(self):
        model = FixedReference(ReferenceStats(61, 5))
        assert model.stats(20, 150) == model.stats(80, 190) == ReferenceStats(61, 5)

    def test_anchored_clamps(self):
        model = anchors(Axis.HEIGHT, [(155, 51, 4), (165, 49, 6), (175, 47, 5)])
        assert model.stats(30, 140) == ReferenceStats(51, 4)
        assert model.stats(30, 200) == ReferenceStats(47, 5)

    def test_anchored_interpolates_segments(self):
        model = anchors(Axis.HEIGHT, [(155, 51, 4), (165, 49, 6), (175, 47, 5)])
        low = model.stats(30, 160)
        assert low.mean == pytest.approx(50)
        assert low.sd == pytest.approx(5)
        assert model.stats(30, 165) == ReferenceStats(49, 6)

    def test_anchored_requires_sorted_anchors(self):
        with pytest.raises(ValueError):
            AnchoredReference(
                axis=Axis.AGE,
                anchors=((50, ReferenceStats(1, 1)), (40, ReferenceStats(2, 1))),
            )

    def test_banded_requires_matching_bins(self):
        with pytest.raises(ValueError):
            BandedReference(axis=Axis.AGE, bins=(ReferenceStats(1, 1),), thresholds=(30,))

    def test_banded_rejects_overlapping_windows(self):
        with pytest.raises(ValueError):
            BandedReference(
                axis=Axis.AGE,
                bins=(ReferenceStats(1, 1), ReferenceStats(2, 1), ReferenceStats(3, 1)),
                thresholds=(30, 35),
                window=10,
            )


class TestTibialAmplitude:
    """Three age bins, windows at 30 and 60."""

    @pytest.mark.parametrize("age", [0, 19, 24, 25])
    def test_young(self, age):
        assert get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, age, 170) == ReferenceStats(15.3, 4.5)

    @pytest.mark.parametrize("age", [35, 45, 55])
    def test_middle(self, age):
        assert get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, age, 170) == ReferenceStats(12.9, 4.5)

    @pytest.mark.parametrize("age", [65, 70, 90])
    def test_old(self, age):
        assert get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, age, 170) == ReferenceStats(9.8, 4.2)

    def test_blend_at_30(self):
        stats = get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, 30, 170)
        assert stats.mean == pytest.approx((15.3 + 12.9) / 2)
        assert stats.sd == pytest.approx(4.5)

    def test_blend_at_60(self):
        stats = get_reference_stats(NerveId.TIBIAL, Parameter.AMPLITUDE, 60, 170)
        assert stats.mean == pytest.approx((12.9 + 9.8) / 2)
        assert stats.sd == pytest.approx((4.5 + 4.2) / 2)


class TestFibularAmplitude:

    def test_anchors(self):
        assert get_reference_stats(NerveId.FIBULAR, Parameter.AMPLITUDE, 34, 170) == ReferenceStats(6.8, 2.5)
        assert get_reference_stats(NerveId.FIBULAR, Parameter.AMPLITUDE, 46, 170) == ReferenceStats(5.1, 2.5)

    def test_blend_at_40(self):
        stats = get_reference_stats(NerveId.FIBULAR, Parameter.AMPLITUDE, 40, 170)
        assert stats.mean == pytest.approx(5.95)


class TestTibialVelocity:
    """Height anchors per age group, groups blended at 50."""

    def test_young_height_anchors(self):
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 30, 150) == ReferenceStats(51, 4)
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 30, 165) == ReferenceStats(49, 6)
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 30, 190) == ReferenceStats(47, 5)

    def test_old_height_anchors(self):
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 70, 155) == ReferenceStats(49, 5)
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 70, 165) == ReferenceStats(45, 5)
        assert get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 70, 175) == ReferenceStats(44, 5)

    def test_height_interpolation(self):
        stats = get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 45, 170)
        assert stats.mean == pytest.approx(48)
        assert stats.sd == pytest.approx(5.5)

    def test_age_blend_at_50(self):
        stats = get_reference_stats(NerveId.TIBIAL, Parameter.VELOCITY, 50, 165)
        assert stats.mean == pytest.approx(47)
        assert stats.sd == pytest.approx(5.5)


class TestFibularVelocity:
    """Height blended at 170 per age group, groups blended at 40."""

    def test_corners(self):
        assert get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 30, 160) == ReferenceStats(49, 4)
        assert get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 30, 180) == ReferenceStats(46, 4)
        assert get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 60, 160) == ReferenceStats(47, 5)
        assert get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 60, 180) == ReferenceStats(44, 4)

    def test_height_blend(self):
        stats = get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 60, 170)
        assert stats.mean == pytest.approx(45.5)
        assert stats.sd == pytest.approx(4.5)

    def test_both_blends(self):
        stats = get_reference_stats(NerveId.FIBULAR, Parameter.VELOCITY, 40, 170)
        assert stats.mean == pytest.approx(46.5)
        assert stats.sd == pytest.approx(4.25)


class TestNormativeRegistry:
    """Tests for the (nerve, parameter) → model table."""

    def test_every_nerve_has_complete_stats(self):
        expected = {
            (NerveId.TIBIAL, Parameter.VELOCITY), (NerveId.TIBIAL, Parameter.AMPLITUDE),
            (NerveId.FIBULAR, Parameter.VELOCITY), (NerveId.FIBULAR, Parameter.AMPLITUDE),
            (NerveId.ULNAR, Parameter.VELOCITY), (NerveId.ULNAR, Parameter.AMPLITUDE),
            (NerveId.SURAL, Parameter.LATENCY), (NerveId.SURAL, Parameter.AMPLITUDE),
        }
        assert set(NORMATIVE_MODELS) == expected

    def test_fixed_references(self):
        assert get_reference_stats(NerveId.ULNAR, Parameter.VELOCITY, 50, 170) == ReferenceStats(61, 5)
        assert get_reference_stats(NerveId.ULNAR, Parameter.AMPLITUDE, 50, 170) == ReferenceStats(11.6, 2.1)
        assert get_reference_stats(NerveId.SURAL, Parameter.LATENCY, 50, 170) == ReferenceStats(3.8, 0.3)
        assert get_reference_stats(NerveId.SURAL, Parameter.AMPLITUDE, 50, 170) == ReferenceStats(17, 10)

    def test_missing_pair_raises(self):
        with pytest.raises(ReferenceModelError) as exc_info:
            get_reference_stats(NerveId.ULNAR, Parameter.LATENCY, 50, 170)
        assert exc_info.value.code == "REFERENCE_MODEL_ERROR"
        assert exc_info.value.details["nerve"] == NerveId.ULNAR.value

    def test_zero_sd_raises(self, monkeypatch):
        monkeypatch.setitem(
            normative.NORMATIVE_MODELS,
            (NerveId.ULNAR, Parameter.VELOCITY),
            FixedReference(ReferenceStats(61, 0)),
        )
        with pytest.raises(ReferenceModelError):
            get_reference_stats(NerveId.ULNAR, Parameter.VELOCITY, 50, 170)

    @pytest.mark.parametrize("key", sorted(NORMATIVE_MODELS, key=lambda k: (k[0].value, k[1].value)))
    def test_continuous_across_age(self, key):
        """No step larger than the ramp slope allows anywhere in 0-100 years."""
        nerve, parameter = key
        ages = np.arange(0, 100, 0.05)
        means = np.array([get_reference_stats(nerve, parameter, a, 168).mean for a in ages])
        sds = np.array([get_reference_stats(nerve, parameter, a, 168).sd for a in ages])
        assert np.max(np.abs(np.diff(means))) < 0.05
        assert np.max(np.abs(np.diff(sds))) < 0.05
        assert np.all(sds > 0)

    @pytest.mark.parametrize("nerve", [NerveId.TIBIAL, NerveId.FIBULAR])
    def test_velocity_continuous_across_height(self, nerve):
        heights = np.arange(140, 200, 0.05)
        means = np.array([get_reference_stats(nerve, Parameter.VELOCITY, 47, h).mean for h in heights])
        assert np.max(np.abs(np.diff(means))) < 0.05
