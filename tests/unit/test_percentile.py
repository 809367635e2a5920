"""
Unit Tests for the Percentile Engine

Checks the closed-form normal CDF against scipy and its structural properties.
"""
import pytest
import numpy as np
from scipy.stats import norm

from dspn.core.scoring import normal_cdf, percentile, z_score


class TestNormalCdf:
    """Tests for normal_cdf()."""

    def test_matches_scipy(self):
        xs = np.linspace(-8, 8, 3201)
        approx = np.array([normal_cdf(x) for x in xs])
        assert np.max(np.abs(approx - norm.cdf(xs))) < 1e-6

    def test_center(self):
        assert normal_cdf(0) == pytest.approx(0.5, abs=1e-6)

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 1.96, 2.326, 3.5, 6.0])
    def test_symmetry(self, x):
        assert normal_cdf(x) + normal_cdf(-x) == pytest.approx(1.0, abs=1e-6)

    def test_monotonic(self):
        xs = np.linspace(-10, 10, 20001)
        values = np.array([normal_cdf(x) for x in xs])
        assert np.all(np.diff(values) >= 0)

    def test_bounded(self):
        for x in np.linspace(-50, 50, 1001):
            assert 0.0 <= normal_cdf(x) <= 1.0

    def test_saturates_far_out(self):
        assert normal_cdf(40) == 1.0
        assert normal_cdf(-40) == 0.0


class TestPercentile:
    """Tests for z_score() and percentile()."""

    def test_z_score(self):
        assert z_score(45, 48, 5.5) == pytest.approx(-3 / 5.5)

    def test_at_mean(self):
        assert percentile(61, 61, 5) == pytest.approx(0.5, abs=1e-6)

    def test_one_sd_below(self):
        assert percentile(3.5, 3.8, 0.3) == pytest.approx(norm.cdf(-1), abs=1e-6)

    def test_slow_latency_high_percentile(self):
        assert percentile(4.4, 3.8, 0.3) == pytest.approx(norm.cdf(2), abs=1e-6)
