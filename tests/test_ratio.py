"""Unit tests for ratio helpers."""

import math
import pytest

from edoji.ratio import (
    approximate_fraction,
    cents_to_fraction,
    cents_to_nearest_simple_fraction,
    cents_to_ratio,
    gcd,
    max_prime_factor,
    odd_part,
    ratio_to_cents,
    tenney_height,
)


class TestRatioToCents:
    """Tests for ratio_to_cents."""

    def test_octave_is_1200(self):
        assert ratio_to_cents(2.0) == 1200.0

    def test_unison_is_zero(self):
        assert ratio_to_cents(1.0) == 0.0

    def test_just_fifth(self):
        """3/2 is about 701.96 cents."""
        assert ratio_to_cents(1.5) == pytest.approx(701.955, abs=1e-3)

    def test_zero_is_minus_infinity(self):
        assert ratio_to_cents(0) == -math.inf

    def test_negative_is_nan(self):
        assert math.isnan(ratio_to_cents(-1.0))

    def test_cents_to_ratio_inverse(self):
        assert cents_to_ratio(ratio_to_cents(1.25)) == pytest.approx(1.25)


class TestIntegerHelpers:
    """Tests for gcd, max_prime_factor and odd_part."""

    def test_gcd_basic(self):
        assert gcd(12, 18) == 6

    def test_gcd_uses_absolute_values(self):
        assert gcd(-4, 6) == 2

    def test_gcd_with_one_zero(self):
        assert gcd(0, 5) == 5
        assert gcd(7, 0) == 7

    def test_gcd_both_zero_is_one(self):
        assert gcd(0, 0) == 1

    @pytest.mark.parametrize("n,expected", [
        (0, 1), (1, 1), (2, 2), (8, 2), (9, 3), (15, 5), (91, 13), (97, 97),
    ])
    def test_max_prime_factor(self, n, expected):
        assert max_prime_factor(n) == expected

    def test_odd_part(self):
        assert odd_part(12) == 3
        assert odd_part(7) == 7
        assert odd_part(0) == 1

    def test_tenney_height(self):
        assert tenney_height(3, 2) == pytest.approx(math.log2(6))


class TestApproximateFraction:
    """Tests for the continued-fraction approximation."""

    def test_integer(self):
        assert approximate_fraction(2.0) == (2, 1)

    def test_simple_ratio(self):
        assert approximate_fraction(1.5) == (3, 2)

    def test_pi_limited_denominator(self):
        """With max denominator 100 the best convergent of pi is 22/7."""
        assert approximate_fraction(math.pi, 100) == (22, 7)

    def test_pi_larger_denominator(self):
        assert approximate_fraction(math.pi, 200) == (355, 113)

    def test_non_finite_raises(self):
        with pytest.raises(ValueError):
            approximate_fraction(math.nan)


class TestCentsToNearestSimpleFraction:
    """Tests for cents_to_nearest_simple_fraction."""

    @pytest.mark.parametrize("n,d", [
        (1, 1), (16, 15), (9, 8), (6, 5), (5, 4), (4, 3), (11, 8), (7, 5),
        (3, 2), (8, 5), (13, 8), (5, 3), (7, 4), (15, 8), (81, 64), (243, 128),
    ])
    def test_round_trip(self, n, d):
        """Small octave-band fractions survive a trip through cents."""
        assert cents_to_nearest_simple_fraction(ratio_to_cents(n / d)) == (n, d)

    def test_result_in_octave_band(self):
        n, d = cents_to_nearest_simple_fraction(400.0)
        assert 1 <= n / d < 2

    def test_octave_folds_to_unison(self):
        assert cents_to_nearest_simple_fraction(1200.0) == (1, 1)


class TestCentsToFraction:
    """Tests for cents_to_fraction."""

    @pytest.mark.parametrize("n,d", [(3, 2), (2, 1), (3, 1), (5, 2), (4, 1), (9, 4), (2, 3)])
    def test_octaves_are_kept(self, n, d):
        assert cents_to_fraction(ratio_to_cents(n / d)) == (n, d)

    def test_label_sits_near_its_cents(self):
        n, d = cents_to_fraction(1900.0)
        assert ratio_to_cents(n / d) == pytest.approx(1900.0, abs=1.0)

    def test_just_below_an_octave(self):
        """A residual that rounds up to 2/1 carries into the next octave."""
        assert cents_to_fraction(2399.99) == (4, 1)

    def test_non_finite_raises(self):
        with pytest.raises(ValueError):
            cents_to_fraction(math.inf)
