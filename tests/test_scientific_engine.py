import math

import pytest

from calculator import ScientificEngine
from calculator import error as E


class TestGcd:

    def test_gcd_of_two_integers(self):
        assert ScientificEngine.gcd(12, 18) == 6

    def test_gcd_returns_float(self):
        assert isinstance(ScientificEngine.gcd(12, 18), float)

    def test_gcd_uses_absolute_values(self):
        assert ScientificEngine.gcd(-12, 18) == 6

    def test_gcd_truncates_fractions(self):
        assert ScientificEngine.gcd(12.9, 18.2) == 6

    def test_gcd_with_zero(self):
        assert ScientificEngine.gcd(7, 0) == 7
        assert ScientificEngine.gcd(0, 7) == 7


class TestExponentFraction:

    def test_reduces_to_lowest_terms(self):
        assert ScientificEngine.exponent_fraction(0.75) == (3, 4)

    def test_half(self):
        assert ScientificEngine.exponent_fraction(0.5) == (1, 2)

    def test_keeps_integer_part(self):
        assert ScientificEngine.exponent_fraction(2.5) == (5, 2)

    def test_negative_exponent_keeps_sign_on_numerator(self):
        assert ScientificEngine.exponent_fraction(-0.75) == (-3, 4)

    def test_fraction_that_cannot_be_reduced(self):
        assert ScientificEngine.exponent_fraction(0.3333333333) == (3333333333, 10 ** 10)

    def test_non_terminating_exponent_is_rounded_to_twelve_digits(self):
        assert ScientificEngine.exponent_fraction(1 / 3) == (333333333333, 10 ** 12)

    def test_decimal_digits_drops_trailing_zeros(self):
        assert ScientificEngine.decimal_digits(0.75) == (0, "75")
        assert ScientificEngine.decimal_digits(3.0) == (3, "")


class TestIntegerPower:

    def test_square_and_multiply(self):
        assert ScientificEngine.integer_power(2.0, 10) == 1024.0

    def test_zero_exponent(self):
        assert ScientificEngine.integer_power(5.0, 0) == 1.0

    def test_negative_base(self):
        assert ScientificEngine.integer_power(-3.0, 3) == -27.0

    def test_large_exponent_overflows_to_infinity(self):
        assert ScientificEngine.integer_power(10.0, 400) == math.inf


class TestPower:

    def test_integer_exponent(self):
        assert ScientificEngine.power(2, 3) == 8

    def test_negative_exponent_is_reciprocal(self):
        assert ScientificEngine.power(2, -2) == 0.25

    def test_zero_exponent(self):
        assert ScientificEngine.power(5, 0) == 1
        assert ScientificEngine.power(0, 0) == 1

    def test_half_is_square_root(self):
        assert ScientificEngine.power(2, 0.5) == pytest.approx(math.sqrt(2), rel=1e-12)

    def test_three_quarters(self):
        assert ScientificEngine.power(16, 0.75) == pytest.approx(8, rel=1e-12)

    def test_long_decimal_exponent_approaches_cube_root(self):
        assert ScientificEngine.power(8, 0.3333333333) == pytest.approx(2, abs=1e-9)

    def test_rounded_third(self):
        assert ScientificEngine.power(27, 1 / 3) == pytest.approx(3, rel=1e-9)

    def test_exponent_with_integer_and_fractional_part(self):
        assert ScientificEngine.power(4, 2.5) == pytest.approx(32, rel=1e-12)
        assert ScientificEngine.power(10, 1.25) == pytest.approx(10 ** 1.25, rel=1e-12)

    def test_base_below_one(self):
        assert ScientificEngine.power(0.25, 0.5) == pytest.approx(0.5, rel=1e-12)
        assert ScientificEngine.power(0.5, 0.123) == pytest.approx(0.5 ** 0.123, rel=1e-12)

    def test_negative_base_with_odd_denominator(self):
        assert ScientificEngine.power(-8, 0.2) == pytest.approx(-(8 ** 0.2), rel=1e-12)

    def test_negative_base_with_even_denominator_is_invalid(self):
        with pytest.raises(E.InvalidRoot):
            ScientificEngine.power(-4, 0.5)

    def test_negative_base_integer_exponent(self):
        assert ScientificEngine.power(-2, 3) == -8

    def test_tiny_exponent_rounds_to_zero(self):
        assert ScientificEngine.power(2, 1e-13) == 1.0

    def test_zero_to_negative_power_is_infinite(self):
        assert ScientificEngine.power(0, -1) == math.inf

    def test_zero_base_fractional_exponent(self):
        assert ScientificEngine.power(0, 0.5) == 0
        assert ScientificEngine.power(0, 0.37) == 0


class TestRoot:

    def test_cube_root(self):
        assert ScientificEngine.root(27, 3) == pytest.approx(3, rel=1e-12)

    def test_odd_root_of_negative_number(self):
        assert ScientificEngine.root(-8, 3) == pytest.approx(-2, rel=1e-12)

    def test_even_root_of_negative_number_is_invalid(self):
        with pytest.raises(E.InvalidRoot):
            ScientificEngine.root(-16, 4)

    def test_zeroth_root_is_invalid(self):
        with pytest.raises(E.InvalidRoot):
            ScientificEngine.root(5, 0)

    def test_root_of_zero(self):
        assert ScientificEngine.root(0, 5) == 0

    def test_very_large_and_very_small_numbers(self):
        assert ScientificEngine.root(1e300, 10) == pytest.approx(1e30, rel=1e-12)
        assert ScientificEngine.root(1e-300, 10) == pytest.approx(1e-30, rel=1e-12)

    def test_square_root_matches_math(self):
        assert ScientificEngine.root(2, 2) == pytest.approx(math.sqrt(2), rel=1e-12)

    def test_newton_root_returns_last_guess_at_iteration_cap(self, monkeypatch):
        monkeypatch.setattr(ScientificEngine, "MAX_ITERATIONS", 1)
        guess = ScientificEngine.newton_root(9.0, 2.0)
        assert math.isfinite(guess)
        assert guess != pytest.approx(3.0)


class TestSquareRoot:

    def test_perfect_square_is_exact(self):
        assert ScientificEngine.square_root(16) == 4.0

    def test_irrational_square_root(self):
        assert ScientificEngine.square_root(2) == pytest.approx(math.sqrt(2), rel=1e-12)

    def test_zero(self):
        assert ScientificEngine.square_root(0) == 0

    def test_large_and_small_values_terminate(self):
        assert ScientificEngine.square_root(1e300) == pytest.approx(1e150, rel=1e-12)
        assert ScientificEngine.square_root(1e-300) == pytest.approx(1e-150, rel=1e-12)

    def test_negative_number_is_invalid(self):
        with pytest.raises(E.InvalidRoot):
            ScientificEngine.square_root(-4)

    def test_infinity(self):
        assert ScientificEngine.square_root(math.inf) == math.inf


class TestDivide:

    def test_regular_division(self):
        assert ScientificEngine.divide(6, 3) == 2

    def test_division_by_zero_follows_ieee(self):
        assert ScientificEngine.divide(5, 0) == math.inf
        assert ScientificEngine.divide(-5, 0) == -math.inf
        assert math.isnan(ScientificEngine.divide(0, 0))
