"""
Тесты для модуля Exact Rates

Проверяет:
1. Точную конверсию rate в Fraction (без binary float)
2. Округление вверх (ceil) рациональных значений
3. Пропорциональные доли
4. Валидацию rate и amount
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.exact_rates import (
    RATE_MAX,
    RATE_MIN,
    ceil_fraction,
    is_valid_rate,
    proportional_share,
    tax_share,
    to_fraction,
    validate_non_negative_amount,
    validate_rate,
)


# =============================================================================
# ТЕСТЫ КОНВЕРСИИ
# =============================================================================


class TestToFraction:
    """Тесты для to_fraction"""

    def test_decimal_is_exact(self) -> None:
        """Decimal конвертируется без потери точности"""
        assert to_fraction(Decimal("0.08")) == Fraction(2, 25)
        assert to_fraction(Decimal("0.12")) == Fraction(3, 25)
        assert to_fraction(Decimal("0.01")) == Fraction(1, 100)

    def test_string_parsed_as_decimal(self) -> None:
        assert to_fraction("0.1") == Fraction(1, 10)

    def test_int_and_fraction_pass_through(self) -> None:
        assert to_fraction(1) == Fraction(1)
        assert to_fraction(Fraction(1, 3)) == Fraction(1, 3)

    def test_float_rejected(self) -> None:
        """Binary float запрещён"""
        with pytest.raises(ValueError, match="float"):
            to_fraction(0.1)

    def test_non_finite_decimal_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_fraction(Decimal("NaN"))
        with pytest.raises(ValueError):
            to_fraction(Decimal("Infinity"))

    def test_garbage_string_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_fraction("ten percent")


# =============================================================================
# ТЕСТЫ ОКРУГЛЕНИЯ
# =============================================================================


class TestCeilFraction:
    """Тесты для ceil_fraction"""

    def test_integer_unchanged(self) -> None:
        assert ceil_fraction(Fraction(26)) == 26
        assert ceil_fraction(Fraction(0)) == 0

    def test_small_fraction_rounds_up_to_one(self) -> None:
        """0.02 → 1 (никогда не недобираем)"""
        assert ceil_fraction(Fraction(1, 50)) == 1

    def test_half_rounds_up(self) -> None:
        assert ceil_fraction(Fraction(9, 2)) == 5

    def test_just_above_integer(self) -> None:
        assert ceil_fraction(Fraction(1000001, 1000000)) == 2

    def test_huge_values_exact(self) -> None:
        """Произвольная точность int"""
        big = 10**40
        assert ceil_fraction(Fraction(big + 1, 10)) == big // 10 + 1


class TestShares:
    """Тесты для proportional_share и tax_share"""

    def test_proportional_share_exact(self) -> None:
        assert proportional_share(650, 500, 1000) == Fraction(325)
        assert proportional_share(60, 75, 175) == Fraction(180, 7)

    def test_proportional_share_full_base(self) -> None:
        assert proportional_share(1000, 1000, 1000) == 1000

    def test_proportional_share_zero_total_rejected(self) -> None:
        with pytest.raises(ValueError, match="total"):
            proportional_share(1, 1, 0)

    def test_proportional_share_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            proportional_share(-1, 1, 10)

    def test_tax_share_rounds_up(self) -> None:
        assert tax_share(Fraction(325), Decimal("0.08")) == 26
        assert tax_share(Fraction(325), Decimal("0.12")) == 39
        assert tax_share(Fraction(1), Decimal("0.01")) == 1

    def test_tax_share_zero_rate(self) -> None:
        assert tax_share(Fraction(1000), Decimal("0")) == 0

    def test_tax_share_full_rate(self) -> None:
        assert tax_share(Fraction(375, 2), Decimal("1")) == 188

    def test_tax_share_is_smallest_integer_not_below_exact(self) -> None:
        """ceil: share - 1 < exact <= share"""
        for amount in range(1, 200):
            taxable = Fraction(amount * 75, 175)
            exact = taxable * Fraction(1, 10)
            share = tax_share(taxable, Decimal("0.1"))
            assert share - 1 < exact <= share


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты для validate_rate / is_valid_rate / validate_non_negative_amount"""

    def test_bounds(self) -> None:
        assert RATE_MIN == 0
        assert RATE_MAX == 1

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("0.5"), Decimal("1"), 0, 1])
    def test_valid_rates(self, rate) -> None:
        assert is_valid_rate(rate) is True
        assert validate_rate(rate, "burn_rate") == to_fraction(rate)

    @pytest.mark.parametrize("rate", [Decimal("-0.01"), Decimal("1.0001"), 2])
    def test_out_of_range_rates(self, rate) -> None:
        assert is_valid_rate(rate) is False
        with pytest.raises(ValueError, match="burn_rate"):
            validate_rate(rate, "burn_rate")

    def test_nan_is_not_valid_rate(self) -> None:
        assert is_valid_rate(Decimal("NaN")) is False

    def test_non_negative_amount(self) -> None:
        validate_non_negative_amount(0, "amount")
        validate_non_negative_amount(10**30, "amount")

        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative_amount(-1, "amount")

        with pytest.raises(ValueError, match="integer"):
            validate_non_negative_amount(1.5, "amount")

        with pytest.raises(ValueError, match="integer"):
            validate_non_negative_amount(True, "amount")
