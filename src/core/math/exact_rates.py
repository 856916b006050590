"""
Exact Rates — Integer/Rational Fee Arithmetic

Модуль обеспечивает точную арифметику для burn/commission расчётов:
- Конверсия rate (Decimal/int/Fraction) в fractions.Fraction без потери точности
- Округление вверх (ceiling) рациональных значений до целых amount
- Пропорциональная доля amount от общей суммы (точная дробь)
- Валидация rate в диапазоне [0, 1] и неотрицательных amount

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Binary float никогда не участвует в расчёте fee
2. Округление всегда вверх (ceil), налог никогда не недобирается
3. Все операции детерминированы и воспроизводимы
"""

from decimal import Decimal
from fractions import Fraction
from typing import Final, Union

RateLike = Union[Decimal, Fraction, int, str]

# =============================================================================
# ГРАНИЦЫ RATE
# =============================================================================

# Минимальный допустимый burn_rate / commission_rate
RATE_MIN: Final[Fraction] = Fraction(0)

# Максимальный допустимый burn_rate / commission_rate (100%)
RATE_MAX: Final[Fraction] = Fraction(1)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_fraction(rate: RateLike) -> Fraction:
    """
    Точная конверсия rate в Fraction.

    Decimal конвертируется точно (Decimal("0.08") → 2/25).
    Строки парсятся как десятичная запись.

    Args:
        rate: Rate как Decimal, Fraction, int или str

    Returns:
        Точное рациональное значение rate

    Raises:
        ValueError: Если rate — float, NaN/Inf или не парсится

    Examples:
        >>> to_fraction(Decimal("0.08"))
        Fraction(2, 25)
        >>> to_fraction(1)
        Fraction(1, 1)
    """
    if isinstance(rate, float):
        raise ValueError(f"binary float rates are not allowed, got {rate!r}")

    if isinstance(rate, Fraction):
        return rate

    if isinstance(rate, int):
        return Fraction(rate)

    if isinstance(rate, str):
        try:
            rate = Decimal(rate)
        except ArithmeticError as e:
            raise ValueError(f"rate is not a decimal number: {rate!r}") from e

    if isinstance(rate, Decimal):
        if not rate.is_finite():
            raise ValueError(f"rate must be finite, got {rate}")
        return Fraction(rate)

    raise ValueError(f"unsupported rate type: {type(rate).__name__}")


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def ceil_fraction(value: Fraction) -> int:
    """
    Наименьшее целое, не меньшее value.

    Args:
        value: Точное рациональное значение

    Returns:
        ceil(value) как int

    Examples:
        >>> ceil_fraction(Fraction(1, 50))
        1
        >>> ceil_fraction(Fraction(26))
        26
    """
    # -(-n // d) == ceil(n / d) для целочисленного деления Python
    return -(-value.numerator // value.denominator)


def proportional_share(amount: int, base: int, total: int) -> Fraction:
    """
    Точная пропорциональная доля: amount * base / total.

    Args:
        amount: Вклад конкретного input (amount)
        base: Облагаемая база по denomination
        total: Общая сумма по denomination (знаменатель)

    Returns:
        Fraction (может быть дробным)

    Raises:
        ValueError: Если total <= 0 или amount/base отрицательные
    """
    if total <= 0:
        raise ValueError(f"total must be positive, got {total}")

    validate_non_negative_amount(amount, "amount")
    validate_non_negative_amount(base, "base")

    return Fraction(amount * base, total)


def tax_share(taxable: Fraction, rate: RateLike) -> int:
    """
    Налог с облагаемой суммы, округлённый вверх.

    share = ceil(taxable * rate)

    Args:
        taxable: Облагаемая сумма (точная дробь)
        rate: burn_rate или commission_rate

    Returns:
        Целая доля налога (>= 0)
    """
    return ceil_fraction(taxable * to_fraction(rate))


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_rate(rate: RateLike) -> bool:
    """
    Проверка rate на попадание в [0, 1] без exception.

    Returns:
        True если rate конечный и в диапазоне, False иначе
    """
    try:
        value = to_fraction(rate)
    except ValueError:
        return False

    return RATE_MIN <= value <= RATE_MAX


def validate_rate(rate: RateLike, name: str) -> Fraction:
    """
    Валидация, что rate в диапазоне [0, 1].

    Args:
        rate: Проверяемый rate
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Rate как Fraction

    Raises:
        ValueError: Если rate вне диапазона или не конвертируется
    """
    value = to_fraction(rate)

    if value < RATE_MIN:
        raise ValueError(f"{name} must be >= {RATE_MIN}, got {rate}")

    if value > RATE_MAX:
        raise ValueError(f"{name} must be <= {RATE_MAX}, got {rate}")

    return value


def validate_non_negative_amount(value: int, name: str) -> None:
    """
    Валидация, что amount — неотрицательное целое.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value не int или value < 0
    """
    # bool является подклассом int
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
