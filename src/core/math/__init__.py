"""
Core math modules

Точная целочисленная и рациональная арифметика для fee расчётов.
"""

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

__all__ = [
    # Constants
    "RATE_MIN",
    "RATE_MAX",
    # Conversion
    "to_fraction",
    # Rounding & shares
    "ceil_fraction",
    "proportional_share",
    "tax_share",
    # Validation
    "is_valid_rate",
    "validate_rate",
    "validate_non_negative_amount",
]
