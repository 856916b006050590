"""
DenomDefinition — Правила комиссии denomination

Immutable Pydantic модель с burn_rate / commission_rate и issuer.

Rate хранится как Decimal. Диапазон [0, 1] модель не проверяет:
нарушение диапазона — ошибка конфигурации, которую пайплайн
возвращает как значение (INVALID_RATE), а не как exception.
"""

from decimal import Decimal
from fractions import Fraction

from pydantic import BaseModel, Field

from src.core.math.exact_rates import to_fraction


class DenomDefinition(BaseModel):
    """
    Определение denomination.

    - burn_rate: доля облагаемой суммы, сжигаемая сверх перевода
    - commission_rate: доля облагаемой суммы, переводимая issuer
    """

    denom: str = Field(..., min_length=1, description="Denomination")
    issuer: str = Field(..., min_length=1, description="Адрес issuer (получатель комиссии)")
    burn_rate: Decimal = Field(default=Decimal(0), description="Burn rate, [0, 1]")
    commission_rate: Decimal = Field(default=Decimal(0), description="Commission rate, [0, 1]")

    model_config = {"frozen": True}

    @property
    def burn_fraction(self) -> Fraction:
        """burn_rate как точная дробь."""
        return to_fraction(self.burn_rate)

    @property
    def commission_fraction(self) -> Fraction:
        """commission_rate как точная дробь."""
        return to_fraction(self.commission_rate)

    def is_issuer(self, address: str) -> bool:
        return address == self.issuer
