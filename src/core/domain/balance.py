"""
Balances — Снапшот балансов и изменения балансов

- BalanceSnapshot: read-only состояние ledger до перевода
  (address → denom → amount). Отсутствующий баланс равен 0.
- BalanceChange: результат для одного аккаунта
  (denom → signed delta, положительный = зачисление, отрицательный = списание).
"""

from pydantic import BaseModel, Field, NonNegativeInt, RootModel, field_validator


# =============================================================================
# SNAPSHOT
# =============================================================================


class BalanceSnapshot(RootModel[dict[str, dict[str, NonNegativeInt]]]):
    """
    Снапшот балансов до перевода.

    Пайплайн никогда не изменяет снапшот; изменения применяет вызывающий код.
    """

    model_config = {"frozen": True}

    def balance_of(self, address: str, denom: str) -> int:
        """Баланс аккаунта по denomination (0 если отсутствует)."""
        return self.root.get(address, {}).get(denom, 0)


# =============================================================================
# BALANCE CHANGE
# =============================================================================


class BalanceChange(BaseModel):
    """
    Изменение баланса одного аккаунта.

    Содержит только ненулевые delta.
    """

    address: str = Field(..., min_length=1, description="Адрес аккаунта")
    coins: dict[str, int] = Field(..., description="denom → signed delta")

    model_config = {"frozen": True}

    @field_validator("coins")
    @classmethod
    def validate_non_zero(cls, v: dict[str, int]) -> dict[str, int]:
        """Нулевые delta не допускаются (аккаунт без изменений не попадает в результат)."""
        zero = [denom for denom, delta in v.items() if delta == 0]
        if zero:
            raise ValueError(f"zero deltas are not allowed: {zero}")
        return v

    def delta_of(self, denom: str) -> int:
        """Delta по denomination (0 если не затронут)."""
        return self.coins.get(denom, 0)
