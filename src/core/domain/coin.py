"""
Coin / MultiSend — Модели перевода монет

Immutable Pydantic модели, описывающие multi-send транзакцию:
- Coin: пара (denom, amount), amount всегда положительный
- MultiSendEntry: адрес и набор монет одного input/output
- MultiSend: упорядоченные inputs и outputs

Модели проверяют только форму данных. Бизнес-правила (баланс inputs/outputs,
дубликаты denom внутри entry) проверяются стадиями пайплайна и возвращаются
как значения ошибок.
"""

from pydantic import BaseModel, Field


# =============================================================================
# COIN
# =============================================================================


class Coin(BaseModel):
    """
    Количество монет одного denomination.

    Нулевые и отрицательные amount запрещены на уровне модели.
    """

    denom: str = Field(..., min_length=1, description="Denomination (например, 'usdt')")
    amount: int = Field(..., gt=0, description="Количество (целое, > 0)")

    model_config = {"frozen": True}


# =============================================================================
# MULTI-SEND
# =============================================================================


class MultiSendEntry(BaseModel):
    """
    Один input или output multi-send транзакции.
    """

    address: str = Field(..., min_length=1, description="Адрес аккаунта")
    coins: tuple[Coin, ...] = Field(default=(), description="Монеты entry")

    model_config = {"frozen": True}

    def denoms(self) -> list[str]:
        """Denominations entry в порядке перечисления (с повторами)."""
        return [coin.denom for coin in self.coins]

    def amount_of(self, denom: str) -> int:
        """
        Сумма монет denomination в entry.

        Args:
            denom: Denomination

        Returns:
            Сумма amount (0 если denom отсутствует)
        """
        return sum(coin.amount for coin in self.coins if coin.denom == denom)

    def duplicate_denoms(self) -> list[str]:
        """Denominations, встречающиеся в entry более одного раза."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for denom in self.denoms():
            if denom in seen and denom not in duplicates:
                duplicates.append(denom)
            seen.add(denom)
        return duplicates


class MultiSend(BaseModel):
    """
    Multi-send транзакция: множество отправителей и получателей,
    множество denominations.
    """

    inputs: tuple[MultiSendEntry, ...] = Field(default=(), description="Отправители")
    outputs: tuple[MultiSendEntry, ...] = Field(default=(), description="Получатели")

    model_config = {"frozen": True}

    def denominations(self) -> list[str]:
        """
        Все denominations транзакции.

        Порядок: первое появление в inputs, затем в outputs.
        """
        ordered: dict[str, None] = {}
        for entry in (*self.inputs, *self.outputs):
            for denom in entry.denoms():
                ordered.setdefault(denom, None)
        return list(ordered)

    def total_input(self, denom: str) -> int:
        """Сумма inputs по denomination."""
        return sum(entry.amount_of(denom) for entry in self.inputs)

    def total_output(self, denom: str) -> int:
        """Сумма outputs по denomination."""
        return sum(entry.amount_of(denom) for entry in self.outputs)
