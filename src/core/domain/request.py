"""
MultiSendRequest — Входной документ расчёта

Полная совместимость с JSON Schema (src/core/contracts/schema/multi_send_request.json).
Объединяет снапшот балансов, определения denominations и транзакцию.
"""

from pydantic import BaseModel, Field

from .balance import BalanceSnapshot
from .coin import MultiSend
from .definition import DenomDefinition


class MultiSendRequest(BaseModel):
    """
    Запрос на расчёт изменений балансов.
    """

    balances: BalanceSnapshot = Field(
        default_factory=lambda: BalanceSnapshot({}),
        description="Балансы до перевода (address → denom → amount)",
    )
    definitions: tuple[DenomDefinition, ...] = Field(
        default=(), description="Определения denominations"
    )
    multi_send: MultiSend = Field(..., description="Multi-send транзакция")

    model_config = {"frozen": True}
