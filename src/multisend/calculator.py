"""
MultiSendCalculator — Расчёт изменений балансов multi-send

Единая точка входа: calculate_balance_changes(balances, definitions, multi_send).

Расчёт — чистая функция:
- снапшот балансов только читается
- результат — упорядоченный список BalanceChange или ошибка (как значение)
- при ошибке изменений нет вовсе (атомарное отклонение)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Сохранение: по каждому denomination сумма delta == -total_burn
2. Детерминизм: одинаковый вход → одинаковый, одинаково упорядоченный выход
3. Burn и commission округляются вверх (никогда не недобираются)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Union

from src.core.domain.balance import BalanceChange, BalanceSnapshot
from src.core.domain.coin import MultiSend
from src.core.domain.definition import DenomDefinition
from src.core.domain.request import MultiSendRequest
from src.multisend.config import CalculatorConfig
from src.multisend.errors import MultiSendError, MultiSendRejected
from src.multisend.stages import (
    DenomFeeSummary,
    Stage00Definitions,
    Stage01TransferValidation,
    Stage02FeeSplit,
    Stage03Aggregation,
    Stage04Assembly,
)

logger = logging.getLogger(__name__)

BalancesLike = Union[BalanceSnapshot, Mapping[str, Mapping[str, int]]]


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class MultiSendResult:
    """Результат расчёта multi-send."""

    accepted: bool
    changes: tuple[BalanceChange, ...]
    error: MultiSendError | None

    # Итоги burn/commission по denomination (пусто при отклонении)
    fee_summaries: tuple[DenomFeeSummary, ...] = ()

    # Детали
    details: str = ""

    def unwrap(self) -> tuple[BalanceChange, ...]:
        """
        Изменения балансов принятой транзакции.

        Raises:
            MultiSendRejected: если транзакция отклонена
        """
        if not self.accepted:
            raise MultiSendRejected(self.error)
        return self.changes

    def change_for(self, address: str) -> BalanceChange | None:
        """Изменение баланса аккаунта (None если аккаунт не затронут)."""
        for change in self.changes:
            if change.address == address:
                return change
        return None

    def total_burn(self, denom: str) -> int:
        """Сожжённая сумма denomination."""
        return sum(s.total_burn for s in self.fee_summaries if s.denom == denom)

    def as_dict(self) -> Dict[str, Any]:
        """Документ результата (src/core/contracts/schema/balance_changes.json)."""
        return {
            "accepted": self.accepted,
            "changes": [change.model_dump() for change in self.changes],
            "error": self.error.as_dict() if self.error is not None else None,
            "fee_summaries": [summary.as_dict() for summary in self.fee_summaries],
            "details": self.details,
        }


# =============================================================================
# CALCULATOR
# =============================================================================


class MultiSendCalculator:
    """Пайплайн STAGE 0 → STAGE 4.

    Stateless: экземпляр можно переиспользовать и вызывать
    конкурентно для независимых транзакций.
    """

    def __init__(self, config: CalculatorConfig | None = None):
        """Инициализация калькулятора.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or CalculatorConfig()
        self.stage00 = Stage00Definitions()
        self.stage01 = Stage01TransferValidation(self.config)
        self.stage02 = Stage02FeeSplit(self.config)
        self.stage03 = Stage03Aggregation()
        self.stage04 = Stage04Assembly()

    def calculate(self, request: MultiSendRequest) -> MultiSendResult:
        """Расчёт по документу запроса."""
        return self.evaluate(request.balances, request.definitions, request.multi_send)

    def evaluate(
        self,
        balances: BalancesLike,
        definitions: Sequence[DenomDefinition],
        multi_send: MultiSend,
    ) -> MultiSendResult:
        """Расчёт изменений балансов.

        Args:
            balances: снапшот балансов до перевода
            definitions: определения denominations
            multi_send: транзакция

        Returns:
            MultiSendResult (accepted=False и error при отклонении)
        """
        snapshot = self._as_snapshot(balances)

        stage00_result = self.stage00.evaluate(definitions)
        stage01_result = self.stage01.evaluate(stage00_result, multi_send)
        stage02_result = self.stage02.evaluate(stage00_result, stage01_result, multi_send)
        stage03_result = self.stage03.evaluate(stage02_result, multi_send, snapshot)
        stage04_result = self.stage04.evaluate(stage03_result)

        if not stage04_result.accepted:
            logger.warning("Multi-send rejected: %s", stage04_result.error.message)
            return MultiSendResult(
                accepted=False,
                changes=(),
                error=stage04_result.error,
                details=stage04_result.details,
            )

        logger.info(
            "Multi-send accepted: %d input(s), %d output(s), %d balance change(s)",
            len(multi_send.inputs),
            len(multi_send.outputs),
            len(stage04_result.changes),
        )

        return MultiSendResult(
            accepted=True,
            changes=stage04_result.changes,
            error=None,
            fee_summaries=stage02_result.summaries,
            details=f"{stage02_result.details}; {stage04_result.details}",
        )

    @staticmethod
    def _as_snapshot(balances: BalancesLike) -> BalanceSnapshot:
        if isinstance(balances, BalanceSnapshot):
            return balances
        return BalanceSnapshot.model_validate(
            {address: dict(coins) for address, coins in balances.items()}
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def calculate_balance_changes(
    balances: BalancesLike,
    definitions: Sequence[DenomDefinition],
    multi_send: MultiSend,
    config: CalculatorConfig | None = None,
) -> MultiSendResult:
    """
    Расчёт изменений балансов для одной multi-send транзакции.

    Args:
        balances: балансы до перевода (BalanceSnapshot или address → denom → amount)
        definitions: определения denominations (не более одного на denom)
        multi_send: транзакция
        config: конфигурация (опционально)

    Returns:
        MultiSendResult; при accepted=False изменений нет

    Examples:
        >>> result = calculate_balance_changes(balances, definitions, multi_send)
        >>> for change in result.unwrap():  # doctest: +SKIP
        ...     ledger.apply(change)
    """
    return MultiSendCalculator(config).evaluate(balances, definitions, multi_send)
