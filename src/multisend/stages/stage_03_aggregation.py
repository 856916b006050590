"""STAGE 3: Агрегация зачислений и списаний

Сводит все движения в одну delta на пару (account, denomination):
- outputs зачисляются по номиналу (outputs не облагаются)
- issuer получает сумму commission своих denominations
- inputs списываются на amount + burn + commission

Проверка достаточности: суммарное списание аккаунта по denomination
(по всем его inputs) не может превышать баланс из снапшота
(INSUFFICIENT_BALANCE). Отклонение атомарное — частичного результата нет.

Порядок аккаунтов в deltas: outputs, затем issuer, затем inputs
(первое появление).

Интеграция:
- Использует результат STAGE 2 (должен быть PASS)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from src.core.domain.balance import BalanceSnapshot
from src.core.domain.coin import MultiSend
from src.multisend.errors import MultiSendError, MultiSendErrorKind
from src.multisend.stages.stage_02_fee_split import Stage02Result

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Stage03Result:
    """Результат STAGE 3."""

    accepted: bool
    error: MultiSendError | None

    # address → denom → signed delta (могут быть нулевые)
    deltas: Dict[str, Dict[str, int]] = field(default_factory=dict)

    # Детали
    details: str = ""


# =============================================================================
# STAGE 3
# =============================================================================


class Stage03Aggregation:
    """STAGE 3: Агрегация.

    Порядок:
    1. STAGE 2 блокировка (должна быть PASS)
    2. Суммарные списания по (account, denomination)
    3. Проверка достаточности балансов
    4. Сборка delta: outputs → commission issuer → inputs
    """

    def evaluate(
        self,
        stage02_result: Stage02Result,
        multi_send: MultiSend,
        balances: BalanceSnapshot,
    ) -> Stage03Result:
        """Агрегация delta и проверка балансов.

        Args:
            stage02_result: результат STAGE 2 (доли burn/commission)
            multi_send: транзакция
            balances: снапшот балансов до перевода (только чтение)

        Returns:
            Stage03Result с delta или INSUFFICIENT_BALANCE
        """
        # 1. Проверка STAGE 2
        if not stage02_result.accepted:
            return Stage03Result(
                accepted=False,
                error=stage02_result.error,
                details=f"stage02_rejected: {stage02_result.details}",
            )

        # 2. Суммарные списания
        debits: Dict[Tuple[str, str], int] = {}
        for share in stage02_result.shares:
            key = (share.address, share.denom)
            debits[key] = debits.get(key, 0) + share.total_debit

        # 3. Достаточность балансов
        for (address, denom), required in debits.items():
            available = balances.balance_of(address, denom)
            if required > available:
                message = f"{address} needs {required} {denom}, has {available}"
                return Stage03Result(
                    accepted=False,
                    error=MultiSendError(
                        kind=MultiSendErrorKind.INSUFFICIENT_BALANCE,
                        message=message,
                        address=address,
                        denom=denom,
                    ),
                    details=f"{MultiSendErrorKind.INSUFFICIENT_BALANCE.value}: {message}",
                )

        # 4. Сборка delta
        deltas: Dict[str, Dict[str, int]] = {}

        for entry in multi_send.outputs:
            for coin in entry.coins:
                self._apply(deltas, entry.address, coin.denom, coin.amount)

        for summary in stage02_result.summaries:
            if summary.issuer is not None and summary.total_commission > 0:
                self._apply(deltas, summary.issuer, summary.denom, summary.total_commission)

        for (address, denom), debit in debits.items():
            self._apply(deltas, address, denom, -debit)

        logger.debug("Aggregated deltas for %d account(s)", len(deltas))

        return Stage03Result(
            accepted=True,
            error=None,
            deltas=deltas,
            details=f"PASS: {len(deltas)} account(s) touched",
        )

    @staticmethod
    def _apply(deltas: Dict[str, Dict[str, int]], address: str, denom: str, amount: int) -> None:
        account = deltas.setdefault(address, {})
        account[denom] = account.get(denom, 0) + amount
