"""STAGE 2: Распределение burn и commission между inputs

Для каждого denomination с определением D:
- T      = общая сумма перевода (inputs == outputs после STAGE 1)
- NI_in  = сумма inputs от аккаунтов, не являющихся issuer
- NI_out = сумма outputs на аккаунты, не являющиеся issuer
- B      = min(NI_in, NI_out) — облагаемая база

Для каждого input с amount a (не от issuer):
    taxable(a)    = a * B / T                  (точная дробь)
    burn(a)       = ceil(taxable(a) * D.burn_rate)
    commission(a) = ceil(taxable(a) * D.commission_rate)

Burn и commission округляются вверх независимо друг от друга.
Outputs на issuer не облагаются. Если issuer не отправляет монеты,
NI_in = T, и база равна сумме outputs не на issuer.

Denomination без определения: burn = commission = 0.

Интеграция:
- Использует результаты STAGE 0-1 (должны быть PASS)
"""

import logging
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict

from src.core.domain.coin import MultiSend
from src.core.domain.definition import DenomDefinition
from src.core.math.exact_rates import proportional_share, tax_share
from src.multisend.config import CalculatorConfig
from src.multisend.errors import MultiSendError
from src.multisend.stages.stage_00_definitions import Stage00Result
from src.multisend.stages.stage_01_transfer_validation import Stage01Result

logger = logging.getLogger(__name__)


# =============================================================================
# FEE RECORDS
# =============================================================================


@dataclass(frozen=True)
class FeeShare:
    """Доля burn/commission одного input по одному denomination."""

    input_index: int  # Позиция entry в multi_send.inputs
    address: str
    denom: str
    amount: int  # Переводимая сумма
    taxable: Fraction  # Облагаемая часть amount (точная)
    burn: int
    commission: int

    @property
    def total_debit(self) -> int:
        """Полное списание: amount + burn + commission."""
        return self.amount + self.burn + self.commission


@dataclass(frozen=True)
class DenomFeeSummary:
    """Итоги по denomination."""

    denom: str
    issuer: str | None  # None для denomination без определения
    total_amount: int  # T
    taxable_base: int  # B
    total_burn: int
    total_commission: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "denom": self.denom,
            "issuer": self.issuer,
            "total_amount": self.total_amount,
            "taxable_base": self.taxable_base,
            "total_burn": self.total_burn,
            "total_commission": self.total_commission,
        }


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Stage02Result:
    """Результат STAGE 2."""

    accepted: bool
    error: MultiSendError | None

    # Доли в порядке inputs
    shares: tuple[FeeShare, ...] = ()

    # Итоги в порядке первого появления denomination
    summaries: tuple[DenomFeeSummary, ...] = ()

    # Детали
    details: str = ""


# =============================================================================
# STAGE 2
# =============================================================================


class Stage02FeeSplit:
    """STAGE 2: Распределение burn и commission.

    Порядок:
    1. STAGE 0-1 блокировки (должны быть PASS)
    2. Облагаемая база B по каждому denomination
    3. Доли каждого input (ceil для burn и commission по отдельности)
    4. Итоги по denomination
    """

    def __init__(self, config: CalculatorConfig | None = None):
        """Инициализация STAGE 2.

        Args:
            config: конфигурация калькулятора (опционально, используется default)
        """
        self.config = config or CalculatorConfig()

    def evaluate(
        self,
        stage00_result: Stage00Result,
        stage01_result: Stage01Result,
        multi_send: MultiSend,
    ) -> Stage02Result:
        """Расчёт долей burn/commission.

        Args:
            stage00_result: результат STAGE 0 (реестр определений)
            stage01_result: результат STAGE 1 (суммы по denomination)
            multi_send: транзакция

        Returns:
            Stage02Result с долями и итогами
        """
        # 1. Проверка STAGE 0-1
        if not stage00_result.accepted:
            return Stage02Result(
                accepted=False,
                error=stage00_result.error,
                details=f"stage00_rejected: {stage00_result.details}",
            )

        if not stage01_result.accepted:
            return Stage02Result(
                accepted=False,
                error=stage01_result.error,
                details=f"stage01_rejected: {stage01_result.details}",
            )

        definitions = stage00_result.definitions
        totals = stage01_result.totals

        # 2. Облагаемая база
        bases = {
            denom: self._taxable_base(multi_send, denom, total, definitions.get(denom))
            for denom, total in totals.items()
        }

        # 3. Доли inputs
        shares: list[FeeShare] = []
        for index, entry in enumerate(multi_send.inputs):
            for coin in entry.coins:
                definition = definitions.get(coin.denom)
                if not self._is_taxed(entry.address, definition):
                    shares.append(
                        FeeShare(
                            input_index=index,
                            address=entry.address,
                            denom=coin.denom,
                            amount=coin.amount,
                            taxable=Fraction(0),
                            burn=0,
                            commission=0,
                        )
                    )
                    continue

                taxable = proportional_share(coin.amount, bases[coin.denom], totals[coin.denom])
                shares.append(
                    FeeShare(
                        input_index=index,
                        address=entry.address,
                        denom=coin.denom,
                        amount=coin.amount,
                        taxable=taxable,
                        burn=tax_share(taxable, definition.burn_fraction),
                        commission=tax_share(taxable, definition.commission_fraction),
                    )
                )

        # 4. Итоги
        summaries = []
        for denom, total in totals.items():
            definition = definitions.get(denom)
            denom_shares = [share for share in shares if share.denom == denom]
            summary = DenomFeeSummary(
                denom=denom,
                issuer=definition.issuer if definition is not None else None,
                total_amount=total,
                taxable_base=bases[denom],
                total_burn=sum(share.burn for share in denom_shares),
                total_commission=sum(share.commission for share in denom_shares),
            )
            logger.debug(
                "Fees for %s: base=%d/%d burn=%d commission=%d",
                denom,
                summary.taxable_base,
                summary.total_amount,
                summary.total_burn,
                summary.total_commission,
            )
            summaries.append(summary)

        return Stage02Result(
            accepted=True,
            error=None,
            shares=tuple(shares),
            summaries=tuple(summaries),
            details=(
                f"PASS: burn={sum(s.total_burn for s in summaries)}, "
                f"commission={sum(s.total_commission for s in summaries)}"
            ),
        )

    def _is_taxed(self, address: str, definition: DenomDefinition | None) -> bool:
        """Облагается ли input аккаунта address."""
        if definition is None:
            return False

        if self.config.exempt_issuer_inputs and definition.is_issuer(address):
            return False

        return True

    def _taxable_base(
        self,
        multi_send: MultiSend,
        denom: str,
        total: int,
        definition: DenomDefinition | None,
    ) -> int:
        """Облагаемая база B = min(NI_in, NI_out).

        Args:
            multi_send: транзакция
            denom: denomination
            total: общая сумма T
            definition: определение (None → база 0)

        Returns:
            B (целое, 0 <= B <= T)
        """
        if definition is None:
            return 0

        non_issuer_out = sum(
            entry.amount_of(denom)
            for entry in multi_send.outputs
            if not definition.is_issuer(entry.address)
        )

        if not self.config.exempt_issuer_inputs:
            # Inputs issuer облагаются наравне с остальными
            return min(total, non_issuer_out)

        non_issuer_in = sum(
            entry.amount_of(denom)
            for entry in multi_send.inputs
            if not definition.is_issuer(entry.address)
        )

        return min(non_issuer_in, non_issuer_out)
