"""STAGE 1: Валидация перевода

Проверяет форму и баланс multi-send:
- denomination не повторяется внутри одного entry (DUPLICATE_DENOM_IN_ENTRY)
- у каждого denomination есть определение, если это требует конфигурация
  (UNDEFINED_DEFINITION)
- сумма inputs равна сумме outputs по каждому denomination
  (INPUT_OUTPUT_MISMATCH)

Достаточность балансов проверяется в STAGE 3: списание включает
burn и commission, которые вычисляются в STAGE 2.

Интеграция:
- Использует результат STAGE 0 (должен быть PASS)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict

from src.core.domain.coin import MultiSend
from src.multisend.config import CalculatorConfig
from src.multisend.errors import MultiSendError, MultiSendErrorKind
from src.multisend.stages.stage_00_definitions import Stage00Result

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Stage01Result:
    """Результат STAGE 1."""

    accepted: bool
    error: MultiSendError | None

    # denom → общая сумма перевода (inputs == outputs)
    totals: Dict[str, int] = field(default_factory=dict)

    # Детали
    details: str = ""


# =============================================================================
# STAGE 1
# =============================================================================


class Stage01TransferValidation:
    """STAGE 1: Валидация перевода.

    Порядок проверок:
    1. STAGE 0 блокировка (должна быть PASS)
    2. Дубликаты denomination в entry (inputs, затем outputs)
    3. Наличие определений (только при require_definitions)
    4. Равенство inputs и outputs по каждому denomination
    """

    def __init__(self, config: CalculatorConfig | None = None):
        """Инициализация STAGE 1.

        Args:
            config: конфигурация калькулятора (опционально, используется default)
        """
        self.config = config or CalculatorConfig()

    def evaluate(self, stage00_result: Stage00Result, multi_send: MultiSend) -> Stage01Result:
        """Валидация multi-send.

        Args:
            stage00_result: результат STAGE 0 (реестр определений)
            multi_send: транзакция

        Returns:
            Stage01Result с суммами по denomination или ошибкой
        """
        # 1. Проверка STAGE 0
        if not stage00_result.accepted:
            return Stage01Result(
                accepted=False,
                error=stage00_result.error,
                details=f"stage00_rejected: {stage00_result.details}",
            )

        # 2. Дубликаты denomination внутри entry
        for side, entries in (("input", multi_send.inputs), ("output", multi_send.outputs)):
            for entry in entries:
                duplicates = entry.duplicate_denoms()
                if duplicates:
                    return self._reject(
                        MultiSendErrorKind.DUPLICATE_DENOM_IN_ENTRY,
                        f"{side} {entry.address} lists {duplicates[0]} more than once",
                        address=entry.address,
                        denom=duplicates[0],
                    )

        denoms = multi_send.denominations()

        # 3. Определения (strict режим)
        if self.config.require_definitions:
            for denom in denoms:
                if denom not in stage00_result.definitions:
                    return self._reject(
                        MultiSendErrorKind.UNDEFINED_DEFINITION,
                        f"denomination {denom} has no definition",
                        denom=denom,
                    )

        # 4. Баланс inputs/outputs
        totals: Dict[str, int] = {}
        for denom in denoms:
            total_in = multi_send.total_input(denom)
            total_out = multi_send.total_output(denom)
            if total_in != total_out:
                return self._reject(
                    MultiSendErrorKind.INPUT_OUTPUT_MISMATCH,
                    f"{denom}: inputs {total_in} != outputs {total_out}",
                    denom=denom,
                )
            totals[denom] = total_in

        logger.debug("Transfer totals: %s", totals)

        return Stage01Result(
            accepted=True,
            error=None,
            totals=totals,
            details=f"PASS: {len(totals)} denomination(s) balanced",
        )

    def _reject(
        self,
        kind: MultiSendErrorKind,
        message: str,
        address: str | None = None,
        denom: str | None = None,
    ) -> Stage01Result:
        return Stage01Result(
            accepted=False,
            error=MultiSendError(kind=kind, message=message, address=address, denom=denom),
            details=f"{kind.value}: {message}",
        )
