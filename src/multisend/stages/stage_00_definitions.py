"""STAGE 0: Реестр определений denominations

Проверяет конфигурацию до любых расчётов:
- не более одного определения на denomination (DUPLICATE_DEFINITION)
- burn_rate и commission_rate в диапазоне [0, 1] (INVALID_RATE)

Результат содержит реестр denom → DenomDefinition для следующих стадий.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Sequence

from src.core.domain.definition import DenomDefinition
from src.core.math.exact_rates import is_valid_rate
from src.multisend.errors import MultiSendError, MultiSendErrorKind

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Stage00Result:
    """Результат STAGE 0."""

    accepted: bool
    error: MultiSendError | None

    # denom → definition (пустой при отклонении)
    definitions: Dict[str, DenomDefinition] = field(default_factory=dict)

    # Детали
    details: str = ""


# =============================================================================
# STAGE 0
# =============================================================================


class Stage00Definitions:
    """STAGE 0: Реестр определений.

    Порядок проверок (для каждого определения в порядке перечисления):
    1. Дубликат denomination
    2. burn_rate в [0, 1]
    3. commission_rate в [0, 1]
    """

    def evaluate(self, definitions: Sequence[DenomDefinition]) -> Stage00Result:
        """Построение реестра определений.

        Args:
            definitions: определения denominations

        Returns:
            Stage00Result с реестром или ошибкой конфигурации
        """
        registry: Dict[str, DenomDefinition] = {}

        for definition in definitions:
            denom = definition.denom

            if denom in registry:
                return self._reject(
                    MultiSendErrorKind.DUPLICATE_DEFINITION,
                    f"denomination {denom} is defined more than once",
                    denom=denom,
                )

            for rate_name in ("burn_rate", "commission_rate"):
                rate = getattr(definition, rate_name)
                if not is_valid_rate(rate):
                    return self._reject(
                        MultiSendErrorKind.INVALID_RATE,
                        f"{rate_name} of {denom} must be within [0, 1], got {rate}",
                        denom=denom,
                    )

            registry[denom] = definition

        logger.debug("Definitions registry built: %s", list(registry))

        return Stage00Result(
            accepted=True,
            error=None,
            definitions=registry,
            details=f"PASS: {len(registry)} definition(s)",
        )

    def _reject(
        self, kind: MultiSendErrorKind, message: str, denom: str
    ) -> Stage00Result:
        return Stage00Result(
            accepted=False,
            error=MultiSendError(kind=kind, message=message, denom=denom),
            details=f"{kind.value}: {message}",
        )
