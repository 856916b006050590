"""
Errors — Таксономия ошибок multi-send

Ошибки валидации возвращаются как значения (MultiSendError внутри
результата). MultiSendRejected поднимается только при явном unwrap().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


# =============================================================================
# ENUMS
# =============================================================================


class MultiSendErrorKind(str, Enum):
    """Причина отклонения multi-send"""

    INPUT_OUTPUT_MISMATCH = "INPUT_OUTPUT_MISMATCH"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INVALID_RATE = "INVALID_RATE"
    DUPLICATE_DEFINITION = "DUPLICATE_DEFINITION"
    DUPLICATE_DENOM_IN_ENTRY = "DUPLICATE_DENOM_IN_ENTRY"
    UNDEFINED_DEFINITION = "UNDEFINED_DEFINITION"


# =============================================================================
# ERROR VALUE
# =============================================================================


@dataclass(frozen=True)
class MultiSendError:
    """Ошибка, из-за которой транзакция отклонена целиком."""

    kind: MultiSendErrorKind
    message: str

    # Контекст (если применимо)
    address: str | None = None
    denom: str | None = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "address": self.address,
            "denom": self.denom,
        }


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MultiSendRejected(Exception):
    """
    Multi-send отклонён.

    Поднимается из MultiSendResult.unwrap(); сам расчёт не бросает
    exception для ошибок валидации.
    """

    def __init__(self, error: MultiSendError):
        super().__init__(f"{error.kind.value}: {error.message}")
        self.error = error
