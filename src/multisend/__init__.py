"""Multi-send — расчёт изменений балансов с burn и commission.

Пайплайн:
- STAGE 0-4 (см. src.multisend.stages)
- MultiSendCalculator / calculate_balance_changes — единая точка входа
"""

from .calculator import MultiSendCalculator, MultiSendResult, calculate_balance_changes
from .config import CalculatorConfig
from .errors import MultiSendError, MultiSendErrorKind, MultiSendRejected

__all__ = [
    "MultiSendCalculator",
    "MultiSendResult",
    "calculate_balance_changes",
    "CalculatorConfig",
    "MultiSendError",
    "MultiSendErrorKind",
    "MultiSendRejected",
]
