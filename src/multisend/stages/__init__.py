"""Stages — последовательные стадии расчёта multi-send.

- STAGE 0: Реестр определений (дубликаты, диапазон rate)
- STAGE 1: Валидация перевода (дубликаты denom, баланс inputs/outputs)
- STAGE 2: Распределение burn/commission между inputs
- STAGE 3: Агрегация delta + проверка достаточности балансов
- STAGE 4: Сборка упорядоченного результата
"""

from .stage_00_definitions import Stage00Definitions, Stage00Result
from .stage_01_transfer_validation import Stage01Result, Stage01TransferValidation
from .stage_02_fee_split import DenomFeeSummary, FeeShare, Stage02FeeSplit, Stage02Result
from .stage_03_aggregation import Stage03Aggregation, Stage03Result
from .stage_04_assembly import Stage04Assembly, Stage04Result

__all__ = [
    "Stage00Definitions",
    "Stage00Result",
    "Stage01TransferValidation",
    "Stage01Result",
    "Stage02FeeSplit",
    "Stage02Result",
    "FeeShare",
    "DenomFeeSummary",
    "Stage03Aggregation",
    "Stage03Result",
    "Stage04Assembly",
    "Stage04Result",
]
