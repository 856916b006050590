"""
CalculatorConfig — Параметры расчёта multi-send
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalculatorConfig:
    """Конфигурация калькулятора.

    По умолчанию denomination без определения — обычный токен
    (без burn/commission и без issuer).
    """

    # Отклонять транзакцию, если у denomination нет определения
    require_definitions: bool = False

    # Inputs от issuer не облагаются burn/commission
    exempt_issuer_inputs: bool = True
