"""
Contract Validation Module

Модуль для валидации JSON контрактов multi-send калькулятора.
"""

from .validators import (
    SCHEMA_DIRECTORY,
    SCHEMA_PACKAGE,
    BalanceChangesValidator,
    ContractValidator,
    MultiSendRequestValidator,
    SchemaLoader,
    validate_balance_changes,
    validate_multi_send_request,
)

__all__ = [
    # Schema resources
    "SCHEMA_PACKAGE",
    "SCHEMA_DIRECTORY",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MultiSendRequestValidator",
    "BalanceChangesValidator",
    # Functions
    "validate_multi_send_request",
    "validate_balance_changes",
]
