"""
Domain models and value objects.

Contains fundamental domain entities: Coin, MultiSend, DenomDefinition,
BalanceSnapshot, BalanceChange.
"""

from src.core.domain.balance import BalanceChange, BalanceSnapshot
from src.core.domain.coin import Coin, MultiSend, MultiSendEntry
from src.core.domain.definition import DenomDefinition
from src.core.domain.request import MultiSendRequest

__all__ = [
    # Coins & transfers
    "Coin",
    "MultiSendEntry",
    "MultiSend",
    # Definitions
    "DenomDefinition",
    # Balances
    "BalanceSnapshot",
    "BalanceChange",
    # Request document
    "MultiSendRequest",
]
