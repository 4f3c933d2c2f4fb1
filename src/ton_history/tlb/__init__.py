"""
Block layout (TL-B) records.
"""

from .transaction import (
    AccountStatus,
    CurrencyCollection,
    HashUpdate,
    Transaction,
    TransactionLayoutError,
    load_transaction,
)

__all__ = [
    "AccountStatus",
    "CurrencyCollection",
    "HashUpdate",
    "Transaction",
    "TransactionLayoutError",
    "load_transaction",
]
