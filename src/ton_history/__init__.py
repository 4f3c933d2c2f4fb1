"""
TON transaction history client

Fetches account transactions from a lite server and decodes the TL and
bag-of-cells responses into Transaction records with verifiable hashes.
"""

from .client import TransactionClient, decode_transaction_info, decode_transaction_list
from .config import ClientConfig
from .types import AccountID, BlockReference, PaginationAnchor
from .queries import GetOneTransaction, GetTransactions
from .tlb import AccountStatus, Transaction
from .transport import HttpTransport, LiteResponse, Transport
from .runtime.errors import *  # noqa: F401,F403
from .runtime.errors import __all__ as _errors_all

__version__ = "0.1.0"
__all__ = [
    "TransactionClient",
    "decode_transaction_info",
    "decode_transaction_list",
    "ClientConfig",
    "AccountID",
    "BlockReference",
    "PaginationAnchor",
    "GetOneTransaction",
    "GetTransactions",
    "AccountStatus",
    "Transaction",
    "HttpTransport",
    "LiteResponse",
    "Transport",
] + list(_errors_all)
