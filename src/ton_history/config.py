"""
Client configuration.
"""

from __future__ import annotations
from dataclasses import dataclass

DEFAULT_USER_AGENT = "ton-history-python/0.1.0"

# liteServer.getTransactions returns at most this many transactions per call
MAX_TRANSACTIONS_PER_QUERY = 16


@dataclass
class ClientConfig:
    """Configuration for the transaction client and its HTTP transport."""

    endpoint: str
    timeout: float = 30.0
    verify_ssl: bool = True
    debug: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    max_page_size: int = MAX_TRANSACTIONS_PER_QUERY

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if not 1 <= self.max_page_size <= MAX_TRANSACTIONS_PER_QUERY:
            raise ValueError(f"max_page_size must be between 1 and {MAX_TRANSACTIONS_PER_QUERY}")
