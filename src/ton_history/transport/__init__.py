"""
Transport layer for the lite client.
"""

from .base import LiteResponse, Transport
from .http import HttpTransport

__all__ = [
    "LiteResponse",
    "Transport",
    "HttpTransport",
]
