"""
Transport interface.

A transport delivers one serialized query to a node and returns the
response type tag and payload. Connection handling, retries and deadlines
live entirely behind this interface.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..queries import LiteQuery


@dataclass(frozen=True)
class LiteResponse:
    """Raw node response: TL type tag plus the bytes that follow it."""
    type_id: int
    data: bytes


class Transport(ABC):
    """Request/response exchange with a lite server."""

    @abstractmethod
    def do_request(self, query: LiteQuery, timeout: Optional[float] = None) -> LiteResponse:
        """
        Send ``query`` and wait for the response.

        Args:
            query: Typed query to serialize and send
            timeout: Seconds to wait before giving up, None for the transport default

        Returns:
            The response tag and payload

        Raises:
            NetworkError: If the exchange fails
            RequestTimeoutError: If the deadline passes first
        """

    def close(self) -> None:
        """Release any held connections."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
