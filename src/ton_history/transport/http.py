"""
HTTP transport for lite server proxies.

Posts the boxed TL query as the request body and reads back
``type_id:uint32le || payload``. Lite servers themselves speak ADNL over
TCP, not HTTP; this framing is a convention of this package and needs a
proxy in front of the node that implements it.
"""

from __future__ import annotations
import logging
import struct
from typing import Optional, Union

import requests

from ..config import ClientConfig
from ..queries import LiteQuery
from ..runtime.errors import NetworkError, RequestTimeoutError
from .base import LiteResponse, Transport

logger = logging.getLogger(__name__)


class HttpTransport(Transport):
    """
    Lite server transport over HTTP(S) using a ``requests.Session``.

    The endpoint must be a proxy that accepts the raw boxed query as an
    ``application/octet-stream`` POST body and answers with the 4-byte
    little-endian response tag followed by the response body. No public
    lite server or HTTP API offers this framing; point it at a proxy you
    run, or implement Transport over an ADNL client instead.

    Example:
        ```python
        with HttpTransport("https://liteproxy.example.org/query") as transport:
            client = TransactionClient(transport=transport)
        ```
    """

    def __init__(self, config: Union[str, ClientConfig],
                 session: Optional[requests.Session] = None):
        """
        Initialize the transport.

        Args:
            config: Endpoint URL or a ClientConfig
            session: Optional requests.Session for connection pooling
        """
        self.config = ClientConfig(endpoint=config) if isinstance(config, str) else config
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()

    def do_request(self, query: LiteQuery, timeout: Optional[float] = None) -> LiteResponse:
        payload = query.to_bytes()
        if timeout is None:
            timeout = self.config.timeout

        try:
            response = self._session.post(
                self.config.endpoint,
                data=payload,
                headers={
                    "Content-Type": "application/octet-stream",
                    "User-Agent": self.config.user_agent,
                },
                timeout=timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f"{query.name} timed out after {timeout}s", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"HTTP request failed: {e}", cause=e) from e

        if response.status_code != 200:
            raise NetworkError(
                f"HTTP {response.status_code}: {response.reason}",
                details={"status": response.status_code},
            )

        body = response.content
        if len(body) < 4:
            raise NetworkError("response is missing its type tag", details={"length": len(body)})

        type_id = struct.unpack_from("<I", body)[0]
        logger.debug("%s <- %d bytes (tag 0x%08x)", query.name, len(body) - 4, type_id)
        return LiteResponse(type_id=type_id, data=body[4:])
