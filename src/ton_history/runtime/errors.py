"""
Lite client error model

Error taxonomy for transaction retrieval. Every failure surfaced by the
client is a LiteClientError subclass; decode failures chain their immediate
cause so the full decode path can be reconstructed from ``__cause__``.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Client side error codes."""

    UNKNOWN = 1

    # Wire decoding errors (100-199)
    TRUNCATED_INPUT = 100
    FAILED_HEADER_DECODE = 101
    MALFORMED_TRANSACTION_TREE = 102
    UNKNOWN_RESPONSE_TYPE = 103

    # Server reported errors (200-299)
    SERVER_ERROR = 200
    MESSAGE_NOT_ACCEPTED = 201

    # Transport errors (300-399)
    NETWORK_ERROR = 300
    TIMEOUT = 301

    # Caller input errors (400-499)
    INVALID_ADDRESS = 400


class LiteClientError(Exception):
    """
    Base class for all lite client errors.

    Carries a client error code, free-form details and the exception that
    caused it (also exposed through ``__cause__`` when raised with ``from``).
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a lite client error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class TruncatedInputError(LiteClientError):
    """Buffer is shorter than the field it declares."""

    def __init__(self, message: str = "Truncated input",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.TRUNCATED_INPUT, details, cause)


class FailedHeaderDecodeError(LiteClientError):
    """A block header in a response vector could not be read."""

    def __init__(self, index: int, cause: Optional[BaseException] = None):
        super().__init__(f"failed to load block {index} from vector",
                         ErrorCode.FAILED_HEADER_DECODE, {"index": index}, cause)
        self.index = index


class MalformedTransactionTreeError(LiteClientError):
    """Transaction tree has the wrong number of roots or does not match the transaction layout."""

    def __init__(self, message: str, index: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        details = {"index": index} if index is not None else None
        super().__init__(message, ErrorCode.MALFORMED_TRANSACTION_TREE, details, cause)
        self.index = index


class UnknownResponseTypeError(LiteClientError):
    """Response type tag is neither the expected result nor an error."""

    def __init__(self, type_id: int):
        super().__init__("unknown response type", ErrorCode.UNKNOWN_RESPONSE_TYPE,
                         {"type_id": f"0x{type_id & 0xFFFFFFFF:08x}"})
        self.type_id = type_id


class ServerError(LiteClientError):
    """Failure reported verbatim by the node."""

    def __init__(self, server_code: int, server_message: str):
        super().__init__(server_message, ErrorCode.SERVER_ERROR,
                         {"server_code": server_code})
        self.server_code = server_code
        self.server_message = server_message

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ServerError):
            return NotImplemented
        return (self.server_code, self.server_message) == (other.server_code, other.server_message)

    def __hash__(self) -> int:
        return hash((self.server_code, self.server_message))


class MessageNotAcceptedError(LiteClientError):
    """The node executed the query but the effect was not accepted (server code 0)."""

    def __init__(self, message: str = "message was not accepted by the contract",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.MESSAGE_NOT_ACCEPTED, details)


class NetworkError(LiteClientError):
    """Transport level failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class RequestTimeoutError(NetworkError):
    """Request did not complete before its deadline."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class InvalidAddressError(LiteClientError):
    """Account address could not be parsed."""

    def __init__(self, message: str = "Invalid address",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.INVALID_ADDRESS, details, cause)


def decode_server_error(reader) -> LiteClientError:
    """
    Decode a ``liteServer.error`` payload into the error it stands for.

    Code 0 means the node ran the query but did not accept its effect and
    maps to MessageNotAcceptedError; anything else is returned as ServerError
    so callers never inspect the raw code again.

    Args:
        reader: WireReader positioned at the start of the error payload

    Returns:
        The error to raise

    Raises:
        TruncatedInputError: If the payload is cut short
    """
    code = reader.i32le()
    message = reader.tl_string()
    if code == 0:
        return MessageNotAcceptedError(details={"server_message": message} if message else None)
    return ServerError(code, message)


class ErrorHandler:
    """
    Utility class for categorizing errors.
    """

    @staticmethod
    def is_retryable(error: BaseException) -> bool:
        """
        Check if an error is worth retrying by the caller.

        The client never retries; this only classifies. Transport failures
        are transient, while decode and server errors are terminal.

        Args:
            error: Exception to check

        Returns:
            True if a retry could succeed
        """
        if isinstance(error, LiteClientError):
            return error.code in (ErrorCode.NETWORK_ERROR, ErrorCode.TIMEOUT)
        return False


__all__ = [
    "ErrorCode",
    "LiteClientError",
    "TruncatedInputError",
    "FailedHeaderDecodeError",
    "MalformedTransactionTreeError",
    "UnknownResponseTypeError",
    "ServerError",
    "MessageNotAcceptedError",
    "NetworkError",
    "RequestTimeoutError",
    "InvalidAddressError",
    "decode_server_error",
    "ErrorHandler",
]
