"""
History query models.

Typed requests for ``liteServer.getOneTransaction`` and
``liteServer.getTransactions``. Field widths are validated on construction,
and ``to_bytes`` produces the boxed TL encoding handed to the transport.
"""

from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .codec import schema
from .codec.writer import WireWriter
from .types import AccountID, BlockReference, HASH_SIZE

INT32_MAX = (1 << 31) - 1
INT64_MAX = (1 << 63) - 1


class LiteQuery(BaseModel):
    """Base class for typed lite server queries."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    constructor_id: int = 0
    name: str = ""

    def _write_fields(self, w: WireWriter) -> None:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        """Boxed TL encoding: constructor id followed by the fields."""
        w = WireWriter()
        w.u32le(self.constructor_id)
        self._write_fields(w)
        return w.to_bytes()

    def describe(self) -> Dict[str, Any]:
        """Short summary for debug logs."""
        return {"query": self.name}


class GetOneTransaction(LiteQuery):
    """
    Fetch the transaction of ``account`` with logical time ``lt`` in ``block``.

    Matches: liteServer.getOneTransaction id:tonNode.blockIdExt
    account:liteServer.accountId lt:long
    """

    constructor_id: int = schema.GET_ONE_TRANSACTION
    name: str = "liteServer.getOneTransaction"

    block: BlockReference
    account: AccountID
    lt: int = Field(ge=0, le=INT64_MAX)

    def _write_fields(self, w: WireWriter) -> None:
        w.block_id_ext(self.block)
        w.account_id(self.account)
        w.i64le(self.lt)

    def describe(self) -> Dict[str, Any]:
        return {"query": self.name, "block": str(self.block),
                "account": str(self.account), "lt": self.lt}


class GetTransactions(LiteQuery):
    """
    Fetch up to ``limit`` transactions of ``account``, ending at (lt, hash).

    Matches: liteServer.getTransactions count:# account:liteServer.accountId
    lt:long hash:int256
    """

    constructor_id: int = schema.GET_TRANSACTIONS
    name: str = "liteServer.getTransactions"

    limit: int = Field(ge=0, le=INT32_MAX)
    account: AccountID
    lt: int = Field(ge=0, le=INT64_MAX)
    tx_hash: bytes

    @field_validator("tx_hash")
    @classmethod
    def _validate_hash(cls, v: bytes) -> bytes:
        if len(v) != HASH_SIZE:
            raise ValueError(f"tx_hash must be {HASH_SIZE} bytes, got {len(v)}")
        return bytes(v)

    def _write_fields(self, w: WireWriter) -> None:
        w.i32le(self.limit)
        w.account_id(self.account)
        w.i64le(self.lt)
        w.int256(self.tx_hash)

    def describe(self) -> Dict[str, Any]:
        return {"query": self.name, "account": str(self.account), "limit": self.limit,
                "lt": self.lt, "hash": self.tx_hash.hex()}


__all__ = ["LiteQuery", "GetOneTransaction", "GetTransactions"]
