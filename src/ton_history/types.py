"""
Core value types exchanged with the node.

AccountID and BlockReference mirror the ``liteServer.accountId`` and
``tonNode.blockIdExt`` wire structures; PaginationAnchor names the
(lt, hash) pair that history queries start from.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

from tonsdk.utils import Address

from .runtime.errors import InvalidAddressError

HASH_SIZE = 32

# workchain:int32 shard:int64 seqno:int32 root_hash:int256 file_hash:int256
BLOCK_ID_EXT_SIZE = 4 + 8 + 4 + HASH_SIZE + HASH_SIZE


def _check_hash(name: str, value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != HASH_SIZE:
        raise ValueError(f"{name} must be {HASH_SIZE} bytes, got {len(value)}")
    return value


@dataclass(frozen=True)
class AccountID:
    """Account being queried: workchain plus 256-bit account id."""

    workchain: int
    id: bytes

    def __post_init__(self):
        object.__setattr__(self, "id", _check_hash("account id", self.id))

    @classmethod
    def from_address(cls, address: Union[str, Address, "AccountID"]) -> "AccountID":
        """
        Build an account id from any address form tonsdk understands.

        Accepts raw ``wc:hex`` strings, user-friendly base64 strings and
        ``tonsdk.utils.Address`` instances.

        Raises:
            InvalidAddressError: If the address cannot be parsed
        """
        if isinstance(address, AccountID):
            return address
        try:
            parsed = address if isinstance(address, Address) else Address(address)
        except Exception as e:
            raise InvalidAddressError(f"cannot parse address {address!r}", cause=e) from e
        return cls(workchain=parsed.wc, id=bytes(parsed.hash_part))

    def to_raw(self) -> str:
        """Raw ``wc:hex`` form."""
        return f"{self.workchain}:{self.id.hex()}"

    def __str__(self) -> str:
        return self.to_raw()


@dataclass(frozen=True)
class BlockReference:
    """Full block identifier (``tonNode.blockIdExt``)."""

    workchain: int
    shard: int
    seqno: int
    root_hash: bytes
    file_hash: bytes

    def __post_init__(self):
        object.__setattr__(self, "root_hash", _check_hash("root_hash", self.root_hash))
        object.__setattr__(self, "file_hash", _check_hash("file_hash", self.file_hash))

    def __str__(self) -> str:
        return f"({self.workchain},{self.shard & 0xFFFFFFFFFFFFFFFF:016x},{self.seqno})"


@dataclass(frozen=True)
class PaginationAnchor:
    """Starting point of a "before or including" history query."""

    lt: int
    hash: bytes

    def __post_init__(self):
        if self.lt < 0:
            raise ValueError("lt must be non-negative")
        object.__setattr__(self, "hash", _check_hash("hash", self.hash))

    @property
    def is_genesis(self) -> bool:
        """True when there is nothing before this anchor."""
        return self.lt == 0


__all__ = [
    "HASH_SIZE",
    "BLOCK_ID_EXT_SIZE",
    "AccountID",
    "BlockReference",
    "PaginationAnchor",
]
