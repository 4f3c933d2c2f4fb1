"""
Wire Writer - TL request encoding

Packs lite server queries in TL's little-endian layout. Only the field
kinds the history queries use are supported.
"""

import struct
from typing import List

from ..types import AccountID, BlockReference, HASH_SIZE
from .reader import TL_LONG_BYTES_MARKER


class WireWriter:
    """
    Append-only TL encoder.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u32le(self, v: int) -> None:
        """Write unsigned 32-bit little-endian integer (TL ``#``)."""
        self._bb.extend(struct.pack("<I", v & 0xFFFFFFFF))

    def i32le(self, v: int) -> None:
        """Write signed 32-bit little-endian integer (TL ``int``)."""
        self._bb.extend(struct.pack("<i", v))

    def i64le(self, v: int) -> None:
        """Write signed 64-bit little-endian integer (TL ``long``)."""
        self._bb.extend(struct.pack("<q", v))

    def int256(self, v: bytes) -> None:
        """Write a raw 32-byte value (TL ``int256``)."""
        if len(v) != HASH_SIZE:
            raise ValueError(f"int256 must be {HASH_SIZE} bytes, got {len(v)}")
        self._bb.extend(v)

    def tl_bytes(self, v: bytes) -> None:
        """
        Write a TL byte string with its length prefix and zero padding.

        Args:
            v: Payload, at most 2**24 - 1 bytes
        """
        n = len(v)
        if n < TL_LONG_BYTES_MARKER:
            self._bb.append(n)
            header = 1
        elif n < 1 << 24:
            self._bb.append(TL_LONG_BYTES_MARKER)
            self._bb.extend(n.to_bytes(3, "little"))
            header = 4
        else:
            raise ValueError(f"bytes field too long: {n}")
        self._bb.extend(v)
        self._bb.extend(b"\x00" * (-(header + n) % 4))

    def tl_string(self, s: str) -> None:
        """Write a TL string as UTF-8 bytes."""
        self.tl_bytes(s.encode("utf-8"))

    def block_id_ext(self, block: BlockReference) -> None:
        """Write a ``tonNode.blockIdExt`` structure."""
        # shard ids are often written unsigned (0x8000000000000000)
        shard = block.shard - (1 << 64) if block.shard >= 1 << 63 else block.shard
        self._bb.extend(struct.pack("<iqi", block.workchain, shard, block.seqno))
        self.int256(block.root_hash)
        self.int256(block.file_hash)

    def account_id(self, account: AccountID) -> None:
        """Write a ``liteServer.accountId`` structure."""
        self.i32le(account.workchain)
        self.int256(account.id)

    def to_bytes(self) -> bytes:
        """Return accumulated bytes."""
        return bytes(self._bb)
