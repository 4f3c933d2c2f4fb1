"""
Wire Reader - TL response decoding

Decodes lite server responses left to right. Every read is atomic: it
either consumes the whole field or raises TruncatedInputError without
moving the cursor, so a failed read never leaves a half-consumed field.
"""

import builtins
import logging
import struct
from typing import Tuple

from ..runtime.errors import TruncatedInputError, FailedHeaderDecodeError
from ..types import BlockReference, BLOCK_ID_EXT_SIZE, HASH_SIZE

logger = logging.getLogger(__name__)

# TL bytes with a length of 254 or more use a 0xFE marker and 3 length bytes
TL_LONG_BYTES_MARKER = 0xFE


class WireReader:
    """
    Forward-only reader over one response buffer.

    A reader is owned by a single decode call; nothing is shared between
    calls, so concurrent decodes need no locking.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Response bytes, starting right after the type tag
        """
        self._buf = bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True if every byte has been consumed."""
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    def rest(self) -> builtins.bytes:
        """Unread bytes, without consuming them."""
        return self._buf[self._off:]

    def _require(self, n: int, what: str) -> None:
        if n < 0 or self._off + n > len(self._buf):
            raise TruncatedInputError(
                f"not enough data to read {what}",
                details={"offset": self._off, "need": n, "available": self.remaining},
            )

    def _take(self, n: int, what: str) -> builtins.bytes:
        self._require(n, what)
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def u32le(self) -> int:
        """Read unsigned 32-bit little-endian integer (TL ``#``)."""
        return struct.unpack("<I", self._take(4, "uint32"))[0]

    def i32le(self) -> int:
        """Read signed 32-bit little-endian integer (TL ``int``)."""
        return struct.unpack("<i", self._take(4, "int32"))[0]

    def i64le(self) -> int:
        """Read signed 64-bit little-endian integer (TL ``long``)."""
        return struct.unpack("<q", self._take(8, "int64"))[0]

    def int256(self) -> builtins.bytes:
        """Read a raw 32-byte value (TL ``int256``)."""
        return self._take(HASH_SIZE, "int256")

    def tl_bytes(self) -> builtins.bytes:
        """
        Read a TL length-prefixed byte string.

        Lengths below 254 are stored in one byte, longer ones as 0xFE plus a
        3-byte little-endian length. The field is zero padded to a multiple of
        4 bytes and the padding is consumed together with the payload.

        Returns:
            The payload bytes

        Raises:
            TruncatedInputError: If the prefix, payload or padding is cut short
        """
        self._require(1, "bytes length")
        first = self._buf[self._off]
        if first == TL_LONG_BYTES_MARKER:
            self._require(4, "bytes length")
            length = int.from_bytes(self._buf[self._off + 1:self._off + 4], "little")
            header = 4
        else:
            length = first
            header = 1
        total = header + length
        total += -total % 4
        self._require(total, f"bytes payload of length {length}")
        out = self._buf[self._off + header:self._off + header + length]
        self._off += total
        return out

    def tl_string(self) -> str:
        """Read a TL string (UTF-8 encoded ``bytes``)."""
        return self.tl_bytes().decode("utf-8", errors="replace")

    def block_id_ext(self) -> BlockReference:
        """Read a ``tonNode.blockIdExt`` structure."""
        raw = self._take(BLOCK_ID_EXT_SIZE, "block id")
        workchain, shard, seqno = struct.unpack_from("<iqi", raw)
        return BlockReference(
            workchain=workchain,
            shard=shard,
            seqno=seqno,
            root_hash=raw[16:48],
            file_hash=raw[48:80],
        )

    def skip_block_id(self) -> None:
        """
        Advance past one standalone block id.

        Raises:
            TruncatedInputError: If the block id is cut short
        """
        try:
            self.block_id_ext()
        except TruncatedInputError as e:
            raise TruncatedInputError("failed to load block id",
                                      details=e.details, cause=e) from e

    def skip_block_ids(self, count: int) -> None:
        """
        Advance past ``count`` block ids without keeping them.

        Transaction lists carry the ids of the blocks the transactions came
        from. Header validation belongs to proof checking, which this client
        does not do, so only their boundaries matter here.

        Raises:
            FailedHeaderDecodeError: With the index of the first bad entry
        """
        for i in range(count):
            try:
                self.block_id_ext()
            except TruncatedInputError as e:
                raise FailedHeaderDecodeError(i, cause=e) from e
        logger.debug("Skipped %d block headers", count)

    def skip_bytes(self, what: str) -> None:
        """
        Advance past a TL byte string without keeping it.

        Used for the proof blob of a single transaction response: it has to be
        consumed to reach the transaction bytes but is not verified.

        Args:
            what: Name of the field being skipped, used in error messages
        """
        try:
            self.tl_bytes()
        except TruncatedInputError as e:
            raise TruncatedInputError(f"failed to load {what} bytes",
                                      details=e.details, cause=e) from e


def read_uint32_le(buf: bytes) -> Tuple[int, bytes]:
    """Read a uint32 from the front of ``buf``, returning (value, rest)."""
    reader = WireReader(buf)
    value = reader.u32le()
    return value, reader.rest()


def read_length_prefixed_bytes(buf: bytes) -> Tuple[bytes, bytes]:
    """Read a TL byte string from the front of ``buf``, returning (payload, rest)."""
    reader = WireReader(buf)
    value = reader.tl_bytes()
    return value, reader.rest()


def read_block_reference(buf: bytes) -> Tuple[BlockReference, bytes]:
    """Read a block id from the front of ``buf``, returning (block, rest)."""
    reader = WireReader(buf)
    value = reader.block_id_ext()
    return value, reader.rest()


def skip_block_references(buf: bytes, count: int) -> bytes:
    """Skip ``count`` block ids at the front of ``buf`` and return the rest."""
    reader = WireReader(buf)
    reader.skip_block_ids(count)
    return reader.rest()
