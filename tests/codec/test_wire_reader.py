"""
Wire reader tests.

Covers fixed-width reads, TL byte strings with both length forms and
padding, block ids, header skipping and the value-and-rest helpers.
"""

import struct

import pytest

from ton_history.codec.reader import (
    WireReader,
    read_block_reference,
    read_length_prefixed_bytes,
    read_uint32_le,
    skip_block_references,
)
from ton_history.codec.writer import WireWriter
from ton_history.runtime.errors import FailedHeaderDecodeError, TruncatedInputError

from helpers import mk_block


class TestFixedWidth:
    """Fixed-width integer reads."""

    def test_u32le(self):
        value, rest = read_uint32_le(b"\x01\x02\x03\x04tail")
        assert value == 0x04030201
        assert rest == b"tail"

    def test_i32le_negative(self):
        reader = WireReader(struct.pack("<i", -7))
        assert reader.i32le() == -7
        assert reader.eof

    def test_i64le(self):
        reader = WireReader(struct.pack("<q", 47_000_000_000_001))
        assert reader.i64le() == 47_000_000_000_001

    def test_truncated_u32_does_not_advance(self):
        reader = WireReader(b"\x01\x02\x03")
        with pytest.raises(TruncatedInputError):
            reader.u32le()
        assert reader.offset == 0
        assert reader.remaining == 3

    def test_int256_truncated(self):
        with pytest.raises(TruncatedInputError):
            WireReader(b"\x00" * 31).int256()


class TestTLBytes:
    """TL length-prefixed byte strings."""

    def test_short_form_with_padding(self):
        # 1 length byte + 5 payload bytes + 2 padding bytes
        data = b"\x05hello\x00\x00" + b"next"
        value, rest = read_length_prefixed_bytes(data)
        assert value == b"hello"
        assert rest == b"next"

    def test_short_form_aligned(self):
        data = b"\x03abc"
        value, rest = read_length_prefixed_bytes(data)
        assert value == b"abc"
        assert rest == b""

    def test_empty(self):
        value, rest = read_length_prefixed_bytes(b"\x00\x00\x00\x00")
        assert value == b""
        assert rest == b""

    def test_long_form(self):
        payload = bytes(range(256)) * 2
        w = WireWriter()
        w.tl_bytes(payload)
        encoded = w.to_bytes()

        assert encoded[0] == 0xFE
        assert int.from_bytes(encoded[1:4], "little") == len(payload)
        assert len(encoded) % 4 == 0

        value, rest = read_length_prefixed_bytes(encoded)
        assert value == payload
        assert rest == b""

    def test_declared_length_exceeds_buffer(self):
        reader = WireReader(b"\x10abc")
        with pytest.raises(TruncatedInputError):
            reader.tl_bytes()
        assert reader.offset == 0

    def test_missing_padding_is_truncation(self):
        with pytest.raises(TruncatedInputError):
            read_length_prefixed_bytes(b"\x05hello\x00")

    def test_long_form_missing_length_bytes(self):
        with pytest.raises(TruncatedInputError):
            read_length_prefixed_bytes(b"\xfe\x01")

    def test_empty_buffer(self):
        with pytest.raises(TruncatedInputError):
            read_length_prefixed_bytes(b"")

    def test_string(self):
        w = WireWriter()
        w.tl_string("not found")
        assert WireReader(w.to_bytes()).tl_string() == "not found"


class TestBlockReferences:
    """Block id reads and header skipping."""

    def test_read_block_reference(self):
        block = mk_block(seqno=31_337, workchain=-1)
        w = WireWriter()
        w.block_id_ext(block)
        value, rest = read_block_reference(w.to_bytes() + b"\xff")

        assert value == block
        assert rest == b"\xff"

    def test_unsigned_shard_is_written_as_signed(self):
        block = mk_block()
        unsigned = type(block)(block.workchain, 0x8000000000000000, block.seqno,
                               block.root_hash, block.file_hash)
        w = WireWriter()
        w.block_id_ext(unsigned)
        value, _ = read_block_reference(w.to_bytes())
        assert value.shard == -(1 << 63)

    def test_block_reference_truncated(self):
        w = WireWriter()
        w.block_id_ext(mk_block())
        with pytest.raises(TruncatedInputError):
            read_block_reference(w.to_bytes()[:-1])

    def test_skip_block_references(self):
        w = WireWriter()
        for seqno in range(3):
            w.block_id_ext(mk_block(seqno=seqno))
        rest = skip_block_references(w.to_bytes() + b"rest", 3)
        assert rest == b"rest"

    def test_skip_zero(self):
        assert skip_block_references(b"abc", 0) == b"abc"

    def test_skip_reports_failing_index(self):
        w = WireWriter()
        w.block_id_ext(mk_block(seqno=1))
        w.block_id_ext(mk_block(seqno=2))
        data = w.to_bytes()[:-10]

        with pytest.raises(FailedHeaderDecodeError) as exc_info:
            skip_block_references(data, 2)

        error = exc_info.value
        assert error.index == 1
        assert isinstance(error.__cause__, TruncatedInputError)
        assert error.cause is error.__cause__

    def test_skip_proof_wraps_truncation(self):
        reader = WireReader(b"\x08abc")
        with pytest.raises(TruncatedInputError) as exc_info:
            reader.skip_bytes("proof")
        assert "proof" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TruncatedInputError)

    def test_skip_single_block_id_is_truncation(self):
        reader = WireReader(b"\x00" * 40)
        with pytest.raises(TruncatedInputError) as exc_info:
            reader.skip_block_id()

        assert not isinstance(exc_info.value, FailedHeaderDecodeError)
        assert "block id" in str(exc_info.value)
        assert reader.offset == 0

    def test_skip_single_block_id(self):
        w = WireWriter()
        w.block_id_ext(mk_block())
        reader = WireReader(w.to_bytes() + b"tail")
        reader.skip_block_id()
        assert reader.rest() == b"tail"
