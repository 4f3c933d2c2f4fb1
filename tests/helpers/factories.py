"""
Test factories for cells and lite server payloads.

Builds transaction cells with tonsdk and wraps them in the TL response
layouts the node sends back.
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from tonsdk.boc import Cell

from ton_history.codec.writer import WireWriter
from ton_history.types import AccountID, BlockReference

ACCOUNT_BYTES = bytes.fromhex("83dfd552e63729b472fcbcc8c45ebcc6691702558b68ec7527e1ba403a0f31a8")
ACCOUNT = AccountID(workchain=0, id=ACCOUNT_BYTES)


def _write_bytes(cell: Cell, data: bytes) -> None:
    cell.bits.write_uint(int.from_bytes(data, "big"), len(data) * 8)


def _write_coins(cell: Cell, amount: int) -> None:
    n = (amount.bit_length() + 7) // 8
    cell.bits.write_uint(n, 4)
    if n:
        cell.bits.write_uint(amount, n * 8)


def mk_hash(seed: int) -> bytes:
    return bytes([seed & 0xFF]) * 32


def mk_block(seqno: int = 1000, workchain: int = 0) -> BlockReference:
    return BlockReference(
        workchain=workchain,
        shard=-(1 << 63),
        seqno=seqno,
        root_hash=mk_hash(seqno),
        file_hash=mk_hash(seqno + 1),
    )


def mk_message_cell(marker: int = 0xABCD) -> Cell:
    cell = Cell()
    cell.bits.write_uint(marker, 16)
    return cell


def mk_transaction_cell(lt: int = 1000, prev_lt: int = 900, prev_hash: Optional[bytes] = None,
                        now: int = 1_700_000_000, fees: int = 1_234_567,
                        account: bytes = ACCOUNT_BYTES, with_in_msg: bool = True,
                        tag: int = 0b0111) -> Cell:
    """Build a transaction root cell following the block layout."""
    msgs = Cell()
    if with_in_msg:
        msgs.bits.write_uint(1, 1)
        msgs.refs.append(mk_message_cell(lt & 0xFFFF))
    else:
        msgs.bits.write_uint(0, 1)
    msgs.bits.write_uint(0, 1)

    state_update = Cell()
    state_update.bits.write_uint(0x72, 8)
    _write_bytes(state_update, mk_hash(0x0A))
    _write_bytes(state_update, mk_hash(0x0B))

    description = Cell()
    description.bits.write_uint(0, 4)
    description.bits.write_uint(lt & 0xFF, 8)

    cell = Cell()
    cell.bits.write_uint(tag, 4)
    _write_bytes(cell, account)
    cell.bits.write_uint(lt, 64)
    _write_bytes(cell, prev_hash if prev_hash is not None else mk_hash(prev_lt))
    cell.bits.write_uint(prev_lt, 64)
    cell.bits.write_uint(now, 32)
    cell.bits.write_uint(0, 15)
    cell.bits.write_uint(0b10, 2)
    cell.bits.write_uint(0b10, 2)
    cell.refs.append(msgs)
    _write_coins(cell, fees)
    cell.bits.write_uint(0, 1)
    cell.refs.append(state_update)
    cell.refs.append(description)
    return cell


def to_boc(cell: Cell) -> bytes:
    return bytes(cell.to_boc(False))


def cell_hash(cell: Cell) -> bytes:
    return bytes(cell.bytes_hash())


def to_multi_root_boc(roots: Sequence[Cell]) -> bytes:
    """
    Serialize several roots into one bag of cells, keeping their order.

    tonsdk only writes single-root bags, so this lays out the generic
    header by hand: no index, no crc, 1-byte cell references.
    """
    cells = {}
    pending = list(roots)
    while pending:
        cell = pending.pop()
        key = cell_hash(cell)
        if key not in cells:
            cells[key] = cell
            pending.extend(cell.refs)

    # parents are strictly deeper than their children
    order = sorted(cells.values(), key=lambda c: -c.get_max_depth())
    index = {cell_hash(c): i for i, c in enumerate(order)}
    assert len(order) < 256

    data = b"".join(bytes(c.serialize_for_boc(index, 1)) for c in order)
    header = bytes(Cell.REACH_BOC_MAGIC_PREFIX)
    header += bytes([0x01, 2, len(order), len(roots), 0])
    header += len(data).to_bytes(2, "big")
    header += bytes(index[cell_hash(r)] for r in roots)
    return header + data


def transaction_info_payload(tx_boc: bytes, block: Optional[BlockReference] = None,
                             proof: bytes = b"\x01proof") -> bytes:
    """liteServer.transactionInfo body (without the type tag)."""
    w = WireWriter()
    w.block_id_ext(block or mk_block())
    w.tl_bytes(proof)
    w.tl_bytes(tx_boc)
    return w.to_bytes()


def transaction_list_payload(tx_boc: bytes, blocks: Sequence[BlockReference] = ()) -> bytes:
    """liteServer.transactionList body (without the type tag)."""
    w = WireWriter()
    w.u32le(len(blocks))
    for block in blocks:
        w.block_id_ext(block)
    w.tl_bytes(tx_boc)
    return w.to_bytes()


def error_payload(code: int, message: str) -> bytes:
    """liteServer.error body (without the type tag)."""
    w = WireWriter()
    w.i32le(code)
    w.tl_string(message)
    return w.to_bytes()


def mk_chain(count: int, newest_lt: int = 10_000, step: int = 100) -> List[Cell]:
    """``count`` linked transaction cells, newest first; the last one has no predecessor."""
    cells: List[Optional[Cell]] = [None] * count
    prev_cell: Optional[Cell] = None
    for i in reversed(range(count)):
        lt = newest_lt - i * step
        if prev_cell is None:
            cell = mk_transaction_cell(lt=lt, prev_lt=0, prev_hash=b"\x00" * 32)
        else:
            cell = mk_transaction_cell(lt=lt, prev_lt=lt - step, prev_hash=cell_hash(prev_cell))
        cells[i] = cell
        prev_cell = cell
    return cells
