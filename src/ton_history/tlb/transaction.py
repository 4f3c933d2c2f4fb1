"""
Transaction layout loader.

Parses a transaction root cell according to the block layout schema:

    transaction$0111 account_addr:bits256 lt:uint64
      prev_trans_hash:bits256 prev_trans_lt:uint64 now:uint32
      outmsg_cnt:uint15
      orig_status:AccountStatus end_status:AccountStatus
      ^[ in_msg:(Maybe ^(Message Any)) out_msgs:(HashmapE 15 ^(Message Any)) ]
      total_fees:CurrencyCollection state_update:^(HASH_UPDATE Account)
      description:^TransactionDescr = Transaction;

Messages, the out message dictionary and the description are kept as
cells; only the header fields are decoded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from tonsdk.boc import Cell

from ..cells.slice import CellSlice

TRANSACTION_TAG = 0b0111
HASH_UPDATE_TAG = 0x72


class TransactionLayoutError(ValueError):
    """Cell contents do not follow the transaction layout."""


class AccountStatus(IntEnum):
    UNINIT = 0b00
    FROZEN = 0b01
    ACTIVE = 0b10
    NONEXIST = 0b11


@dataclass(frozen=True)
class CurrencyCollection:
    grams: int
    # extra currencies dictionary root, None when empty
    other: Optional[Cell] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class HashUpdate:
    old_hash: bytes
    new_hash: bytes


def _cell_hash(cell: Optional[Cell]) -> Optional[bytes]:
    return bytes(cell.bytes_hash()) if cell is not None else None


@dataclass
class Transaction:
    """
    A decoded transaction.

    ``hash`` is the representation hash of the transaction root cell. The
    loader leaves it empty; it is filled in when the record is materialized
    from its tree root.
    """

    account_addr: bytes
    lt: int
    prev_tx_hash: bytes
    prev_tx_lt: int
    now: int
    out_msg_count: int
    orig_status: AccountStatus
    end_status: AccountStatus
    total_fees: CurrencyCollection
    state_update: HashUpdate
    in_msg: Optional[Cell] = field(default=None, compare=False, repr=False)
    out_msgs: Optional[Cell] = field(default=None, compare=False, repr=False)
    description: Optional[Cell] = field(default=None, compare=False, repr=False)
    hash: bytes = b""

    @property
    def in_msg_hash(self) -> Optional[bytes]:
        return _cell_hash(self.in_msg)

    @property
    def out_msgs_hash(self) -> Optional[bytes]:
        return _cell_hash(self.out_msgs)

    @property
    def description_hash(self) -> Optional[bytes]:
        return _cell_hash(self.description)

    @property
    def is_first(self) -> bool:
        """True for the account's first transaction (nothing precedes it)."""
        return self.prev_tx_lt == 0

    def __str__(self) -> str:
        return f"Transaction(lt={self.lt}, hash={self.hash.hex()}, fees={self.total_fees.grams})"


def _load_hash_update(cell: Cell) -> HashUpdate:
    s = CellSlice(cell)
    tag = s.read_uint(8)
    if tag != HASH_UPDATE_TAG:
        raise TransactionLayoutError(f"bad HASH_UPDATE tag 0x{tag:02x}")
    return HashUpdate(old_hash=s.read_bytes(32), new_hash=s.read_bytes(32))


def load_transaction(s: CellSlice) -> Transaction:
    """
    Load a Transaction from a cursor opened on its root cell.

    Args:
        s: Cursor at the start of the transaction cell

    Returns:
        Transaction with every field but ``hash`` populated

    Raises:
        TransactionLayoutError: On a wrong constructor tag
        CellUnderflowError: If the cell runs out of bits or references
    """
    tag = s.read_uint(4)
    if tag != TRANSACTION_TAG:
        raise TransactionLayoutError(f"bad transaction tag {tag:04b}")

    account_addr = s.read_bytes(32)
    lt = s.read_uint(64)
    prev_tx_hash = s.read_bytes(32)
    prev_tx_lt = s.read_uint(64)
    now = s.read_uint(32)
    out_msg_count = s.read_uint(15)
    orig_status = AccountStatus(s.read_uint(2))
    end_status = AccountStatus(s.read_uint(2))

    msgs = CellSlice(s.read_ref())
    in_msg = msgs.read_maybe_ref()
    out_msgs = msgs.read_maybe_ref()
    if out_msg_count and out_msgs is None:
        raise TransactionLayoutError(f"outmsg_cnt is {out_msg_count} but out_msgs is empty")

    grams = s.read_coins()
    other = s.read_maybe_ref()

    state_update = _load_hash_update(s.read_ref())
    description = s.read_ref()

    return Transaction(
        account_addr=account_addr,
        lt=lt,
        prev_tx_hash=prev_tx_hash,
        prev_tx_lt=prev_tx_lt,
        now=now,
        out_msg_count=out_msg_count,
        orig_status=orig_status,
        end_status=end_status,
        total_fees=CurrencyCollection(grams=grams, other=other),
        state_update=state_update,
        in_msg=in_msg,
        out_msgs=out_msgs,
        description=description,
    )
