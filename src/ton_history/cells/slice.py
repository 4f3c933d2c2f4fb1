"""
Forward-only reader over one cell's data bits and references.
"""

from __future__ import annotations
from typing import Optional

from tonsdk.boc import Cell


class CellUnderflowError(ValueError):
    """Attempted to read more bits or references than the cell holds."""


class CellSlice:
    """
    Bit cursor over a ``tonsdk.boc.Cell``.

    Reads consume bits from the most significant end, as the cell layout
    schemas are written. References are consumed in order.
    """

    def __init__(self, cell: Cell):
        self._cell = cell
        self._bit_len = cell.bits.cursor
        nbytes = (self._bit_len + 7) // 8
        raw = int.from_bytes(bytes(cell.bits.array[:nbytes]), "big")
        self._data = raw >> (nbytes * 8 - self._bit_len)
        self._pos = 0
        self._refs = list(cell.refs)
        self._ref_pos = 0

    @property
    def remaining_bits(self) -> int:
        return self._bit_len - self._pos

    @property
    def remaining_refs(self) -> int:
        return len(self._refs) - self._ref_pos

    def read_uint(self, bits: int) -> int:
        """Read an unsigned big-endian integer of ``bits`` width."""
        if bits < 0 or bits > self.remaining_bits:
            raise CellUnderflowError(
                f"need {bits} bits at offset {self._pos}, {self.remaining_bits} left")
        shift = self._bit_len - self._pos - bits
        value = (self._data >> shift) & ((1 << bits) - 1)
        self._pos += bits
        return value

    def read_bit(self) -> bool:
        return bool(self.read_uint(1))

    def read_bytes(self, n: int) -> bytes:
        """Read ``n`` whole bytes."""
        return self.read_uint(n * 8).to_bytes(n, "big")

    def read_var_uint(self, len_bits: int) -> int:
        """Read a ``VarUInteger`` whose byte length takes ``len_bits`` bits (Grams: 4)."""
        n = self.read_uint(len_bits)
        return self.read_uint(n * 8)

    def read_coins(self) -> int:
        return self.read_var_uint(4)

    def read_ref(self) -> Cell:
        """Take the next child reference."""
        if self._ref_pos >= len(self._refs):
            raise CellUnderflowError(f"no reference left at index {self._ref_pos}")
        ref = self._refs[self._ref_pos]
        self._ref_pos += 1
        return ref

    def read_maybe_ref(self) -> Optional[Cell]:
        """Read a ``Maybe ^X`` field: one flag bit, then a reference if set."""
        return self.read_ref() if self.read_bit() else None
