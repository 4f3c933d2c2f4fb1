"""
Bag-of-cells decoding.

Thin adapter over ``tonsdk.boc``: splits a serialized bag of cells into its
root cells and exposes, per root, a parse cursor and the content hash.
"""

from __future__ import annotations
import logging
from typing import List, Protocol

from tonsdk.boc import Cell
from tonsdk.boc._cell import deserialize_boc

from .slice import CellSlice

logger = logging.getLogger(__name__)

# Reach, lean and lean-with-crc serialization headers
BOC_MAGIC_PREFIXES = (
    Cell.REACH_BOC_MAGIC_PREFIX,
    Cell.LEAN_BOC_MAGIC_PREFIX,
    Cell.LEAN_BOC_MAGIC_PREFIX_CRC,
)


class BagOfCellsError(ValueError):
    """Serialized bag of cells could not be deserialized."""


class TreeRoot:
    """One root of a decoded bag of cells."""

    __slots__ = ("cell",)

    def __init__(self, cell: Cell):
        self.cell = cell

    def begin_parse(self) -> CellSlice:
        """Open a fresh cursor at the start of the root cell."""
        return CellSlice(self.cell)

    def content_hash(self) -> bytes:
        """Representation hash of the root cell (32 bytes)."""
        return bytes(self.cell.bytes_hash())

    def __repr__(self) -> str:
        return f"TreeRoot({self.content_hash().hex()})"


class TreeDecoder(Protocol):
    """Anything that turns a serialized bag of cells into ordered roots."""

    def __call__(self, data: bytes) -> List[TreeRoot]: ...


def decode_tree_roots(data: bytes) -> List[TreeRoot]:
    """
    Deserialize a bag of cells into its roots, in serialization order.

    Args:
        data: Serialized bag of cells

    Returns:
        Root cells wrapped as TreeRoot; empty input yields no roots

    Raises:
        BagOfCellsError: If ``data`` is not a valid bag of cells
    """
    if not data:
        return []
    data = bytes(data)
    if data[:4] not in BOC_MAGIC_PREFIXES:
        raise BagOfCellsError(f"invalid bag of cells: unknown prefix {data[:4].hex()}")
    try:
        cells = deserialize_boc(data)
    except (AttributeError, TypeError):
        raise
    except Exception as e:
        # tonsdk signals every malformed input with a plain Exception
        raise BagOfCellsError(f"invalid bag of cells: {e}") from e
    logger.debug("Decoded %d tree roots from %d bytes", len(cells), len(data))
    return [TreeRoot(c) for c in cells]
