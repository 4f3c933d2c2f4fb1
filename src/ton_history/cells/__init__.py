"""
Cell layer: bag-of-cells decoding and cell parsing cursors.
"""

from .slice import CellSlice, CellUnderflowError
from .tree import BagOfCellsError, TreeDecoder, TreeRoot, decode_tree_roots

__all__ = [
    "CellSlice",
    "CellUnderflowError",
    "BagOfCellsError",
    "TreeDecoder",
    "TreeRoot",
    "decode_tree_roots",
]
