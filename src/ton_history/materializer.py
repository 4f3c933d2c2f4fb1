"""
Transaction materialization: tree root -> Transaction record.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Sequence

from .cells.slice import CellSlice
from .cells.tree import TreeRoot
from .runtime.errors import MalformedTransactionTreeError
from .tlb.transaction import Transaction, load_transaction

TransactionLoader = Callable[[CellSlice], Transaction]


def materialize(root: TreeRoot, index: Optional[int] = None,
                loader: TransactionLoader = load_transaction) -> Transaction:
    """
    Load the transaction stored under ``root`` and stamp it with the root's hash.

    The root's content hash always overwrites whatever the loader produced:
    the cell hash is the transaction's identity.

    Args:
        root: Tree root holding one transaction
        index: Position of the root in its bag, reported on failure
        loader: Layout loader to apply to the root cursor

    Raises:
        MalformedTransactionTreeError: If the root does not hold a transaction
    """
    try:
        tx = loader(root.begin_parse())
    except ValueError as e:
        where = f" {index}" if index is not None else ""
        raise MalformedTransactionTreeError(
            f"failed to load transaction{where} from cell: {e}", index=index, cause=e) from e
    tx.hash = root.content_hash()
    return tx


def materialize_all(roots: Sequence[TreeRoot],
                    loader: TransactionLoader = load_transaction) -> List[Transaction]:
    """Materialize every root, keeping their order."""
    return [materialize(root, i, loader) for i, root in enumerate(roots)]
