"""
Transaction history client

Fetches historical transactions of an account from a lite server and
decodes the TL responses into Transaction records carrying their cell
hashes.
"""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Union

from tonsdk.utils import Address

from .cells.tree import BagOfCellsError, TreeDecoder, TreeRoot, decode_tree_roots
from .codec import schema
from .codec.reader import WireReader
from .config import ClientConfig, MAX_TRANSACTIONS_PER_QUERY
from .materializer import TransactionLoader, materialize, materialize_all
from .queries import GetOneTransaction, GetTransactions, LiteQuery
from .runtime.errors import (
    MalformedTransactionTreeError,
    TruncatedInputError,
    UnknownResponseTypeError,
    decode_server_error,
)
from .tlb.transaction import Transaction, load_transaction
from .transport.base import LiteResponse, Transport
from .transport.http import HttpTransport
from .types import AccountID, BlockReference, PaginationAnchor

logger = logging.getLogger(__name__)

AddressLike = Union[str, Address, AccountID]


def _read_transaction_roots(reader: WireReader, decode: TreeDecoder) -> List[TreeRoot]:
    try:
        tx_data = reader.tl_bytes()
    except TruncatedInputError as e:
        raise TruncatedInputError("failed to load transaction bytes",
                                  details=e.details, cause=e) from e
    try:
        return decode(tx_data)
    except BagOfCellsError as e:
        raise MalformedTransactionTreeError(
            "failed to parse cell from transaction bytes", cause=e) from e


def decode_transaction_info(data: bytes, decode: TreeDecoder = decode_tree_roots,
                            loader: TransactionLoader = load_transaction) -> Transaction:
    """
    Decode a ``liteServer.transactionInfo`` payload.

    Layout: block id, proof bytes, transaction bytes. The block id and proof
    are consumed but not returned; proofs are not verified.

    Raises:
        TruncatedInputError: If a field, including the block id, is cut short
        MalformedTransactionTreeError: Unless the bytes hold exactly one valid transaction
    """
    reader = WireReader(data)
    reader.skip_block_id()
    reader.skip_bytes("proof")

    roots = _read_transaction_roots(reader, decode)
    if len(roots) != 1:
        raise MalformedTransactionTreeError(
            f"expected exactly one transaction root, got {len(roots)}")
    return materialize(roots[0], 0, loader)


def decode_transaction_list(data: bytes, decode: TreeDecoder = decode_tree_roots,
                            loader: TransactionLoader = load_transaction) -> List[Transaction]:
    """
    Decode a ``liteServer.transactionList`` payload.

    Layout: vector of block ids, then one bag of cells with a root per
    transaction. Records come back in the order of the roots in the bag.

    Raises:
        TruncatedInputError: If the payload is 4 bytes or less, or a field is cut short
        FailedHeaderDecodeError: If a block id in the vector is cut short
        MalformedTransactionTreeError: If the bag or a transaction in it is invalid
    """
    if len(data) <= 4:
        raise TruncatedInputError("too short response", details={"length": len(data)})

    reader = WireReader(data)
    count = reader.u32le()
    reader.skip_block_ids(count)

    roots = _read_transaction_roots(reader, decode)
    return materialize_all(roots, loader)


class TransactionClient:
    """
    Lite server client for account transaction history.

    Decoding holds no shared state, so one client can serve concurrent
    callers as long as its transport can.

    Example:
        ```python
        client = TransactionClient("https://liteproxy.example.org/query")
        txs = client.list_transactions(address, 10, last_lt, last_hash)
        ```
    """

    def __init__(self, config: Union[str, ClientConfig, None] = None,
                 transport: Optional[Transport] = None,
                 tree_decoder: TreeDecoder = decode_tree_roots,
                 loader: TransactionLoader = load_transaction):
        """
        Initialize the client.

        Args:
            config: Endpoint URL or ClientConfig, used to build an HttpTransport
            transport: Explicit transport, takes precedence over ``config``
            tree_decoder: Bag-of-cells decoder
            loader: Transaction layout loader
        """
        if isinstance(config, str):
            config = ClientConfig(endpoint=config)
        self.config = config

        if transport is None:
            if config is None:
                raise ValueError("either config or transport is required")
            transport = HttpTransport(config)
        self.transport = transport

        self._decode = tree_decoder
        self._loader = loader

        if config is not None and config.debug:
            logging.getLogger("ton_history").setLevel(logging.DEBUG)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> TransactionClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def max_page_size(self) -> int:
        return self.config.max_page_size if self.config else MAX_TRANSACTIONS_PER_QUERY

    def _request(self, query: LiteQuery, expected: int,
                 timeout: Optional[float]) -> LiteResponse:
        logger.debug("Request: %s", query.describe())
        # Transport errors, including timeouts, reach the caller unchanged
        response = self.transport.do_request(query, timeout=timeout)
        logger.debug("Response: %s, %d bytes",
                     schema.response_name(response.type_id), len(response.data))

        if response.type_id == expected:
            return response
        if response.type_id == schema.LS_ERROR:
            raise decode_server_error(WireReader(response.data))
        raise UnknownResponseTypeError(response.type_id)

    def get_transaction(self, block: BlockReference, address: AddressLike, lt: int,
                        timeout: Optional[float] = None) -> Transaction:
        """
        Fetch one transaction of an account by block and logical time.

        Args:
            block: Block containing the transaction
            address: Account address or AccountID
            lt: Logical time of the transaction
            timeout: Per-call deadline in seconds

        Returns:
            The transaction, with ``hash`` set to its root cell hash

        Raises:
            MessageNotAcceptedError: If the node answers with error code 0
            ServerError: If the node answers with any other error
            UnknownResponseTypeError: On an unexpected response tag
            TruncatedInputError, MalformedTransactionTreeError: On a malformed response
        """
        query = GetOneTransaction(block=block, account=AccountID.from_address(address), lt=lt)
        response = self._request(query, schema.TRANSACTION_INFO, timeout)
        return decode_transaction_info(response.data, self._decode, self._loader)

    def list_transactions(self, address: AddressLike, limit: int, lt: int, tx_hash: bytes,
                          timeout: Optional[float] = None) -> List[Transaction]:
        """
        Fetch up to ``limit`` transactions before, and including, (lt, tx_hash).

        The oldest transaction is first in the result. The node may return
        fewer than ``limit`` transactions. Records are returned in the order
        the node serialized them; they are not re-sorted here.

        Args:
            address: Account address or AccountID
            limit: Maximum number of transactions to request
            lt: Logical time of the newest transaction to include
            tx_hash: Hash of that transaction
            timeout: Per-call deadline in seconds

        Returns:
            Transactions, each with ``hash`` set to its root cell hash

        Raises:
            Same as get_transaction, plus FailedHeaderDecodeError if a block id
            in the header vector is cut short
        """
        query = GetTransactions(limit=limit, account=AccountID.from_address(address),
                                lt=lt, tx_hash=tx_hash)
        response = self._request(query, schema.TRANSACTION_LIST, timeout)
        txs = decode_transaction_list(response.data, self._decode, self._loader)
        if len(txs) > limit:
            logger.warning("Node returned %d transactions for a limit of %d", len(txs), limit)
        return txs

    def iter_transactions(self, address: AddressLike, lt: int, tx_hash: bytes,
                          page_size: Optional[int] = None, limit: Optional[int] = None,
                          timeout: Optional[float] = None) -> Iterator[Transaction]:
        """
        Walk an account's history backwards from (lt, tx_hash).

        Issues list_transactions calls of ``page_size`` and continues from
        the previous-transaction reference of the oldest record in each
        page. Pages are yielded newest page first, each in the order
        list_transactions returned it.

        Args:
            address: Account address or AccountID
            lt: Logical time of the newest transaction to include
            tx_hash: Hash of that transaction
            page_size: Transactions per request, defaults to the config's max_page_size
            limit: Stop after this many transactions
            timeout: Per-call deadline in seconds
        """
        account = AccountID.from_address(address)
        page_size = page_size or self.max_page_size
        anchor = PaginationAnchor(lt=lt, hash=tx_hash)
        seen = 0

        while not anchor.is_genesis:
            count = page_size if limit is None else min(page_size, limit - seen)
            if count <= 0:
                return
            page = self.list_transactions(account, count, anchor.lt, anchor.hash, timeout)
            if not page:
                return
            for tx in page:
                if limit is not None and seen >= limit:
                    return
                yield tx
                seen += 1

            oldest = min(page, key=lambda t: t.lt)
            anchor = PaginationAnchor(lt=oldest.prev_tx_lt, hash=oldest.prev_tx_hash)
