from .mocks import MockTransport, StubTreeDecoder
from .factories import (
    ACCOUNT,
    ACCOUNT_BYTES,
    cell_hash,
    error_payload,
    mk_block,
    mk_chain,
    mk_hash,
    mk_transaction_cell,
    to_boc,
    to_multi_root_boc,
    transaction_info_payload,
    transaction_list_payload,
)

__all__ = [
    "MockTransport",
    "StubTreeDecoder",
    "ACCOUNT",
    "ACCOUNT_BYTES",
    "cell_hash",
    "error_payload",
    "mk_block",
    "mk_chain",
    "mk_hash",
    "mk_transaction_cell",
    "to_boc",
    "to_multi_root_boc",
    "transaction_info_payload",
    "transaction_list_payload",
]
