"""
TL schema constructor ids for the history queries.

A constructor id is the CRC32 (IEEE) of its schema line with parentheses
removed, which is how the node derives them from its ``.tl`` files.
"""

import zlib


def tl_id(schema: str) -> int:
    """Compute the unsigned constructor id of a TL schema line."""
    normalized = schema.replace("(", "").replace(")", "")
    return zlib.crc32(normalized.encode("utf-8")) & 0xFFFFFFFF


GET_ONE_TRANSACTION_SCHEMA = (
    "liteServer.getOneTransaction id:tonNode.blockIdExt account:liteServer.accountId "
    "lt:long = liteServer.TransactionInfo"
)
GET_TRANSACTIONS_SCHEMA = (
    "liteServer.getTransactions count:# account:liteServer.accountId lt:long "
    "hash:int256 = liteServer.TransactionList"
)
TRANSACTION_INFO_SCHEMA = (
    "liteServer.transactionInfo id:tonNode.blockIdExt proof:bytes "
    "transaction:bytes = liteServer.TransactionInfo"
)
TRANSACTION_LIST_SCHEMA = (
    "liteServer.transactionList ids:(vector tonNode.blockIdExt) "
    "transactions:bytes = liteServer.TransactionList"
)
ERROR_SCHEMA = "liteServer.error code:int message:string = liteServer.Error"

GET_ONE_TRANSACTION = tl_id(GET_ONE_TRANSACTION_SCHEMA)
GET_TRANSACTIONS = tl_id(GET_TRANSACTIONS_SCHEMA)
TRANSACTION_INFO = tl_id(TRANSACTION_INFO_SCHEMA)
TRANSACTION_LIST = tl_id(TRANSACTION_LIST_SCHEMA)
LS_ERROR = tl_id(ERROR_SCHEMA)

RESPONSE_NAMES = {
    TRANSACTION_INFO: "liteServer.transactionInfo",
    TRANSACTION_LIST: "liteServer.transactionList",
    LS_ERROR: "liteServer.error",
}


def response_name(type_id: int) -> str:
    """Human readable name of a response tag, for logs."""
    return RESPONSE_NAMES.get(type_id & 0xFFFFFFFF, f"0x{type_id & 0xFFFFFFFF:08x}")
