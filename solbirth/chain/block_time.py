from typing import Optional

from solbirth.config import RETRY_GET_TRANSACTION, RetryPolicy
from solbirth.errors import MissingTimestamp, RecordNotFound
from solbirth.util.log import ConsoleLog, NullLog
from solbirth.util.retry import retry_operation


async def fetch_block_time(
    client,
    signature: str,
    *,
    policy: RetryPolicy = RETRY_GET_TRANSACTION,
    log: Optional[ConsoleLog] = None,
    **retry_kwargs,
) -> int:
    """Block time (unix seconds) of the transaction behind `signature`."""
    log = log or NullLog()
    log.log(f"Fetching transaction details for signature: {signature}")

    async def _get():
        # a node that has not indexed the tx yet answers null; retried
        record = await client.get_record(signature)
        if record is None:
            raise RecordNotFound(signature)
        return record

    tx = await retry_operation("getTransaction", _get, policy, log=log, **retry_kwargs)
    log.log(f"Transaction details fetched. Slot: {tx.slot}, BlockTime: {tx.timestamp}")

    # property of the tx itself, so checked outside the retry loop
    if tx.timestamp is None:
        raise MissingTimestamp(signature)
    return tx.timestamp
