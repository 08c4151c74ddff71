from typing import Optional

from solbirth.config import CONFIG, RETRY_GET_SIGNATURES, RetryPolicy
from solbirth.errors import NoRecordsFound
from solbirth.util.log import ConsoleLog, NullLog
from solbirth.util.retry import retry_operation


async def find_first_signature(
    client,
    program_id: str,
    *,
    limit: int = CONFIG["SIGNATURE_FETCH_LIMIT"],
    policy: RetryPolicy = RETRY_GET_SIGNATURES,
    log: Optional[ConsoleLog] = None,
    **retry_kwargs,
) -> str:
    """
    Walk getSignaturesForAddress backwards until the history runs out and
    return the oldest signature seen.

    End of history is either a short page or an empty page after at least one
    non-empty one. Each page goes through the retry wrapper on its own, so a
    flaky page does not restart the walk.
    """
    log = log or NullLog()
    before: Optional[str] = None
    earliest: Optional[str] = None

    log.log(f"Starting to fetch signatures for {program_id} with limit {limit}")
    while True:
        log.log(f"Fetching signatures before: {before or 'most recent'}")
        page = await retry_operation(
            "getSignaturesForAddress",
            lambda: client.list_records(program_id, limit=limit, before=before),
            policy,
            log=log,
            **retry_kwargs,
        )
        log.log(f"Fetched {len(page)} signature infos.")

        if not page:
            if earliest is None:
                raise NoRecordsFound(program_id)
            break

        # page is newest -> oldest, so the tail is the oldest so far
        earliest = page[-1].handle
        if len(page) < limit:
            log.log(f"Reached end of signature history, earliest in this batch: {earliest}")
            break
        before = earliest
        log.log(f"Continuing pagination, next 'before' will be: {before}")

    log.log(f"Determined earliest signature: {earliest}")
    return earliest
