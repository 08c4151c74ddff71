import asyncio
from typing import Awaitable, Callable, Optional, Sequence

from solbirth.chain.block_time import fetch_block_time
from solbirth.chain.rpc import RpcClient, get_client
from solbirth.chain.signatures import find_first_signature
from solbirth.config import CONFIG, RETRY_GET_SIGNATURES, RETRY_GET_TRANSACTION, RetryPolicy
from solbirth.errors import AllEndpointsFailed, describe_error
from solbirth.util.log import ConsoleLog, NullLog, mask_url


async def resolve_first_timestamp(
    program_id: str,
    endpoints: Sequence[str],
    *,
    log: Optional[ConsoleLog] = None,
    client_factory: Callable[[str], RpcClient] = get_client,
    limit: int = CONFIG["SIGNATURE_FETCH_LIMIT"],
    signatures_policy: RetryPolicy = RETRY_GET_SIGNATURES,
    transaction_policy: RetryPolicy = RETRY_GET_TRANSACTION,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> int:
    """
    Try each endpoint in order (oldest signature, then its block time) and
    return the first block time obtained. Endpoints after a success are not
    touched. If they all fail, AllEndpointsFailed carries the last failure.
    """
    log = log or NullLog()
    last_failure: Optional[Exception] = None

    for url in endpoints:
        log.endpoint_attempt_started(url)
        client = client_factory(url)
        try:
            sig = await find_first_signature(
                client, program_id, limit=limit, policy=signatures_policy, log=log, sleep=sleep
            )
            return await fetch_block_time(
                client, sig, policy=transaction_policy, log=log, sleep=sleep
            )
        except Exception as e:
            last_failure = e
            log.endpoint_failed(url, e)
        finally:
            await _close(client, url, log)

    raise AllEndpointsFailed(last_failure)


async def _close(client: RpcClient, url: str, log: ConsoleLog):
    # a failed close must not replace the endpoint's result or failure
    try:
        await client.close()
    except Exception as e:
        log.warn(f"Closing the RPC client for {mask_url(url)} failed: {describe_error(e)}")
