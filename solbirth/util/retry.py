import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import httpx

from solbirth.config import RetryPolicy, get_retry_delay
from solbirth.errors import AppError, RpcMaxRetriesExceeded
from solbirth.util.log import ConsoleLog, NullLog

T = TypeVar("T")


def is_rate_limited(err: BaseException) -> bool:
    """True for HTTP 429s, including ones wrapped by solana-py's own exception."""
    seen: Optional[BaseException] = err
    while seen is not None:
        if isinstance(seen, httpx.HTTPStatusError):
            if seen.response.status_code == 429:
                return True
        # our own errors can quote signatures, which may contain "429"
        elif not isinstance(seen, AppError) and "429" in str(seen):
            return True
        seen = seen.__cause__
    return False


async def retry_operation(
    operation_name: str,
    operation_fn: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    log: Optional[ConsoleLog] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Call operation_fn up to policy.attempts times with exponential backoff.

    Every failure is retried the same way, rate limit or not. Once the last
    attempt fails the result is RpcMaxRetriesExceeded carrying the last error.
    """
    log = log or NullLog()
    last_error: Optional[Exception] = None
    for attempt in range(policy.attempts):
        try:
            return await operation_fn()
        except Exception as e:
            last_error = e
        # no sleep once the attempts are used up
        if attempt + 1 >= policy.attempts:
            break
        delay = get_retry_delay(attempt, policy)
        log.retry_scheduled(
            operation_name, attempt, policy.attempts, delay, last_error,
            rate_limited=is_rate_limited(last_error),
        )
        await sleep(delay)
    raise RpcMaxRetriesExceeded(operation_name, last_error)
