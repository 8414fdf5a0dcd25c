import asyncio
import logging
import random
from typing import Awaitable, Callable, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_STATUS_CODE = 429
RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"


class RetryPolicy(BaseModel):
    max_retries: int = 3
    backoff_base: float = 2.0
    max_jitter: float = 1.0

    def delay_bounds(self, retry_num: int) -> tuple[float, float]:
        lower = self.backoff_base ** retry_num
        return lower, lower + self.max_jitter


def is_rate_limited(error: BaseException) -> bool:
    """
    Heuristic used by every remote call site: a 429 / RESOURCE_EXHAUSTED status
    on the exception, or either token anywhere in its message.
    """
    for attr in ("code", "status", "status_code"):
        value = getattr(error, attr, None)
        if value == RATE_LIMIT_STATUS_CODE or value == RATE_LIMIT_STATUS:
            return True
        if isinstance(value, str) and value.strip() in (str(RATE_LIMIT_STATUS_CODE), RATE_LIMIT_STATUS):
            return True

    message = str(error)
    return str(RATE_LIMIT_STATUS_CODE) in message or RATE_LIMIT_STATUS in message


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    max_retries: Optional[int] = None,
    *,
    policy: Optional[RetryPolicy] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    jitter: Callable[[], float] = random.random,
) -> T:
    """
    Await `fn()`; on a rate-limit failure wait base**retry + jitter seconds and
    try again, up to `max_retries` times. Any other failure (or the last
    rate-limit failure) is re-raised unchanged.
    """
    policy = policy or RetryPolicy()
    budget = policy.max_retries if max_retries is None else max_retries
    retries = 0
    while True:
        try:
            return await fn()
        except Exception as e:
            if not is_rate_limited(e) or retries >= budget:
                raise
            retries += 1
            lower, upper = policy.delay_bounds(retries)
            delay = lower + jitter() * (upper - lower)
            logger.warning("Rate limited. Retrying in %dms (retry %d/%d)...", round(delay * 1000), retries, budget)
            await sleep(delay)
