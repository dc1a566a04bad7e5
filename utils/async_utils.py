import asyncio
import functools
from typing import Any, Awaitable, Callable

import aiohttp

from utils.logger_utils import get_logger

logger = get_logger(__name__)

NETWORK_EXCEPTIONS = (aiohttp.ClientError, asyncio.TimeoutError, ConnectionError)


def async_retry(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple = NETWORK_EXCEPTIONS,
):
    """
    Retries an async function on transport-level failures (connection reset, timeout).
    Contract reverts are never in `exceptions`, so they propagate on the first attempt.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries:
                        logger.error(f"Function {func.__name__} failed after {max_retries} retries. Error: {e}")
                        raise
                    logger.warning(
                        f"Error in {func.__name__}: {e}. Retrying in {delay:.2f}s... (Attempt {attempt + 1}/{max_retries})"
                    )
                    await asyncio.sleep(delay)
                    delay *= backoff_factor

        return wrapper

    return decorator
