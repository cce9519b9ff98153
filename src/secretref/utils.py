import asyncio
import concurrent.futures
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_sync(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous code.

    Safe to call whether or not an event loop is running in the current
    thread. With a running loop the coroutine gets its own loop on a worker
    thread, since blocking the running loop on itself would deadlock.

    There is no way to cancel the coroutine from the caller; only use this
    at call sites with no cancellation needs.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    logger.debug("Event loop already running, resolving on a worker thread")
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()
