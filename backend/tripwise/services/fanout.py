"""Bounded concurrent fan-out for independent search units."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from tripwise.config import settings
from tripwise.services.errors import SearchTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_bounded(
    units: Sequence[Callable[[], Awaitable[T | None]]],
    limit: int | None = None,
    timeout: float | None = None,
    label: str = "search",
) -> list[T]:
    """
    Run every unit with at most `limit` in flight and return the non-None results.

    A unit that raises is logged and treated as producing nothing, so one failing
    provider call never aborts the batch. Results keep the order of `units`.

    If the batch misses its deadline, every outstanding unit is cancelled and
    SearchTimeoutError is raised; nothing gathered so far is returned. Cancelling
    the caller cancels all in-flight units the same way.
    """
    if not units:
        return []

    limit = limit or settings.search_concurrency
    timeout = settings.search_timeout_seconds if timeout is None else timeout
    semaphore = asyncio.Semaphore(limit)
    start_time = time.monotonic()

    async def _run(index: int, unit: Callable[[], Awaitable[T | None]]) -> T | None:
        async with semaphore:
            try:
                return await unit()
            except Exception as e:
                logger.warning(f"{label} unit {index} failed: {e!r}")
                return None

    try:
        results = await asyncio.wait_for(
            asyncio.gather(*(_run(i, u) for i, u in enumerate(units))),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning(f"{label}: {len(units)} units abandoned after {timeout}s deadline")
        raise SearchTimeoutError(f"{label} did not complete within {timeout} seconds")

    produced = [r for r in results if r is not None]
    elapsed_ms = int((time.monotonic() - start_time) * 1000)
    logger.info(f"{label}: {len(produced)}/{len(units)} units produced results in {elapsed_ms}ms")
    return produced
