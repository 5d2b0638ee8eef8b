"""Best-effort fan-out used by the population scans.

Every per-item failure is dropped here and nowhere else, so the
degrade-gracefully behaviour of the similarity scan lives in one place.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K")
R = TypeVar("R")


async def best_effort_collect(
    items: Iterable[K],
    func: Callable[[K], Awaitable[R]],
    *,
    timeout: float | None = None,
    max_concurrency: int = 50,
    label: str = "item",
) -> list[tuple[K, R]]:
    """Run ``func`` over ``items`` and keep whatever succeeds.

    Returns ``(item, result)`` pairs in input order. Items that raise are
    logged and skipped. When ``timeout`` elapses, unfinished work is
    cancelled and the finished results are returned.
    """
    items = list(items)
    if not items:
        return []

    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def _bounded(item: K) -> R:
        async with semaphore:
            return await func(item)

    tasks = [asyncio.ensure_future(_bounded(item)) for item in items]
    try:
        _, pending = await asyncio.wait(tasks, timeout=timeout)
    finally:
        # Also runs when the caller itself is cancelled
        for task in tasks:
            if not task.done():
                task.cancel()

    if pending:
        logger.warning(
            "Scan timed out after %ss: %d of %d %ss unfinished",
            timeout, len(pending), len(items), label,
        )
        await asyncio.gather(*pending, return_exceptions=True)

    results: list[tuple[K, R]] = []
    for item, task in zip(items, tasks):
        if task.cancelled():
            continue
        exc = task.exception()
        if exc is not None:
            logger.debug("Skipping %s %s: %s", label, item, exc)
            continue
        results.append((item, task.result()))
    return results
