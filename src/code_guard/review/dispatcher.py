"""
Review Dispatcher

Runs one task per review unit with a bounded number in flight.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable

import structlog

from .models import DEFAULT_MAX_CONCURRENCY, DispatchSummary, ReviewUnit

logger = structlog.get_logger(__name__)

ReviewTask = Callable[[ReviewUnit], Awaitable[object]]


async def run_all(
    units: Iterable[ReviewUnit],
    max_concurrency: int,
    task: ReviewTask,
) -> DispatchSummary:
    """
    Run task for every unit, at most max_concurrency at a time.

    A failing task is logged and counted but never cancels its siblings;
    this coroutine returns only after every task has finished. Completion
    order is not input order.

    Args:
        units: Units to review
        max_concurrency: Admission gate size; <= 0 means the default (10)
        task: Coroutine function run once per unit

    Returns:
        DispatchSummary with success and failure counts
    """
    if max_concurrency <= 0:
        max_concurrency = DEFAULT_MAX_CONCURRENCY

    semaphore = asyncio.Semaphore(max_concurrency)
    pending = list(units)

    async def run_with_semaphore(unit: ReviewUnit) -> object:
        async with semaphore:
            try:
                return await task(unit)
            except Exception as e:
                logger.error("Review failed", file=unit.relative_path, error=str(e))
                raise

    results = await asyncio.gather(
        *(run_with_semaphore(unit) for unit in pending),
        return_exceptions=True,
    )

    summary = DispatchSummary(total=len(pending))
    for unit, result in zip(pending, results):
        if isinstance(result, asyncio.CancelledError):
            # Cancelling the run is not a per-unit failure
            raise result
        if isinstance(result, BaseException):
            summary.failed.append((unit.relative_path, result))
        else:
            summary.succeeded += 1

    return summary
