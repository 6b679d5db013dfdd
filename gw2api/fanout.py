"""
Fan-out/fan-in helper shared by every fetch stage.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


async def _cancel_and_drain(tasks: List["asyncio.Future[Any]"]):
    """Cancel unfinished tasks and wait until every task has settled.

    Awaiting all of them retrieves exceptions of tasks that failed after the
    first error, so none is left unretrieved.
    """
    pending = [task for task in tasks if not task.done()]
    for task in pending:
        task.cancel()
    if pending:
        logger.debug(f"Cancelled {len(pending)} outstanding tasks")
    await asyncio.gather(*tasks, return_exceptions=True)


async def gather_keyed(
    aws: Iterable[Awaitable[Any]],
    key: Callable[[Any], Any],
    value: Optional[Callable[[Any], Any]] = None,
    many: bool = False,
) -> Dict[Any, Any]:
    """
    Run awaitables concurrently and collect their results into a mapping.

    Results are consumed in completion order and the mapping is re-sorted by
    key once every task has finished, so callers never observe scheduling
    order. If any task fails the remaining tasks are cancelled and the error
    propagates.

    Args:
        aws: Awaitables to run, typically one per request
        key: Derives the mapping key from a result record
        value: Derives the stored value from a record (default: the record)
        many: Each awaitable yields an iterable of records instead of one

    Returns:
        Mapping of key to value, ordered by key
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    collected = {}

    try:
        for next_done in asyncio.as_completed(tasks):
            result = await next_done
            records = result if many else (result,)
            for record in records:
                collected[key(record)] = record if value is None else value(record)
    except BaseException:
        await _cancel_and_drain(tasks)
        raise

    return {k: collected[k] for k in sorted(collected)}


async def gather_stages(*aws: Awaitable[Any]) -> List[Any]:
    """
    Run independent stages concurrently and return their results in order.

    Unlike asyncio.gather, a failing stage cancels the stages still running.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        await _cancel_and_drain(tasks)
        raise
