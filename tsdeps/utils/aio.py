"""Async coordination helpers."""

import asyncio
from collections.abc import Awaitable
from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


async def gather_or_fail(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in input order.

    All-or-nothing: the first failure cancels whatever is still pending and
    is re-raised as-is. No partial result list is ever returned.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        return []

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        raise
