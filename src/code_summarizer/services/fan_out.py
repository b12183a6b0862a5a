"""Concurrent fan-out helper shared by the walker, aggregator and summarizer."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """Await every awaitable and return results in argument order.

    If any one fails, the siblings still in flight are cancelled before the
    error propagates, so no orphaned requests keep running.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
