"""Async entry point.

The walk is delegated to :func:`asyncio.to_thread`, so blocking directory
reads and provider locks never run on the event-loop thread.
"""

from __future__ import annotations

import asyncio

from ._glob import MatchOptions, glob


async def aglob(
    pattern: str, options: MatchOptions | None = None, **overrides: object
) -> list[str]:
    """Awaitable form of :func:`fileglob.glob`; raises the same errors."""
    return await asyncio.to_thread(glob, pattern, options, **overrides)
