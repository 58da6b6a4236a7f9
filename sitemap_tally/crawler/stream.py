# sitemap_tally/crawler/stream.py
"""
Coordination primitives shared by the crawl tasks.

:class:`ResultStream` carries discovered URLs from many producer tasks to a
single consumer through a bounded buffer. :class:`PendingWork` counts the
fetch-and-classify operations still in flight and fires once when the count
drops back to zero.
"""
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Final

__all__ = ("ResultStream", "PendingWork", "StreamClosedError")

_EOF: Final = object()


class StreamClosedError(RuntimeError):
    """Raised when writing to a :class:`ResultStream` that was closed."""


class ResultStream:
    """Bounded multi-writer, single-reader stream of URLs.

    ``put`` suspends while the buffer is full. After :meth:`close` the reader
    drains what is buffered and then sees end-of-stream.
    """

    def __init__(self, maxsize: int = 100) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize)
        self._closed = False
        self._consumed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    async def put(self, url: str) -> None:
        if self._closed:
            raise StreamClosedError("put() on a closed ResultStream")
        await self._queue.put(url)

    async def close(self) -> None:
        """Mark end-of-stream. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        await self._queue.put(_EOF)

    def __aiter__(self) -> AsyncIterator[str]:
        if self._consumed:
            raise RuntimeError("ResultStream supports a single consumer")
        self._consumed = True
        return self._drain()

    async def _drain(self) -> AsyncIterator[str]:
        while True:
            item = await self._queue.get()
            if item is _EOF:
                return
            yield item  # type: ignore[misc]


class PendingWork:
    """Count of in-flight operations with a one-shot completion signal."""

    def __init__(self) -> None:
        self._count = 0
        self._done = asyncio.Event()

    @property
    def count(self) -> int:
        return self._count

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def add(self, n: int = 1) -> None:
        if self._done.is_set():
            raise RuntimeError("pending work already drained")
        self._count += n

    def finish(self) -> None:
        if self._count <= 0:
            raise RuntimeError("finish() called more times than add()")
        self._count -= 1
        if self._count == 0:
            self._done.set()

    async def wait(self) -> None:
        await self._done.wait()
