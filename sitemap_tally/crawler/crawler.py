# === FILE: sitemap_tally/crawler/crawler.py ===
from __future__ import annotations

import asyncio
from typing import Coroutine, List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from sitemap_tally.config import CrawlerConfig
from sitemap_tally.crawler.fetcher import Fetcher
from sitemap_tally.crawler.models import IndexDocument, LeafDocument, SitemapReference
from sitemap_tally.crawler.stream import PendingWork, ResultStream
from sitemap_tally.logger import logger
from sitemap_tally.parser.sitemap_parser import classify

__all__ = ("SitemapCrawler",)


class _CrawlJob:
    """State of a single crawl: result stream, pending counter and tasks."""

    def __init__(
        self,
        fetcher: Fetcher,
        stream: ResultStream,
        concurrency: Optional[int],
        tasks: Set[asyncio.Task],
    ) -> None:
        self._fetcher = fetcher
        self._stream = stream
        self._pending = PendingWork()
        self._tasks = tasks
        self._queue: Optional[asyncio.Queue[SitemapReference]] = None
        self._workers: List[asyncio.Task] = []
        if concurrency is not None:
            queue: asyncio.Queue[SitemapReference] = asyncio.Queue()
            self._queue = queue
            self._workers = [self._spawn(self._worker(queue)) for _ in range(concurrency)]

    def start(self, start: SitemapReference) -> None:
        self._submit(start)
        self._spawn(self._supervise())

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _submit(self, ref: SitemapReference) -> None:
        # counted before the submitting task can finish
        self._pending.add()
        if self._queue is None:
            self._spawn(self._process(ref))
        else:
            self._queue.put_nowait(ref)

    async def _worker(self, queue: asyncio.Queue[SitemapReference]) -> None:
        while True:
            ref = await queue.get()
            try:
                await self._process(ref)
            finally:
                queue.task_done()

    async def _process(self, ref: SitemapReference) -> None:
        try:
            body = await self._fetcher.fetch(ref)
            if body is None:
                return
            doc = classify(body)
            if isinstance(doc, IndexDocument):
                logger.debug("Sitemap index %s: %d children", ref, len(doc.sitemaps))
                for child in doc.sitemaps:
                    if not child:
                        logger.debug("Skipping blank <loc> in %s", ref)
                        continue
                    self._submit(child)
            elif isinstance(doc, LeafDocument):
                logger.debug("URL set %s: %d URLs", ref, len(doc.urls))
                for url in doc.urls:
                    await self._stream.put(url)
            else:
                logger.warning("Unrecognized sitemap document: %s", ref)
        except Exception:
            logger.exception("Error while processing %s", ref)
        finally:
            self._pending.finish()

    async def _supervise(self) -> None:
        await self._pending.wait()
        for w in self._workers:
            w.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        await self._stream.close()


class SitemapCrawler:
    """Concurrent crawler over a tree of sitemap indexes and URL sets.

    Usage::

        async with SitemapCrawler(config) as crawler:
            async for url in crawler.crawl("https://example.com/sitemap.xml"):
                ...

    Every sitemap index fans out into one fetch per child reference; URLs of
    every URL set are written to the returned :class:`ResultStream`, which is
    closed once all transitively spawned work has finished. A failed fetch or
    an unrecognized body ends only its own branch. There is no deduplication,
    so a sitemap that references itself keeps the crawl running forever.
    """

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self._tasks: Set[asyncio.Task] = set()

    async def __aenter__(self) -> SitemapCrawler:
        timeout = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        pending = [t for t in self._tasks if not t.done()]
        for t in pending:
            t.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if self.session and not self.session.closed:
            await self.session.close()

    def crawl(self, start: SitemapReference) -> ResultStream:
        """Start crawling from *start* and return the stream of discovered URLs.

        Must be called on a running event loop inside the ``async with`` block;
        the stream has to be drained before the block is left.
        """
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        mode = "unbounded" if self.config.concurrency is None else f"{self.config.concurrency} workers"
        logger.info("Crawl start: %s (%s)", start, mode)
        stream = ResultStream(self.config.buffer_size)
        job = _CrawlJob(self.fetcher, stream, self.config.concurrency, self._tasks)
        job.start(start)
        return stream
