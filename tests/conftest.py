# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Dict, Iterable, List

import pytest
import pytest_asyncio
from aiohttp import web

from sitemap_tally.config import CrawlerConfig

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def urlset_xml(urls: Iterable[str]) -> str:
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'
    )


def sitemapindex_xml(locs: Iterable[str]) -> str:
    entries = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in locs)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'
    )


class SitemapSite:
    """Local HTTP server serving a sitemap tree, with request bookkeeping."""

    def __init__(self, port: int) -> None:
        self.base = f"http://127.0.0.1:{port}"
        self._port = port
        self._routes: Dict[str, Handler] = {}
        self._runner: web.AppRunner | None = None
        self.hits: Dict[str, int] = {}
        self.in_flight = 0
        self.max_in_flight = 0
        self.delay = 0.0

    def url(self, path: str) -> str:
        return f"{self.base}{path}"

    def add_handler(self, path: str, handler: Handler) -> str:
        self._routes[path] = handler
        return self.url(path)

    def add_body(self, path: str, text: str, content_type: str = "application/xml") -> str:
        async def handler(_):
            return web.Response(text=text, content_type=content_type)

        return self.add_handler(path, handler)

    def add_urlset(self, path: str, urls: Iterable[str]) -> str:
        return self.add_body(path, urlset_xml(urls))

    def add_index(self, path: str, child_paths: Iterable[str]) -> str:
        return self.add_body(path, sitemapindex_xml(self.url(p) for p in child_paths))

    def add_status(self, path: str, status: int) -> str:
        async def handler(_):
            return web.Response(status=status)

        return self.add_handler(path, handler)

    @web.middleware
    async def _track(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        self.hits[request.path] = self.hits.get(request.path, 0) + 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return await handler(request)
        finally:
            self.in_flight -= 1

    async def start(self) -> str:
        app = web.Application(middlewares=[self._track])
        for path, handler in self._routes.items():
            app.router.add_get(path, handler)
        self._runner = web.AppRunner(app, handler_cancellation=True)
        await self._runner.setup()
        site = web.TCPSite(self._runner, "127.0.0.1", self._port)
        await site.start()
        return self.base

    async def close(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[SitemapSite]:
    """A SitemapSite on a free port; routes are added before ``await site.start()``."""
    s = SitemapSite(unused_tcp_port)
    try:
        yield s
    finally:
        await s.close()


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Return a CrawlerConfig suitable for local test servers."""
    return CrawlerConfig(user_agent="TestAgent/1.0", timeout=5.0)


@pytest.fixture()
def page_urls() -> Callable[[str, int], List[str]]:
    """Build *n* distinct page URLs under a prefix."""

    def _make(prefix: str, n: int) -> List[str]:
        return [f"https://shop.example.com/{prefix}-{i}" for i in range(n)]

    return _make
