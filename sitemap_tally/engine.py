# File: sitemap_tally/engine.py
"""sitemap_tally.engine: runs a crawl and the aggregation for the CLI and tests."""

from __future__ import annotations

import time
from typing import List

from aiohttp import ClientSession, ClientTimeout

from sitemap_tally.aggregator import Mode, PatternMatch, ScanSummary, reduce
from sitemap_tally.config import CrawlerConfig
from sitemap_tally.crawler.crawler import SitemapCrawler
from sitemap_tally.logger import logger
from sitemap_tally.parser.robots_parser import fetch_sitemap_entries

__all__ = ["start_scan", "discover_sitemaps"]


async def start_scan(config: CrawlerConfig, start: str, mode: Mode) -> ScanSummary:
    """
    Crawl the sitemap tree rooted at *start* and reduce it under *mode*.

    Parameters
    ----------
    config : CrawlerConfig
        Crawl settings.
    start : str
        URL of the sitemap or sitemap index to begin with.
    mode : Mode
        ``Total()`` or ``PatternMatch(pattern)``.

    Returns
    -------
    ScanSummary
        The count together with the selection and mode it was produced for.
    """
    begin = time.monotonic()
    async with SitemapCrawler(config) as crawler:
        count = await reduce(crawler.crawl(start), mode)
    duration = time.monotonic() - begin
    logger.info("Finished: %d %s in %.2f s", count, mode.run_type.value, duration)
    return ScanSummary(
        selection=start,
        run_type=mode.run_type,
        count=count,
        pattern=mode.pattern if isinstance(mode, PatternMatch) else None,
    )


async def discover_sitemaps(config: CrawlerConfig, robots_url: str) -> List[str]:
    """Return the sitemap entry points listed in *robots_url*."""
    async with ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
    ) as session:
        return await fetch_sitemap_entries(session, robots_url)
