# sitemap_tally/crawler/fetcher.py
"""
Fetcher module: downloads sitemap documents over HTTP.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from sitemap_tally.logger import logger


class Fetcher:
    """Issues one GET per call and returns the raw body."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> bytes | None:
        """
        Fetch *url* and return the response body.

        Returns None on any failure: connection or URL error, timeout,
        non-2xx status or an interrupted body read. No retries.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning("Fetch failed %s: HTTP %s", url, resp.status)
                    return None
                return await resp.read()
        except asyncio.TimeoutError:
            logger.warning("Fetch failed %s: timed out", url)
        except (ClientError, ValueError) as exc:
            # aiohttp.InvalidURL is both
            logger.warning("Fetch failed %s: %s", url, str(exc) or type(exc).__name__)
        return None
