# File: sitemap_tally/parser/robots_parser.py
"""sitemap_tally.parser.robots_parser: reads the Sitemap entries listed in robots.txt."""

from __future__ import annotations

import asyncio
from typing import List, Tuple
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession

from sitemap_tally.logger import logger


class RobotsFetchError(RuntimeError):
    """robots.txt could not be downloaded."""


def validate_robots_url(url: str) -> str:
    """Check that *url* is an absolute http(s) URL whose path ends with robots.txt."""
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("the provided string is not a valid URL")
    if not parsed.path.endswith("robots.txt"):
        raise ValueError("URL must end with 'robots.txt'")
    return url.strip()


def parse_sitemap_entries(text: str) -> List[str]:
    """Return the Sitemap URLs from robots.txt *text*, in file order.

    Args:
        text: robots.txt content.

    Returns:
        Values of every ``Sitemap:`` directive; the directive name is matched
        case-insensitively and empty values are skipped.
    """
    return [value for directive, value in _prepare_lines(text) if directive == "sitemap" and value]


async def fetch_sitemap_entries(session: ClientSession, robots_url: str) -> List[str]:
    """Download robots.txt and return its Sitemap entries.

    Raises:
        RobotsFetchError: on a transport error or a non-2xx response.
    """
    try:
        async with session.get(robots_url) as resp:
            if not 200 <= resp.status < 300:
                raise RobotsFetchError(f"Error fetching robots.txt: HTTP {resp.status}")
            text = await resp.text()
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise RobotsFetchError(f"Error fetching robots.txt: {str(exc) or type(exc).__name__}") from exc
    entries = parse_sitemap_entries(text)
    logger.info("robots.txt %s lists %d sitemaps", robots_url, len(entries))
    return entries


def _prepare_lines(text: str) -> List[Tuple[str, str]]:
    """Strip comments and split lines into (directive, value)."""
    lines: List[Tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue
        key, val = (part.strip() for part in line.split(":", 1))
        lines.append((key.lower(), val))
    return lines
