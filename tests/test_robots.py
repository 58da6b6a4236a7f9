# File: tests/test_robots.py
import pytest

from sitemap_tally.engine import discover_sitemaps
from sitemap_tally.parser.robots_parser import (
    RobotsFetchError,
    parse_sitemap_entries,
    validate_robots_url,
)

ROBOTS = """\
User-agent: *
Disallow: /admin
# Sitemap: https://a.com/commented.xml
Sitemap: https://a.com/sitemap_index.xml
sitemap:https://a.com/news.xml
SITEMAP:   https://a.com/products.xml   # trailing comment
Sitemap:
Allow: /
"""


def test_parse_sitemap_entries():
    assert parse_sitemap_entries(ROBOTS) == [
        "https://a.com/sitemap_index.xml",
        "https://a.com/news.xml",
        "https://a.com/products.xml",
    ]


def test_parse_without_entries():
    assert parse_sitemap_entries("User-agent: *\nDisallow:\n") == []
    assert parse_sitemap_entries("") == []


@pytest.mark.parametrize("url", [
    "https://a.com/robots.txt",
    "http://127.0.0.1:8080/robots.txt",
    "  https://a.com/robots.txt ",
])
def test_valid_robots_urls(url):
    assert validate_robots_url(url) == url.strip()


@pytest.mark.parametrize("url", [
    "a.com/robots.txt",
    "ftp://a.com/robots.txt",
    "https://a.com/sitemap.xml",
    "https:///robots.txt",
    "",
])
def test_invalid_robots_urls(url):
    with pytest.raises(ValueError):
        validate_robots_url(url)


@pytest.mark.asyncio()
async def test_discover_sitemaps(site, basic_config):
    robots = site.add_body(
        "/robots.txt", f"User-agent: *\nSitemap: {site.url('/sitemap.xml')}\n", "text/plain"
    )
    await site.start()

    assert await discover_sitemaps(basic_config, robots) == [site.url("/sitemap.xml")]


@pytest.mark.asyncio()
async def test_discover_sitemaps_failure(site, basic_config, unused_tcp_port_factory):
    await site.start()

    with pytest.raises(RobotsFetchError):
        await discover_sitemaps(basic_config, site.url("/robots.txt"))
    with pytest.raises(RobotsFetchError):
        await discover_sitemaps(
            basic_config, f"http://127.0.0.1:{unused_tcp_port_factory()}/robots.txt"
        )
