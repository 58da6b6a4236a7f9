# File: tests/test_sitemap_parser.py
import pytest

from sitemap_tally.crawler.models import UNRECOGNIZED, IndexDocument, LeafDocument
from sitemap_tally.parser.sitemap_parser import classify

NS = 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"'


def test_sitemap_index():
    body = f"""<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex {NS}>
  <sitemap><loc>https://a.com/s1.xml</loc><lastmod>2024-01-01</lastmod></sitemap>
  <sitemap><loc>
      https://a.com/s2.xml
  </loc></sitemap>
</sitemapindex>""".encode()
    assert classify(body) == IndexDocument(("https://a.com/s1.xml", "https://a.com/s2.xml"))


def test_urlset_keeps_order_and_ignores_nested_image_locs():
    body = (
        f'<urlset {NS} xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">'
        "<url><loc>https://a.com/b</loc>"
        "<image:image><image:loc>https://a.com/b.png</image:loc></image:image></url>"
        "<url><loc>https://a.com/a</loc></url>"
        "</urlset>"
    ).encode()
    assert classify(body) == LeafDocument(("https://a.com/b", "https://a.com/a"))


def test_without_namespace():
    assert classify(b"<urlset><url><loc>x</loc></url></urlset>") == LeafDocument(("x",))
    assert classify(b"<sitemapindex><sitemap><loc>y</loc></sitemap></sitemapindex>") == (
        IndexDocument(("y",))
    )


@pytest.mark.parametrize("body,expected", [
    (b"<urlset/>", LeafDocument(())),
    (f"<urlset {NS}></urlset>".encode(), LeafDocument(())),
    (b"<sitemapindex/>", IndexDocument(())),
])
def test_empty_documents_keep_their_kind(body, expected):
    assert classify(body) == expected


def test_url_without_loc_still_counts():
    body = b"<urlset><url><lastmod>2024</lastmod></url><url><loc>x</loc></url></urlset>"
    assert classify(body) == LeafDocument(("", "x"))


def test_leading_whitespace_before_declaration():
    body = b'\n  <?xml version="1.0"?><urlset><url><loc>x</loc></url></urlset>'
    assert classify(body) == LeafDocument(("x",))


def test_comments_are_ignored():
    body = b"<urlset><!-- generated --><url><loc>x</loc><!-- c --></url></urlset>"
    assert classify(body) == LeafDocument(("x",))


@pytest.mark.parametrize("body,expected", [
    (
        b"<urlset><url><loc>x</loc></url></urlset>\n<!-- ok -->\ngenerated in 0.2s",
        LeafDocument(("x",)),
    ),
    (b"<urlset><url><loc>x</loc></url></urlset><urlset><url><loc>y</loc></url></urlset>",
     LeafDocument(("x",))),
    (b"<sitemapindex><sitemap><loc>y</loc></sitemap></sitemapindex>\x00\x00garbage <",
     IndexDocument(("y",))),
])
def test_content_after_root_is_ignored(body, expected):
    assert classify(body) == expected


@pytest.mark.parametrize("body", [
    b"<urlset><url><loc>x</loc></url></urlset",
    b"<sitemapindex><sitemap><loc>y</loc></sitemap>",
    b"<urlset><url><loc>x</loc></url><broken</urlset>",
])
def test_truncated_or_malformed_root_is_unrecognized(body):
    assert classify(body) is UNRECOGNIZED


@pytest.mark.parametrize("body", [
    b"",
    b"   ",
    b"not xml at all",
    b"<html><body><a href='/x'>x</a></body></html>",
    b"<rss><channel><item><link>x</link></item></channel></rss>",
    b"<URLSET><url><loc>x</loc></url></URLSET>",
    b"<urlset><url><loc>x</loc></url>",
    b"\x1f\x8b\x08\x00compressed",
])
def test_unrecognized(body):
    assert classify(body) is UNRECOGNIZED


def test_entities_are_not_expanded():
    body = b"""<?xml version="1.0"?>
<!DOCTYPE urlset [<!ENTITY x SYSTEM "file:///etc/passwd">]>
<urlset><url><loc>&x;</loc></url></urlset>"""
    doc = classify(body)
    assert doc is UNRECOGNIZED or doc == LeafDocument(("",))
