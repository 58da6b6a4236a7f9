# File: sitemap_tally/parser/sitemap_parser.py
"""sitemap_tally.parser.sitemap_parser: classifies sitemap.xml bodies and extracts <loc> values."""

from __future__ import annotations

from typing import Optional, Tuple

from lxml import etree

from sitemap_tally.crawler.models import (
    UNRECOGNIZED,
    ClassifiedDocument,
    IndexDocument,
    LeafDocument,
)

__all__ = ["classify"]

INDEX_ROOT = "sitemapindex"
LEAF_ROOT = "urlset"


def _make_parser() -> etree.XMLPullParser:
    return etree.XMLPullParser(
        events=("start", "end"),
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
    )


def _parse_root(body: bytes) -> Optional[etree._Element]:
    """Parse up to the end of the root element; whatever follows it is ignored.

    Returns None for a body that is malformed before the root closes or that
    ends before it does.
    """
    parser = _make_parser()
    depth = 0

    def root_closed() -> Optional[etree._Element]:
        nonlocal depth
        for event, elem in parser.read_events():
            if event == "start":
                depth += 1
                continue
            depth -= 1
            if depth == 0:
                return elem
        return None

    try:
        parser.feed(body)
    except etree.XMLSyntaxError:
        # trailing content after the root element lands here too
        return root_closed()
    root = root_closed()
    if root is not None:
        return root
    # the push parser may hold back the last bytes until close()
    try:
        parser.close()
    except etree.XMLSyntaxError:
        # trailing content, or a document that ends inside the root
        pass
    return root_closed()


def _locs(root: etree._Element, entry_tag: str) -> Tuple[str, ...]:
    """Return the <loc> text of every direct *entry_tag* child, "" where it is missing."""
    values = []
    for entry in root.iterchildren(f"{{*}}{entry_tag}"):
        loc = entry.find("{*}loc")
        text = loc.text if loc is not None else None
        values.append((text or "").strip())
    return tuple(values)


def classify(body: bytes) -> ClassifiedDocument:
    """Decide whether *body* is a sitemap index, a URL set, or neither.

    The root element name is checked first and only the matching schema is
    read, so an empty ``<urlset/>`` can never pass for an empty index.
    Namespaces are ignored; element names are case-sensitive.

    Args:
        body: raw response bytes of a fetched sitemap.

    Returns:
        :class:`IndexDocument`, :class:`LeafDocument` or ``UNRECOGNIZED``.
        Malformed or truncated XML yields ``UNRECOGNIZED``; anything after the
        root element is ignored. This function never raises.

    Example:
    ```python
    from sitemap_tally.parser.sitemap_parser import classify

    doc = classify(b"<urlset><url><loc>https://a.com/</loc></url></urlset>")
    print(doc.urls)
    ```
    """
    # servers often emit a newline before the XML declaration
    body = body.lstrip()
    if not body:
        return UNRECOGNIZED
    root = _parse_root(body)
    if root is None:
        return UNRECOGNIZED

    name = etree.QName(root).localname
    if name == INDEX_ROOT:
        return IndexDocument(sitemaps=_locs(root, "sitemap"))
    if name == LEAF_ROOT:
        return LeafDocument(urls=_locs(root, "url"))
    return UNRECOGNIZED
