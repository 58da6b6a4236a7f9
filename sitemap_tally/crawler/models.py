# sitemap_tally/crawler/models.py
"""
Data models for classified sitemap documents.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

#: A location naming a sitemap document to fetch.
SitemapReference = str


@dataclass(frozen=True, slots=True)
class IndexDocument:
    """A ``<sitemapindex>``: references to further sitemap documents."""

    sitemaps: Tuple[SitemapReference, ...] = ()


@dataclass(frozen=True, slots=True)
class LeafDocument:
    """A ``<urlset>``: the final page URLs."""

    urls: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """A body that is neither a sitemap index nor a URL set."""


UNRECOGNIZED = Unrecognized()

ClassifiedDocument = Union[IndexDocument, LeafDocument, Unrecognized]

__all__ = [
    "SitemapReference",
    "IndexDocument",
    "LeafDocument",
    "Unrecognized",
    "UNRECOGNIZED",
    "ClassifiedDocument",
]
