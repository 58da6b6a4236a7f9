# sitemap_tally/__init__.py
"""
SitemapTally package initializer.
Defines the package version; the CLI lives in :mod:`sitemap_tally.cli`.
"""
__version__ = "0.1.0"
