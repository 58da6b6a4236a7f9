"""sitemap_tally.crawler: concurrent sitemap tree traversal."""
