"""sitemap_tally.parser: sitemap and robots.txt parsing."""
