from sitemap_tally.cli import cli

cli(prog_name="sitemap-tally")
