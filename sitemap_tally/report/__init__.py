"""sitemap_tally.report: renders a ScanSummary for the console, as JSON and as HTML."""

from __future__ import annotations

from sitemap_tally.report.html_report import render_html
from sitemap_tally.report.json_report import render_json
from sitemap_tally.report.text_report import render_text

__all__ = ["render_text", "render_json", "render_html"]
