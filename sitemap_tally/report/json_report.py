# sitemap_tally/report/json_report.py

"""
JSON report for SitemapTally.

Serializes a ScanSummary to a file.
"""
from pathlib import Path

from sitemap_tally.aggregator import ScanSummary


def render_json(summary: ScanSummary, output_path: Path | str) -> Path:
    """
    Save *summary* as JSON at *output_path*.

    :param summary: ScanSummary of a finished run
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from sitemap_tally.report.json_report import render_json
    report_path = render_json(summary, 'reports/summary.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(summary.json(pretty=True) + "\n", encoding="utf-8")
    return output
