# File: sitemap_tally/report/html_report.py
"""sitemap_tally.report.html_report: HTML summary rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sitemap_tally.aggregator import ScanSummary

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "summary.html.j2"


def render_html(
    summary: ScanSummary,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML summary from a template and save it.

    Args:
        summary: ScanSummary of a finished run.
        template_dir: directory holding ``summary.html.j2``; None uses the bundled one.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "selection": summary.selection,
        "run_type": summary.run_type.value,
        "pattern": summary.pattern,
        "count": summary.count,
        "label": summary.label,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
