# File: sitemap_tally/report/text_report.py
"""sitemap_tally.report.text_report: boxed console summary."""

from __future__ import annotations

import textwrap
from typing import List

import click

from sitemap_tally.aggregator import RunMode, ScanSummary

BOX_WIDTH = 80


def _box(lines: List[str], width: int = BOX_WIDTH, color: bool = True) -> str:
    inner = width - 6
    border = "+" + "-" * (width - 2) + "+"
    if color:
        border = click.style(border, fg=63)
    side = click.style("|", fg=63) if color else "|"
    body = [border, f"{side}{' ' * (width - 2)}{side}"]
    for line in lines:
        plain = click.unstyle(line)
        # long rows are wrapped unstyled
        rows = [line] if len(plain) <= inner else textwrap.wrap(plain, inner)
        for row in rows:
            pad = inner - len(click.unstyle(row))
            body.append(f"{side}  {row}{' ' * pad}  {side}")
    body.extend([f"{side}{' ' * (width - 2)}{side}", border])
    return "\n".join(body)


def render_text(summary: ScanSummary, *, color: bool = True) -> str:
    """Return the summary as a bordered block ready for ``click.echo``."""

    def header(text: str) -> str:
        return click.style(text, bold=True) if color else text

    def keyword(text: object) -> str:
        return click.style(str(text), fg=212) if color else str(text)

    lines = [f"{header('Sitemap Selection:')} Selected sitemap: {keyword(summary.selection)}", ""]
    if summary.run_type is RunMode.PATTERN:
        lines.append(
            f"{header('Pattern Match Summary:')} {keyword(summary.count)} "
            f'{summary.label} for pattern "{keyword(summary.pattern)}".'
        )
    else:
        lines.append(f"{header('Total URLs Summary:')} {keyword(summary.count)} {summary.label}.")
    return _box(lines, color=color)
