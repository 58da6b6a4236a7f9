# === FILE: sitemap_tally/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for SitemapTally.

Commands:
  count     Count the URLs of a sitemap tree (all of them or those matching a pattern)
  sitemaps  List the sitemaps announced in a robots.txt
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --concurrency INT   Worker pool size (override concurrency)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

count options:
  --sitemap URL       Sitemap or sitemap index to start from
  --robots URL        robots.txt to pick the starting sitemap from
  --mode MODE         total | pattern (prompted when omitted)
  --pattern TEXT      Substring to match, case-insensitive (pattern mode)
  --json PATH         Save the summary as JSON
  --html PATH         Save the summary as HTML
  --template DIR      Directory with the Jinja2 template
  --scan-timeout SEC  Timeout for the whole crawl (seconds)

Other:
  --version, -v       Show the SitemapTally version

Example:
  sitemap-tally count --robots https://example.com/robots.txt --mode pattern --pattern product
"""
import asyncio
import sys
from pathlib import Path

import click

from sitemap_tally import __version__
from sitemap_tally.aggregator import RunMode, mode_from_options
from sitemap_tally.config import load_config
from sitemap_tally.engine import discover_sitemaps, start_scan
from sitemap_tally.logger import DEFAULT_FORMAT, configure
from sitemap_tally.parser.robots_parser import validate_robots_url
from sitemap_tally.report.html_report import render_html
from sitemap_tally.report.json_report import render_json
from sitemap_tally.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _robots_callback(ctx, param, value):
    if value is None:
        return None
    try:
        return validate_robots_url(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _prompt_robots_url() -> str:
    def _check(value: str) -> str:
        try:
            return validate_robots_url(value)
        except ValueError as e:
            raise click.BadParameter(str(e)) from e

    return click.prompt('Enter the URL to a robots.txt file', value_proc=_check)


def _select_sitemap(entries: list) -> str:
    if len(entries) == 1:
        return entries[0]
    click.echo('Select a sitemap:')
    for i, entry in enumerate(entries, 1):
        click.echo(f'  {i}. {entry}')
    choice = click.prompt('Sitemap number', type=click.IntRange(1, len(entries)))
    return entries[choice - 1]


def _load_entries(cfg, robots_url: str) -> list:
    try:
        entries = asyncio.run(discover_sitemaps(cfg, robots_url))
    except Exception as e:
        print_error(str(e))
    if not entries:
        print_error(f'No Sitemap entries in {robots_url}')
    return entries


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapTally, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML/JSON config file.'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Worker pool size (override concurrency; unbounded by default)'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, concurrency, log_level, log_file, log_format):
    """SitemapTally command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    if concurrency is not None:
        cfg = cfg.model_copy(update={'concurrency': concurrency})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('count', context_settings=CONTEXT_SETTINGS)
@click.option('--sitemap', '-s', 'sitemap_url', default=None, help='Sitemap or sitemap index URL')
@click.option(
    '--robots', '-r', 'robots_url',
    default=None,
    callback=_robots_callback,
    help='robots.txt URL to select the sitemap from'
)
@click.option(
    '--mode', '-m', 'run_type',
    default=None,
    type=click.Choice([m.value for m in RunMode]),
    help='Run type: total URLs or pattern match total'
)
@click.option('--pattern', '-p', 'pattern', default=None, help='Substring to match (pattern mode)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON summary to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML summary to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (bundled one by default)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Timeout for the whole crawl (seconds)'
)
@click.option('--no-color', is_flag=True, help='Plain summary without ANSI styling')
@click.pass_context
def count(ctx, sitemap_url, robots_url, run_type, pattern, json_output, html_output,
          template_dir, scan_timeout, no_color):
    """Count the URLs reachable from a sitemap."""
    cfg = ctx.obj['config']
    if sitemap_url and robots_url:
        raise click.UsageError('--sitemap and --robots are mutually exclusive')

    if sitemap_url is None:
        robots_url = robots_url or _prompt_robots_url()
        sitemap_url = _select_sitemap(_load_entries(cfg, robots_url))

    if run_type is None:
        run_type = click.prompt(
            'Select a run type',
            type=click.Choice([m.value for m in RunMode]),
            default=RunMode.TOTAL.value,
        )
    if run_type == RunMode.PATTERN.value and pattern is None:
        pattern = click.prompt('What pattern do you want to match?')
    mode = mode_from_options(run_type, pattern)

    try:
        if scan_timeout:
            summary = asyncio.run(
                asyncio.wait_for(start_scan(cfg, sitemap_url, mode), timeout=scan_timeout)
            )
        else:
            summary = asyncio.run(start_scan(cfg, sitemap_url, mode))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {scan_timeout} seconds')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    click.echo(render_text(summary, color=not no_color))

    if json_output:
        try:
            saved_json = render_json(summary, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(summary, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('sitemaps', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--robots', '-r', 'robots_url',
    required=True,
    callback=_robots_callback,
    help='robots.txt URL'
)
@click.pass_context
def list_sitemaps(ctx, robots_url):
    """List the sitemaps announced in a robots.txt."""
    for entry in _load_entries(ctx.obj['config'], robots_url):
        click.echo(entry)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
