# depgrep/cli/console_output.py
"""
Handles printing feedback to the console (stderr) during CLI execution.
"""
from pathlib import Path

import click
import structlog

from depgrep.config.settings import SearchConfig
from depgrep.core.pipeline import SearchResult

log = structlog.get_logger(__name__)

def print_search_banner(start_path: Path):
    click.secho(f"Searching dependencies from: {start_path}", fg="cyan", err=True)

def print_cli_summary_output(config: SearchConfig, result: SearchResult):
    """
    Prints dependency and match counts to stderr.
    """
    log.debug("console_summary_output_requested")
    if not config.console_show_summary:
        return

    click.secho("--- search summary ---", fg="cyan", err=True)
    click.echo(f"Dependencies discovered: {len(result.dependencies)}", err=True)
    click.echo(f"Files containing {config.search_text!r}: {len(result.matches)}", err=True)
    if result.unresolved_count or result.unreadable_count:
        click.secho(
            f"Skipped: {result.unresolved_count} unresolved imports, {result.unreadable_count} unreadable files",
            fg="yellow",
            err=True,
        )
