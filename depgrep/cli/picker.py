# depgrep/cli/picker.py
"""
Interactive selection of matched files, opening each choice in an editor.
"""
import sys
from typing import List, Optional

import click
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from depgrep.core.pipeline import MatchItem
from depgrep.exceptions import OpenFileError

log = structlog.get_logger(__name__)

def open_in_editor(file_path: str, editor: Optional[str] = None) -> None:
    # click.edit falls back to $VISUAL / $EDITOR when editor is None.
    log.info("opening_file_in_editor", file=file_path, editor=editor)
    try:
        click.edit(filename=file_path, editor=editor)
    except click.ClickException as e:
        log.warning("open_file_failed", file=file_path, error=e.format_message())
        raise OpenFileError(f"Failed to open file: {file_path}") from e

def _render_choices(matches: List[MatchItem], console: RichConsole):
    table = Table(title="File dependencies", show_lines=False)
    table.add_column("#", justify="right", style="bold")
    table.add_column("File")
    table.add_column("Path", style="dim")
    for index, item in enumerate(matches, start=1):
        table.add_row(str(index), item.label, item.description)
    console.print(table)

def run_picker(matches: List[MatchItem], editor: Optional[str] = None, console: Optional[RichConsole] = None):
    """
    Shows the matches, opens the chosen one, then shows the list again.

    Entering 0 quits. A file that fails to open is reported and the list is
    shown again.
    """
    if not matches:
        click.echo("No matching dependencies.", err=True)
        return

    console = console or RichConsole(file=sys.stderr)
    while True:
        _render_choices(matches, console)
        choice = click.prompt(
            "Open file # (0 to quit)",
            type=click.IntRange(0, len(matches)),
            default=0,
            show_default=False,
            err=True,
        )
        if choice == 0:
            return
        selected = matches[choice - 1]
        try:
            open_in_editor(selected.description, editor)
        except OpenFileError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
