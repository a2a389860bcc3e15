#!/usr/bin/env python3
import sys
from datetime import datetime
from typing import Optional

import typer
from dateutil import tz
from rich.console import Console

from . import __version__
from .commands.check_command import handle_check
from .commands.due_command import handle_due
from .commands.init_command import handle_init
from .commands.tree_command import handle_tree
from .todo_api.errors import TaskTreeError
from .utils.config import get_settings, load_env_vars
from .utils.data_loading import parse_cli_datetime
from .utils.logger import configure_logging, get_logger

# Load environment variables
load_env_vars()

log = get_logger(__name__)

app = typer.Typer(
    name="todotree",
    help="todotree - Nested todo lists with due and late deadlines.",
    no_args_is_help=True,
)

FILE_HELP = "Path to the JSON task file (defaults to $TODOTREE_FILE or the app config dir)."
NOW_HELP = "Evaluate statuses at this time instead of the current time (ISO 8601 or natural language)."


def _version_callback(value: bool):
    if value:
        print(f"todotree {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
):
    """todotree - Nested todo lists with due and late deadlines."""


def _resolve_now(now: Optional[str]) -> datetime:
    if not now:
        return datetime.now(tz.tzlocal())
    parsed = parse_cli_datetime(now)
    if parsed is None:
        print(f"Error: Could not parse --now value: {now}", file=sys.stderr)
        raise typer.Exit(code=2)
    return parsed


def _build_args(file: Optional[str], now: Optional[str], **extra):
    settings = get_settings()
    configure_logging(settings.log_level)
    values = {
        'file': file or str(settings.tasks_file),
        'now': _resolve_now(now),
        'done_visible': settings.done_visible,
        'due_soon': settings.due_soon,
        'separator': settings.breadcrumb_separator,
    }
    values.update({k: v for k, v in extra.items() if v is not None})
    return type('Args', (), values)


def _run(handler, args):
    try:
        handler(args)
    except TaskTreeError as e:
        log.debug("Command failed", exc_info=True)
        Console(stderr=True).print(f"Error: {e}", style="red", highlight=False)
        raise typer.Exit(code=1)


@app.command("tree")
def tree(
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    include_expired: bool = typer.Option(False, "--all", "-a", help="Also show completed tasks whose visibility window has passed."),
    expand_all: bool = typer.Option(False, "--expand-all", "-e", help="Show the contents of collapsed groups."),
    now: Optional[str] = typer.Option(None, "--now", help=NOW_HELP),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Show the task list as a nested outline."""
    args = _build_args(file, now, include_expired=include_expired, expand_all=expand_all, json=json_output)
    _run(handle_tree, args)


@app.command("due")
def due(
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    separator: Optional[str] = typer.Option(None, "--separator", help="Breadcrumb separator (default ' > ')."),
    now: Optional[str] = typer.Option(None, "--now", help=NOW_HELP),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List late, due and recently completed tasks with their location."""
    args = _build_args(file, now, separator=separator, json=json_output)
    _run(handle_due, args)


@app.command("check")
def check(
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    now: Optional[str] = typer.Option(None, "--now", help=NOW_HELP),
):
    """Validate the task file and summarise task statuses."""
    args = _build_args(file, now)
    _run(handle_check, args)


@app.command("init")
def init(
    file: Optional[str] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing task file."),
):
    """Write a starter task list."""
    args = _build_args(file, None, force=force)
    _run(handle_init, args)


if __name__ == "__main__":
    app()
