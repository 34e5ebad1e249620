"""Click CLI entry point for rlhistory.

Inspects and maintains a history log, and offers a small REPL that
records into it through the history engine.
"""

import logging
import sys

import click
from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import DEFAULT_HISTORY_PATH, MAX_HISTORY_ENTRIES, HistoryConfig
from .errors import HistoryError, LoadFailure
from .history import HistoryStore
from .historyfile import HistoryFile
from .prompt import get_history

console = Console()


@click.group()
@click.option(
    "--file",
    "history_file",
    default=DEFAULT_HISTORY_PATH,
    envvar="RLHISTORY_FILE",
    type=click.Path(dir_okay=False),
    show_default=True,
    help="History log file.",
)
@click.option(
    "--limit",
    default=MAX_HISTORY_ENTRIES,
    envvar="RLHISTORY_LIMIT",
    type=int,
    show_default=True,
    help="Maximum lines kept. Zero or less disables the limit.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
@click.version_option(version=__version__, prog_name="rlhistory")
@click.pass_context
def cli(ctx: click.Context, history_file: str, limit: int, verbose: bool) -> None:
    """Inspect and use a line-editor history log."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            stream=sys.stderr,
        )
    ctx.obj = HistoryConfig(history_file=history_file, history_limit=limit)


@cli.command()
@click.option("-n", "count", default=20, show_default=True, help="Number of lines to show.")
@click.pass_obj
def show(config: HistoryConfig, count: int) -> None:
    """Print the most recent history lines."""
    # A zero limit reads everything without compacting the file.
    lines = _load_or_exit(HistoryFile(config.history_file, 0))
    first = max(len(lines) - count, 0)
    for number, line in enumerate(lines[first:], start=first + 1):
        console.print(f"[dim]{number:>5}[/dim]  {escape(line)}", highlight=False)


@cli.command()
@click.argument("pattern")
@click.option("--fold", is_flag=True, default=False, help="Ignore case.")
@click.pass_obj
def search(config: HistoryConfig, pattern: str, fold: bool) -> None:
    """Print history lines containing PATTERN, newest first."""
    if not pattern:
        raise click.BadParameter("must not be empty", param_hint="PATTERN")
    config.history_search_fold = fold
    store = HistoryStore(config)
    try:
        store.init()
        for line in search_lines(store, pattern):
            console.print(line, markup=False, highlight=False)
    except HistoryError as exc:
        _fail(exc)
    finally:
        store.close()


def search_lines(store: HistoryStore, pattern: str) -> list[str]:
    """Walk backward from the cursor collecting every matching entry."""
    found = []
    while True:
        _, index = store.find_backward(False, pattern, 0)
        # An empty pattern matches the cursor entry itself.
        if index is None or index == store.cursor:
            return found
        found.append(store.entry_text(index))
        store.set_cursor(index)


@cli.command()
@click.pass_obj
def compact(config: HistoryConfig) -> None:
    """Trim the log file to the configured limit."""
    lines = _load_or_exit(HistoryFile(config.history_file, config.history_limit))
    console.print(f"{len(lines)} lines kept in {config.history_file}", highlight=False)


@cli.command()
@click.pass_obj
def repl(config: HistoryConfig) -> None:
    """Read lines with history recall until Ctrl-D."""
    try:
        history = get_history(config.history_file, config.history_limit)
    except HistoryError as exc:
        _fail(exc)
    session: PromptSession = PromptSession(history=history)

    try:
        while True:
            try:
                line = session.prompt("> ")
            except EOFError:
                console.print("Goodbye")
                break
            except KeyboardInterrupt:
                continue
            if line.strip():
                console.print(line, markup=False, highlight=False)
    finally:
        history.store.close()


def _load_or_exit(log: HistoryFile) -> list[str]:
    try:
        return log.load()
    except LoadFailure as exc:
        if isinstance(exc.__cause__, FileNotFoundError):
            return []
        _fail(exc)
    except HistoryError as exc:
        _fail(exc)


def _fail(exc: HistoryError) -> None:
    console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
    sys.exit(1)
