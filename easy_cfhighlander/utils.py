"""Console helpers for the command-line layer.

Rich-based output, progress reporting and logging setup.  The core modules
only log through ``logging``; everything that draws on the terminal lives
here so the generator can run headless.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from easy_cfhighlander.files.models import FileStatus

console = Console()

STATUS_STYLES: dict[FileStatus, str] = {
    FileStatus.CREATED: "green",
    FileStatus.UPDATED: "yellow",
    FileStatus.UNCHANGED: "dim",
    FileStatus.REMOVED: "red",
}


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``logging`` records through Rich.

    Only warnings are shown unless *verbose* is set.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def format_status(status: FileStatus) -> str:
    """Return *status* wrapped in its Rich style markup."""
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def create_progress() -> Progress:
    """Create a Rich progress bar for file generation.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        MofNCompleteColumn(),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("{task.description}"),
        console=console,
    )
