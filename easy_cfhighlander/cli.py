"""Command-line entry point.

Usage::

    easy-cfhighlander code --cwd ./acme
    easy-cfhighlander cloudformation -n -p project=acme -p dns_domain=acme.com
    python -m easy_cfhighlander --version
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import Progress, TaskID
from rich.prompt import Prompt

from easy_cfhighlander import __version__
from easy_cfhighlander.commands import COMMANDS, RunResult
from easy_cfhighlander.config import GeneratorConfig
from easy_cfhighlander.exceptions import EasyCfhighlanderError
from easy_cfhighlander.files.models import FileOutcome, FileStatus
from easy_cfhighlander.utils import (
    configure_logging,
    console,
    create_progress,
    format_status,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

EXIT_CODE_SUCCESS = 0
EXIT_CODE_ERROR = 1


# ---------------------------------------------------------------------------
# Terminal collaborators
# ---------------------------------------------------------------------------


class RichPrompter:
    """Asks questions on the terminal with ``rich.prompt.Prompt``."""

    def __init__(self, output: Console | None = None) -> None:
        self.console = output or console

    def ask(self, question: str, default: str | None) -> str | None:
        if default is None:
            return Prompt.ask(question, console=self.console)
        return Prompt.ask(question, default=default, console=self.console)

    def reject(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")


class ProgressReporter:
    """Draws a progress bar as outcomes arrive.

    The bar starts on the first outcome so it never overlaps the prompts.
    """

    def __init__(self, cwd: Path) -> None:
        self.cwd = cwd
        self.progress: Progress | None = None
        self.task: TaskID | None = None

    def __call__(self, outcome: FileOutcome, position: int, total: int) -> None:
        if self.progress is None:
            console.print(f"Generating files in [yellow]{self.cwd}[/yellow]:")
            self.progress = create_progress()
            self.progress.start()
            self.task = self.progress.add_task("", total=total)

        message = f"- {format_status(outcome.status)} [cyan]{outcome.filename}[/cyan]"
        self.progress.console.print(message)
        self.progress.update(self.task, advance=1, description=message)

    def close(self) -> None:
        if self.progress is not None:
            self.progress.stop()


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------


def parse_params(raw_params: Sequence[str] | None) -> dict[str, str]:
    """Parse repeated ``-p key=value`` options into explicit answers.

    Raises:
        ValueError: An item has no ``=`` or an empty key.
    """
    answers: dict[str, str] = {}
    for raw in raw_params or []:
        key, sep, value = str(raw).partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid -p parameter format: {raw!r}. Expect key=value.")
        answers[key] = value.strip()
    return answers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easy-cfhighlander",
        description="Generate cfhighlander CloudFormation projects from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  easy-cfhighlander code --cwd ./acme\n"
            "  easy-cfhighlander cloudformation -n -p project=acme\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    for name, command_cls in COMMANDS.items():
        sub = subparsers.add_parser(name, help=command_cls.description)
        sub.add_argument(
            "--cwd",
            default=None,
            help="Current working directory (default: process working directory)",
        )
        sub.add_argument(
            "--no-interaction", "-n",
            action="store_true",
            help="Never prompt; use explicit, cached and default values",
        )
        sub.add_argument(
            "--param", "-p",
            action="append",
            default=[],
            help="Explicit answer as key=value. Repeatable.",
        )
        sub.add_argument(
            "--max-attempts",
            type=int,
            default=None,
            help="Give up on a parameter after this many rejected answers",
        )
        sub.add_argument(
            "--template-dir",
            default=None,
            help="Directory holding templates (default: bundled templates)",
        )
        sub.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Overlay command-line options on the environment configuration."""
    config = GeneratorConfig.from_env()
    update: dict[str, Any] = {}
    if args.cwd:
        update["cwd"] = Path(args.cwd)
    if args.no_interaction:
        update["interactive"] = False
    if args.max_attempts is not None:
        update["max_attempts"] = args.max_attempts
    if args.template_dir:
        update["template_dir"] = Path(args.template_dir)
    # Re-validate so bad option values are rejected like bad env values.
    return GeneratorConfig(**{**config.model_dump(), **update})


def _print_result(result: RunResult) -> None:
    print_summary_table(
        {status.value: str(result.count(status)) for status in FileStatus},
        title="Generated files",
    )
    if result.manifest_error is not None:
        print_warning(f"Manifest was not written: {result.manifest_error}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``easy-cfhighlander``; returns the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        answers = parse_params(args.param)
        config = build_config(args)
    except ValueError as exc:
        print_error(f"Error: {exc}")
        return EXIT_CODE_ERROR

    command = COMMANDS[args.command]()
    reporter = ProgressReporter(config.cwd.resolve())
    try:
        result = command.run(
            config,
            answers=answers,
            prompter=RichPrompter() if config.interactive else None,
            on_outcome=reporter,
        )
    except (EasyCfhighlanderError, OSError) as exc:
        print_error(f"Error: {exc}")
        return EXIT_CODE_ERROR
    except (EOFError, KeyboardInterrupt):
        print_error("Aborted.")
        return EXIT_CODE_ERROR
    finally:
        reporter.close()

    _print_result(result)
    print_success(f"Generated {len(result.outcomes)} files with {command.name}.")
    return EXIT_CODE_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
