"""The check command: validate a directory of agent definitions."""
from __future__ import annotations

import enum
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from agentlint import check_directory, render_jsonl
from agentlint.report import render_issue, summary_line
from agentlint_core.config import AgentlintConfig
from agentlint_core.errors import CollectionError, ConfigError
from agentlint_core.logging import setup_logging
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from agentlint.types import ValidationReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ABORTED = 2


class OutputFormat(str, enum.Enum):
    TEXT = "text"
    JSONL = "jsonl"


def check_command(
    directory: Path = typer.Argument(
        ..., help="Directory of agent definition files to validate"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        help="Report format: plain text or one JSON record per line",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to agentlint.toml in the directory)",
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Treat warnings as failures"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr"
    ),
    log_json: bool = typer.Option(
        False, "--log-json", help="Emit logs as JSON records"
    ),
) -> None:
    """Validate agent definitions and report issues."""
    directory = directory.expanduser()

    try:
        config = _load_config(directory, config_path)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(EXIT_ABORTED) from None

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        json_output=log_json or config.logging.json,
    )

    try:
        report = check_directory(directory, config)
    except CollectionError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(EXIT_ABORTED) from None

    if output_format is OutputFormat.JSONL:
        typer.echo(render_jsonl(report, root=directory))
    else:
        _print_text(report, directory)

    failed = not report.passed or (strict and report.warning_count > 0)
    raise typer.Exit(EXIT_ISSUES if failed else EXIT_OK)


def _load_config(directory: Path, config_path: Path | None) -> AgentlintConfig:
    """Load an explicit config file, or layer global and project configs."""
    if config_path is None:
        return AgentlintConfig.load(directory)

    resolved = config_path.expanduser()
    if not resolved.is_file():
        msg = f"Config file not found: {resolved}"
        raise ConfigError(msg)
    return AgentlintConfig.from_toml(resolved)


def _print_text(report: ValidationReport, root: Path) -> None:
    """Print the text report, colouring issues by severity."""
    for issue in report.issues:
        console.print(
            render_issue(issue, root=root),
            style="red" if issue.is_error else "yellow",
            markup=False,
            soft_wrap=True,
        )

    if report.issues:
        console.print()
    console.print(
        summary_line(report),
        style="bold green" if report.passed else "bold red",
        markup=False,
        soft_wrap=True,
    )
