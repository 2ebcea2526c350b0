# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line host for the ansible-lint adapter."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.text import Text

from ..config import LinterConfig
from ..config_loader import ConfigLoader, MappingConfigSource
from ..console import get_console_manager
from ..errors import ConfigError
from ..linter import AnsibleLinter
from ..logging import fail, ok
from ..models import Diagnostic, InvocationRequest
from ..notifications import ConsoleNotifier
from ..severity import Severity, severity_rank
from ..version import VersionStatus

CONFIG_ERROR_EXIT_CODE = 2


class OutputFormat(str, Enum):
    """Rendering formats for lint results."""

    CONCISE = "concise"
    JSON = "json"


app = typer.Typer(
    help="Run ansible-lint and report editor-style diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(root: Path, config_file: Path | None, overrides: dict[str, Any]) -> LinterConfig:
    loader = ConfigLoader.for_root(root, config_file=config_file)
    return loader.with_source(MappingConfigSource(overrides, name="command line")).load()


def _format_concise(diagnostic: Diagnostic) -> str:
    start = diagnostic.range.start
    code = f" [{diagnostic.code}]" if diagnostic.code else ""
    location = f"{diagnostic.file}:{start.line + 1}:{start.column + 1}"
    return f"{location}: {diagnostic.severity.value}{code} {diagnostic.excerpt}"


def _render(diagnostics: list[Diagnostic], output: OutputFormat, *, use_color: bool) -> None:
    if output is OutputFormat.JSON:
        for diagnostic in diagnostics:
            typer.echo(json.dumps(diagnostic.to_host_dict()))
        return
    console = get_console_manager().get(color=use_color, emoji=False)
    for diagnostic in diagnostics:
        console.print(Text(_format_concise(diagnostic)))


@app.command("lint")
def lint_command(
    files: Annotated[list[Path], typer.Argument(help="Playbooks or task files to lint.")],
    config_file: Annotated[Path | None, typer.Option("--config", help="Extra TOML configuration file.")] = None,
    executable: Annotated[str | None, typer.Option("--executable", help="Path to ansible-lint.")] = None,
    skip: Annotated[str | None, typer.Option("--skip", "-x", help="Comma-delimited tags/rules to skip.")] = None,
    rules_dirs: Annotated[
        list[str] | None, typer.Option("--rules-dir", "-r", help="Additional rules directory (repeatable).")
    ] = None,
    rules_dir_default: Annotated[
        bool | None,
        typer.Option("--rules-dir-default/--no-rules-dir-default", help="Keep default rules with --rules-dir."),
    ] = None,
    exclude_dirs: Annotated[
        list[str] | None, typer.Option("--exclude", help="Directory excluded from linting (repeatable).")
    ] = None,
    use_project_config: Annotated[
        bool | None,
        typer.Option("--use-project-config/--no-use-project-config", help="Use <project>/.ansible-lint."),
    ] = None,
    blacklist: Annotated[str | None, typer.Option("--blacklist", help="Regex of filenames to ignore.")] = None,
    display_severity: Annotated[
        bool | None,
        typer.Option("--display-severity/--no-display-severity", help="Show rule severity in messages."),
    ] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", help="Seconds before a lint attempt times out.")] = None,
    jobs: Annotated[int, typer.Option("--jobs", "-j", min=1, help="Files linted in parallel.")] = 1,
    output: Annotated[OutputFormat, typer.Option("--output", help="Output format.")] = OutputFormat.CONCISE,
    min_severity: Annotated[
        Severity, typer.Option("--min-severity", help="Lowest severity to report.")
    ] = Severity.INFO,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Lint FILES and print one diagnostic per line."""

    _configure_logging(verbose)
    overrides: dict[str, Any] = {
        "executable_path": executable,
        "rule_skips": skip,
        "rules_dirs": rules_dirs or None,
        "rules_dir_default": rules_dir_default,
        "exclude_dirs": exclude_dirs or None,
        "use_project_config": use_project_config,
        "blacklist": blacklist,
        "display_severity": display_severity,
        "timeout": timeout,
    }
    try:
        config = _load_config(Path.cwd(), config_file, overrides)
    except ConfigError as exc:
        fail(f"Invalid configuration: {exc}", use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc

    notifier = ConsoleNotifier(use_emoji=not no_emoji, use_color=not no_color)
    linter = AnsibleLinter(config=config, notifier=notifier)
    requests = [InvocationRequest(target_file=path, config=config) for path in files]
    results = linter.lint_many(requests, jobs=jobs)

    threshold = severity_rank(min_severity)
    diagnostics = [
        diagnostic for batch in results for diagnostic in batch if severity_rank(diagnostic.severity) >= threshold
    ]
    _render(diagnostics, output, use_color=not no_color)
    has_errors = any(diagnostic.severity is Severity.ERROR for diagnostic in diagnostics)
    raise typer.Exit(code=1 if has_errors else 0)


@app.command("check-version")
def check_version_command(
    config_file: Annotated[Path | None, typer.Option("--config", help="Extra TOML configuration file.")] = None,
    executable: Annotated[str | None, typer.Option("--executable", help="Path to ansible-lint.")] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in messages.")] = False,
) -> None:
    """Check that the installed ansible-lint is a supported release."""

    try:
        config = _load_config(Path.cwd(), config_file, {"executable_path": executable})
    except ConfigError as exc:
        fail(f"Invalid configuration: {exc}", use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc

    notifier = ConsoleNotifier(use_emoji=not no_emoji, use_color=not no_color)
    result = AnsibleLinter(config=config, notifier=notifier).activate()
    if result.status is VersionStatus.UNAVAILABLE:
        fail(f"Unable to run ansible-lint: {result.detail}", use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=1)
    if not result.supported:
        raise typer.Exit(code=1)
    ok("ansible-lint version check passed.", use_emoji=not no_emoji, use_color=not no_color)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
