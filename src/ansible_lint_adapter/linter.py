# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint entry point wiring the gate, argument builder, invoker and parsers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .arguments import build_arguments
from .blacklist import is_blacklisted
from .config import PROJECT_CONFIG_FILENAME, LinterConfig
from .errors import AdapterError
from .models import Diagnostic, InvocationRequest, RawToolOutput
from .notifications import UNEXPECTED_ERROR_SUMMARY, ConsoleNotifier, Notifier
from .parsers import (
    DEFAULT_MATCHER_TABLE,
    ClassificationKind,
    LintContext,
    MatcherTable,
    classify_failure,
    parse_stdout,
)
from .process import ProcessInvoker, invoke_linter
from .provider import LinterProvider
from .version import VersionCheckResult, VersionStatus, check_version

LOGGER = logging.getLogger(__name__)

ProjectResolver = Callable[[Path], Path]

_PROJECT_MARKERS: Final[tuple[str, ...]] = (PROJECT_CONFIG_FILENAME, ".git")


def resolve_project_root(target_file: Path) -> Path:
    """Return the nearest ancestor of ``target_file`` that looks like a project root.

    The first directory containing ``.ansible-lint`` or ``.git`` wins; files
    outside any project resolve to their own directory.
    """

    start = target_file.parent
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in _PROJECT_MARKERS):
            return candidate
    return start


@dataclass(slots=True)
class AnsibleLinter:
    """Run ansible-lint for editor lint requests.

    The linter holds only collaborators; every request carries its own
    configuration and output, so concurrent ``lint`` calls are independent.
    """

    config: LinterConfig = field(default_factory=LinterConfig)
    notifier: Notifier = field(default_factory=ConsoleNotifier)
    invoker: ProcessInvoker = field(default=invoke_linter)
    project_resolver: ProjectResolver = field(default=resolve_project_root)
    matcher_table: MatcherTable = field(default=DEFAULT_MATCHER_TABLE)

    def activate(self) -> VersionCheckResult:
        """Run the advisory ansible-lint version check."""

        try:
            return check_version(self.config, self.notifier, invoker=self.invoker)
        except (AdapterError, OSError, ValueError) as exc:
            LOGGER.debug("version check failed: %s", exc)
            return VersionCheckResult(VersionStatus.UNAVAILABLE, detail=str(exc))

    def provide_linter(self) -> LinterProvider:
        """Return registration metadata whose callback lints one file."""

        return LinterProvider(lint=self.lint)

    def lint(self, target_file: Path | str, *, config: LinterConfig | None = None) -> list[Diagnostic]:
        """Lint ``target_file`` with ``config`` (defaults to the linter's config)."""

        path = Path(target_file)
        request = InvocationRequest(target_file=path, config=config or self.config)
        return self.lint_request(request)

    def lint_request(self, request: InvocationRequest) -> list[Diagnostic]:
        """Lint one request and return its diagnostics.

        Never raises: failures that cannot be expressed as a diagnostic are
        sent to the notifier and an empty list is returned.
        """

        config = request.config
        if is_blacklisted(request.target_file, config):
            LOGGER.debug("skipping blacklisted file %s", request.target_file)
            return []
        try:
            project_root = request.project_root
            if config.use_project_config and project_root is None:
                project_root = self.project_resolver(request.target_file)
            args = build_arguments(config, request.target_file, project_root)
            output = self.invoker(
                config.executable_path,
                args,
                cwd=request.cwd,
                timeout_ms=config.timeout_ms,
            )
            context = LintContext(target_file=request.target_file, working_directory=request.cwd)
            return self.interpret(output, context)
        except (AdapterError, OSError, ValueError) as exc:
            LOGGER.debug("lint of %s failed", request.target_file, exc_info=True)
            self._escalate(str(exc))
            return []

    def interpret(self, output: RawToolOutput, context: LintContext) -> list[Diagnostic]:
        """Convert captured output into diagnostics for ``context``.

        Output with an empty error channel goes straight to the stdout
        parser. Otherwise the failure text is classified first; a classified
        failure replaces any stdout findings.
        """

        if not output.failed:
            return parse_stdout(output.stdout, context)
        classification = classify_failure(output.error_text, context, table=self.matcher_table)
        if classification.kind is ClassificationKind.DIAGNOSTIC:
            LOGGER.debug("classified ansible-lint failure as %s", classification.rule)
            return classification.diagnostics
        if classification.needs_escalation:
            self._escalate(classification.detail)
        return parse_stdout(output.stdout, context)

    def lint_many(self, requests: Sequence[InvocationRequest], *, jobs: int = 1) -> list[list[Diagnostic]]:
        """Lint ``requests`` on up to ``jobs`` threads, preserving request order."""

        if jobs <= 1 or len(requests) <= 1:
            return [self.lint_request(request) for request in requests]
        results: list[list[Diagnostic]] = [[] for _ in requests]
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            future_map = {executor.submit(self.lint_request, request): index for index, request in enumerate(requests)}
            for future in as_completed(future_map):
                results[future_map[future]] = future.result()
        return results

    def _escalate(self, detail: str) -> None:
        self.notifier.add_error(UNEXPECTED_ERROR_SUMMARY, detail=detail)


__all__ = ["AnsibleLinter", "ProjectResolver", "resolve_project_root"]
