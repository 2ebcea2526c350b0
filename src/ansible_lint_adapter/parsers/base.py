# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..models import Diagnostic, Position, Range
from ..severity import Severity

_LINE_SPLIT: Final[re.Pattern[str]] = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class LintContext:
    """Describe the lint request a parser is interpreting output for."""

    target_file: Path
    working_directory: Path

    @property
    def target(self) -> str:
        """Return the target file path as reported to the host."""

        return str(self.target_file)

    def resolve(self, reported_path: str) -> str:
        """Return ``reported_path`` joined onto the working directory."""

        return str(self.working_directory / reported_path)


def split_lines(output: str | Sequence[str]) -> list[str]:
    """Split tool output on ``\\n`` or ``\\r\\n`` boundaries."""

    if isinstance(output, str):
        return _LINE_SPLIT.split(output)
    return [str(item) for item in output]


def iter_pattern_matches(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    *,
    skip_blank: bool = True,
) -> Iterator[re.Match[str]]:
    """Yield regex matches from ``lines`` in input order.

    Args:
        lines: Sequence of raw lines emitted by a tool.
        pattern: Compiled regular expression used to match diagnostic lines.
        skip_blank: When ``True`` blank lines are ignored.

    Yields:
        re.Match[str]: Match objects produced by ``pattern``.
    """

    for line in lines:
        if skip_blank and not line.strip():
            continue
        match = pattern.match(line)
        if match:
            yield match


def line_range(one_based_line: int, one_based_column: int | None = None) -> Range:
    """Return a one-column range for tool-reported 1-based coordinates.

    Without a column the range covers the first character of the line.
    """

    start = Position.from_one_based(one_based_line, one_based_column or 1)
    return Range.on_line(start.line, start.column)


def file_diagnostic(severity: Severity, excerpt: str, file: str) -> Diagnostic:
    """Return a diagnostic anchored to the first character of ``file``."""

    return Diagnostic(severity=severity, excerpt=excerpt, file=file, range=Range.file_start())


__all__ = [
    "LintContext",
    "file_diagnostic",
    "iter_pattern_matches",
    "line_range",
    "split_lines",
]
