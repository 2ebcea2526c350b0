# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for ansible-lint's parseable (pep8 style) report on stdout."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from ..models import Diagnostic
from ..severity import Severity
from .base import LintContext, iter_pattern_matches, line_range, split_lines

# ``path:line: [code] message``; older releases only emit ``E###`` codes while
# newer ones use rule names such as ``[risky-file-permissions]``.
PARSEABLE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<path>.+?):(?P<line>\d+):\s\[(?P<code>[^\]\s]+)\]\s(?P<message>.*)$",
)


def parse_stdout(stdout: str | Sequence[str], context: LintContext) -> list[Diagnostic]:
    """Parse ansible-lint stdout into warning diagnostics.

    A finding belongs to the target when the reported path equals it or the
    line contains the target path verbatim. Findings reported against an
    included file (a role or task include) are relocated under the working
    directory because ansible-lint prints those paths relative to where it ran.

    Args:
        stdout: Raw stdout text or pre-split lines.
        context: Lint request being interpreted.

    Returns:
        list[Diagnostic]: Diagnostics in output order.
    """

    results: list[Diagnostic] = []
    for match in iter_pattern_matches(split_lines(stdout), PARSEABLE_PATTERN):
        reported = match.group("path")
        on_target = reported == context.target or context.target in match.group(0)
        file = context.target if on_target else context.resolve(reported)
        results.append(
            Diagnostic(
                severity=Severity.WARNING,
                excerpt=match.group("message"),
                file=file,
                range=line_range(int(match.group("line"))),
                code=match.group("code"),
            ),
        )
    return results


__all__ = ["PARSEABLE_PATTERN", "parse_stdout"]
