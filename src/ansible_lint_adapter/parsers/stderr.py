# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classification of ansible-lint failures reported on stderr.

ansible-lint aborts with free-form tracebacks and warnings whose wording
changes between ansible and ansible-lint releases. Every phrase the adapter
recognises lives in :data:`DEFAULT_MATCHER_TABLE`; supporting a new release
means adding rows to the table rather than changing the classifier.

Several phrases can appear in one error blob, so the table is ordered from
the most specific and actionable cause to the least and the first matching
row wins. At most one diagnostic is produced per failure.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ..models import Diagnostic, Range
from ..severity import Severity
from .base import LintContext, file_diagnostic, line_range

LOGGER = logging.getLogger(__name__)

MISSING_FILE_MESSAGE: Final[str] = "Missing file {path}. Please fix before continuing linter use."
UNREADABLE_FILE_MESSAGE: Final[str] = "{path} is unreadable or not a file. Please fix before continuing linter use."
YAML_SYNTAX_MESSAGE: Final[str] = "YAML syntax error."
ANSIBLE_SYNTAX_MESSAGE: Final[str] = "Ansible syntax error."
VAULT_MESSAGE: Final[str] = "File must be decrypted with ansible-vault prior to linting."
STDIN_FILE_LABEL: Final[str] = "Save this playbook."
STDIN_MESSAGE: Final[str] = (
    "Ansible-Lint cannot reliably lint on stdin due to nonexistent pathing on includes and roles. "
    "Please save this playbook to your filesystem."
)

ERROR_LOCATION_PATTERN: Final[re.Pattern[str]] = re.compile(r"The error appears to be in '(.*)':")
LINE_COLUMN_PATTERN: Final[re.Pattern[str]] = re.compile(r"line\s(\d+),\scolumn\s(\d+)")
YAML_LINE_MESSAGE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.ya?ml:\d+ (.*)")
SYNTAX_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"The error appears to be in '(.*)':|parse task at (.*):\d+")
SYNTAX_LINE_PATTERN: Final[re.Pattern[str]] = re.compile(r"line\s(\d+),\scolumn\s(\d+)|\.ya?ml:(\d+)")

FailureHandler = Callable[[re.Match[str], str, LintContext], Diagnostic]


class ClassificationKind(str, Enum):
    """Outcome categories of failure classification."""

    DIAGNOSTIC = "diagnostic"
    BENIGN = "benign"
    UNCLASSIFIED = "unclassified"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying one block of failure text."""

    kind: ClassificationKind
    rule: str | None = None
    diagnostic: Diagnostic | None = None
    detail: str = ""

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Return the produced diagnostic as a list (empty or one element)."""

        return [self.diagnostic] if self.diagnostic is not None else []

    @property
    def needs_escalation(self) -> bool:
        """Return ``True`` when the failure must be reported to the user directly."""

        return self.kind is ClassificationKind.UNCLASSIFIED


@dataclass(frozen=True, slots=True)
class FailureMatcher:
    """Single row of the matcher table.

    A row without a handler marks known informational output that is neither
    a diagnostic nor an unexpected failure.
    """

    name: str
    pattern: re.Pattern[str]
    handler: FailureHandler | None = None

    @property
    def benign(self) -> bool:
        return self.handler is None


@dataclass(frozen=True, slots=True)
class MatcherTable:
    """Ordered, first-match-wins collection of failure matchers."""

    version: str
    matchers: tuple[FailureMatcher, ...] = field(default_factory=tuple)

    def classify(self, text: str, context: LintContext) -> Classification:
        """Classify ``text`` against the table rows in order.

        Args:
            text: stderr output or execution failure message.
            context: Lint request the failure belongs to.

        Returns:
            Classification: Tagged classification result.
        """

        if not text or not text.strip():
            return Classification(kind=ClassificationKind.EMPTY)
        for matcher in self.matchers:
            match = matcher.pattern.search(text)
            if match is None:
                continue
            if matcher.benign or matcher.handler is None:
                return Classification(kind=ClassificationKind.BENIGN, rule=matcher.name, detail=text)
            diagnostic = matcher.handler(match, text, context)
            return Classification(
                kind=ClassificationKind.DIAGNOSTIC,
                rule=matcher.name,
                diagnostic=diagnostic,
                detail=text,
            )
        return Classification(kind=ClassificationKind.UNCLASSIFIED, detail=text)


def _missing_file(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del text
    excerpt = MISSING_FILE_MESSAGE.format(path=match.group(1))
    return file_diagnostic(Severity.ERROR, excerpt, context.target)


def _unreadable_file(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del text
    # each ansible release words this differently; exactly one group participates
    path = "".join(group for group in match.groups() if group is not None)
    excerpt = UNREADABLE_FILE_MESSAGE.format(path=path)
    return file_diagnostic(Severity.ERROR, excerpt, context.target)


def _yaml_syntax(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del match
    file_match = ERROR_LOCATION_PATTERN.search(text)
    range_match = LINE_COLUMN_PATTERN.search(text)
    file = file_match.group(1) if file_match else context.target
    span = line_range(int(range_match.group(1)), int(range_match.group(2))) if range_match else Range.file_start()
    return Diagnostic(severity=Severity.ERROR, excerpt=YAML_SYNTAX_MESSAGE, file=file, range=span)


def _ansible_syntax(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del match
    message_match = YAML_LINE_MESSAGE_PATTERN.search(text)
    excerpt = message_match.group(1) if message_match and message_match.group(1) else ANSIBLE_SYNTAX_MESSAGE
    file_match = SYNTAX_FILE_PATTERN.search(text)
    line_match = SYNTAX_LINE_PATTERN.search(text)
    # Candidate positions are not reliable for this class of error; the
    # diagnostic stays on the first line of the linted file.
    LOGGER.debug(
        "ansible syntax error candidates: file=%s line=%s",
        next((group for group in file_match.groups() if group), None) if file_match else None,
        next((group for group in line_match.groups() if group), None) if line_match else None,
    )
    return file_diagnostic(Severity.ERROR, excerpt, context.target)


def _vault(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del match, text
    return file_diagnostic(Severity.INFO, VAULT_MESSAGE, context.target)


def _stdin(match: re.Match[str], text: str, context: LintContext) -> Diagnostic:
    del match, text, context
    return file_diagnostic(Severity.INFO, STDIN_MESSAGE, STDIN_FILE_LABEL)


DEFAULT_MATCHER_TABLE: Final[MatcherTable] = MatcherTable(
    version="ansible-lint>=3.5",
    matchers=(
        FailureMatcher(
            "missing-file",
            re.compile(r"WARNING: Couldn't open (.*) - No such file or directory"),
            _missing_file,
        ),
        FailureMatcher(
            "unreadable-file",
            re.compile(
                r"the file_name (.*) does not exist, or is not readable"
                r"|Could not find or access '(.*)'"
                r"|error occurred while trying to read the file '(.*)':",
            ),
            _unreadable_file,
        ),
        FailureMatcher("yaml-syntax", re.compile(r"Syntax Error while loading YAML"), _yaml_syntax),
        FailureMatcher(
            "ansible-syntax",
            re.compile(r"raise Ansible(?:Parser)?Error|Couldn't parse task at|AttributeError"),
            _ansible_syntax,
        ),
        FailureMatcher("vault-encrypted", re.compile(r"vault password.*decrypt"), _vault),
        FailureMatcher("stdin", re.compile(r"\.dirname"), _stdin),
        FailureMatcher("skip-rules-hint", re.compile(r"You can skip specific rules")),
    ),
)


def classify_failure(
    text: str,
    context: LintContext,
    *,
    table: MatcherTable = DEFAULT_MATCHER_TABLE,
) -> Classification:
    """Classify ansible-lint failure ``text`` using ``table``."""

    return table.classify(text, context)


__all__ = [
    "DEFAULT_MATCHER_TABLE",
    "Classification",
    "ClassificationKind",
    "FailureMatcher",
    "MatcherTable",
    "classify_failure",
]
