# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public parser exports for converting ansible-lint output into diagnostics."""

from __future__ import annotations

from .base import LintContext, split_lines
from .stderr import (
    DEFAULT_MATCHER_TABLE,
    Classification,
    ClassificationKind,
    FailureMatcher,
    MatcherTable,
    classify_failure,
)
from .stdout import PARSEABLE_PATTERN, parse_stdout

__all__ = [
    "DEFAULT_MATCHER_TABLE",
    "PARSEABLE_PATTERN",
    "Classification",
    "ClassificationKind",
    "FailureMatcher",
    "LintContext",
    "MatcherTable",
    "classify_failure",
    "parse_stdout",
    "split_lines",
]
