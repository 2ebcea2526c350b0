# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels understood by the host editor."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.INFO: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
}


def severity_rank(severity: Severity) -> int:
    """Return an ordinal for ``severity`` where higher means more severe."""

    return _SEVERITY_RANK[severity]


__all__ = ["Severity", "severity_rank"]
