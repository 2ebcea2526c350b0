# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registration metadata handed to the host editor's linter service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal

from .models import Diagnostic

LINTER_NAME: Final[str] = "Ansible-Lint"
GRAMMAR_SCOPES: Final[tuple[str, ...]] = ("source.ansible", "source.ansible-advanced")

LintCallback = Callable[[Path], list[Diagnostic]]


@dataclass(frozen=True, slots=True)
class LinterProvider:
    """Describe how the host should schedule lint requests.

    ``scope`` is ``"project"`` because findings may point at included role
    and task files, not only the file being edited. Linting runs on save
    only since ansible-lint needs the playbook on disk.
    """

    lint: LintCallback
    name: str = LINTER_NAME
    grammar_scopes: tuple[str, ...] = GRAMMAR_SCOPES
    scope: Literal["file", "project"] = "project"
    lints_on_change: bool = False

    def handles(self, grammar_scope: str) -> bool:
        """Return ``True`` when documents of ``grammar_scope`` should be linted."""

        return grammar_scope in self.grammar_scopes


__all__ = ["GRAMMAR_SCOPES", "LINTER_NAME", "LintCallback", "LinterProvider"]
