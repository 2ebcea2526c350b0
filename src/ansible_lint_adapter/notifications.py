# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Host notification channel used for failures that are not diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable

from .logging import fail, info, warn

UNEXPECTED_ERROR_SUMMARY: Final[str] = (
    "An unexpected error with ansible, ansible-lint, ansible-lint-adapter, your editor, "
    "and/or your playbook, has occurred."
)


@runtime_checkable
class Notifier(Protocol):
    """Global notification sink provided by the host editor."""

    def add_error(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        """Display an error notification."""
        raise NotImplementedError

    def add_warning(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        """Display a warning notification."""
        raise NotImplementedError


@dataclass(slots=True)
class ConsoleNotifier:
    """Notifier printing through the shared Rich console helpers."""

    use_emoji: bool = True
    use_color: bool | None = None
    stderr: bool = True

    def add_error(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        del dismissable
        fail(message, use_emoji=self.use_emoji, use_color=self.use_color, stderr=self.stderr)
        self._detail(detail)

    def add_warning(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        del dismissable
        warn(message, use_emoji=self.use_emoji, use_color=self.use_color, stderr=self.stderr)
        self._detail(detail)

    def _detail(self, detail: str) -> None:
        if detail.strip():
            info(detail.rstrip(), use_emoji=False, use_color=self.use_color, stderr=self.stderr)


__all__ = ["UNEXPECTED_ERROR_SUMMARY", "ConsoleNotifier", "Notifier"]
