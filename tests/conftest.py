# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from ansible_lint_adapter.models import RawToolOutput


@dataclass(slots=True)
class InvokerCall:
    executable: str
    args: list[str]
    cwd: Path
    timeout_ms: int


@dataclass(slots=True)
class FakeInvoker:
    """Stand-in for the process invoker returning a canned result."""

    output: RawToolOutput = field(default_factory=RawToolOutput)
    calls: list[InvokerCall] = field(default_factory=list)

    def __call__(self, executable: str, args: Sequence[str], *, cwd: Path, timeout_ms: int) -> RawToolOutput:
        self.calls.append(InvokerCall(executable, list(args), cwd, timeout_ms))
        return self.output


@dataclass(slots=True)
class RecordingNotifier:
    """Notifier that keeps every notification for assertions."""

    errors: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[tuple[str, str]] = field(default_factory=list)

    def add_error(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        self.errors.append((message, detail))

    def add_warning(self, message: str, *, detail: str = "", dismissable: bool = False) -> None:
        self.warnings.append((message, detail))


@pytest.fixture
def playbook(tmp_path: Path) -> Path:
    """Return an on-disk playbook inside a temporary project."""
    path = tmp_path / "site.yml"
    path.write_text("- hosts: all\n  tasks: []\n", encoding="utf-8")
    return path


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` and the working directory at ``tmp_path``."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_invoker() -> FakeInvoker:
    """Return an invoker whose ``output`` attribute tests can replace."""
    return FakeInvoker()
