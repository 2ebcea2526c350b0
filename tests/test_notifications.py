# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console notifications."""

from __future__ import annotations

import pytest

from ansible_lint_adapter.notifications import ConsoleNotifier, Notifier


def test_console_notifier_writes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    notifier = ConsoleNotifier(use_emoji=False, use_color=False)
    notifier.add_error("Lint failed", detail="Traceback line\n")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Lint failed" in captured.err
    assert "Traceback line" in captured.err


def test_blank_detail_is_not_printed(capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleNotifier(use_emoji=False, use_color=False).add_warning("Old release", detail="  ")
    assert capsys.readouterr().err.strip().splitlines() == ["Old release"]


def test_console_notifier_satisfies_protocol() -> None:
    assert isinstance(ConsoleNotifier(), Notifier)
