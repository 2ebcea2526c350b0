# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ansible-lint command line construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from ansible_lint_adapter.arguments import build_arguments, project_config_path
from ansible_lint_adapter.config import LinterConfig

TARGET = "/work/site.yml"


def test_default_arguments() -> None:
    assert build_arguments(LinterConfig(), TARGET) == ["-p", "--nocolor", TARGET]


def test_full_option_order() -> None:
    config = LinterConfig(
        display_severity=True,
        rule_skips="E301,E503",
        rules_dirs=("/rules/a", "/rules/b"),
        rules_dir_default=True,
        exclude_dirs=("roles/vendor",),
    )
    assert build_arguments(config, TARGET) == [
        "-p",
        "--nocolor",
        "--parseable-severity",
        "-x",
        "E301,E503",
        "-R",
        "-r",
        "/rules/a",
        "-r",
        "/rules/b",
        "--exclude",
        "roles/vendor",
        TARGET,
    ]


def test_default_rules_flag_requires_rules_dirs() -> None:
    assert "-R" not in build_arguments(LinterConfig(rules_dir_default=True), TARGET)


def test_project_config_replaces_local_options() -> None:
    config = LinterConfig(
        use_project_config=True,
        rule_skips="E301",
        rules_dirs=("/rules",),
        exclude_dirs=("vendor",),
    )
    args = build_arguments(config, TARGET, Path("/work"))
    assert args == ["-p", "--nocolor", "-c", "/work/.ansible-lint", TARGET]


def test_project_config_keeps_severity_flag() -> None:
    config = LinterConfig(use_project_config=True, display_severity=True)
    args = build_arguments(config, TARGET, "/work")
    assert args[:3] == ["-p", "--nocolor", "--parseable-severity"]


def test_project_config_without_root_is_rejected() -> None:
    with pytest.raises(ValueError, match="project_root"):
        build_arguments(LinterConfig(use_project_config=True), TARGET)


def test_build_is_deterministic() -> None:
    config = LinterConfig(rule_skips="E301", exclude_dirs=("vendor",))
    assert build_arguments(config, TARGET) == build_arguments(config, TARGET)


def test_project_config_path() -> None:
    assert project_config_path("/work") == "/work/.ansible-lint"
