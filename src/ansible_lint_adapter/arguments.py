# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line construction for ansible-lint."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .config import PROJECT_CONFIG_FILENAME, LinterConfig

PARSEABLE_FLAGS: Final[tuple[str, ...]] = ("-p", "--nocolor")
SEVERITY_FLAG: Final[str] = "--parseable-severity"
CONFIG_FLAG: Final[str] = "-c"
SKIP_FLAG: Final[str] = "-x"
DEFAULT_RULES_FLAG: Final[str] = "-R"
RULES_DIR_FLAG: Final[str] = "-r"
EXCLUDE_FLAG: Final[str] = "--exclude"


def project_config_path(project_root: Path | str) -> str:
    """Return the location of the project-level ansible-lint config file."""

    return f"{project_root}/{PROJECT_CONFIG_FILENAME}"


def build_arguments(
    config: LinterConfig,
    target_file: Path | str,
    project_root: Path | str | None = None,
) -> list[str]:
    """Return the ansible-lint argument list for ``target_file``.

    Args:
        config: Options for this invocation.
        target_file: Absolute path of the playbook being linted.
        project_root: Project directory holding ``.ansible-lint``; only read
            when ``config.use_project_config`` is set.

    Returns:
        list[str]: Ordered arguments, excluding the executable itself.

    Raises:
        ValueError: If project config mode is enabled without a project root.
    """

    args: list[str] = [*PARSEABLE_FLAGS]
    if config.display_severity:
        args.append(SEVERITY_FLAG)

    if config.use_project_config:
        # the project file replaces skip, rules and exclude options entirely
        if project_root is None:
            raise ValueError("project_root is required when use_project_config is enabled")
        args.extend([CONFIG_FLAG, project_config_path(project_root)])
    else:
        args.extend(_skip_arguments(config))
        args.extend(_rules_arguments(config))
        args.extend(_exclude_arguments(config))

    args.append(str(target_file))
    return args


def _skip_arguments(config: LinterConfig) -> list[str]:
    if not config.rule_skips:
        return []
    return [SKIP_FLAG, config.rule_skips]


def _rules_arguments(config: LinterConfig) -> list[str]:
    if not config.has_rules_dirs:
        return []
    args: list[str] = [DEFAULT_RULES_FLAG] if config.rules_dir_default else []
    for directory in config.rules_dirs:
        args.extend([RULES_DIR_FLAG, directory])
    return args


def _exclude_arguments(config: LinterConfig) -> list[str]:
    if not config.has_exclude_dirs:
        return []
    args: list[str] = []
    for directory in config.exclude_dirs:
        args.extend([EXCLUDE_FLAG, directory])
    return args


__all__ = ["build_arguments", "project_config_path"]
