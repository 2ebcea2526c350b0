# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor adapter turning ansible-lint output into structured diagnostics."""

from __future__ import annotations

from .arguments import build_arguments
from .blacklist import is_blacklisted, should_skip
from .config import LinterConfig, build_config
from .config_loader import ConfigLoader
from .errors import AdapterError, ConfigError
from .linter import AnsibleLinter, resolve_project_root
from .models import Diagnostic, InvocationRequest, Position, Range, RawToolOutput
from .notifications import ConsoleNotifier, Notifier
from .parsers import Classification, ClassificationKind, LintContext, classify_failure, parse_stdout
from .provider import LinterProvider
from .severity import Severity
from .version import VersionCheckResult, VersionStatus

__all__ = [
    "AdapterError",
    "AnsibleLinter",
    "Classification",
    "ClassificationKind",
    "ConfigError",
    "ConfigLoader",
    "ConsoleNotifier",
    "Diagnostic",
    "InvocationRequest",
    "LintContext",
    "LinterConfig",
    "LinterProvider",
    "Notifier",
    "Position",
    "Range",
    "RawToolOutput",
    "Severity",
    "VersionCheckResult",
    "VersionStatus",
    "build_arguments",
    "build_config",
    "classify_failure",
    "is_blacklisted",
    "parse_stdout",
    "resolve_project_root",
    "should_skip",
]
