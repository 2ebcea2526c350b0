# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filename exclusion gate evaluated before ansible-lint is spawned."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from re import Pattern

from .config import LinterConfig

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def _compile_pattern(pattern: str) -> Pattern[str] | None:
    """Compile ``pattern`` once, reporting a malformed expression a single time."""

    try:
        return re.compile(pattern)
    except re.error as exc:
        LOGGER.warning("ignoring invalid blacklist pattern %r: %s", pattern, exc)
        return None


def should_skip(target_file: Path | str, pattern: str | Pattern[str] | None) -> bool:
    """Return ``True`` when ``target_file`` is excluded by ``pattern``.

    An empty or missing pattern never excludes anything, and an invalid
    expression behaves like an empty one.
    """

    if pattern is None:
        return False
    if isinstance(pattern, str):
        if not pattern:
            return False
        compiled = _compile_pattern(pattern)
        if compiled is None:
            return False
    else:
        compiled = pattern
    return compiled.search(str(target_file)) is not None


def is_blacklisted(target_file: Path | str, config: LinterConfig) -> bool:
    """Return ``True`` when ``config``'s blacklist excludes ``target_file``."""

    return should_skip(target_file, config.blacklist_pattern)


__all__ = ["is_blacklisted", "should_skip"]
