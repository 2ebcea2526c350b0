# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Activation-time check for a supported ansible-lint release."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

from .config import LinterConfig
from .notifications import Notifier
from .process import ProcessInvoker, invoke_linter

LOGGER = logging.getLogger(__name__)

LIST_TAGS_FLAG: Final[str] = "-T"
# the ``repeatability`` tag first shipped with ansible-lint 3.5
SUPPORTED_MARKER: Final[re.Pattern[str]] = re.compile(r"repeatability")
UPGRADE_MESSAGE: Final[str] = (
    "ansible-lint < 3.5 is unsupported. Backwards compatibility should exist, but is not guaranteed."
)
UPGRADE_DETAIL: Final[str] = "Please upgrade your version of ansible-lint to >= 3.5.\n"


class VersionStatus(str, Enum):
    """Outcome of checking the installed ansible-lint."""

    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True, slots=True)
class VersionCheckResult:
    """Status of the version check plus the failure text when ansible-lint could not run."""

    status: VersionStatus
    detail: str = ""

    @property
    def supported(self) -> bool:
        return self.status is VersionStatus.SUPPORTED


def check_version(
    config: LinterConfig,
    notifier: Notifier,
    *,
    invoker: ProcessInvoker = invoke_linter,
    cwd: Path | None = None,
) -> VersionCheckResult:
    """Warn through ``notifier`` when the installed ansible-lint looks too old.

    The check is advisory: it never raises and never disables linting. When
    ansible-lint cannot be run at all no warning is shown, since every lint
    attempt will report that failure on its own; the result is
    ``UNAVAILABLE`` so callers can report it themselves.
    """

    output = invoker(
        config.executable_path,
        [LIST_TAGS_FLAG],
        cwd=cwd or Path.cwd(),
        timeout_ms=config.timeout_ms,
    )
    if output.failure:
        LOGGER.debug("skipping ansible-lint version check: %s", output.failure)
        return VersionCheckResult(VersionStatus.UNAVAILABLE, detail=output.failure)
    if SUPPORTED_MARKER.search(output.stdout):
        return VersionCheckResult(VersionStatus.SUPPORTED)
    notifier.add_warning(UPGRADE_MESSAGE, detail=UPGRADE_DETAIL, dismissable=True)
    return VersionCheckResult(VersionStatus.UNSUPPORTED)


__all__ = [
    "LIST_TAGS_FLAG",
    "UPGRADE_DETAIL",
    "UPGRADE_MESSAGE",
    "VersionCheckResult",
    "VersionStatus",
    "check_version",
]
