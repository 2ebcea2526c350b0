# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model for ansible-lint invocations."""

from __future__ import annotations

import re
from re import Pattern
from typing import Any, Final

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigError

DEFAULT_EXECUTABLE: Final[str] = "ansible-lint"
DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
PROJECT_CONFIG_FILENAME: Final[str] = ".ansible-lint"

# Option names used by the editor package settings.
HOST_OPTION_NAMES: Final[dict[str, str]] = {
    "ansibleLintExecutablePath": "executable_path",
    "rulesDirDefault": "rules_dir_default",
    "rulesDirs": "rules_dirs",
    "excludeDirs": "exclude_dirs",
    "useProjectConfig": "use_project_config",
    "blacklist": "blacklist",
    "ruleSkips": "rule_skips",
    "timeout": "timeout",
    "displaySeverity": "display_severity",
}


def _host_alias(field_name: str) -> AliasChoices:
    host_names = [host for host, name in HOST_OPTION_NAMES.items() if name == field_name and host != field_name]
    return AliasChoices(field_name, *host_names)


class LinterConfig(BaseModel):
    """Options controlling a single ansible-lint invocation.

    Instances are immutable; callers build a new config for every change.
    The blacklist expression is compiled during validation so a malformed
    pattern is reported once at load time instead of on every lint.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    executable_path: str = Field(default=DEFAULT_EXECUTABLE, validation_alias=_host_alias("executable_path"))
    rule_skips: str = Field(default="", validation_alias=_host_alias("rule_skips"))
    rules_dirs: tuple[str, ...] = Field(default=("",), validation_alias=_host_alias("rules_dirs"))
    rules_dir_default: bool = Field(default=False, validation_alias=_host_alias("rules_dir_default"))
    exclude_dirs: tuple[str, ...] = Field(default=("",), validation_alias=_host_alias("exclude_dirs"))
    use_project_config: bool = Field(default=False, validation_alias=_host_alias("use_project_config"))
    blacklist: str = Field(default="", validation_alias=_host_alias("blacklist"))
    display_severity: bool = Field(default=False, validation_alias=_host_alias("display_severity"))
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, validation_alias=_host_alias("timeout"))

    _blacklist_pattern: Pattern[str] | None = PrivateAttr(default=None)

    @field_validator("executable_path", mode="before")
    @classmethod
    def _default_executable(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_EXECUTABLE
        return value

    @field_validator("rule_skips", mode="before")
    @classmethod
    def _coerce_rule_skips(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ",".join(str(item).strip() for item in value if str(item).strip())
        return value

    @field_validator("rules_dirs", "exclude_dirs", mode="before")
    @classmethod
    def _coerce_directories(cls, value: object) -> object:
        if value is None:
            return ("",)
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, tuple)) and not value:
            return ("",)
        return value

    @model_validator(mode="after")
    def _compile_blacklist(self) -> LinterConfig:
        """Compile the blacklist expression for reuse by the gate."""
        if not self.blacklist:
            self._blacklist_pattern = None
            return self
        try:
            self._blacklist_pattern = re.compile(self.blacklist)
        except re.error as exc:
            raise ValueError(f"invalid blacklist pattern {self.blacklist!r}: {exc}") from exc
        return self

    @property
    def blacklist_pattern(self) -> Pattern[str] | None:
        """Return the compiled blacklist expression, if one is configured."""

        return self._blacklist_pattern

    @property
    def has_rules_dirs(self) -> bool:
        """Return ``True`` when additional rules directories are configured."""

        return bool(self.rules_dirs) and self.rules_dirs[0] != ""

    @property
    def has_exclude_dirs(self) -> bool:
        """Return ``True`` when exclude directories are configured."""

        return bool(self.exclude_dirs) and self.exclude_dirs[0] != ""

    @property
    def timeout_ms(self) -> int:
        """Return the configured timeout in milliseconds."""

        return int(self.timeout * 1000)


def build_config(data: dict[str, Any]) -> LinterConfig:
    """Validate ``data`` into a :class:`LinterConfig`.

    Args:
        data: Raw option mapping using snake_case or editor option names.

    Returns:
        LinterConfig: Validated configuration.

    Raises:
        ConfigError: If any option is invalid.
    """

    try:
        return LinterConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "DEFAULT_EXECUTABLE",
    "DEFAULT_TIMEOUT_SECONDS",
    "HOST_OPTION_NAMES",
    "PROJECT_CONFIG_FILENAME",
    "ConfigError",
    "LinterConfig",
    "build_config",
]
