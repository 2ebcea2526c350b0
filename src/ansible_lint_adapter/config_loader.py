# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading utilities with layered precedence."""

from __future__ import annotations

import logging
import os
import re
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final, Protocol, runtime_checkable

from .config import HOST_OPTION_NAMES, LinterConfig, build_config
from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "ansible-lint-adapter"
CONFIG_FILENAME: Final[str] = ".ansible-lint-adapter.toml"

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")
_RAW_KEYS: Final[frozenset[str]] = frozenset({"blacklist"})


@runtime_checkable
class ConfigSource(Protocol):
    """Source of a raw configuration fragment."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment provided by the source."""
        ...

    def describe(self) -> str:
        """Return a human-readable description of the source."""
        ...


class DefaultConfigSource:
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return LinterConfig().model_dump()

    def describe(self) -> str:
        return "Built-in defaults"


class MappingConfigSource:
    """Expose an in-memory mapping, e.g. the editor's settings store."""

    def __init__(self, data: Mapping[str, Any], *, name: str = "overrides") -> None:
        self._data = dict(data)
        self.name = name

    def load(self) -> Mapping[str, Any]:
        return {key: value for key, value in self._data.items() if value is not None}

    def describe(self) -> str:
        return f"In-memory settings ({self.name})"


class TomlConfigSource:
    """Load configuration data from a TOML document."""

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = path
        self.name = name or str(path)
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc}") from exc
        return _expand_env(self._select(data), self._env)

    def _select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return data

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.ansible-lint-adapter]`` within ``pyproject.toml``."""

    def _select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return section

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


class ConfigLoader:
    """Merge configuration sources in order; later sources win."""

    def __init__(self, sources: Sequence[ConfigSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        user_config: Path | None = None,
        config_file: Path | None = None,
    ) -> ConfigLoader:
        """Build a loader that respects user, project, and default sources.

        Args:
            project_root: Workspace root used to discover configuration files.
            user_config: Optional path to a user-level configuration file.
            config_file: Optional explicit configuration file applied last.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        home_config = user_config if user_config is not None else Path.home() / CONFIG_FILENAME
        sources: list[ConfigSource] = [DefaultConfigSource(), TomlConfigSource(home_config)]
        pyproject = root / "pyproject.toml"
        if pyproject.exists():
            sources.append(PyProjectConfigSource(pyproject))
        sources.append(TomlConfigSource(root / CONFIG_FILENAME))
        if config_file is not None:
            if not config_file.exists():
                raise ConfigError(f"Configuration file {config_file} does not exist")
            sources.append(TomlConfigSource(config_file))
        return cls(sources)

    def with_source(self, source: ConfigSource) -> ConfigLoader:
        """Return a new loader with ``source`` appended at highest precedence."""

        return ConfigLoader([*self._sources, source])

    def load(self) -> LinterConfig:
        """Merge every source and validate the result.

        Raises:
            ConfigError: If a source cannot be read or the merged values are invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if fragment:
                LOGGER.debug("applying configuration from %s", source.describe())
            merged.update(_canonical_keys(fragment))
        return build_config(merged)


def _canonical_keys(fragment: Mapping[str, Any]) -> dict[str, Any]:
    normalised: dict[str, Any] = {}
    for key, value in fragment.items():
        name = HOST_OPTION_NAMES.get(key, key).replace("-", "_")
        normalised[name] = value
    return normalised


def _expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    # regular expressions keep their literal $ anchors
    return {
        key: value if key in _RAW_KEYS else _expand_env_value(value, env) for key, value in data.items()
    }


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


__all__ = [
    "CONFIG_FILENAME",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "MappingConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
]
