# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol, runtime_checkable

from .models import RawToolOutput

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = True

    def with_overrides(self, **overrides: object) -> CommandOptions:
        """Return a copy of the options with ``overrides`` applied.

        Raises:
            TypeError: If an unknown option name is supplied.
            ValueError: When a timeout override is negative.
        """

        unknown = sorted(key for key in overrides if key not in self.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown command option(s): {', '.join(unknown)}")
        timeout = overrides.get("timeout", self.timeout)
        if isinstance(timeout, (int, float)) and timeout < 0:
            raise ValueError("timeout override must be non-negative")
        return replace(self, **overrides)  # type: ignore[arg-type]


class CommandTimeoutError(RuntimeError):
    """Raised when a subprocess does not finish within its timeout."""

    def __init__(self, command: Sequence[str], timeout: float, stdout: str, stderr: str) -> None:
        super().__init__(f"Command '{command[0]}' timed out after {timeout:.1f}s")
        self.command = tuple(command)
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text when supplied as ``bytes``."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode("utf-8", errors="replace")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    A non-zero exit status is returned to the caller, never raised. Text
    output is decoded as UTF-8 with undecodable bytes replaced.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        CommandTimeoutError: When the process exceeds ``options.timeout``.
    """

    normalized = _normalize_args(args)
    resolved = options or CommandOptions()

    try:
        # Bandit: commands are built from validated configuration; no shell expansion.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(resolved.cwd) if resolved.cwd is not None else None,
            env=dict(resolved.env) if resolved.env is not None else None,
            check=False,
            capture_output=resolved.capture_output,
            text=resolved.text,
            encoding="utf-8" if resolved.text else None,
            errors="replace" if resolved.text else None,
            timeout=resolved.timeout,
            stdin=subprocess.DEVNULL if resolved.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(
            normalized,
            resolved.timeout or 0.0,
            _ensure_text(exc.stdout),
            _ensure_text(exc.stderr),
        ) from exc

    return completed


LINTER_OPTIONS = CommandOptions()


@runtime_checkable
class ProcessInvoker(Protocol):
    """Callable that runs ansible-lint and captures its output."""

    def __call__(
        self,
        executable: str,
        args: Sequence[str],
        *,
        cwd: Path,
        timeout_ms: int,
    ) -> RawToolOutput:
        """Run ``executable`` with ``args`` and return the captured output."""
        raise NotImplementedError


def invoke_linter(
    executable: str,
    args: Sequence[str],
    *,
    cwd: Path,
    timeout_ms: int,
) -> RawToolOutput:
    """Run ansible-lint without failing on a non-zero exit status.

    Spawn errors and timeouts are reported through ``RawToolOutput.failure``
    rather than raised.
    """

    options = LINTER_OPTIONS.with_overrides(cwd=cwd, timeout=timeout_ms / 1000)
    command = [executable, *args]
    LOGGER.debug("running %s in %s", command, cwd)
    try:
        completed = run_command(command, options=options)
    except CommandTimeoutError as exc:
        return RawToolOutput(stdout=exc.stdout, stderr=exc.stderr, failure=str(exc))
    except FileNotFoundError as exc:
        return RawToolOutput(failure=f"Failed to spawn command `{executable}`: {exc}")
    except OSError as exc:
        return RawToolOutput(failure=f"Failed to run `{executable}`: {exc}")
    return RawToolOutput(
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
        returncode=completed.returncode,
    )


__all__ = [
    "CommandOptions",
    "CommandTimeoutError",
    "ProcessInvoker",
    "invoke_linter",
    "run_command",
]
