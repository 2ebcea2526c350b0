# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the ansible-lint adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import LinterConfig
from .severity import Severity


class Position(BaseModel):
    """Zero-based ``(line, column)`` coordinate inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    column: int = Field(ge=0)

    @classmethod
    def from_one_based(cls, line: int, column: int = 1) -> Position:
        """Convert tool-reported 1-based coordinates, clamping at zero."""

        return cls(line=max(line - 1, 0), column=max(column - 1, 0))

    def as_list(self) -> list[int]:
        """Return the position in the ``[line, column]`` host layout."""

        return [self.line, self.column]


class Range(BaseModel):
    """Half-open span between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @model_validator(mode="after")
    def _check_order(self) -> Range:
        if (self.end.line, self.end.column) < (self.start.line, self.start.column):
            raise ValueError("range end must not precede range start")
        return self

    @classmethod
    def on_line(cls, line: int, column: int = 0, *, width: int = 1) -> Range:
        """Return a span of ``width`` columns starting at zero-based ``(line, column)``."""

        return cls(
            start=Position(line=line, column=column),
            end=Position(line=line, column=column + width),
        )

    @classmethod
    def file_start(cls) -> Range:
        """Return the ``(0, 0)-(0, 1)`` span used for file-level findings."""

        return cls.on_line(0)

    def as_list(self) -> list[list[int]]:
        """Return the range in the ``[[line, col], [line, col]]`` host layout."""

        return [self.start.as_list(), self.end.as_list()]


class Diagnostic(BaseModel):
    """Normalised finding handed to the host editor."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    excerpt: str
    file: str
    range: Range
    code: str | None = None

    def to_host_dict(self) -> dict[str, Any]:
        """Return the message layout consumed by editor linter front-ends."""

        payload: dict[str, Any] = {
            "severity": self.severity.value,
            "excerpt": self.excerpt,
            "location": {"file": self.file, "position": self.range.as_list()},
        }
        if self.code is not None:
            payload["code"] = self.code
        return payload


class InvocationRequest(BaseModel):
    """Single lint request for one target file."""

    model_config = ConfigDict(frozen=True)

    target_file: Path
    working_directory: Path | None = None
    config: LinterConfig = Field(default_factory=LinterConfig)
    project_root: Path | None = None

    @field_validator("target_file", mode="after")
    @classmethod
    def _absolute_target(cls, value: Path) -> Path:
        # the linter runs inside the target's directory
        return value.resolve()

    @model_validator(mode="after")
    def _default_working_directory(self) -> InvocationRequest:
        if self.working_directory is None:
            # frozen models only allow assignment through object.__setattr__
            object.__setattr__(self, "working_directory", self.target_file.parent)
        return self

    @property
    def cwd(self) -> Path:
        """Return the directory the linter executes in."""

        return self.working_directory or self.target_file.parent


class RawToolOutput(BaseModel):
    """Captured output of one ansible-lint execution."""

    model_config = ConfigDict(frozen=True)

    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    failure: str | None = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the run must go through failure classification."""

        return bool(self.failure) or bool(self.stderr.strip())

    @property
    def error_text(self) -> str:
        """Return the text inspected by the failure classifier."""

        if self.failure and self.stderr.strip():
            return f"{self.stderr}\n{self.failure}"
        return self.failure or self.stderr


__all__ = [
    "Diagnostic",
    "InvocationRequest",
    "Position",
    "Range",
    "RawToolOutput",
]
