# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the adapter."""

from __future__ import annotations


class AdapterError(Exception):
    """Base class for errors raised by the ansible-lint adapter."""


class ConfigError(AdapterError):
    """Raised when configuration input is invalid."""


__all__ = ["AdapterError", "ConfigError"]
