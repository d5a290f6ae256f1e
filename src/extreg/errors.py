# topmark:header:start
#
#   project      : ExtReg
#   file         : errors.py
#   file_relpath : src/extreg/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the extension registry.

Only argument validation raises; every other anomaly (undocumented points,
validator rejections, renamed points, failing listeners or plugins) is logged
and recorded as a diagnostic instead.
"""

from __future__ import annotations


class ExtensionRegistryError(Exception):
    """Base class for all ExtReg errors."""


class InvalidArgumentError(ExtensionRegistryError, ValueError):
    """A registry call was made with a missing or malformed argument."""


class ConfigError(ExtensionRegistryError):
    """A configuration source is missing, unreadable or malformed.

    Attributes:
        message: The error text, without the source prefix.
        source: The file (or identifier) that failed to load, if known.
    """

    def __init__(self, message: str, *, source: object | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"{self.source}: {self.message}"
