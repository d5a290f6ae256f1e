# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ExtReg.

Bootstrap settings are read from ``extreg.toml`` or the ``[tool.extreg]``
table of ``pyproject.toml`` and merged over packaged defaults. Logging setup
lives in [`extreg.config.logging`][].
"""

from __future__ import annotations

from extreg.config.model import MutableRegistryConfig, RegistryConfig

__all__ = [
    "MutableRegistryConfig",
    "RegistryConfig",
]
