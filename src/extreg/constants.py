# topmark:header:start
#
#   project      : ExtReg
#   file         : constants.py
#   file_relpath : src/extreg/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    EXTREG_VERSION: str = get_version("extreg")
except PackageNotFoundError:
    EXTREG_VERSION = "0.0.0"

# Entry point group scanned for plugin modules / setup callables.
ENTRYPOINT_GROUP: str = "extreg.plugins"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "EXTREG_LOG_LEVEL"

# Configuration file names and tables.
DEFAULT_TOML_CONFIG_PACKAGE: str = "extreg.config"
DEFAULT_TOML_CONFIG_NAME: str = "extreg-default.toml"
EXTREG_TOML_NAME: str = "extreg.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"
EXTREG_TOML_TABLE: str = "extreg"
PYPROJECT_TOOL_TABLE: str = "tool"

# Host store extension point (reducers + undo actions).
STORE_EXTENSION_POINT: str = "org.visallo.store"
