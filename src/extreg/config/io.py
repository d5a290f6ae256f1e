# topmark:header:start
#
#   project      : ExtReg
#   file         : io.py
#   file_relpath : src/extreg/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight TOML I/O helpers for ExtReg configuration.

This module centralizes **pure** helpers for reading and writing the TOML
used by the configuration layer, so the model classes stay focused on merge
policy.

Typical flow:
    1. Load the packaged defaults (``load_defaults_dict``).
    2. Load a project file (``load_toml_dict``), either ``extreg.toml`` or the
       ``[tool.extreg]`` table of ``pyproject.toml``.
    3. Inspect values with the typed getters (``get_table_value``, ...).
    4. Serialize back to TOML when needed (``to_toml``), optionally nested
       under ``[tool.extreg]`` for inclusion into ``pyproject.toml``
       (``nest_toml_under_section``).

Notes:
    - Parsing and plain dumping use `toml`; `tomlkit` is only used where the
      layout of an existing document must be preserved.
    - Unlike plain getters, the loaders raise
      [`ConfigError`][extreg.errors.ConfigError] on unreadable or malformed files.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from extreg.config.logging import get_logger
from extreg.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE
from extreg.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)

TomlTable = dict[str, Any]

__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "get_string_list_value",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Numbers and booleans are coerced with ``str(...)``; anything else yields ``None``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The extracted or coerced string, or ``None`` when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table (integers are coerced)."""
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_string_list_value(table: TomlTable, key: str) -> list[str]:
    """Extract a list of strings from a TOML table.

    A bare string is accepted as a one-element list. Non-string items are
    dropped with a warning.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        list[str]: The string items, or an empty list when the key is missing.
    """
    value: Any | None = table.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        logger.warning("Ignoring non-list value for %r: %r", key, value)
        return []
    out: list[str] = []
    for item in value:
        if isinstance(item, str) and item:
            out.append(item)
        else:
            logger.warning("Ignoring non-string item in %r: %r", key, item)
    return out


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Raises:
        RuntimeError: If the bundled default config resource cannot be read or
            parsed as TOML.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        text: str = resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc

    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc

    return data


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``extreg.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        return toml.load(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}", source=path) from exc
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Invalid TOML: {exc}", source=path) from exc


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string."""
    return toml.dumps(toml_dict)


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    r"""Return ``toml_doc`` nested under a dotted section path.

    For example ``nest_toml_under_section("[extreg]\\nplugins = []\\n", "tool")``
    yields a document equivalent to:

        [tool.extreg]
        plugins = []

    Comments and layout of the original document are preserved because the
    tomlkit items are re-used when constructing the nested table.

    Args:
        toml_doc (str): Original TOML document to nest.
        section_keys (str): Dotted section path such as ``"tool"``.

    Returns:
        str: The nested TOML document.

    Raises:
        ValueError: If ``section_keys`` holds no non-empty component.
        ConfigError: If the document cannot be parsed, or an existing key on the
            path is not a table.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise ConfigError(f"Error parsing TOML document: {exc}") from exc

    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    current: tomlkit.TOMLDocument | Table = new_doc
    for key in keys:
        if key not in current:
            current.add(key, tomlkit.table())
        nxt = current[key]
        if not isinstance(nxt, Table):
            raise ConfigError(
                f"Cannot nest configuration under [{section_keys}]: [{key}] is not a table."
            )
        current = nxt

    for item_key, item_value in doc.items():
        current.add(item_key, item_value)
    return new_doc.as_string()
