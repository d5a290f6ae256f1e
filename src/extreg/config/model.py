# topmark:header:start
#
#   project      : ExtReg
#   file         : model.py
#   file_relpath : src/extreg/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for ExtReg.

The configuration says how a registry is *bootstrapped*: which plugin modules
to import, whether to scan package entry points, and the internal log level.
It never holds extensions itself.

Two classes mirror each other:

* [`RegistryConfig`][extreg.config.model.RegistryConfig]: immutable runtime
  snapshot consumed by [`extreg.registry.discovery.bootstrap`][].
* [`MutableRegistryConfig`][extreg.config.model.MutableRegistryConfig]:
  builder used while loading and merging sources; ``freeze()`` produces the
  snapshot and ``RegistryConfig.thaw()`` goes back.

Precedence (last wins): packaged defaults, the discovered (or explicit)
project file, then CLI/API overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from extreg.config.io import (
    get_bool_value_or_none,
    get_string_list_value,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from extreg.config.logging import get_logger, parse_log_level
from extreg.constants import (
    ENTRYPOINT_GROUP,
    EXTREG_TOML_NAME,
    EXTREG_TOML_TABLE,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_TABLE,
)
from extreg.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from extreg.config.io import TomlTable
    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Immutable bootstrap configuration.

    Attributes:
        log_level (int | None): Internal log level; ``None`` defers to the environment.
        plugins (tuple[str, ...]): Module names imported at bootstrap, in order.
        load_entry_points (bool): Whether to load plugins advertised as entry points.
        entry_point_group (str): Entry point group scanned for plugins.
        config_files (tuple[Path, ...]): Project files this snapshot was built from.
    """

    log_level: int | None = None
    plugins: tuple[str, ...] = ()
    load_entry_points: bool = True
    entry_point_group: str = ENTRYPOINT_GROUP
    config_files: tuple[Path, ...] = ()

    def to_toml_dict(self) -> TomlTable:
        """Return the snapshot as a TOML mapping (``[extreg]`` table)."""
        table: TomlTable = {
            "plugins": list(self.plugins),
            "load_entry_points": self.load_entry_points,
            "entry_point_group": self.entry_point_group,
        }
        if self.log_level is not None:
            table["log_level"] = self.log_level
        return {EXTREG_TOML_TABLE: table}

    def thaw(self) -> MutableRegistryConfig:
        """Return a mutable copy of this frozen config."""
        return MutableRegistryConfig(
            log_level=self.log_level,
            plugins=list(self.plugins),
            load_entry_points=self.load_entry_points,
            entry_point_group=self.entry_point_group,
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------
@dataclass
class MutableRegistryConfig:
    """Mutable configuration used during discovery and merging.

    Tri-state fields (``None``) mean "not set by this source" so that a later
    source only overrides what it actually sets.
    """

    log_level: int | None = None
    plugins: list[str] = field(default_factory=lambda: [])
    load_entry_points: bool | None = None
    entry_point_group: str | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> RegistryConfig:
        """Freeze this builder into an immutable `RegistryConfig`."""
        plugins: list[str] = []
        for name in self.plugins:
            if name not in plugins:
                plugins.append(name)
        return RegistryConfig(
            log_level=self.log_level,
            plugins=tuple(plugins),
            load_entry_points=True if self.load_entry_points is None else self.load_entry_points,
            entry_point_group=self.entry_point_group or ENTRYPOINT_GROUP,
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableRegistryConfig:
        """Load the packaged default configuration."""
        data: TomlTable = load_defaults_dict()
        return cls.from_toml_dict(get_table_value(data, EXTREG_TOML_TABLE))

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        source: Path | None = None,
    ) -> MutableRegistryConfig:
        """Create a draft from the contents of an ``[extreg]`` table.

        Args:
            data (TomlTable): The table contents (not the whole document).
            source (Path | None): File the table was read from, for provenance and errors.

        Returns:
            MutableRegistryConfig: The resulting draft.

        Raises:
            ConfigError: If ``log_level`` is not a known level.
        """
        logger.trace("TOML [extreg] from %s: %s", source or "<dict>", data)
        draft = cls(config_files=[source] if source is not None else [])

        raw_level: Any | None = data.get("log_level")
        if raw_level is not None:
            level = parse_log_level(raw_level if isinstance(raw_level, int) else str(raw_level))
            if level is None:
                raise ConfigError(f"Unknown log_level {raw_level!r}", source=source)
            draft.log_level = level

        draft.plugins = get_string_list_value(data, "plugins")
        draft.load_entry_points = get_bool_value_or_none(data, "load_entry_points")
        draft.entry_point_group = get_string_value_or_none(data, "entry_point_group") or None

        unknown = sorted(
            set(data) - {"log_level", "plugins", "load_entry_points", "entry_point_group"}
        )
        if unknown:
            logger.warning("Ignoring unknown config keys in %s: %s", source, ", ".join(unknown))
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRegistryConfig | None:
        """Load configuration from ``extreg.toml`` or ``pyproject.toml``.

        For ``pyproject.toml`` the ``[tool.extreg]`` table is used; for any
        other file the top-level ``[extreg]`` table.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableRegistryConfig | None: The draft, or ``None`` when the file has
            no ExtReg table.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableRegistryConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            toml_data = get_table_value(toml_data, PYPROJECT_TOOL_TABLE)

        if EXTREG_TOML_TABLE not in toml_data:
            logger.debug("No [%s] table in %s", EXTREG_TOML_TABLE, path)
            return None
        table: Any = toml_data[EXTREG_TOML_TABLE]
        if not isinstance(table, dict):
            raise ConfigError(f"[{EXTREG_TOML_TABLE}] must be a table", source=path)
        return cls.from_toml_dict(table, source=path)

    @classmethod
    def discover_config_file(cls, start: Path) -> Path | None:
        """Return the nearest project config file at or above ``start``.

        In each directory ``extreg.toml`` is preferred; ``pyproject.toml``
        only counts when it holds a ``[tool.extreg]`` table.
        """
        anchor = start.resolve()
        if anchor.is_file():
            anchor = anchor.parent
        for directory in (anchor, *anchor.parents):
            candidate = directory / EXTREG_TOML_NAME
            if candidate.is_file():
                return candidate
            pyproject = directory / PYPROJECT_TOML_NAME
            if pyproject.is_file():
                data = load_toml_dict(pyproject)
                if EXTREG_TOML_TABLE in get_table_value(data, PYPROJECT_TOOL_TABLE):
                    return pyproject
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        config_file: Path | None = None,
        start: Path | None = None,
        no_discovery: bool = False,
    ) -> MutableRegistryConfig:
        """Return defaults merged with a project config file.

        Args:
            config_file (Path | None): Explicit config file; skips discovery.
            start (Path | None): Directory to discover from (defaults to the CWD).
            no_discovery (bool): When True and no explicit file is given, use the
                defaults only.

        Returns:
            MutableRegistryConfig: The merged draft.

        Raises:
            ConfigError: If the explicit file does not exist, has no ExtReg table,
                or any loaded file is malformed.
        """
        draft = cls.from_defaults()

        path: Path | None = config_file
        if path is not None:
            if not path.is_file():
                raise ConfigError("Config file not found", source=path)
        elif not no_discovery:
            path = cls.discover_config_file(start or Path.cwd())

        if path is None:
            return draft
        loaded = cls.from_toml_file(path)
        if loaded is None:
            if config_file is not None:
                raise ConfigError(f"No [{EXTREG_TOML_TABLE}] table found", source=path)
            return draft
        return draft.merge_with(loaded)

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableRegistryConfig) -> MutableRegistryConfig:
        """Return a new draft where values set in ``other`` override this draft.

        ``plugins`` accumulate (this draft's first); duplicates are dropped on
        freeze.
        """
        return MutableRegistryConfig(
            log_level=other.log_level if other.log_level is not None else self.log_level,
            plugins=self.plugins + other.plugins,
            load_entry_points=other.load_entry_points
            if other.load_entry_points is not None
            else self.load_entry_points,
            entry_point_group=other.entry_point_group or self.entry_point_group,
            config_files=self.config_files + other.config_files,
        )

    def apply_overrides(self, args: Mapping[str, Any]) -> MutableRegistryConfig:
        """Apply CLI/API overrides in place and return ``self``.

        Recognized keys: ``plugins`` (appended), ``load_entry_points`` and
        ``log_level``; ``None`` values are ignored.
        """
        plugins = args.get("plugins")
        if plugins:
            self.plugins.extend(plugins)
        if args.get("load_entry_points") is not None:
            self.load_entry_points = bool(args["load_entry_points"])
        if args.get("log_level") is not None:
            self.log_level = int(args["log_level"])
        return self
