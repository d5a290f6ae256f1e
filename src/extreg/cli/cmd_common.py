# topmark:header:start
#
#   project      : ExtReg
#   file         : cmd_common.py
#   file_relpath : src/extreg/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by CLI commands: context access and registry bootstrap."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from extreg.cli.errors import ExtregConfigError
from extreg.config.logging import get_logger
from extreg.errors import ConfigError
from extreg.registry.discovery import bootstrap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from extreg.cli.console import ConsoleLike
    from extreg.config.logging import ExtregLogger
    from extreg.config.model import MutableRegistryConfig, RegistryConfig
    from extreg.registry.registry import ExtensionRegistry

logger: ExtregLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console installed by the ``extreg`` group."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (``-1`` quiet, ``0`` terse, ``>0`` verbose)."""
    return int(ctx.obj.get("verbosity_level", 0))


def resolve_config(
    ctx: click.Context,
    *,
    plugins: Sequence[str] = (),
    load_entry_points: bool | None = None,
) -> RegistryConfig:
    """Apply command-level overrides to the group's config and freeze it."""
    draft: MutableRegistryConfig = ctx.obj["config"]
    return (
        draft.freeze()
        .thaw()
        .apply_overrides({"plugins": list(plugins), "load_entry_points": load_entry_points})
        .freeze()
    )


def bootstrap_registry(
    ctx: click.Context,
    *,
    plugins: Sequence[str] = (),
    load_entry_points: bool | None = None,
) -> ExtensionRegistry:
    """Populate the default registry for a command.

    Raises:
        ExtregConfigError: If the configuration cannot be applied.
    """
    try:
        config = resolve_config(ctx, plugins=plugins, load_entry_points=load_entry_points)
    except ConfigError as exc:
        raise ExtregConfigError(str(exc)) from exc
    logger.debug("Bootstrapping registry with %s", config)
    return bootstrap(config)
