# topmark:header:start
#
#   project      : ExtReg
#   file         : main.py
#   file_relpath : src/extreg/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Entry point of the ``extreg`` CLI.

Group-level options (verbosity, config file, color) are resolved once in the
group callback and placed into ``ctx.obj``; subcommands read them from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from extreg.cli.commands.config import config_command
from extreg.cli.commands.extensions import extensions_command
from extreg.cli.commands.points import points_command
from extreg.cli.commands.version import version_command
from extreg.cli.console import ClickConsole
from extreg.cli.errors import ExtregConfigError
from extreg.cli.options import common_config_options, common_verbose_options, resolve_verbosity
from extreg.config.logging import get_logger, resolve_env_log_level, setup_logging
from extreg.config.model import MutableRegistryConfig
from extreg.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    config_file: Path | None,
    no_config: bool,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, config, logging, console) on the Click context.

    Raises:
        ExtregConfigError: If the configuration cannot be loaded.
    """
    ctx.obj = ctx.obj or {}
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    console = ClickConsole(enable_color=not no_color)
    ctx.obj["console"] = console
    ctx.color = not no_color

    try:
        draft = MutableRegistryConfig.load_merged(
            config_file=config_file,
            no_discovery=no_config,
        )
    except ConfigError as exc:
        raise ExtregConfigError(str(exc)) from exc
    ctx.obj["config"] = draft

    # Internal logging: the environment wins over the config file.
    level = resolve_env_log_level()
    if level is None:
        level = draft.log_level
    ctx.obj["log_level"] = level
    setup_logging(level=level)
    logger.debug(
        "CLI state: verbosity=%d, config files=%s",
        ctx.obj["verbosity_level"],
        [str(p) for p in draft.config_files],
    )


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ExtReg CLI: inspect extension points and the extensions plugins contribute.",
)
@common_verbose_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    config_file: Path | None,
    no_config: bool,
    no_color: bool,
) -> None:
    """Entry point for the ExtReg CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        config_file=config_file,
        no_config=no_config,
        no_color=no_color,
    )
    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        console.print("Hint: use 'extreg points' to list extension points.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(points_command)

cli.add_command(extensions_command)

if __name__ == "__main__":
    cli()
