# topmark:header:start
#
#   project      : ExtReg
#   file         : options.py
#   file_relpath : src/extreg/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, plugin selection, output
format) and their resolution logic, so the group and commands stay thin.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from extreg.cli.cli_types import EnumChoiceParam
from extreg.cli.errors import ExtregUsageError
from extreg.cli.utils import OutputFormat

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times ``-v`` was passed.
        quiet_count: Number of times ``-q`` was passed.

    Returns:
        ``-1`` when quiet, otherwise the number of ``-v`` flags (``0`` = terse).

    Raises:
        ExtregUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ExtregUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the mutually exclusive ``-v/--verbose`` and ``-q/--quiet`` counters."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config``, ``--no-config`` and ``--no-color``."""
    f = click.option(
        "--config",
        "config_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Read settings from this TOML file instead of discovering one.",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        default=False,
        help="Ignore extreg.toml / pyproject.toml; use built-in defaults.",
    )(f)
    f = click.option(
        "--no-color",
        is_flag=True,
        default=False,
        help="Disable colored output.",
    )(f)
    return f


def plugin_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--plugin`` and ``--entry-points/--no-entry-points``."""
    f = click.option(
        "--plugin",
        "plugins",
        multiple=True,
        metavar="MODULE",
        help="Import this plugin module before listing (repeatable).",
    )(f)
    f = click.option(
        "--entry-points/--no-entry-points",
        "load_entry_points",
        default=None,
        help="Load (or skip) plugins advertised as 'extreg.plugins' entry points.",
    )(f)
    return f


def format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format`` taking an `OutputFormat`."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
