# topmark:header:start
#
#   project      : ExtReg
#   file         : config.py
#   file_relpath : src/extreg/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg `config` command.

Prints the effective bootstrap configuration (packaged defaults merged with
the discovered or explicit project file) as TOML, ready to be saved as
``extreg.toml`` or, with ``--pyproject``, pasted into ``pyproject.toml``.
"""

from __future__ import annotations

import json

import click

from extreg.cli.cmd_common import get_console, get_effective_verbosity, resolve_config
from extreg.cli.options import format_option
from extreg.cli.utils import OutputFormat
from extreg.config.io import nest_toml_under_section, to_toml
from extreg.constants import PYPROJECT_TOOL_TABLE


@click.command(
    name="config",
    help="Show the effective configuration.",
)
@click.option(
    "--pyproject",
    is_flag=True,
    default=False,
    help="Render the table as [tool.extreg] for pyproject.toml.",
)
@format_option
def config_command(*, pyproject: bool = False, output_format: OutputFormat | None = None) -> None:
    """Show the effective configuration.

    Args:
        pyproject (bool): Nest the TOML output under ``[tool]``.
        output_format (OutputFormat | None): ``json``/``ndjson`` emit the table as JSON;
            any other format emits TOML.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    config = resolve_config(ctx)
    toml_dict = config.to_toml_dict()
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt.is_machine:
        doc = dict(toml_dict)
        doc["config_files"] = [str(p) for p in config.config_files]
        console.print(json.dumps(doc, indent=2 if fmt == OutputFormat.JSON else None))
        return

    text = to_toml(toml_dict)
    if pyproject:
        text = nest_toml_under_section(text, PYPROJECT_TOOL_TABLE)
    if vlevel > 0:
        sources = ", ".join(str(p) for p in config.config_files) or "built-in defaults"
        console.print(f"# Sources: {sources}")
    console.print(text, nl=False)
