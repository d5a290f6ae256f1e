# topmark:header:start
#
#   project      : ExtReg
#   file         : version.py
#   file_relpath : src/extreg/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg `version` command.

Prints the ExtReg version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from extreg.cli.cmd_common import get_console, get_effective_verbosity
from extreg.cli.options import format_option
from extreg.cli.utils import OutputFormat
from extreg.constants import EXTREG_VERSION


@click.command(
    name="version",
    help="Show the current version of ExtReg.",
)
@format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of ExtReg.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        console.print(json.dumps({"version": EXTREG_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# ExtReg Version\n")
        console.print(f"**ExtReg version: {EXTREG_VERSION}**")
    elif vlevel > 0:
        console.print(console.styled("ExtReg version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(EXTREG_VERSION, bold=True)}")
    else:
        console.print(console.styled(EXTREG_VERSION, bold=True))
