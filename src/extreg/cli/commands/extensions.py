# topmark:header:start
#
#   project      : ExtReg
#   file         : extensions.py
#   file_relpath : src/extreg/cli/commands/extensions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg `extensions` command.

Bootstraps the registry and prints the extensions a query for one point
returns (validator-gated, legacy aliases merged), together with the
diagnostics that query raised.
"""

from __future__ import annotations

import json

import click

from extreg.cli.cmd_common import bootstrap_registry, get_console, get_effective_verbosity
from extreg.cli.errors import ExtregCliError
from extreg.cli.options import format_option, plugin_options
from extreg.cli.utils import OutputFormat, render_markdown_table, short_repr


@click.command(
    name="extensions",
    help="Show the extensions visible for an extension point.",
)
@click.argument("point")
@plugin_options
@format_option
def extensions_command(
    *,
    point: str,
    plugins: tuple[str, ...] = (),
    load_entry_points: bool | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the extensions visible for ``point``.

    Args:
        point (str): Extension point name (canonical or legacy).
        plugins (tuple[str, ...]): Extra plugin modules to import.
        load_entry_points (bool | None): Override of the entry point setting.
        output_format (OutputFormat | None): Output format (default human output if None).

    Raises:
        ExtregCliError: If no plugin documented or registered anything under ``point``.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    registry = bootstrap_registry(ctx, plugins=plugins, load_entry_points=load_entry_points)
    canonical = registry.canonical_name(point)
    if canonical == point and point not in registry.extension_points():
        raise ExtregCliError(f"Unknown extension point: {point}")

    seen = len(registry.diagnostics)
    payloads = registry.extensions_for_point(point)
    raised = list(registry.diagnostics)[seen:]
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt.is_machine:
        doc = {
            "point": point,
            "canonical": canonical,
            "extensions": [short_repr(p, limit=1000) for p in payloads],
            "diagnostics": [{"level": d.level.value, "message": d.message} for d in raised],
        }
        if fmt == OutputFormat.JSON:
            console.print(json.dumps(doc, indent=2))
        else:
            console.print(json.dumps(doc))
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print(f"# Extensions for `{canonical}`\n")
        rows = [[str(i), f"`{short_repr(p)}`"] for i, p in enumerate(payloads, start=1)]
        console.print(render_markdown_table(["#", "Extension"], rows, align={0: "right"}))
    else:
        if vlevel > 0:
            title = canonical if canonical == point else f"{canonical} (via {point})"
            console.print(console.styled(f"Extensions for {title}:\n", bold=True, underline=True))
        num_width = len(str(len(payloads)))
        for idx, payload in enumerate(payloads, start=1):
            console.print(f"{idx:>{num_width}}. {short_repr(payload)}")
        if not payloads and vlevel >= 0:
            console.print("No visible extensions.")

    if vlevel >= 0:
        for diag in raised:
            console.warn(f"[{diag.level.value}] {diag.message}")
