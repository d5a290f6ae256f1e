# topmark:header:start
#
#   project      : ExtReg
#   file         : points.py
#   file_relpath : src/extreg/cli/commands/points.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg `points` command.

Bootstraps the registry and lists every known extension point: documented
points with their description, documentation URL, legacy name and number of
visible extensions, followed by points that only hold registrations.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from extreg.cli.cmd_common import bootstrap_registry, get_console, get_effective_verbosity
from extreg.cli.options import format_option, plugin_options
from extreg.cli.utils import OutputFormat, render_markdown_table
from extreg.constants import EXTREG_VERSION

if TYPE_CHECKING:
    from extreg.registry.registry import ExtensionRegistry


def collect_points(registry: ExtensionRegistry) -> list[dict[str, Any]]:
    """Return one JSON-friendly record per extension point (sorted by name).

    Legacy names are folded into their canonical point. Only documented
    points are queried, so listing never records an undocumented-point warning.
    """
    records: list[dict[str, Any]] = []
    for name in registry.extension_points():
        if registry.canonical_name(name) != name:
            # Legacy alias: its entries are counted under the canonical point.
            continue
        doc = registry.lookup(name)
        if doc is None:
            records.append(
                {
                    "name": name,
                    "documented": False,
                    "description": "",
                    "url": None,
                    "legacy_name": None,
                    "visible": 0,
                    "registered": registry.registered_count(name),
                }
            )
            continue
        registered = registry.registered_count(name)
        if doc.legacy_name and registry.canonical_name(doc.legacy_name) == name:
            registered += registry.registered_count(doc.legacy_name)
        records.append(
            {
                "name": name,
                "documented": True,
                "description": doc.description,
                "url": doc.external_documentation_url,
                "legacy_name": doc.legacy_name,
                "visible": len(registry.extensions_for_point(name)),
                "registered": registered,
            }
        )
    return records


@click.command(
    name="points",
    help="List extension points.",
    epilog="""
Imports the configured plugins (and --plugin modules), then lists every
extension point they documented or registered extensions under.
""",
)
@plugin_options
@format_option
def points_command(
    *,
    plugins: tuple[str, ...] = (),
    load_entry_points: bool | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """List extension points known to the bootstrapped registry.

    Args:
        plugins (tuple[str, ...]): Extra plugin modules to import.
        load_entry_points (bool | None): Override of the entry point setting.
        output_format (OutputFormat | None): Output format (default human output if None).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    registry = bootstrap_registry(ctx, plugins=plugins, load_entry_points=load_entry_points)
    records = collect_points(registry)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(records, indent=2))
        return
    if fmt == OutputFormat.NDJSON:
        for rec in records:
            console.print(json.dumps(rec))
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print("# Extension Points\n")
        console.print(f"ExtReg version **{EXTREG_VERSION}** found {len(records)} point(s):\n")
        rows = [
            [
                f"`{r['name']}`",
                r["description"] if r["documented"] else "*undocumented*",
                f"`{r['legacy_name']}`" if r["legacy_name"] else "",
                str(r["visible"]),
                str(r["registered"]),
                r["url"] or "",
            ]
            for r in records
        ]
        console.print(
            render_markdown_table(
                ["Point", "Description", "Legacy name", "Visible", "Registered", "Docs"],
                rows,
                align={3: "right", 4: "right"},
            )
        )
        return

    if not records:
        if vlevel >= 0:
            console.print("No extension points found.")
        return

    if vlevel > 0:
        console.print(console.styled("Extension points:\n", bold=True, underline=True))
    num_width = len(str(len(records)))
    name_width = max(len(r["name"]) for r in records)
    for idx, r in enumerate(records, start=1):
        prefix = f"{idx:>{num_width}}. {r['name']:<{name_width}}"
        if not r["documented"]:
            note = f"(undocumented, {r['registered']} registered)"
            console.print(f"{prefix} {console.styled(note, fg='yellow')}")
            continue
        counts = f"[{r['visible']}/{r['registered']}]"
        console.print(f"{prefix} {counts} {console.styled(r['description'], dim=True)}")
        if vlevel > 0:
            if r["legacy_name"]:
                console.print(f"      legacy name: {r['legacy_name']}")
            if r["url"]:
                console.print(f"      docs       : {r['url']}")
