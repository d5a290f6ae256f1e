# topmark:header:start
#
#   project      : ExtReg
#   file         : test_version.py
#   file_relpath : tests/cli/test_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: `version` command output."""

from __future__ import annotations

import json

from extreg.constants import EXTREG_VERSION
from tests.cli.conftest import assert_SUCCESS, run_cli
from tests.conftest import mark_cli


@mark_cli
def test_version_outputs_version() -> None:
    """It should output the installed version string exactly."""
    result = run_cli(["--no-color", "--no-config", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == EXTREG_VERSION


@mark_cli
def test_version_json_format() -> None:
    """`version --format json` returns parseable JSON."""
    result = run_cli(["--no-config", "version", "--format", "json"])

    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": EXTREG_VERSION}


@mark_cli
def test_version_markdown_and_verbose() -> None:
    markdown = run_cli(["--no-config", "version", "--format", "markdown"])
    verbose = run_cli(["--no-color", "--no-config", "-v", "version"])

    assert_SUCCESS(markdown)
    assert markdown.output.startswith("# ExtReg Version")
    assert_SUCCESS(verbose)
    assert "ExtReg version:" in verbose.output
    assert EXTREG_VERSION in verbose.output


@mark_cli
def test_group_without_command_prints_help() -> None:
    result = run_cli(["--no-config"])

    assert_SUCCESS(result)
    assert "Hint: use 'extreg points'" in result.output
    assert "extensions" in result.output
