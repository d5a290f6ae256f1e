# topmark:header:start
#
#   project      : ExtReg
#   file         : errors.py
#   file_relpath : src/extreg/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the ExtReg CLI.

Raise these in commands to signal errors with standardized messages and exit
codes. They prefer the project console when one is attached to the Click
context (see `show()`), and fall back to Click's default display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from extreg.cli.exit_codes import ExitCode


class ExtregCliError(click.ClickException):
    """Base class for all ExtReg CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized later by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class ExtregUsageError(ExtregCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ExtregConfigError(ExtregCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR
