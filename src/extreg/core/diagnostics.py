# topmark:header:start
#
#   project      : ExtReg
#   file         : diagnostics.py
#   file_relpath : src/extreg/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics recorded by a registry.

Soft anomalies never raise: an undocumented point, a validator rejection or a
renamed point degrades to an empty or partial result. Each such event is
logged and also appended to the registry's [`DiagnosticLog`][extreg.core.diagnostics.DiagnosticLog]
so callers (the CLI, tests) can inspect what happened without scraping logs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from extreg.config.logging import get_logger

if TYPE_CHECKING:
    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for registry diagnostics.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, a message and the point it concerns."""

    level: DiagnosticLevel
    message: str
    point: str | None = None


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


def compute_diagnostic_stats(diags: Sequence[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics."""
    n_info: int = sum(1 for d in diags if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in diags if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in diags if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics owned by one registry.

    Diagnostics are kept in insertion order until
    [`clear`][extreg.core.diagnostics.DiagnosticLog.clear] is called (a registry
    clears its log together with its state).
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str, *, point: str | None = None) -> None:
        """Add an ``info`` diagnostic.

        Args:
            message: The diagnostic message.
            point: The extension point the diagnostic concerns, if any.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, message, point))

    def add_warning(self, message: str, *, point: str | None = None) -> None:
        """Add a ``warning`` diagnostic.

        Args:
            message: The diagnostic message.
            point: The extension point the diagnostic concerns, if any.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, message, point))

    def add_error(self, message: str, *, point: str | None = None) -> None:
        """Add an ``error`` diagnostic.

        Args:
            message: The diagnostic message.
            point: The extension point the diagnostic concerns, if any.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, message, point))

    def for_point(self, point: str) -> tuple[Diagnostic, ...]:
        """Return the diagnostics recorded for one extension point."""
        return tuple(d for d in self.items if d.point == point)

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the log contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity.

        Returns:
            Mapping with keys ``"info"``, ``"warning"``, and ``"error"``.
        """
        stats = self.stats()
        return {
            DiagnosticLevel.INFO.value: stats.n_info,
            DiagnosticLevel.WARNING.value: stats.n_warning,
            DiagnosticLevel.ERROR.value: stats.n_error,
        }

    def clear(self) -> None:
        """Drop all recorded diagnostics."""
        self.items.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
