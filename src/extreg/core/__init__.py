# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, framework-agnostic helpers shared by the registry and the CLI."""

from __future__ import annotations

from extreg.core.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    compute_diagnostic_stats,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "compute_diagnostic_stats",
]
