# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for ExtReg.

The ``extreg`` command bootstraps the default registry from the configured
plugins and entry points and prints what it holds. It is an introspection
tool: it never persists registry state.
"""
