# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``extreg`` CLI."""
