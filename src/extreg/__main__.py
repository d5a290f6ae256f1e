# topmark:header:start
#
#   project      : ExtReg
#   file         : __main__.py
#   file_relpath : src/extreg/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ExtReg via ``python -m extreg``.

Delegates to [`extreg.cli.main.cli`][], the same entry point as the
``extreg`` console script.

Examples:
    List the documented extension points of a plugin module::

        python -m extreg points --plugin my_package.plugins
"""

from __future__ import annotations

from extreg.cli.main import cli

if __name__ == "__main__":
    cli()
