# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ExtReg package.

ExtReg is an in-process extension registry. Independently loaded modules
register contributions under named extension points; other modules query
those contributions, gated by a per-point validator, with legacy-name
aliasing and identity-stable caching of query results.

The module-level functions below operate on the process-wide default
registry; see [`extreg.registry.ExtensionRegistry`][] for isolated instances.
"""

from __future__ import annotations

from extreg.api import (
    add_change_listener,
    clear,
    document_extension_point,
    extension_point_documentation,
    extension_points,
    extensions_for_point,
    extensions_for_points,
    register_extension,
    remove_change_listener,
    unregister_all_extensions,
    unregister_extension,
)
from extreg.errors import ConfigError, ExtensionRegistryError, InvalidArgumentError

__all__ = [
    "add_change_listener",
    "clear",
    "document_extension_point",
    "extension_point_documentation",
    "extension_points",
    "extensions_for_point",
    "extensions_for_points",
    "register_extension",
    "remove_change_listener",
    "unregister_all_extensions",
    "unregister_extension",
    "ConfigError",
    "ExtensionRegistryError",
    "InvalidArgumentError",
]
