# topmark:header:start
#
#   project      : ExtReg
#   file         : __init__.py
#   file_relpath : src/extreg/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extension registry and its building blocks.

This package exposes:

* [`extreg.registry.Registry`][] – the **stable facade** over the process-wide
  default registry.
* [`extreg.registry.ExtensionRegistry`][] – an independent registry instance
  (tests, embedded hosts).
* The parts an `ExtensionRegistry` is composed of (`RegistryStore`,
  `ValidatorCatalog`, `AliasResolver`, `QueryCache`); no semver stability
  guarantee.

Most users should import from here:

```python
from extreg.registry import Registry
Registry.register_extension("app.menu", {"label": "Open"})
items = Registry.extensions_for_point("app.menu")
```
"""

from __future__ import annotations

from .aliases import AliasResolver
from .cache import QueryCache
from .catalog import ExtensionPointDoc, PointDocumentation, ValidatorCatalog
from .registry import (
    ChangeKind,
    ExtensionChange,
    ExtensionRegistry,
    Registry,
    get_default_registry,
)
from .store import ExtensionEntry, RegistryStore

__all__ = [
    # Stable facade
    "Registry",
    "ExtensionRegistry",
    "get_default_registry",
    "ChangeKind",
    "ExtensionChange",
    "PointDocumentation",
    # Building blocks (no stability guarantee)
    "AliasResolver",
    "ExtensionEntry",
    "ExtensionPointDoc",
    "QueryCache",
    "RegistryStore",
    "ValidatorCatalog",
]
