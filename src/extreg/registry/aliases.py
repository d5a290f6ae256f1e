# topmark:header:start
#
#   project      : ExtReg
#   file         : aliases.py
#   file_relpath : src/extreg/registry/aliases.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Legacy-name resolution for renamed extension points.

When a point is documented with a ``legacy_name``, queries against either the
legacy or the canonical name observe the same merged entry list. The alias
relation is never stored on its own: it is read from the catalog on every
call, so re-documenting a point (adding or dropping a legacy name) takes
effect without migrating any registered entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from extreg.registry.catalog import ValidatorCatalog


class AliasResolver:
    """Derived view over a [`ValidatorCatalog`][extreg.registry.catalog.ValidatorCatalog]."""

    def __init__(self, catalog: ValidatorCatalog) -> None:
        self._catalog = catalog

    def canonical_of(self, name: str) -> str:
        """Return the canonical name for ``name`` (``name`` itself if no alias applies)."""
        return self._catalog.canonical_for(name) or name

    def is_legacy(self, name: str) -> bool:
        """Return True if ``name`` is the legacy name of another point."""
        return self._catalog.canonical_for(name) is not None

    def merged_members(self, canonical: str) -> tuple[str, ...]:
        """Return the store point names whose entries answer a query for ``canonical``.

        Args:
            canonical (str): A canonical point name (see `canonical_of`).

        Returns:
            tuple[str, ...]: ``(canonical,)`` or ``(canonical, legacy_name)``.
        """
        doc = self._catalog.lookup(canonical)
        legacy = doc.legacy_name if doc is not None else None
        # A legacy name claimed later by another point no longer belongs here.
        if legacy and self._catalog.canonical_for(legacy) == canonical:
            return (canonical, legacy)
        return (canonical,)
