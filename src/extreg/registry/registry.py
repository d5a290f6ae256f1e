# topmark:header:start
#
#   project      : ExtReg
#   file         : registry.py
#   file_relpath : src/extreg/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end


"""Extension registry state object and its stable facade.

[`ExtensionRegistry`][extreg.registry.ExtensionRegistry] composes the four
parts of a registry (entry store, documentation catalog, alias resolver and
query cache) into one constructible, resettable object. Most programs use the
process-wide default instance through the [`Registry`][extreg.registry.Registry]
facade or the module-level functions of [`extreg.api`][]; tests construct
their own instances for isolation.

Typical usage:
    ```python
    from extreg.registry import ExtensionRegistry

    registry = ExtensionRegistry()
    ext_id = registry.register_extension("app.menu", {"label": "Open"})
    registry.document_extension_point(
        "app.menu", "Menu items", lambda e: "label" in e, {"legacyName": "menu"}
    )
    items = registry.extensions_for_point("app.menu")
    assert items is registry.extensions_for_point("menu")
    registry.unregister_extension(ext_id)
    ```

Warning:
    The default registry is shared across the process. ``clear()`` is the only
    supported way to reset it (test teardown, process reset).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from extreg.config.logging import get_logger
from extreg.core.diagnostics import DiagnosticLog
from extreg.registry.aliases import AliasResolver
from extreg.registry.cache import QueryCache
from extreg.registry.catalog import ValidatorCatalog
from extreg.registry.store import RegistryStore

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from extreg.config.logging import ExtregLogger
    from extreg.registry.catalog import ExtensionPointDoc, PointDocumentation, Validator

logger: ExtregLogger = get_logger(__name__)


class ChangeKind(Enum):
    """Kind of mutation reported to change listeners."""

    REGISTERED = "registered"
    UNREGISTERED = "unregistered"
    DOCUMENTED = "documented"
    CLEARED = "cleared"


@dataclass(frozen=True)
class ExtensionChange:
    """Notification sent to change listeners after a mutation.

    Attributes:
        kind: What happened.
        point: The affected extension point (``None`` for ``CLEARED``).
        extension_id: The affected entry, for single-entry registrations and removals.
    """

    kind: ChangeKind
    point: str | None = None
    extension_id: str | None = None


class ExtensionRegistry:
    """One independent extension registry.

    Attributes:
        diagnostics (DiagnosticLog): Soft anomalies recorded while serving queries
            (undocumented points, validator rejections, renamed points).
    """

    def __init__(self) -> None:
        self.diagnostics = DiagnosticLog()
        self._store = RegistryStore(on_change=self._invalidate)
        self._catalog = ValidatorCatalog(on_change=self._invalidate)
        self._aliases = AliasResolver(self._catalog)
        self._cache = QueryCache(self._store, self._catalog, self._aliases, self.diagnostics)
        self._listeners: list[Callable[[ExtensionChange], None]] = []
        self._rename_noticed: set[str] = set()

    def _invalidate(self, point: str) -> None:
        self._cache.invalidate(point)

    def _notify(self, change: ExtensionChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Extension change listener %r failed on %s", listener, change)

    # --- mutation ---

    def register_extension(self, point: str | None = None, payload: object = None) -> str:
        """Register ``payload`` under ``point``.

        Args:
            point (str | None): Extension point name.
            payload (object): The contributed value (opaque to the registry).

        Returns:
            str: Opaque id to pass to `unregister_extension`.

        Raises:
            InvalidArgumentError: If ``point`` or ``payload`` is missing.
        """
        extension_id = self._store.register(point, payload)
        self._notify(ExtensionChange(ChangeKind.REGISTERED, point, extension_id))
        return extension_id

    def unregister_extension(self, extension_id: str) -> None:
        """Remove a registered extension; unknown ids are ignored."""
        entry = self._store.unregister(extension_id)
        if entry is not None:
            self._notify(ExtensionChange(ChangeKind.UNREGISTERED, entry.point, extension_id))

    def unregister_all_extensions(self, point: str) -> int:
        """Remove every extension registered under ``point``.

        Only entries registered under exactly this name are removed; entries
        of an aliased legacy or canonical name are kept.

        Returns:
            int: Number of removed extensions.
        """
        removed = self._store.unregister_point(point)
        if removed:
            self._notify(ExtensionChange(ChangeKind.UNREGISTERED, point))
        return len(removed)

    def document_extension_point(
        self,
        point: str,
        description: str,
        validator: Validator,
        url_or_options: str | Mapping[str, Any] | None = None,
        *,
        url: str | None = None,
        legacy_name: str | None = None,
    ) -> ExtensionPointDoc:
        """Describe ``point`` and set the validator gating its extensions.

        Args:
            point (str): Canonical extension point name.
            description (str): Human-readable description.
            validator (Validator): Predicate called with each candidate payload;
                one rejection hides every extension of the point.
            url_or_options (str | Mapping[str, Any] | None): Documentation URL, or a mapping
                with ``url`` and/or ``legacyName``.
            url (str | None): Documentation URL (keyword form).
            legacy_name (str | None): Former name of the point (keyword form).

        Returns:
            ExtensionPointDoc: The stored documentation.

        Raises:
            InvalidArgumentError: If the name, validator or options are invalid.
        """
        before = dict(self._catalog.legacy_links())
        doc = self._catalog.document(
            point, description, validator, url_or_options, url=url, legacy_name=legacy_name
        )
        if doc.legacy_name and before.get(doc.legacy_name) != point:
            # A new alias: the rename notice is due again on its next use.
            self._rename_noticed.discard(doc.legacy_name)
        self._notify(ExtensionChange(ChangeKind.DOCUMENTED, point))
        return doc

    def clear(self) -> None:
        """Drop every extension, documentation, cached result and diagnostic."""
        self._store.clear()
        self._catalog.clear()
        self._cache.clear()
        self._rename_noticed.clear()
        self.diagnostics.clear()
        logger.debug("Cleared extension registry %r", self)
        self._notify(ExtensionChange(ChangeKind.CLEARED))

    # --- queries ---

    def _notice_rename(self, name: str) -> None:
        canonical = self._aliases.canonical_of(name)
        if canonical == name or name in self._rename_noticed:
            return
        self._rename_noticed.add(name)
        message = f"Extension point renamed from {name} to {canonical}"
        logger.warning("%s", message)
        self.diagnostics.add_warning(message, point=name)

    def extensions_for_point(self, point: str) -> tuple[object, ...]:
        """Return the visible payloads of ``point`` in registration order.

        Legacy and canonical names of a renamed point return the same merged
        result. The returned tuple is the same object on every call until a
        contributing point changes.
        """
        self._notice_rename(point)
        return self._cache.extensions_for_point(point)

    def extensions_for_points(self, points: Iterable[str]) -> Mapping[str, tuple[object, ...]]:
        """Return visible payloads for several points as a read-only mapping.

        The mapping (and each of its tuples) is the same object for the same
        *set* of names until one of them changes, whatever the argument order.
        """
        names = list(points) if not isinstance(points, str) else points
        result = self._cache.extensions_for_points(names)
        for name in result:
            self._notice_rename(name)
        return result

    def extension_point_documentation(self) -> Mapping[str, PointDocumentation]:
        """Return a read-only mapping of documented point name to its documentation."""
        return self._catalog.all_docs()

    def lookup(self, point: str) -> ExtensionPointDoc | None:
        """Return the documentation of a canonical point, or None if undocumented."""
        return self._catalog.lookup(point)

    def canonical_name(self, point: str) -> str:
        """Return the canonical name of ``point`` (itself unless it is a legacy name)."""
        return self._aliases.canonical_of(point)

    def extension_points(self) -> tuple[str, ...]:
        """Return every point name with registrations or documentation (sorted)."""
        return tuple(sorted(set(self._store.points()) | set(self._catalog.names())))

    def registered_count(self, point: str) -> int:
        """Return the number of entries registered under exactly ``point`` (unfiltered)."""
        return len(self._store.entries(point))

    # --- listeners ---

    def add_change_listener(
        self, listener: Callable[[ExtensionChange], None]
    ) -> Callable[[], None]:
        """Call ``listener`` after every mutation of this registry.

        Listener failures are logged and do not affect the mutation.

        Returns:
            Callable[[], None]: A callable removing the listener again.
        """
        self._listeners.append(listener)

        def _remove() -> None:
            self.remove_change_listener(listener)

        return _remove

    def remove_change_listener(self, listener: Callable[[ExtensionChange], None]) -> bool:
        """Stop notifying ``listener``.

        Returns:
            bool: True if the listener was registered, else False.
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return (
            f"<ExtensionRegistry extensions={len(self._store)} "
            f"documented={len(self._catalog)}>"
        )


@lru_cache(maxsize=1)
def get_default_registry() -> ExtensionRegistry:
    """Return (and cache) the process-wide default registry."""
    return ExtensionRegistry()


class Registry:
    """Stable facade over the process-wide default registry.

    It holds no state; every call delegates to
    [`get_default_registry`][extreg.registry.registry.get_default_registry].
    """

    @staticmethod
    def register_extension(point: str | None = None, payload: object = None) -> str:
        """Register ``payload`` under ``point`` in the default registry."""
        return get_default_registry().register_extension(point, payload)

    @staticmethod
    def unregister_extension(extension_id: str) -> None:
        """Remove an extension from the default registry (idempotent)."""
        get_default_registry().unregister_extension(extension_id)

    @staticmethod
    def unregister_all_extensions(point: str) -> int:
        """Remove every extension of ``point`` from the default registry."""
        return get_default_registry().unregister_all_extensions(point)

    @staticmethod
    def document_extension_point(
        point: str,
        description: str,
        validator: Validator,
        url_or_options: str | Mapping[str, Any] | None = None,
        *,
        url: str | None = None,
        legacy_name: str | None = None,
    ) -> ExtensionPointDoc:
        """Document ``point`` in the default registry."""
        return get_default_registry().document_extension_point(
            point, description, validator, url_or_options, url=url, legacy_name=legacy_name
        )

    @staticmethod
    def extensions_for_point(point: str) -> tuple[object, ...]:
        """Return the visible payloads of ``point`` from the default registry."""
        return get_default_registry().extensions_for_point(point)

    @staticmethod
    def extensions_for_points(points: Iterable[str]) -> Mapping[str, tuple[object, ...]]:
        """Return visible payloads for several points from the default registry."""
        return get_default_registry().extensions_for_points(points)

    @staticmethod
    def extension_point_documentation() -> Mapping[str, PointDocumentation]:
        """Return the documentation of every point in the default registry."""
        return get_default_registry().extension_point_documentation()

    @staticmethod
    def extension_points() -> tuple[str, ...]:
        """Return every point name known to the default registry."""
        return get_default_registry().extension_points()

    @staticmethod
    def clear() -> None:
        """Reset the default registry to empty."""
        get_default_registry().clear()
