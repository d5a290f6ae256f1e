# topmark:header:start
#
#   project      : ExtReg
#   file         : api.py
#   file_relpath : src/extreg/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public ExtReg API (stable surface).

Module-level functions operating on the process-wide default registry. They
are thin wrappers around [`extreg.registry.ExtensionRegistry`][]; code that
needs isolation (tests, several hosts in one process) should construct its own
registry instead.

Versioning policy
-----------------
- The **signatures** in this module follow semver.
- Adding optional parameters with defaults is allowed in minor releases.
- Removing/renaming anything here is a breaking change (major release).

Example:
    ```python
    import extreg

    extreg.document_extension_point(
        "app.menu", "Menu items", lambda item: "label" in item
    )
    ext_id = extreg.register_extension("app.menu", {"label": "Open"})
    assert extreg.extensions_for_point("app.menu") == ({"label": "Open"},)
    extreg.unregister_extension(ext_id)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from extreg.registry.registry import get_default_registry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from extreg.registry.catalog import ExtensionPointDoc, PointDocumentation, Validator
    from extreg.registry.registry import ExtensionChange

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
]


def register_extension(point: str | None = None, payload: object = None) -> str:
    """Register ``payload`` under the extension point ``point``.

    Args:
        point (str | None): Extension point name; the point need not be documented yet.
        payload (object): The contributed value, opaque to the registry.

    Returns:
        str: Opaque id to pass to [`unregister_extension`][extreg.api.unregister_extension].

    Raises:
        InvalidArgumentError: If ``point`` or ``payload`` is missing.
    """
    return get_default_registry().register_extension(point, payload)


def unregister_extension(extension_id: str) -> None:
    """Remove a previously registered extension. Unknown ids are ignored."""
    get_default_registry().unregister_extension(extension_id)


def unregister_all_extensions(point: str) -> int:
    """Remove every extension registered under exactly ``point``.

    Returns:
        int: Number of removed extensions.
    """
    return get_default_registry().unregister_all_extensions(point)


def document_extension_point(
    point: str,
    description: str,
    validator: Validator,
    url_or_options: str | Mapping[str, Any] | None = None,
    *,
    url: str | None = None,
    legacy_name: str | None = None,
) -> ExtensionPointDoc:
    """Describe ``point`` and install the validator gating its extensions.

    Args:
        point (str): Canonical extension point name.
        description (str): Human-readable description.
        validator (Validator): Predicate called with each candidate payload; if it
            rejects any of them, queries of the point return no payloads.
        url_or_options (str | Mapping[str, Any] | None): External documentation URL,
            or a mapping with ``url`` and/or ``legacyName``.
        url (str | None): External documentation URL (keyword form).
        legacy_name (str | None): Former name of the point (keyword form).

    Returns:
        ExtensionPointDoc: The stored documentation.
    """
    return get_default_registry().document_extension_point(
        point, description, validator, url_or_options, url=url, legacy_name=legacy_name
    )


def extensions_for_point(point: str) -> tuple[object, ...]:
    """Return the payloads of ``point`` accepted by its validator, in registration order.

    The same tuple object is returned until the point (or its alias) changes.
    """
    return get_default_registry().extensions_for_point(point)


def extensions_for_points(points: Iterable[str]) -> Mapping[str, tuple[object, ...]]:
    """Return a read-only ``name -> payloads`` mapping for several points.

    The same mapping object is returned for the same set of names, in any
    order, until one of the points changes.
    """
    return get_default_registry().extensions_for_points(points)


def extension_point_documentation() -> Mapping[str, PointDocumentation]:
    """Return the documentation of every documented extension point."""
    return get_default_registry().extension_point_documentation()


def extension_points() -> tuple[str, ...]:
    """Return every extension point name with registrations or documentation."""
    return get_default_registry().extension_points()


def add_change_listener(listener: Callable[[ExtensionChange], None]) -> Callable[[], None]:
    """Call ``listener`` after every mutation of the default registry.

    Returns:
        Callable[[], None]: A callable removing the listener again.
    """
    return get_default_registry().add_change_listener(listener)


def remove_change_listener(listener: Callable[[ExtensionChange], None]) -> bool:
    """Stop notifying ``listener``; returns False if it was not registered."""
    return get_default_registry().remove_change_listener(listener)


def clear() -> None:
    """Reset the default registry to empty (test teardown, process reset)."""
    get_default_registry().clear()
