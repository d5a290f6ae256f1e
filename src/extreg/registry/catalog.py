# topmark:header:start
#
#   project      : ExtReg
#   file         : catalog.py
#   file_relpath : src/extreg/registry/catalog.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-point documentation and validators.

An extension point is *documented* once some module describes it: a
human-readable description, a validator gating whether the point exposes its
payloads to queries, an optional external documentation URL and an optional legacy
name the point was renamed from.

Notes:
    * Documenting is idempotent by overwrite: the last call wins for the
      description, the validator and the URL.
    * Only changes that can alter query results (first documentation, a new
      validator object, a new or dropped legacy link) notify ``on_change``.
    * The legacy link index is derived from the stored docs and rebuilt on
      every documentation call.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from extreg.config.logging import get_logger
from extreg.errors import InvalidArgumentError
from extreg.registry.store import require_point_name

if TYPE_CHECKING:
    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)

Validator = Callable[[Any], bool]


@dataclass(frozen=True)
class ExtensionPointDoc:
    """Documentation and validator for one canonical extension point."""

    name: str
    description: str
    validator: Validator
    external_documentation_url: str | None = None
    legacy_name: str | None = None


@dataclass(frozen=True)
class PointDocumentation:
    """Stable, serializable view of an extension point's documentation."""

    name: str
    description: str = ""
    external_documentation_url: str | None = None


def parse_doc_options(
    url_or_options: str | Mapping[str, Any] | None,
    *,
    url: str | None = None,
    legacy_name: str | None = None,
) -> tuple[str | None, str | None]:
    """Resolve the ``(url, legacy_name)`` pair of a documentation call.

    ``url_or_options`` may be a bare URL string (older call style) or a
    mapping recognizing ``url`` and ``legacyName`` / ``legacy_name``.
    Explicit keyword arguments take precedence.

    Raises:
        InvalidArgumentError: If ``url_or_options`` is neither a string nor a mapping,
            or if an option value is not a string.
    """
    opt_url: object = None
    opt_legacy: object = None
    if isinstance(url_or_options, str):
        opt_url = url_or_options
    elif isinstance(url_or_options, Mapping):
        opt_url = url_or_options.get("url")
        opt_legacy = url_or_options.get("legacyName", url_or_options.get("legacy_name"))
    elif url_or_options is not None:
        raise InvalidArgumentError(
            f"Extension point options must be a URL string or a mapping, got {url_or_options!r}"
        )

    resolved: list[str | None] = []
    for label, value in (
        ("url", url if url is not None else opt_url),
        ("legacyName", legacy_name if legacy_name is not None else opt_legacy),
    ):
        if value is not None and not isinstance(value, str):
            raise InvalidArgumentError(f"Extension point option {label!r} must be a string")
        resolved.append(value or None)
    return resolved[0], resolved[1]


class ValidatorCatalog:
    """Documentation store keyed by canonical extension point name."""

    def __init__(self, on_change: Callable[[str], None] | None = None) -> None:
        self._docs: dict[str, ExtensionPointDoc] = {}
        self._legacy: dict[str, str] = {}
        self._on_change = on_change

    def _changed(self, point: str) -> None:
        if self._on_change is not None:
            self._on_change(point)

    def _rebuild_legacy_index(self) -> None:
        self._legacy = {
            doc.legacy_name: name for name, doc in self._docs.items() if doc.legacy_name
        }

    def document(
        self,
        point: str,
        description: str,
        validator: Validator,
        url_or_options: str | Mapping[str, Any] | None = None,
        *,
        url: str | None = None,
        legacy_name: str | None = None,
    ) -> ExtensionPointDoc:
        """Document ``point``, overwriting any previous documentation.

        Args:
            point (str): Canonical extension point name.
            description (str): Human-readable description.
            validator (Validator): Predicate called with each candidate payload;
                one rejection hides every extension of the point.
            url_or_options (str | Mapping[str, Any] | None): URL string, or a mapping with
                ``url`` and/or ``legacyName``.
            url (str | None): External documentation URL (keyword form).
            legacy_name (str | None): Former name of this point (keyword form).

        Returns:
            ExtensionPointDoc: The stored documentation.

        Raises:
            InvalidArgumentError: If the point name is empty, the validator is not callable,
                the options are malformed, or the legacy name equals the point name.
        """
        require_point_name(point)
        if not callable(validator):
            raise InvalidArgumentError(f"Validator for extension point {point!r} is not callable")
        doc_url, doc_legacy = parse_doc_options(url_or_options, url=url, legacy_name=legacy_name)
        if doc_legacy == point:
            raise InvalidArgumentError(f"Extension point {point!r} cannot be its own legacy name")

        previous = self._docs.pop(point, None)
        previous_owner = self._legacy.get(doc_legacy) if doc_legacy else None
        if previous_owner is not None and previous_owner != point:
            logger.warning(
                "Legacy extension point %r moves from %r to %r", doc_legacy, previous_owner, point
            )
        doc = ExtensionPointDoc(
            name=point,
            description=description or "",
            validator=validator,
            external_documentation_url=doc_url,
            legacy_name=doc_legacy,
        )
        # Re-inserted last so the latest documentation wins a contested legacy name.
        self._docs[point] = doc
        self._rebuild_legacy_index()
        logger.debug("Documented extension point %r (legacy=%r)", point, doc_legacy)

        affected: set[str] = set()
        if previous is None or previous.validator is not validator:
            affected.add(point)
        old_legacy = previous.legacy_name if previous is not None else None
        if old_legacy != doc_legacy:
            affected.add(point)
            affected.update(n for n in (old_legacy, doc_legacy, previous_owner) if n)
        for name in sorted(affected):
            self._changed(name)
        return doc

    def lookup(self, point: str) -> ExtensionPointDoc | None:
        """Return the documentation of ``point``, or None if undocumented."""
        return self._docs.get(point)

    def canonical_for(self, legacy_name: str) -> str | None:
        """Return the canonical name that replaced ``legacy_name``, if any."""
        return self._legacy.get(legacy_name)

    def legacy_links(self) -> Mapping[str, str]:
        """Return a read-only ``legacy name -> canonical name`` mapping."""
        return MappingProxyType(dict(self._legacy))

    def names(self) -> tuple[str, ...]:
        """Return all documented point names (sorted)."""
        return tuple(sorted(self._docs))

    def all_docs(self) -> Mapping[str, PointDocumentation]:
        """Return a read-only mapping of point name to documentation view.

        Returns:
            Mapping[str, PointDocumentation]: Name -> documentation, sorted by name.

        Notes:
            The returned mapping is a `MappingProxyType` and must not be mutated.
        """
        return MappingProxyType(
            {
                name: PointDocumentation(
                    name=name,
                    description=doc.description,
                    external_documentation_url=doc.external_documentation_url,
                )
                for name, doc in sorted(self._docs.items())
            }
        )

    def clear(self) -> tuple[str, ...]:
        """Drop all documentation.

        Returns:
            tuple[str, ...]: Every name whose query results may have changed
            (documented names and their legacy names).
        """
        dropped = set(self._docs) | set(self._legacy)
        self._docs.clear()
        self._legacy.clear()
        for name in sorted(dropped):
            self._changed(name)
        return tuple(sorted(dropped))

    def __contains__(self, point: object) -> bool:
        return point in self._docs

    def __len__(self) -> int:
        return len(self._docs)
