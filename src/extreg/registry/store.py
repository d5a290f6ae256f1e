# topmark:header:start
#
#   project      : ExtReg
#   file         : store.py
#   file_relpath : src/extreg/registry/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mutable source of truth for registered extensions.

The store keeps, for each extension point name, the ordered list of entries
registered under it. Entry order is the order of registration: every entry
carries a registry-wide sequence number, so entries coming from different
points (a legacy name and its canonical replacement) can be merged into one
total order.

Every mutation calls the ``on_change`` hook with the affected point name; the
owning registry wires it to cache invalidation.
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from extreg.config.logging import get_logger
from extreg.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from extreg.config.logging import ExtregLogger

logger: ExtregLogger = get_logger(__name__)


@dataclass(frozen=True)
class ExtensionEntry:
    """One registered contribution.

    Attributes:
        id: Opaque token returned by registration; used to unregister.
        point: Extension point name the entry was registered under.
        payload: The contributed value (opaque to the registry).
        seq: Registry-wide registration sequence number.
    """

    id: str
    point: str
    payload: object
    seq: int


def require_point_name(point: object) -> str:
    """Return ``point`` if it is a usable extension point name.

    Raises:
        InvalidArgumentError: If ``point`` is missing, empty or not a string.
    """
    if not isinstance(point, str) or not point:
        raise InvalidArgumentError(f"Missing extension point name (got {point!r})")
    return point


class RegistryStore:
    """Ordered extension entries per point."""

    def __init__(self, on_change: Callable[[str], None] | None = None) -> None:
        self._points: dict[str, list[ExtensionEntry]] = {}
        self._by_id: dict[str, ExtensionEntry] = {}
        self._seq: Iterator[int] = itertools.count(1)
        self._on_change = on_change

    def _changed(self, point: str) -> None:
        if self._on_change is not None:
            self._on_change(point)

    def register(self, point: str | None, payload: object) -> str:
        """Append a new entry to ``point`` and return its id.

        Args:
            point (str | None): Extension point name; created lazily.
            payload (object): The contributed value; must not be ``None``.

        Returns:
            str: The opaque id of the new entry (used to unregister it).

        Raises:
            InvalidArgumentError: If the point name or the payload is missing.
        """
        name = require_point_name(point)
        if payload is None:
            raise InvalidArgumentError(f"Missing extension payload for point {name!r}")

        entry = ExtensionEntry(
            id=uuid.uuid4().hex,
            point=name,
            payload=payload,
            seq=next(self._seq),
        )
        self._points.setdefault(name, []).append(entry)
        self._by_id[entry.id] = entry
        logger.debug("Registered extension %s under %r (seq=%d)", entry.id, name, entry.seq)
        self._changed(name)
        return entry.id

    def unregister(self, extension_id: str) -> ExtensionEntry | None:
        """Remove the entry with ``extension_id`` from whichever point holds it.

        Unknown ids are ignored so teardown code may unregister twice.

        Returns:
            ExtensionEntry | None: The removed entry, or ``None`` if the id was unknown.
        """
        entry = self._by_id.pop(extension_id, None)
        if entry is None:
            logger.trace("Ignoring unregistration of unknown extension %r", extension_id)
            return None

        remaining = [e for e in self._points.get(entry.point, ()) if e.id != extension_id]
        if remaining:
            self._points[entry.point] = remaining
        else:
            self._points.pop(entry.point, None)
        logger.debug("Unregistered extension %s from %r", extension_id, entry.point)
        self._changed(entry.point)
        return entry

    def unregister_point(self, point: str) -> tuple[ExtensionEntry, ...]:
        """Remove every entry registered under ``point``.

        Returns:
            tuple[ExtensionEntry, ...]: The removed entries (empty if none).
        """
        removed = tuple(self._points.pop(point, ()))
        for entry in removed:
            self._by_id.pop(entry.id, None)
        if removed:
            logger.debug("Unregistered %d extension(s) from %r", len(removed), point)
            self._changed(point)
        return removed

    def entries(self, point: str) -> tuple[ExtensionEntry, ...]:
        """Return the entries of one point in registration order."""
        return tuple(self._points.get(point, ()))

    def point_of(self, extension_id: str) -> str | None:
        """Return the point holding ``extension_id``, or None if unknown."""
        entry = self._by_id.get(extension_id)
        return entry.point if entry is not None else None

    def points(self) -> tuple[str, ...]:
        """Return the names of points that currently hold entries (sorted)."""
        return tuple(sorted(self._points))

    def clear(self) -> tuple[str, ...]:
        """Drop all points and entries.

        The sequence counter keeps running so entries registered after a
        clear still sort after anything a caller may have kept around.

        Returns:
            tuple[str, ...]: The names of the points that held entries.
        """
        dropped = self.points()
        self._points.clear()
        self._by_id.clear()
        for point in dropped:
            self._changed(point)
        return dropped

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
