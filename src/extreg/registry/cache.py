# topmark:header:start
#
#   project      : ExtReg
#   file         : cache.py
#   file_relpath : src/extreg/registry/cache.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Identity-stable query results.

Consumers compare query results by identity to skip work (e.g. a UI that
re-renders only when its extension list object changes), so returning the
*same* object for an unchanged registry is part of the contract.

Generations:
    The cache keeps one registry-wide clock. Every mutation of a point name
    (registration, unregistration, documentation, alias change) stamps that
    name with the next clock value. A cached result depends on a set of member
    names; it stays valid while the highest stamp among them is unchanged.
    Since stamps only grow, any mutation of a member raises that maximum.

Results:
    * single point: a ``tuple`` of payloads, cached per canonical name;
    * several points: a ``MappingProxyType`` of name -> tuple, cached per
      *set* of queried names (argument order does not matter) and built from
      the single-point tuples so per-key identities are shared.

Validator gate:
    The documented validator is called with each candidate payload. If it
    returns false for (or raises on) any candidate, the point yields an empty
    result for that generation. The rejection is remembered with the cached
    result and warned about on every query of the point, cache hits included.

Both result types are immutable, so handing the same object to every caller
is safe.
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

from extreg.config.logging import get_logger
from extreg.errors import InvalidArgumentError

if TYPE_CHECKING:
    from extreg.config.logging import ExtregLogger
    from extreg.core.diagnostics import DiagnosticLog
    from extreg.registry.aliases import AliasResolver
    from extreg.registry.catalog import ExtensionPointDoc, ValidatorCatalog
    from extreg.registry.store import ExtensionEntry, RegistryStore

logger: ExtregLogger = get_logger(__name__)


class CachedPoint(NamedTuple):
    """Cached result of one canonical point.

    Attributes:
        point: Canonical point name.
        generation: Highest member stamp when the result was computed.
        payloads: Visible payloads (empty when the validator gate closed).
        rejection: Warning to repeat on every query, or None if nothing was rejected.
    """

    point: str
    generation: int
    payloads: tuple[object, ...]
    rejection: str | None = None


class CachedPoints(NamedTuple):
    """Cached result of a multi-point query."""

    members: frozenset[str]
    generation: int
    result: Mapping[str, tuple[object, ...]]


class QueryCache:
    """Memoized, validator-gated, alias-merged query results."""

    def __init__(
        self,
        store: RegistryStore,
        catalog: ValidatorCatalog,
        aliases: AliasResolver,
        diagnostics: DiagnosticLog,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._aliases = aliases
        self._diagnostics = diagnostics

        self._clock: int = 0
        self._generations: dict[str, int] = {}
        self._single: dict[str, CachedPoint] = {}
        self._multi: dict[frozenset[str], CachedPoints] = {}
        self._warned_undocumented: set[str] = set()

    # --- generations ---

    def invalidate(self, point: str) -> None:
        """Stamp ``point`` with a new generation, making dependent results dirty."""
        self._clock += 1
        self._generations[point] = self._clock
        logger.trace("Invalidated %r at generation %d", point, self._clock)

    def generation(self, point: str) -> int:
        """Return the generation stamp of a point name (0 if never mutated)."""
        return self._generations.get(point, 0)

    def _members_generation(self, members: Iterable[str]) -> int:
        return max((self.generation(m) for m in members), default=0)

    def _members_of(self, name: str) -> tuple[str, ...]:
        return self._aliases.merged_members(self._aliases.canonical_of(name))

    # --- single point ---

    def extensions_for_point(self, name: str) -> tuple[object, ...]:
        """Return the visible payloads for ``name`` (legacy or canonical).

        Args:
            name (str): Extension point name.

        Returns:
            tuple[object, ...]: Payloads in registration order; the same tuple
            object is returned until a member point changes.
        """
        cached = self._resolve(name)
        self._report_rejection(cached)
        return cached.payloads

    def _resolve(self, name: str) -> CachedPoint:
        canonical = self._aliases.canonical_of(name)
        members = self._aliases.merged_members(canonical)
        gen = self._members_generation(members)

        cached = self._single.get(canonical)
        if cached is not None and cached.generation == gen:
            logger.trace("Cache hit for %r (generation %d)", canonical, gen)
            return cached

        cached = self._compute(canonical, members, gen)
        self._single[canonical] = cached
        logger.trace(
            "Cached %d extension(s) for %r (generation %d)", len(cached.payloads), canonical, gen
        )
        return cached

    def _compute(self, canonical: str, members: tuple[str, ...], gen: int) -> CachedPoint:
        doc = self._catalog.lookup(canonical)
        if doc is None:
            self._warn_undocumented(canonical)
            return CachedPoint(canonical, gen, ())

        # Each member list is already in seq order; merge them into one total order.
        candidates: list[ExtensionEntry] = list(
            heapq.merge(*(self._store.entries(m) for m in members), key=lambda e: e.seq)
        )
        for entry in candidates:
            if not self._accepts(doc, entry):
                rejection = (
                    f"Extension point {canonical!r} hides all {len(candidates)} extension(s): "
                    f"validator returned false for extension {entry.id}"
                )
                return CachedPoint(canonical, gen, (), rejection)
        return CachedPoint(canonical, gen, tuple(e.payload for e in candidates))

    def _accepts(self, doc: ExtensionPointDoc, entry: ExtensionEntry) -> bool:
        try:
            return bool(doc.validator(entry.payload))
        except Exception as exc:
            logger.exception(
                "Validator of extension point %r failed on extension %s", doc.name, entry.id
            )
            self._diagnostics.add_error(
                f"Validator of extension point {doc.name!r} raised {exc!r}", point=doc.name
            )
            return False

    def _report_rejection(self, cached: CachedPoint) -> None:
        if cached.rejection is None:
            return
        logger.warning("%s", cached.rejection)
        self._diagnostics.add_warning(cached.rejection, point=cached.point)

    def _warn_undocumented(self, point: str) -> None:
        if point in self._warned_undocumented:
            return
        self._warned_undocumented.add(point)
        message = f"Extension point {point!r} is not documented; its extensions stay hidden"
        logger.warning("%s", message)
        self._diagnostics.add_warning(message, point=point)

    # --- several points ---

    def extensions_for_points(self, names: Iterable[str]) -> Mapping[str, tuple[object, ...]]:
        """Return visible payloads for several points at once.

        Rejection warnings are reported once per gated canonical point per call,
        even when a legacy and a canonical name of the same point are both queried.

        Args:
            names (Iterable[str]): Extension point names; order and duplicates are irrelevant.

        Returns:
            Mapping[str, tuple[object, ...]]: Read-only name -> payloads mapping (keys sorted).
            The same mapping object is returned for the same set of names until one
            of their member points changes.

        Raises:
            InvalidArgumentError: If ``names`` is a bare string or holds a non-string name.
        """
        if isinstance(names, str):
            raise InvalidArgumentError(
                f"Expected a collection of extension point names, got the string {names!r}"
            )
        key = frozenset(names)
        for name in key:
            if not isinstance(name, str) or not name:
                raise InvalidArgumentError(f"Missing extension point name (got {name!r})")

        members = frozenset(m for name in key for m in self._members_of(name))
        gen = self._members_generation(members)
        resolved = {name: self._resolve(name) for name in sorted(key)}
        for cached in {c.point: c for c in resolved.values()}.values():
            self._report_rejection(cached)

        hit = self._multi.get(key)
        if hit is not None and hit.generation == gen and hit.members == members:
            logger.trace("Cache hit for points %s (generation %d)", sorted(key), gen)
            return hit.result

        self._prune_multi()
        result: Mapping[str, tuple[object, ...]] = MappingProxyType(
            {name: cached.payloads for name, cached in resolved.items()}
        )
        self._multi[key] = CachedPoints(members, gen, result)
        return result

    def _prune_multi(self) -> None:
        """Drop multi-point results that can no longer be served."""
        stale = [
            key
            for key, cached in self._multi.items()
            if self._members_generation(cached.members) != cached.generation
        ]
        for key in stale:
            del self._multi[key]
        if stale:
            logger.trace("Pruned %d stale multi-point result(s)", len(stale))

    def stats(self) -> dict[str, int]:
        """Return the number of cached single-point and multi-point results."""
        return {"points": len(self._single), "point_sets": len(self._multi)}

    def clear(self) -> None:
        """Drop every cached result and re-arm the one-time warnings.

        The clock keeps running, so stamps handed out before the clear are
        never reused.
        """
        self._single.clear()
        self._multi.clear()
        self._warned_undocumented.clear()
