# topmark:header:start
#
#   project      : ExtReg
#   file         : store.py
#   file_relpath : src/extreg/points/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The host ``store`` extension point (``org.visallo.store``).

Feature modules contribute a slice of the host application state: a state
``key``, a ``reducer(state, action)`` for that slice, and optional undo/redo
action factories per action type. The host composes the visible contributions
into one root reducer with [`reduce_store`][extreg.points.store.reduce_store]
and looks up undo support with
[`undo_action_for`][extreg.points.store.undo_action_for].

Example:
    ```python
    from extreg.points.store import (
        Action,
        StoreContribution,
        document_store_point,
        reduce_store,
    )

    document_store_point(registry)
    registry.register_extension(
        "org.visallo.store",
        StoreContribution(key="product", reducer=product_reducer),
    )
    state = reduce_store(state, Action("PRODUCT_MAP_ADD_ELEMENTS", payload), registry)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from extreg.config.logging import get_logger
from extreg.constants import STORE_EXTENSION_POINT
from extreg.registry.registry import ExtensionRegistry, get_default_registry

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from extreg.config.logging import ExtregLogger
    from extreg.registry.catalog import ExtensionPointDoc

logger: ExtregLogger = get_logger(__name__)

STORE_POINT_DESCRIPTION = "Add reducers (and undo/redo actions) to the application store"


@dataclass(frozen=True)
class Action:
    """A dispatched store action."""

    type: str
    payload: Any = None


@dataclass(frozen=True)
class UndoAction:
    """Undo/redo factories for one action type.

    Attributes:
        undo: Builds the action reverting a change from its undo data.
        redo: Builds the action re-applying a change from its redo data.
    """

    undo: Callable[[Any], Action]
    redo: Callable[[Any], Action]


@dataclass(frozen=True)
class StoreContribution:
    """Payload registered under the store extension point.

    Attributes:
        key: Top-level state key owned by the reducer.
        reducer: ``reducer(slice_state, action) -> slice_state``; must return
            the slice unchanged (same object) for actions it ignores.
        undo_actions: Undo/redo factories keyed by action type.
    """

    key: str
    reducer: Callable[[Any, Action], Any]
    undo_actions: Mapping[str, UndoAction] = field(
        default_factory=lambda: MappingProxyType({})
    )


def is_store_contribution(payload: object) -> bool:
    """Validator of the store point: accept well-formed `StoreContribution` payloads."""
    if not isinstance(payload, StoreContribution):
        return False
    if not payload.key or not callable(payload.reducer):
        return False
    return all(isinstance(u, UndoAction) for u in payload.undo_actions.values())


def document_store_point(registry: ExtensionRegistry | None = None) -> ExtensionPointDoc:
    """Document the store extension point in ``registry`` (default registry if None)."""
    target = registry if registry is not None else get_default_registry()
    return target.document_extension_point(
        STORE_EXTENSION_POINT, STORE_POINT_DESCRIPTION, is_store_contribution
    )


def _contributions(registry: ExtensionRegistry | None) -> tuple[StoreContribution, ...]:
    target = registry if registry is not None else get_default_registry()
    # is_store_contribution gates the point, so every visible payload qualifies.
    payloads = target.extensions_for_point(STORE_EXTENSION_POINT)
    return cast("tuple[StoreContribution, ...]", payloads)


def reduce_store(
    state: Mapping[str, Any],
    action: Action,
    registry: ExtensionRegistry | None = None,
) -> Mapping[str, Any]:
    """Apply every visible store reducer to its slice of ``state``.

    Reducers run in registration order; several contributions sharing a
    ``key`` are chained.

    Args:
        state (Mapping[str, Any]): Root state; never mutated.
        action (Action): The dispatched action.
        registry (ExtensionRegistry | None): Registry to read contributions from.

    Returns:
        Mapping[str, Any]: ``state`` itself when no slice changed, otherwise a
        new dict with the changed slices replaced.
    """
    changed: dict[str, Any] = {}
    for contribution in _contributions(registry):
        key = contribution.key
        current = changed[key] if key in changed else state.get(key)
        updated = contribution.reducer(current, action)
        if updated is not current:
            changed[key] = updated

    if not changed:
        return state
    logger.trace("Action %s changed store slice(s): %s", action.type, ", ".join(sorted(changed)))
    return {**state, **changed}


def undo_action_for(
    action_type: str,
    registry: ExtensionRegistry | None = None,
) -> UndoAction | None:
    """Return the undo/redo factories for ``action_type``, or None if no contribution has any.

    The first contribution (in registration order) declaring the type wins.
    """
    for contribution in _contributions(registry):
        undo = contribution.undo_actions.get(action_type)
        if undo is not None:
            return undo
    return None
