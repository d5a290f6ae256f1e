# topmark:header:start
#
#   project      : ExtReg
#   file         : discovery.py
#   file_relpath : src/extreg/registry/discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plugin discovery: populate a registry from modules and entry points.

Two plugin sources are supported:

* **Modules** named in the configuration (``plugins = [...]``). Importing the
  module is the registration side effect; a module may additionally expose a
  ``register_extensions(registry)`` hook, which is called with the target
  registry.
* **Entry points** in the ``extreg.plugins`` group. The loaded object is
  called with the target registry when it is callable; otherwise loading it
  (importing its module) is the side effect.

Failures are logged with their traceback and skipped: a broken plugin must
not prevent the others from contributing.

Notes:
    Import side effects run once per process. Modules that register at import
    time target the default registry; use the ``register_extensions`` hook to
    populate other registry instances.
"""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any, Final

from extreg.config.logging import get_logger
from extreg.constants import ENTRYPOINT_GROUP
from extreg.registry.registry import ExtensionRegistry, get_default_registry

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

    from extreg.config.logging import ExtregLogger
    from extreg.config.model import RegistryConfig

logger: ExtregLogger = get_logger(__name__)

PLUGIN_HOOK: Final[str] = "register_extensions"


def import_plugins(registry: ExtensionRegistry, modules: Iterable[str]) -> tuple[str, ...]:
    """Import plugin modules and run their ``register_extensions`` hooks.

    Args:
        registry (ExtensionRegistry): Registry handed to the hooks.
        modules (Iterable[str]): Dotted module names, imported in order.

    Returns:
        tuple[str, ...]: Names of the modules that loaded successfully.
    """
    loaded: list[str] = []
    for modname in modules:
        try:
            mod: ModuleType = import_module(modname)
            hook: Any = getattr(mod, PLUGIN_HOOK, None)
            if hook is not None:
                if not callable(hook):
                    logger.warning("%s.%s is not callable; skipping", modname, PLUGIN_HOOK)
                    continue
                hook(registry)
        except Exception:
            logger.exception("Failed to load extension plugin module %s", modname)
            continue
        logger.debug("Loaded extension plugin module %s", modname)
        loaded.append(modname)
    return tuple(loaded)


def load_entry_points(
    registry: ExtensionRegistry,
    group: str = ENTRYPOINT_GROUP,
) -> tuple[str, ...]:
    """Load the plugins advertised under an entry point group.

    Args:
        registry (ExtensionRegistry): Registry passed to callable entry points.
        group (str): Entry point group to scan.

    Returns:
        tuple[str, ...]: Names of the entry points that loaded successfully.
    """
    try:
        eps = entry_points()
    except Exception:
        logger.exception("Failed to read entry points")
        return ()

    candidates: EntryPoints = eps.select(group=group)
    loaded: list[str] = []
    for ep in candidates:
        try:
            provider: Any = ep.load()
            if callable(provider):
                provider(registry)
        except Exception:
            logger.exception("Failed loading extensions from entry point %s", ep.name)
            continue
        logger.debug("Loaded extension entry point %s (%s)", ep.name, ep.value)
        loaded.append(ep.name)
    return tuple(loaded)


def bootstrap(
    config: RegistryConfig,
    registry: ExtensionRegistry | None = None,
) -> ExtensionRegistry:
    """Populate ``registry`` (default: the process-wide one) from ``config``.

    Configured modules are imported first, then entry points (when enabled).

    Returns:
        ExtensionRegistry: The populated registry.
    """
    target = registry if registry is not None else get_default_registry()
    modules = import_plugins(target, config.plugins)
    eps: tuple[str, ...] = ()
    if config.load_entry_points:
        eps = load_entry_points(target, config.entry_point_group)
    logger.info(
        "Bootstrapped %r from %d module(s) and %d entry point(s)", target, len(modules), len(eps)
    )
    return target
