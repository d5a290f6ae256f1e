# topmark:header:start
#
#   project      : ExtReg
#   file         : test_discovery.py
#   file_relpath : tests/registry/test_discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for plugin discovery (modules, entry points, bootstrap)."""

from __future__ import annotations

import sys
from importlib.metadata import EntryPoint, EntryPoints
from typing import TYPE_CHECKING

import pytest

from extreg.config.model import RegistryConfig
from extreg.registry import ExtensionRegistry, get_default_registry
from extreg.registry import discovery
from tests.plugins import sample_plugin

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE = "tests.plugins.sample_plugin"
BROKEN = "tests.plugins.broken_plugin"
INVALID_HOOK = "tests.plugins.invalid_hook_plugin"


def _fake_entry_points(monkeypatch: pytest.MonkeyPatch, *specs: tuple[str, str]) -> None:
    eps = EntryPoints(
        EntryPoint(name=name, value=value, group="extreg.plugins") for name, value in specs
    )
    monkeypatch.setattr(discovery, "entry_points", lambda: eps)


def test_import_plugins_runs_hook(registry: ExtensionRegistry) -> None:
    loaded = discovery.import_plugins(registry, [SAMPLE])

    assert loaded == (SAMPLE,)
    assert registry.extensions_for_point(sample_plugin.MENU_POINT) == (
        {"label": "Open"},
        {"label": "Legacy"},
    )


def test_import_plugins_skips_failures(registry: ExtensionRegistry) -> None:
    loaded = discovery.import_plugins(
        registry, [BROKEN, "tests.plugins.does_not_exist", INVALID_HOOK, SAMPLE]
    )

    assert loaded == (SAMPLE,)
    assert registry.registered_count(sample_plugin.MENU_POINT) == 1


def test_import_plugins_accepts_modules_without_hook(
    registry: ExtensionRegistry, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A module without a hook is imported for its side effects only."""
    (tmp_path / "extreg_side_effect_plugin.py").write_text(
        "from extreg import api\napi.register_extension('side.effect', 'loaded')\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "extreg_side_effect_plugin", raising=False)

    loaded = discovery.import_plugins(registry, ["extreg_side_effect_plugin"])

    assert loaded == ("extreg_side_effect_plugin",)
    assert len(registry) == 0
    assert get_default_registry().registered_count("side.effect") == 1


def test_load_entry_points(registry: ExtensionRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_entry_points(
        monkeypatch,
        ("sample", f"{SAMPLE}:register_extensions"),
        ("missing", "tests.plugins.does_not_exist:register_extensions"),
        ("module-only", INVALID_HOOK),
    )

    loaded = discovery.load_entry_points(registry)

    assert loaded == ("sample", "module-only")
    assert registry.registered_count(sample_plugin.LEGACY_MENU_POINT) == 1


def test_load_entry_points_filters_by_group(
    registry: ExtensionRegistry, monkeypatch: pytest.MonkeyPatch
) -> None:
    _fake_entry_points(monkeypatch, ("sample", f"{SAMPLE}:register_extensions"))

    assert discovery.load_entry_points(registry, group="other.group") == ()
    assert len(registry) == 0


def test_bootstrap_honors_config(
    registry: ExtensionRegistry, monkeypatch: pytest.MonkeyPatch
) -> None:
    _fake_entry_points(monkeypatch, ("sample", f"{SAMPLE}:register_extensions"))

    config = RegistryConfig(plugins=(SAMPLE,), load_entry_points=False)
    assert discovery.bootstrap(config, registry) is registry
    assert registry.registered_count(sample_plugin.MENU_POINT) == 1

    registry.clear()
    discovery.bootstrap(RegistryConfig(), registry)
    assert registry.registered_count(sample_plugin.MENU_POINT) == 1


def test_bootstrap_defaults_to_the_default_registry() -> None:
    target = discovery.bootstrap(RegistryConfig(plugins=(SAMPLE,), load_entry_points=False))
    assert target is get_default_registry()
    assert target.registered_count(sample_plugin.UNDOCUMENTED_POINT) == 1
