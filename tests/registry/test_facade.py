# topmark:header:start
#
#   project      : ExtReg
#   file         : test_facade.py
#   file_relpath : tests/registry/test_facade.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the default registry, the `Registry` facade and the module-level API."""

from __future__ import annotations

import extreg
from extreg import api
from extreg.errors import InvalidArgumentError
from extreg.registry import ChangeKind, ExtensionChange, Registry, get_default_registry
from tests.conftest import always


def test_default_registry_is_a_singleton() -> None:
    assert get_default_registry() is get_default_registry()


def test_facade_delegates_to_default_registry() -> None:
    Registry.document_extension_point("p", "Point", always(True), url="https://docs/p")
    ext_id = Registry.register_extension("p", "A")

    assert Registry.extensions_for_point("p") == ("A",)
    assert get_default_registry().extensions_for_point("p") is Registry.extensions_for_point("p")
    assert dict(Registry.extensions_for_points(["p"])) == {"p": ("A",)}
    assert Registry.extension_point_documentation()["p"].external_documentation_url == (
        "https://docs/p"
    )
    assert Registry.extension_points() == ("p",)

    Registry.unregister_extension(ext_id)
    assert Registry.extensions_for_point("p") == ()

    Registry.register_extension("p", "B")
    assert Registry.unregister_all_extensions("p") == 1

    Registry.clear()
    assert Registry.extension_points() == ()


def test_facade_register_without_arguments_fails() -> None:
    try:
        Registry.register_extension()
    except InvalidArgumentError as exc:
        assert "extension" in str(exc)
    else:
        raise AssertionError("expected InvalidArgumentError")


def test_module_api_shares_the_default_registry() -> None:
    seen: list[ExtensionChange] = []
    unsubscribe = api.add_change_listener(seen.append)

    extreg.document_extension_point("p", "Point", always(True), {"legacyName": "q"})
    ext_id = extreg.register_extension("q", "A")

    assert Registry.extensions_for_point("p") == ("A",)
    assert extreg.extensions_for_point("q") is extreg.extensions_for_point("p")
    assert extreg.extensions_for_points(["p", "q"])["q"] == ("A",)
    assert list(extreg.extension_point_documentation()) == ["p"]
    assert extreg.extension_points() == ("p", "q")

    extreg.unregister_extension(ext_id)
    assert extreg.unregister_all_extensions("q") == 0
    assert [c.kind for c in seen] == [
        ChangeKind.DOCUMENTED,
        ChangeKind.REGISTERED,
        ChangeKind.UNREGISTERED,
    ]

    unsubscribe()
    assert api.remove_change_listener(seen.append) is False
    extreg.clear()
    assert len(get_default_registry()) == 0
