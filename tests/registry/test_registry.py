# topmark:header:start
#
#   project      : ExtReg
#   file         : test_registry.py
#   file_relpath : tests/registry/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Behavioral tests for [`ExtensionRegistry`][extreg.registry.ExtensionRegistry].

These cover the public contract: validator gating, identity-stable results,
legacy point names, argument errors and change notifications.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from extreg.core.diagnostics import DiagnosticLevel
from extreg.errors import InvalidArgumentError
from extreg.registry import ChangeKind, ExtensionChange, ExtensionRegistry
from tests.conftest import always

if TYPE_CHECKING:
    from collections.abc import Callable


def _warnings(registry: ExtensionRegistry) -> list[str]:
    return [d.message for d in registry.diagnostics if d.level is DiagnosticLevel.WARNING]


def test_register_then_unregister_restores_previous_result(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("p", "d", always(True))
    empty = registry.extensions_for_point("p")

    ext_id = registry.register_extension("p", "A")
    assert registry.extensions_for_point("p") == ("A",)
    registry.unregister_extension(ext_id)

    assert registry.extensions_for_point("p") is empty

    registry.register_extension("p", "B")
    before = registry.extensions_for_point("p")
    registry.unregister_extension(registry.register_extension("p", "C"))
    assert registry.extensions_for_point("p") == before


def test_documenting_exposes_earlier_registrations(registry: ExtensionRegistry) -> None:
    registry.register_extension("a", "My extension")
    assert registry.extensions_for_point("a") == ()

    registry.document_extension_point("a", "d", always(True))

    assert registry.extensions_for_point("a") == ("My extension",)


def test_validator_swap_refreshes_result(registry: ExtensionRegistry) -> None:
    """A rejecting validator hides the point; replacing it shows the entry again."""
    registry.register_extension("a", "My extension")
    registry.document_extension_point("a", "d", always(False))
    assert len(registry.extensions_for_point("a")) == 0

    registry.document_extension_point("a", "d", always(True))
    assert len(registry.extensions_for_point("a")) == 1

    assert len(_warnings(registry)) == 1


def test_one_rejected_payload_hides_the_whole_point(registry: ExtensionRegistry) -> None:
    registry.register_extension("p", "good")
    registry.register_extension("p", "bad")
    registry.document_extension_point("p", "d", lambda payload: payload == "good")

    hidden = registry.extensions_for_point("p")

    assert hidden == ()
    assert registry.extensions_for_points(["p"])["p"] is hidden
    assert len(_warnings(registry)) == 2


def test_same_object_until_point_changes(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("a", "d", always(True))
    registry.register_extension("a", "A")
    first = registry.extensions_for_point("a")
    assert registry.extensions_for_point("a") is first

    ext_id = registry.register_extension("a", "B")
    second = registry.extensions_for_point("a")
    assert second is not first

    registry.unregister_extension(ext_id)
    third = registry.extensions_for_point("a")
    assert third is not second
    assert third == first

    registry.document_extension_point("a", "d", always(True))
    assert registry.extensions_for_point("a") is not third


def test_abc_scenario(registry: ExtensionRegistry) -> None:
    """Validators gate each point independently in a multi-point query."""
    registry.register_extension("a", "A")
    registry.register_extension("b", "B")
    registry.register_extension("c", "C")
    registry.document_extension_point("a", "d", always(True))
    registry.document_extension_point("b", "d", always(True))
    registry.document_extension_point("c", "d", always(False))

    result = registry.extensions_for_points(["a", "b", "c"])

    assert dict(result) == {"a": ("A",), "b": ("B",), "c": ()}
    reordered = registry.extensions_for_points(["c", "b", "a"])
    assert reordered is result
    for key in ("a", "b", "c"):
        assert reordered[key] is result[key]
    assert len(_warnings(registry)) == 2


def test_unrelated_points_keep_results_stable(registry: ExtensionRegistry) -> None:
    registry.register_extension("a", "AA")
    before_doc = registry.extensions_for_point("a")
    registry.document_extension_point("a", "d", always(True))
    after_doc = registry.extensions_for_point("a")
    assert after_doc is not before_doc
    assert registry.extensions_for_point("a") is after_doc

    subset = registry.extensions_for_points(["a"])
    registry.register_extension("b", "BB")
    registry.document_extension_point("b", "d", always(True))
    initial_b = registry.extensions_for_point("b")

    assert registry.extensions_for_point("b") is initial_b
    assert registry.extensions_for_point("a") is after_doc
    assert registry.extensions_for_points(["a"]) is subset


def test_legacy_point_names(registry: ExtensionRegistry) -> None:
    """Entries under a renamed point and its legacy name merge in order."""
    registry.register_extension("a-1", {"name": "beforeDocs"})
    registry.document_extension_point("a-2", "d", always(True), {"legacyName": "a-1"})

    assert len(registry.extensions_for_point("a-2")) == 1
    assert len(registry.extensions_for_point("a-1")) == 1

    legacy_id = registry.register_extension("a-1", {"name": "afterDocs"})
    registry.register_extension("a-2", {"name": "afterDocs-canonical"})

    expected = (
        {"name": "beforeDocs"},
        {"name": "afterDocs"},
        {"name": "afterDocs-canonical"},
    )
    assert registry.extensions_for_point("a-1") == expected
    assert registry.extensions_for_point("a-2") == expected
    assert registry.extensions_for_point("a-1") is registry.extensions_for_point("a-2")

    registry.unregister_extension(legacy_id)
    assert len(registry.extensions_for_point("a-1")) == 2
    assert len(registry.extensions_for_point("a-2")) == 2

    assert _warnings(registry) == ["Extension point renamed from a-1 to a-2"]


def test_rename_notice_is_logged(
    registry: ExtensionRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    registry.document_extension_point("new", "d", always(True), legacy_name="old")

    with caplog.at_level("WARNING"):
        registry.extensions_for_point("old")
        registry.extensions_for_points(["old", "new"])

    assert caplog.text.count("Extension point renamed from old to new") == 1


def test_rename_notice_rearmed_for_new_alias(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("x", "d", always(True), legacy_name="old")
    registry.extensions_for_point("old")
    registry.document_extension_point("y", "d", always(True), legacy_name="old")
    registry.extensions_for_point("old")

    assert _warnings(registry) == [
        "Extension point renamed from old to x",
        "Extension point renamed from old to y",
    ]


def test_dropping_legacy_name_splits_the_views(registry: ExtensionRegistry) -> None:
    registry.register_extension("old", "O")
    registry.register_extension("new", "N")
    registry.document_extension_point("new", "d", always(True), legacy_name="old")
    assert registry.extensions_for_point("new") == ("O", "N")

    registry.document_extension_point("new", "d", always(True))

    assert registry.extensions_for_point("new") == ("N",)
    assert registry.extensions_for_point("old") == ()
    assert registry.canonical_name("old") == "old"


def test_undocumented_point_warns_once(registry: ExtensionRegistry) -> None:
    registry.register_extension("p", "A")
    registry.extensions_for_point("p")
    registry.register_extension("p", "B")
    registry.extensions_for_point("p")

    assert len(_warnings(registry)) == 1
    assert registry.registered_count("p") == 2


def test_register_without_arguments_fails() -> None:
    registry = ExtensionRegistry()
    with pytest.raises(InvalidArgumentError, match="extension"):
        registry.register_extension()
    with pytest.raises(InvalidArgumentError, match="extension"):
        registry.register_extension("a")
    assert len(registry) == 0


def test_unregister_unknown_id_is_noop(registry: ExtensionRegistry) -> None:
    registry.unregister_extension("does-not-exist")
    ext_id = registry.register_extension("p", "A")
    registry.unregister_extension(ext_id)
    registry.unregister_extension(ext_id)
    assert len(registry) == 0


def test_unregister_all_extensions(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("new", "d", always(True), legacy_name="old")
    registry.register_extension("new", "N1")
    registry.register_extension("new", "N2")
    registry.register_extension("old", "O")

    assert registry.unregister_all_extensions("new") == 2
    assert registry.extensions_for_point("new") == ("O",)
    assert registry.unregister_all_extensions("new") == 0


def test_documentation_view(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("b", "Point B", always(True))
    registry.document_extension_point(
        "a", "Point A", always(True), {"url": "https://docs/a", "legacyName": "a-old"}
    )

    docs = registry.extension_point_documentation()

    assert list(docs) == ["a", "b"]
    assert docs["a"].description == "Point A"
    assert docs["a"].external_documentation_url == "https://docs/a"
    assert docs["b"].external_documentation_url is None
    doc = registry.lookup("a")
    assert doc is not None and doc.legacy_name == "a-old"


def test_extension_points_lists_registered_and_documented(registry: ExtensionRegistry) -> None:
    registry.register_extension("z", "Z")
    registry.document_extension_point("a", "d", always(True))
    assert registry.extension_points() == ("a", "z")


def test_clear_resets_everything(registry: ExtensionRegistry) -> None:
    registry.document_extension_point("new", "d", always(True), legacy_name="old")
    registry.register_extension("old", "O")
    before = registry.extensions_for_point("old")

    registry.clear()

    assert len(registry) == 0
    assert registry.extension_point_documentation() == {}
    assert len(registry.diagnostics) == 0
    assert registry.extensions_for_point("new") == ()
    assert registry.extensions_for_point("new") is not before

    registry.document_extension_point("new", "d", always(True), legacy_name="old")
    registry.extensions_for_point("old")
    assert "Extension point renamed from old to new" in _warnings(registry)


def test_change_listeners(registry: ExtensionRegistry) -> None:
    seen: list[ExtensionChange] = []
    unsubscribe = registry.add_change_listener(seen.append)

    ext_id = registry.register_extension("p", "A")
    registry.document_extension_point("p", "d", always(True))
    registry.unregister_extension(ext_id)
    registry.unregister_extension(ext_id)
    registry.clear()

    assert seen == [
        ExtensionChange(ChangeKind.REGISTERED, "p", ext_id),
        ExtensionChange(ChangeKind.DOCUMENTED, "p"),
        ExtensionChange(ChangeKind.UNREGISTERED, "p", ext_id),
        ExtensionChange(ChangeKind.CLEARED),
    ]

    unsubscribe()
    registry.register_extension("p", "B")
    assert len(seen) == 4
    assert registry.remove_change_listener(seen.append) is False


def test_failing_listener_does_not_block_mutation(registry: ExtensionRegistry) -> None:
    seen: list[ChangeKind] = []

    def _broken(_change: ExtensionChange) -> None:
        raise RuntimeError("listener failed")

    registry.add_change_listener(_broken)
    registry.add_change_listener(lambda change: seen.append(change.kind))

    registry.register_extension("p", "A")

    assert seen == [ChangeKind.REGISTERED]
    assert len(registry) == 1


@pytest.mark.parametrize(
    "mutate",
    [
        lambda r: r.register_extension("a", "X"),
        lambda r: r.document_extension_point("a", "d", always(True)),
        lambda r: r.unregister_all_extensions("a"),
    ],
)
def test_mutations_invalidate_multi_point_results(
    registry: ExtensionRegistry, mutate: Callable[[ExtensionRegistry], object]
) -> None:
    registry.document_extension_point("a", "d", always(True))
    registry.document_extension_point("b", "d", always(True))
    registry.register_extension("a", "A")
    result = registry.extensions_for_points(["a", "b"])

    mutate(registry)

    updated = registry.extensions_for_points(["b", "a"])
    assert updated is not result
    assert updated["b"] is result["b"]


def test_independent_registries_do_not_share_state() -> None:
    first = ExtensionRegistry()
    second = ExtensionRegistry()
    first.document_extension_point("p", "d", always(True))
    first.register_extension("p", "A")

    assert second.extensions_for_point("p") == ()
    assert len(second) == 0
    assert "ExtensionRegistry extensions=1" in repr(first)
