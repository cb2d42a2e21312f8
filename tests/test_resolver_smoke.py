from __future__ import annotations

import itertools

import pytest
from mcmodrename.models import ModIdentity, NameSource, RegistryRecord
from mcmodrename.resolver import (
    SIDE_TAGS,
    category_tag,
    pick_name,
    resolve_label,
    side_code,
    side_tag,
)

SIDE_VALUES = ["unsupported", "optional", "required", "unknown", "", None]


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("unsupported", -1),
        ("optional", 0),
        ("required", 1),
        ("unknown", -99),
        ("Required", -99),
        ("", -99),
        (None, -99),
    ],
)
def test_side_code(value, expected: int) -> None:
    assert side_code(value) == expected


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("client", "server", "expected"),
    [
        ("required", "required", "[C&S]"),
        ("optional", "optional", "[C|S]"),
        ("unsupported", "unsupported", "[Toxic]"),
        ("required", "optional", "[C]"),
        ("optional", "required", "[S]"),
        ("required", "unsupported", "[!S]"),
        ("unsupported", "required", "[!C]"),
    ],
)
def test_side_tag_table(client: str, server: str, expected: str) -> None:
    assert side_tag(client, server) == expected


@pytest.mark.smoke
def test_unlisted_side_pairs_give_empty_tag() -> None:
    for client, server in itertools.product(SIDE_VALUES, repeat=2):
        if (side_code(client), side_code(server)) in SIDE_TAGS:
            continue
        assert side_tag(client, server) == ""


@pytest.mark.smoke
def test_category_tag_translates_each_category_in_order() -> None:
    translations = {"technology": "科技", "storage": "存储"}
    tag = category_tag(["storage", "utility", "technology"], translations)
    assert tag == "[存储][utility][科技]"
    assert tag.count("[") == 3
    assert tag.count("]") == 3


@pytest.mark.smoke
def test_category_tag_empty() -> None:
    assert category_tag([], {"technology": "科技"}) == ""


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("localized", "display_name", "expected", "source"),
    [
        ("机械动力", "Create", "机械动力", NameSource.DB),
        ("机械动力", None, "机械动力", NameSource.DB),
        ("机械动力", "", "机械动力", NameSource.DB),
        (None, "Create", "Create", NameSource.MANIFEST),
        ("", "Create", "Create", NameSource.MANIFEST),
        (None, None, "create", NameSource.MOD_ID),
        ("", "", "create", NameSource.MOD_ID),
        (None, "", "create", NameSource.MOD_ID),
    ],
)
def test_name_precedence(localized, display_name, expected: str, source: NameSource) -> None:
    identity = ModIdentity(mod_id="create", display_name=display_name, version="6.0")
    assert pick_name(identity, localized) == (expected, source)


@pytest.mark.smoke
def test_resolve_label_with_record() -> None:
    identity = ModIdentity(mod_id="examplemod", display_name=None, version="1.0")
    record = RegistryRecord(
        client_side="required", server_side="optional", categories=["technology"]
    )

    label = resolve_label(identity, None, record, {"technology": "科技"})
    assert label.side_tag == "[C]"
    assert label.category_tag == "[科技]"
    assert label.final_name == "[C][科技]examplemod-1.0.jar"
    assert label.version == "1.0"


@pytest.mark.smoke
def test_resolve_label_without_record_has_no_tags() -> None:
    identity = ModIdentity(mod_id="examplemod", display_name=None, version="1.0")
    label = resolve_label(identity, None, None, {"technology": "科技"})
    assert label.side_tag == ""
    assert label.category_tag == ""
    assert label.final_name == "examplemod-1.0.jar"


@pytest.mark.smoke
def test_resolve_label_unknown_sides_keep_categories() -> None:
    identity = ModIdentity(mod_id="jei", display_name="Just Enough Items", version="19.0")
    record = RegistryRecord(client_side="unknown", server_side="unknown", categories=[])
    label = resolve_label(identity, "JEI物品管理器", record, {})
    assert label.final_name == "JEI物品管理器-19.0.jar"
