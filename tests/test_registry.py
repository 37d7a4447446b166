"""Tests registry — catalogue, résolution de sous-variantes, dispatch par type, règles de fusion."""
import pytest

from page_blocks.blocks import registry
from page_blocks.blocks.base import read_content
from page_blocks.blocks.button import ButtonContent
from page_blocks.blocks.gallery import GalleryContent
from page_blocks.blocks.qa import QAContent
from page_blocks.blocks.table import TableContent


# ── Catalogue ─────────────────────────────────────────────────────────────────

def test_families_in_picker_order():
    assert [f.id for f in registry.BLOCK_VARIANTS] == [
        "text", "button", "qa", "note", "tabs", "columns", "image", "gallery", "tile-link", "table",
    ]


def test_every_subvariant_dispatches_to_its_family():
    for family in registry.BLOCK_VARIANTS:
        for sub in family.subvariants:
            assert registry.family_for_type(sub.id) is family, sub.id


def test_subvariant_ids_unique():
    ids = [s.id for f in registry.BLOCK_VARIANTS for s in f.subvariants]
    assert len(ids) == len(set(ids))


def test_catalog_is_json_compatible():
    import json
    data = registry.catalog()
    json.dumps(data)
    tabs = next(f for f in data if f["id"] == "tabs")
    assert "tabs" not in tabs["nestable_families"]
    assert "text" in tabs["nestable_families"]


# ── resolve_variant ───────────────────────────────────────────────────────────

def test_resolve_variant_returns_type_and_default():
    block_type, content = registry.resolve_variant("text", "TX01")
    assert block_type == "TX01"
    assert content == {"html": ""}


def test_resolve_variant_deep_copies():
    _, first = registry.resolve_variant("table", "TB01")
    first["rows"][0][0] = "modifié"
    _, second = registry.resolve_variant("table", "TB01")
    assert second["rows"][0][0] == "En-tête 1"


def test_resolve_unknown_family_raises():
    with pytest.raises(ValueError, match="Famille inconnue"):
        registry.resolve_variant("hero", "HR01")


def test_resolve_unknown_subvariant_raises():
    with pytest.raises(ValueError, match="Sous-variante inconnue"):
        registry.resolve_variant("text", "BF01")


# ── Dispatch ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("block_type,family_id", [
    ("TX05", "text"), ("text", "text"), ("note", "note"), ("NT02", "note"),
    ("image", "image"), ("gallery", "gallery"), ("TL02", "tile-link"), ("TB02", "table"),
])
def test_family_for_type(block_type, family_id):
    assert registry.family_for_type(block_type).id == family_id


def test_family_for_unknown_type():
    assert registry.family_for_type("UNKNOWN") is None
    assert registry.family_for_type("") is None


@pytest.mark.parametrize("block_type", ["TS99", "QA07", "TL05", "BF99", "IMX", "TX"])
def test_unregistered_tags_have_no_family(block_type):
    assert registry.family_for_type(block_type) is None
    assert not registry.is_container(block_type)


def test_only_tabs_are_containers():
    assert registry.is_container("TS01")
    assert registry.is_container("TS02")
    assert not registry.is_container("TX01")
    assert not registry.is_container("UNKNOWN")


def test_nesting_rules():
    assert registry.can_nest("TS01", "image")
    assert not registry.can_nest("TS01", "tabs")
    assert not registry.can_nest("TX01", "text")


# ── merge_content ─────────────────────────────────────────────────────────────

def test_merge_replaces_array_fields_wholesale():
    current = {"columns": [{"html": "a"}, {"html": "b"}], "variant": "CL01"}
    out = registry.merge_content("CL01", current, {"columns": [{"html": "c"}]})
    assert out == {"columns": [{"html": "c"}], "variant": "CL01"}


def test_merge_does_not_mutate_current():
    current = {"html": "a"}
    registry.merge_content("TX01", current, {"html": "b"})
    assert current == {"html": "a"}


def test_merge_button_replace_rule():
    assert registry.merge_content("BF02", {"text": "a", "url": "b"}, {"url": "c"}) == {"url": "c"}


# ── Lecture tolérante du contenu ──────────────────────────────────────────────

def test_read_content_defaults():
    c = read_content(ButtonContent, {})
    assert (c.text, c.link_type, c.open_in_new_tab, c.align) == ("", "external", True, "center")


def test_read_content_drops_invalid_field():
    c = read_content(ButtonContent, {"text": "OK", "align": "diagonal", "linkType": "pdf"})
    assert c.text == "OK"
    assert c.align == "center"
    assert c.link_type == "pdf"


def test_read_content_nulls_are_defaults():
    c = read_content(GalleryContent, {"images": [{"src": None, "alt": "a"}], "imageHeight": None})
    assert c.images[0].src == ""
    assert c.image_height == 240


def test_read_content_non_dict():
    assert read_content(QAContent, None).items == []


def test_qa_answer_string_coerced():
    c = read_content(QAContent, {"items": [{"question": "Q", "answer": "<p>R</p>"}]})
    assert c.items[0].answer.html == "<p>R</p>"


def test_table_cells_as_text():
    c = read_content(TableContent, {"rows": [[1, None, "x"]]})
    assert c.rows == [["1", "", "x"]]
