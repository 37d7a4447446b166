"""Tests éditeurs de détail — champs, patchs produits, bornes, bloc disparu."""
import pytest

from page_blocks.editor.forms import (
    ButtonEditor, ColumnsEditor, GalleryEditor, ImageEditor, NoteEditor, QAEditor,
    TableEditor, TextEditor, TileGridEditor, TileLinkEditor, editor_for,
)


class _Store:
    """Contenu d'un bloc en mémoire ; commit remplace tout (comme "replace")."""

    def __init__(self, content):
        self.content = content
        self.commits = []

    def read(self):
        return self.content

    def commit(self, patch):
        self.commits.append(patch)
        self.content = patch


def _editor(cls, block_type, content):
    store = _Store(content)
    return cls(block_type, store.read, store.commit), store


# ── Dispatch ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("block_type,cls", [
    ("TX02", TextEditor), ("NT01", NoteEditor), ("BF03", ButtonEditor), ("QA01", QAEditor),
    ("CL01", ColumnsEditor), ("IM04", ImageEditor), ("GL03", GalleryEditor),
    ("TL01", TileLinkEditor), ("TL02", TileGridEditor), ("TB01", TableEditor), ("UNKNOWN", TextEditor),
])
def test_editor_for(block_type, cls):
    assert type(editor_for(block_type, lambda: {}, lambda p: None)) is cls


def test_no_detail_editor_for_containers():
    assert editor_for("TS01", lambda: {}, lambda p: None) is None


# ── Bloc disparu ──────────────────────────────────────────────────────────────

def test_stale_block_is_noop():
    commits = []
    ed = TextEditor("TX01", lambda: None, commits.append)
    assert ed.set_html("<p>x</p>") is False
    assert commits == []


# ── Texte / Note / Bouton ─────────────────────────────────────────────────────

def test_text_patch_keeps_other_fields():
    ed, store = _editor(TextEditor, "TX02", {"html": "", "variant": "TX02"})
    ed.set_html("<p>ok</p>")
    assert store.content == {"html": "<p>ok</p>", "variant": "TX02"}


def test_note_type_validated():
    ed, store = _editor(NoteEditor, "NT01", {"html": ""})
    ed.set_note_type("warning")
    assert store.content["noteType"] == "warning"
    with pytest.raises(ValueError):
        ed.set_note_type("purple")


def test_note_icon_validated():
    ed, store = _editor(NoteEditor, "NT01", {})
    ed.set_icon("bi bi-lightbulb")
    assert store.content["icon"] == "bi bi-lightbulb"
    with pytest.raises(ValueError):
        ed.set_icon("bi bi-rocket")


def test_note_fields_expose_pickers():
    ed, _ = _editor(NoteEditor, "NT01", {})
    icon_field = next(f for f in ed.fields() if f.name == "icon")
    assert len(icon_field.options) == 11


def test_button_patch_is_full_content():
    ed, store = _editor(ButtonEditor, "BF01", {"text": "Go", "url": "/a"})
    ed.set_link_type("pdf")
    ed.set_pdf_url("/uploads/doc.pdf")
    assert store.content == {"text": "Go", "url": "/a", "linkType": "pdf", "pdfUrl": "/uploads/doc.pdf"}


def test_button_invalid_align():
    ed, _ = _editor(ButtonEditor, "BF01", {})
    with pytest.raises(ValueError):
        ed.set_align("middle")


# ── Question-Réponse ──────────────────────────────────────────────────────────

def test_qa_add_edit_remove():
    ed, store = _editor(QAEditor, "QA01", {"items": []})
    ed.add_item()
    ed.set_question(0, "Pourquoi ?")
    ed.set_answer(0, "<p>Parce que.</p>")
    assert store.content["items"] == [{"question": "Pourquoi ?", "answer": {"html": "<p>Parce que.</p>"}}]
    ed.add_item("Deux ?")
    assert ed.remove_item(0)
    assert [i["question"] for i in store.content["items"]] == ["Deux ?"]


def test_qa_out_of_range_noop():
    ed, store = _editor(QAEditor, "QA02", {"items": []})
    assert ed.set_question(3, "x") is False
    assert store.commits == []


# ── Colonnes / Image ──────────────────────────────────────────────────────────

def test_columns_set_html_replaces_array():
    ed, store = _editor(ColumnsEditor, "CL01", {"columns": [{"html": "a"}, {"html": "b"}]})
    ed.set_column_html(1, "<p>B</p>")
    assert store.content["columns"] == [{"html": "a", "subtitle": ""}, {"html": "<p>B</p>", "subtitle": ""}]


def test_columns_cl02_fields():
    ed, _ = _editor(ColumnsEditor, "CL02", {"columns": [{"html": "", "type": "h2"}, {"html": ""}]})
    assert [f.name for f in ed.fields()] == ["columns.0.subtitle", "columns.1.html"]


def test_image_fields_by_variant():
    section, _ = _editor(ImageEditor, "IM04", {"variant": "IM04"})
    captioned, _ = _editor(ImageEditor, "IM02", {"variant": "IM02"})
    plain, _ = _editor(ImageEditor, "IM01", {"variant": "IM01"})
    assert "reverse" in [f.name for f in section.fields()]
    assert "caption" in [f.name for f in captioned.fields()]
    assert "caption" not in [f.name for f in plain.fields()]


def test_image_setters():
    ed, store = _editor(ImageEditor, "IM03", {"src": "", "variant": "IM03"})
    ed.set_image("/uploads/a.png", alt="A")
    ed.set_alignment(vertical="bottom")
    assert store.content == {"src": "/uploads/a.png", "alt": "A", "alignV": "bottom", "variant": "IM03"}


# ── Galerie / grille de tuiles ────────────────────────────────────────────────

def test_gallery_add_bounded_by_max_images():
    ed, store = _editor(GalleryEditor, "GL03", {"images": [], "maxImages": 2})
    assert ed.add_image("a.png")
    assert ed.add_image("b.png")
    assert ed.add_image("c.png") is False
    assert len(store.content["images"]) == 2
    assert not ed.can_add()


def test_gallery_default_max_is_20():
    ed, _ = _editor(GalleryEditor, "GL01", {"images": []})
    assert ed.max_items() == 20


def test_gallery_move_update_remove():
    ed, store = _editor(GalleryEditor, "GL01", {"images": [{"src": "a"}, {"src": "b"}, {"src": "c"}]})
    ed.move_image(2, 0)
    assert [i["src"] for i in store.content["images"]] == ["c", "a", "b"]
    ed.update_image(1, caption="<p>A</p>")
    assert store.content["images"][1]["caption"] == "<p>A</p>"
    ed.remove_image(0)
    assert [i["src"] for i in store.content["images"]] == ["a", "b"]
    assert ed.move_image(0, 5) is False


def test_gallery_height_and_caption():
    ed, store = _editor(GalleryEditor, "GL01", {"images": []})
    ed.set_image_height(320)
    ed.set_gallery_caption("<p>g</p>")
    assert store.content["imageHeight"] == 320
    assert store.content["galleryCaption"] == "<p>g</p>"


def test_tile_grid_default_max_is_12():
    ed, store = _editor(TileGridEditor, "TL02", {"items": []})
    for _ in range(12):
        assert ed.add_item()
    assert ed.add_item() is False
    assert store.content["items"][0]["linkType"] == "url"


def test_tile_link_set_link():
    ed, store = _editor(TileLinkEditor, "TL01", {"src": "a.png"})
    ed.set_link(pdf_url="/uploads/x.pdf", link_type="pdf", open_in_new_tab=False)
    assert store.content == {"src": "a.png", "pdfUrl": "/uploads/x.pdf", "linkType": "pdf", "openInNewTab": False}
    with pytest.raises(ValueError):
        ed.set_link(link_type="ftp")


# ── Tableau ───────────────────────────────────────────────────────────────────

def test_table_cell_row_column_ops():
    ed, store = _editor(TableEditor, "TB02", {"rows": [["a", "b"], ["c", "d"]]})
    ed.update_cell(1, 0, "C")
    ed.add_row()
    ed.add_column()
    assert store.content["rows"] == [["a", "b", ""], ["C", "d", ""], ["", "", ""]]
    ed.remove_column(0)
    ed.remove_row(2)
    assert store.content["rows"] == [["b", ""], ["d", ""]]


def test_table_keeps_last_row_and_column():
    ed, store = _editor(TableEditor, "TB02", {"rows": [["seul"]]})
    assert ed.remove_row(0) is False
    assert ed.remove_column(0) is False
    assert store.commits == []


def test_table_toggle_headers():
    ed, store = _editor(TableEditor, "TB01", {"hasHeaders": True, "rows": [["h"]]})
    ed.toggle_headers()
    assert store.content["hasHeaders"] is False


def test_table_missing_rows_start_with_blank_row():
    ed, store = _editor(TableEditor, "TB02", {})
    ed.update_cell(0, 2, "x")
    assert store.content["rows"] == [["", "", "x"]]
