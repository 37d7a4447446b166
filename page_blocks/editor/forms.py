"""
Éditeurs de détail — un formulaire par famille.

Un éditeur ne connaît que deux fonctions : read() (contenu courant du bloc,
None si le bloc a disparu entre-temps) et commit(patch). Il ne touche jamais
à l'arbre : l'engine applique le patch avec la règle de fusion de la famille.
Chaque patch est le contenu complet ({**contenu, **changements}), ce qui le
rend valable aussi bien pour "merge" que pour "replace".
"""
import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Type

from pydantic import BaseModel

from ..blocks.base import ContentModel, read_content
from ..blocks.button import ButtonContent
from ..blocks.columns import SUBTITLE_VARIANTS, ColumnsContent
from ..blocks.gallery import DEFAULT_MAX_IMAGES, GalleryContent, GalleryImage
from ..blocks.image import CAPTIONED_VARIANTS, SECTION_VARIANT, ImageContent
from ..blocks.note import NOTE_ICONS, NOTE_TYPES, NoteContent
from ..blocks.qa import QAContent, QAItem
from ..blocks.registry import family_for_type
from ..blocks.table import TableContent
from ..blocks.text import TextContent
from ..blocks.tile_link import DEFAULT_MAX_ITEMS, GRID_VARIANT, TileGridContent, TileLinkContent, TileLinkItem

log = logging.getLogger(__name__)

ContentReader = Callable[[], Optional[Dict[str, Any]]]
ContentCommit = Callable[[Dict[str, Any]], None]

FieldKind = Literal["html", "text", "url", "select", "checkbox", "number", "image", "list", "grid"]


class FormField(BaseModel):
    name: str
    label: str
    kind: FieldKind = "text"
    options: List[Dict[str, Any]] = []


def _choices(options: List[Dict[str, Any]]) -> List[str]:
    return [o["value"] for o in options]


def _move(items: list, src: int, dst: int) -> Optional[list]:
    if not (0 <= src < len(items) and 0 <= dst < len(items)):
        return None
    items = list(items)
    items.insert(dst, items.pop(src))
    return items


# ── Base ────────────────────────────────────────────────────────────────────

class DetailEditor:
    content_model: Type[ContentModel] = ContentModel
    FIELDS: List[FormField] = []

    def __init__(self, block_type: str, read: ContentReader, commit: ContentCommit):
        self.block_type = block_type
        self._read = read
        self._commit = commit

    def fields(self) -> List[FormField]:
        return list(self.FIELDS)

    @property
    def content(self) -> Optional[Dict[str, Any]]:
        return self._read()

    def model(self):
        current = self._read()
        return None if current is None else read_content(self.content_model, current)

    def update(self, changes: Dict[str, Any]) -> bool:
        """Envoie {**contenu courant, **changes}. False si le bloc n'existe plus."""
        current = self._read()
        if current is None:
            log.debug("%s : bloc disparu, modification ignorée", type(self).__name__)
            return False
        self._commit({**current, **changes})
        return True


# ── Texte / Note ────────────────────────────────────────────────────────────

class TextEditor(DetailEditor):
    content_model = TextContent
    FIELDS = [FormField(name="html", label="Texte", kind="html")]

    def set_html(self, html: str) -> bool:
        return self.update({"html": html})


class NoteEditor(DetailEditor):
    content_model = NoteContent
    FIELDS = [
        FormField(name="icon", label="Icône", kind="select", options=NOTE_ICONS),
        FormField(name="noteType", label="Couleur", kind="select", options=NOTE_TYPES),
        FormField(name="html", label="Texte", kind="html"),
    ]

    def set_icon(self, icon: str) -> bool:
        if icon not in _choices(NOTE_ICONS):
            raise ValueError(f"Icône inconnue : {icon!r}")
        return self.update({"icon": icon})

    def set_note_type(self, note_type: str) -> bool:
        if note_type not in _choices(NOTE_TYPES):
            raise ValueError(f"Type de note inconnu : {note_type!r}. Attendu : {_choices(NOTE_TYPES)}")
        return self.update({"noteType": note_type})

    def set_html(self, html: str) -> bool:
        return self.update({"html": html})


# ── Bouton ──────────────────────────────────────────────────────────────────

_LINK_TYPES = [
    {"value": "external", "label": "Lien externe"},
    {"value": "internal", "label": "Page du site"},
    {"value": "pdf", "label": "Document PDF"},
]
_ALIGNS = [{"value": "left", "label": "Gauche"}, {"value": "center", "label": "Centre"}, {"value": "right", "label": "Droite"}]


class ButtonEditor(DetailEditor):
    content_model = ButtonContent
    FIELDS = [
        FormField(name="text", label="Libellé"),
        FormField(name="linkType", label="Type de lien", kind="select", options=_LINK_TYPES),
        FormField(name="url", label="Adresse", kind="url"),
        FormField(name="pdfUrl", label="Fichier PDF", kind="url"),
        FormField(name="openInNewTab", label="Ouvrir dans un nouvel onglet", kind="checkbox"),
        FormField(name="align", label="Alignement", kind="select", options=_ALIGNS),
    ]

    def set_text(self, text: str) -> bool:
        return self.update({"text": text})

    def set_url(self, url: str) -> bool:
        return self.update({"url": url})

    def set_pdf_url(self, pdf_url: str) -> bool:
        return self.update({"pdfUrl": pdf_url})

    def set_link_type(self, link_type: str) -> bool:
        if link_type not in _choices(_LINK_TYPES):
            raise ValueError(f"Type de lien inconnu : {link_type!r}")
        return self.update({"linkType": link_type})

    def set_open_in_new_tab(self, value: bool) -> bool:
        return self.update({"openInNewTab": bool(value)})

    def set_align(self, align: str) -> bool:
        if align not in _choices(_ALIGNS):
            raise ValueError(f"Alignement inconnu : {align!r}")
        return self.update({"align": align})


# ── Question-Réponse ────────────────────────────────────────────────────────

class QAEditor(DetailEditor):
    content_model = QAContent
    FIELDS = [FormField(name="items", label="Questions", kind="list")]

    def _items(self) -> Optional[List[dict]]:
        c = self.model()
        return None if c is None else [i.model_dump(by_alias=True) for i in c.items]

    def _set_items(self, items: Optional[List[dict]]) -> bool:
        return items is not None and self.update({"items": items})

    def add_item(self, question: str = "", answer_html: str = "") -> bool:
        items = self._items()
        if items is None:
            return False
        return self._set_items(items + [{"question": question, "answer": {"html": answer_html}}])

    def remove_item(self, index: int) -> bool:
        items = self._items()
        if items is None or not 0 <= index < len(items):
            return False
        return self._set_items(items[:index] + items[index + 1:])

    def set_question(self, index: int, question: str) -> bool:
        return self._edit(index, {"question": question})

    def set_answer(self, index: int, html: str) -> bool:
        return self._edit(index, {"answer": {"html": html}})

    def _edit(self, index: int, data: dict) -> bool:
        items = self._items()
        if items is None or not 0 <= index < len(items):
            return False
        return self._set_items([{**it, **data} if i == index else it for i, it in enumerate(items)])


# ── Colonnes ────────────────────────────────────────────────────────────────

class ColumnsEditor(DetailEditor):
    content_model = ColumnsContent

    def fields(self) -> List[FormField]:
        c = self.model()
        count = len(c.columns) if c else 0
        if self.block_type in SUBTITLE_VARIANTS:
            return [FormField(name="columns.0.subtitle", label="Sous-titre"),
                    FormField(name="columns.1.html", label="Texte", kind="html")]
        return [FormField(name=f"columns.{i}.html", label=f"Colonne {i + 1}", kind="html") for i in range(count)]

    def _set_column(self, index: int, data: dict) -> bool:
        c = self.model()
        if c is None or not 0 <= index < len(c.columns):
            return False
        columns = [col.model_dump(by_alias=True, exclude_none=True) for col in c.columns]
        columns[index] = {**columns[index], **data}
        return self.update({"columns": columns})

    def set_column_html(self, index: int, html: str) -> bool:
        return self._set_column(index, {"html": html})

    def set_subtitle(self, subtitle: str, index: int = 0) -> bool:
        return self._set_column(index, {"subtitle": subtitle})


# ── Image ───────────────────────────────────────────────────────────────────

class ImageEditor(DetailEditor):
    content_model = ImageContent

    def _variant(self) -> str:
        c = self.model()
        return ((c.variant if c else None) or self.block_type).upper()

    def fields(self) -> List[FormField]:
        variant = self._variant()
        fields = [FormField(name="src", label="Image", kind="image"), FormField(name="alt", label="Texte alternatif")]
        if variant == SECTION_VARIANT:
            return [
                FormField(name="title", label="Titre"),
                FormField(name="text", label="Texte", kind="html"),
                *fields,
                FormField(name="reverse", label="Inverser texte et image", kind="checkbox"),
            ]
        if variant in CAPTIONED_VARIANTS:
            fields.append(FormField(name="caption", label="Légende", kind="html"))
        return fields + [
            FormField(name="width", label="Largeur (px)", kind="number"),
            FormField(name="height", label="Hauteur (px)", kind="number"),
            FormField(name="alignH", label="Alignement horizontal", kind="select", options=_ALIGNS),
            FormField(name="alignV", label="Alignement vertical", kind="select", options=[
                {"value": "top", "label": "Haut"}, {"value": "center", "label": "Centre"}, {"value": "bottom", "label": "Bas"},
            ]),
        ]

    def set_image(self, src: str, alt: Optional[str] = None) -> bool:
        changes = {"src": src}
        if alt is not None:
            changes["alt"] = alt
        return self.update(changes)

    def set_caption(self, caption: str) -> bool:
        return self.update({"caption": caption})

    def set_alignment(self, horizontal: Optional[str] = None, vertical: Optional[str] = None) -> bool:
        changes = {}
        if horizontal is not None:
            changes["alignH"] = horizontal
        if vertical is not None:
            changes["alignV"] = vertical
        return self.update(changes)

    def set_size(self, width: Optional[int] = None, height: Optional[int] = None) -> bool:
        return self.update({"width": width, "height": height})

    def set_title(self, title: str) -> bool:
        return self.update({"title": title})

    def set_text(self, html: str) -> bool:
        return self.update({"text": html})

    def set_reverse(self, reverse: bool) -> bool:
        return self.update({"reverse": bool(reverse)})


# ── Listes bornées (galerie, grille de tuiles) ──────────────────────────────

class _ListEditor(DetailEditor):
    """Liste d'éléments avec ajout borné, suppression, déplacement, édition."""
    list_key = ""
    item_model: Type[BaseModel] = BaseModel
    max_key = ""
    default_max = 0

    def _items(self) -> Optional[List[dict]]:
        c = self.model()
        if c is None:
            return None
        return [i.model_dump(by_alias=True) for i in getattr(c, self.list_key)]

    def max_items(self) -> int:
        current = self._read() or {}
        value = current.get(self.max_key)
        return value if isinstance(value, int) and value > 0 else self.default_max

    def can_add(self) -> bool:
        items = self._items()
        return items is not None and len(items) < self.max_items()

    def _add(self, item: dict) -> bool:
        items = self._items()
        if items is None or len(items) >= self.max_items():
            log.debug("%s : limite de %d éléments atteinte", self.block_type, self.max_items())
            return False
        return self.update({self.list_key: items + [self.item_model(**item).model_dump(by_alias=True)]})

    def _remove(self, index: int) -> bool:
        items = self._items()
        if items is None or not 0 <= index < len(items):
            return False
        return self.update({self.list_key: items[:index] + items[index + 1:]})

    def _move(self, src: int, dst: int) -> bool:
        items = self._items()
        moved = _move(items, src, dst) if items is not None else None
        return moved is not None and self.update({self.list_key: moved})

    def _edit(self, index: int, data: dict) -> bool:
        items = self._items()
        if items is None or not 0 <= index < len(items):
            return False
        return self.update({self.list_key: [{**it, **data} if i == index else it for i, it in enumerate(items)]})

    def set_image_height(self, height: int) -> bool:
        return self.update({"imageHeight": int(height)})

    def set_columns(self, columns: int) -> bool:
        return self.update({"columns": int(columns)})


class GalleryEditor(_ListEditor):
    content_model = GalleryContent
    list_key = "images"
    item_model = GalleryImage
    max_key = "maxImages"
    default_max = DEFAULT_MAX_IMAGES
    FIELDS = [
        FormField(name="images", label="Images", kind="list"),
        FormField(name="imageHeight", label="Hauteur des images (px)", kind="number"),
        FormField(name="galleryCaption", label="Légende de la galerie", kind="html"),
    ]

    def add_image(self, src: str = "", alt: str = "", caption: str = "") -> bool:
        return self._add({"src": src, "alt": alt, "caption": caption})

    def remove_image(self, index: int) -> bool:
        return self._remove(index)

    def move_image(self, src: int, dst: int) -> bool:
        return self._move(src, dst)

    def update_image(self, index: int, **data) -> bool:
        return self._edit(index, data)

    def set_gallery_caption(self, caption: str) -> bool:
        return self.update({"galleryCaption": caption})


class TileGridEditor(_ListEditor):
    """TL02"""
    content_model = TileGridContent
    list_key = "items"
    item_model = TileLinkItem
    max_key = "maxItems"
    default_max = DEFAULT_MAX_ITEMS
    FIELDS = [
        FormField(name="items", label="Images-liens", kind="list"),
        FormField(name="columns", label="Colonnes", kind="number"),
        FormField(name="imageHeight", label="Hauteur des images (px)", kind="number"),
    ]

    def add_item(self, src: str = "", url: str = "", **data) -> bool:
        return self._add({"src": src, "url": url, "linkType": "url", "openInNewTab": True, **data})

    def remove_item(self, index: int) -> bool:
        return self._remove(index)

    def move_item(self, src: int, dst: int) -> bool:
        return self._move(src, dst)

    def update_item(self, index: int, **data) -> bool:
        return self._edit(index, data)


class TileLinkEditor(DetailEditor):
    """TL01"""
    content_model = TileLinkContent
    FIELDS = [
        FormField(name="src", label="Image", kind="image"),
        FormField(name="alt", label="Texte alternatif"),
        FormField(name="linkType", label="Type de lien", kind="select",
                  options=[{"value": "url", "label": "Adresse"}, {"value": "pdf", "label": "Document PDF"}]),
        FormField(name="url", label="Adresse", kind="url"),
        FormField(name="pdfUrl", label="Fichier PDF", kind="url"),
        FormField(name="openInNewTab", label="Ouvrir dans un nouvel onglet", kind="checkbox"),
        FormField(name="width", label="Largeur (px)", kind="number"),
        FormField(name="height", label="Hauteur (px)", kind="number"),
        FormField(name="alignH", label="Alignement", kind="select", options=_ALIGNS),
    ]

    def set_image(self, src: str, alt: Optional[str] = None) -> bool:
        changes = {"src": src}
        if alt is not None:
            changes["alt"] = alt
        return self.update(changes)

    def set_link(self, url: Optional[str] = None, pdf_url: Optional[str] = None,
                 link_type: Optional[str] = None, open_in_new_tab: Optional[bool] = None) -> bool:
        if link_type is not None and link_type not in ("url", "pdf"):
            raise ValueError(f"Type de lien inconnu : {link_type!r}")
        changes = {k: v for k, v in (("url", url), ("pdfUrl", pdf_url), ("linkType", link_type),
                                     ("openInNewTab", open_in_new_tab)) if v is not None}
        return self.update(changes)

    def set_size(self, width: Optional[int] = None, height: Optional[int] = None) -> bool:
        return self.update({"width": width, "height": height})

    def set_align(self, align: str) -> bool:
        return self.update({"alignH": align})


# ── Tableau ─────────────────────────────────────────────────────────────────

class TableEditor(DetailEditor):
    content_model = TableContent
    FIELDS = [
        FormField(name="hasHeaders", label="Première ligne = en-têtes", kind="checkbox"),
        FormField(name="rows", label="Cellules", kind="grid"),
    ]

    def _rows(self) -> Optional[List[List[str]]]:
        c = self.model()
        if c is None:
            return None
        return [list(r) for r in c.rows] if c.rows else [["", "", ""]]

    def update_cell(self, row: int, col: int, value: str) -> bool:
        rows = self._rows()
        if rows is None or not 0 <= row < len(rows) or not 0 <= col < len(rows[row]):
            return False
        rows[row][col] = value
        return self.update({"rows": rows})

    def add_row(self) -> bool:
        rows = self._rows()
        if rows is None:
            return False
        return self.update({"rows": rows + [[""] * (len(rows[0]) or 3)]})

    def remove_row(self, row: int) -> bool:
        rows = self._rows()
        if rows is None or len(rows) <= 1 or not 0 <= row < len(rows):
            return False
        return self.update({"rows": rows[:row] + rows[row + 1:]})

    def add_column(self) -> bool:
        rows = self._rows()
        if rows is None:
            return False
        return self.update({"rows": [r + [""] for r in rows]})

    def remove_column(self, col: int) -> bool:
        rows = self._rows()
        if rows is None or len(rows[0]) <= 1 or not 0 <= col < len(rows[0]):
            return False
        return self.update({"rows": [r[:col] + r[col + 1:] for r in rows]})

    def toggle_headers(self) -> bool:
        c = self.model()
        return c is not None and self.update({"hasHeaders": not c.has_headers})


# ── Dispatch ────────────────────────────────────────────────────────────────

_EDITORS: Dict[str, Type[DetailEditor]] = {
    "text":    TextEditor,
    "note":    NoteEditor,
    "button":  ButtonEditor,
    "qa":      QAEditor,
    "columns": ColumnsEditor,
    "image":   ImageEditor,
    "gallery": GalleryEditor,
    "table":   TableEditor,
}


def editor_for(block_type: str, read: ContentReader, commit: ContentCommit) -> Optional[DetailEditor]:
    """Éditeur de détail du type ; None pour les conteneurs (édités par onglets).
    Un type inconnu s'édite comme du texte, à l'image de son rendu."""
    family = family_for_type(block_type)
    if family is None:
        return TextEditor(block_type, read, commit)
    if family.container:
        return None
    if family.id == "tile-link":
        cls = TileGridEditor if block_type == GRID_VARIANT else TileLinkEditor
        return cls(block_type, read, commit)
    return _EDITORS.get(family.id, TextEditor)(block_type, read, commit)
