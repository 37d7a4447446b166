"""Famille Note — encadré avec icône et type de couleur (NT01–NT03)."""
from pydantic import Field

from .base import BlockFamily, ContentModel, Subvariant

NOTE_ICONS = [
    {"value": "bi bi-info-lg", "label": "Info"},
    {"value": "bi bi-info-square", "label": "Info (carré)"},
    {"value": "bi bi-info-circle", "label": "Info (cercle)"},
    {"value": "bi bi-exclamation-square", "label": "Exclamation (carré)"},
    {"value": "bi bi-question-square", "label": "Question (carré)"},
    {"value": "bi bi-lightbulb", "label": "Ampoule"},
    {"value": "bi bi-plus-lg", "label": "Plus"},
    {"value": "bi bi-dash-lg", "label": "Moins"},
    {"value": "bi bi-question-lg", "label": "Question"},
    {"value": "bi bi-bookmarks", "label": "Marque-page"},
    {"value": "bi bi-bookmarks-fill", "label": "Marque-page (plein)"},
]

NOTE_TYPES = [
    {"value": "default", "label": "Default"},
    {"value": "info", "label": "Info"},
    {"value": "warning", "label": "Warning"},
    {"value": "lighting", "label": "Lighting"},
]


class NoteContent(ContentModel):
    html: str = ""
    icon: str = "bi bi-info-square"
    note_type: str = Field(default="info", alias="noteType")
    text: str = ""


_TYPE_ICONS = [
    {"value": "info", "label": "Info", "icon": "bi bi-info-lg"},
    {"value": "warning", "label": "Attention", "icon": "bi bi-lightbulb"},
    {"value": "explanation", "label": "Explication", "icon": "bi bi-exclamation-circle"},
]

NOTE_FAMILY = BlockFamily(
    id="note",
    label="Note",
    icon="note",
    aliases=("note",),
    subvariants=[
        Subvariant(
            id="NT01", name="NT01", title="Note", description="Note minimaliste",
            preview="/previews/nt01.bmp",
            default_content={"html": "", "variant": "NT01", "icon": "bi bi-info-square", "noteType": "info"},
            options=[
                {"value": "bi bi-info-square", "label": "Info (bleu foncé)"},
                {"value": "bi bi-bookmarks-fill", "label": "Default (noir)"},
            ],
        ),
        Subvariant(
            id="NT02", name="NT02", title="Note avec filet à gauche",
            preview="/previews/nt02.bmp",
            default_content={"html": "", "variant": "NT02", "noteType": "info", "icon": "bi bi-info-lg", "text": ""},
            options=_TYPE_ICONS,
        ),
        Subvariant(
            id="NT03", name="NT03", title="Note sur fond coloré",
            description="Fond coloré et icône à gauche ; la couleur dépend du type.",
            preview="/previews/nt03.bmp",
            default_content={"html": "", "variant": "NT03", "noteType": "info", "icon": "bi bi-info-lg", "text": ""},
            options=_TYPE_ICONS,
        ),
    ],
)
