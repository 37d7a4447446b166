"""Famille Colonnes — 2 ou 3 colonnes de texte riche (CL01–CL04)."""
from typing import List, Optional

from .base import BlockFamily, ContentModel, ItemModel, Subvariant

# CL02 : la première colonne est un sous-titre, la seconde du texte
SUBTITLE_VARIANTS = frozenset({"CL02"})


class ColumnItem(ItemModel):
    html: str = ""
    type: Optional[str] = None
    subtitle: str = ""


class ColumnsContent(ContentModel):
    columns: List[ColumnItem] = []


def _cl(sid: str, title: str, description: str, columns: list) -> Subvariant:
    return Subvariant(
        id=sid, name=sid, title=title, description=description,
        preview=f"/previews/{sid.lower()}.bmp", default_content={"columns": columns},
    )


COLUMNS_FAMILY = BlockFamily(
    id="columns",
    label="Colonnes",
    icon="columns",
    subvariants=[
        _cl("CL01", "Deux colonnes (deux textes)", "Deux colonnes, chacune avec un éditeur de texte.",
            [{"html": ""}, {"html": ""}]),
        _cl("CL02", "Deux colonnes : sous-titre et texte", "Sous-titre (h2) à gauche, texte à droite.",
            [{"html": "", "type": "h2"}, {"html": ""}]),
        _cl("CL03", "Deux colonnes : texte et note", "Texte à gauche, texte plus petit (note) à droite.",
            [{"html": ""}, {"html": ""}]),
        _cl("CL04", "Trois colonnes (trois textes)", "Trois colonnes, chacune avec un éditeur de texte.",
            [{"html": ""}, {"html": ""}, {"html": ""}]),
    ],
)
