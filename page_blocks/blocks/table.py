"""Famille Tableau — grille de cellules texte, ligne d'en-tête optionnelle (TB01/TB02)."""
from typing import List

from pydantic import Field, field_validator

from .base import BlockFamily, ContentModel, Subvariant


class TableContent(ContentModel):
    has_headers: bool = Field(default=False, alias="hasHeaders")
    rows: List[List[str]] = []

    @field_validator("rows", mode="before")
    @classmethod
    def _cells_as_text(cls, v):
        if not isinstance(v, list):
            return v
        return [
            ["" if cell is None else str(cell) for cell in row]
            for row in v if isinstance(row, list)
        ]


TABLE_FAMILY = BlockFamily(
    id="table",
    label="Tableau",
    icon="table",
    subvariants=[
        Subvariant(
            id="TB01", name="TB01", title="Tableau avec en-têtes",
            description="Tableau dont la première ligne porte les en-têtes de colonnes.",
            preview="/previews/tb01.bmp",
            default_content={
                "hasHeaders": True,
                "rows": [
                    ["En-tête 1", "En-tête 2", "En-tête 3"],
                    ["Cellule 1-1", "Cellule 1-2", "Cellule 1-3"],
                    ["Cellule 2-1", "Cellule 2-2", "Cellule 2-3"],
                ],
            },
        ),
        Subvariant(
            id="TB02", name="TB02", title="Tableau sans en-têtes",
            description="Tableau simple, sans ligne d'en-tête.",
            preview="/previews/tb02.bmp",
            default_content={
                "hasHeaders": False,
                "rows": [
                    ["Cellule 1-1", "Cellule 1-2", "Cellule 1-3"],
                    ["Cellule 2-1", "Cellule 2-2", "Cellule 2-3"],
                    ["Cellule 3-1", "Cellule 3-2", "Cellule 3-3"],
                ],
            },
        ),
    ],
)
