"""Famille Bouton — lien stylé (BF01–BF06). Le patch remplace tout le contenu."""
from typing import Literal

from pydantic import Field

from .base import BlockFamily, ContentModel, Subvariant

LinkType = Literal["external", "internal", "pdf"]
Align = Literal["left", "center", "right"]

# Variantes affichant une flèche ↗ après le libellé
ARROW_VARIANTS = frozenset({"BF03", "BF04", "BF06"})


class ButtonContent(ContentModel):
    text: str = ""
    url: str = ""
    pdf_url: str = Field(default="", alias="pdfUrl")
    link_type: LinkType = Field(default="external", alias="linkType")
    open_in_new_tab: bool = Field(default=True, alias="openInNewTab")
    align: Align = "center"


def _bf(sid: str, title: str, description: str = "", preview_ext: str = "bmp") -> Subvariant:
    return Subvariant(
        id=sid, name=sid, title=title, description=description,
        preview=f"/previews/{sid.lower()}.{preview_ext}",
        default_content={"text": "", "url": ""},
    )


BUTTON_FAMILY = BlockFamily(
    id="button",
    label="Bouton",
    icon="button",
    merge="replace",
    subvariants=[
        _bf("BF01", "Bouton plein", "Bouton plein de couleur bleue."),
        _bf("BF02", "Bouton transparent"),
        _bf("BF03", "Bouton transparent avec flèche"),
        _bf("BF04", "Bouton original"),
        _bf("BF05", "Bouton minimaliste", "Ressemble à un simple texte souligné."),
        _bf("BF06", "Bouton minimaliste avec flèche", "Variante du précédent, avec une icône flèche.", "png"),
    ],
)
