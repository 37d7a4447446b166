"""Famille Tuile-lien — TL01 image cliquable, TL02 grille d'images-liens."""
from typing import List, Literal, Optional

from pydantic import Field

from .base import BlockFamily, ContentModel, ItemModel, Subvariant

DEFAULT_MAX_ITEMS = 12
GRID_VARIANT = "TL02"

TileLinkType = Literal["url", "pdf"]


class TileLinkContent(ContentModel):
    """TL01"""
    src: str = ""
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    align_h: Literal["left", "center", "right"] = Field(default="center", alias="alignH")
    url: str = ""
    pdf_url: str = Field(default="", alias="pdfUrl")
    link_type: TileLinkType = Field(default="url", alias="linkType")
    open_in_new_tab: bool = Field(default=True, alias="openInNewTab")


class TileLinkItem(ItemModel):
    src: str = ""
    alt: str = ""
    url: str = ""
    pdf_url: str = Field(default="", alias="pdfUrl")
    link_type: TileLinkType = Field(default="url", alias="linkType")
    open_in_new_tab: bool = Field(default=False, alias="openInNewTab")


class TileGridContent(ContentModel):
    """TL02"""
    items: List[TileLinkItem] = []
    columns: int = 3
    image_height: int = Field(default=240, alias="imageHeight")
    max_items: Optional[int] = Field(default=None, alias="maxItems")


TILE_LINK_FAMILY = BlockFamily(
    id="tile-link",
    label="Tuile et lien",
    icon="link-45deg",
    subvariants=[
        Subvariant(
            id="TL01", name="TL01", title="Image-lien",
            description="Une image qui est aussi un lien.",
            preview="/previews/tl01.bmp",
            default_content={
                "src": "", "alt": "", "width": 800, "height": 600, "alignH": "center",
                "url": "", "pdfUrl": "", "linkType": "url", "openInNewTab": True,
            },
        ),
        Subvariant(
            id="TL02", name="TL02", title="Galerie d'images-liens",
            description="Plusieurs images, chacune avec son propre lien.",
            preview="/previews/tl02.bmp",
            default_content={"items": [], "columns": 3, "imageHeight": 240},
            settings={"maxItems": DEFAULT_MAX_ITEMS},
        ),
    ],
)
