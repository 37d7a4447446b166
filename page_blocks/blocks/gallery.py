"""Famille Galerie — grille d'images avec légendes (GL01–GL06)."""
from typing import List, Optional

from pydantic import Field

from .base import BlockFamily, ContentModel, ItemModel, Subvariant

DEFAULT_MAX_IMAGES = 20
DEFAULT_IMAGE_HEIGHT = 240


class GalleryImage(ItemModel):
    src: str = ""
    alt: str = ""
    caption: str = ""


class GalleryContent(ContentModel):
    images: List[GalleryImage] = []
    columns: int = 3
    image_height: int = Field(default=DEFAULT_IMAGE_HEIGHT, alias="imageHeight")
    gallery_caption: str = Field(default="", alias="galleryCaption")
    max_images: Optional[int] = Field(default=None, alias="maxImages")


_FULL_SETTINGS = {
    "allowUrl": True, "allowUpload": True, "allowReorder": True, "allowDelete": True,
    "allowImageHeight": True, "allowGalleryCaption": True,
}


def _gl(sid: str, title: str, description: str = "", content: Optional[dict] = None, **settings) -> Subvariant:
    default = {"images": [], "columns": 2, "imageHeight": DEFAULT_IMAGE_HEIGHT, "galleryCaption": ""}
    if content is not None:
        default = content
    return Subvariant(
        id=sid, name=sid, title=title, description=description,
        preview=f"/previews/{sid.lower()}.bmp", default_content=default,
        settings={**_FULL_SETTINGS, **settings},
    )


GALLERY_FAMILY = BlockFamily(
    id="gallery",
    label="Galerie",
    icon="gallery",
    aliases=("gallery",),
    subvariants=[
        _gl("GL01", "Images sur 2 colonnes"),
        _gl("GL02", "Images sur 3 colonnes",
            content={"images": [], "columns": 3, "imageHeight": DEFAULT_IMAGE_HEIGHT, "galleryCaption": ""}),
        _gl("GL03", "Combinaison : grande et petite image",
            "Deux images, une grande et une petite. Hauteur et largeur non réglables.",
            content={"images": [], "galleryCaption": "", "maxImages": 2},
            allowImageHeight=False, maxImages=2),
        _gl("GL04", "Combinaison : 2 images décalées",
            "Deux images décalées, une hauteur commune réglable.",
            content={"images": [], "imageHeight": DEFAULT_IMAGE_HEIGHT, "galleryCaption": "", "maxImages": 2},
            maxImages=2),
        _gl("GL05", "Combinaison d'images",
            "Jusqu'à 5 images avec légendes, disposition des variantes 1 et 2.",
            allowImageHeight=False),
        _gl("GL06", "Combinaison verticales et horizontales",
            "Images verticales et horizontales, légendes et hauteur commune."),
    ],
)
