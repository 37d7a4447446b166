"""
Famille Image — IM01 image seule, IM02/IM03 image + légende (dessous / à droite),
IM04 section texte + image (inversible).
"""
from typing import Literal, Optional

from pydantic import Field

from .base import BlockFamily, ContentModel, Subvariant

CAPTIONED_VARIANTS = frozenset({"IM02", "IM03"})
SECTION_VARIANT = "IM04"


class ImageContent(ContentModel):
    src: str = ""
    alt: str = ""
    caption: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    align_h: Literal["left", "center", "right"] = Field(default="center", alias="alignH")
    align_v: Literal["top", "center", "bottom"] = Field(default="center", alias="alignV")
    # IM04
    title: str = ""
    text: str = ""
    reverse: bool = False


IMAGE_FAMILY = BlockFamily(
    id="image",
    label="Image",
    icon="image",
    aliases=("image",),
    subvariants=[
        Subvariant(
            id="IM01", name="IM01", title="Image seule",
            description="Une image, téléversée ou par lien.",
            preview="/previews/im01.bmp",
            default_content={"src": "", "alt": "", "variant": "IM01", "type": "image"},
        ),
        Subvariant(
            id="IM02", name="IM02", title="Image avec légende dessous",
            description="Image avec une légende en dessous.",
            preview="/previews/im02.bmp",
            default_content={"src": "", "alt": "", "variant": "IM02", "type": "image", "caption": ""},
            settings={"allowCaption": True},
        ),
        Subvariant(
            id="IM03", name="IM03", title="Image avec légende à droite",
            description="Image avec une légende à droite.",
            preview="/previews/im03.bmp",
            default_content={"src": "", "alt": "", "variant": "IM03", "type": "image", "caption": ""},
            settings={"allowCaption": True},
        ),
        Subvariant(
            id="IM04", name="IM04", title="Section avec image",
            description="Texte (avec ou sans titre) + image ; texte et image peuvent être inversés.",
            preview="/previews/im04.bmp",
            default_content={
                "title": "", "text": "", "src": "", "alt": "",
                "variant": "IM04", "type": "image-section", "reverse": False,
            },
            settings={
                "allowTitle": True, "allowText": True, "allowReverse": True,
                "allowUpload": True, "allowUrl": True, "maxImages": 1,
            },
        ),
    ],
)
