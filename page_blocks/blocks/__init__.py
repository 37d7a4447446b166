"""
Blocs — familles du catalogue + registry de variantes.
"""
from .base import BlockFamily, Subvariant, ContentModel, ItemModel, read_content
from .text import TextContent, TEXT_FAMILY
from .button import ButtonContent, BUTTON_FAMILY
from .qa import QAContent, QAItem, QAAnswer, QA_FAMILY
from .note import NoteContent, NOTE_FAMILY
from .tabs import TabsContent, TABS_FAMILY
from .columns import ColumnsContent, ColumnItem, COLUMNS_FAMILY
from .image import ImageContent, IMAGE_FAMILY
from .gallery import GalleryContent, GalleryImage, GALLERY_FAMILY
from .tile_link import TileLinkContent, TileGridContent, TileLinkItem, TILE_LINK_FAMILY
from .table import TableContent, TABLE_FAMILY
from .registry import (
    BLOCK_VARIANTS,
    get_family,
    get_subvariant,
    resolve_variant,
    family_for_type,
    is_container,
    nestable_families,
    can_nest,
    merge_content,
    catalog,
)

__all__ = [
    # Base
    "BlockFamily", "Subvariant", "ContentModel", "ItemModel", "read_content",
    # Familles
    "TextContent", "TEXT_FAMILY",
    "ButtonContent", "BUTTON_FAMILY",
    "QAContent", "QAItem", "QAAnswer", "QA_FAMILY",
    "NoteContent", "NOTE_FAMILY",
    "TabsContent", "TABS_FAMILY",
    "ColumnsContent", "ColumnItem", "COLUMNS_FAMILY",
    "ImageContent", "IMAGE_FAMILY",
    "GalleryContent", "GalleryImage", "GALLERY_FAMILY",
    "TileLinkContent", "TileGridContent", "TileLinkItem", "TILE_LINK_FAMILY",
    "TableContent", "TABLE_FAMILY",
    # Registry
    "BLOCK_VARIANTS", "get_family", "get_subvariant", "resolve_variant",
    "family_for_type", "is_container", "nestable_families", "can_nest",
    "merge_content", "catalog",
]
