"""
page_blocks — modèle de contenu par blocs d'un CMS.

Usage rapide :
    from page_blocks import BlockEditor, render_blocks

    editor = BlockEditor(blocks, on_change=save)
    editor.add_block("text", "TX01")
    html = render_blocks(editor.blocks)
"""
__version__ = "0.3.0"

from .core.schemas import Block, Tab, parse_blocks, dump_blocks
from .blocks.registry import BLOCK_VARIANTS, catalog, get_family, resolve_variant
from .renderer.html import HtmlRenderer, render_blocks
from .renderer.view_state import ViewState
from .editor.engine import BlockEditor

__all__ = [
    "Block", "Tab", "parse_blocks", "dump_blocks",
    "BLOCK_VARIANTS", "catalog", "get_family", "resolve_variant",
    "HtmlRenderer", "render_blocks", "ViewState",
    "BlockEditor",
]
