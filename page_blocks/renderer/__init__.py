from .base import AssetResolver, Renderer, default_resolver
from .view_state import ViewState
from .html import HtmlRenderer, render_blocks, render_block

__all__ = ["AssetResolver", "Renderer", "default_resolver", "ViewState", "HtmlRenderer", "render_blocks", "render_block"]
