"""
Renderer HTML — projette un arbre de blocs en fragment HTML.

Dispatch : type → famille (registry) → une fonction render_*_block.
Un type inconnu passe par le rendu texte générique, jamais d'exception.
Les payloads HTML (texte riche, réponses, légendes) sont déjà nettoyés en
amont et émis tels quels ; les champs texte simples sont échappés.
"""
import logging
from html import escape
from typing import Callable, Dict, Iterable, List, Optional

from ..blocks.base import read_content
from ..blocks.registry import family_for_type
from ..blocks.button import ARROW_VARIANTS, ButtonContent
from ..blocks.columns import SUBTITLE_VARIANTS, ColumnsContent
from ..blocks.gallery import DEFAULT_IMAGE_HEIGHT, GalleryContent
from ..blocks.image import CAPTIONED_VARIANTS, SECTION_VARIANT, ImageContent
from ..blocks.note import NoteContent
from ..blocks.qa import SINGLE_OPEN_VARIANTS, QAContent
from ..blocks.table import TableContent
from ..blocks.tabs import VERTICAL_VARIANTS
from ..blocks.text import TextContent
from ..blocks.tile_link import GRID_VARIANT, TileGridContent, TileLinkContent
from ..core.schemas import Block
from ..core.tree import get_tabs, read_blocks, sort_blocks
from .base import AssetResolver, BlockInput, default_resolver
from .view_state import ViewState

log = logging.getLogger(__name__)

_IMAGE_PLACEHOLDER = '<div class="image-block__placeholder"><i class="bi bi-image"></i></div>'

_FLEX_ALIGN = {"left": "flex-start", "top": "flex-start", "right": "flex-end", "bottom": "flex-end"}
_TEXT_ALIGN = {"left": "text-start", "right": "text-end"}


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_blocks(blocks: Iterable[BlockInput], view: Optional[ViewState] = None,
                  resolve_url: Optional[AssetResolver] = None) -> str:
    """Rend une liste de frères, triée par order. Seule implémentation du rendu :
    le site public et l'aperçu de l'éditeur passent tous deux par ici."""
    ctx = _Context(view or ViewState(), resolve_url or default_resolver)
    return ctx.render_list(read_blocks(list(blocks or [])))


def render_block(block: Block, view: Optional[ViewState] = None,
                 resolve_url: Optional[AssetResolver] = None) -> str:
    return _Context(view or ViewState(), resolve_url or default_resolver).render(block)


class HtmlRenderer:
    """Renderer HTML lié à un résolveur d'assets (implémente le Protocol Renderer)."""

    def __init__(self, resolve_url: Optional[AssetResolver] = None):
        self.resolve_url = resolve_url or default_resolver

    def render_blocks(self, blocks: Iterable[BlockInput], view: Optional[ViewState] = None) -> str:
        return render_blocks(blocks, view, self.resolve_url)

    def render_block(self, block: Block, view: Optional[ViewState] = None) -> str:
        return render_block(block, view, self.resolve_url)


class _Context:
    """État d'un appel de rendu : vue éphémère + résolveur, passés explicitement à chaque nœud."""

    def __init__(self, view: ViewState, resolve_url: AssetResolver):
        self.view = view
        self.resolve_url = resolve_url

    def url(self, path: str) -> str:
        return self.resolve_url(path) if path else ""

    def render_list(self, blocks: List[Block]) -> str:
        return "\n".join(part for part in (self.render(b) for b in sort_blocks(blocks)) if part)

    def render(self, block: Block) -> str:
        family = family_for_type(block.type)
        fn = _RENDERERS.get(family.id) if family else None
        if fn is None:
            log.debug("Type %r non reconnu → rendu texte", block.type)
            return render_fallback(block, self)
        return fn(block, self)


def _variant(block: Block) -> str:
    v = block.content.get("variant")
    return (v if isinstance(v, str) and v else block.type).lower()


def _link_attrs(new_tab: bool) -> str:
    return ' target="_blank" rel="noopener noreferrer"' if new_tab else ""


# ── Texte ───────────────────────────────────────────────────────────────────

def render_text_block(b: Block, ctx: _Context) -> str:
    c = read_content(TextContent, b.content)
    return f'<div class="body-text article-text {escape(b.type.lower())} mb-40">{c.html}</div>'


def render_fallback(b: Block, ctx: _Context) -> str:
    html = b.content.get("html")
    return f'<div class="body-text article-text {escape(b.type.lower())} mb-40">{html if isinstance(html, str) else ""}</div>'


# ── Onglets (conteneur) ─────────────────────────────────────────────────────

def render_tabs_block(b: Block, ctx: _Context) -> str:
    tabs = get_tabs(b)
    classes = f"tabs-block tabs-block--{escape(b.type.lower())} mb-40"

    if b.type in VERTICAL_VARIANTS:
        items = []
        for tab in tabs:
            is_open = ctx.view.is_tab_open(tab.id)
            body = ""
            if is_open and tab.children:
                body = f'\n    <div class="tabs-block__accordion-content">\n{ctx.render_list(tab.children)}\n    </div>'
            items.append(
                f'  <div class="tabs-block__accordion-item" data-tab-id="{escape(tab.id)}">\n'
                f'    <button type="button" class="tabs-block__accordion-header{" active" if is_open else ""}">'
                f'<span>{escape(tab.title)}</span><i class="bi bi-chevron-down"></i></button>{body}\n'
                f'  </div>'
            )
        return f'<div class="{classes}" id="{escape(b.id)}">\n' + "\n".join(items) + "\n</div>"

    active = ctx.view.tab_index(b.id)
    if not 0 <= active < len(tabs):
        active = 0
    headers = "".join(
        f'<button type="button" class="tabs-block__header{" active" if idx == active else ""}" '
        f'data-tab-index="{idx}"><span>{escape(tab.title)}</span></button>'
        for idx, tab in enumerate(tabs)
    )
    body = ""
    if tabs and tabs[active].children:
        body = f'\n  <div class="tabs-block__content">\n{ctx.render_list(tabs[active].children)}\n  </div>'
    return f'<div class="{classes}" id="{escape(b.id)}">\n  <div class="tabs-block__headers">{headers}</div>{body}\n</div>'


# ── Question-Réponse ────────────────────────────────────────────────────────

def render_qa_block(b: Block, ctx: _Context) -> str:
    c = read_content(QAContent, b.content)
    single_open = b.type in SINGLE_OPEN_VARIANTS
    open_idx = ctx.view.open_answer(b.id)

    items = []
    for idx, item in enumerate(c.items):
        is_open = open_idx == idx
        icon = ""
        if single_open:
            icon = f'<i class="bi bi-plus-lg{" qa-block__icon--open" if is_open else ""}"></i>'
        answer = ""
        if not single_open or is_open:
            answer = f'\n    <div class="qa-block__answer body-text article-text tx01">{item.answer.html}</div>'
        items.append(
            f'  <div class="qa-block__item mb-2" data-index="{idx}">\n'
            f'    <div class="qa-block__question-wrapper">'
            f'<div class="qa-block__question">{escape(item.question or "Question")}</div>{icon}</div>{answer}\n'
            f'  </div>'
        )
    return f'<div class="qa-block qa-block--{escape(_variant(b))} mb-40" id="{escape(b.id)}">\n' + "\n".join(items) + "\n</div>"


# ── Bouton ──────────────────────────────────────────────────────────────────

def button_href(c: ButtonContent, resolve_url: AssetResolver = default_resolver) -> str:
    """pdf → pdfUrl résolu ; internal → chemin absolu ; vide → '#'."""
    if c.link_type == "pdf":
        href = resolve_url(c.pdf_url) if c.pdf_url else ""
    else:
        href = c.url
    if not href:
        return "#"
    if c.link_type == "internal" and not href.startswith("/"):
        return f"/{href}"
    return href


def render_button_block(b: Block, ctx: _Context) -> str:
    c = read_content(ButtonContent, b.content)
    align = _TEXT_ALIGN.get(c.align, "text-center")
    arrow = '<i class="bi bi-arrow-up-right"></i>' if b.type in ARROW_VARIANTS else ""
    return (
        f'<div class="{align} mb-40">'
        f'<a href="{escape(button_href(c, ctx.resolve_url))}"{_link_attrs(c.open_in_new_tab)} '
        f'class="button-link {escape(_variant(b))}"><span>{escape(c.text or "Bouton")}</span>{arrow}</a>'
        f'</div>'
    )


# ── Colonnes ────────────────────────────────────────────────────────────────

def render_columns_block(b: Block, ctx: _Context) -> str:
    c = read_content(ColumnsContent, b.content)
    if not c.columns:
        return ""
    if b.type in SUBTITLE_VARIANTS and len(c.columns) >= 2:
        inner = (
            f'<div class="body-text article-text tx01"><h2 class="section-title--sm">{escape(c.columns[0].subtitle)}</h2></div>'
            f'<div class="body-text article-text tx01">{c.columns[1].html}</div>'
        )
    else:
        inner = "".join(f'<div class="body-text article-text tx01">{col.html}</div>' for col in c.columns)
    return f'<div class="{escape(_variant(b))} mb-40">{inner}</div>'


# ── Note ────────────────────────────────────────────────────────────────────

def render_note_block(b: Block, ctx: _Context) -> str:
    c = read_content(NoteContent, b.content)
    return (
        f'<div class="note-block note-block--{escape(_variant(b))} note-block--{escape(c.note_type or "info")} mb-40">'
        f'<i class="{escape(c.icon or "bi bi-info-square")}"></i>'
        f'<p class="body-text article-text tx01">{c.html}</p>'
        f'</div>'
    )


# ── Image ───────────────────────────────────────────────────────────────────

def render_image_block(b: Block, ctx: _Context) -> str:
    c = read_content(ImageContent, b.content)
    variant = (c.variant or b.type).upper()
    if variant == SECTION_VARIANT:
        return render_image_section(b, c, ctx)

    v = c.variant or (b.type if b.type.startswith("IM") else "IM01")
    src = ctx.url(c.src)
    align = _FLEX_ALIGN.get(c.align_v if v == "IM03" else c.align_h, "center")

    if src:
        size = []
        if c.width:
            size.append(f"max-width:min({c.width}px, 100%)")
        if c.height:
            size.append(f"max-height:min({c.height}px, 100%)")
        style = f' style="{";".join(size)}"' if size else ""
        media = f'<img src="{escape(src)}" alt="{escape(c.alt)}" class="image-block__img"{style}>'
    else:
        media = _IMAGE_PLACEHOLDER

    caption = ""
    if v in CAPTIONED_VARIANTS and c.caption:
        caption = f'<div class="image-caption"><div class="body-text article-text tx04">{c.caption}</div></div>'

    return f'<div class="image-block image-block--{escape(v.lower())} mb-40" style="align-items:{align}">{media}{caption}</div>'


def render_image_section(b: Block, c: ImageContent, ctx: _Context) -> str:
    src = ctx.url(c.src)
    title = f'<h2 class="section-title--sm">{escape(c.title)}</h2>' if c.title else ""
    media = f'<img src="{escape(src)}" alt="{escape(c.alt)}">' if src else _IMAGE_PLACEHOLDER
    reverse = " image-block--reverse" if c.reverse else ""
    return (
        f'<div class="image-block image-block--im04{reverse} mb-40">'
        f'<div class="image-block__description">{title}<div class="body-text article-text tx01">{c.text}</div></div>'
        f'<div class="image-block__image">{media}</div>'
        f'</div>'
    )


# ── Galerie ─────────────────────────────────────────────────────────────────

def render_gallery_block(b: Block, ctx: _Context) -> str:
    c = read_content(GalleryContent, b.content)
    height = c.image_height or DEFAULT_IMAGE_HEIGHT

    items = []
    for img in c.images:
        src = ctx.url(img.src)
        media = f'<img src="{escape(src)}" alt="{escape(img.alt)}">' if src else '<i class="bi bi-image"></i>'
        caption = ""
        if img.caption.strip():
            caption = f'<div class="gallery-caption"><div class="body-text article-text tx04">{img.caption}</div></div>'
        items.append(
            f'<div class="gallery-item"><div class="gallery-item__media" style="height:{height}px">{media}</div>{caption}</div>'
        )
    if not items:
        items.append('<div class="text-muted mb-2"></div>')

    gallery_caption = ""
    if c.gallery_caption:
        gallery_caption = f'<div class="gallery-caption"><div class="body-text article-text tx04">{c.gallery_caption}</div></div>'

    return (
        f'<div class="gallery-container mb-40">'
        f'<div class="gallery-block gallery-block--{escape(_variant(b))}" style="--gallery-columns:{c.columns}">{"".join(items)}</div>'
        f'{gallery_caption}</div>'
    )


# ── Tuile-lien ──────────────────────────────────────────────────────────────

def _tile_href(link_type: str, url: str, pdf_url: str, ctx: _Context) -> str:
    return ctx.url(pdf_url) if link_type == "pdf" else url


def render_tile_link_block(b: Block, ctx: _Context) -> str:
    if b.type == GRID_VARIANT:
        return render_tile_grid(b, ctx)

    c = read_content(TileLinkContent, b.content)
    src = ctx.url(c.src)
    if src:
        size = "".join(f"{k}:{v}px;" for k, v in (("width", c.width), ("height", c.height)) if v)
        media = f'<img src="{escape(src)}" alt="{escape(c.alt)}" style="max-width:100%;{size}">'
    else:
        media = _IMAGE_PLACEHOLDER
    href = _tile_href(c.link_type, c.url, c.pdf_url, ctx)
    if href:
        media = f'<a href="{escape(href)}"{_link_attrs(c.open_in_new_tab)}>{media}</a>'
    justify = _FLEX_ALIGN.get(c.align_h, "center")
    return f'<div class="tile-link-block tile-link-block--tl01 mb-40" style="justify-content:{justify}"><div>{media}</div></div>'


def render_tile_grid(b: Block, ctx: _Context) -> str:
    c = read_content(TileGridContent, b.content)
    items = []
    for item in c.items:
        src = ctx.url(item.src)
        img = (f'<img src="{escape(src)}" alt="{escape(item.alt)}" class="tile-link-image">'
               if src else '<i class="bi bi-image"></i>')
        media = f'<div class="tile-link-item__media" style="height:{c.image_height}px">{img}</div>'
        href = _tile_href(item.link_type, item.url, item.pdf_url, ctx)
        if href:
            media = f'<a href="{escape(href)}"{_link_attrs(item.open_in_new_tab)}>{media}</a>'
        items.append(f'<div class="tile-link-item">{media}</div>')
    if not items:
        items.append('<div class="text-muted">Aucune image</div>')
    return (
        f'<div class="tile-link-block tile-link-block--tl02 mb-40">'
        f'<div class="tile-link-grid" style="grid-template-columns:repeat({c.columns}, 1fr)">{"".join(items)}</div>'
        f'</div>'
    )


# ── Tableau ─────────────────────────────────────────────────────────────────

def render_table_block(b: Block, ctx: _Context) -> str:
    c = read_content(TableContent, b.content)
    if not c.rows:
        return ""
    header = c.rows[0] if c.has_headers else []

    rows_html = []
    for r, row in enumerate(c.rows):
        if c.has_headers and r == 0:
            cells = "".join(f"<th>{escape(cell)}</th>" for cell in row)
        elif c.has_headers:
            cells = "".join(
                f'<td data-label="{escape(header[k] if k < len(header) else "")}">{escape(cell)}</td>'
                for k, cell in enumerate(row)
            )
        else:
            cells = "".join(f"<td>{escape(cell)}</td>" for cell in row)
        rows_html.append(f"<tr>{cells}</tr>")

    return (
        f'<div class="table-block table-block--{escape(b.type.lower())} mb-40">'
        f'<div class="table-responsive"><table class="table-block__table"><tbody>{"".join(rows_html)}</tbody></table></div>'
        f'</div>'
    )


# ── Dispatch ────────────────────────────────────────────────────────────────

_RENDERERS: Dict[str, Callable[[Block, _Context], str]] = {
    "text":      render_text_block,
    "tabs":      render_tabs_block,
    "qa":        render_qa_block,
    "button":    render_button_block,
    "columns":   render_columns_block,
    "note":      render_note_block,
    "image":     render_image_block,
    "gallery":   render_gallery_block,
    "tile-link": render_tile_link_block,
    "table":     render_table_block,
}
