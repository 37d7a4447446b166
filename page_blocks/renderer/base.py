"""
Protocol Renderer — interface pluggable pour les renderers (HTML, texte…),
et collaborateur « résolution d'URL d'asset ».
"""
from typing import Callable, Iterable, Optional, Protocol, Union, runtime_checkable

from .. import config
from ..core.schemas import Block
from .view_state import ViewState

# chemin stocké (ex. /uploads/x.png) → URL absolue récupérable
AssetResolver = Callable[[str], str]

BlockInput = Union[Block, dict]


def default_resolver(path: str) -> str:
    """Préfixe les chemins d'upload ; tout le reste est renvoyé tel quel."""
    if path and path.startswith(config.UPLOADS_PREFIX):
        return f"{config.ASSETS_BASE_URL}{path}"
    return path


@runtime_checkable
class Renderer(Protocol):
    def render_blocks(self, blocks: Iterable[BlockInput], view: Optional[ViewState] = None) -> str: ...
    def render_block(self, block: Block, view: Optional[ViewState] = None) -> str: ...
