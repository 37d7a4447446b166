"""
Schémas Pydantic de l'arbre de blocs.
Format wire/stockage : Block → (conteneurs) Tab → Block …

Block := {id, type, content, order, children?}
Tab   := {id, title, children: Block[]}

Les modèles sont figés (frozen) : une mutation passe toujours par
model_copy() et produit un nouvel objet, jamais une écriture en place.
"""
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_serializer


class Block(BaseModel):
    """Nœud de contenu d'une page (ou d'un onglet)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    type: str = Field(..., description="Tag de type (TX01, BF03, TS01…)")
    content: Dict[str, Any] = Field(default_factory=dict)
    order: int = Field(default=0, ge=0)
    children: Optional[List["Tab"]] = None  # onglets (lecture seule, cf. core.tree.get_tabs)

    @field_validator("content", mode="before")
    @classmethod
    def _content_default(cls, v):
        return {} if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def _empty_children_absent(cls, v):
        # Les anciens payloads portent children: [] sur chaque bloc
        return None if v == [] else v

    @model_serializer(mode="wrap")
    def _omit_absent_children(self, handler):
        data = handler(self)
        if self.children is None:
            data.pop("children", None)
        return data


class Tab(BaseModel):
    """Onglet d'un bloc conteneur. La position dans la liste fait l'ordre."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    children: List[Block] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_default(cls, v):
        return "" if v is None else v

    @field_validator("children", mode="before")
    @classmethod
    def _children_default(cls, v):
        return [] if v is None else v


Block.model_rebuild()

_BLOCK_LIST = TypeAdapter(List[Block])


def parse_blocks(data: Iterable[Any]) -> List[Block]:
    """Valide une liste wire (dicts ou Block) → List[Block]."""
    return _BLOCK_LIST.validate_python(list(data or []))


def dump_blocks(blocks: Iterable[Block]) -> List[dict]:
    """List[Block] → liste wire (JSON-compatible)."""
    return [b.model_dump(mode="json") for b in blocks]
