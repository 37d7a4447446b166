"""
Base des familles de blocs : catalogue (BlockFamily / Subvariant) et
modèles de contenu tolérants.

Le contenu d'un bloc reste un dict côté arbre ; les modèles ci-dessous ne
servent qu'à le LIRE avec des valeurs par défaut. Un champ absent ou mal
formé n'est jamais une erreur : il est retiré puis remplacé par son défaut.
"""
import logging
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

log = logging.getLogger(__name__)

MergeRule = Literal["merge", "replace"]


class ItemModel(BaseModel):
    """Élément de liste d'un contenu (image, question, colonne…). null → défaut."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class ContentModel(ItemModel):
    """Contenu typé d'un bloc. Champs inconnus conservés, clés wire en camelCase."""

    variant: Optional[str] = None


C = TypeVar("C", bound=ContentModel)


def read_content(model_cls: Type[C], content: Any) -> C:
    """Lit un dict de contenu ; les champs invalides retombent sur leur défaut."""
    data = content if isinstance(content, dict) else {}
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
        log.warning("Contenu %s : champs ignorés %s", model_cls.__name__, sorted(map(str, bad)))
        return model_cls.model_validate({k: v for k, v in data.items() if k not in bad})


class Subvariant(BaseModel):
    """Sous-variante sélectionnable d'une famille (= tag de type concret)."""
    id: str
    name: str
    title: str
    description: str = ""
    preview: str = ""
    default_content: Dict[str, Any] = Field(default_factory=dict)
    settings: Dict[str, Any] = Field(default_factory=dict)
    options: List[Dict[str, Any]] = Field(default_factory=list)


class BlockFamily(BaseModel):
    """Famille de blocs : une stratégie de rendu + d'édition partagée."""
    id: str
    label: str
    icon: str = ""
    aliases: Tuple[str, ...] = ()      # anciens tags nus : "text", "image"…
    merge: MergeRule = "merge"
    container: bool = False
    nestable: bool = True               # peut être placé dans un onglet
    subvariants: List[Subvariant] = Field(default_factory=list)

    def matches(self, block_type: str) -> bool:
        return block_type in self.aliases or self.subvariant(block_type) is not None

    def subvariant(self, subvariant_id: str) -> Optional[Subvariant]:
        return next((s for s in self.subvariants if s.id == subvariant_id), None)
