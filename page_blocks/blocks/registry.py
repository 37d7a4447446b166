"""
Registry des variantes — catalogue statique, lecture seule.

Famille → sous-variantes → (tag de type, contenu par défaut).
Sert aussi de table de dispatch unique : type → famille, pour le renderer
comme pour l'éditeur.
"""
import copy
from typing import Any, Dict, List, Optional, Tuple, Union

from .base import BlockFamily, Subvariant
from .text import TEXT_FAMILY
from .button import BUTTON_FAMILY
from .qa import QA_FAMILY
from .note import NOTE_FAMILY
from .tabs import TABS_FAMILY
from .columns import COLUMNS_FAMILY
from .image import IMAGE_FAMILY
from .gallery import GALLERY_FAMILY
from .tile_link import TILE_LINK_FAMILY
from .table import TABLE_FAMILY

# Ordre d'affichage dans le sélecteur « type de bloc »
BLOCK_VARIANTS: List[BlockFamily] = [
    TEXT_FAMILY,
    BUTTON_FAMILY,
    QA_FAMILY,
    NOTE_FAMILY,
    TABS_FAMILY,
    COLUMNS_FAMILY,
    IMAGE_FAMILY,
    GALLERY_FAMILY,
    TILE_LINK_FAMILY,
    TABLE_FAMILY,
]

_FAMILY_REGISTRY: Dict[str, BlockFamily] = {f.id: f for f in BLOCK_VARIANTS}


def get_family(family_id: str) -> BlockFamily:
    family = _FAMILY_REGISTRY.get(family_id)
    if family is None:
        raise ValueError(f"Famille inconnue : {family_id!r}. Registry : {list(_FAMILY_REGISTRY)}")
    return family


def get_subvariant(family_id: str, subvariant_id: str) -> Subvariant:
    family = get_family(family_id)
    sub = family.subvariant(subvariant_id)
    if sub is None:
        raise ValueError(
            f"Sous-variante inconnue : {subvariant_id!r} pour {family_id!r}. "
            f"Disponibles : {[s.id for s in family.subvariants]}"
        )
    return sub


def resolve_variant(family_id: str, subvariant_id: str) -> Tuple[str, Dict[str, Any]]:
    """(famille, sous-variante) → (tag de type, copie profonde du contenu par défaut)."""
    sub = get_subvariant(family_id, subvariant_id)
    return sub.id, copy.deepcopy(sub.default_content)


def family_for_type(block_type: str) -> Optional[BlockFamily]:
    """Tag de type → famille ; None si le tag n'est ni une sous-variante enregistrée ni un alias."""
    if not block_type:
        return None
    for family in BLOCK_VARIANTS:
        if family.matches(block_type):
            return family
    return None


def is_container(block_type: str) -> bool:
    family = family_for_type(block_type)
    return family is not None and family.container


def nestable_families(container_type: str) -> List[BlockFamily]:
    """Familles qu'un conteneur accepte dans ses onglets (vide si pas conteneur)."""
    if not is_container(container_type):
        return []
    return [f for f in BLOCK_VARIANTS if f.nestable]


def can_nest(container_type: str, family_id: str) -> bool:
    return any(f.id == family_id for f in nestable_families(container_type))


def merge_content(block_type: str, current: Dict[str, Any], patch: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Applique un patch de contenu selon la règle de la famille.

    - une chaîne est un raccourci pour {"html": <chaîne>}
    - "replace" (boutons) : le patch devient le contenu entier
    - "merge" (défaut, types inconnus compris) : fusion superficielle,
      les champs tableau (columns, tabs, items, rows…) sont remplacés en bloc
    """
    if isinstance(patch, str):
        patch = {"html": patch}
    patch = copy.deepcopy(dict(patch or {}))
    family = family_for_type(block_type)
    if family is not None and family.merge == "replace":
        return patch
    return {**(current or {}), **patch}


def catalog() -> List[dict]:
    """Catalogue JSON-compatible (UI « choisir un type puis une sous-variante »)."""
    return [
        {
            **family.model_dump(mode="json"),
            "nestable_families": [f.id for f in nestable_families(family.subvariants[0].id)] if family.container else [],
        }
        for family in BLOCK_VARIANTS
    ]
