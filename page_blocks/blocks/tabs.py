"""
Famille Onglets — seul conteneur du catalogue (TS01 horizontal, TS02 vertical).

Les onglets vivent dans content["tabs"] ; chaque onglet porte sa propre
liste ordonnée de blocs. Les id d'onglets sont attribués à l'instanciation
(core.tree.new_block), pas dans le catalogue.
"""
from typing import Any, Dict, List

from .base import BlockFamily, ContentModel, Subvariant

VERTICAL_VARIANTS = frozenset({"TS02"})


class TabsContent(ContentModel):
    tabs: List[Dict[str, Any]] = []


def _default_tabs() -> dict:
    return {"tabs": [{"title": "Onglet 1", "children": []}, {"title": "Onglet 2", "children": []}]}


TABS_FAMILY = BlockFamily(
    id="tabs",
    label="Onglets",
    icon="tabs",
    container=True,
    nestable=False,
    subvariants=[
        Subvariant(
            id="TS01", name="TS01", title="Section à onglets (horizontaux)",
            description="Plusieurs onglets côte à côte ; chaque onglet accueille des blocs (texte, images, boutons…).",
            preview="/previews/ts01.bmp", default_content=_default_tabs(),
        ),
        Subvariant(
            id="TS02", name="TS02", title="Section à onglets (verticaux)",
            description="Onglets empilés, chacun dépliable indépendamment ; chaque onglet accueille des blocs.",
            preview="/previews/ts02.bmp", default_content=_default_tabs(),
        ),
    ],
)
