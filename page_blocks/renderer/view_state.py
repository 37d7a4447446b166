"""
État de vue éphémère — onglet sélectionné, onglets dépliés, réponse ouverte.

Jamais sérialisé avec l'arbre : les clés sont des id de bloc / d'onglet,
l'arbre ne connaît pas cet objet. Chaque transition renvoie un nouvel état.
"""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    selected_tab: Dict[str, int] = {}            # id bloc TS01 → index d'onglet
    open_tabs: Dict[str, bool] = {}              # id onglet TS02 → déplié ?
    open_qa: Dict[str, Optional[int]] = {}       # id bloc QA01 → index ouvert

    # ── Lecture ──

    def tab_index(self, block_id: str) -> int:
        return self.selected_tab.get(block_id, 0)

    def is_tab_open(self, tab_id: str) -> bool:
        return self.open_tabs.get(tab_id, False)

    def open_answer(self, block_id: str) -> Optional[int]:
        return self.open_qa.get(block_id)

    # ── Transitions ──

    def select_tab(self, block_id: str, index: int) -> "ViewState":
        return self.model_copy(update={"selected_tab": {**self.selected_tab, block_id: index}})

    def toggle_tab(self, tab_id: str) -> "ViewState":
        return self.model_copy(update={"open_tabs": {**self.open_tabs, tab_id: not self.is_tab_open(tab_id)}})

    def toggle_qa(self, block_id: str, index: int) -> "ViewState":
        """Accordéon à ouverture unique : ouvrir B ferme A ; recliquer ferme."""
        current = self.open_answer(block_id)
        return self.model_copy(update={"open_qa": {**self.open_qa, block_id: None if current == index else index}})
