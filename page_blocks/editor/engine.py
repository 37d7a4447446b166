"""
Editing Engine — contrôleur d'édition d'une liste de blocs.

Seul mutateur de l'arbre : chaque opération calcule un nouvel arbre complet
(core.tree), le remplace d'un coup, puis notifie on_change. Un id périmé
(bloc, conteneur, onglet) ne lève jamais : l'opération est sans effet.

État éphémère porté à côté de l'arbre, jamais sérialisé avec lui :
- sélecteur « ajouter un bloc » (famille → sous-variante) ;
- par conteneur : onglet sélectionné + son propre sélecteur ;
- éditeur de détail ouvert ; mode aperçu.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..blocks.base import BlockFamily, Subvariant
from ..blocks.registry import BLOCK_VARIANTS, can_nest, get_family, is_container, nestable_families, resolve_variant
from ..core import tree
from ..core.schemas import Block, Tab, dump_blocks
from ..core.tree import Patch
from ..renderer.base import AssetResolver
from ..renderer.html import render_blocks
from ..renderer.view_state import ViewState
from .forms import DetailEditor, editor_for

log = logging.getLogger(__name__)

ChangeListener = Callable[[List[Block]], None]


# ── États du sélecteur ──────────────────────────────────────────────────────

class PickerStep(str, Enum):
    CLOSED = "closed"
    CHOOSING_FAMILY = "choosing_family"
    CHOOSING_SUBVARIANT = "choosing_subvariant"


class PickerState(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: PickerStep = PickerStep.CLOSED
    family_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.step != PickerStep.CLOSED

    def open(self) -> "PickerState":
        return PickerState(step=PickerStep.CHOOSING_FAMILY)

    def choose(self, family_id: str) -> "PickerState":
        return PickerState(step=PickerStep.CHOOSING_SUBVARIANT, family_id=family_id)

    def back(self) -> "PickerState":
        return self.open() if self.is_open else self


class ContainerEditorState(BaseModel):
    """Sous-éditeur d'un conteneur : aucun onglet → onglet sélectionné → ajout en cours."""
    model_config = ConfigDict(frozen=True)

    selected_tab_id: Optional[str] = None
    picker: PickerState = PickerState()


# ── Contrôleur ──────────────────────────────────────────────────────────────

class BlockEditor:

    def __init__(self, blocks: Iterable[Any] = (), on_change: Optional[ChangeListener] = None,
                 resolve_url: Optional[AssetResolver] = None):
        self._blocks: List[Block] = tree.read_blocks(list(blocks))
        self.on_change = on_change
        self.resolve_url = resolve_url
        self.picker = PickerState()
        self.containers: Dict[str, ContainerEditorState] = {}
        self.detail: Optional[DetailEditor] = None
        self.detail_target: Optional[tuple] = None
        self.preview = False
        self.view = ViewState()

    # ── Lecture ──

    @property
    def blocks(self) -> List[Block]:
        return tree.sort_blocks(self._blocks)

    def dump(self) -> List[dict]:
        return dump_blocks(self.blocks)

    def find(self, block_id: str) -> Optional[Block]:
        return tree.find_block(self._blocks, block_id)

    def tabs(self, container_id: str) -> List[Tab]:
        container = self.find(container_id)
        if container is None or not is_container(container.type):
            return []
        return tree.get_tabs(container)

    def _commit(self, blocks: List[Block]) -> bool:
        if blocks == self._blocks:
            return False
        self._blocks = blocks
        self._prune_states()
        if self.on_change is not None:
            self.on_change(self.blocks)
        return True

    def _prune_states(self) -> None:
        """Retire l'état des conteneurs disparus ; re-sélectionne si l'onglet a disparu."""
        for cid, state in list(self.containers.items()):
            container = self.find(cid)
            if container is None or not is_container(container.type):
                del self.containers[cid]
                continue
            tab_ids = [t.id for t in tree.get_tabs(container)]
            if state.selected_tab_id is not None and state.selected_tab_id not in tab_ids:
                self.containers[cid] = ContainerEditorState(selected_tab_id=tab_ids[0] if tab_ids else None)

    def _resolve(self, family_id: str, subvariant_id: str):
        try:
            return resolve_variant(family_id, subvariant_id)
        except ValueError as e:
            log.warning("Ajout ignoré : %s", e)
            return None

    # ── Sélecteur « ajouter un bloc » ──

    def families(self) -> List[BlockFamily]:
        return list(BLOCK_VARIANTS)

    def subvariants(self) -> List[Subvariant]:
        if self.picker.family_id is None:
            return []
        return list(get_family(self.picker.family_id).subvariants)

    def open_picker(self) -> None:
        self.picker = self.picker.open()

    def choose_family(self, family_id: str) -> None:
        try:
            get_family(family_id)
        except ValueError as e:
            log.warning("Sélecteur : %s", e)
            return
        self.picker = self.picker.choose(family_id)

    def picker_back(self) -> None:
        self.picker = self.picker.back()

    def cancel_picker(self) -> None:
        self.picker = PickerState()

    def choose_subvariant(self, subvariant_id: str) -> Optional[Block]:
        if self.picker.step != PickerStep.CHOOSING_SUBVARIANT:
            return None
        return self.add_block(self.picker.family_id, subvariant_id)

    # ── Blocs de premier niveau ──

    def add_block(self, family_id: str, subvariant_id: str) -> Optional[Block]:
        """Crée le bloc depuis le contenu par défaut de la sous-variante, l'ajoute en fin, ferme le sélecteur."""
        resolved = self._resolve(family_id, subvariant_id)
        if resolved is None:
            return None
        block_type, content = resolved
        block = tree.new_block(block_type, content, taken=tree.collect_ids(self._blocks))
        self._commit(tree.insert(self._blocks, block))
        self.picker = PickerState()
        return self.find(block.id)

    def update_block(self, block_id: str, patch: Patch) -> bool:
        return self._commit(tree.update_content(self._blocks, block_id, patch))

    def remove_block(self, block_id: str) -> bool:
        return self._commit(tree.remove(self._blocks, block_id))

    def can_move(self, block_id: str, direction: str) -> bool:
        return tree.can_move_adjacent(self._blocks, block_id, direction)

    def move_block(self, block_id: str, direction: str) -> bool:
        return self._commit(tree.move_adjacent(self._blocks, block_id, direction))

    # ── Blocs dans un onglet ──

    def add_block_to_container(self, container_id: str, tab_id: str,
                               family_id: str, subvariant_id: str) -> Optional[Block]:
        container = self.find(container_id)
        if container is None or tree.find_tab(self._blocks, container_id, tab_id) is None:
            log.debug("Ajout imbriqué ignoré : %s / %s introuvable", container_id, tab_id)
            return None
        if not can_nest(container.type, family_id):
            log.warning("La famille %r ne peut pas être placée dans %s", family_id, container.type)
            return None
        resolved = self._resolve(family_id, subvariant_id)
        if resolved is None:
            return None
        block_type, content = resolved
        block = tree.new_block(block_type, content, taken=tree.collect_ids(self._blocks))
        self._commit(tree.insert_nested(self._blocks, container_id, tab_id, block))
        state = self.container_state(container_id)
        self.containers[container_id] = state.model_copy(update={"picker": PickerState()})
        return self.find(block.id)

    def update_nested_block(self, container_id: str, tab_id: str, block_id: str, patch: Patch) -> bool:
        return self._commit(tree.update_nested(self._blocks, container_id, tab_id, block_id, patch))

    def remove_nested_block(self, container_id: str, tab_id: str, block_id: str) -> bool:
        return self._commit(tree.remove_nested(self._blocks, container_id, tab_id, block_id))

    def can_move_nested(self, container_id: str, tab_id: str, block_id: str, direction: str) -> bool:
        tab = tree.find_tab(self._blocks, container_id, tab_id)
        return tab is not None and tree.can_move_adjacent(tab.children, block_id, direction)

    def move_nested_block(self, container_id: str, tab_id: str, block_id: str, direction: str) -> bool:
        return self._commit(tree.move_nested(self._blocks, container_id, tab_id, block_id, direction))

    # ── Onglets ──

    def _on_container(self, container_id: str, fn: Callable[[Block], Block]) -> bool:
        container = self.find(container_id)
        if container is None or not is_container(container.type):
            log.debug("Conteneur %s introuvable", container_id)
            return False
        return self._commit(tree.replace_block(self._blocks, container_id, fn))

    def add_tab(self, container_id: str, title: Optional[str] = None) -> Optional[Tab]:
        before = {t.id for t in self.tabs(container_id)}
        taken = tree.collect_ids(self._blocks)
        if not self._on_container(container_id, lambda c: tree.add_tab(c, title, taken)):
            return None
        return next((t for t in self.tabs(container_id) if t.id not in before), None)

    def remove_tab(self, container_id: str, tab_id: str) -> bool:
        """Supprime l'onglet et ses blocs ; s'il était sélectionné, le premier restant prend sa place."""
        return self._on_container(container_id, lambda c: tree.remove_tab(c, tab_id))

    def rename_tab(self, container_id: str, tab_id: str, title: str) -> bool:
        return self._on_container(container_id, lambda c: tree.rename_tab(c, tab_id, title))

    def can_move_tab(self, container_id: str, tab_id: str, direction: str) -> bool:
        container = self.find(container_id)
        return container is not None and is_container(container.type) and tree.can_move_tab(container, tab_id, direction)

    def move_tab(self, container_id: str, tab_id: str, direction: str) -> bool:
        return self._on_container(container_id, lambda c: tree.move_tab(c, tab_id, direction))

    # ── Sous-éditeur d'un conteneur ──

    def container_state(self, container_id: str) -> ContainerEditorState:
        return self.containers.get(container_id, ContainerEditorState())

    def select_tab(self, container_id: str, tab_id: Optional[str]) -> None:
        if tab_id is not None and tree.find_tab(self._blocks, container_id, tab_id) is None:
            log.debug("select_tab : %s / %s introuvable", container_id, tab_id)
            return
        self.containers[container_id] = ContainerEditorState(selected_tab_id=tab_id)

    def start_add_to_tab(self, container_id: str) -> None:
        state = self.container_state(container_id)
        if state.selected_tab_id is None:
            return
        self.containers[container_id] = state.model_copy(update={"picker": state.picker.open()})

    def choose_tab_family(self, container_id: str, family_id: str) -> None:
        state = self.container_state(container_id)
        container = self.find(container_id)
        if not state.picker.is_open or container is None:
            return
        if not can_nest(container.type, family_id):
            log.warning("La famille %r ne peut pas être placée dans %s", family_id, container.type)
            return
        self.containers[container_id] = state.model_copy(update={"picker": state.picker.choose(family_id)})

    def tab_picker_back(self, container_id: str) -> None:
        state = self.container_state(container_id)
        self.containers[container_id] = state.model_copy(update={"picker": state.picker.back()})

    def cancel_tab_picker(self, container_id: str) -> None:
        state = self.container_state(container_id)
        self.containers[container_id] = state.model_copy(update={"picker": PickerState()})

    def tab_families(self, container_id: str) -> List[BlockFamily]:
        container = self.find(container_id)
        return nestable_families(container.type) if container else []

    def choose_tab_subvariant(self, container_id: str, subvariant_id: str) -> Optional[Block]:
        state = self.container_state(container_id)
        if state.picker.step != PickerStep.CHOOSING_SUBVARIANT or state.selected_tab_id is None:
            return None
        return self.add_block_to_container(container_id, state.selected_tab_id, state.picker.family_id, subvariant_id)

    # ── Éditeur de détail ──

    def _read_target(self, block_id: str, container_id: Optional[str], tab_id: Optional[str]) -> Optional[dict]:
        if container_id is None:
            block = next((b for b in self._blocks if b.id == block_id), None)
        else:
            tab = tree.find_tab(self._blocks, container_id, tab_id)
            block = next((b for b in tab.children if b.id == block_id), None) if tab else None
        return dict(block.content) if block is not None else None

    def open_detail(self, block_id: str, container_id: Optional[str] = None,
                    tab_id: Optional[str] = None) -> Optional[DetailEditor]:
        """Ouvre le formulaire de la famille du bloc (top-level, ou dans container/tab)."""
        if self._read_target(block_id, container_id, tab_id) is None:
            log.debug("open_detail : bloc %s introuvable", block_id)
            return None
        block = self.find(block_id)

        def read():
            return self._read_target(block_id, container_id, tab_id)

        def commit(patch):
            if container_id is None:
                self.update_block(block_id, patch)
            else:
                self.update_nested_block(container_id, tab_id, block_id, patch)

        self.detail = editor_for(block.type, read, commit)
        self.detail_target = (block_id, container_id, tab_id) if self.detail else None
        return self.detail

    def close_detail(self) -> None:
        self.detail = None
        self.detail_target = None

    # ── Aperçu ──

    def toggle_preview(self) -> bool:
        self.preview = not self.preview
        if self.preview:
            self.picker = PickerState()
        return self.preview

    def render_preview(self, view: Optional[ViewState] = None) -> str:
        """Même rendu que le site public."""
        return render_blocks(self._blocks, view or self.view, self.resolve_url)

    # ── Actions sérialisables (routeur HTTP) ──

    ACTIONS = (
        "add_block", "update_block", "remove_block", "move_block",
        "add_block_to_container", "update_nested_block", "remove_nested_block", "move_nested_block",
        "add_tab", "remove_tab", "rename_tab", "move_tab",
    )

    def apply(self, action: str, params: Optional[Dict[str, Any]] = None) -> None:
        if action not in self.ACTIONS:
            raise ValueError(f"Action inconnue : {action!r}. Disponibles : {list(self.ACTIONS)}")
        try:
            getattr(self, action)(**(params or {}))
        except TypeError as e:
            raise ValueError(f"Paramètres invalides pour {action} : {e}") from e
