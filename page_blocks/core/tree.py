"""
Arbre de blocs — opérations pures.

Une liste de frères (blocs d'une page, ou enfants d'un onglet) se manipule
toujours de la même façon : on renvoie une NOUVELLE liste, l'ordre est
ré-attribué 0..N-1, les nœuds non concernés restent les mêmes objets.

Un id introuvable n'est pas une erreur : l'opération renvoie la liste
telle quelle (l'UI peut légitimement viser un bloc déjà supprimé).
"""
import logging
from typing import Any, Callable, Collection, Dict, Iterable, Iterator, List, Optional, Set, Union

from pydantic import ValidationError

from ..blocks.registry import is_container, merge_content
from .ids import new_block_id, new_tab_id
from .schemas import Block, Tab

log = logging.getLogger(__name__)

Patch = Union[str, Dict[str, Any]]

_STEPS = {"up": -1, "left": -1, "down": 1, "right": 1}


def _step(direction: str) -> int:
    try:
        return _STEPS[direction]
    except KeyError:
        raise ValueError(f"Direction inconnue : {direction!r}. Attendu : {sorted(_STEPS)}")


# ── Liste de frères ───────────────────────────────────────────────────────────

def sort_blocks(blocks: Iterable[Block]) -> List[Block]:
    """Tri stable par order (les ex-aequo gardent leur position d'origine)."""
    return sorted(blocks, key=lambda b: b.order)


def renumber(blocks: Iterable[Block]) -> List[Block]:
    return [b if b.order == i else b.model_copy(update={"order": i}) for i, b in enumerate(blocks)]


def insert(blocks: List[Block], block: Block) -> List[Block]:
    """Ajoute en fin de liste avec order = len(liste)."""
    ordered = renumber(sort_blocks(blocks))
    return ordered + [block.model_copy(update={"order": len(ordered)})]


def remove(blocks: List[Block], block_id: str) -> List[Block]:
    if not any(b.id == block_id for b in blocks):
        log.debug("remove : bloc %s introuvable", block_id)
        return list(blocks)
    return renumber(b for b in sort_blocks(blocks) if b.id != block_id)


def can_move_adjacent(blocks: List[Block], block_id: str, direction: str) -> bool:
    step = _step(direction)
    ids = [b.id for b in sort_blocks(blocks)]
    if block_id not in ids:
        return False
    target = ids.index(block_id) + step
    return 0 <= target < len(ids)


def move_adjacent(blocks: List[Block], block_id: str, direction: str) -> List[Block]:
    """Échange avec le voisin immédiat ; sans effet en bordure."""
    if not can_move_adjacent(blocks, block_id, direction):
        log.debug("move %s %s : bordure ou id introuvable", block_id, direction)
        return list(blocks)
    ordered = sort_blocks(blocks)
    i = next(i for i, b in enumerate(ordered) if b.id == block_id)
    j = i + _step(direction)
    ordered[i], ordered[j] = ordered[j], ordered[i]
    return renumber(ordered)


def update_content(blocks: List[Block], block_id: str, patch: Patch) -> List[Block]:
    """Remplace le contenu du bloc visé selon la règle de fusion de sa famille.

    id / type / order ne bougent pas ; les positions dans la liste non plus.
    """
    if not any(b.id == block_id for b in blocks):
        log.debug("update : bloc %s introuvable", block_id)
        return list(blocks)
    return [_patched(b, patch) if b.id == block_id else b for b in blocks]


def _patched(block: Block, patch: Patch) -> Block:
    if isinstance(patch, dict) and not is_container(block.type):
        # seul un conteneur porte des onglets
        patch = {k: v for k, v in patch.items() if k not in ("tabs", "children")}
    content = merge_content(block.type, block.content, patch)
    update: Dict[str, Any] = {"content": content}
    if "tabs" in content and is_container(block.type):
        update["children"] = None
    return block.model_copy(update=update)


# ── Création ──────────────────────────────────────────────────────────────────

def new_block(block_type: str, content: Optional[Dict[str, Any]] = None, order: int = 0,
              taken: Collection[str] = ()) -> Block:
    """Nouveau bloc avec un id frais ; les onglets d'un conteneur reçoivent aussi le leur."""
    used: Set[str] = set(taken)
    block_id = new_block_id(used)
    used.add(block_id)
    content = dict(content or {})
    if is_container(block_type) and isinstance(content.get("tabs"), list):
        tabs = []
        for tab in content["tabs"]:
            tab = dict(tab) if isinstance(tab, dict) else {}
            if not tab.get("id"):
                tab["id"] = new_tab_id(used)
            used.add(tab["id"])
            tab.setdefault("title", "")
            tab.setdefault("children", [])
            tabs.append(tab)
        content["tabs"] = tabs
    return Block(id=block_id, type=block_type, content=content, order=order)


# ── Onglets d'un conteneur ────────────────────────────────────────────────────

def read_blocks(items: Any) -> List[Block]:
    out = []
    for item in items if isinstance(items, list) else []:
        if isinstance(item, Block):
            out.append(item)
            continue
        try:
            out.append(Block.model_validate(item))
        except ValidationError as e:
            log.warning("Bloc enfant ignoré (%d erreur(s))", e.error_count())
    return out


def get_tabs(block: Block) -> List[Tab]:
    """Onglets d'un conteneur (content["tabs"], sinon children). Lecture tolérante."""
    raw = block.content.get("tabs")
    if not isinstance(raw, list):
        return list(block.children or [])
    tabs = []
    for i, item in enumerate(raw):
        if isinstance(item, Tab):
            tabs.append(item)
            continue
        if not isinstance(item, dict):
            log.warning("Onglet %d de %s ignoré : %r", i, block.id, type(item).__name__)
            continue
        tabs.append(Tab(
            id=item.get("id") or f"{block.id}-tab-{i}",
            title=item.get("title") if isinstance(item.get("title"), str) else "",
            children=read_blocks(item.get("children")),
        ))
    return tabs


def with_tabs(block: Block, tabs: List[Tab]) -> Block:
    """Écrit les onglets dans content["tabs"] (children est vidé)."""
    content = {**block.content, "tabs": [t.model_dump(mode="json") for t in tabs]}
    return block.model_copy(update={"content": content, "children": None})


def add_tab(block: Block, title: Optional[str] = None, taken: Collection[str] = ()) -> Block:
    tabs = get_tabs(block)
    used = set(taken) | {t.id for t in tabs}
    tab = Tab(id=new_tab_id(used), title=f"Onglet {len(tabs) + 1}" if title is None else title)
    return with_tabs(block, tabs + [tab])


def remove_tab(block: Block, tab_id: str) -> Block:
    tabs = get_tabs(block)
    if not any(t.id == tab_id for t in tabs):
        log.debug("remove_tab : onglet %s introuvable dans %s", tab_id, block.id)
        return block
    return with_tabs(block, [t for t in tabs if t.id != tab_id])


def rename_tab(block: Block, tab_id: str, title: str) -> Block:
    tabs = get_tabs(block)
    if not any(t.id == tab_id for t in tabs):
        log.debug("rename_tab : onglet %s introuvable dans %s", tab_id, block.id)
        return block
    return with_tabs(block, [t.model_copy(update={"title": title}) if t.id == tab_id else t for t in tabs])


def can_move_tab(block: Block, tab_id: str, direction: str) -> bool:
    step = _step(direction)
    ids = [t.id for t in get_tabs(block)]
    if tab_id not in ids:
        return False
    return 0 <= ids.index(tab_id) + step < len(ids)


def move_tab(block: Block, tab_id: str, direction: str) -> Block:
    """Échange la position de deux onglets voisins (la position fait l'ordre)."""
    if not can_move_tab(block, tab_id, direction):
        log.debug("move_tab %s %s : bordure ou id introuvable", tab_id, direction)
        return block
    tabs = get_tabs(block)
    i = next(i for i, t in enumerate(tabs) if t.id == tab_id)
    j = i + _step(direction)
    tabs[i], tabs[j] = tabs[j], tabs[i]
    return with_tabs(block, tabs)


def update_tab_children(block: Block, tab_id: str, fn: Callable[[List[Block]], List[Block]]) -> Block:
    tabs = get_tabs(block)
    if not any(t.id == tab_id for t in tabs):
        log.debug("onglet %s introuvable dans %s", tab_id, block.id)
        return block
    return with_tabs(block, [
        t.model_copy(update={"children": fn(list(t.children))}) if t.id == tab_id else t
        for t in tabs
    ])


# ── Parcours récursif ─────────────────────────────────────────────────────────

def walk(blocks: Iterable[Block]) -> Iterator[Block]:
    """Tous les blocs, en profondeur ; ne descend que dans les conteneurs."""
    for block in sort_blocks(blocks):
        yield block
        if is_container(block.type):
            for tab in get_tabs(block):
                yield from walk(tab.children)


def collect_ids(blocks: Iterable[Block]) -> Set[str]:
    """Ids de blocs ET d'onglets (un id neuf ne doit entrer en collision avec aucun)."""
    ids: Set[str] = set()
    for block in walk(blocks):
        ids.add(block.id)
        if is_container(block.type):
            ids.update(t.id for t in get_tabs(block))
    return ids


def find_block(blocks: Iterable[Block], block_id: str) -> Optional[Block]:
    return next((b for b in walk(blocks) if b.id == block_id), None)


def find_tab(blocks: Iterable[Block], container_id: str, tab_id: str) -> Optional[Tab]:
    container = find_block(blocks, container_id)
    if container is None or not is_container(container.type):
        return None
    return next((t for t in get_tabs(container) if t.id == tab_id), None)


def _replace(blocks: List[Block], block_id: str, fn: Callable[[Block], Block]) -> Optional[List[Block]]:
    for i, block in enumerate(blocks):
        if block.id == block_id:
            return blocks[:i] + [fn(block)] + blocks[i + 1:]
        if not is_container(block.type):
            continue
        tabs = get_tabs(block)
        for k, tab in enumerate(tabs):
            children = _replace(list(tab.children), block_id, fn)
            if children is not None:
                tabs[k] = tab.model_copy(update={"children": children})
                return blocks[:i] + [with_tabs(block, tabs)] + blocks[i + 1:]
    return None


def replace_block(blocks: List[Block], block_id: str, fn: Callable[[Block], Block]) -> List[Block]:
    """Applique fn au bloc visé, où qu'il soit dans l'arbre."""
    result = _replace(list(blocks), block_id, fn)
    if result is None:
        log.debug("bloc %s introuvable dans l'arbre", block_id)
        return list(blocks)
    return result


# ── Opérations dans un onglet ─────────────────────────────────────────────────

def _on_tab(blocks: List[Block], container_id: str, tab_id: str,
            fn: Callable[[List[Block]], List[Block]]) -> List[Block]:
    if find_tab(blocks, container_id, tab_id) is None:
        log.debug("conteneur %s / onglet %s introuvable", container_id, tab_id)
        return list(blocks)
    return replace_block(blocks, container_id, lambda c: update_tab_children(c, tab_id, fn))


def insert_nested(blocks: List[Block], container_id: str, tab_id: str, block: Block) -> List[Block]:
    return _on_tab(blocks, container_id, tab_id, lambda children: insert(children, block))


def remove_nested(blocks: List[Block], container_id: str, tab_id: str, block_id: str) -> List[Block]:
    return _on_tab(blocks, container_id, tab_id, lambda children: remove(children, block_id))


def move_nested(blocks: List[Block], container_id: str, tab_id: str, block_id: str, direction: str) -> List[Block]:
    _step(direction)
    return _on_tab(blocks, container_id, tab_id, lambda children: move_adjacent(children, block_id, direction))


def update_nested(blocks: List[Block], container_id: str, tab_id: str, block_id: str, patch: Patch) -> List[Block]:
    return _on_tab(blocks, container_id, tab_id, lambda children: update_content(children, block_id, patch))


# ── Invariants ────────────────────────────────────────────────────────────────

def tree_errors(blocks: Iterable[Block]) -> List[str]:
    """Violations d'invariants (ids dupliqués, ordre non dense, enfants illégaux)."""
    errors: List[str] = []
    seen: Set[str] = set()

    def _see(node_id: str, what: str) -> None:
        if node_id in seen:
            errors.append(f"id dupliqué : {node_id} ({what})")
        seen.add(node_id)

    def _check(siblings: List[Block], where: str) -> None:
        orders = sorted(b.order for b in siblings)
        if orders != list(range(len(siblings))):
            errors.append(f"ordre non contigu dans {where} : {orders}")
        for block in sort_blocks(siblings):
            _see(block.id, "bloc")
            if not is_container(block.type):
                if block.children is not None or "tabs" in block.content:
                    errors.append(f"{block.id} ({block.type}) n'est pas un conteneur mais porte des onglets")
                continue
            for tab in get_tabs(block):
                _see(tab.id, "onglet")
                _check(list(tab.children), f"{block.id}/{tab.id}")

    _check(list(blocks), "la page")
    return errors
