"""
Router FastAPI — endpoints page_blocks.

POST /page-blocks/render              → {blocks, view?} → HTMLResponse
POST /page-blocks/validate            → {blocks} → {"valid": bool, "errors": [...]}
GET  /page-blocks/catalog             → familles, sous-variantes, contenus par défaut
POST /page-blocks/edit                → {blocks, action, params} → {"blocks": [...]}
GET  /page-blocks/pages/{key}/blocks  → payload enregistré (404 si absent)
PUT  /page-blocks/pages/{key}/blocks  → remplace le payload (sauvegarde atomique)
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from .blocks.registry import catalog as registry_catalog
from .core.schemas import Block, dump_blocks, parse_blocks
from .core.tree import tree_errors
from .editor.engine import BlockEditor
from .renderer.html import render_blocks
from .renderer.view_state import ViewState
from .storage import db_get_blocks, db_save_blocks, get_db

router = APIRouter(prefix="/page-blocks", tags=["page_blocks"])


class RenderRequest(BaseModel):
    blocks: List[Dict[str, Any]] = []
    view: Optional[ViewState] = None


class ValidateRequest(BaseModel):
    blocks: List[Any] = []


class EditRequest(BaseModel):
    blocks: List[Block] = []
    action: str
    params: Dict[str, Any] = {}


class BlocksPayload(BaseModel):
    blocks: List[Block] = []


@router.post("/render", response_class=HTMLResponse, summary="Rend une liste de blocs en HTML")
def render(req: RenderRequest) -> HTMLResponse:
    """Fragment HTML ; un bloc de type inconnu est rendu comme du texte."""
    return HTMLResponse(content=render_blocks(req.blocks, req.view))


@router.post("/validate", summary="Valide une liste de blocs sans la rendre")
def validate(req: ValidateRequest) -> dict:
    """Structure wire (pydantic) puis invariants de l'arbre (ids, ordre, onglets)."""
    try:
        blocks = parse_blocks(req.blocks)
    except (ValidationError, ValueError) as e:
        return {"valid": False, "errors": [str(e)]}
    errors = tree_errors(blocks)
    return {"valid": not errors, "errors": errors}


@router.get("/catalog", summary="Liste les familles de blocs et leurs sous-variantes")
def catalog() -> JSONResponse:
    return JSONResponse({"families": registry_catalog()})


@router.post("/edit", summary="Applique une opération d'édition à une liste de blocs")
def edit(req: EditRequest) -> dict:
    editor = BlockEditor(req.blocks)
    try:
        editor.apply(req.action, req.params)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return {"blocks": editor.dump()}


@router.get("/pages/{page_key}/blocks", summary="Charge les blocs d'une page")
def get_page_blocks(page_key: str, db: Session = Depends(get_db)) -> dict:
    blocks = db_get_blocks(db, page_key)
    if blocks is None:
        raise HTTPException(404, f"Page '{page_key}' introuvable")
    return {"page_key": page_key, "blocks": dump_blocks(blocks)}


@router.put("/pages/{page_key}/blocks", summary="Enregistre les blocs d'une page")
def put_page_blocks(page_key: str, payload: BlocksPayload, db: Session = Depends(get_db)) -> dict:
    row = db_save_blocks(db, page_key, payload.blocks)
    return {"page_key": page_key, "blocks": dump_blocks(payload.blocks), "updated_at": row.updated_at.isoformat()}
