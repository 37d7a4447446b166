"""
PAGE_BLOCKS — FastAPI app
Démarrer : uvicorn page_blocks.api:app --reload --port 8002
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import LOG_LEVEL
from .router import router as page_blocks_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="PAGE_BLOCKS — Blocs de contenu", version=__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.on_event("startup")
def startup():
    from .storage import init_db
    init_db()
    log.info("DB initialisée (SQLite)")


app.include_router(page_blocks_router)


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}
