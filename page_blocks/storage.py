"""SQLite — persistance des blocs d'une page : un enregistrement, un payload JSON atomique."""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

import sqlalchemy as sa
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from .config import DB_PATH
from .core.schemas import Block, dump_blocks, parse_blocks

log = logging.getLogger(__name__)

Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


class Base(DeclarativeBase):
    pass


class PageBlocksDB(Base):
    __tablename__ = "page_blocks"

    page_key:   Mapped[str]      = mapped_column(sa.String, primary_key=True)
    blocks:     Mapped[str]      = mapped_column(sa.Text, default="[]")
    updated_at: Mapped[datetime] = mapped_column(sa.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def init_db(engine=None):
    Base.metadata.create_all(bind=engine or ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── JSON helpers ──
def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


# ── Blocs d'une page ──
def db_get_blocks(db: Session, page_key: str) -> Optional[List[Block]]:
    row = db.get(PageBlocksDB, page_key)
    if row is None:
        return None
    blocks = parse_blocks(json.loads(row.blocks or "[]"))
    log.info("Page %s chargée (%d blocs)", page_key, len(blocks))
    return blocks


def db_save_blocks(db: Session, page_key: str, blocks: Iterable[Block]) -> PageBlocksDB:
    """Remplace tout le payload de la page en un seul commit."""
    payload = jd(dump_blocks(blocks))
    row = db.get(PageBlocksDB, page_key)
    if row is None:
        row = PageBlocksDB(page_key=page_key, blocks=payload)
        db.add(row)
    else:
        row.blocks = payload
        row.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(row)
    log.info("Page %s enregistrée", page_key)
    return row
