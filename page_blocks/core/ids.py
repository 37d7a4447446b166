"""Identifiants opaques — jamais réutilisés après suppression (uuid4)."""
import uuid
from typing import Collection


def fresh_id(prefix: str, taken: Collection[str] = ()) -> str:
    while True:
        candidate = f"{prefix}-{uuid.uuid4().hex[:12]}"
        if candidate not in taken:
            return candidate


def new_block_id(taken: Collection[str] = ()) -> str:
    return fresh_id("block", taken)


def new_tab_id(taken: Collection[str] = ()) -> str:
    return fresh_id("tab", taken)
