"""
Configuration — lue depuis l'environnement au chargement du module.

ASSETS_BASE_URL      → préfixe des chemins d'upload relatifs
UPLOADS_PREFIX       → chemins stockés commençant par ce préfixe = uploads
PAGE_BLOCKS_DB_PATH  → fichier SQLite du collaborateur de persistance
LOG_LEVEL            → niveau de log racine (api.py)
"""
import os
from pathlib import Path

DATA_DIR = Path(__file__).parent.parent / "data"

ASSETS_BASE_URL = os.getenv("ASSETS_BASE_URL", "http://localhost:3002").rstrip("/")
UPLOADS_PREFIX  = os.getenv("UPLOADS_PREFIX", "/uploads")
DB_PATH         = os.getenv("PAGE_BLOCKS_DB_PATH", str(DATA_DIR / "page_blocks.db"))
LOG_LEVEL       = os.getenv("LOG_LEVEL", "INFO").upper()
