# lexcn/db/connection.py
"""
Conexao SQLite para o banco de legislacao.

Uso:
    from lexcn.db.connection import open_db

    conn = open_db("data/database.db", readonly=True)
    try:
        conn.execute("SELECT 1")
    finally:
        conn.close()

Linhas retornadas como sqlite3.Row (acesso por nome de coluna).
"""
from __future__ import annotations

import logging
import os
import sqlite3

from lexcn.config import settings

logger = logging.getLogger(__name__)


def open_db(path: str = settings.DB_PATH, readonly: bool = False) -> sqlite3.Connection:
    if readonly:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Banco nao encontrado: {path}")
        conn = sqlite3.connect(f"file:{path}?mode=ro", uri=True)
    else:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        conn = sqlite3.connect(path)

    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    logger.debug("SQLite aberto: %s (readonly=%s)", path, readonly)
    return conn
