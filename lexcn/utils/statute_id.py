# lexcn/utils/statute_id.py
"""
Identificadores de norma.

Leis sao identificadas por abreviacao-ano ("csl-2016"). Lookup tambem aceita
titulo chines ("网络安全法"), titulo ingles ou short name.
"""
from __future__ import annotations

import sqlite3
from typing import List, Optional


def is_valid_statute_id(statute_id: str) -> bool:
    return bool(statute_id) and bool(statute_id.strip())


def statute_id_candidates(statute_id: str) -> List[str]:
    """
    Variantes para lookup: lower, original, espacos <-> hifens.

    Ex: "CSL 2016" -> ["csl 2016", "CSL 2016", "csl-2016"]
    """
    trimmed = statute_id.strip()
    lowered = trimmed.lower()

    candidates = [lowered, trimmed]
    if " " in lowered:
        candidates.append("-".join(lowered.split()))
    if "-" in lowered:
        candidates.append(lowered.replace("-", " "))

    # remove repetidos mantendo ordem
    return list(dict.fromkeys(candidates))


_LOOKUPS = (
    "SELECT id FROM legal_documents WHERE id = ? LIMIT 1",
    "SELECT id FROM legal_documents WHERE LOWER(id) = LOWER(?) LIMIT 1",
)

_LIKE_LOOKUPS = (
    "SELECT id FROM legal_documents WHERE title LIKE ? LIMIT 1",
    "SELECT id FROM legal_documents WHERE title_en LIKE ? LIMIT 1",
    "SELECT id FROM legal_documents WHERE short_name LIKE ? LIMIT 1",
)


def resolve_existing_statute_id(conn: sqlite3.Connection, input_id: str) -> Optional[str]:
    """
    Resolve input do usuario para um id existente em legal_documents.

    Ordem: id exato, id case-insensitive (e variantes), LIKE no titulo chines,
    no titulo ingles, no short name. None se nada casar.
    """
    if not is_valid_statute_id(input_id):
        return None

    for candidate in [input_id] + statute_id_candidates(input_id):
        for sql in _LOOKUPS:
            row = conn.execute(sql, (candidate,)).fetchone()
            if row:
                return row[0]

    pattern = f"%{input_id.strip()}%"
    for sql in _LIKE_LOOKUPS:
        row = conn.execute(sql, (pattern,)).fetchone()
        if row:
            return row[0]

    return None
