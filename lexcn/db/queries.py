# lexcn/db/queries.py
"""
Consultas sobre o banco ja construido.

Funcoes puras sobre uma sqlite3.Connection (aberta com open_db); quem expoe
isso como ferramenta/endpoint fica fora deste pacote.

- search_legislation: busca FTS5 com ranking BM25 e snippet >>>destaque<<<
- get_provision: artigo especifico ou lei inteira (limitada a 200 artigos)
- validate_citation: parse + checagem de existencia e vigencia
- format_citation_request: parse + formatacao nos estilos pedidos
- read_metadata: metadata do build
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from lexcn.legal.citation import format_citation, parse_citation
from lexcn.utils.chinese_numerals import extract_article_number
from lexcn.utils.fts_query import build_fts_query_variants
from lexcn.utils.statute_id import resolve_existing_statute_id

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50
MAX_ALL_PROVISIONS = 200

SNIPPET_OPEN = ">>>"
SNIPPET_CLOSE = "<<<"

_SEARCH_SQL = f"""
SELECT
    lp.document_id,
    ld.title AS document_title,
    ld.status AS document_status,
    lp.provision_ref,
    lp.chapter,
    lp.section,
    lp.title,
    lp.language,
    snippet(provisions_fts, 0, '{SNIPPET_OPEN}', '{SNIPPET_CLOSE}', '...', 32) AS snippet,
    bm25(provisions_fts) AS relevance
FROM provisions_fts
JOIN legal_provisions lp ON lp.id = provisions_fts.rowid
JOIN legal_documents ld ON ld.id = lp.document_id
WHERE provisions_fts MATCH ?
"""

_PROVISION_COLUMNS = """
    lp.document_id,
    ld.title AS document_title,
    ld.title_en AS document_title_en,
    ld.status AS document_status,
    lp.provision_ref,
    lp.chapter,
    lp.section,
    lp.title,
    lp.content,
    lp.language
"""

_STATUS_WARNINGS = {
    "repealed": "This law has been repealed and is no longer in force",
    "amended": "This law has been amended; verify the current text",
    "not_yet_in_force": "This law is not yet in force",
}


def _clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_SEARCH_LIMIT
    return max(1, min(int(limit), MAX_SEARCH_LIMIT))


def _normalize_provision_ref(ref: str) -> str:
    """'第三条' → '3'; referencia arabe passa direto."""
    ref = ref.strip()
    number = extract_article_number(ref)
    if number:
        return str(number)
    return ref


def search_legislation(
    conn: sqlite3.Connection,
    query: str,
    document_id: Optional[str] = None,
    status: Optional[str] = None,
    language: Optional[str] = None,
    limit: Optional[int] = DEFAULT_SEARCH_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Busca artigos por palavra-chave (chines ou ingles).

    Tenta a variante estrita; se nao vier nada (ou der erro de sintaxe FTS),
    tenta a variante frouxa. Todas falhando → [].
    """
    if not query or not query.strip():
        return []

    variants = build_fts_query_variants(query)

    sql = _SEARCH_SQL
    filters: List[Any] = []
    if document_id:
        resolved = resolve_existing_statute_id(conn, document_id) or document_id
        sql += " AND lp.document_id = ?"
        filters.append(resolved)
    if status:
        sql += " AND ld.status = ?"
        filters.append(status)
    if language:
        sql += " AND lp.language = ?"
        filters.append(language)
    sql += " ORDER BY relevance LIMIT ?"

    for fts_query in (variants.primary, variants.fallback):
        if not fts_query:
            continue
        try:
            rows = conn.execute(sql, [fts_query, *filters, _clamp_limit(limit)]).fetchall()
        except sqlite3.OperationalError as e:
            logger.warning("FTS query invalida %r: %s", fts_query, e)
            continue
        if rows:
            return [dict(row) for row in rows]

    return []


def get_provision(
    conn: sqlite3.Connection,
    document_id: str,
    provision_ref: Optional[str] = None,
    language: Optional[str] = None,
):
    """
    Artigo especifico (dict ou None) ou todos os artigos da lei.

    Sem provision_ref: lista de artigos; acima de 200 devolve
    {"provisions": [...200], "truncated": True, "total": N}.
    """
    if not document_id or not document_id.strip():
        raise ValueError('document_id is required (e.g., "csl-2016", "网络安全法", or "Cybersecurity Law")')

    resolved = resolve_existing_statute_id(conn, document_id) or document_id

    if not provision_ref:
        where = "WHERE lp.document_id = ?"
        params: List[Any] = [resolved]
        if language:
            where += " AND lp.language = ?"
            params.append(language)

        total = conn.execute(
            f"SELECT COUNT(*) FROM legal_provisions lp {where}", params
        ).fetchone()[0]

        sql = f"""
        SELECT {_PROVISION_COLUMNS}
        FROM legal_provisions lp
        JOIN legal_documents ld ON ld.id = lp.document_id
        {where}
        ORDER BY lp.id LIMIT ?
        """
        rows = [dict(r) for r in conn.execute(sql, params + [MAX_ALL_PROVISIONS]).fetchall()]
        if total > MAX_ALL_PROVISIONS:
            return {"provisions": rows, "truncated": True, "total": total}
        return rows

    ref = _normalize_provision_ref(provision_ref)
    sql = f"""
    SELECT {_PROVISION_COLUMNS}
    FROM legal_provisions lp
    JOIN legal_documents ld ON ld.id = lp.document_id
    WHERE lp.document_id = ? AND (lp.provision_ref = ? OR lp.section = ?)
    """
    params = [resolved, ref, ref]
    if language:
        sql += " AND lp.language = ?"
        params.append(language)

    row = conn.execute(sql, params).fetchone()
    return dict(row) if row else None


def validate_citation(conn: sqlite3.Connection, text: str) -> Dict[str, Any]:
    """
    Confere se a citacao aponta para lei e artigo existentes no banco.

    Returns:
        {"citation", "document_exists", "provision_exists", "document_id",
         "document_title", "status", "warnings"}
    """
    citation = parse_citation(text)
    result: Dict[str, Any] = {
        "citation": citation,
        "document_exists": False,
        "provision_exists": False,
        "document_id": None,
        "document_title": None,
        "status": None,
        "warnings": [],
    }

    if not citation.valid:
        result["warnings"].append(citation.error)
        return result

    doc_ref = citation.title or citation.title_en
    if not doc_ref:
        result["warnings"].append("Citation does not identify a law")
        return result

    resolved = resolve_existing_statute_id(conn, doc_ref)
    if resolved is None:
        result["warnings"].append(f'Law not found: "{doc_ref}"')
        return result

    doc = conn.execute(
        "SELECT id, title, status FROM legal_documents WHERE id = ?", (resolved,)
    ).fetchone()
    result["document_exists"] = True
    result["document_id"] = doc["id"]
    result["document_title"] = doc["title"]
    result["status"] = doc["status"]

    if doc["status"] in _STATUS_WARNINGS:
        result["warnings"].append(_STATUS_WARNINGS[doc["status"]])

    row = conn.execute(
        "SELECT 1 FROM legal_provisions WHERE document_id = ? AND (provision_ref = ? OR section = ?) LIMIT 1",
        (resolved, citation.article, citation.article),
    ).fetchone()
    result["provision_exists"] = row is not None
    if row is None:
        result["warnings"].append(f"Article {citation.article} not found in {resolved}")

    return result


def format_citation_request(text: str, style: str = "full") -> Dict[str, Any]:
    """Parse + formatacao no estilo pedido, mais as versoes chinesa e inglesa."""
    if not text or not text.strip():
        return {
            "input": "", "formatted": "", "formatted_chinese": "", "formatted_english": "",
            "type": "unknown", "valid": False, "error": "Empty citation",
        }

    citation = parse_citation(text)
    if not citation.valid:
        return {
            "input": text,
            "formatted": text,
            "formatted_chinese": "",
            "formatted_english": "",
            "type": "unknown",
            "valid": False,
            "error": citation.error,
        }

    return {
        "input": text,
        "formatted": format_citation(citation, style),
        "formatted_chinese": format_citation(citation, "chinese"),
        "formatted_english": format_citation(citation, "english"),
        "type": citation.type,
        "valid": True,
    }


def read_metadata(conn: sqlite3.Connection) -> Dict[str, str]:
    return {row[0]: row[1] for row in conn.execute("SELECT key, value FROM db_metadata")}
