# lexcn/db/builder.py
"""
Build do banco SQLite a partir dos seeds JSON (1 por lei).

Fluxo:
  1. Cria <db>.tmp com schema limpo
  2. Carrega todas as leis numa unica transacao (tudo ou nada)
  3. Reescreve db_metadata
  4. ANALYZE + VACUUM (fora da transacao)
  5. os.replace(<db>.tmp, <db>) (o banco anterior so e trocado no sucesso)

UPSERT idempotente (ON CONFLICT) para documentos, artigos e definicoes.
Instrumentos externos e arestas de referencia: insert-if-absent.
"""
from __future__ import annotations

import json
import logging
import os
import sqlite3
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional

from lexcn.config import settings
from lexcn.db.connection import open_db
from lexcn.db.schema import SCHEMA_VERSION, init_schema
from lexcn.legal.dedup import dedupe_provisions
from lexcn.legal.ingest import load_seed_files
from lexcn.legal.models import ExternalReferenceSeed, ParsedLaw

logger = logging.getLogger(__name__)

BUILDER_NAME = "lexcn.db.builder"

# ── SQL statements ────────────────────────────────────────────────────────────

UPSERT_DOCUMENT = """
INSERT INTO legal_documents (
    id, type, title, title_en, short_name, status,
    issued_date, in_force_date, url, description
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (id) DO UPDATE SET
    type          = excluded.type,
    title         = excluded.title,
    title_en      = excluded.title_en,
    short_name    = excluded.short_name,
    status        = excluded.status,
    issued_date   = excluded.issued_date,
    in_force_date = excluded.in_force_date,
    url           = excluded.url,
    description   = excluded.description,
    last_updated  = datetime('now')
"""

UPSERT_PROVISION = """
INSERT INTO legal_provisions (
    document_id, provision_ref, chapter, section, title, content, language, metadata
) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (document_id, provision_ref, language) DO UPDATE SET
    chapter  = excluded.chapter,
    section  = excluded.section,
    title    = excluded.title,
    content  = excluded.content,
    metadata = excluded.metadata
"""

UPSERT_DEFINITION = """
INSERT INTO definitions (document_id, term, term_en, definition, source_provision)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT (document_id, term) DO UPDATE SET
    term_en          = excluded.term_en,
    definition       = excluded.definition,
    source_provision = excluded.source_provision
"""

INSERT_EXTERNAL_DOCUMENT = """
INSERT OR IGNORE INTO external_documents (
    id, type, year, number, community, title, short_name, url, description
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

INSERT_EXTERNAL_REFERENCE = """
INSERT INTO external_references (
    source_type, source_id, document_id, provision_id, external_document_id, article,
    reference_type, reference_context, full_citation, is_primary_implementation,
    implementation_status, last_verified
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

SELECT_PROVISION_ID = """
SELECT id FROM legal_provisions
WHERE document_id = ? AND provision_ref = ? AND language = ?
"""

INSERT_METADATA = "INSERT INTO db_metadata (key, value) VALUES (?, ?)"

DEFAULT_EXTERNAL_DESCRIPTION = "Cross-reference from Chinese law"


@dataclass
class BuildStats:
    documents: int = 0
    provisions: int = 0
    definitions: int = 0
    external_documents: int = 0
    external_references: int = 0
    empty_documents: int = 0
    duplicate_refs: int = 0
    conflicting_duplicates: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return str(exc).startswith("UNIQUE constraint failed")


def _write_external_reference(
    conn: sqlite3.Connection,
    law: ParsedLaw,
    ref: ExternalReferenceSeed,
    stats: BuildStats,
) -> None:
    cur = conn.execute(INSERT_EXTERNAL_DOCUMENT, (
        ref.external_id,
        ref.external_type,
        ref.year,
        ref.number,
        "EU",
        ref.title,
        ref.short_name,
        ref.eur_lex_url,
        ref.description or DEFAULT_EXTERNAL_DESCRIPTION,
    ))
    stats.external_documents += cur.rowcount

    source_type, source_id, provision_id = "document", law.id, None
    if ref.provision_ref:
        row = conn.execute(
            SELECT_PROVISION_ID, (law.id, ref.provision_ref.strip(), law.language)
        ).fetchone()
        if row is not None:
            provision_id = row[0]
            source_type = "provision"
            source_id = f"{law.id}:{ref.provision_ref.strip()}"
        else:
            logger.warning(
                "%s: artigo %s citado em referencia externa nao existe; gravando no documento",
                law.id, ref.provision_ref,
            )

    try:
        conn.execute(INSERT_EXTERNAL_REFERENCE, (
            source_type,
            source_id,
            law.id,
            provision_id,
            ref.external_id,
            ref.article,
            ref.reference_type,
            ref.description,
            ref.full_citation,
            1 if ref.is_primary else 0,
            ref.implementation_status,
            _now_iso(),
        ))
        stats.external_references += 1
    except sqlite3.IntegrityError as e:
        if not _is_unique_violation(e):
            raise
        # aresta ja gravada
        logger.debug("%s → %s: referencia ja existe", source_id, ref.external_id)


def load_documents(conn: sqlite3.Connection, laws: Iterable[ParsedLaw]) -> BuildStats:
    """
    Grava leis no banco (sem commit; quem chama controla a transacao).

    Repetir a carga com os mesmos dados nao cria linhas novas.

    Returns:
        BuildStats com contagens e qualidade do dedup
    """
    stats = BuildStats()

    for law in laws:
        # 1. UPSERT documento
        conn.execute(UPSERT_DOCUMENT, (
            law.id,
            law.type,
            law.title,
            law.title_en,
            law.short_name,
            law.status,
            law.issued_date,
            law.in_force_date,
            law.url,
            law.description,
        ))
        stats.documents += 1

        # 2. UPSERT artigos (dedup antes)
        if not law.provisions:
            stats.empty_documents += 1
            logger.warning("%s: sem artigos (seed minimo?)", law.id)
        else:
            deduped, dedup_stats = dedupe_provisions(law.provisions)
            stats.duplicate_refs += dedup_stats.duplicate_refs
            stats.conflicting_duplicates += dedup_stats.conflicting_duplicates
            if dedup_stats.duplicate_refs:
                logger.warning(
                    "%s: %d refs duplicadas (%d com texto diferente)",
                    law.id, dedup_stats.duplicate_refs, dedup_stats.conflicting_duplicates,
                )

            for prov in deduped:
                conn.execute(UPSERT_PROVISION, (
                    law.id,
                    prov.provision_ref,
                    prov.chapter,
                    prov.section,
                    prov.title or None,
                    prov.content,
                    prov.language,
                    json.dumps(prov.metadata, ensure_ascii=False) if prov.metadata else None,
                ))
                stats.provisions += 1

        # 3. Referencias externas (depois dos artigos, para resolver provision_id)
        for ref in law.external_references:
            _write_external_reference(conn, law, ref, stats)

        # 4. UPSERT definicoes
        for definition in law.definitions:
            conn.execute(UPSERT_DEFINITION, (
                law.id,
                definition.term,
                definition.term_en,
                definition.definition,
                definition.source_provision,
            ))
            stats.definitions += 1

    return stats


def write_metadata(conn: sqlite3.Connection, tier: str, built_at: Optional[str] = None) -> None:
    """Reescreve db_metadata inteira (DELETE + INSERT) e faz commit."""
    rows = [
        ("tier", tier),
        ("schema_version", SCHEMA_VERSION),
        ("built_at", built_at or _now_iso()),
        ("builder", BUILDER_NAME),
        ("jurisdiction", "CN"),
        ("source", "npc.gov.cn, gov.cn"),
        ("licence", "Government Public Data"),
    ]
    try:
        conn.execute("DELETE FROM db_metadata")
        conn.executemany(INSERT_METADATA, rows)
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def _remove_quietly(path: str) -> None:
    for suffix in ("", "-wal", "-shm", "-journal"):
        try:
            os.remove(path + suffix)
        except FileNotFoundError:
            pass


def build_database(
    seed_dir: str = settings.SEED_DIR,
    db_path: str = settings.DB_PATH,
    tier: str = settings.TIER,
) -> BuildStats:
    """
    Gera o banco completo a partir de seed_dir.

    Seed dir vazio ou inexistente gera banco valido so com schema + metadata.
    Em qualquer falha o banco anterior em db_path fica intacto e o .tmp e removido.
    """
    tmp_path = db_path + ".tmp"
    _remove_quietly(tmp_path)

    laws = load_seed_files(seed_dir)
    if not laws:
        logger.warning("Nenhum seed em %s; gerando banco vazio", seed_dir)

    conn = open_db(tmp_path)
    try:
        conn.execute("PRAGMA journal_mode = WAL")
        init_schema(conn)

        try:
            stats = load_documents(conn, laws)
            conn.commit()
        except Exception:
            conn.rollback()
            raise

        write_metadata(conn, tier)

        # manutencao so depois do commit
        conn.execute("PRAGMA journal_mode = DELETE")
        conn.execute("ANALYZE")
        conn.execute("VACUUM")
    except Exception:
        conn.close()
        _remove_quietly(tmp_path)
        logger.exception("Build falhou; banco anterior mantido em %s", db_path)
        raise

    conn.close()
    os.replace(tmp_path, db_path)

    logger.info(
        "Build completo: %d documentos, %d artigos, %d definicoes, "
        "%d docs externos, %d referencias externas → %s",
        stats.documents, stats.provisions, stats.definitions,
        stats.external_documents, stats.external_references, db_path,
    )
    if stats.empty_documents:
        logger.warning("%d documentos sem artigos", stats.empty_documents)
    if stats.duplicate_refs:
        logger.warning(
            "Qualidade: %d refs duplicadas (%d com texto conflitante)",
            stats.duplicate_refs, stats.conflicting_duplicates,
        )
    return stats
