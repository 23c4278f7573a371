# lexcn/legal/update_checker.py
"""
Verificador de atualizacoes: confere se as URLs do registry continuam
acessiveis e se cada lei ja esta no banco local.

Classificacao por lei:
  local  : HTTP 200 e documento presente no banco
  missing: HTTP 200 mas documento ausente do banco
  warn   : HTTP != 200 (URL pode ter mudado)
  error  : falha de transporte

Funcoes publicas:
  - check_for_updates(): HEAD com rate limit para cada lei, retorna resultado em memoria
  - exit_code(): 0 sem pendencias, 1 com pendencias
  - generate_report_md(): relatorio Markdown (retorna string)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Set

import requests

from lexcn.config import settings
from lexcn.config.law_registry import LawDefinition, enabled_laws
from lexcn.db.connection import open_db
from lexcn.legal.fetcher import FetchError, RateLimiter, build_session, fetch_with_rate_limit

logger = logging.getLogger(__name__)

STATUS_LOCAL = "local"
STATUS_MISSING = "missing"
STATUS_WARN = "warn"
STATUS_ERROR = "error"


def _local_document_ids(db_path: str) -> Set[str]:
    conn = open_db(db_path, readonly=True)
    try:
        return {row[0] for row in conn.execute("SELECT id FROM legal_documents")}
    finally:
        conn.close()


def check_for_updates(
    laws: Optional[Iterable[LawDefinition]] = None,
    db_path: Optional[str] = None,
    session: Optional[requests.Session] = None,
    limiter: Optional[RateLimiter] = None,
    fetch=fetch_with_rate_limit,
) -> dict:
    """
    Confere cada URL do registry contra o banco local.

    Raises:
        FileNotFoundError: banco inexistente (checagem impossivel)

    Returns:
        {"timestamp", "results": [{"law_id", "status", "http_status", "detail"}], "issues": N}
    """
    laws = list(laws) if laws is not None else enabled_laws()
    local_ids = _local_document_ids(db_path or settings.DB_PATH)
    session = session or build_session()
    limiter = limiter or RateLimiter()

    results: List[dict] = []
    for law_def in laws:
        entry = {"law_id": law_def.law_id, "title": law_def.title_en, "http_status": None, "detail": ""}
        try:
            # HEAD unico, sem retry: aqui so importa se a URL responde
            resp = fetch(law_def.url, limiter, session=session, max_retries=0, method="HEAD")
            entry["http_status"] = resp.status
            if resp.status == 200:
                entry["status"] = STATUS_LOCAL if law_def.law_id in local_ids else STATUS_MISSING
            else:
                entry["status"] = STATUS_WARN
                entry["detail"] = f"HTTP {resp.status} (URL may have changed)"
        except FetchError as e:
            if e.last_status is not None:
                entry["status"] = STATUS_WARN
                entry["http_status"] = e.last_status
                entry["detail"] = f"HTTP {e.last_status} (URL may have changed)"
            else:
                entry["status"] = STATUS_ERROR
                entry["detail"] = str(e)

        log = logger.info if entry["status"] == STATUS_LOCAL else logger.warning
        log("%s %s: %s %s", entry["status"].upper(), law_def.law_id, law_def.title_en, entry["detail"])
        results.append(entry)

    issues = sum(1 for r in results if r["status"] != STATUS_LOCAL)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "results": results,
        "issues": issues,
    }


def exit_code(report: dict) -> int:
    return 1 if report["issues"] else 0


def generate_report_md(report: dict) -> str:
    """Gera relatorio Markdown e retorna como string."""
    lines = [
        "# Verificacao de atualizacoes npc.gov.cn",
        "",
        f"**Data**: {report['timestamp']}",
        "",
        "| Lei | Status | HTTP | Detalhe |",
        "|-----|--------|-----:|---------|",
    ]
    for r in report["results"]:
        http = r["http_status"] if r["http_status"] is not None else "-"
        lines.append(f"| {r['law_id']} | {r['status']} | {http} | {r['detail']} |")

    lines.append("")
    if report["issues"]:
        lines.append(f"**{report['issues']} pendencia(s) detectada(s).**")
    else:
        lines.append("Todas as URLs acessiveis e presentes no banco local.")

    return "\n".join(lines) + "\n"
