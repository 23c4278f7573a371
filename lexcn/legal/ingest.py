# lexcn/legal/ingest.py
"""
Pipeline de ingestao: npc.gov.cn → HTML → artigos → seed JSON.

Orquestra:
  1. Percorre as leis do registry em ordem
  2. Pula lei cujo seed ja existe (ingestao incremental/retomavel)
  3. Baixa a pagina com rate limit compartilhado
  4. Extrai artigos (npc_parser)
  5. Grava 1 seed JSON por lei em seed_dir

Falha de fetch (HTTP != 200 ou FetchError) gera seed minimo (so metadata,
com fetch_error preenchido) para que o build ainda tenha o documento.
Seed minimo e refeito na proxima execucao.

Seed path convention:
  {seed_dir}/{law_id}.json
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Callable, Iterable, List, Optional

import requests

from lexcn.config import settings
from lexcn.config.law_registry import LawDefinition, enabled_laws
from lexcn.legal.fetcher import FetchError, RateLimiter, build_session, fetch_with_rate_limit
from lexcn.legal.models import ParsedLaw
from lexcn.legal.npc_parser import parse_npc_html

logger = logging.getLogger(__name__)


# ── Seeds em disco ────────────────────────────────────────────────────────────

def seed_path(seed_dir: str, law_id: str) -> str:
    return os.path.join(seed_dir, f"{law_id}.json")


def write_seed(seed_dir: str, law: ParsedLaw) -> str:
    """Grava seed de forma atomica (arquivo temporario + rename)."""
    os.makedirs(seed_dir, exist_ok=True)
    path = seed_path(seed_dir, law.id)

    fd, tmp = tempfile.mkstemp(prefix=f".{law.id}.", suffix=".tmp", dir=seed_dir)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(law.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except Exception:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    return path


def read_seed(path: str) -> ParsedLaw:
    with open(path, "r", encoding="utf-8") as f:
        return ParsedLaw.from_dict(json.load(f))


def load_seed_files(seed_dir: str) -> List[ParsedLaw]:
    """
    Le todos os *.json de seed_dir em ordem alfabetica.

    Ignora arquivos iniciados por '.' ou '_'. Diretorio inexistente → [].
    JSON invalido ou seed com enum invalido propaga a excecao.
    """
    if not os.path.isdir(seed_dir):
        return []

    names = sorted(
        name for name in os.listdir(seed_dir)
        if name.endswith(".json") and not name.startswith((".", "_"))
    )
    laws = []
    for name in names:
        laws.append(read_seed(os.path.join(seed_dir, name)))
    logger.info("Seeds carregados: %d de %s", len(laws), seed_dir)
    return laws


def _needs_fetch(path: str) -> bool:
    """Seed ausente, ilegivel ou minimo (fetch anterior falhou) → baixar de novo."""
    if not os.path.exists(path):
        return True
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.warning("Seed ilegivel, refazendo: %s", path)
        return True
    return bool(data.get("fetch_error"))


# ── Processamento ─────────────────────────────────────────────────────────────

def process_law(
    law_def: LawDefinition,
    seed_dir: str,
    limiter: RateLimiter,
    session: Optional[requests.Session] = None,
    fetch: Callable = fetch_with_rate_limit,
) -> dict:
    """
    Baixa, extrai e grava o seed de uma lei.

    Returns:
        dict com resultado: {"law_id", "status": ok|failed, "provisions", ...}
    """
    logger.info("Baixando %s: %s", law_def.law_id, law_def.title)

    try:
        result = fetch(law_def.url, limiter, session=session)
    except FetchError as e:
        logger.error("%s: %s", law_def.law_id, e)
        write_seed(seed_dir, law_def.to_law_shell(fetch_error=str(e)))
        return {"law_id": law_def.law_id, "status": "failed", "provisions": 0, "error": str(e)}

    if result.status != 200:
        msg = f"HTTP {result.status}"
        logger.warning("%s: %s, gravando seed minimo", law_def.law_id, msg)
        write_seed(seed_dir, law_def.to_law_shell(fetch_error=msg))
        return {"law_id": law_def.law_id, "status": "failed", "provisions": 0, "error": msg}

    parsed = parse_npc_html(result.body, law_def.law_id, law_def.title, law_def.title_en)

    law = law_def.to_law_shell()
    law.language = parsed.language
    law.provisions = parsed.provisions
    write_seed(seed_dir, law)

    logger.info("OK %s: %d artigos extraidos", law_def.law_id, len(law.provisions))
    return {"law_id": law_def.law_id, "status": "ok", "provisions": len(law.provisions)}


def ingest_laws(
    laws: Optional[Iterable[LawDefinition]] = None,
    seed_dir: str = settings.SEED_DIR,
    limiter: Optional[RateLimiter] = None,
    session: Optional[requests.Session] = None,
    limit: Optional[int] = None,
    fetch: Callable = fetch_with_rate_limit,
) -> dict:
    """
    Ingestao sequencial de leis (uma requisicao por vez).

    Args:
        laws: definicoes a processar (default: registry inteiro)
        seed_dir: diretorio de saida dos seeds
        limiter: RateLimiter compartilhado (criado se None)
        session: requests.Session (criada se None)
        limit: maximo de leis (None = todas)
        fetch: funcao de fetch (injetavel para testes)

    Returns:
        {"processed", "skipped", "failed", "provisions", "results": [...]}
    """
    laws = list(laws) if laws is not None else enabled_laws()
    if limit:
        laws = laws[:limit]

    limiter = limiter or RateLimiter()
    session = session or build_session()
    os.makedirs(seed_dir, exist_ok=True)

    report = {"processed": 0, "skipped": 0, "failed": 0, "provisions": 0, "results": []}
    total = len(laws)

    for i, law_def in enumerate(laws, 1):
        path = seed_path(seed_dir, law_def.law_id)
        logger.info("[%d/%d] %s", i, total, law_def.law_id)

        if not _needs_fetch(path):
            logger.info("SKIP %s: seed ja existe", law_def.law_id)
            report["skipped"] += 1
            report["processed"] += 1
            report["results"].append({"law_id": law_def.law_id, "status": "skipped"})
            continue

        try:
            result = process_law(law_def, seed_dir, limiter, session=session, fetch=fetch)
        except Exception as e:
            logger.exception("ERRO em %s: %s", law_def.law_id, e)
            if not os.path.exists(path):
                write_seed(seed_dir, law_def.to_law_shell(fetch_error=str(e)))
            result = {"law_id": law_def.law_id, "status": "failed", "provisions": 0, "error": str(e)}

        if result["status"] == "failed":
            report["failed"] += 1
        report["provisions"] += result["provisions"]
        report["processed"] += 1
        report["results"].append(result)

    logger.info(
        "Ingestao completa: %d processadas, %d skipped, %d falhas, %d artigos",
        report["processed"], report["skipped"], report["failed"], report["provisions"],
    )
    return report
