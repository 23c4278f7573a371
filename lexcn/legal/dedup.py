# lexcn/legal/dedup.py
"""
Dedup de artigos extraidos.

Chave: (provision_ref sem espacos nas pontas, language ou 'zh').
Paginas do NPC as vezes repetem o texto (versao impressa + versao web);
a mesma chave pode aparecer mais de uma vez na extracao.

Merge:
- conteudo comparado com espacos colapsados
- vence o conteudo normalizado mais longo (empate: fica o que ja estava)
- titulo nao-vazio do perdedor e herdado se o vencedor nao tiver titulo
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Dict, List, Tuple

from lexcn.legal.models import DEFAULT_LANGUAGE, DedupStats, ParsedProvision

logger = logging.getLogger(__name__)

_RE_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _RE_WHITESPACE.sub(" ", text or "").strip()


def _merge(existing: ParsedProvision, incoming: ParsedProvision) -> ParsedProvision:
    existing_len = len(normalize_whitespace(existing.content))
    incoming_len = len(normalize_whitespace(incoming.content))

    if incoming_len > existing_len:
        winner, loser = incoming, existing
    else:
        winner, loser = existing, incoming

    if not (winner.title or "").strip() and (loser.title or "").strip():
        winner = replace(winner, title=loser.title)

    # a chave sempre sai normalizada, venca quem vencer
    return replace(winner, provision_ref=existing.provision_ref, language=existing.language)


def dedupe_provisions(provisions: List[ParsedProvision]) -> Tuple[List[ParsedProvision], DedupStats]:
    """
    Remove artigos repetidos preservando a ordem da primeira ocorrencia.

    Returns:
        (lista deduplicada, DedupStats com duplicate_refs e conflicting_duplicates)
    """
    stats = DedupStats()
    by_key: Dict[Tuple[str, str], ParsedProvision] = {}

    for prov in provisions:
        ref = (prov.provision_ref or "").strip()
        language = prov.language or DEFAULT_LANGUAGE
        key = (ref, language)

        existing = by_key.get(key)
        if existing is None:
            by_key[key] = replace(prov, provision_ref=ref, language=language)
            continue

        stats.duplicate_refs += 1
        if normalize_whitespace(existing.content) != normalize_whitespace(prov.content):
            stats.conflicting_duplicates += 1
            logger.warning("dedup: conteudo divergente para artigo %s (%s)", ref, language)

        by_key[key] = _merge(existing, prov)

    # dict preserva ordem de insercao; reatribuir chave existente nao move
    return list(by_key.values()), stats
