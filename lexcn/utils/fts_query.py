# lexcn/utils/fts_query.py
"""
Construtor de query FTS5 para busca de legislacao.

Sanitiza input do usuario para evitar erro de sintaxe FTS5 com caracteres
especiais, suportando consultas em chines e ingles. O tokenizer unicode61
trata sequencias CJK como tokens.

Retorna duas variantes:
  primary:  "tok1"* "tok2"*      (estrita, AND implicito)
  fallback: tok1* OR tok2*       (frouxa, para retry quando primary nao acha nada)
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

MAX_QUERY_LENGTH = 1000

EMPTY_MATCH = '""'

# Aspas (inclusive tipograficas), operadores booleanos explicitos, wildcard final
RE_EXPLICIT_FTS_SYNTAX = re.compile(r'["“”]|\bAND\b|\bOR\b|\bNOT\b|\*$')

# Tudo que nao for letra, digito, underscore ou hifen
_RE_UNSAFE_TOKEN_CHARS = re.compile(r"[^\w\-]")


@dataclass
class FtsQueryVariants:
    primary: str
    fallback: Optional[str] = None


def sanitize_token(token: str) -> str:
    return _RE_UNSAFE_TOKEN_CHARS.sub("", token)


def _normalize_explicit(query: str) -> str:
    """Preserva a sintaxe do usuario, removendo so o que e perigoso."""
    normalized = re.sub(r"[“”]", '"', query)
    normalized = normalized.replace(";", "")
    normalized = normalized.replace("--", "")
    normalized = normalized[:MAX_QUERY_LENGTH]

    if normalized.count('"') % 2 != 0:
        normalized += '"'
    return normalized


def build_fts_query_variants(query: str) -> FtsQueryVariants:
    """
    Reescreve query livre em variantes FTS5.

    Args:
        query: texto digitado pelo usuario

    Returns:
        FtsQueryVariants (fallback=None quando o usuario usou sintaxe explicita
        ou quando nao sobrou token)
    """
    trimmed = (query or "")[:MAX_QUERY_LENGTH].strip()

    if not trimmed:
        return FtsQueryVariants(primary=EMPTY_MATCH)

    if RE_EXPLICIT_FTS_SYNTAX.search(trimmed):
        return FtsQueryVariants(primary=_normalize_explicit(trimmed))

    tokens = [sanitize_token(t) for t in trimmed.split()]
    tokens = [t for t in tokens if t]

    if not tokens:
        return FtsQueryVariants(primary=EMPTY_MATCH)

    primary = " ".join(f'"{t}"*' for t in tokens)
    fallback = " OR ".join(f"{t}*" for t in tokens)
    return FtsQueryVariants(primary=primary, fallback=fallback)
