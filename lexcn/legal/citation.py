# lexcn/legal/citation.py
"""
Parser e formatador de citacoes de legislacao chinesa.

Formatos aceitos (primeiro que casar vence):
  1. Por id:          "csl-2016, art. 3" / "pipl-2021 article 5 para 2"
  2. Chines:          "第三条 中华人民共和国网络安全法" / "第三条第一款 网络安全法"
  3. Chines inverso:  "网络安全法 第三条"
  4. Ingles:          "Article 3, Paragraph 1, Cybersecurity Law"
  5. Curto:           "Art. 3, CSL 2016" / "Art. 3 Para. 1 CSL"
  6. Chines, titulo livre: "第三条第二款 csl-2016"
  7. So artigo:       "第三条" / "Article 3" / "Art. 3, Para. 1"

Numeros sempre armazenados na forma arabe ("三" → "3").
parse_citation nunca levanta excecao: entrada invalida → Citation(valid=False).
format_citation e funcao pura, sem checar existencia no banco.
"""
from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from lexcn.legal.models import CITATION_STYLES, Citation
from lexcn.utils.chinese_numerals import build_chinese_ref, parse_numeral

# ── Padroes ──────────────────────────────────────────────────────────────────

ID_CITATION = re.compile(
    r"^([a-z][\w-]+(?:-\d{4})?)\s*,?\s*(?:art\.?|article)\s*(\d+)"
    r"(?:\s*,?\s*(?:para?\.?|paragraph)\s*(\d+))?$",
    re.IGNORECASE,
)

CHINESE_CITATION = re.compile(
    r"^第(.+?)条(?:第(.+?)款)?\s*[,，]?\s*(?:中华人民共和国)?(.+?)(法|典|条例)$"
)

CHINESE_LAW_FIRST = re.compile(
    r"^(?:中华人民共和国)?(.+?(?:法|典|条例))\s*[,，]?\s*第(.+?)条(?:第(.+?)款)?$"
)

# titulo nao pode comecar com "Paragraph": "Article 3, Paragraph 1" e citacao sem titulo
ENGLISH_CITATION = re.compile(
    r"^Article\s+(\d+)(?:\s*,?\s*Paragraph\s+(\d+))?\s*,?\s+(?!Paragraph\b)(.+?)$",
    re.IGNORECASE,
)

SHORT_CITATION = re.compile(
    r"^Art\.?\s*(\d+)(?:\s*,?\s*(?:Para?\.?\s*)?(\d+))?\s*,?\s+(?!Para)(.+?)(?:\s+(\d{4}))?$",
    re.IGNORECASE,
)

# titulo livre (id, nome em ingles) depois de 第N条
CHINESE_ANY_TITLE = re.compile(r"^第(.+?)条(?:第(.+?)款)?\s+(.+)$")

BARE_CHINESE_ARTICLE = re.compile(r"^第(.+?)条(?:第(.+?)款)?$")
BARE_ENGLISH_ARTICLE = re.compile(r"^Article\s+(\d+)(?:\s*,?\s*Paragraph\s+(\d+))?$", re.IGNORECASE)
BARE_SHORT_ARTICLE = re.compile(r"^Art\.?\s*(\d+)(?:\s*,?\s*Para?\.?\s*(\d+))?$", re.IGNORECASE)

_RE_ID_YEAR = re.compile(r"-(\d{4})$")

# Sufixo que indica regulamento administrativo (国务院条例)
_REGULATION_MARKERS = ("条例", "regulation")


# ── Helpers ──────────────────────────────────────────────────────────────────

def _numeral(raw: Optional[str]) -> Optional[str]:
    """Numeral → string arabe; mantem o texto cru se nao converter."""
    if raw is None:
        return None
    value = parse_numeral(raw.strip())
    return str(value) if value > 0 else raw


def _id_year(law_id: str) -> Optional[str]:
    m = _RE_ID_YEAR.search(law_id)
    return m.group(1) if m else None


def _infer_type(title: Optional[str], title_en: Optional[str] = None) -> str:
    haystack = f"{title or ''} {title_en or ''}".lower()
    if any(marker in haystack for marker in _REGULATION_MARKERS):
        return "administrative_regulation"
    return "statute"


# ── Handlers (um por padrao) ─────────────────────────────────────────────────

def _from_id(m: re.Match) -> Citation:
    law_id = m.group(1)
    return Citation(
        valid=True,
        type="statute",
        title=law_id,
        article=m.group(2),
        paragraph=m.group(3),
        year=_id_year(law_id),
    )


def _from_chinese(m: re.Match) -> Citation:
    title = m.group(3).strip() + m.group(4)
    return Citation(
        valid=True,
        type=_infer_type(title),
        title=title,
        article=_numeral(m.group(1)),
        paragraph=_numeral(m.group(2)),
    )


def _from_chinese_law_first(m: re.Match) -> Citation:
    title = m.group(1).strip()
    return Citation(
        valid=True,
        type=_infer_type(title),
        title=title,
        article=_numeral(m.group(2)),
        paragraph=_numeral(m.group(3)),
    )


def _from_english(m: re.Match) -> Citation:
    title_en = m.group(3).strip()
    return Citation(
        valid=True,
        type=_infer_type(None, title_en),
        title_en=title_en,
        article=m.group(1),
        paragraph=m.group(2),
    )


def _from_short(m: re.Match) -> Citation:
    title = m.group(3).strip()
    return Citation(
        valid=True,
        type=_infer_type(title),
        title=title,
        article=m.group(1),
        paragraph=m.group(2),
        year=m.group(4),
    )


def _from_chinese_any_title(m: re.Match) -> Citation:
    title = m.group(3).strip()
    return Citation(
        valid=True,
        type=_infer_type(title),
        title=title,
        article=_numeral(m.group(1)),
        paragraph=_numeral(m.group(2)),
        year=_id_year(title),
    )


def _from_bare_chinese(m: re.Match) -> Citation:
    return Citation(
        valid=True,
        type="statute",
        article=_numeral(m.group(1)),
        paragraph=_numeral(m.group(2)),
    )


def _from_bare_arabic(m: re.Match) -> Citation:
    return Citation(valid=True, type="statute", article=m.group(1), paragraph=m.group(2))


_MATCHERS: List[Tuple[str, re.Pattern, Callable[[re.Match], Citation]]] = [
    ("id", ID_CITATION, _from_id),
    ("chinese", CHINESE_CITATION, _from_chinese),
    ("chinese_law_first", CHINESE_LAW_FIRST, _from_chinese_law_first),
    ("english", ENGLISH_CITATION, _from_english),
    ("short", SHORT_CITATION, _from_short),
    ("chinese_any_title", CHINESE_ANY_TITLE, _from_chinese_any_title),
    ("bare_chinese", BARE_CHINESE_ARTICLE, _from_bare_chinese),
    ("bare_english", BARE_ENGLISH_ARTICLE, _from_bare_arabic),
    ("bare_short", BARE_SHORT_ARTICLE, _from_bare_arabic),
]


def parse_citation(text: str) -> Citation:
    """
    Parseia citacao livre.

    Returns:
        Citation(valid=True, ...) do primeiro padrao que casar, ou
        Citation(valid=False, type='unknown', error=...) se nenhum casar.
    """
    trimmed = (text or "").strip()

    for _name, pattern, handler in _MATCHERS:
        m = pattern.match(trimmed)
        if m:
            return handler(m)

    return Citation(
        valid=False,
        type="unknown",
        error=f'Could not parse Chinese law citation: "{trimmed}"',
    )


def _arabic_ref(citation: Citation, article_word: str, paragraph_word: str) -> str:
    ref = f"{article_word} {citation.article}"
    if citation.paragraph:
        ref += f", {paragraph_word} {citation.paragraph}"
    return ref


def _to_int(value: Optional[str]) -> Optional[int]:
    if value and value.isdigit():
        return int(value)
    return None


def format_citation(citation: Citation, style: str = "full") -> str:
    """
    Renderiza citacao num dos estilos: chinese, english, full, short, pinpoint.

    Citacao invalida (ou sem artigo) → "". Estilo desconhecido → ValueError.
    """
    if style not in CITATION_STYLES:
        raise ValueError(f"Unknown citation style: '{style}' (aceitos: {', '.join(CITATION_STYLES)})")

    if not citation.valid or not citation.article:
        return ""

    title = citation.title or citation.title_en or ""

    if style == "chinese":
        ref = build_chinese_ref(_to_int(citation.article) or 0, _to_int(citation.paragraph))
        return f"{ref} {title}".strip()

    if style == "english":
        name = citation.title_en or title
        return re.sub(r",\s*$", "", f"{_arabic_ref(citation, 'Article', 'Paragraph')}, {name}".strip())

    if style == "full":
        return re.sub(r",\s*$", "", f"{_arabic_ref(citation, 'Article', 'Paragraph')}, {title}".strip())

    if style == "short":
        # ano so quando o titulo ainda nao o carrega ("CSL 2016", nao "csl-2016 2016")
        if citation.year and not title.endswith(citation.year):
            title = f"{title} {citation.year}".strip()
        return f"{_arabic_ref(citation, 'Art.', 'Para.')} {title}".strip()

    # pinpoint
    return _arabic_ref(citation, "Art.", "Para.")
