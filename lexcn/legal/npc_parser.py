# lexcn/legal/npc_parser.py
"""
Parser de HTML de legislacao chinesa (npc.gov.cn, gov.cn).

Segmenta o texto da lei em artigos (第N条), normalizando o numero para
forma arabe ("第二十一条" → "21"). Titulos de capitulo/secao (第一章,
第二节, 第一编) sao descartados e nunca entram no corpo de um artigo.

O texto e verbatim: so o enquadramento estrutural muda.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from lexcn.legal.models import DEFAULT_LANGUAGE, LawIndexEntry, ParsedLaw, ParsedProvision
from lexcn.utils.chinese_numerals import NUMERAL_CHARS, parse_numeral

logger = logging.getLogger(__name__)

NPC_BASE_URL = "https://www.npc.gov.cn"

# Seletores tentados em ordem; o primeiro com texto > MIN_CONTENT_CHARS vence
_CONTENT_SELECTORS = [
    ".article_content",
    ".law_content",
    ".content",
    "#UCAP-CONTENT",
    ".p_content",
    "article",
    ".main_content",
    "body",
]

MIN_CONTENT_CHARS = 100

_PARAGRAPH_SELECTOR = "p, div.p, span.p"

# ── Padroes de artigo e de titulo estrutural ─────────────────────────────────

ARTICLE_PATTERN = re.compile(rf"^[\s\u3000]*第([{NUMERAL_CHARS}]+)条[\s\u3000]*")
CHAPTER_PATTERN = re.compile(rf"^[\s\u3000]*第([{NUMERAL_CHARS}]+)分?[章节编]")

_RE_LINE_BREAKS = re.compile(r"[\n\r]+")

# Ancora de indice aponta para lei se o texto tiver um destes
_LAW_TITLE_MARKERS = ("法", "条例", "典")


def _select_content(soup: BeautifulSoup):
    for selector in _CONTENT_SELECTORS:
        el = soup.select_one(selector)
        if el is not None and len(el.get_text().strip()) > MIN_CONTENT_CHARS:
            return el
    # nenhum bloco conhecido: a pagina inteira e o container
    return soup.body or soup


def _collect_paragraphs(container) -> List[str]:
    paragraphs = []
    for el in container.select(_PARAGRAPH_SELECTOR):
        text = el.get_text().strip()
        if text:
            paragraphs.append(text)

    if not paragraphs:
        # pagina sem <p>: texto corrido com quebras de linha
        for line in _RE_LINE_BREAKS.split(container.get_text()):
            line = line.strip()
            if line:
                paragraphs.append(line)

    return paragraphs


def segment_articles(paragraphs: List[str], language: str = DEFAULT_LANGUAGE) -> List[ParsedProvision]:
    """
    Agrupa paragrafos em artigos.

    Paragrafo com 第N条 fecha o artigo aberto e abre um novo. Titulo de
    capitulo e descartado. Texto antes do primeiro artigo (preambulo,
    sumario) e ignorado. Artigo sem corpo nao e emitido.
    """
    provisions: List[ParsedProvision] = []
    current_ref: Optional[str] = None
    current_lines: List[str] = []

    def _flush():
        if current_ref and current_lines:
            content = "\n".join(current_lines).strip()
            provisions.append(
                ParsedProvision(
                    provision_ref=current_ref,
                    section=current_ref,
                    content=content,
                    language=language,
                )
            )

    for para in paragraphs:
        m = ARTICLE_PATTERN.match(para)
        if m:
            _flush()
            current_ref = str(parse_numeral(m.group(1)))
            rest = para[m.end():].strip()
            current_lines = [rest] if rest else []
        elif current_ref:
            if not CHAPTER_PATTERN.match(para):
                current_lines.append(para)

    _flush()
    return provisions


def parse_npc_html(
    html: str,
    law_id: str,
    title: str,
    title_en: Optional[str] = None,
    language: str = DEFAULT_LANGUAGE,
) -> ParsedLaw:
    """
    Extrai artigos de uma pagina de lei do NPC.

    Args:
        html: HTML bruto da pagina
        law_id: id da lei ('pipl-2021')
        title: titulo chines
        title_en: titulo ingles
        language: tag de idioma dos artigos

    Returns:
        ParsedLaw com provisions em ordem de documento. Sem bloco conhecido a
        pagina inteira e segmentada; sem 第N条 a lista fica vazia.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    law = ParsedLaw(id=law_id, title=title, title_en=title_en, language=language)

    container = _select_content(soup)

    paragraphs = _collect_paragraphs(container)
    law.provisions = segment_articles(paragraphs, language=language)

    if not law.provisions:
        logger.warning("npc_parser: 0 artigos extraidos para %s (%d paragrafos)", law_id, len(paragraphs))
    else:
        logger.info("npc_parser: %s → %d artigos", law_id, len(law.provisions))

    return law


def parse_npc_index(html: str, base_url: str = NPC_BASE_URL) -> List[LawIndexEntry]:
    """Links candidatos a lei numa pagina de listagem (texto com 法/条例/典)."""
    soup = BeautifulSoup(html or "", "html.parser")
    entries: List[LawIndexEntry] = []

    for a in soup.find_all("a"):
        href = (a.get("href") or "").strip()
        text = a.get_text().strip()
        if not href or not text:
            continue
        if not any(marker in text for marker in _LAW_TITLE_MARKERS):
            continue

        url = href if href.startswith("http") else urljoin(base_url + "/", href)
        entries.append(LawIndexEntry(title=text, url=url))

    return entries


def normalize_chinese_text(text: str) -> str:
    """Espaco ideografico → espaco comum, espacos colapsados."""
    return re.sub(r"\s+", " ", (text or "").replace("　", " ")).strip()
