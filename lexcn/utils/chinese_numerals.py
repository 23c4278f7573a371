# lexcn/utils/chinese_numerals.py
"""
Conversao entre numerais chineses e inteiros.

Leis chinesas citam artigos no formato 第N条:
  第一条       = Art. 1
  第二十一条   = Art. 21
  第一百零三条 = Art. 103

Conversao leniente: glifo desconhecido vale zero e a leitura continua.
Nunca levanta excecao; resultado 0 significa "nao parseado" para quem chama.

Faixa suportada: 0..9999. Fora disso arabic_to_chinese devolve str(num).
"""
from __future__ import annotations

import re
from typing import Optional

# Digitos comuns + variantes financeiras (大写) → mesmo valor
CHINESE_DIGITS = {
    "零": 0, "〇": 0,
    "一": 1, "壹": 1,
    "二": 2, "贰": 2, "两": 2,
    "三": 3, "叁": 3,
    "四": 4, "肆": 4,
    "五": 5, "伍": 5,
    "六": 6, "陆": 6,
    "七": 7, "柒": 7,
    "八": 8, "捌": 8,
    "九": 9, "玖": 9,
}

CHINESE_MULTIPLIERS = {
    "十": 10, "拾": 10,
    "百": 100, "佰": 100,
    "千": 1000, "仟": 1000,
}

ARABIC_TO_CHINESE = ["零", "一", "二", "三", "四", "五", "六", "七", "八", "九"]

# Classe de caracteres para regex de 第X条 / 第X章 (digitos arabes incluidos)
NUMERAL_CHARS = "".join(CHINESE_DIGITS) + "".join(CHINESE_MULTIPLIERS) + r"\d"

MAX_SUPPORTED = 9999

_RE_ARABIC_PREFIX = re.compile(r"^\s*(\d+)")
_RE_ARTICLE = re.compile(r"第([^第条]+?)条")
_RE_PARAGRAPH = re.compile(r"第([^第条款]+?)款")


def chinese_to_arabic(chinese: str) -> int:
    """
    Converte numeral chines em inteiro.

    Exemplos:
        一 -> 1, 十 -> 10, 十一 -> 11, 二十一 -> 21,
        一百 -> 100, 一百零三 -> 103, 二百五十六 -> 256
    """
    chars = list((chinese or "").strip())
    if not chars:
        return 0

    if len(chars) == 1:
        ch = chars[0]
        if ch in CHINESE_DIGITS:
            return CHINESE_DIGITS[ch]
        if CHINESE_MULTIPLIERS.get(ch) == 10:
            return 10
        return 0

    result = 0
    current = 0

    for i, ch in enumerate(chars):
        if ch in CHINESE_DIGITS:
            current = CHINESE_DIGITS[ch]
        elif ch in CHINESE_MULTIPLIERS:
            multiplier = CHINESE_MULTIPLIERS[ch]
            if current == 0 and multiplier == 10 and i == 0:
                # 十 inicial sem digito antes = 10 (十一 = 11)
                result += 10
            else:
                result += current * multiplier
            current = 0
        # glifo desconhecido: contribui zero

    # digito final sem multiplicador (o 三 de 二十三)
    result += current
    return result


def arabic_to_chinese(num: int) -> str:
    """
    Converte inteiro em numeral chines.

    Exemplos:
        1 -> 一, 10 -> 十, 11 -> 十一, 21 -> 二十一,
        100 -> 一百, 103 -> 一百零三, 1010 -> 一千零一十
    """
    if num < 0 or num > MAX_SUPPORTED:
        return str(num)
    if num == 0:
        return ARABIC_TO_CHINESE[0]

    thousands = num // 1000
    hundreds = (num % 1000) // 100
    tens = (num % 100) // 10
    ones = num % 10

    parts = []

    if thousands > 0:
        parts.append(ARABIC_TO_CHINESE[thousands] + "千")

    if hundreds > 0:
        parts.append(ARABIC_TO_CHINESE[hundreds] + "百")
    elif thousands > 0 and (tens > 0 or ones > 0):
        parts.append("零")

    if tens > 0:
        if tens == 1 and thousands == 0 and hundreds == 0:
            # 十一, nao 一十一
            parts.append("十")
        else:
            parts.append(ARABIC_TO_CHINESE[tens] + "十")
    elif hundreds > 0 and ones > 0:
        parts.append("零")

    if ones > 0:
        parts.append(ARABIC_TO_CHINESE[ones])

    return "".join(parts)


def parse_numeral(text: str) -> int:
    """Digitos arabes primeiro, numeral chines depois."""
    m = _RE_ARABIC_PREFIX.match(text or "")
    if m:
        return int(m.group(1))
    return chinese_to_arabic(text)


def extract_article_number(ref: str) -> Optional[int]:
    """
    Numero do artigo em uma referencia chinesa.

    "第一条" -> 1, "第二十一条" -> 21, "第三条第一款" -> 3.
    None se nao houver 第...条.
    """
    m = _RE_ARTICLE.search(ref or "")
    if not m:
        return None
    return parse_numeral(m.group(1).strip())


def extract_paragraph_number(ref: str) -> Optional[int]:
    """Numero do paragrafo (款): "第三条第二款" -> 2. None se ausente."""
    m = _RE_PARAGRAPH.search(ref or "")
    if not m:
        return None
    return parse_numeral(m.group(1).strip())


def build_chinese_ref(article: int, paragraph: Optional[int] = None) -> str:
    """build_chinese_ref(3) -> "第三条"; build_chinese_ref(21, 1) -> "第二十一条第一款"."""
    ref = f"第{arabic_to_chinese(article)}条"
    if paragraph is not None and paragraph > 0:
        ref += f"第{arabic_to_chinese(paragraph)}款"
    return ref
