# tests/test_citation.py
"""
Testes para lexcn.legal.citation (parse + format).
"""
from __future__ import annotations

import pytest

from lexcn.legal.citation import format_citation, parse_citation
from lexcn.legal.models import CITATION_STYLES, Citation


# ── parse_citation ───────────────────────────────────────────────────────────

class TestParseCitation:
    def test_por_id(self):
        c = parse_citation("csl-2016, art. 3")
        assert c.valid
        assert c.title == "csl-2016"
        assert c.article == "3"
        assert c.paragraph is None
        assert c.year == "2016"

    def test_por_id_com_paragrafo(self):
        c = parse_citation("pipl-2021 article 13 paragraph 2")
        assert (c.title, c.article, c.paragraph) == ("pipl-2021", "13", "2")

    def test_chines_artigo_primeiro(self):
        c = parse_citation("第三条 中华人民共和国网络安全法")
        assert c.valid
        assert c.title == "网络安全法"
        assert c.article == "3"
        assert c.type == "statute"

    def test_chines_com_paragrafo(self):
        c = parse_citation("第二十一条第二款 个人信息保护法")
        assert (c.article, c.paragraph) == ("21", "2")
        assert c.title == "个人信息保护法"

    def test_chines_codigo(self):
        c = parse_citation("第一千零三十四条 民法典")
        assert c.article == "1034"
        assert c.title == "民法典"

    def test_chines_regulamento(self):
        c = parse_citation("第五条 关键信息基础设施安全保护条例")
        assert c.title == "关键信息基础设施安全保护条例"
        assert c.type == "administrative_regulation"

    def test_chines_lei_primeiro(self):
        c = parse_citation("网络安全法 第三条")
        assert c.valid
        assert c.title == "网络安全法"
        assert c.article == "3"

    def test_chines_lei_primeiro_com_virgula_fullwidth(self):
        c = parse_citation("中华人民共和国数据安全法，第二十一条第一款")
        assert (c.title, c.article, c.paragraph) == ("数据安全法", "21", "1")

    def test_ingles(self):
        c = parse_citation("Article 3, Cybersecurity Law of the People's Republic of China")
        assert c.valid
        assert c.title_en == "Cybersecurity Law of the People's Republic of China"
        assert c.title is None
        assert c.article == "3"

    def test_ingles_com_paragrafo(self):
        c = parse_citation("Article 13, Paragraph 1, Personal Information Protection Law")
        assert (c.article, c.paragraph) == ("13", "1")
        assert c.title_en == "Personal Information Protection Law"

    def test_curto_com_ano(self):
        c = parse_citation("Art. 3, CSL 2016")
        assert (c.title, c.article, c.year) == ("CSL", "3", "2016")

    def test_curto_com_paragrafo(self):
        c = parse_citation("Art. 3, Para. 1 CSL")
        assert (c.title, c.article, c.paragraph) == ("CSL", "3", "1")

    def test_so_artigo_chines(self):
        c = parse_citation("第三条第一款")
        assert c.valid
        assert c.title is None
        assert (c.article, c.paragraph) == ("3", "1")

    def test_so_artigo_ingles(self):
        c = parse_citation("Article 3, Paragraph 2")
        assert c.valid
        assert c.title_en is None
        assert (c.article, c.paragraph) == ("3", "2")

    def test_so_artigo_curto(self):
        c = parse_citation("Art. 7, Para. 2")
        assert c.valid
        assert c.title is None
        assert (c.article, c.paragraph) == ("7", "2")

    def test_chines_com_id(self):
        c = parse_citation("第三条第二款 csl-2016")
        assert c.valid
        assert (c.title, c.article, c.paragraph, c.year) == ("csl-2016", "3", "2", "2016")

    def test_chines_com_titulo_ingles(self):
        c = parse_citation("第二十一条 Cybersecurity Law")
        assert (c.title, c.article) == ("Cybersecurity Law", "21")

    def test_espacos_nas_pontas(self):
        c = parse_citation("   第三条 网络安全法  ")
        assert c.valid

    @pytest.mark.parametrize("text", ["", "   ", "random text", "Section 5 of something", "第条"])
    def test_invalida(self, text):
        c = parse_citation(text)
        assert not c.valid
        assert c.type == "unknown"
        assert c.error.startswith("Could not parse Chinese law citation")


# ── format_citation ──────────────────────────────────────────────────────────

class TestFormatCitation:
    def _citation(self, **kwargs):
        data = dict(valid=True, type="statute", title="网络安全法",
                    title_en="Cybersecurity Law", article="3", paragraph="1")
        data.update(kwargs)
        return Citation(**data)

    def test_chinese(self):
        assert format_citation(self._citation(), "chinese") == "第三条第一款 网络安全法"

    def test_english_prefere_titulo_ingles(self):
        assert format_citation(self._citation(), "english") == "Article 3, Paragraph 1, Cybersecurity Law"

    def test_full_usa_titulo(self):
        assert format_citation(self._citation(), "full") == "Article 3, Paragraph 1, 网络安全法"

    def test_short(self):
        assert format_citation(self._citation(paragraph=None), "short") == "Art. 3 网络安全法"

    def test_short_com_ano(self):
        c = self._citation(title="CSL", paragraph=None, year="2016")
        assert format_citation(c, "short") == "Art. 3 CSL 2016"

    def test_short_ano_ja_no_id(self):
        c = self._citation(title="csl-2016", paragraph=None, year="2016")
        assert format_citation(c, "short") == "Art. 3 csl-2016"

    def test_pinpoint(self):
        assert format_citation(self._citation(), "pinpoint") == "Art. 3, Para. 1"

    def test_sem_titulo_sem_virgula_sobrando(self):
        c = self._citation(title=None, title_en=None, paragraph=None)
        assert format_citation(c, "full") == "Article 3"
        assert format_citation(c, "english") == "Article 3"

    def test_default_full(self):
        assert format_citation(self._citation(paragraph=None)) == "Article 3, 网络安全法"

    def test_invalida_retorna_vazio(self):
        assert format_citation(Citation(valid=False, error="x"), "full") == ""

    def test_sem_artigo_retorna_vazio(self):
        assert format_citation(self._citation(article=None), "short") == ""

    def test_estilo_desconhecido(self):
        with pytest.raises(ValueError, match="Unknown citation style"):
            format_citation(self._citation(), "bluebook")


# ── parse(format(c)) ─────────────────────────────────────────────────────────

class TestRoundTrip:
    @pytest.mark.parametrize("style", CITATION_STYLES)
    @pytest.mark.parametrize("article,paragraph", [("3", None), ("21", "2"), ("103", "12")])
    def test_artigo_e_paragrafo_preservados(self, style, article, paragraph):
        original = Citation(
            valid=True, type="statute", title="个人信息保护法",
            title_en="Personal Information Protection Law",
            article=article, paragraph=paragraph,
        )
        parsed = parse_citation(format_citation(original, style))
        assert parsed.valid, style
        assert parsed.article == article
        assert parsed.paragraph == paragraph

    @pytest.mark.parametrize("style", CITATION_STYLES)
    def test_sem_titulo(self, style):
        original = Citation(valid=True, type="statute", article="8", paragraph="3")
        parsed = parse_citation(format_citation(original, style))
        assert parsed.valid, style
        assert (parsed.article, parsed.paragraph) == ("8", "3")

    @pytest.mark.parametrize("style", CITATION_STYLES)
    @pytest.mark.parametrize("text", [
        "csl-2016, art. 3, para. 2",
        "pipl-2021 article 21",
        "Article 21, Paragraph 2, Cybersecurity Law",
        "Art. 3, Para. 1 CSL 2016",
        "网络安全法 第一百零三条第十二款",
    ])
    def test_citacao_parseada_preservada(self, style, text):
        original = parse_citation(text)
        assert original.valid
        parsed = parse_citation(format_citation(original, style))
        assert parsed.valid, (style, text)
        assert (parsed.article, parsed.paragraph) == (original.article, original.paragraph)

    def test_ano_preservado_no_estilo_curto(self):
        original = parse_citation("Art. 3, CSL 2016")
        parsed = parse_citation(format_citation(original, "short"))
        assert (parsed.title, parsed.year) == ("CSL", "2016")
