# tests/test_npc_parser.py
"""
Testes unitarios para lexcn.legal.npc_parser.
"""
from __future__ import annotations

import os

from lexcn.legal.npc_parser import (
    normalize_chinese_text,
    parse_npc_html,
    parse_npc_index,
    segment_articles,
)

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _read_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES_DIR, name), "r", encoding="utf-8") as f:
        return f.read()


# ── segment_articles ─────────────────────────────────────────────────────────

class TestSegmentArticles:
    def test_dois_artigos(self):
        provisions = segment_articles(["第一条 内容甲", "第二条 内容乙"])
        assert [p.provision_ref for p in provisions] == ["1", "2"]
        assert [p.content for p in provisions] == ["内容甲", "内容乙"]
        assert all(p.section == p.provision_ref for p in provisions)

    def test_paragrafos_seguintes_juntados_com_quebra(self):
        provisions = segment_articles(["第一条 caput", "segundo paragrafo", "terceiro"])
        assert provisions[0].content == "caput\nsegundo paragrafo\nterceiro"

    def test_titulo_de_capitulo_descartado(self):
        provisions = segment_articles([
            "第一条 内容甲",
            "第二章　个人信息处理规则",
            "第一节　一般规定",
            "第一分编　通则",
            "第二条 内容乙",
        ])
        assert provisions[0].content == "内容甲"
        assert provisions[1].content == "内容乙"

    def test_texto_antes_do_primeiro_artigo_ignorado(self):
        provisions = segment_articles(["中华人民共和国某某法", "目录", "第一条 内容"])
        assert len(provisions) == 1
        assert provisions[0].content == "内容"

    def test_artigo_sem_corpo_nao_e_emitido(self):
        provisions = segment_articles(["第一条", "第二条 内容乙"])
        assert [p.provision_ref for p in provisions] == ["2"]

    def test_numero_arabe(self):
        provisions = segment_articles(["第12条 内容"])
        assert provisions[0].provision_ref == "12"

    def test_espaco_ideografico(self):
        provisions = segment_articles(["　　第三条　国家坚持网络安全与信息化发展并重。"])
        assert provisions[0].provision_ref == "3"
        assert provisions[0].content == "国家坚持网络安全与信息化发展并重。"

    def test_idioma_propagado(self):
        provisions = segment_articles(["第一条 content"], language="en")
        assert provisions[0].language == "en"


# ── parse_npc_html ───────────────────────────────────────────────────────────

class TestParseNpcHtml:
    def test_fixture_completa(self):
        law = parse_npc_html(
            _read_fixture("npc_law_sample.html"),
            "pipl-2021",
            "中华人民共和国个人信息保护法",
            "Personal Information Protection Law",
        )
        assert law.id == "pipl-2021"
        assert law.title_en == "Personal Information Protection Law"
        assert [p.provision_ref for p in law.provisions] == ["1", "2", "3", "10", "21", "103"]

    def test_artigo_com_varios_paragrafos(self):
        law = parse_npc_html(_read_fixture("npc_law_sample.html"), "pipl-2021", "个人信息保护法")
        art3 = law.provisions[2]
        lines = art3.content.split("\n")
        assert len(lines) == 3
        assert lines[0].startswith("在中华人民共和国境内")
        assert lines[2] == "（一）以向境内自然人提供产品或者服务为目的；"

    def test_titulo_de_capitulo_nao_entra_no_artigo(self):
        law = parse_npc_html(_read_fixture("npc_law_sample.html"), "pipl-2021", "个人信息保护法")
        for p in law.provisions:
            assert "第二章" not in p.content
            assert "一般规定" not in p.content

    def test_artigo_com_corpo_no_paragrafo_seguinte(self):
        law = parse_npc_html(_read_fixture("npc_law_sample.html"), "pipl-2021", "个人信息保护法")
        art10 = [p for p in law.provisions if p.provision_ref == "10"][0]
        assert art10.content == "任何组织、个人不得非法收集、使用、加工、传输他人个人信息。"

    def test_rodape_fora_do_bloco_ignorado(self):
        law = parse_npc_html(_read_fixture("npc_law_sample.html"), "pipl-2021", "个人信息保护法")
        assert all("版权所有" not in p.content for p in law.provisions)

    def test_sem_paragrafos_usa_quebras_de_linha(self):
        body = "\n".join([
            "第一条　为了保障网络安全，维护网络空间主权和国家安全、社会公共利益，制定本法。",
            "第二条　在中华人民共和国境内建设、运营、维护和使用网络，以及网络安全的监督管理，适用本法。",
            "第三条　国家坚持网络安全与信息化发展并重，遵循积极利用、科学发展、依法管理、确保安全的方针。",
        ])
        html = f"<html><body><div class='law_content'>{body}</div></body></html>"
        law = parse_npc_html(html, "csl-2016", "网络安全法")
        assert [p.provision_ref for p in law.provisions] == ["1", "2", "3"]

    def test_conteudo_curto_usa_pagina_inteira(self):
        law = parse_npc_html("<html><body><p>第一条 短</p></body></html>", "x-2020", "某法")
        assert [p.provision_ref for p in law.provisions] == ["1"]
        assert law.provisions[0].content == "短"

    def test_fragmento_sem_body(self):
        html = (
            "<div class='x'>"
            "<p>第一条　为了保障网络安全，制定本法。</p>"
            "<p>第二条　在中华人民共和国境内建设网络，适用本法。</p>"
            "<p>第三条　国家坚持网络安全与信息化发展并重。</p>"
            "</div>"
        )
        law = parse_npc_html(html, "csl-2016", "网络安全法")
        assert [p.provision_ref for p in law.provisions] == ["1", "2", "3"]
        assert law.provisions[2].content == "国家坚持网络安全与信息化发展并重。"

    def test_pagina_sem_artigos(self):
        law = parse_npc_html("<p>通知</p>", "x-2020", "某法")
        assert law.provisions == []

    def test_html_vazio(self):
        law = parse_npc_html("", "x-2020", "某法")
        assert law.provisions == []
        assert law.title == "某法"


# ── parse_npc_index ──────────────────────────────────────────────────────────

class TestParseNpcIndex:
    def test_links_de_lei(self):
        entries = parse_npc_index(_read_fixture("npc_index_sample.html"))
        titles = [e.title for e in entries]
        assert titles == [
            "中华人民共和国个人信息保护法",
            "中华人民共和国数据安全法",
            "中华人民共和国民法典",
            "关键信息基础设施安全保护条例",
        ]

    def test_link_relativo_resolvido(self):
        entries = parse_npc_index(_read_fixture("npc_index_sample.html"))
        assert entries[0].url == "https://www.npc.gov.cn/npc/c2/c30834/202108/t20210820_313095.html"
        assert entries[1].url == "https://www.npc.gov.cn/npc/c2/c30834/202106/t20210610_312280.html"

    def test_base_url_customizada(self):
        entries = parse_npc_index(_read_fixture("npc_index_sample.html"), base_url="https://www.gov.cn")
        assert entries[3].url == "https://www.gov.cn/flfg/xzfg/t1.html"


class TestNormalizeChineseText:
    def test_espaco_ideografico(self):
        assert normalize_chinese_text("　第一条　　总则 ") == "第一条 总则"
