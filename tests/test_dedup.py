# tests/test_dedup.py
"""
Testes para lexcn.legal.dedup.
"""
from __future__ import annotations

from lexcn.legal.dedup import dedupe_provisions, normalize_whitespace
from lexcn.legal.models import ParsedProvision


def _prov(ref, content, title="", language="zh"):
    return ParsedProvision(provision_ref=ref, section=ref.strip(), content=content, title=title, language=language)


class TestNormalizeWhitespace:
    def test_colapsa_e_apara(self):
        assert normalize_whitespace("  a \n\t b  ") == "a b"

    def test_none(self):
        assert normalize_whitespace(None) == ""


class TestDedupe:
    def test_sem_duplicatas(self):
        provs = [_prov("1", "甲"), _prov("2", "乙")]
        merged, stats = dedupe_provisions(provs)
        assert [p.provision_ref for p in merged] == ["1", "2"]
        assert stats.duplicate_refs == 0
        assert stats.conflicting_duplicates == 0

    def test_duplicata_so_com_espacos_diferentes(self):
        provs = [_prov("1", "为了保护 个人信息"), _prov("1", "为了保护\n  个人信息 ")]
        merged, stats = dedupe_provisions(provs)
        assert len(merged) == 1
        assert stats.duplicate_refs == 1
        assert stats.conflicting_duplicates == 0

    def test_duplicata_com_texto_diferente(self):
        provs = [_prov("1", "内容甲"), _prov("1", "内容乙")]
        _, stats = dedupe_provisions(provs)
        assert stats.duplicate_refs == 1
        assert stats.conflicting_duplicates == 1

    def test_vence_conteudo_mais_longo(self):
        provs = [_prov("1", "短"), _prov("1", "更长的内容")]
        merged, _ = dedupe_provisions(provs)
        assert merged[0].content == "更长的内容"

    def test_empate_fica_o_primeiro(self):
        provs = [_prov("1", "内容甲"), _prov("1", "内容乙")]
        merged, _ = dedupe_provisions(provs)
        assert merged[0].content == "内容甲"

    def test_titulo_herdado_do_perdedor(self):
        provs = [_prov("1", "短", title="总则"), _prov("1", "更长的内容")]
        merged, _ = dedupe_provisions(provs)
        assert merged[0].content == "更长的内容"
        assert merged[0].title == "总则"

    def test_titulo_do_vencedor_mantido(self):
        provs = [_prov("1", "短", title="甲"), _prov("1", "更长的内容", title="乙")]
        merged, _ = dedupe_provisions(provs)
        assert merged[0].title == "乙"

    def test_ref_aparada_na_chave(self):
        provs = [_prov(" 3 ", "内容"), _prov("3", "内容")]
        merged, stats = dedupe_provisions(provs)
        assert len(merged) == 1
        assert merged[0].provision_ref == "3"
        assert stats.duplicate_refs == 1

    def test_idiomas_diferentes_nao_sao_duplicata(self):
        provs = [_prov("1", "内容", language="zh"), _prov("1", "content", language="en")]
        merged, stats = dedupe_provisions(provs)
        assert len(merged) == 2
        assert stats.duplicate_refs == 0

    def test_idioma_vazio_vira_zh(self):
        provs = [_prov("1", "内容", language=""), _prov("1", "内容", language="zh")]
        merged, stats = dedupe_provisions(provs)
        assert len(merged) == 1
        assert merged[0].language == "zh"
        assert stats.duplicate_refs == 1

    def test_ordem_da_primeira_ocorrencia(self):
        provs = [_prov("2", "乙"), _prov("1", "甲"), _prov("2", "乙乙乙")]
        merged, _ = dedupe_provisions(provs)
        assert [p.provision_ref for p in merged] == ["2", "1"]
        assert merged[0].content == "乙乙乙"

    def test_idempotente(self):
        provs = [
            _prov("1", "甲"), _prov(" 1", "甲甲", title="t"), _prov("2", "乙"),
            _prov("2", "乙 "), _prov("3", "丙", language="en"),
        ]
        once, _ = dedupe_provisions(provs)
        twice, stats = dedupe_provisions(once)
        assert twice == once
        assert stats.duplicate_refs == 0

    def test_entrada_nao_e_modificada(self):
        provs = [_prov(" 1 ", "甲")]
        dedupe_provisions(provs)
        assert provs[0].provision_ref == " 1 "
