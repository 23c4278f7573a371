# tests/conftest.py
"""Fixtures compartilhadas: banco SQLite em memoria com schema e leis de exemplo."""
from __future__ import annotations

import sqlite3

import pytest

from lexcn.db.builder import load_documents
from lexcn.db.schema import init_schema
from lexcn.legal.models import DefinitionSeed, ExternalReferenceSeed, ParsedLaw, ParsedProvision


def make_law(law_id="pipl-2021", provisions=None, **kwargs) -> ParsedLaw:
    defaults = dict(
        title="中华人民共和国个人信息保护法",
        title_en="Personal Information Protection Law of the People's Republic of China",
        short_name="PIPL",
        status="in_force",
        issued_date="2021-08-20",
        in_force_date="2021-11-01",
        url="https://www.npc.gov.cn/npc/c2/c30834/202108/t20210820_313095.html",
    )
    defaults.update(kwargs)
    if provisions is None:
        provisions = [
            ParsedProvision("1", "1", "为了保护个人信息权益，规范个人信息处理活动，制定本法。"),
            ParsedProvision("2", "2", "自然人的个人信息受法律保护。"),
            ParsedProvision("21", "21", "个人信息处理者委托处理个人信息的，应当与受托人约定委托处理的目的。"),
        ]
    return ParsedLaw(id=law_id, provisions=provisions, **defaults)


def gdpr_reference(**kwargs) -> ExternalReferenceSeed:
    data = dict(
        external_id="regulation:2016/679",
        external_type="regulation",
        year=2016,
        number=679,
        title="Regulation (EU) 2016/679 General Data Protection Regulation",
        short_name="GDPR",
        reference_type="references",
        is_primary=True,
        description="PIPL is often compared to the EU GDPR",
    )
    data.update(kwargs)
    return ExternalReferenceSeed(**data)


@pytest.fixture
def conn():
    c = sqlite3.connect(":memory:")
    c.row_factory = sqlite3.Row
    c.execute("PRAGMA foreign_keys = ON")
    init_schema(c)
    yield c
    c.close()


@pytest.fixture
def loaded_conn(conn):
    """Banco com PIPL (in_force), CSL (amended) e um regulamento revogado."""
    pipl = make_law(
        external_references=[gdpr_reference()],
        definitions=[DefinitionSeed(term="个人信息", definition="以电子或者其他方式记录的与自然人有关的各种信息", term_en="personal information")],
    )
    csl = make_law(
        law_id="csl-2016",
        title="中华人民共和国网络安全法",
        title_en="Cybersecurity Law of the People's Republic of China",
        short_name="CSL",
        status="amended",
        provisions=[
            ParsedProvision("1", "1", "为了保障网络安全，维护网络空间主权，制定本法。"),
            ParsedProvision("3", "3", "国家坚持网络安全与信息化发展并重。"),
        ],
    )
    old_reg = make_law(
        law_id="old-reg-2001",
        type="administrative_regulation",
        title="计算机软件保护条例",
        title_en="Regulations on Computers Software Protection",
        short_name="Software Regulation",
        status="repealed",
        provisions=[ParsedProvision("1", "1", "为了保护计算机软件著作权人的权益，制定本条例。")],
    )
    load_documents(conn, [pipl, csl, old_reg])
    conn.commit()
    return conn
