"""Law registry: config-driven definitions for each statute ingested from npc.gov.cn."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from lexcn.legal.models import ExternalReferenceSeed, ParsedLaw


@dataclass(frozen=True)
class ExternalReferenceDef:
    external_id: str  # 'regulation:2016/679'
    external_type: str  # directive | regulation
    year: int
    number: int
    title: str
    short_name: str
    reference_type: str
    is_primary: bool
    description: str

    def to_seed(self) -> ExternalReferenceSeed:
        return ExternalReferenceSeed(
            external_id=self.external_id,
            external_type=self.external_type,
            year=self.year,
            number=self.number,
            title=self.title,
            short_name=self.short_name,
            reference_type=self.reference_type,
            is_primary=self.is_primary,
            description=self.description,
        )


@dataclass(frozen=True)
class LawDefinition:
    law_id: str
    title: str
    title_en: str
    short_name: str
    url: str
    issued_date: str
    in_force_date: str
    status: str  # in_force | amended | repealed | not_yet_in_force
    doc_type: str  # statute | administrative_regulation
    external_references: Tuple[ExternalReferenceDef, ...] = ()
    enabled: bool = True

    def to_law_shell(self, fetch_error: Optional[str] = None) -> ParsedLaw:
        """ParsedLaw so com metadata (sem artigos) a partir da definicao."""
        return ParsedLaw(
            id=self.law_id,
            title=self.title,
            type=self.doc_type,
            title_en=self.title_en,
            short_name=self.short_name,
            status=self.status,
            issued_date=self.issued_date,
            in_force_date=self.in_force_date,
            url=self.url,
            external_references=[r.to_seed() for r in self.external_references],
            fetch_error=fetch_error,
        )


LAW_CONFIGS: Dict[str, LawDefinition] = {
    "csl-2016": LawDefinition(
        law_id="csl-2016",
        title="中华人民共和国网络安全法",
        title_en="Cybersecurity Law of the People's Republic of China",
        short_name="CSL",
        url="https://www.npc.gov.cn/npc/c2/c30834/202411/t20241101_441026.html",
        issued_date="2016-11-07",
        in_force_date="2017-06-01",
        status="amended",
        doc_type="statute",
        external_references=(
            ExternalReferenceDef(
                external_id="directive:2022/2555",
                external_type="directive",
                year=2022,
                number=2555,
                title="Directive (EU) 2022/2555 on measures for a high common level of cybersecurity (NIS2)",
                short_name="NIS2 Directive",
                reference_type="references",
                is_primary=True,
                description="CSL addresses similar cybersecurity requirements as the EU NIS2 Directive",
            ),
        ),
    ),
    "pipl-2021": LawDefinition(
        law_id="pipl-2021",
        title="中华人民共和国个人信息保护法",
        title_en="Personal Information Protection Law of the People's Republic of China",
        short_name="PIPL",
        url="https://www.npc.gov.cn/npc/c2/c30834/202108/t20210820_313095.html",
        issued_date="2021-08-20",
        in_force_date="2021-11-01",
        status="in_force",
        doc_type="statute",
        external_references=(
            ExternalReferenceDef(
                external_id="regulation:2016/679",
                external_type="regulation",
                year=2016,
                number=679,
                title="Regulation (EU) 2016/679 General Data Protection Regulation",
                short_name="GDPR",
                reference_type="references",
                is_primary=True,
                description="PIPL is China's comprehensive personal data protection law, often compared to the EU GDPR",
            ),
        ),
    ),
    "dsl-2021": LawDefinition(
        law_id="dsl-2021",
        title="中华人民共和国数据安全法",
        title_en="Data Security Law of the People's Republic of China",
        short_name="DSL",
        url="https://www.npc.gov.cn/npc/c2/c30834/202106/t20210610_312280.html",
        issued_date="2021-06-10",
        in_force_date="2021-09-01",
        status="in_force",
        doc_type="statute",
        external_references=(
            ExternalReferenceDef(
                external_id="regulation:2022/868",
                external_type="regulation",
                year=2022,
                number=868,
                title="Regulation (EU) 2022/868 on European data governance (Data Governance Act)",
                short_name="Data Governance Act",
                reference_type="references",
                is_primary=True,
                description="DSL addresses data classification and security governance, paralleling EU Data Governance Act",
            ),
        ),
    ),
    "company-law-2023": LawDefinition(
        law_id="company-law-2023",
        title="中华人民共和国公司法",
        title_en="Company Law of the People's Republic of China",
        short_name="Company Law",
        url="https://www.npc.gov.cn/npc/c2/c30834/202312/t20231229_433798.html",
        issued_date="2023-12-29",
        in_force_date="2024-07-01",
        status="in_force",
        doc_type="statute",
    ),
    "civil-code-2020": LawDefinition(
        law_id="civil-code-2020",
        title="中华人民共和国民法典",
        title_en="Civil Code of the People's Republic of China",
        short_name="Civil Code",
        url="https://www.npc.gov.cn/npc/c2/c30834/202006/t20200602_306419.html",
        issued_date="2020-05-28",
        in_force_date="2021-01-01",
        status="in_force",
        doc_type="statute",
    ),
    "ecommerce-law-2018": LawDefinition(
        law_id="ecommerce-law-2018",
        title="中华人民共和国电子商务法",
        title_en="E-Commerce Law of the People's Republic of China",
        short_name="E-Commerce Law",
        url="https://www.npc.gov.cn/npc/c2/c30834/201808/t20180831_223726.html",
        issued_date="2018-08-31",
        in_force_date="2019-01-01",
        status="in_force",
        doc_type="statute",
    ),
    "aml-2022": LawDefinition(
        law_id="aml-2022",
        title="中华人民共和国反垄断法",
        title_en="Anti-Monopoly Law of the People's Republic of China",
        short_name="AML",
        url="https://www.npc.gov.cn/npc/c2/c30834/202206/t20220624_318367.html",
        issued_date="2022-06-24",
        in_force_date="2022-08-01",
        status="in_force",
        doc_type="statute",
    ),
}


def get_law(law_id: str) -> LawDefinition:
    cfg = LAW_CONFIGS.get(law_id)
    if cfg is None:
        raise ValueError(f"Lei desconhecida: {law_id}. Validas: {list(LAW_CONFIGS.keys())}")
    return cfg


def enabled_laws(limit: Optional[int] = None) -> List[LawDefinition]:
    laws = [cfg for cfg in LAW_CONFIGS.values() if cfg.enabled]
    return laws[:limit] if limit else laws
