# lexcn/legal/models.py
"""
Data models para o pipeline de legislacao.
Dataclasses puras, sem dependencia de DB.

Seeds (1 JSON por lei em data/seed/) sao serializados via to_dict/from_dict.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_LANGUAGE = "zh"

DOCUMENT_TYPES = ("statute", "administrative_regulation", "judicial_interpretation")
DOCUMENT_STATUSES = ("in_force", "amended", "repealed", "not_yet_in_force")

EXTERNAL_TYPES = ("directive", "regulation")

REFERENCE_TYPES = (
    "references",
    "implements",
    "supplements",
    "applies",
    "complies_with",
    "derogates_from",
    "amended_by",
    "repealed_by",
    "cites_article",
    "see_also",
)

IMPLEMENTATION_STATUSES = ("complete", "partial", "pending", "unknown")

CITATION_STYLES = ("chinese", "english", "full", "short", "pinpoint")


def _check_enum(value: str, allowed: tuple, field_name: str) -> str:
    if value not in allowed:
        raise ValueError(f"{field_name} invalido: '{value}' (aceitos: {', '.join(allowed)})")
    return value


@dataclass
class ParsedProvision:
    """Um artigo (条) extraido de uma lei."""
    provision_ref: str          # '21' (forma arabe)
    section: str                # igual a provision_ref quando nao ha estrutura mais fina
    content: str                # texto verbatim, nunca parafraseado
    title: str = ""
    chapter: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["chapter"] is None:
            del data["chapter"]
        if data["metadata"] is None:
            del data["metadata"]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedProvision":
        ref = str(data["provision_ref"])
        return cls(
            provision_ref=ref,
            section=str(data.get("section") or ref),
            content=data.get("content", ""),
            title=data.get("title") or "",
            chapter=data.get("chapter"),
            language=data.get("language") or DEFAULT_LANGUAGE,
            metadata=data.get("metadata"),
        )


@dataclass
class DefinitionSeed:
    """Par termo-definicao atribuido a uma lei."""
    term: str
    definition: str
    term_en: Optional[str] = None
    source_provision: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefinitionSeed":
        return cls(
            term=data["term"],
            definition=data["definition"],
            term_en=data.get("term_en"),
            source_provision=data.get("source_provision"),
        )


@dataclass
class ExternalReferenceSeed:
    """Declaracao de referencia cruzada para instrumento estrangeiro (UE)."""
    external_id: str            # 'regulation:2016/679'
    external_type: str          # 'directive' | 'regulation'
    year: int
    number: int
    title: str
    short_name: str
    reference_type: str = "references"
    is_primary: bool = False
    description: Optional[str] = None
    article: Optional[str] = None           # artigo do instrumento externo
    provision_ref: Optional[str] = None     # artigo da lei chinesa (origem), se houver

    def __post_init__(self):
        _check_enum(self.external_type, EXTERNAL_TYPES, "external_type")
        _check_enum(self.reference_type, REFERENCE_TYPES, "reference_type")

    @property
    def implementation_status(self) -> str:
        return "complete" if self.is_primary else "unknown"

    @property
    def eur_lex_url(self) -> str:
        kind = "reg" if self.external_type == "regulation" else "dir"
        return f"https://eur-lex.europa.eu/eli/{kind}/{self.year}/{self.number}/oj"

    @property
    def full_citation(self) -> str:
        return f"{self.short_name} ({self.external_type} {self.year}/{self.number})"

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExternalReferenceSeed":
        return cls(
            external_id=data["external_id"],
            external_type=data["external_type"],
            year=int(data["year"]),
            number=int(data["number"]),
            title=data.get("title", ""),
            short_name=data.get("short_name", ""),
            reference_type=data.get("reference_type", "references"),
            is_primary=bool(data.get("is_primary", False)),
            description=data.get("description"),
            article=data.get("article"),
            provision_ref=data.get("provision_ref"),
        )


@dataclass
class ParsedLaw:
    """Documento completo: metadata + artigos + definicoes + referencias externas."""
    id: str
    title: str
    type: str = "statute"
    title_en: Optional[str] = None
    short_name: Optional[str] = None
    status: str = "in_force"
    issued_date: Optional[str] = None
    in_force_date: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    provisions: List[ParsedProvision] = field(default_factory=list)
    definitions: List[DefinitionSeed] = field(default_factory=list)
    external_references: List[ExternalReferenceSeed] = field(default_factory=list)
    fetch_error: Optional[str] = None   # preenchido em seed minimo (fetch falhou)

    def __post_init__(self):
        _check_enum(self.type, DOCUMENT_TYPES, "type")
        _check_enum(self.status, DOCUMENT_STATUSES, "status")

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "title_en": self.title_en,
            "short_name": self.short_name,
            "status": self.status,
            "issued_date": self.issued_date,
            "in_force_date": self.in_force_date,
            "url": self.url,
            "description": self.description,
            "language": self.language,
            "provisions": [p.to_dict() for p in self.provisions],
            "definitions": [asdict(d) for d in self.definitions],
            "external_references": [r.to_dict() for r in self.external_references],
        }
        if self.fetch_error:
            data["fetch_error"] = self.fetch_error
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParsedLaw":
        return cls(
            id=data["id"],
            title=data["title"],
            type=data.get("type") or "statute",
            title_en=data.get("title_en"),
            short_name=data.get("short_name"),
            status=data.get("status") or "in_force",
            issued_date=data.get("issued_date"),
            in_force_date=data.get("in_force_date"),
            url=data.get("url"),
            description=data.get("description"),
            language=data.get("language") or DEFAULT_LANGUAGE,
            provisions=[ParsedProvision.from_dict(p) for p in data.get("provisions") or []],
            definitions=[DefinitionSeed.from_dict(d) for d in data.get("definitions") or []],
            external_references=[
                ExternalReferenceSeed.from_dict(r) for r in data.get("external_references") or []
            ],
            fetch_error=data.get("fetch_error"),
        )


@dataclass
class LawIndexEntry:
    """Link candidato encontrado numa pagina de indice do portal."""
    title: str
    url: str
    title_en: str = ""
    adopted_date: str = ""
    effective_date: str = ""


@dataclass
class DedupStats:
    """Contadores de qualidade do dedup de artigos."""
    duplicate_refs: int = 0
    conflicting_duplicates: int = 0


@dataclass
class Citation:
    """Citacao parseada (transiente, nao persistida)."""
    valid: bool
    type: str = "unknown"       # 'statute' | 'administrative_regulation' | 'unknown'
    title: Optional[str] = None
    title_en: Optional[str] = None
    article: Optional[str] = None
    paragraph: Optional[str] = None
    year: Optional[str] = None
    error: Optional[str] = None
