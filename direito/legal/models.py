# direito/legal/models.py
"""
Data models para parsing/validacao de legislacao.
Dataclasses puras, sem dependencia de DB.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

STATUS_SUCCESS = "success"
STATUS_WARNING = "warning"
STATUS_ERROR = "error"


@dataclass
class Article:
    """Um artigo extraido do texto bruto."""
    number: str                 # '1', '5-A', '1029'
    body: str                   # texto apos o marcador 'Art. N'

    def to_dict(self) -> Dict[str, str]:
        return {"numero": self.number, "texto": self.body}


@dataclass
class ValidationCheck:
    """Resultado de uma verificacao estrutural."""
    name: str
    status: str                 # 'success' | 'warning' | 'error'
    message: str
    details: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        d = {"name": self.name, "status": self.status, "message": self.message}
        if self.details:
            d["details"] = list(self.details)
        return d


@dataclass
class ValidationReport:
    """Relatorio de validacao consumido pela tela de QA de conteudo."""
    is_valid: bool
    score: int                  # 0-100
    checks: List[ValidationCheck] = field(default_factory=list)
    articles: List[Article] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
    gaps: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "score": self.score,
            "checks": [c.to_dict() for c in self.checks],
            "artigos": [a.to_dict() for a in self.articles],
            "totalArtigos": len(self.articles),
            "duplicatas": list(self.duplicates),
            "lacunas": list(self.gaps),
        }


@dataclass
class Amendment:
    """Anotacao de alteracao legislativa ('Redação dada pela Lei nº ...')."""
    article_number: str
    element_type: str           # 'artigo' | 'paragrafo' | 'inciso'
    element_number: Optional[str]
    amendment_type: str         # 'Redação', 'Inclusão', 'Revogação', ...
    amending_act: Optional[str] # 'Lei nº 14.382, de 2022'
    year: Optional[int]
    raw_text: str

    def to_dict(self) -> dict:
        return {
            "numero_artigo": self.article_number,
            "elemento_tipo": self.element_type,
            "elemento_numero": self.element_number,
            "tipo_alteracao": self.amendment_type,
            "lei_alteradora": self.amending_act,
            "ano_alteracao": self.year,
            "texto_completo": self.raw_text,
        }


@dataclass
class ScrapedLaw:
    """Resultado da raspagem de uma lei no Planalto."""
    url: str
    text: str
    removed_struck: int
    articles: List[Article] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "texto": self.text,
            "caracteres": len(self.text),
            "tachados_removidos": self.removed_struck,
            "artigos": [a.to_dict() for a in self.articles],
            "totalArtigos": len(self.articles),
        }
