# direito/legal/amendment_extractor.py
"""
Extrator de anotacoes de alteracao em textos compilados do Planalto.

Exemplos de anotacao:
  (Redação dada pela Lei nº 13.964, de 2019)
  (Incluído pela Lei nº 12.015, de 2009)
  (Revogado pela Medida Provisória nº 1.154, de 2023)
  (Vide ADIN 3.096)

Processamento por linha: rastreia artigo/paragrafo/inciso corrente para
atribuir cada anotacao ao elemento certo. Anotacoes antes do primeiro
artigo (ementa, preambulo) sao ignoradas.
"""
from __future__ import annotations

import re
import logging
from collections import Counter
from typing import Dict, List, Optional

from direito.legal.models import Amendment

logger = logging.getLogger(__name__)

# ── Regex patterns ────────────────────────────────────────────────────────────

RE_ANOTACAO = re.compile(
    r"\((?:Redação dada|Incluíd[oa]|Revogad[oa]|Acrescid[oa]|Suprimid[oa]|Vetad[oa]"
    r"|Vide|Vigência|Renumerad[oa]|Expressão suprimida)[^)]+\)",
    re.IGNORECASE,
)

RE_ARTIGO_LINHA = re.compile(r"^\s*Art\.?\s*(\d+(?:\.\d{3})*)[ºª°o]?(?:-([A-Z]))?", re.IGNORECASE)

RE_PARAGRAFO_LINHA = re.compile(r"^\s*(?:§\s*(\d+)[ºª°o]?|(Par[aá]grafo\s+[uú]nico))", re.IGNORECASE)

RE_INCISO_LINHA = re.compile(r"^\s*(L?X{0,3}(?:IX|IV|V?I{0,3}))\s*[-–—]")

RE_LEI_ALTERADORA = re.compile(
    r"(?:Lei\s+Complementar|Lei|Decreto-Lei|Decreto|Medida\s+Provis[óo]ria|Emenda\s+Constitucional)"
    r"\s+n[ºo°]?\s*[\d\.]+(?:[,\s]+de\s+[\d\.]+)?",
    re.IGNORECASE,
)

RE_ANO = re.compile(r"\b(19\d{2}|20\d{2})\b")

# Ordem importa: 'Expressão suprimida' antes de 'Suprimido'
_TIPOS = [
    (re.compile(r"Redação dada", re.I), "Redação"),
    (re.compile(r"Expressão suprimida", re.I), "Supressão"),
    (re.compile(r"Incluíd[oa]", re.I), "Inclusão"),
    (re.compile(r"Revogad[oa]", re.I), "Revogação"),
    (re.compile(r"Acrescid[oa]", re.I), "Acréscimo"),
    (re.compile(r"Suprimid[oa]", re.I), "Supressão"),
    (re.compile(r"Vetad[oa]", re.I), "Vetado"),
    (re.compile(r"Vide", re.I), "Vide"),
    (re.compile(r"Vigência", re.I), "Vigência"),
    (re.compile(r"Renumerad[oa]", re.I), "Renumeração"),
]


def classify_annotation(annotation: str) -> str:
    for pat, tipo in _TIPOS:
        if pat.search(annotation):
            return tipo
    return "Outro"


def extract_amendments(text: str) -> List[Amendment]:
    """
    Extrai todas as anotacoes de alteracao do texto compilado.

    Args:
        text: texto da lei, um dispositivo por linha

    Returns:
        lista de Amendment na ordem do documento
    """
    amendments: List[Amendment] = []
    if not text:
        return amendments

    artigo: Optional[str] = None
    paragrafo: Optional[str] = None
    inciso: Optional[str] = None

    for linha in text.splitlines():
        m = RE_ARTIGO_LINHA.match(linha)
        if m:
            artigo = m.group(1).replace(".", "")
            if m.group(2):
                artigo = f"{artigo}-{m.group(2).upper()}"
            paragrafo = None
            inciso = None
        else:
            m = RE_PARAGRAFO_LINHA.match(linha)
            if m:
                paragrafo = f"§ {m.group(1)}º" if m.group(1) else "Parágrafo único"
                inciso = None
            else:
                m = RE_INCISO_LINHA.match(linha)
                if m and m.group(1):
                    inciso = m.group(1)

        if artigo is None:
            continue

        for anotacao in RE_ANOTACAO.findall(linha):
            if paragrafo:
                elemento_tipo, elemento_numero = "paragrafo", paragrafo
            elif inciso:
                elemento_tipo, elemento_numero = "inciso", inciso
            else:
                elemento_tipo, elemento_numero = "artigo", None

            m_lei = RE_LEI_ALTERADORA.search(anotacao)
            m_ano = RE_ANO.search(anotacao)

            amendments.append(Amendment(
                article_number=artigo,
                element_type=elemento_tipo,
                element_number=elemento_numero,
                amendment_type=classify_annotation(anotacao),
                amending_act=m_lei.group(0).strip() if m_lei else None,
                year=int(m_ano.group(1)) if m_ano else None,
                raw_text=anotacao,
            ))

    logger.debug("extract_amendments: %d anotacoes", len(amendments))
    return amendments


def summarize_amendments(amendments: List[Amendment]) -> Dict[str, int]:
    """Contagem por tipo de alteracao."""
    return dict(Counter(a.amendment_type for a in amendments))
