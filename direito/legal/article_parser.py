# direito/legal/article_parser.py
"""
Extrator de artigos para texto bruto de legislacao.

Detecta: Art. 1o, Art. 1º, Art. 10, Art. 5º-A, Art. 1.029
Corpo do artigo: tudo ate o proximo marcador 'Art.' ou fim do documento,
com espacos colapsados.

Validacao de sequencia:
  - duplicatas: numero completo ('5', '5-A') repetido
  - lacunas: inteiros ausentes entre prefixos numericos consecutivos
"""
from __future__ import annotations

import re
import logging
from typing import List

from direito.legal.models import Article

logger = logging.getLogger(__name__)

# ── Regex patterns ───────────────────────────────────────────────────────────

# Grupo 1: numero (com ponto de milhar), grupo 2: sufixo '-A' opcional.
# Sufixo so sem espaco ('5º-A'); 'Art. 1º - A União' e separador + texto.
# 'art.' minusculo e remissao, nao marcador.
RE_ARTIGO = re.compile(
    r"\b(?:Art|ART)\.\s*(\d{1,3}(?:\.\d{3})+|\d+)"
    r"(?:[°ºª]|o(?![a-zà-ú]))?"
    r"(?:[-–]([A-Z])\b)?"
    r"\s*[.\-–—]?",
)

RE_LEADING_INT = re.compile(r"^(\d+)")

RE_WHITESPACE = re.compile(r"\s+")


def _normalize_number(num: str, suffix: str | None) -> str:
    number = num.replace(".", "")
    if suffix:
        number = f"{number}-{suffix.upper()}"
    return number


def _collapse(text: str) -> str:
    return RE_WHITESPACE.sub(" ", text).strip()


# ── Public API ────────────────────────────────────────────────────────────────

def extract_articles(full_text: str) -> List[Article]:
    """
    Extrai a sequencia de artigos do texto.

    Args:
        full_text: texto bruto raspado da lei

    Returns:
        lista de Article na ordem do documento (duplicatas preservadas)
    """
    if not full_text:
        return []

    matches = list(RE_ARTIGO.finditer(full_text))
    articles: List[Article] = []
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(full_text)
        body = _collapse(full_text[m.end():end])
        articles.append(Article(
            number=_normalize_number(m.group(1), m.group(2)),
            body=body,
        ))

    logger.debug("extract_articles: %d artigos", len(articles))
    return articles


def find_duplicates(articles: List[Article]) -> List[str]:
    """Numeros de artigo repetidos, na ordem da primeira repeticao."""
    seen = set()
    duplicates: List[str] = []
    for art in articles:
        if art.number in seen and art.number not in duplicates:
            duplicates.append(art.number)
        seen.add(art.number)
    return duplicates


def find_gaps(articles: List[Article]) -> List[str]:
    """Inteiros ausentes entre os prefixos numericos dos artigos."""
    numbers = set()
    for art in articles:
        m = RE_LEADING_INT.match(art.number)
        if m:
            numbers.add(int(m.group(1)))

    ordered = sorted(numbers)
    gaps: List[str] = []
    for prev, cur in zip(ordered, ordered[1:]):
        gaps.extend(str(n) for n in range(prev + 1, cur))
    return gaps
