# direito/legal/validator.py
"""
Validador estrutural de texto de legislacao (ferramenta de QA de conteudo).

Verificacoes independentes, nenhuma bloqueante:
  1. Cabecalho      - 'Presidência da República' + 'Casa Civil'
  2. Identificacao  - 'LEI Nº 10.406, DE 10 DE JANEIRO DE 2002'
  3. Ementa         - linha iniciada por verbo (Altera, Institui, Dispõe...)
  4. Preambulo      - 'O PRESIDENTE DA REPÚBLICA ... Faço saber'
  5. Artigos        - artigos extraidos, duplicatas, lacunas
  6. Assinatura     - 'Brasília, ...' + presidente conhecido no final

Pontuacao: success=1, warning=0.5, error=0; score = % do maximo.
Documento aceito se score >= VALIDATION_MIN_SCORE e nenhum check com error.
"""
from __future__ import annotations

import re
import logging
from typing import List, Optional

from direito.config.settings import VALIDATION_MIN_SCORE
from direito.legal.article_parser import (
    RE_ARTIGO,
    extract_articles,
    find_duplicates,
    find_gaps,
)
from direito.legal.models import (
    STATUS_ERROR,
    STATUS_SUCCESS,
    STATUS_WARNING,
    Article,
    ValidationCheck,
    ValidationReport,
)
from direito.legal.presidentes import find_president, normalize_name

logger = logging.getLogger(__name__)

# ── Constantes ───────────────────────────────────────────────────────────────

HEAD_CHARS = 2000
TAIL_CHARS = 1500

STATUS_POINTS = {
    STATUS_SUCCESS: 1.0,
    STATUS_WARNING: 0.5,
    STATUS_ERROR: 0.0,
}

MESES = (
    "JANEIRO", "FEVEREIRO", "MARCO", "ABRIL", "MAIO", "JUNHO",
    "JULHO", "AGOSTO", "SETEMBRO", "OUTUBRO", "NOVEMBRO", "DEZEMBRO",
)

VERBOS_EMENTA = (
    "Altera", "Institui", "Dispõe", "Estabelece", "Regulamenta",
    "Acrescenta", "Revoga", "Cria", "Autoriza", "Define", "Modifica",
    "Aprova", "Denomina", "Concede", "Abre", "Torna", "Inscreve",
    "Declara", "Fixa", "Reajusta", "Dá nova redação",
)

# ── Regex patterns (texto normalizado: maiusculo, sem acentos) ────────────────

_TIPO_NORMA = (
    r"LEI\s+COMPLEMENTAR"
    r"|DECRETO[\s\-]+LEI"
    r"|MEDIDA\s+PROVISORIA"
    r"|LEI"
    r"|DECRETO"
)

RE_IDENTIFICACAO = re.compile(
    rf"(?:^|\n)\s*(?:{_TIPO_NORMA})\s+N\s*[\.ºO°]{{0,2}}\s*([\d\.]+)\s*,?\s*"
    rf"DE\s+(\d{{1,2}})\s*[ºO°]?\s+DE\s+([A-Z]+)\s+DE\s+(\d{{4}})",
)

RE_IDENTIFICACAO_PARCIAL = re.compile(
    rf"(?:^|\n)\s*(?:{_TIPO_NORMA})\s+N\s*[\.ºO°]{{0,2}}\s*[\d\.]+",
)

RE_EMENTA = re.compile(
    r"^\s*(?:" + "|".join(re.escape(v) for v in VERBOS_EMENTA) + r")\b",
    re.MULTILINE | re.IGNORECASE,
)

RE_PRESIDENTE = re.compile(r"\b(?:O|A)\s+(?:VICE-)?PRESIDENT[EA]\s+DA\s+REPUBLICA\b")
RE_PROMULGACAO = re.compile(
    r"\bFACO\s+SABER\b|\bDECRETA\s*:|\bADOTA\b.*?\bMEDIDA\s+PROVISORIA\b",
    re.DOTALL,
)
RE_SEDE = re.compile(r"\bBRASILIA\b")


def _upper_lines(text: str) -> str:
    """Como normalize_name, mas preserva quebras de linha."""
    return "\n".join(normalize_name(line) for line in text.splitlines())


# ── Checks ────────────────────────────────────────────────────────────────────

def check_header(full_text: str) -> ValidationCheck:
    head = normalize_name(full_text[:HEAD_CHARS])
    found = []
    if "PRESIDENCIA DA REPUBLICA" in head:
        found.append("Presidência da República")
    if "CASA CIVIL" in head:
        found.append("Casa Civil")

    if len(found) == 2:
        return ValidationCheck("Cabeçalho", STATUS_SUCCESS, "Cabeçalho institucional completo", found)
    if found:
        return ValidationCheck(
            "Cabeçalho", STATUS_WARNING,
            f"Cabeçalho incompleto: apenas '{found[0]}' encontrado", found,
        )
    return ValidationCheck(
        "Cabeçalho", STATUS_ERROR,
        "Cabeçalho não encontrado (Presidência da República / Casa Civil)",
    )


def check_identification(full_text: str) -> ValidationCheck:
    norm = _upper_lines(full_text)
    m = RE_IDENTIFICACAO.search(norm)
    if m and m.group(3) in MESES:
        ident = m.group(0).strip()
        return ValidationCheck("Identificação", STATUS_SUCCESS, "Identificação da norma encontrada", [ident])

    m = RE_IDENTIFICACAO_PARCIAL.search(norm)
    if m:
        return ValidationCheck(
            "Identificação", STATUS_WARNING,
            "Tipo e número encontrados, mas sem data no formato 'DE <dia> DE <mês> DE <ano>'",
            [m.group(0).strip()],
        )
    return ValidationCheck(
        "Identificação", STATUS_ERROR,
        "Linha de identificação (LEI/DECRETO/MEDIDA PROVISÓRIA Nº ...) não encontrada",
    )


def check_ementa(full_text: str) -> ValidationCheck:
    # Ementa fica antes do primeiro artigo
    first_art = RE_ARTIGO.search(full_text)
    preamble = full_text[:first_art.start()] if first_art else full_text

    m = RE_EMENTA.search(preamble)
    if m:
        line_end = preamble.find("\n", m.start())
        line = preamble[m.start():line_end if line_end != -1 else None].strip()
        return ValidationCheck("Ementa", STATUS_SUCCESS, "Ementa encontrada", [line[:200]])
    return ValidationCheck(
        "Ementa", STATUS_ERROR,
        "Ementa não encontrada antes do primeiro artigo",
    )


def check_preamble(full_text: str) -> ValidationCheck:
    first_art = RE_ARTIGO.search(full_text)
    region = normalize_name(full_text[:first_art.start()] if first_art else full_text[:HEAD_CHARS])

    has_president = bool(RE_PRESIDENTE.search(region))
    has_enactment = bool(RE_PROMULGACAO.search(region))

    if has_president and has_enactment:
        return ValidationCheck("Preâmbulo", STATUS_SUCCESS, "Preâmbulo presidencial encontrado")
    if has_president or has_enactment:
        missing = "fórmula de promulgação (Faço saber / decreta)" if has_president else "'O PRESIDENTE DA REPÚBLICA'"
        return ValidationCheck("Preâmbulo", STATUS_WARNING, f"Preâmbulo incompleto: falta {missing}")
    return ValidationCheck("Preâmbulo", STATUS_ERROR, "Preâmbulo presidencial não encontrado")


def check_articles(
    articles: List[Article],
    duplicates: List[str],
    gaps: List[str],
) -> ValidationCheck:
    if not articles:
        return ValidationCheck("Artigos", STATUS_ERROR, "Nenhum artigo encontrado")

    details = []
    if duplicates:
        details.append("Duplicatas: " + ", ".join(f"Art. {n}" for n in duplicates))
    if gaps:
        details.append("Lacunas: " + ", ".join(f"Art. {n}" for n in gaps))

    if details:
        return ValidationCheck(
            "Artigos", STATUS_WARNING,
            f"{len(articles)} artigos; {len(duplicates)} duplicata(s), {len(gaps)} lacuna(s)",
            details,
        )
    return ValidationCheck("Artigos", STATUS_SUCCESS, f"{len(articles)} artigos em sequência")


def check_signature(full_text: str) -> ValidationCheck:
    tail = full_text[-TAIL_CHARS:]
    president = find_president(tail)
    has_seat = bool(RE_SEDE.search(normalize_name(tail)))

    if president and has_seat:
        return ValidationCheck("Assinatura", STATUS_SUCCESS, f"Assinatura de {president} em Brasília", [president])
    if president:
        return ValidationCheck("Assinatura", STATUS_WARNING, f"Assinatura de {president} sem local/data (Brasília)", [president])
    if has_seat:
        return ValidationCheck("Assinatura", STATUS_WARNING, "Local/data encontrados, mas presidente não identificado")
    return ValidationCheck("Assinatura", STATUS_ERROR, "Bloco de assinatura não encontrado no final do texto")


# ── Public API ────────────────────────────────────────────────────────────────

def compute_score(checks: List[ValidationCheck]) -> int:
    if not checks:
        return 0
    points = sum(STATUS_POINTS[c.status] for c in checks)
    return round(100 * points / len(checks))


def validate_document(full_text: str, min_score: Optional[int] = None) -> ValidationReport:
    """
    Valida a estrutura de um texto de lei.

    Args:
        full_text: texto bruto da lei
        min_score: score minimo para aceitar (default VALIDATION_MIN_SCORE)

    Returns:
        ValidationReport (nunca levanta por conteudo ruim)
    """
    if not isinstance(full_text, str):
        raise TypeError("full_text deve ser str")

    threshold = VALIDATION_MIN_SCORE if min_score is None else min_score

    articles = extract_articles(full_text)
    duplicates = find_duplicates(articles)
    gaps = find_gaps(articles)

    checks = [
        check_header(full_text),
        check_identification(full_text),
        check_ementa(full_text),
        check_preamble(full_text),
        check_articles(articles, duplicates, gaps),
        check_signature(full_text),
    ]

    score = compute_score(checks)
    has_error = any(c.status == STATUS_ERROR for c in checks)
    is_valid = score >= threshold and not has_error

    logger.info(
        "validate_document: score=%d valid=%s artigos=%d duplicatas=%d lacunas=%d",
        score, is_valid, len(articles), len(duplicates), len(gaps),
    )

    return ValidationReport(
        is_valid=is_valid,
        score=score,
        checks=checks,
        articles=articles,
        duplicates=duplicates,
        gaps=gaps,
    )
