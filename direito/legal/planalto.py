# direito/legal/planalto.py
"""
Raspagem de leis no portal do Planalto (planalto.gov.br/ccivil_03).

Funcoes:
  - build_planalto_url: 'Lei nº 14.133' -> URL da pagina da lei
  - is_planalto_url: aceita so http(s) com host planalto.gov.br
  - fetch_law_html: download com timeout (requests)
  - strip_struck_text: remove texto tachado (revogado/alterado)
  - html_to_law_text: texto limpo, um dispositivo por linha
  - scrape_law: pipeline completo

O Planalto marca redacoes revogadas com <strike>, <s>, <del> ou
style="text-decoration: line-through". Esse texto NAO deve ser extraido.
"""
from __future__ import annotations

import re
import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

import requests

from direito.config import settings
from direito.legal.article_parser import extract_articles
from direito.legal.models import ScrapedLaw

logger = logging.getLogger(__name__)

PLANALTO_BASE = "https://www.planalto.gov.br/ccivil_03"
PLANALTO_HOST = "planalto.gov.br"

# Tags a remover completamente (conteudo + tag)
_STRIP_TAGS = ("script", "style", "noscript", "iframe")
_STRUCK_TAGS = ("strike", "s", "del")
_STRUCK_CLASSES = ("tachado", "strikethrough", "revogado", "deleted", "struck")

RE_LINE_THROUGH = re.compile(r"text-decoration\s*:\s*[^;]*line-through", re.IGNORECASE)

# Quebra dupla antes de elementos estruturais, simples antes de dispositivos
_BREAKS = [
    (re.compile(r"\s+((?:TÍTULO|CAPÍTULO|SEÇÃO|SUBSEÇÃO|LIVRO)\s+[IVXLCDM]+\b)"), r"\n\n\1"),
    (re.compile(r"\s+(PARTE\s+(?:GERAL|ESPECIAL|[IVXLCDM]+)\b)"), r"\n\n\1"),
    (re.compile(r"\s+((?:LEI|DECRETO|DECRETO-LEI|MEDIDA PROVISÓRIA|LEI COMPLEMENTAR)\s+N[ºo°])"), r"\n\n\1"),
    (re.compile(r"\s+(Art\.\s*\d)"), r"\n\n\1"),
    (re.compile(r"\s+(§\s*\d)"), r"\n\1"),
    (re.compile(r"\s+(Parágrafo\s+único)", re.IGNORECASE), r"\n\1"),
    (re.compile(r"\s+((?=[IVXL])L?X{0,3}(?:IX|IV|V?I{0,3})\s*[-–—]\s)"), r"\n\1"),
    (re.compile(r"\s+([a-z]\)\s)"), r"\n\1"),
    (re.compile(r"\s+(Brasília,\s*\d)"), r"\n\n\1"),
]


class InvalidReferenceError(ValueError):
    """Referencia de lei nao reconhecida ou URL fora do Planalto."""


class ScrapeError(Exception):
    """Falha ao baixar/processar a pagina da lei."""


class ScrapeTimeoutError(ScrapeError):
    """Planalto nao respondeu dentro do timeout."""

    def __init__(self, url: str, timeout: int):
        self.url = url
        self.timeout = timeout
        super().__init__(
            f"O Planalto não respondeu em {timeout}s. Tente novamente em alguns instantes."
        )


# ── URL ───────────────────────────────────────────────────────────────────────

def is_planalto_url(url: str) -> bool:
    """http(s) com host planalto.gov.br ou subdominio (www.planalto.gov.br)."""
    try:
        parts = urlsplit(url.strip())
        host = (parts.hostname or "").lower()
    except ValueError:
        return False
    if parts.scheme.lower() not in ("http", "https"):
        return False
    return host == PLANALTO_HOST or host.endswith("." + PLANALTO_HOST)


def build_planalto_url(reference: Optional[str]) -> Optional[str]:
    """
    Monta URL do Planalto a partir de uma referencia textual.

    Ex: 'Lei nº 8.078' -> .../leis/l8078.htm
        'Lei Complementar nº 123' -> .../leis/lcp/lcp123.htm
        'Emenda Constitucional nº 45' -> .../constituicao/emendas/emc/emc45.htm

    Returns:
        URL ou None se a referencia nao for reconhecida
    """
    if not reference:
        return None
    m = re.search(r"n[ºo°]?\s*\.?\s*([\d.]+)", reference, re.IGNORECASE)
    if not m:
        return None
    numero = m.group(1).replace(".", "").strip()
    if not numero:
        return None

    ref = reference.lower()
    if "emenda constitucional" in ref:
        return f"{PLANALTO_BASE}/constituicao/emendas/emc/emc{numero}.htm"
    if "lei complementar" in ref or ref.startswith("lc"):
        return f"{PLANALTO_BASE}/leis/lcp/lcp{numero}.htm"
    if "lei" in ref:
        if int(numero) >= 10000:
            return f"{PLANALTO_BASE}/_ato2019-2022/2022/lei/l{numero}.htm"
        return f"{PLANALTO_BASE}/leis/l{numero}.htm"
    return None


# ── Download ──────────────────────────────────────────────────────────────────

def fetch_law_html(
    url: str,
    timeout: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Baixa HTML da lei.

    Raises:
        ScrapeTimeoutError: timeout (mensagem para o usuario tentar novamente)
        ScrapeError: erro HTTP ou de conexao
    """
    timeout = timeout or settings.SCRAPE_TIMEOUT_SECONDS
    http = session or requests
    logger.info("planalto: GET %s (timeout=%ds)", url, timeout)

    try:
        response = http.get(
            url,
            headers={"User-Agent": settings.SCRAPE_USER_AGENT},
            timeout=timeout,
        )
        response.raise_for_status()
    except requests.Timeout:
        logger.warning("planalto: timeout apos %ds em %s", timeout, url)
        raise ScrapeTimeoutError(url, timeout)
    except requests.RequestException as e:
        logger.error("planalto: falha ao baixar %s: %s", url, e)
        raise ScrapeError(f"Falha ao baixar {url}: {e}")

    # Planalto declara windows-1252/iso-8859-1; requests cai em ISO-8859-1 sem charset
    encoding = response.encoding or "latin-1"
    try:
        return response.content.decode(encoding, errors="replace")
    except LookupError:
        return response.content.decode("latin-1", errors="replace")


# ── Limpeza ───────────────────────────────────────────────────────────────────

def strip_struck_text(html: str) -> Tuple[str, int]:
    """
    Remove elementos tachados do HTML.

    Returns:
        (html_limpo, quantidade_removida)
    """
    from bs4 import BeautifulSoup

    soup = BeautifulSoup(html, "html.parser")
    removed = 0

    for tag in soup.find_all(list(_STRUCK_TAGS)):
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1

    for tag in soup.find_all(style=RE_LINE_THROUGH):
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1

    for tag in soup.find_all(class_=list(_STRUCK_CLASSES)):
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1

    if removed:
        logger.info("planalto: %d elemento(s) tachado(s) removido(s)", removed)
    return str(soup), removed


def normalize_law_text(text: str) -> str:
    """Achata espacos e reinsere quebras antes de cada elemento juridico."""
    if not text:
        return ""
    text = text.replace("\u00a0", " ")
    text = re.sub(r"\s+", " ", text).strip()
    for pat, repl in _BREAKS:
        text = pat.sub(repl, text)
    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def html_to_law_text(html: str) -> Tuple[str, int]:
    """
    Converte HTML do Planalto em texto normativo limpo.

    Returns:
        (texto, quantidade_de_tachados_removidos)
    """
    from bs4 import BeautifulSoup

    clean_html, removed = strip_struck_text(html)
    soup = BeautifulSoup(clean_html, "html.parser")

    for tag_name in _STRIP_TAGS:
        for tag in soup.find_all(tag_name):
            tag.decompose()

    body = soup.body or soup
    text = body.get_text(separator=" ")
    return normalize_law_text(text), removed


# ── Pipeline ──────────────────────────────────────────────────────────────────

def scrape_law(
    reference_or_url: str,
    timeout: Optional[int] = None,
    session: Optional[requests.Session] = None,
) -> ScrapedLaw:
    """
    Raspa uma lei do Planalto.

    Args:
        reference_or_url: URL completa ou referencia ('Lei nº 8.078')

    Raises:
        InvalidReferenceError: referencia nao reconhecida ou URL fora do Planalto
        ScrapeError / ScrapeTimeoutError
    """
    ref = (reference_or_url or "").strip()
    if ref.lower().startswith(("http://", "https://")):
        url = ref
        if not is_planalto_url(url):
            raise InvalidReferenceError(f"URL fora do portal do Planalto: {url}")
    else:
        url = build_planalto_url(ref)
        if not url:
            raise InvalidReferenceError(f"Referencia de lei nao reconhecida: '{ref}'")

    html = fetch_law_html(url, timeout=timeout, session=session)
    text, removed = html_to_law_text(html)
    if not text:
        raise ScrapeError(f"Pagina sem texto normativo: {url}")

    articles = extract_articles(text)
    logger.info(
        "planalto: %s -> %d chars, %d artigos, %d tachados",
        url, len(text), len(articles), removed,
    )
    return ScrapedLaw(url=url, text=text, removed_struck=removed, articles=articles)
