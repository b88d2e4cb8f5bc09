# direito/api/legal.py
"""
Handlers HTTP de legislacao.

POST /api/legal/artigos     {texto}                 -> artigos, duplicatas, lacunas
POST /api/legal/validar     {texto, score_minimo?}  -> relatorio de validacao
POST /api/legal/alteracoes  {texto}                 -> anotacoes de alteracao
POST /api/legal/raspar      {lei | url}             -> texto raspado do Planalto
POST /api/legal/formatar    {texto}                 -> texto formatado pelo Gemini
POST /api/legal/popular     {tabela, artigos|texto} -> upsert na tabela da lei
"""
from __future__ import annotations

import logging

import azure.functions as func

from direito.api.responses import error_response, json_response
from direito.config import settings
from direito.legal.amendment_extractor import extract_amendments, summarize_amendments
from direito.legal.article_parser import extract_articles, find_duplicates, find_gaps
from direito.legal.planalto import scrape_law
from direito.legal.validator import validate_document
from direito.security import daily_limit, safe_handler, validate_json_body, validate_text_field
from direito.utils.kv_store import DailyCounter, InMemoryStore, TTLCache

logger = logging.getLogger(__name__)

# Por instancia do Function App (ver direito.security.rate_limit)
SCRAPE_COUNTER = DailyCounter(InMemoryStore(), settings.DAILY_SCRAPE_LIMIT)
SCRAPE_CACHE = TTLCache(InMemoryStore(), settings.SCRAPE_CACHE_TTL_SECONDS)


def _text_from_request(req: func.HttpRequest):
    body, err = validate_json_body(req)
    if err:
        return None, None, err
    texto, err = validate_text_field(body)
    return body, texto, err


# ── Parsing / validacao ───────────────────────────────────────────────────────

@safe_handler
def handle_extrair_artigos(req: func.HttpRequest) -> func.HttpResponse:
    _, texto, err = _text_from_request(req)
    if err:
        return err

    articles = extract_articles(texto)
    return json_response({
        "artigos": [a.to_dict() for a in articles],
        "totalArtigos": len(articles),
        "duplicatas": find_duplicates(articles),
        "lacunas": find_gaps(articles),
    })


@safe_handler
def handle_validar_lei(req: func.HttpRequest) -> func.HttpResponse:
    body, texto, err = _text_from_request(req)
    if err:
        return err

    min_score = body.get("score_minimo")
    if min_score is not None and (isinstance(min_score, bool) or not isinstance(min_score, int)
                                  or not 0 <= min_score <= 100):
        return error_response("score_minimo deve ser inteiro entre 0 e 100", 400)

    report = validate_document(texto, min_score=min_score)
    return json_response(report.to_dict())


@safe_handler
def handle_extrair_alteracoes(req: func.HttpRequest) -> func.HttpResponse:
    _, texto, err = _text_from_request(req)
    if err:
        return err

    amendments = extract_amendments(texto)
    return json_response({
        "alteracoes": [a.to_dict() for a in amendments],
        "resumo": summarize_amendments(amendments),
        "total": len(amendments),
    })


# ── Planalto ──────────────────────────────────────────────────────────────────

@safe_handler
@daily_limit(SCRAPE_COUNTER)
def handle_raspar_lei(req: func.HttpRequest) -> func.HttpResponse:
    body, err = validate_json_body(req)
    if err:
        return err

    ref = body.get("url") or body.get("lei")
    if not isinstance(ref, str) or not ref.strip():
        return error_response("Informe 'lei' (ex: 'Lei nº 8.078') ou 'url' do Planalto", 400)

    cache_key = ref.strip().lower()
    payload = SCRAPE_CACHE.get(cache_key)
    if payload is None:
        payload = scrape_law(ref).to_dict()
        SCRAPE_CACHE.set(cache_key, payload)
    else:
        logger.info("legal/raspar: cache hit para '%s'", cache_key)

    if body.get("extrair_alteracoes"):
        amendments = extract_amendments(payload["texto"])
        payload = dict(payload)
        payload["alteracoes"] = [a.to_dict() for a in amendments]
        payload["resumoAlteracoes"] = summarize_amendments(amendments)

    return json_response(payload)


# ── Gemini ────────────────────────────────────────────────────────────────────

@safe_handler
def handle_formatar_lei(req: func.HttpRequest) -> func.HttpResponse:
    from direito.legal.formatter import format_law_text

    _, texto, err = _text_from_request(req)
    if err:
        return err

    formatted = format_law_text(texto)
    articles = extract_articles(formatted)
    return json_response({
        "texto": formatted,
        "caracteres": len(formatted),
        "caracteresOriginal": len(texto),
        "totalArtigos": len(articles),
    })


# ── Banco ─────────────────────────────────────────────────────────────────────

@safe_handler
def handle_popular_tabela(req: func.HttpRequest) -> func.HttpResponse:
    from direito.config.tabelas import get_table
    from direito.db.connection import is_configured
    from direito.db.law_writer import upsert_articles

    body, err = validate_json_body(req)
    if err:
        return err

    tabela = body.get("tabela")
    if not isinstance(tabela, str) or not tabela.strip():
        return error_response("Informe 'tabela' (codigo ou nome da tabela da lei)", 400)
    try:
        table = get_table(tabela)
    except ValueError as e:
        return error_response(str(e), 404)

    artigos = body.get("artigos")
    if artigos is None and isinstance(body.get("texto"), str):
        artigos = extract_articles(body["texto"])
    if not isinstance(artigos, list) or not artigos:
        return error_response("Informe 'artigos' (lista de {numero, texto}) ou 'texto'", 400)

    if not is_configured():
        return error_response("Banco de dados não configurado", 503)

    try:
        inserted = upsert_articles(table, artigos)
    except ValueError as e:
        return error_response(str(e), 400)

    return json_response({"inseridos": inserted, "tabela": table.table_name})
