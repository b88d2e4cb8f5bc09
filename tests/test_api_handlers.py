# tests/test_api_handlers.py
"""
Testes dos handlers HTTP com azure.functions.HttpRequest real.
Dependencias externas (Planalto, Gemini, Postgres) mockadas.
"""
from __future__ import annotations

import json
import os
from unittest.mock import patch

import azure.functions as func
import pytest

from direito.api import legal as legal_api
from direito.api.cors import cors_headers, cors_preflight, is_origin_allowed
from direito.api.prazos import handle_calcular_prazo
from direito.legal.models import Article, ScrapedLaw
from direito.legal.planalto import ScrapeError, ScrapeTimeoutError
from direito.security.error_shield import find_domain_error
from direito.utils.fallback import AllCandidatesFailedError
from direito.utils.gemini import GeminiConfigError
from direito.utils.kv_store import InMemoryStore, TTLCache

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _load_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES_DIR, name), "r", encoding="utf-8") as f:
        return f.read()


def _req(body, route: str = "/api/test", headers: dict | None = None, method: str = "POST") -> func.HttpRequest:
    if isinstance(body, (dict, list)):
        raw = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        raw = body.encode("utf-8")
    else:
        raw = body or b""
    return func.HttpRequest(method=method, url=route, headers=headers or {}, params={}, body=raw)


def _json(resp: func.HttpResponse):
    return json.loads(resp.get_body())


@pytest.fixture(autouse=True)
def fresh_scrape_cache(monkeypatch):
    monkeypatch.setattr(legal_api, "SCRAPE_CACHE", TTLCache(InMemoryStore(), 60))


# ── Body validation ────────────────────────────────────────────────────────────

class TestBodyValidation:
    def test_empty_body(self):
        resp = handle_calcular_prazo(_req(b""))
        assert resp.status_code == 400

    def test_invalid_json(self):
        resp = handle_calcular_prazo(_req("{nao e json"))
        assert resp.status_code == 400
        assert "error" in _json(resp)

    def test_body_must_be_object(self):
        resp = handle_calcular_prazo(_req([1, 2]))
        assert resp.status_code == 400

    def test_missing_texto(self):
        resp = legal_api.handle_extrair_artigos(_req({"outro": 1}))
        assert resp.status_code == 400
        assert "texto" in _json(resp)["error"]


# ── Prazos ─────────────────────────────────────────────────────────────────────

class TestCalcularPrazo:
    def test_business_days(self):
        resp = handle_calcular_prazo(_req({"data_inicio": "2024-03-01", "dias": 15, "regime": "business_days"}))
        assert resp.status_code == 200
        data = _json(resp)
        assert data["data_final"] == "2024-03-22"
        assert data["dia_semana"] == "sexta-feira"

    def test_default_regime_is_business_days(self):
        data = _json(handle_calcular_prazo(_req({"data_inicio": "2024-03-01", "dias": 15})))
        assert data["regime"] == "business_days"

    def test_calendar_days(self):
        data = _json(handle_calcular_prazo(_req({"data_inicio": "2024-12-20", "dias": 5, "regime": "dias_corridos"})))
        assert data["data_final"] == "2024-12-25"

    def test_extra_holidays(self):
        body = {"data_inicio": "2024-03-01", "dias": 1, "feriados_extras": ["2024-03-04"]}
        assert _json(handle_calcular_prazo(_req(body)))["data_final"] == "2024-03-05"

    @pytest.mark.parametrize("body", [
        {"data_inicio": "2024-03-01", "dias": 0},
        {"data_inicio": "2024-03-01", "dias": True},
        {"data_inicio": "01/03/2024", "dias": 5},
        {"data_inicio": "2024-03-01", "dias": 5, "regime": "semanas"},
        {"data_inicio": "2024-03-01", "dias": 5, "feriados_extras": "2024-03-04"},
        {"data_inicio": "2024-03-01", "dias": 5, "feriados_extras": ["amanha"]},
        {"data_inicio": "2024-03-01", "dias": 5, "feriados_extras": ["2024-03-04x"]},
        {"data_inicio": "2024-03-01", "dias": 5, "feriados_extras": [20240304]},
        {"data_inicio": "2024-03-015", "dias": 5},
        {"data_inicio": "9999-12-30", "dias": 5, "regime": "calendar_days"},
        {"data_inicio": "2024-03-01", "dias": 10_000_000},
    ])
    def test_invalid_input(self, body):
        resp = handle_calcular_prazo(_req(body))
        assert resp.status_code == 400
        assert _json(resp)["error"]


# ── Legal: parsing/validacao ───────────────────────────────────────────────────

class TestLegalParsing:
    def test_extrair_artigos(self):
        resp = legal_api.handle_extrair_artigos(_req({"texto": "Art. 1º a. Art. 2º b. Art. 2º c. Art. 5º d."}))
        data = _json(resp)
        assert resp.status_code == 200
        assert data["totalArtigos"] == 4
        assert data["duplicatas"] == ["2"]
        assert data["lacunas"] == ["3", "4"]
        assert data["artigos"][0] == {"numero": "1", "texto": "a."}

    def test_validar(self):
        resp = legal_api.handle_validar_lei(_req({"texto": _load_fixture("lei_exemplo.txt")}))
        data = _json(resp)
        assert data["isValid"] is True
        assert data["score"] == 100

    def test_validar_invalid_min_score(self):
        resp = legal_api.handle_validar_lei(_req({"texto": "Art. 1º x.", "score_minimo": "alto"}))
        assert resp.status_code == 400

    def test_alteracoes(self):
        data = _json(legal_api.handle_extrair_alteracoes(_req({"texto": _load_fixture("lei_exemplo.txt")})))
        assert data["total"] == 4
        assert data["resumo"]["Redação"] == 2
        assert data["alteracoes"][0]["numero_artigo"] == "2"

    def test_unicode_not_escaped(self):
        resp = legal_api.handle_extrair_artigos(_req({"texto": "Art. 1º Ação."}))
        assert "Ação" in resp.get_body().decode("utf-8")


# ── Legal: raspagem ────────────────────────────────────────────────────────────

def _scraped():
    return ScrapedLaw(
        url="https://www.planalto.gov.br/ccivil_03/leis/l8078.htm",
        text="Art. 1º Texto. (Incluído pela Lei nº 2.000, de 1960)",
        removed_struck=2,
        articles=[Article("1", "Texto. (Incluído pela Lei nº 2.000, de 1960)")],
    )


class TestRasparLei:
    def test_success(self):
        with patch("direito.api.legal.scrape_law", return_value=_scraped()) as scrape:
            resp = legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078"}, headers={"X-Forwarded-For": "10.0.0.1"}))
        assert resp.status_code == 200
        assert _json(resp)["tachados_removidos"] == 2
        scrape.assert_called_once_with("Lei nº 8.078")

    def test_with_amendments(self):
        with patch("direito.api.legal.scrape_law", return_value=_scraped()):
            resp = legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078", "extrair_alteracoes": True},
                                                    headers={"X-Forwarded-For": "10.0.0.2"}))
        data = _json(resp)
        assert data["resumoAlteracoes"] == {"Inclusão": 1}

    def test_cached(self):
        headers = {"X-Forwarded-For": "10.0.0.3"}
        with patch("direito.api.legal.scrape_law", return_value=_scraped()) as scrape:
            legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078"}, headers=headers))
            legal_api.handle_raspar_lei(_req({"lei": "lei nº 8.078 "}, headers=headers))
        assert scrape.call_count == 1

    def test_timeout_504(self):
        err = ScrapeTimeoutError("https://www.planalto.gov.br/x.htm", 30)
        with patch("direito.api.legal.scrape_law", side_effect=err):
            resp = legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078"}, headers={"X-Forwarded-For": "10.0.0.4"}))
        assert resp.status_code == 504
        assert "Tente novamente" in _json(resp)["error"]

    def test_scrape_error_502(self):
        with patch("direito.api.legal.scrape_law", side_effect=ScrapeError("Falha ao baixar")):
            resp = legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078"}, headers={"X-Forwarded-For": "10.0.0.7"}))
        assert resp.status_code == 502
        assert resp.headers["X-Request-ID"] == _json(resp)["request_id"]

    def test_url_outside_planalto_not_fetched(self):
        url = "http://169.254.169.254/metadata/identity?x=planalto.gov.br"
        with patch("direito.legal.planalto.fetch_law_html") as fetch:
            resp = legal_api.handle_raspar_lei(_req({"url": url}, headers={"X-Forwarded-For": "10.0.0.8"}))
        assert resp.status_code == 400
        fetch.assert_not_called()

    def test_unknown_reference_400(self):
        resp = legal_api.handle_raspar_lei(_req({"lei": "Código Civil"}, headers={"X-Forwarded-For": "10.0.0.5"}))
        assert resp.status_code == 400

    def test_missing_reference_400(self):
        resp = legal_api.handle_raspar_lei(_req({"x": 1}, headers={"X-Forwarded-For": "10.0.0.6"}))
        assert resp.status_code == 400

    def test_daily_limit_429(self, monkeypatch):
        monkeypatch.setattr(legal_api.SCRAPE_COUNTER, "limit", 2)
        headers = {"X-Forwarded-For": "10.9.9.9, 172.16.0.1"}
        with patch("direito.api.legal.scrape_law", return_value=_scraped()):
            statuses = [
                legal_api.handle_raspar_lei(_req({"lei": "Lei nº 8.078"}, headers=headers)).status_code
                for _ in range(3)
            ]
        assert statuses == [200, 200, 429]


# ── Legal: Gemini ──────────────────────────────────────────────────────────────

class TestFormatarLei:
    def test_success(self):
        with patch("direito.legal.formatter.format_law_text", return_value="Art. 1º Texto limpo."):
            resp = legal_api.handle_formatar_lei(_req({"texto": "Art. 1º Texto (Vide Lei)."}))
        data = _json(resp)
        assert resp.status_code == 200
        assert data["texto"] == "Art. 1º Texto limpo."
        assert data["totalArtigos"] == 1

    def test_no_keys_503(self):
        with patch("direito.legal.formatter.format_law_text", side_effect=GeminiConfigError("sem chaves")):
            resp = legal_api.handle_formatar_lei(_req({"texto": "Art. 1º x."}))
        assert resp.status_code == 503

    def test_all_keys_failed_502(self):
        err = AllCandidatesFailedError([("gemini-2.5-flash#1", RuntimeError("429")), ("gemini-2.5-flash#2", RuntimeError("429"))])
        with patch("direito.legal.formatter.format_law_text", side_effect=err):
            resp = legal_api.handle_formatar_lei(_req({"texto": "Art. 1º x."}))
        data = _json(resp)
        assert resp.status_code == 502
        assert data["tentativas"] == ["gemini-2.5-flash#1", "gemini-2.5-flash#2"]
        assert "429" not in data["error"]


# ── Legal: banco ───────────────────────────────────────────────────────────────

class TestPopularTabela:
    def test_unknown_table_404(self):
        resp = legal_api.handle_popular_tabela(_req({"tabela": "XYZ", "artigos": [{"numero": "1", "texto": "a"}]}))
        assert resp.status_code == 404

    @pytest.mark.parametrize("tabela", [5, None, "", ["CP"]])
    def test_invalid_table_field_400(self, tabela):
        resp = legal_api.handle_popular_tabela(_req({"tabela": tabela, "artigos": [{"numero": "1", "texto": "a"}]}))
        assert resp.status_code == 400

    def test_missing_articles_400(self):
        resp = legal_api.handle_popular_tabela(_req({"tabela": "CP"}))
        assert resp.status_code == 400

    def test_db_not_configured_503(self, monkeypatch):
        monkeypatch.delenv("POSTGRES_CONNSTR", raising=False)
        resp = legal_api.handle_popular_tabela(_req({"tabela": "CP", "artigos": [{"numero": "1", "texto": "a"}]}))
        assert resp.status_code == 503

    def test_upsert_from_text(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_CONNSTR", "host=localhost dbname=test")
        with patch("direito.db.law_writer.upsert_articles", return_value=2) as upsert:
            resp = legal_api.handle_popular_tabela(_req({"tabela": "cp", "texto": "Art. 1º a. Art. 2º b."}))
        assert _json(resp) == {"inseridos": 2, "tabela": "CP - Código Penal"}
        table, articles = upsert.call_args.args
        assert [a.number for a in articles] == ["1", "2"]


# ── Error shield / CORS ────────────────────────────────────────────────────────

class TestErrorShield:
    def test_unhandled_error_returns_500_with_request_id(self):
        with patch("direito.api.legal.extract_articles", side_effect=RuntimeError("boom")):
            resp = legal_api.handle_extrair_artigos(_req({"texto": "Art. 1º x."}, headers={"X-Request-ID": "req-1"}))
        data = _json(resp)
        assert resp.status_code == 500
        assert data["request_id"] == "req-1"
        assert "boom" not in resp.get_body().decode("utf-8")

    def test_domain_error_mapped_with_request_id(self):
        with patch("direito.api.legal.extract_articles", side_effect=ScrapeTimeoutError("https://www.planalto.gov.br/x.htm", 30)):
            resp = legal_api.handle_extrair_artigos(_req({"texto": "Art. 1º x."}, headers={"X-Request-ID": "req-2"}))
        assert resp.status_code == 504
        assert resp.headers["X-Request-ID"] == "req-2"
        assert _json(resp)["request_id"] == "req-2"

    def test_subclass_mapped_before_base(self):
        assert find_domain_error(ScrapeTimeoutError("u", 1)).status_code == 504
        assert find_domain_error(ScrapeError("x")).status_code == 502
        assert find_domain_error(KeyError("x")) is None

    def test_plain_value_error_is_500(self):
        with patch("direito.api.legal.extract_articles", side_effect=ValueError("interno")):
            resp = legal_api.handle_extrair_artigos(_req({"texto": "Art. 1º x."}))
        assert resp.status_code == 500
        assert "interno" not in resp.get_body().decode("utf-8")


class TestCors:
    def test_allowed_origin(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        headers = cors_headers(_req(b"", headers={"Origin": "https://app.exemplo.com.br"}))
        assert headers["Access-Control-Allow-Origin"] == "https://app.exemplo.com.br"

    def test_unknown_origin(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        headers = cors_headers(_req(b"", headers={"Origin": "https://evil.example"}))
        assert "Access-Control-Allow-Origin" not in headers

    def test_localhost_outside_production(self, monkeypatch):
        monkeypatch.delenv("DIREITO_ALLOWED_ORIGINS", raising=False)
        monkeypatch.setenv("DIREITO_ENV", "development")
        headers = cors_headers(_req(b"", headers={"Origin": "http://localhost:5173"}))
        assert headers["Access-Control-Allow-Origin"] == "http://localhost:5173"

    def test_preflight(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        resp = cors_preflight(_req(b"", method="OPTIONS", headers={"Origin": "https://app.exemplo.com.br"}))
        assert resp.status_code == 204

    def test_wildcard_subdomain(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://*.lovable.app")
        assert is_origin_allowed("https://preview-123.lovable.app")
        assert not is_origin_allowed("https://lovable.app")
        assert not is_origin_allowed("http://preview-123.lovable.app")
        assert not is_origin_allowed("https://preview.lovable.app.evil.com")

    def test_published_apps_by_default(self, monkeypatch):
        monkeypatch.delenv("DIREITO_ALLOWED_ORIGINS", raising=False)
        monkeypatch.setenv("DIREITO_ENV", "production")
        assert is_origin_allowed("https://vademecum.lovable.app")
        assert not is_origin_allowed("http://localhost:5173")

    def test_any_localhost_port_outside_production(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        monkeypatch.setenv("DIREITO_ENV", "development")
        assert is_origin_allowed("http://127.0.0.1:7071")
        assert not is_origin_allowed("http://localhost.evil.com:5173")

    def test_malformed_origin(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        assert cors_headers(_req(b"", headers={"Origin": "http://[::1"})) == {"Vary": "Origin"}

    def test_exposes_request_id(self, monkeypatch):
        monkeypatch.setenv("DIREITO_ALLOWED_ORIGINS", "https://app.exemplo.com.br")
        headers = cors_headers(_req(b"", headers={"Origin": "https://app.exemplo.com.br"}))
        assert headers["Access-Control-Expose-Headers"] == "X-Request-ID"
        assert "x-client-info" in headers["Access-Control-Allow-Headers"]
