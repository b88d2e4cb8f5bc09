# tests/test_legal_validator.py
"""
Testes para o validador estrutural de leis.
"""
from __future__ import annotations

import os

import pytest

from direito.legal.models import STATUS_ERROR, STATUS_SUCCESS, STATUS_WARNING
from direito.legal.validator import (
    check_ementa,
    check_header,
    check_identification,
    check_preamble,
    check_signature,
    compute_score,
    validate_document,
)
from direito.legal.models import ValidationCheck

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def _load_fixture(name: str) -> str:
    path = os.path.join(FIXTURES_DIR, name)
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def lei_completa():
    return _load_fixture("lei_exemplo.txt")


def _by_name(report, name):
    return next(c for c in report.checks if c.name == name)


# ── Documento completo ─────────────────────────────────────────────────────────

class TestFullDocument:
    def test_full_law_scores_100(self, lei_completa):
        report = validate_document(lei_completa)
        assert report.score == 100
        assert report.is_valid is True
        assert all(c.status == STATUS_SUCCESS for c in report.checks)
        assert len(report.checks) == 6

    def test_articles_extracted(self, lei_completa):
        report = validate_document(lei_completa)
        assert [a.number for a in report.articles] == ["1", "2", "3", "4", "5"]
        assert report.duplicates == []
        assert report.gaps == []

    def test_signature_identifies_president(self, lei_completa):
        check = _by_name(validate_document(lei_completa), "Assinatura")
        assert check.details == ["Luiz Inácio Lula da Silva"]

    def test_to_dict_keys(self, lei_completa):
        d = validate_document(lei_completa).to_dict()
        assert d["isValid"] is True
        assert d["totalArtigos"] == 5
        assert set(d) == {"isValid", "score", "checks", "artigos", "totalArtigos", "duplicatas", "lacunas"}

    def test_missing_header_is_error(self, lei_completa):
        text = lei_completa.replace("Presidência da República\nCasa Civil\n", "")
        report = validate_document(text)
        header = _by_name(report, "Cabeçalho")
        assert header.status == STATUS_ERROR
        assert report.score == 83
        assert report.is_valid is False

    def test_min_score_override(self, lei_completa):
        text = lei_completa.replace("Casa Civil\n", "")
        assert validate_document(text).score == 92
        assert validate_document(text).is_valid is True
        assert validate_document(text, min_score=95).is_valid is False


# ── Checks individuais ─────────────────────────────────────────────────────────

class TestHeader:
    def test_partial_header_is_warning(self):
        assert check_header("Presidência da República\nLEI Nº 1").status == STATUS_WARNING

    def test_header_without_accents(self):
        assert check_header("PRESIDENCIA DA REPUBLICA\nCASA CIVIL").status == STATUS_SUCCESS


class TestIdentification:
    def test_decreto_lei(self):
        text = "DECRETO-LEI Nº 2.848, DE 7 DE DEZEMBRO DE 1940"
        assert check_identification(text).status == STATUS_SUCCESS

    def test_medida_provisoria(self):
        text = "MEDIDA PROVISÓRIA Nº 1.154, DE 1º DE JANEIRO DE 2023"
        assert check_identification(text).status == STATUS_SUCCESS

    def test_lei_complementar_ordinal_o(self):
        text = "LEI COMPLEMENTAR No 123, DE 14 DE DEZEMBRO DE 2006"
        assert check_identification(text).status == STATUS_SUCCESS

    def test_without_date_is_warning(self):
        assert check_identification("LEI Nº 8.078").status == STATUS_WARNING

    def test_invalid_month_is_warning(self):
        text = "LEI Nº 8.078, DE 11 DE BRUMARIO DE 1990"
        assert check_identification(text).status == STATUS_WARNING

    def test_missing(self):
        assert check_identification("Texto qualquer").status == STATUS_ERROR


class TestEmenta:
    def test_ementa_before_first_article(self):
        check = check_ementa("LEI Nº 1\nInstitui o código.\nArt. 1º Texto.")
        assert check.status == STATUS_SUCCESS
        assert check.details == ["Institui o código."]

    def test_verb_only_inside_articles_is_error(self):
        check = check_ementa("LEI Nº 1\nArt. 1º Texto.\nAltera a lei anterior.")
        assert check.status == STATUS_ERROR


class TestPreamble:
    def test_presidenta(self):
        text = "A PRESIDENTA DA REPÚBLICA Faço saber que o Congresso Nacional decreta"
        assert check_preamble(text).status == STATUS_SUCCESS

    def test_decreto_formula(self):
        text = "O PRESIDENTE DA REPÚBLICA, no uso da atribuição, DECRETA:\nArt. 1º X."
        assert check_preamble(text).status == STATUS_SUCCESS

    def test_only_president_is_warning(self):
        assert check_preamble("O PRESIDENTE DA REPÚBLICA\nArt. 1º X.").status == STATUS_WARNING

    def test_only_enactment_is_warning(self):
        assert check_preamble("Faço saber que\nArt. 1º X.").status == STATUS_WARNING

    def test_missing(self):
        assert check_preamble("Art. 1º X.").status == STATUS_ERROR


class TestArticlesCheck:
    def test_gap_is_warning(self):
        report = validate_document("Art. 1º a. Art. 2º b. Art. 5º c.")
        check = _by_name(report, "Artigos")
        assert check.status == STATUS_WARNING
        assert check.details == ["Lacunas: Art. 3, Art. 4"]

    def test_no_articles_is_error(self):
        report = validate_document("Texto sem artigos")
        assert _by_name(report, "Artigos").status == STATUS_ERROR


class TestSignature:
    def test_only_brasilia_is_warning(self):
        assert check_signature("Brasília, 1º de janeiro de 2020.").status == STATUS_WARNING

    def test_only_president_is_warning(self):
        assert check_signature("DILMA ROUSSEFF").status == STATUS_WARNING

    def test_old_spelling(self):
        check = check_signature("Rio de Janeiro... GETÚLIO VARGAS\nBrasília")
        assert check.status == STATUS_SUCCESS
        assert check.details == ["Getúlio Vargas"]

    def test_missing(self):
        assert check_signature("Fim do texto.").status == STATUS_ERROR


# ── Score ──────────────────────────────────────────────────────────────────────

class TestScore:
    def test_score_rounding(self):
        checks = [
            ValidationCheck("a", STATUS_SUCCESS, ""),
            ValidationCheck("b", STATUS_WARNING, ""),
            ValidationCheck("c", STATUS_ERROR, ""),
        ]
        assert compute_score(checks) == 50

    def test_empty(self):
        assert compute_score([]) == 0

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            validate_document(None)

    def test_empty_string_is_not_valid(self):
        report = validate_document("")
        assert report.is_valid is False
        assert report.score == 0
