# direito/security/validation.py
"""
Validacao de bodies JSON e campos de texto dos endpoints.
Previne payloads oversized e bodies malformados.
"""
from __future__ import annotations

import json
from typing import Any

import azure.functions as func

from direito.config.settings import MAX_TEXT_CHARS

# Body inteiro: texto da lei + overhead de JSON (escapes \uXXXX)
MAX_BODY_BYTES = 4 * MAX_TEXT_CHARS


def _error(message: str, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"error": message}, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json",
    )


def validate_json_body(
    req: func.HttpRequest, max_bytes: int = MAX_BODY_BYTES
) -> tuple[dict[str, Any] | None, func.HttpResponse | None]:
    """
    Extrai e valida JSON body de uma request.
    Retorna (parsed_body, None) em sucesso, ou (None, error_response) em falha.
    """
    body = req.get_body()
    if len(body) > max_bytes:
        return None, _error(f"Body muito grande (max {max_bytes // (1024 * 1024)} MB)", 413)
    if not body:
        return None, _error("Body da requisicao vazio", 400)
    try:
        parsed = req.get_json()
    except ValueError:
        return None, _error("JSON invalido no body da requisicao", 400)
    if not isinstance(parsed, dict):
        return None, _error("Body JSON deve ser um objeto", 400)
    return parsed, None


def validate_text_field(
    body: dict[str, Any], field: str = "texto", max_chars: int = MAX_TEXT_CHARS
) -> tuple[str | None, func.HttpResponse | None]:
    """
    Campo de texto obrigatorio, string nao vazia, ate max_chars.
    Retorna (texto, None) ou (None, error_response).
    """
    value = body.get(field)
    if not isinstance(value, str) or not value.strip():
        return None, _error(f"Campo '{field}' obrigatorio (texto nao vazio)", 400)
    if len(value) > max_chars:
        return None, _error(f"Campo '{field}' muito longo (max {max_chars} caracteres)", 413)
    return value, None
