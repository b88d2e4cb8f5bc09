# direito/api/responses.py
"""Respostas JSON padronizadas dos handlers ({"error": ...} em falhas)."""
from __future__ import annotations

import json
from typing import Any, Optional

import azure.functions as func


def json_response(
    payload: Any,
    status_code: int = 200,
    headers: Optional[dict] = None,
) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json",
        headers=headers,
    )


def error_response(message: str, status_code: int = 400, **extra: Any) -> func.HttpResponse:
    payload = {"error": message}
    payload.update(extra)
    return json_response(payload, status_code=status_code)
