# direito/security/rate_limit.py
"""
Limite diario de uso por cliente (ex: raspagens do Planalto).

Nota: com InMemoryStore a contagem e POR INSTANCIA do Function App
(Consumption Plan tem instancias efemeras e independentes). Para limite
global, passar um DailyCounter sobre um KeyValueStore persistente.
"""
from __future__ import annotations

import functools
import json
import logging
from typing import Callable

import azure.functions as func

from direito.utils.kv_store import DailyCounter, DailyLimitExceeded

logger = logging.getLogger("direito.security")


def client_ip(req: func.HttpRequest) -> str:
    """Primeiro IP do X-Forwarded-For (front door do Azure), ou 'unknown'."""
    return req.headers.get("X-Forwarded-For", "unknown").split(",")[0].strip() or "unknown"


def daily_limit(counter: DailyCounter) -> Callable:
    """
    Decorator: conta uma chamada por (endpoint, ip) por dia; acima do
    limite responde 429 sem executar o handler.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(req: func.HttpRequest, *args, **kwargs) -> func.HttpResponse:
            subject = f"{fn.__name__}:{client_ip(req)}"
            try:
                counter.increment(subject)
            except DailyLimitExceeded as e:
                logger.warning("[RATE_LIMIT] subject=%s limit=%d", subject, e.limit)
                return func.HttpResponse(
                    json.dumps(
                        {
                            "error": f"Limite diário de {e.limit} requisições atingido. Tente novamente amanhã.",
                            "limite": e.limit,
                        },
                        ensure_ascii=False,
                    ),
                    status_code=429,
                    mimetype="application/json",
                )
            return fn(req, *args, **kwargs)

        return wrapper

    return decorator
