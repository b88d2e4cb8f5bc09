# direito/security/error_shield.py
"""
Fronteira de erro dos handlers HTTP.

Excecoes de dominio conhecidas (DOMAIN_ERRORS) viram {"error": msg} com o
status correspondente; o handler so trata o que e especifico dele. Qualquer
outra excecao vira 500 generico com request_id, e o traceback vai so para o
log (Application Insights).

Toda resposta de erro leva X-Request-ID para correlacao com o log.
"""
from __future__ import annotations

import functools
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import azure.functions as func

from direito.api.responses import json_response
from direito.legal.planalto import InvalidReferenceError, ScrapeError, ScrapeTimeoutError
from direito.prazos.calculadora import DeadlineValidationError
from direito.utils.fallback import AllCandidatesFailedError
from direito.utils.gemini import GeminiConfigError

logger = logging.getLogger("direito.security")


@dataclass(frozen=True)
class DomainError:
    """Como uma excecao de dominio aparece para o cliente."""
    exc_type: type
    status_code: int
    message: Optional[str] = None          # None: usa str(exc)
    extra: Optional[Callable[[BaseException], dict]] = None
    log_level: int = logging.WARNING


# Ordem importa: subclasses antes das bases (ScrapeTimeoutError < ScrapeError)
DOMAIN_ERRORS: Tuple[DomainError, ...] = (
    DomainError(DeadlineValidationError, 400, log_level=logging.INFO),
    DomainError(InvalidReferenceError, 400, log_level=logging.INFO),
    DomainError(ScrapeTimeoutError, 504),
    DomainError(ScrapeError, 502),
    DomainError(
        GeminiConfigError, 503,
        message="Formatação por IA indisponível: nenhuma chave configurada",
        log_level=logging.ERROR,
    ),
    DomainError(
        AllCandidatesFailedError, 502,
        message="Todas as chaves/modelos do provedor de IA falharam. Tente novamente em alguns instantes.",
        extra=lambda e: {"tentativas": [name for name, _ in e.attempts]},
    ),
)


def find_domain_error(exc: BaseException) -> Optional[DomainError]:
    for entry in DOMAIN_ERRORS:
        if isinstance(exc, entry.exc_type):
            return entry
    return None


def _error(payload: dict, status_code: int, request_id: str) -> func.HttpResponse:
    payload["request_id"] = request_id
    return json_response(payload, status_code=status_code, headers={"X-Request-ID": request_id})


def safe_handler(fn):
    """Decorator para HTTP handlers (ver docstring do modulo)."""

    @functools.wraps(fn)
    def wrapper(req: func.HttpRequest, *args, **kwargs) -> func.HttpResponse:
        request_id = req.headers.get("X-Request-ID") or str(uuid.uuid4())
        try:
            return fn(req, *args, **kwargs)
        except Exception as e:
            entry = find_domain_error(e)
            if entry is None:
                logger.exception("[UNHANDLED] request_id=%s endpoint=%s", request_id, fn.__name__)
                return _error({"error": "Erro interno do servidor"}, 500, request_id)

            logger.log(
                entry.log_level,
                "[%s] request_id=%s endpoint=%s status=%d: %s",
                type(e).__name__, request_id, fn.__name__, entry.status_code, e,
            )
            payload = {"error": entry.message or str(e)}
            if entry.extra:
                payload.update(entry.extra(e))
            return _error(payload, entry.status_code, request_id)

    return wrapper
