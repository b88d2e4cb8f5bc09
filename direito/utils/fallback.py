"""
Tentativa sequencial com fallback entre credenciais/modelos.

Uso:
    result = call_with_fallback(
        candidates=[("gemini-2.5-flash", key1), ("gemini-2.5-flash", key2)],
        attempt=lambda c: chamar_api(*c),
        classify=http_status_classifier,
        label=lambda c: f"{c[0]}/key{...}",
    )

Sem backoff, sem circuit breaker: cada candidato e tentado uma vez, na ordem.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = {403, 404, 429, 500, 502, 503, 504}
RETRYABLE_MARKERS = ("RESOURCE_EXHAUSTED", "quota", "rate limit")


class ErrorKind(str, Enum):
    RETRYABLE = "retryable"
    FATAL = "fatal"


class EmptyPayloadError(Exception):
    """Candidato respondeu sem conteudo util."""


class AllCandidatesFailedError(Exception):
    """Todos os candidatos falharam (ou foram classificados como retryable)."""

    def __init__(self, attempts: List[Tuple[str, BaseException]]):
        self.attempts = attempts
        self.last_error: Optional[BaseException] = attempts[-1][1] if attempts else None
        if attempts:
            msg = f"Todos os {len(attempts)} candidatos falharam. Ultimo erro: {self.last_error}"
        else:
            msg = "Nenhum candidato disponivel"
        super().__init__(msg)


def default_classifier(exc: BaseException) -> ErrorKind:
    """Erros de programacao sao fatais; o resto segue para o proximo candidato."""
    if isinstance(exc, (TypeError, AttributeError, KeyboardInterrupt)):
        return ErrorKind.FATAL
    return ErrorKind.RETRYABLE


def http_status_classifier(exc: BaseException) -> ErrorKind:
    """
    Classifica erros de APIs HTTP.

    Retryable: 403/404/429/5xx, timeouts, erro de conexao, payload vazio,
    mensagens de cota ('RESOURCE_EXHAUSTED'). Demais status 4xx sao fatais
    (requisicao invalida nao melhora trocando de chave).
    """
    if isinstance(exc, (EmptyPayloadError, requests.Timeout, requests.ConnectionError)):
        return ErrorKind.RETRYABLE

    if isinstance(exc, requests.HTTPError):
        response = exc.response
        status = response.status_code if response is not None else None
        if status in RETRYABLE_STATUS:
            return ErrorKind.RETRYABLE
        body = ""
        if response is not None:
            try:
                body = response.text or ""
            except Exception:
                body = ""
        if any(marker.lower() in body.lower() for marker in RETRYABLE_MARKERS):
            return ErrorKind.RETRYABLE
        return ErrorKind.FATAL

    return default_classifier(exc)


def call_with_fallback(
    candidates: Iterable[Any],
    attempt: Callable[[Any], Any],
    classify: Callable[[BaseException], ErrorKind] = default_classifier,
    label: Callable[[Any], str] = str,
) -> Any:
    """
    Tenta cada candidato em ordem e retorna o primeiro payload nao vazio.

    Args:
        candidates: credenciais/modelos em ordem de preferencia
        attempt: funcao que recebe o candidato e retorna o payload
        classify: decide se a excecao e RETRYABLE (proximo) ou FATAL (propaga)
        label: nome do candidato para logs (nunca loga a chave)

    Returns:
        payload do primeiro candidato bem sucedido

    Raises:
        AllCandidatesFailedError: nenhum candidato retornou payload
        Exception: primeira excecao classificada como FATAL
    """
    attempts: List[Tuple[str, BaseException]] = []

    for candidate in candidates:
        name = label(candidate)
        try:
            result = attempt(candidate)
            if result is None or result == "":
                raise EmptyPayloadError(f"{name}: resposta vazia")
        except Exception as e:
            kind = classify(e)
            if kind is ErrorKind.FATAL:
                logger.error("fallback: %s falhou com erro fatal: %s", name, e)
                raise
            logger.warning("fallback: %s falhou (%s), tentando proximo", name, str(e)[:150])
            attempts.append((name, e))
            continue

        if attempts:
            logger.info("fallback: sucesso com %s apos %d falha(s)", name, len(attempts))
        return result

    raise AllCandidatesFailedError(attempts)
