"""
Cliente Gemini (generateContent) com fallback entre chaves e modelos.

Chaves: GEMINI_KEY_1, GEMINI_KEY_2, GEMINI_KEY_3, DIREITO_PREMIUM_API_KEY
(nao configuradas sao puladas). Ordem: para cada modelo, todas as chaves.
"""
from __future__ import annotations

import os
import logging
from typing import List, Optional, Sequence, Tuple

import requests

from direito.config import settings
from direito.utils.fallback import (
    EmptyPayloadError,
    call_with_fallback,
    http_status_classifier,
)

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiConfigError(RuntimeError):
    """Nenhuma chave Gemini configurada."""


def load_api_keys() -> List[Tuple[str, str]]:
    """Retorna [(nome_env, chave)] das chaves configuradas, na ordem de preferencia."""
    keys = []
    for name in settings.GEMINI_KEY_ENV_NAMES:
        value = os.environ.get(name, "").strip()
        if value:
            keys.append((name, value))
    return keys


def _extract_text(data: dict) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()


class GeminiClient:
    def __init__(
        self,
        api_keys: Optional[Sequence[Tuple[str, str]]] = None,
        models: Optional[Sequence[str]] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_keys = list(api_keys) if api_keys is not None else load_api_keys()
        self.models = list(models or settings.GEMINI_MODELS)
        self.timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _call(self, model: str, api_key: str, prompt: str, temperature: float, max_output_tokens: int) -> str:
        response = self.session.post(
            GEMINI_URL.format(model=model),
            # chave no header: mensagens de HTTPError incluem a URL
            headers={"Content-Type": "application/json", "x-goog-api-key": api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": max_output_tokens,
                },
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        text = _extract_text(response.json())
        if not text:
            raise EmptyPayloadError(f"{model}: resposta sem texto")
        return text

    def generate_text(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """
        Gera texto tentando modelo x chave em ordem.

        Raises:
            GeminiConfigError: nenhuma chave configurada
            AllCandidatesFailedError: todas as combinacoes falharam
        """
        if not self.api_keys:
            raise GeminiConfigError("Nenhuma chave Gemini configurada (GEMINI_KEY_1..3)")

        temp = settings.GEMINI_TEMPERATURE if temperature is None else temperature
        max_tokens = max_output_tokens or settings.GEMINI_MAX_OUTPUT_TOKENS

        candidates = [(model, name, key) for model in self.models for name, key in self.api_keys]
        logger.info(
            "gemini: %d chave(s), %d modelo(s), prompt=%d chars",
            len(self.api_keys), len(self.models), len(prompt),
        )

        return call_with_fallback(
            candidates,
            attempt=lambda c: self._call(c[0], c[2], prompt, temp, max_tokens),
            classify=http_status_classifier,
            label=lambda c: f"{c[0]}/{c[1]}",
        )
