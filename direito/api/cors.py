# direito/api/cors.py
"""
CORS dos endpoints chamados pelo front-end web.

Origins aceitas (DIREITO_ALLOWED_ORIGINS, separadas por virgula):
  - exatas:   https://vademecum.lovable.app
  - curinga:  https://*.lovable.app (qualquer subdominio, mesmo esquema)
Sem a env var valem os apps publicados. Fora de producao, qualquer porta
de localhost/127.0.0.1 tambem e aceita (vite, CRA, func start).

Lido a cada chamada: app settings mudam sem redeploy.
"""
from __future__ import annotations

import os
from typing import List, Optional
from urllib.parse import urlsplit

import azure.functions as func

PUBLISHED_ORIGINS = (
    "https://vademecum.lovable.app",
    "https://juridico.lovable.app",
    "https://direitopratico.lovable.app",
)

_LOCAL_HOSTS = ("localhost", "127.0.0.1")

# Headers enviados pelo cliente web (supabase-js) + chave da Function
ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type, x-functions-key, x-request-id"
EXPOSED_HEADERS = "X-Request-ID"


def get_allowed_origins() -> List[str]:
    env_origins = os.environ.get("DIREITO_ALLOWED_ORIGINS", "")
    if env_origins:
        return [o.strip().rstrip("/") for o in env_origins.split(",") if o.strip()]
    return list(PUBLISHED_ORIGINS)


def _is_local(origin: str) -> bool:
    parts = urlsplit(origin)
    return parts.scheme == "http" and parts.hostname in _LOCAL_HOSTS


def _matches(origin: str, pattern: str) -> bool:
    if "*." not in pattern:
        return origin == pattern
    scheme, _, host_pattern = pattern.partition("://")
    suffix = host_pattern[1:]  # '.lovable.app'
    parts = urlsplit(origin)
    host = parts.hostname or ""
    return parts.scheme == scheme and host.endswith(suffix) and len(host) > len(suffix)


def is_origin_allowed(origin: Optional[str]) -> bool:
    if not origin:
        return False
    origin = origin.rstrip("/")
    try:
        if os.environ.get("DIREITO_ENV", "development") != "production" and _is_local(origin):
            return True
        return any(_matches(origin, p) for p in get_allowed_origins())
    except ValueError:
        # Origin malformado (ex: IPv6 sem colchete de fechamento)
        return False


def cors_headers(req: func.HttpRequest) -> dict:
    origin = req.headers.get("Origin")
    if not is_origin_allowed(origin):
        return {"Vary": "Origin"}
    return {
        "Access-Control-Allow-Origin": origin,
        "Vary": "Origin",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Expose-Headers": EXPOSED_HEADERS,
        "Access-Control-Max-Age": "86400",
    }


def cors_preflight(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("", status_code=204, headers=cors_headers(req))
