# direito/config/settings.py
"""
Configuracao centralizada via env vars (app settings do Function App).

Valores lidos uma vez no import; testes usam importlib.reload apos
monkeypatch.setenv.
"""
import os
import logging

logger = logging.getLogger(__name__)

# ─── Ambiente ──────────────────────────────────────────────────────
DIREITO_ENV = os.environ.get("DIREITO_ENV", "development")

# ─── Prazos ────────────────────────────────────────────────────────
# Teto de dias por calculo (10 anos corridos cobre qualquer prazo processual)
MAX_DEADLINE_DAYS = int(os.environ.get("MAX_DEADLINE_DAYS", "3650"))

# ─── Validacao de leis ─────────────────────────────────────────────
VALIDATION_MIN_SCORE = int(os.environ.get("VALIDATION_MIN_SCORE", "70"))

# Texto colado/raspado (Codigo Civil completo ~ 1.5M chars)
MAX_TEXT_CHARS = int(os.environ.get("MAX_TEXT_CHARS", str(3 * 1024 * 1024)))

# ─── Raspagem Planalto ─────────────────────────────────────────────
SCRAPE_TIMEOUT_SECONDS = int(os.environ.get("SCRAPE_TIMEOUT_SECONDS", "30"))
SCRAPE_USER_AGENT = os.environ.get(
    "SCRAPE_USER_AGENT",
    "Mozilla/5.0 (compatible; DireitoPremiumBot/1.0)",
)
DAILY_SCRAPE_LIMIT = int(os.environ.get("DAILY_SCRAPE_LIMIT", "50"))
SCRAPE_CACHE_TTL_SECONDS = int(os.environ.get("SCRAPE_CACHE_TTL_SECONDS", "3600"))

# ─── Gemini ────────────────────────────────────────────────────────
GEMINI_KEY_ENV_NAMES = ("GEMINI_KEY_1", "GEMINI_KEY_2", "GEMINI_KEY_3", "DIREITO_PREMIUM_API_KEY")
GEMINI_MODELS = tuple(
    m.strip()
    for m in os.environ.get("GEMINI_MODELS", "gemini-2.5-flash,gemini-2.0-flash").split(",")
    if m.strip()
)
GEMINI_TIMEOUT_SECONDS = int(os.environ.get("GEMINI_TIMEOUT_SECONDS", "60"))
GEMINI_TEMPERATURE = float(os.environ.get("GEMINI_TEMPERATURE", "0.1"))
GEMINI_MAX_OUTPUT_TOKENS = int(os.environ.get("GEMINI_MAX_OUTPUT_TOKENS", "65000"))

# Texto enviado ao Gemini em blocos (saida cabe em maxOutputTokens)
FORMAT_CHUNK_CHARS = int(os.environ.get("FORMAT_CHUNK_CHARS", "40000"))


def is_production() -> bool:
    return DIREITO_ENV == "production"
