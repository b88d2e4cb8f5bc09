"""
Utilitarios compartilhados (fallback entre chaves, cliente Gemini, kv store).

IMPORTANTE: side-effect free. Importar explicitamente:
  from direito.utils.fallback import call_with_fallback
  from direito.utils.gemini import GeminiClient
  from direito.utils.kv_store import TTLCache, DailyCounter
"""

__all__ = []
