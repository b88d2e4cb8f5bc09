"""
Armazenamento chave-valor com relogio injetado.

Substitui contadores diarios em localStorage e caches com TTL em IndexedDB
do app web. Relogio e "hoje" sao injetaveis para testes deterministicos.

Nota: InMemoryStore e POR INSTANCIA do Function App (Consumption Plan tem
instancias efemeras). Para contagem global, implementar KeyValueStore
sobre Postgres.
"""
from __future__ import annotations

import logging
import threading
import time
from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional, Protocol

logger = logging.getLogger(__name__)

_MISSING = object()


class KeyValueStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self, prefix: str = "") -> Iterable[str]: ...


class InMemoryStore:
    """Dict protegido por lock (Azure Functions pode ter multiplas threads)."""

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self, prefix: str = "") -> Iterable[str]:
        with self._lock:
            return [k for k in self._data if k.startswith(prefix)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class TTLCache:
    """
    Cache com expiracao.

    Args:
        store: backend chave-valor
        ttl_seconds: validade de cada entrada
        clock: funcao que retorna timestamp em segundos (default time.time)
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds deve ser positivo")
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.store.get(key, _MISSING)
        if entry is _MISSING:
            return default
        value, expires_at = entry
        if self.clock() >= expires_at:
            self.store.delete(key)
            return default
        return value

    def set(self, key: str, value: Any) -> None:
        self.store.set(key, (value, self.clock() + self.ttl_seconds))

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = loader()
            self.set(key, value)
        return value


class DailyLimitExceeded(Exception):
    def __init__(self, subject: str, limit: int):
        self.subject = subject
        self.limit = limit
        super().__init__(f"Limite diario de {limit} atingido para '{subject}'")


class DailyCounter:
    """
    Contador de uso por dia (ex: raspagens por cliente).

    Chave: 'daily:{subject}' -> (data_iso, contagem). Contagem zera quando
    today() muda; na primeira chamada de um novo dia as chaves de dias
    anteriores sao removidas do store.
    """

    PREFIX = "daily:"

    def __init__(
        self,
        store: KeyValueStore,
        limit: int,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.limit = limit
        self.today = today
        self._lock = threading.Lock()
        self._last_cleanup: Optional[str] = None

    def _key(self, subject: str) -> str:
        return f"{self.PREFIX}{subject}"

    def _cleanup_stale(self, today_iso: str) -> None:
        """Remove contagens de dias anteriores (uma vez por dia)."""
        if self._last_cleanup == today_iso:
            return
        self._last_cleanup = today_iso
        removed = 0
        for key in self.store.keys(self.PREFIX):
            stored = self.store.get(key)
            if not stored or stored[0] != today_iso:
                self.store.delete(key)
                removed += 1
        if removed:
            logger.info("daily_counter: %d contagem(ns) de dias anteriores removida(s)", removed)

    def count(self, subject: str) -> int:
        stored = self.store.get(self._key(subject))
        if not stored:
            return 0
        day, n = stored
        return n if day == self.today().isoformat() else 0

    def remaining(self, subject: str) -> int:
        return max(self.limit - self.count(subject), 0)

    def increment(self, subject: str) -> int:
        """Registra um uso; levanta DailyLimitExceeded se passar do limite."""
        with self._lock:
            today_iso = self.today().isoformat()
            self._cleanup_stale(today_iso)
            current = self.count(subject)
            if current >= self.limit:
                logger.warning("[DAILY_LIMIT] subject=%s limit=%d", subject, self.limit)
                raise DailyLimitExceeded(subject, self.limit)
            current += 1
            self.store.set(self._key(subject), (today_iso, current))
        return current
