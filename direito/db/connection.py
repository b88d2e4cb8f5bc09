# direito/db/connection.py
"""
Pool de conexoes Postgres (tabelas de leis), singleton com init lazy.

Uso:
    from direito.db.connection import get_conn, release_conn

    conn = get_conn()
    try:
        with conn.cursor() as cur:
            cur.execute('SELECT count(*) FROM "CP - Código Penal"')
    finally:
        release_conn(conn)

Config:
    POSTGRES_CONNSTR (env var), lida so na primeira conexao.
    Formato: "host=... port=5432 dbname=direito user=... password=... sslmode=require"
"""
from __future__ import annotations

import os
import logging
import threading

from psycopg2 import pool as pg_pool

logger = logging.getLogger(__name__)

_pool: pg_pool.SimpleConnectionPool | None = None
_lock = threading.Lock()

MIN_CONN = 1
MAX_CONN = int(os.environ.get("POSTGRES_MAX_CONN", "4"))


def is_configured() -> bool:
    return bool(os.environ.get("POSTGRES_CONNSTR", "").strip())


def _get_connstr() -> str:
    connstr = os.environ.get("POSTGRES_CONNSTR", "").strip()
    if not connstr:
        raise RuntimeError(
            "POSTGRES_CONNSTR nao configurada. "
            "Defina no app setting do Function App ou em local.settings.json."
        )
    return connstr


def _init_pool() -> pg_pool.SimpleConnectionPool:
    global _pool
    if _pool is None:
        with _lock:
            if _pool is None:
                _pool = pg_pool.SimpleConnectionPool(MIN_CONN, MAX_CONN, _get_connstr())
                logger.info("db: pool inicializado (min=%d, max=%d)", MIN_CONN, MAX_CONN)
    return _pool


def get_conn():
    """Conexao do pool, sempre com autocommit desligado (transacao explicita)."""
    conn = _init_pool().getconn()
    conn.autocommit = False
    return conn


def release_conn(conn, close: bool = False) -> None:
    if _pool is not None and conn is not None:
        _pool.putconn(conn, close=close)


def close_pool() -> None:
    global _pool
    with _lock:
        if _pool is not None:
            _pool.closeall()
            _pool = None
            logger.info("db: pool fechado")
