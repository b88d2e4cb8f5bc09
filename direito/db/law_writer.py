# direito/db/law_writer.py
"""
Gravacao de artigos extraidos na tabela de cada lei.

Cada lei tem sua propria tabela (ver direito.config.tabelas), com colunas
"Número do Artigo", "Artigo" e ordem_artigo. UPSERT idempotente por numero
do artigo, uma transacao por chamada: se qualquer artigo falhar, rollback.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Tuple, Union

from psycopg2 import sql

from direito.config.tabelas import LawTable, get_table
from direito.db.connection import get_conn, release_conn
from direito.legal.models import Article

logger = logging.getLogger(__name__)

COL_NUMERO = "Número do Artigo"
COL_TEXTO = "Artigo"
COL_ORDEM = "ordem_artigo"

UPSERT_ARTICLE = sql.SQL(
    "INSERT INTO {table} ({numero}, {texto}, {ordem}) VALUES (%s, %s, %s) "
    "ON CONFLICT ({numero}) DO UPDATE SET "
    "{texto} = EXCLUDED.{texto}, {ordem} = EXCLUDED.{ordem}"
)

ArticleLike = Union[Article, Mapping[str, str]]


def _article_row(article: ArticleLike) -> Tuple[str, str]:
    """Aceita Article ou dict {numero, texto} (payload JSON do endpoint)."""
    if isinstance(article, Article):
        numero, texto = article.number, article.body
    elif isinstance(article, Mapping):
        numero, texto = article.get("numero"), article.get("texto")
    else:
        raise ValueError(f"Artigo invalido (esperado objeto {{numero, texto}}): {article!r}")
    numero = str(numero or "").strip()
    texto = str(texto or "").strip()
    if not numero or not texto:
        raise ValueError(f"Artigo invalido (numero e texto obrigatorios): {article!r}")
    return numero, texto


def build_upsert(table: LawTable) -> sql.Composed:
    return UPSERT_ARTICLE.format(
        table=sql.Identifier(table.table_name),
        numero=sql.Identifier(COL_NUMERO),
        texto=sql.Identifier(COL_TEXTO),
        ordem=sql.Identifier(COL_ORDEM),
    )


def upsert_articles(
    table: Union[LawTable, str],
    articles: Iterable[ArticleLike],
    conn=None,
) -> int:
    """
    Grava artigos na tabela da lei (atomico).

    Args:
        table: LawTable ou codigo/nome aceito por get_table
        articles: Article ou dicts {numero, texto}, na ordem do documento
        conn: conexao externa (nao e devolvida ao pool); default pega do pool

    Returns:
        quantidade de artigos gravados

    Raises:
        ValueError: tabela desconhecida ou artigo sem numero/texto
    """
    law = get_table(table)
    rows: List[Tuple[str, str]] = [_article_row(a) for a in articles]
    if not rows:
        return 0

    statement = build_upsert(law)
    own_conn = conn is None
    if own_conn:
        conn = get_conn()
    try:
        with conn.cursor() as cur:
            for ordem, (numero, texto) in enumerate(rows, start=1):
                cur.execute(statement, (numero, texto, ordem))
        conn.commit()
        logger.info("db: %d artigos gravados em '%s'", len(rows), law.table_name)
        return len(rows)
    except Exception:
        conn.rollback()
        logger.exception("db: erro ao gravar artigos em '%s'", law.table_name)
        raise
    finally:
        if own_conn:
            release_conn(conn)
