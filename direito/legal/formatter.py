# direito/legal/formatter.py
"""
Formatacao de texto de lei via Gemini (limpeza pos-raspagem).

O texto e dividido em blocos de ate FORMAT_CHUNK_CHARS, sempre em quebra de
linha e preferencialmente antes de um 'Art.', e cada bloco e formatado
separadamente. Markdown residual da resposta e removido.
"""
from __future__ import annotations

import re
import logging
from typing import List, Optional

from direito.config import settings
from direito.utils.gemini import GeminiClient

logger = logging.getLogger(__name__)

RE_MARKDOWN = re.compile(r"\*\*|__|^#{1,6}\s*|^```\w*\s*$", re.MULTILINE)
RE_INICIO_ARTIGO = re.compile(r"^\s*Art\.\s*\d", re.IGNORECASE)

PROMPT_TEMPLATE = """Você é um especialista em formatação de textos legais brasileiros.

TAREFA: formatar o texto da lei abaixo seguindo estas regras.

1. REMOVER REFERÊNCIAS LEGISLATIVAS
Remova qualquer texto entre parênteses que indique alteração legislativa:
"(Incluído pela Lei...)", "(Redação dada pela Lei...)", "(Vide ...)",
"(Regulamento)", "(Vigência)".
PRESERVE: (VETADO), (Revogado), (revogado).

2. ELIMINAR DUPLICATAS
Se o mesmo artigo, parágrafo ou inciso aparecer mais de uma vez, mantenha
apenas a ÚLTIMA ocorrência (a versão vigente).

3. QUEBRAS DE LINHA
Cada elemento em sua própria linha: TÍTULO, CAPÍTULO, SEÇÃO, Art., §,
incisos (I -, II -) e alíneas (a), b)). O texto de cada elemento deve ser
contínuo, sem quebras no meio da frase.

4. INTERVALOS REVOGADOS
"Arts. 1º a 3º (Revogados)" vira uma linha por artigo:
Art. 1º (Revogado)
Art. 2º (Revogado)
Art. 3º (Revogado)

5. ESTRUTURA
Mantenha a hierarquia TÍTULO > CAPÍTULO > SEÇÃO > Art. > § > inciso > alínea,
o preâmbulo ("O PRESIDENTE DA REPÚBLICA...") e a ementa.{assinatura}

6. SEM MARKDOWN
Nunca use **, #, * ou _. Retorne apenas texto puro.

TEXTO A FORMATAR:
{texto}

TEXTO FORMATADO (apenas texto puro, sem explicações):"""


def split_into_chunks(text: str, max_chars: Optional[int] = None) -> List[str]:
    """
    Divide o texto em blocos de ate max_chars.

    Corta so em quebra de linha; quando o bloco passa da metade do limite,
    corta antes do proximo 'Art.' para nao separar um artigo. Uma linha
    maior que max_chars vira um bloco proprio.
    """
    max_chars = max_chars or settings.FORMAT_CHUNK_CHARS
    if len(text) <= max_chars:
        return [text] if text.strip() else []

    chunks: List[str] = []
    buf: List[str] = []
    buf_len = 0

    def flush():
        nonlocal buf, buf_len
        content = "\n".join(buf).strip()
        if content:
            chunks.append(content)
        buf, buf_len = [], 0

    for line in text.splitlines():
        line_len = len(line) + 1
        if buf and buf_len + line_len > max_chars:
            flush()
        elif buf and buf_len > max_chars // 2 and RE_INICIO_ARTIGO.match(line):
            flush()
        buf.append(line)
        buf_len += line_len
    flush()
    return chunks


def build_format_prompt(text: str, is_last_chunk: bool = True) -> str:
    assinatura = "\nPreserve a data e as assinaturas ao final." if is_last_chunk else ""
    return PROMPT_TEMPLATE.format(assinatura=assinatura, texto=text)


def strip_markdown(text: str) -> str:
    return RE_MARKDOWN.sub("", text).strip()


def format_law_text(
    text: str,
    client: Optional[GeminiClient] = None,
    max_chunk_chars: Optional[int] = None,
) -> str:
    """
    Formata o texto da lei bloco a bloco.

    Raises:
        GeminiConfigError: nenhuma chave configurada
        AllCandidatesFailedError: algum bloco falhou em todas as chaves/modelos
    """
    client = client or GeminiClient()
    chunks = split_into_chunks(text, max_chunk_chars)
    logger.info("formatter: %d chars em %d bloco(s)", len(text), len(chunks))

    formatted = []
    for i, chunk in enumerate(chunks):
        prompt = build_format_prompt(chunk, is_last_chunk=(i == len(chunks) - 1))
        formatted.append(strip_markdown(client.generate_text(prompt)))
    return "\n\n".join(formatted)
