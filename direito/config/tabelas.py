"""Registro tipado das tabelas de leis: enum -> tabela Postgres de cada lei."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

PLANALTO = "https://www.planalto.gov.br/ccivil_03"


@dataclass(frozen=True)
class TableConfig:
    table_name: str
    display_name: str
    category: str  # constituicao | codigo | estatuto | lei_especial
    planalto_url: str


class LawTable(Enum):
    CF = TableConfig(
        table_name="CF - Constituição Federal",
        display_name="Constituição Federal de 1988",
        category="constituicao",
        planalto_url=f"{PLANALTO}/constituicao/constituicao.htm",
    )
    CP = TableConfig(
        table_name="CP - Código Penal",
        display_name="Código Penal",
        category="codigo",
        planalto_url=f"{PLANALTO}/decreto-lei/del2848compilado.htm",
    )
    CPP = TableConfig(
        table_name="CPP – Código de Processo Penal",
        display_name="Código de Processo Penal",
        category="codigo",
        planalto_url=f"{PLANALTO}/decreto-lei/del3689compilado.htm",
    )
    CC = TableConfig(
        table_name="CC - Código Civil",
        display_name="Código Civil",
        category="codigo",
        planalto_url=f"{PLANALTO}/leis/2002/l10406compilada.htm",
    )
    CPC = TableConfig(
        table_name="CPC – Código de Processo Civil",
        display_name="Código de Processo Civil",
        category="codigo",
        planalto_url=f"{PLANALTO}/_ato2015-2018/2015/lei/l13105.htm",
    )
    CLT = TableConfig(
        table_name="CLT – Consolidação das Leis do Trabalho",
        display_name="Consolidação das Leis do Trabalho",
        category="codigo",
        planalto_url=f"{PLANALTO}/decreto-lei/del5452compilado.htm",
    )
    CDC = TableConfig(
        table_name="CDC – Código de Defesa do Consumidor",
        display_name="Código de Defesa do Consumidor",
        category="codigo",
        planalto_url=f"{PLANALTO}/leis/l8078compilado.htm",
    )
    CTN = TableConfig(
        table_name="CTN – Código Tributário Nacional",
        display_name="Código Tributário Nacional",
        category="codigo",
        planalto_url=f"{PLANALTO}/leis/l5172compilado.htm",
    )
    CTB = TableConfig(
        table_name="CTB Código de Trânsito Brasileiro",
        display_name="Código de Trânsito Brasileiro",
        category="codigo",
        planalto_url=f"{PLANALTO}/leis/l9503compilado.htm",
    )
    CE = TableConfig(
        table_name="CE – Código Eleitoral",
        display_name="Código Eleitoral",
        category="codigo",
        planalto_url=f"{PLANALTO}/leis/l4737compilado.htm",
    )
    ECA = TableConfig(
        table_name="ECA – Estatuto da Criança e do Adolescente",
        display_name="Estatuto da Criança e do Adolescente",
        category="estatuto",
        planalto_url=f"{PLANALTO}/leis/l8069compilado.htm",
    )
    ESTATUTO_IDOSO = TableConfig(
        table_name="Estatuto do Idoso",
        display_name="Estatuto da Pessoa Idosa",
        category="estatuto",
        planalto_url=f"{PLANALTO}/leis/2003/l10.741compilado.htm",
    )
    ESTATUTO_OAB = TableConfig(
        table_name="Estatuto dos Advogados (OAB)",
        display_name="Estatuto da Advocacia e da OAB",
        category="estatuto",
        planalto_url=f"{PLANALTO}/leis/l8906.htm",
    )
    MARIA_DA_PENHA = TableConfig(
        table_name="Lei Maria da Penha",
        display_name="Lei Maria da Penha",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/_ato2004-2006/2006/lei/l11340.htm",
    )
    LINDB = TableConfig(
        table_name="LINDB – Lei de Introdução às Normas do Direito Brasileiro",
        display_name="Lei de Introdução às Normas do Direito Brasileiro",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/decreto-lei/del4657compilado.htm",
    )
    LICITACOES = TableConfig(
        table_name="Lei de Licitações",
        display_name="Lei de Licitações e Contratos Administrativos",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/_ato2019-2022/2021/lei/l14133.htm",
    )
    LGPD = TableConfig(
        table_name="Lei Geral de Proteção de Dados",
        display_name="Lei Geral de Proteção de Dados Pessoais",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/_ato2015-2018/2018/lei/l13709.htm",
    )
    LEI_DE_DROGAS = TableConfig(
        table_name="Lei de Drogas",
        display_name="Lei de Drogas",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/_ato2004-2006/2006/lei/l11343.htm",
    )
    LEP = TableConfig(
        table_name="Lei de Execução Penal",
        display_name="Lei de Execução Penal",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/leis/l7210.htm",
    )
    INQUILINATO = TableConfig(
        table_name="Lei do Inquilinato",
        display_name="Lei do Inquilinato",
        category="lei_especial",
        planalto_url=f"{PLANALTO}/leis/l8245.htm",
    )

    @property
    def table_name(self) -> str:
        return self.value.table_name

    @property
    def display_name(self) -> str:
        return self.value.display_name

    @property
    def category(self) -> str:
        return self.value.category

    @property
    def planalto_url(self) -> str:
        return self.value.planalto_url


_BY_TABLE_NAME: Dict[str, LawTable] = {t.table_name: t for t in LawTable}


def get_table(code: str) -> LawTable:
    """Resolve por nome do enum ('CP', 'cp') ou nome da tabela ('CP - Código Penal')."""
    if isinstance(code, LawTable):
        return code
    key = (code or "").strip()
    table = LawTable.__members__.get(key.upper()) or _BY_TABLE_NAME.get(key)
    if table is None:
        raise ValueError(f"Tabela desconhecida: {code}. Validas: {list(LawTable.__members__.keys())}")
    return table
