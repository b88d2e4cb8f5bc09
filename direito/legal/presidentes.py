# direito/legal/presidentes.py
"""
Presidentes da Republica e variantes de grafia usadas nas assinaturas
das leis publicadas no Planalto.

Comparacao feita sem acentos e em maiusculas (ver normalize_name).
"""
from __future__ import annotations

import re
import unicodedata
from typing import List, Optional, Tuple

# (nome canonico, variantes)
PRESIDENTES: List[Tuple[str, Tuple[str, ...]]] = [
    # Republica Velha
    ("Deodoro da Fonseca", ("DEODORO DA FONSECA", "MANOEL DEODORO DA FONSECA")),
    ("Floriano Peixoto", ("FLORIANO PEIXOTO", "FLORIANO VIEIRA PEIXOTO")),
    ("Prudente de Morais", ("PRUDENTE DE MORAIS", "PRUDENTE J. DE MORAES BARROS")),
    ("Campos Sales", ("CAMPOS SALLES", "CAMPOS SALES", "M. FERRAZ DE CAMPOS SALLES")),
    ("Rodrigues Alves", ("RODRIGUES ALVES", "FRANCISCO DE PAULA RODRIGUES ALVES")),
    ("Afonso Pena", ("AFFONSO PENNA", "AFONSO PENA", "AFFONSO AUGUSTO MOREIRA PENNA")),
    ("Nilo Peçanha", ("NILO PEÇANHA", "NILO PROCÓPIO PEÇANHA")),
    ("Hermes da Fonseca", ("HERMES DA FONSECA", "HERMES RODRIGUES DA FONSECA")),
    ("Venceslau Brás", ("WENCESLAU BRAZ", "VENCESLAU BRÁS", "WENCESLAU BRAZ PEREIRA GOMES")),
    ("Delfim Moreira", ("DELFIM MOREIRA", "DELFIM MOREIRA DA COSTA RIBEIRO")),
    ("Epitácio Pessoa", ("EPITÁCIO PESSOA", "EPITACIO DA SILVA PESSOA")),
    ("Artur Bernardes", ("ARTHUR BERNARDES", "ARTUR BERNARDES", "ARTHUR DA SILVA BERNARDES")),
    ("Washington Luís", ("WASHINGTON LUÍS", "WASHINGTON LUIZ PEREIRA DE SOUSA")),
    # Era Vargas
    ("Getúlio Vargas", ("GETÚLIO VARGAS", "GETULIO DORNELLES VARGAS", "G. VARGAS")),
    # Republica Populista
    ("José Linhares", ("JOSÉ LINHARES",)),
    ("Eurico Gaspar Dutra", ("EURICO G. DUTRA", "EURICO GASPAR DUTRA", "E. G. DUTRA")),
    ("Café Filho", ("CAFÉ FILHO", "JOÃO CAFÉ FILHO")),
    ("Carlos Luz", ("CARLOS LUZ", "CARLOS COIMBRA DA LUZ")),
    ("Nereu Ramos", ("NEREU RAMOS", "NEREU DE OLIVEIRA RAMOS")),
    ("Juscelino Kubitschek", ("JUSCELINO KUBITSCHEK", "JUSCELINO KUBITSCHECK", "J. KUBITSCHEK")),
    ("Jânio Quadros", ("JÂNIO QUADROS", "JÂNIO DA SILVA QUADROS")),
    ("Ranieri Mazzilli", ("RANIERI MAZZILLI", "PASCOAL RANIERI MAZZILLI")),
    ("João Goulart", ("JOÃO GOULART", "JOÃO BELCHIOR MARQUES GOULART")),
    # Regime militar
    ("Castelo Branco", ("CASTELLO BRANCO", "CASTELO BRANCO", "H. CASTELLO BRANCO")),
    ("Costa e Silva", ("COSTA E SILVA", "A. COSTA E SILVA")),
    ("Emílio Médici", ("EMÍLIO G. MÉDICI", "EMÍLIO GARRASTAZU MÉDICI", "E. G. MÉDICI")),
    ("Ernesto Geisel", ("ERNESTO GEISEL", "E. GEISEL")),
    ("João Figueiredo", ("JOÃO FIGUEIREDO", "JOÃO BAPTISTA FIGUEIREDO", "JOÃO B. FIGUEIREDO")),
    # Nova Republica
    ("José Sarney", ("JOSÉ SARNEY",)),
    ("Fernando Collor", ("FERNANDO COLLOR", "FERNANDO COLLOR DE MELLO")),
    ("Itamar Franco", ("ITAMAR FRANCO", "ITAMAR AUGUSTO CAUTIERO FRANCO")),
    ("Fernando Henrique Cardoso", ("FERNANDO HENRIQUE CARDOSO", "F. H. CARDOSO")),
    ("Luiz Inácio Lula da Silva", ("LUIZ INÁCIO LULA DA SILVA", "L. I. LULA DA SILVA")),
    ("Dilma Rousseff", ("DILMA ROUSSEFF", "DILMA VANA ROUSSEFF")),
    ("Michel Temer", ("MICHEL TEMER", "MICHEL MIGUEL ELIAS TEMER LULIA")),
    ("Jair Bolsonaro", ("JAIR BOLSONARO", "JAIR MESSIAS BOLSONARO", "J. M. BOLSONARO")),
]


def normalize_name(text: str) -> str:
    """Maiusculas, sem acentos, espacos colapsados."""
    nfd = unicodedata.normalize("NFD", text or "")
    stripped = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return re.sub(r"\s+", " ", stripped.upper()).strip()


_PATTERNS = [
    (nome, re.compile(r"(?<!\w)" + r"\s*".join(re.escape(p) for p in normalize_name(v).split(" ")) + r"(?!\w)"))
    for nome, variantes in PRESIDENTES
    for v in variantes
]


def find_president(text: str) -> Optional[str]:
    """Nome canonico do primeiro presidente cuja assinatura aparece em text."""
    norm = normalize_name(text)
    for nome, pat in _PATTERNS:
        if pat.search(norm):
            return nome
    return None
