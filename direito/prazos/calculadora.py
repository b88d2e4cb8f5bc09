# direito/prazos/calculadora.py
"""
Calculadora de prazos processuais.

Regras:
  - Dia 0 e a data de inicio; a contagem comeca no dia seguinte
    (exclui-se o dia do comeco, inclui-se o do vencimento).
  - dias_uteis: sabados, domingos e feriados sao pulados tanto ao localizar
    o primeiro dia da contagem quanto ao incrementar o contador. Se o ultimo
    dia cair em dia nao util, prorroga para o proximo dia util.
  - dias_corridos: primeiro dia apos o inicio + (dias - 1). Sem prorrogacao.

Funcao pura: sem estado, sem I/O.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import List, Optional, Union

from direito.config import settings
from direito.prazos.feriados import DEFAULT_CALENDAR, HolidayCalendar, weekday_name

logger = logging.getLogger(__name__)

# Limite de seguranca para o loop de prorrogacao (nenhum calendario real
# tem tantos dias nao uteis seguidos)
MAX_ROLL_FORWARD_DAYS = 60


class DeadlineValidationError(ValueError):
    """Entrada invalida para o calculo de prazo."""


class DeadlineRegime(str, Enum):
    BUSINESS_DAYS = "business_days"
    CALENDAR_DAYS = "calendar_days"

    @property
    def label(self) -> str:
        return "dias úteis" if self is DeadlineRegime.BUSINESS_DAYS else "dias corridos"


_REGIME_ALIASES = {
    "business_days": DeadlineRegime.BUSINESS_DAYS,
    "dias_uteis": DeadlineRegime.BUSINESS_DAYS,
    "uteis": DeadlineRegime.BUSINESS_DAYS,
    "cpc": DeadlineRegime.BUSINESS_DAYS,
    "calendar_days": DeadlineRegime.CALENDAR_DAYS,
    "dias_corridos": DeadlineRegime.CALENDAR_DAYS,
    "corridos": DeadlineRegime.CALENDAR_DAYS,
}


@dataclass
class DeadlineResult:
    """Resultado do calculo de prazo."""
    start_date: date
    day_count: int
    regime: DeadlineRegime
    final_date: date
    trace: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "data_inicio": self.start_date.isoformat(),
            "dias": self.day_count,
            "regime": self.regime.value,
            "data_final": self.final_date.isoformat(),
            "data_final_formatada": _fmt(self.final_date),
            "dia_semana": weekday_name(self.final_date),
            "passos": list(self.trace),
        }


def _fmt(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def parse_start_date(value: Union[str, date]) -> date:
    """Aceita date/datetime ou string ISO completa (YYYY-MM-DD, com hora opcional)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise DeadlineValidationError("data_inicio obrigatoria (formato AAAA-MM-DD)")
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        raise DeadlineValidationError(f"data_inicio invalida: '{value}' (formato AAAA-MM-DD)")


def parse_day_count(value) -> int:
    if isinstance(value, bool):
        raise DeadlineValidationError("dias deve ser um numero inteiro positivo")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0:
        raise DeadlineValidationError("dias deve ser um numero inteiro positivo")
    if value > settings.MAX_DEADLINE_DAYS:
        raise DeadlineValidationError(f"dias acima do maximo permitido ({settings.MAX_DEADLINE_DAYS})")
    return value


def parse_regime(value: Union[str, DeadlineRegime]) -> DeadlineRegime:
    if isinstance(value, DeadlineRegime):
        return value
    regime = _REGIME_ALIASES.get(str(value or "").strip().lower())
    if regime is None:
        raise DeadlineValidationError(
            f"regime invalido: '{value}' (aceitos: business_days, calendar_days)"
        )
    return regime


def compute_deadline(
    start_date: Union[str, date],
    day_count,
    regime: Union[str, DeadlineRegime] = DeadlineRegime.BUSINESS_DAYS,
    calendar: Optional[HolidayCalendar] = None,
) -> DeadlineResult:
    """
    Calcula a data final de um prazo.

    Args:
        start_date: data de inicio (dia 0), date ou 'AAAA-MM-DD'
        day_count: quantidade de dias (inteiro positivo)
        regime: business_days | calendar_days (aceita dias_uteis/dias_corridos)
        calendar: calendario de feriados (default: nacionais)

    Returns:
        DeadlineResult com data final e passos do calculo

    Raises:
        DeadlineValidationError: data, dias ou regime invalidos
    """
    inicio = parse_start_date(start_date)
    dias = parse_day_count(day_count)
    reg = parse_regime(regime)
    cal = calendar or DEFAULT_CALENDAR

    trace = [
        f"Data de início (dia 0): {_fmt(inicio)} ({weekday_name(inicio)})",
        f"Prazo: {dias} {reg.label}",
    ]

    try:
        if reg is DeadlineRegime.CALENDAR_DAYS:
            primeiro = inicio + timedelta(days=1)
            trace.append(f"Primeiro dia da contagem: {_fmt(primeiro)}")
            final = primeiro + timedelta(days=dias - 1)
            trace.append(f"Soma de {dias - 1} dia(s) corrido(s) ao primeiro dia")
        else:
            final = _count_business_days(inicio, dias, cal, trace)
    except OverflowError:
        raise DeadlineValidationError(
            f"data final fora do intervalo suportado (inicio {inicio.isoformat()}, {dias} dias)"
        )

    trace.append(f"Data final: {_fmt(final)} ({weekday_name(final)})")

    logger.debug(
        "compute_deadline: inicio=%s dias=%d regime=%s final=%s",
        inicio, dias, reg.value, final,
    )

    return DeadlineResult(
        start_date=inicio,
        day_count=dias,
        regime=reg,
        final_date=final,
        trace=trace,
    )


def _count_business_days(
    inicio: date,
    dias: int,
    cal: HolidayCalendar,
    trace: List[str],
) -> date:
    atual = inicio + timedelta(days=1)
    while not cal.is_business_day(atual):
        trace.append(f"Pulado {_fmt(atual)}: {cal.non_business_reason(atual)}")
        atual += timedelta(days=1)
    trace.append(f"Primeiro dia da contagem: {_fmt(atual)}")

    contados = 1
    puladas = 0
    while contados < dias:
        atual += timedelta(days=1)
        if cal.is_business_day(atual):
            contados += 1
        else:
            puladas += 1
    if puladas:
        trace.append(f"{puladas} dia(s) não útil(eis) ignorado(s) durante a contagem")

    # Prorrogacao: vencimento nao pode cair em dia nao util
    prorrogado = 0
    while not cal.is_business_day(atual):
        if prorrogado >= MAX_ROLL_FORWARD_DAYS:
            raise DeadlineValidationError("calendario sem dias uteis no horizonte de prorrogacao")
        trace.append(
            f"Vencimento em {_fmt(atual)} ({cal.non_business_reason(atual)}): "
            "prorrogado para o próximo dia útil"
        )
        atual += timedelta(days=1)
        prorrogado += 1

    return atual
