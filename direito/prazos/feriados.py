# direito/prazos/feriados.py
"""
Calendario de feriados nacionais para contagem de prazos.

Lista estatica de feriados de data fixa (Lei 662/1949, Lei 6.802/1980,
Lei 14.759/2023) + Sexta-feira Santa, calculada a partir da Pascoa.
Feriados estaduais/municipais ou suspensoes de expediente do tribunal
podem ser injetados via extra_dates.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

# (mes, dia) -> (nome, ano_inicial)
FERIADOS_FIXOS: Dict[Tuple[int, int], Tuple[str, int]] = {
    (1, 1): ("Confraternização Universal", 0),
    (4, 21): ("Tiradentes", 0),
    (5, 1): ("Dia do Trabalho", 0),
    (9, 7): ("Independência do Brasil", 0),
    (10, 12): ("Nossa Senhora Aparecida", 0),
    (11, 2): ("Finados", 0),
    (11, 15): ("Proclamação da República", 0),
    (11, 20): ("Dia Nacional de Zumbi e da Consciência Negra", 2024),
    (12, 25): ("Natal", 0),
}

DIAS_SEMANA = (
    "segunda-feira",
    "terça-feira",
    "quarta-feira",
    "quinta-feira",
    "sexta-feira",
    "sábado",
    "domingo",
)


def easter_sunday(year: int) -> date:
    """Domingo de Pascoa (algoritmo anonimo gregoriano / Meeus)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def weekday_name(d: date) -> str:
    return DIAS_SEMANA[d.weekday()]


class HolidayCalendar:
    """
    Calendario de dias nao uteis.

    Args:
        extra_dates: datas adicionais a tratar como feriado
                     (iteravel de date ou de (date, nome))
        include_good_friday: inclui Sexta-feira Santa (default True)
    """

    def __init__(
        self,
        extra_dates: Iterable = (),
        include_good_friday: bool = True,
    ):
        self.include_good_friday = include_good_friday
        self._extra: Dict[date, str] = {}
        for item in extra_dates:
            if isinstance(item, tuple):
                d, nome = item
            else:
                d, nome = item, "Feriado local"
            self._extra[d] = nome

    def holiday_name(self, d: date) -> Optional[str]:
        """Nome do feriado em d, ou None."""
        if d in self._extra:
            return self._extra[d]

        fixo = FERIADOS_FIXOS.get((d.month, d.day))
        if fixo and d.year >= fixo[1]:
            return fixo[0]

        if self.include_good_friday and d == easter_sunday(d.year) - timedelta(days=2):
            return "Sexta-feira Santa"

        return None

    def is_holiday(self, d: date) -> bool:
        return self.holiday_name(d) is not None

    def is_weekend(self, d: date) -> bool:
        return d.weekday() >= 5

    def is_business_day(self, d: date) -> bool:
        return not self.is_weekend(d) and not self.is_holiday(d)

    def non_business_reason(self, d: date) -> Optional[str]:
        """Motivo de d nao ser dia util ('sábado', 'domingo', nome do feriado) ou None."""
        if self.is_weekend(d):
            return weekday_name(d)
        return self.holiday_name(d)


DEFAULT_CALENDAR = HolidayCalendar()
