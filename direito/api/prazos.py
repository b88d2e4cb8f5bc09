# direito/api/prazos.py
"""
POST /api/prazos/calcular

Body JSON:
    data_inicio: str        (obrigatorio) 'AAAA-MM-DD', dia 0 do prazo
    dias: int               (obrigatorio) inteiro positivo
    regime: str             (opcional, default 'business_days')
                            business_days | calendar_days | dias_uteis | dias_corridos
    feriados_extras: list   (opcional) datas 'AAAA-MM-DD' de feriados locais
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional

import azure.functions as func

from direito.api.responses import json_response
from direito.prazos.calculadora import (
    DeadlineRegime,
    DeadlineValidationError,
    compute_deadline,
)
from direito.prazos.feriados import HolidayCalendar
from direito.security import safe_handler, validate_json_body

logger = logging.getLogger(__name__)


def _parse_extra_holidays(value: Any) -> Optional[HolidayCalendar]:
    if value in (None, []):
        return None
    if not isinstance(value, list):
        raise DeadlineValidationError("feriados_extras deve ser uma lista de datas AAAA-MM-DD")
    dates: List[date] = []
    for item in value:
        parsed = None
        if isinstance(item, str):
            try:
                parsed = date.fromisoformat(item.strip())
            except ValueError:
                pass
        if parsed is None:
            raise DeadlineValidationError(f"feriado extra invalido: '{item}' (formato AAAA-MM-DD)")
        dates.append(parsed)
    return HolidayCalendar(extra_dates=dates)


@safe_handler
def handle_calcular_prazo(req: func.HttpRequest) -> func.HttpResponse:
    body, err = validate_json_body(req)
    if err:
        return err

    # DeadlineValidationError -> 400 via safe_handler
    calendar = _parse_extra_holidays(body.get("feriados_extras"))
    result = compute_deadline(
        body.get("data_inicio"),
        body.get("dias"),
        body.get("regime") or DeadlineRegime.BUSINESS_DAYS,
        calendar=calendar,
    )

    logger.info(
        "prazos/calcular: inicio=%s dias=%d regime=%s final=%s",
        result.start_date, result.day_count, result.regime.value, result.final_date,
    )
    return json_response(result.to_dict())
