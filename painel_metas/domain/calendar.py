"""Cálculo de dias restantes do período, com a regra de domingos por região."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Optional

# Lojas desta região não trabalham aos domingos
SUNDAY_EXCLUSION_REGION = "centro"

_ONE_DAY = timedelta(days=1)
_SUNDAY = 6  # date.weekday(): segunda = 0 ... domingo = 6


def count_sundays(start: date, end: date) -> int:
    """Quantidade de domingos no intervalo fechado [start, end]; 0 se start > end."""
    if start > end:
        return 0
    total_days = (end - start).days + 1
    full_weeks, leftover = divmod(total_days, 7)
    count = full_weeks
    # dias que sobram depois das semanas completas
    first_leftover = start.weekday()
    for offset in range(leftover):
        if (first_leftover + offset) % 7 == _SUNDAY:
            count += 1
    return count


def calendar_days_remaining(today: date, period_end: date) -> int:
    """Dias de calendário de ``today`` até ``period_end``, inclusive; mínimo 1."""
    return max(1, math.ceil((period_end - today) / _ONE_DAY) + 1)


def compute_remaining_days(today: date, period_end: date, region: Optional[str]) -> int:
    """
    Divisor usado para espalhar o faltante pelos dias restantes.

    Conta os dias de ``today`` a ``period_end`` (inclusive) com piso 1. Para
    lojas da região ``centro`` os domingos do intervalo são descontados, e o
    resultado volta a ter piso 1. ``today`` depois do fim do período não é
    erro: o piso garante pelo menos um dia.
    """
    remaining = calendar_days_remaining(today, period_end)
    if region == SUNDAY_EXCLUSION_REGION:
        remaining = max(1, remaining - count_sundays(today, period_end))
    return remaining
