"""Formatação de valores para exibição no painel."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from painel_metas.domain.models import MetricResult

_CENT = Decimal("0.01")


def format_brl(value: Union[Decimal, int, float]) -> str:
    """``Decimal("1234.5")`` -> ``"R$ 1234,50"`` (vírgula decimal, sem milhar)."""
    amount = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"R$ {amount:.2f}".replace(".", ",")


def display_fields(result: MetricResult) -> dict[str, str]:
    return {
        "today_sales": format_brl(result.sold_today),
        "period_sales": format_brl(result.sold_period),
        "target": format_brl(result.target),
        "daily_target": format_brl(result.daily_target),
        "missing_today": format_brl(result.shortfall_today),
    }
