"""
Motor de métricas do painel de metas.

Função pura: recebe a fotografia dos dados de uma loja num período e devolve
uma ``MetricResult`` por categoria lógica, sempre as cinco, na ordem de
declaração de ``LogicalCategory``.

A meta diária é recalculada a cada dia a partir do que faltava até ontem:

    faltante_ate_ontem = max(0, meta - vendido_ate_ontem)
    meta_diaria        = faltante_ate_ontem / dias_restantes   (0 se nada falta)
    faltante_hoje      = max(0, meta_diaria - vendido_hoje)

As vendas de hoje só afetam o faltante de hoje; a meta diária de hoje
depende apenas do histórico até ontem.

Dados ausentes ou estranhos degradam para zero em vez de levantar erro:
conjuntos vazios, códigos de categoria desconhecidos (descartados) e
valores não numéricos (convertidos para zero, com aviso no log).
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from painel_metas.core.logging import engine_logger
from painel_metas.domain.calendar import compute_remaining_days
from painel_metas.domain.categories import LogicalCategory, reconcile_category
from painel_metas.domain.models import (
    MetricInputs,
    MetricResult,
    MetricStatus,
    SaleRecord,
    TargetRecord,
)

# Quando o provedor devolve várias metas para a mesma loja/período, vale a primeira
TARGET_SELECTION_POLICY = "first"

ZERO = Decimal("0")
CENT = Decimal("0.01")


# -----------------------------------------------------------------------------
# Valores monetários
# -----------------------------------------------------------------------------


def to_amount(value: Any) -> Decimal:
    """
    Converte um valor vindo do provedor para ``Decimal``.

    ``None`` vira zero. Números e strings numéricas são aceitos com ponto
    decimal ("1234.56") ou no formato brasileiro ("1.234,56"). Strings com
    vírgula antes do ponto ("1,234.56") são rejeitadas. Essas e qualquer outra coisa,
    inclusive NaN, infinito e booleanos, viram zero e geram um aviso.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool):
        return _coerce_failed(value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if "," in text:
            if text.rfind(".") > text.rfind(","):
                # "1,234.56": vírgula como separador de milhar
                return _coerce_failed(value)
            text = text.replace(".", "").replace(",", ".")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return _coerce_failed(value)
    else:
        return _coerce_failed(value)

    if not amount.is_finite():
        return _coerce_failed(value)
    return amount


def _coerce_failed(value: Any) -> Decimal:
    engine_logger.warning("Valor não numérico tratado como zero", raw_value=repr(value))
    return ZERO


# -----------------------------------------------------------------------------
# Agregação por categoria
# -----------------------------------------------------------------------------


def sum_by_category(sales: Optional[Iterable[SaleRecord]]) -> dict[LogicalCategory, Decimal]:
    """Soma as vendas por categoria lógica; códigos desconhecidos ficam de fora."""
    totals: dict[LogicalCategory, Decimal] = defaultdict(lambda: ZERO)
    dropped: set[str] = set()
    for sale in sales or ():
        category = reconcile_category(sale.category_code)
        if category is None:
            dropped.add(str(sale.category_code))
            continue
        totals[category] += to_amount(sale.amount)

    if dropped:
        engine_logger.debug("Vendas com categoria desconhecida descartadas", codes=sorted(dropped))
    return dict(totals)


def select_target(targets: Optional[Sequence[TargetRecord]]) -> Optional[TargetRecord]:
    """Aplica ``TARGET_SELECTION_POLICY``: a primeira meta na ordem do provedor."""
    if not targets:
        return None
    if len(targets) > 1:
        engine_logger.warning(
            "Mais de uma meta para a loja no período; usando a primeira",
            policy=TARGET_SELECTION_POLICY,
            received=len(targets),
            store_id=targets[0].store_id,
            period_id=targets[0].period_id,
        )
    return targets[0]


def targets_by_category(target: Optional[TargetRecord]) -> dict[LogicalCategory, Decimal]:
    """
    Meta de cada categoria lógica.

    Geral usa sempre o valor total da meta da loja. As demais usam a primeira
    meta de categoria cujo código reconcilia para ela.
    """
    if target is None:
        return {}

    amounts: dict[LogicalCategory, Decimal] = {
        LogicalCategory.GENERAL: to_amount(target.overall_amount),
    }
    for row in target.categories or ():
        category = reconcile_category(row.category_code)
        if category is None or category in amounts:
            continue
        amounts[category] = to_amount(row.amount)
    return amounts


# -----------------------------------------------------------------------------
# Meta diária, faltante e status
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class QuotaBreakdown:
    shortfall_up_to_yesterday: Decimal
    daily_target: Decimal
    shortfall_today: Decimal


def compute_quota(
    target: Decimal,
    sold_up_to_yesterday: Decimal,
    sold_today: Decimal,
    remaining_days: int,
) -> QuotaBreakdown:
    """
    Meta diária (arredondada ao centavo) e faltantes de uma categoria.

    ``remaining_days`` abaixo de 1 é tratado como 1, o mesmo piso do calendário.
    """
    remaining_days = max(1, remaining_days)

    shortfall_up_to_yesterday = max(ZERO, target - sold_up_to_yesterday)
    if shortfall_up_to_yesterday > 0:
        daily_target = (shortfall_up_to_yesterday / remaining_days).quantize(
            CENT, rounding=ROUND_HALF_UP
        )
    else:
        daily_target = ZERO
    shortfall_today = max(ZERO, daily_target - sold_today)

    return QuotaBreakdown(
        shortfall_up_to_yesterday=shortfall_up_to_yesterday,
        daily_target=daily_target,
        shortfall_today=shortfall_today,
    )


def classify_status(daily_target: Decimal, sold_today: Decimal) -> MetricStatus:
    """
    Pendente por padrão. Com meta diária positiva: igual é atingido, acima é acima.
    Meta diária zero é sempre pendente, mesmo com vendas hoje.
    """
    if daily_target > 0 and sold_today >= daily_target:
        return MetricStatus.EXCEEDED if sold_today > daily_target else MetricStatus.REACHED
    return MetricStatus.PENDING


# -----------------------------------------------------------------------------
# Montagem do resultado
# -----------------------------------------------------------------------------


def compute_metrics(inputs: MetricInputs) -> list[MetricResult]:
    """Calcula as cinco métricas do painel para a loja e o período informados."""
    remaining_days = compute_remaining_days(
        inputs.today, inputs.period.end_date, inputs.store.region
    )

    targets = targets_by_category(select_target(inputs.targets))
    sold_period = sum_by_category(inputs.period_sales)
    sold_up_to_yesterday = sum_by_category(inputs.sales_up_to_yesterday)
    sold_today = sum_by_category(inputs.sales_today)

    results: list[MetricResult] = []
    for category in LogicalCategory:
        results.append(
            _build_result(
                category,
                target=targets.get(category, ZERO),
                sold_period=sold_period.get(category, ZERO),
                sold_up_to_yesterday=sold_up_to_yesterday.get(category, ZERO),
                sold_today=sold_today.get(category, ZERO),
                remaining_days=remaining_days,
            )
        )

    engine_logger.debug(
        "Métricas calculadas",
        store_id=inputs.store.store_id,
        period_id=inputs.period.id,
        today=inputs.today.isoformat(),
        remaining_days=remaining_days,
    )
    return results


def _build_result(
    category: LogicalCategory,
    *,
    target: Decimal,
    sold_period: Decimal,
    sold_up_to_yesterday: Decimal,
    sold_today: Decimal,
    remaining_days: int,
) -> MetricResult:
    quota = compute_quota(target, sold_up_to_yesterday, sold_today, remaining_days)
    return MetricResult(
        category=category,
        sold_today=sold_today,
        sold_period=sold_period,
        target=target,
        daily_target=quota.daily_target,
        shortfall_today=quota.shortfall_today,
        remaining_days=remaining_days,
        status=classify_status(quota.daily_target, sold_today),
    )