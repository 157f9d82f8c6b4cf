"""
Modelos de domínio do painel de metas.
Camada independente de infraestrutura.
"""

from .categories import LogicalCategory, reconcile_category
from .calendar import compute_remaining_days, count_sundays
from .errors import DashboardError, PeriodNotFoundError, StoreNotFoundError
from .models import (
    CategoryTarget,
    MetricInputs,
    MetricResult,
    MetricStatus,
    Period,
    SaleRecord,
    StoreContext,
    TargetRecord,
)

__all__ = [
    "CategoryTarget",
    "compute_remaining_days",
    "count_sundays",
    "DashboardError",
    "LogicalCategory",
    "MetricInputs",
    "MetricResult",
    "MetricStatus",
    "Period",
    "PeriodNotFoundError",
    "reconcile_category",
    "SaleRecord",
    "StoreContext",
    "StoreNotFoundError",
    "TargetRecord",
]
