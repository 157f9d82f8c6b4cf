"""
Serviços de domínio separados das rotas.

Inclui o motor de métricas (puro) e o serviço que o alimenta com dados do repositório.
"""

from .dashboard_service import DashboardReport, DashboardService  # noqa: F401
from .metric_engine import (  # noqa: F401
    classify_status,
    compute_metrics,
    compute_quota,
    TARGET_SELECTION_POLICY,
)

__all__ = [
    "classify_status",
    "compute_metrics",
    "compute_quota",
    "DashboardReport",
    "DashboardService",
    "TARGET_SELECTION_POLICY",
]
