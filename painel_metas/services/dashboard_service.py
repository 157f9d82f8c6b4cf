"""Dashboard business logic service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from painel_metas.core import clock
from painel_metas.core.logging import app_logger
from painel_metas.domain.errors import PeriodNotFoundError, StoreNotFoundError
from painel_metas.domain.models import MetricInputs, MetricResult, Period, StoreContext
from painel_metas.repositories.metas_repository import MetasRepository
from painel_metas.repositories.protocols import DashboardRepositoryProtocol
from painel_metas.services.metric_engine import compute_metrics


@dataclass(frozen=True)
class DashboardReport:
    """Métricas do painel junto com o contexto em que foram calculadas."""

    store: StoreContext
    period: Period
    today: date
    metrics: list[MetricResult]

    @property
    def remaining_days(self) -> int:
        return self.metrics[0].remaining_days


class DashboardService:
    """Service for the store targets dashboard."""

    def __init__(self, repository: DashboardRepositoryProtocol | None = None):
        """Initialize the service with a repository instance."""
        self.repository = repository or MetasRepository()

    def list_periods(self) -> list[Period]:
        return self.repository.list_periods()

    def load_inputs(self, store_id: int, period_id: int, today: date) -> MetricInputs:
        """
        Busca no provedor tudo que o motor precisa.

        Raises:
            StoreNotFoundError: loja inexistente
            PeriodNotFoundError: período inexistente
        """
        store = self.repository.get_store(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        period = self.repository.get_period(period_id)
        if period is None:
            raise PeriodNotFoundError(period_id)

        # histórico até ontem, sem passar do fim do período
        history_end = min(today - timedelta(days=1), period.end_date)
        if history_end < period.start_date:
            sales_up_to_yesterday = []
        else:
            sales_up_to_yesterday = self.repository.get_sales(store_id, period.start_date, history_end)

        return MetricInputs(
            store=store,
            period=period,
            today=today,
            targets=self.repository.get_targets(store_id, period_id),
            period_sales=self.repository.get_sales(store_id, period.start_date, period.end_date),
            sales_up_to_yesterday=sales_up_to_yesterday,
            sales_today=self.repository.get_sales(store_id, today, today),
        )

    def get_metrics(
        self,
        store_id: int,
        period_id: int,
        today: Optional[date] = None,
    ) -> DashboardReport:
        """Calcula as métricas do painel; ``today`` default é a data no fuso configurado."""
        today = today or clock.today()
        inputs = self.load_inputs(store_id, period_id, today)
        metrics = compute_metrics(inputs)

        report = DashboardReport(store=inputs.store, period=inputs.period, today=today, metrics=metrics)
        app_logger.info(
            "Painel calculado",
            store_id=store_id,
            period_id=period_id,
            today=today.isoformat(),
            remaining_days=report.remaining_days,
        )
        return report
