"""Contrato do provedor de dados consumido pelo serviço do painel."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from painel_metas.domain.models import Period, SaleRecord, StoreContext, TargetRecord


class DashboardRepositoryProtocol(Protocol):
    """Acesso a lojas, períodos, metas e vendas."""

    def get_store(self, store_id: int) -> Optional[StoreContext]: ...

    def get_period(self, period_id: int) -> Optional[Period]: ...

    def list_periods(self) -> list[Period]: ...

    def get_targets(self, store_id: int, period_id: int) -> list[TargetRecord]: ...

    def get_sales(self, store_id: int, start: date, end: date) -> list[SaleRecord]: ...
