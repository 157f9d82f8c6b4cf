"""Erros de domínio levantados pela camada de serviço."""

from __future__ import annotations


class DashboardError(RuntimeError):
    """Erro base do painel de metas."""


class StoreNotFoundError(DashboardError, LookupError):
    def __init__(self, store_id: int):
        super().__init__(f"Loja {store_id} não encontrada.")
        self.store_id = store_id


class PeriodNotFoundError(DashboardError, LookupError):
    def __init__(self, period_id: int):
        super().__init__(f"Período de meta {period_id} não encontrado.")
        self.period_id = period_id
