import os

os.environ.setdefault("JWT_SECRET", "test-secret-with-at-least-32-characters!!")
os.environ.setdefault("TIMEZONE", "America/Sao_Paulo")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import date
from decimal import Decimal

import pytest

from painel_metas.domain.models import (
    CategoryTarget,
    Period,
    SaleRecord,
    StoreContext,
    TargetRecord,
)


class FakeRepository:
    """Provedor de dados em memória com a mesma semântica de datas do SQL."""

    def __init__(self, stores=(), periods=(), targets=(), sales=None):
        self.stores = {s.store_id: s for s in stores}
        self.periods = {p.id: p for p in periods}
        self.targets = list(targets)
        self.sales = dict(sales or {})
        self.sales_queries = []

    def get_store(self, store_id):
        return self.stores.get(store_id)

    def get_period(self, period_id):
        return self.periods.get(period_id)

    def list_periods(self):
        return sorted(self.periods.values(), key=lambda p: p.start_date, reverse=True)

    def get_targets(self, store_id, period_id):
        return [t for t in self.targets if t.store_id == store_id and t.period_id == period_id]

    def get_sales(self, store_id, start, end):
        self.sales_queries.append((store_id, start, end))
        return [s for s in self.sales.get(store_id, []) if start <= s.sale_date <= end]


JANUARY = Period(id=1, start_date=date(2025, 1, 1), end_date=date(2025, 1, 31), name="Janeiro 2025")


@pytest.fixture
def january():
    return JANUARY


@pytest.fixture
def fake_repository():
    sales = {
        10: [
            SaleRecord("geral", Decimal("300.00"), date(2025, 1, 8)),
            SaleRecord("geral", Decimal("100.00"), date(2025, 1, 9)),
            SaleRecord("geral", Decimal("70.00"), date(2025, 1, 10)),
            SaleRecord("rentaveis20", Decimal("40.00"), date(2025, 1, 9)),
            SaleRecord("rentaveis25", Decimal("15.00"), date(2025, 1, 10)),
            SaleRecord("brinquedo", Decimal("12.50"), date(2025, 1, 10)),
            SaleRecord("desconhecida", Decimal("999.00"), date(2025, 1, 10)),
            # fora do período
            SaleRecord("geral", Decimal("5000.00"), date(2024, 12, 31)),
        ],
    }
    return FakeRepository(
        stores=[
            StoreContext(store_id=10, region="norte", name="Loja Norte"),
            StoreContext(store_id=20, region="centro", name="Loja Centro"),
        ],
        periods=[JANUARY],
        targets=[
            TargetRecord(
                store_id=10,
                period_id=1,
                overall_amount=Decimal("9200.00"),
                categories=(
                    CategoryTarget("r_mais", Decimal("2240.00")),
                    CategoryTarget("saude", Decimal("0")),
                ),
            ),
        ],
        sales=sales,
    )
