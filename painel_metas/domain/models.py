"""
Modelos de domínio do painel de metas.
Objetos de valor imutáveis, independentes de infraestrutura.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

from painel_metas.domain.categories import LogicalCategory


class MetricStatus(str, Enum):
    """Situação da categoria frente à meta diária."""

    PENDING = "pendente"
    REACHED = "atingido"
    EXCEEDED = "acima"


@dataclass(frozen=True)
class Period:
    """Período de metas com datas inclusivas."""

    id: int
    start_date: date
    end_date: date
    name: Optional[str] = None


@dataclass(frozen=True)
class StoreContext:
    """Loja e sua região (texto livre)."""

    store_id: int
    region: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class CategoryTarget:
    """Meta de uma categoria bruta dentro da meta da loja."""

    category_code: Optional[str]
    amount: Any


@dataclass(frozen=True)
class TargetRecord:
    """Meta da loja no período: valor total e metas por categoria."""

    store_id: int
    period_id: int
    overall_amount: Any
    categories: Sequence[CategoryTarget] = field(default_factory=tuple)


@dataclass(frozen=True)
class SaleRecord:
    """Venda lançada para a loja, com código de categoria bruto."""

    category_code: Optional[str]
    amount: Any
    sale_date: date


@dataclass(frozen=True)
class MetricInputs:
    """
    Fotografia de tudo que o motor precisa para uma loja e um período.

    Os três conjuntos de vendas chegam já recortados pelo provedor de dados:
    o período inteiro, do início do período até ontem, e somente hoje.
    """

    store: StoreContext
    period: Period
    today: date
    targets: Sequence[TargetRecord] = ()
    period_sales: Sequence[SaleRecord] = ()
    sales_up_to_yesterday: Sequence[SaleRecord] = ()
    sales_today: Sequence[SaleRecord] = ()


@dataclass(frozen=True)
class MetricResult:
    """Resultado do painel para uma categoria lógica."""

    category: LogicalCategory
    sold_today: Decimal
    sold_period: Decimal
    target: Decimal
    daily_target: Decimal
    shortfall_today: Decimal
    remaining_days: int
    status: MetricStatus

    @property
    def title(self) -> str:
        return self.category.label

    @property
    def slug(self) -> str:
        return self.category.value
