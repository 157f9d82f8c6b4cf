"""Dashboard endpoints: métricas de meta por categoria e períodos disponíveis."""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel

from painel_metas.core.cache import etag_json
from painel_metas.core.security import AccessClaims, require_roles
from painel_metas.domain.errors import PeriodNotFoundError, StoreNotFoundError
from painel_metas.domain.models import MetricResult
from painel_metas.services.dashboard_service import DashboardService
from painel_metas.services.dependencies import get_dashboard_service
from painel_metas.services.formatting import display_fields


router = APIRouter(prefix="/dashboard", tags=["dashboard"])

_READ_ROLES = ("viewer", "manager", "admin")


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------


class PeriodRow(BaseModel):
    id: int
    name: Optional[str] = None
    start_date: date
    end_date: date


class MetricDisplay(BaseModel):
    """Valores já formatados (``R$ 70,00``)."""
    today_sales: str
    period_sales: str
    target: str
    daily_target: str
    missing_today: str


class MetricRow(BaseModel):
    category: str
    title: str
    today_sales: float
    period_sales: float
    target: float
    daily_target: float
    missing_today: float
    remaining_days: int
    status: str
    display: MetricDisplay


class DashboardResponse(BaseModel):
    store_id: int
    period_id: int
    today: date
    remaining_days: int
    metrics: list[MetricRow]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _parse_today(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Data inválida: {value}. Use YYYY-MM-DD.") from exc


def _resolve_store(store_id: Optional[int], user: AccessClaims) -> int:
    """Loja pedida ou, na falta dela, a loja do usuário."""
    effective = store_id if store_id is not None else user.store_id
    if effective is None:
        raise HTTPException(status_code=400, detail="Informe store_id: usuário sem loja vinculada.")
    if not user.can_access_store(effective):
        raise HTTPException(status_code=403, detail="Loja não autorizada para este usuário.")
    return effective


def _metric_row(result: MetricResult) -> MetricRow:
    return MetricRow(
        category=result.slug,
        title=result.title,
        today_sales=float(result.sold_today),
        period_sales=float(result.sold_period),
        target=float(result.target),
        daily_target=float(result.daily_target),
        missing_today=float(result.shortfall_today),
        remaining_days=result.remaining_days,
        status=result.status.value,
        display=MetricDisplay(**display_fields(result)),
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.get("/periods", response_model=list[PeriodRow])
def get_periods(
    _: AccessClaims = Depends(require_roles(*_READ_ROLES)),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Períodos de meta disponíveis para seleção."""
    return [
        PeriodRow(id=p.id, name=p.name, start_date=p.start_date, end_date=p.end_date)
        for p in service.list_periods()
    ]


@router.get("/metrics", response_model=DashboardResponse)
def get_dashboard_metrics(
    request: Request,
    period_id: int = Query(..., description="ID do período de meta"),
    store_id: Optional[int] = Query(None, description="ID da loja (default: loja do usuário)"),
    today: Optional[str] = Query(None, description="Data de referência (YYYY-MM-DD). Default: hoje no fuso configurado"),
    user: AccessClaims = Depends(require_roles(*_READ_ROLES)),
    service: DashboardService = Depends(get_dashboard_service),
) -> Response:
    """Meta diária, faltante e status de cada categoria da loja no período."""
    effective_store = _resolve_store(store_id, user)
    reference_day = _parse_today(today)

    try:
        report = service.get_metrics(effective_store, period_id, today=reference_day)
    except (StoreNotFoundError, PeriodNotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    payload = DashboardResponse(
        store_id=report.store.store_id,
        period_id=report.period.id,
        today=report.today,
        remaining_days=report.remaining_days,
        metrics=[_metric_row(m) for m in report.metrics],
    )
    return etag_json(request, payload.model_dump(mode="json"))
