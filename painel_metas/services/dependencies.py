"""FastAPI dependency providers for service layer."""

from painel_metas.repositories.metas_repository import MetasRepository
from painel_metas.services.dashboard_service import DashboardService


def get_dashboard_service() -> DashboardService:
    return DashboardService(MetasRepository())
