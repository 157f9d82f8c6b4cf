"""
Repositórios para acesso a dados.
Implementam o provedor de dados do painel sobre o banco.
"""

from .metas_repository import MetasRepository
from .protocols import DashboardRepositoryProtocol

__all__ = [
    "DashboardRepositoryProtocol",
    "MetasRepository",
]
