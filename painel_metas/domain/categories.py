"""
Categorias lógicas de meta e reconciliação dos códigos brutos.

Vários códigos de categoria gravados nas vendas e nas metas colapsam numa
mesma categoria lógica. A tabela ``CATEGORY_ALIASES`` é fechada e exaustiva:
um código fora dela não pertence a nenhuma categoria.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class LogicalCategory(str, Enum):
    """Categorias do painel, na ordem em que são exibidas."""

    GENERAL = "geral"
    PROFITABLE = "rentavel"
    PERFUMERY_PLUS = "perfumaria"
    CONVENIENCE_PLUS = "conveniencia"
    HEALTH = "goodlife"

    @property
    def label(self) -> str:
        return CATEGORY_TITLES[self]


CATEGORY_TITLES: Mapping[LogicalCategory, str] = MappingProxyType({
    LogicalCategory.GENERAL: "Geral",
    LogicalCategory.PROFITABLE: "Rentáveis",
    LogicalCategory.PERFUMERY_PLUS: "Perfumaria R+",
    LogicalCategory.CONVENIENCE_PLUS: "Conveniência R+",
    LogicalCategory.HEALTH: "GoodLife",
})

CATEGORY_ALIASES: Mapping[LogicalCategory, tuple[str, ...]] = MappingProxyType({
    LogicalCategory.GENERAL: ("geral",),
    LogicalCategory.PROFITABLE: ("r_mais", "rentaveis20", "rentaveis25"),
    LogicalCategory.PERFUMERY_PLUS: ("perfumaria_r_mais",),
    LogicalCategory.CONVENIENCE_PLUS: ("conveniencia_r_mais", "conveniencia", "brinquedo"),
    LogicalCategory.HEALTH: ("saude", "goodlife"),
})


def _build_lookup() -> Mapping[str, LogicalCategory]:
    lookup: dict[str, LogicalCategory] = {}
    for category, codes in CATEGORY_ALIASES.items():
        for code in codes:
            if code in lookup:
                raise ValueError(
                    f"Código '{code}' mapeado para {lookup[code].name} e {category.name}"
                )
            lookup[code] = category
    return MappingProxyType(lookup)


# código bruto -> categoria lógica
CODE_TO_CATEGORY: Mapping[str, LogicalCategory] = _build_lookup()


def reconcile_category(code: Optional[str]) -> Optional[LogicalCategory]:
    """
    Mapeia um código bruto de categoria para sua categoria lógica.

    A comparação é exata (sem normalizar caixa ou espaços), como os códigos
    são gravados pelo sistema de vendas. Retorna ``None`` para códigos
    desconhecidos, vazios ou ausentes.
    """
    if not code:
        return None
    return CODE_TO_CATEGORY.get(code)
