"""
Repositório de metas e vendas das lojas.
Centraliza todo acesso a dados consumido pelo painel.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional

from painel_metas.infra.db import fetch_all, fetch_one
from painel_metas.domain.models import (
    CategoryTarget,
    Period,
    SaleRecord,
    StoreContext,
    TargetRecord,
)


def _to_period(row: dict) -> Period:
    return Period(
        id=row["id"],
        start_date=row["data_inicio"],
        end_date=row["data_fim"],
        name=row.get("descricao"),
    )


class MetasRepository:
    """
    Repositório para lojas, períodos de meta, metas e vendas.
    Encapsula toda lógica SQL do painel.
    """

    @staticmethod
    def get_store(store_id: int) -> Optional[StoreContext]:
        row = fetch_one(
            "SELECT id, nome, regiao FROM lojas WHERE id = :store_id",
            {"store_id": store_id},
            timeout_ms=2000,
        )
        if row is None:
            return None
        return StoreContext(store_id=row["id"], region=row.get("regiao"), name=row.get("nome"))

    @staticmethod
    def get_period(period_id: int) -> Optional[Period]:
        row = fetch_one(
            """
            SELECT id, descricao, data_inicio, data_fim
            FROM periodos_meta
            WHERE id = :period_id
            """,
            {"period_id": period_id},
            timeout_ms=2000,
        )
        return _to_period(row) if row else None

    @staticmethod
    def list_periods() -> list[Period]:
        rows = fetch_all(
            """
            SELECT id, descricao, data_inicio, data_fim
            FROM periodos_meta
            ORDER BY data_inicio DESC
            """,
            timeout_ms=2000,
        )
        return [_to_period(row) for row in rows]

    @staticmethod
    def get_targets(store_id: int, period_id: int) -> list[TargetRecord]:
        """
        Metas da loja no período, na ordem de cadastro (id).

        Returns:
            Lista de metas com as metas por categoria de cada uma
        """
        targets = fetch_all(
            """
            SELECT id, loja_id, periodo_meta_id, meta_valor_total
            FROM metas_loja
            WHERE loja_id = :store_id AND periodo_meta_id = :period_id
            ORDER BY id
            """,
            {"store_id": store_id, "period_id": period_id},
            timeout_ms=2000,
        )
        if not targets:
            return []

        category_rows = fetch_all(
            """
            SELECT meta_loja_id, categoria, meta_valor
            FROM metas_loja_categorias
            WHERE meta_loja_id = ANY(:target_ids)
            ORDER BY id
            """,
            {"target_ids": [t["id"] for t in targets]},
            timeout_ms=2000,
        )
        by_target: dict[int, list[CategoryTarget]] = defaultdict(list)
        for row in category_rows:
            by_target[row["meta_loja_id"]].append(
                CategoryTarget(category_code=row["categoria"], amount=row["meta_valor"])
            )

        return [
            TargetRecord(
                store_id=t["loja_id"],
                period_id=t["periodo_meta_id"],
                overall_amount=t["meta_valor_total"],
                categories=tuple(by_target.get(t["id"], ())),
            )
            for t in targets
        ]

    @staticmethod
    def get_sales(store_id: int, start: date, end: date) -> list[SaleRecord]:
        """Vendas da loja com ``data_venda`` em [start, end]."""
        rows = fetch_all(
            """
            SELECT categoria, valor_venda, data_venda
            FROM vendas_loja
            WHERE loja_id = :store_id
              AND data_venda >= :start
              AND data_venda <= :end
            ORDER BY data_venda, id
            """,
            {"store_id": store_id, "start": start, "end": end},
            timeout_ms=5000,
        )
        return [
            SaleRecord(
                category_code=row["categoria"],
                amount=row["valor_venda"],
                sale_date=row["data_venda"],
            )
            for row in rows
        ]
