from __future__ import annotations
from typing import Any, Dict, List, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, Result
from painel_metas.core.config import settings

# -----------------------------------------------------------------------------
# 1) Engine (pool de conexões)
# -----------------------------------------------------------------------------

_engine: Optional[Engine] = None

def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,
            pool_size=5,
            max_overflow=10,
        )
    return _engine

# -----------------------------------------------------------------------------
# 2) Healthcheck (/readyz)
# -----------------------------------------------------------------------------

def health_check() -> Dict[str, Any]:
    eng = get_engine()
    with eng.connect() as conn:
        conn.execute(text("SELECT 1"))
        db = conn.execute(text("SELECT current_database()")).scalar()
        user = conn.execute(text("SELECT current_user")).scalar_one()
        return {
            "ok": True,
            "database": db,
            "user": user,
        }

# -----------------------------------------------------------------------------
# 3) Helpers de consulta (SELECT)
# -----------------------------------------------------------------------------

def fetch_all(sql: str, params: Optional[Dict[str, Any]] = None,
              timeout_ms: Optional[int] = None) -> List[Dict[str, Any]]:
    eng = get_engine()
    with eng.begin() as conn:
        if timeout_ms:
            conn.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))
        result: Result = conn.execute(text(sql), params or {})
        return [dict(r) for r in result.mappings().all()]

def fetch_one(sql: str, params: Optional[Dict[str, Any]] = None,
              timeout_ms: Optional[int] = None) -> Optional[Dict[str, Any]]:
    rows = fetch_all(sql, params=params, timeout_ms=timeout_ms)
    return rows[0] if rows else None
