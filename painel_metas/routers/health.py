from fastapi import APIRouter
from fastapi.responses import JSONResponse

from painel_metas.core.logging import api_logger
from painel_metas.infra.db import health_check

router = APIRouter(tags=["health"])

@router.get("/healthz")
def healthz():
    return {"status": "ok"}

@router.get("/readyz")
def readyz():
    try:
        return {"status": "ready", "database": health_check()}
    except Exception as exc:
        api_logger.error("Readiness check falhou", exc=exc)
        return JSONResponse(status_code=503, content={"status": "not ready", "error": str(exc)})
