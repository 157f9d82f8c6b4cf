from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from painel_metas import __version__
from painel_metas.core.config import settings
from painel_metas.core.logging import api_logger, app_logger, init_app_logging
from painel_metas.routers import dashboard, health


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_logger.info("Iniciando aplicação", env=settings.ENV, timezone=settings.TIMEZONE)
    yield
    app_logger.info("Encerrando aplicação")


def create_app() -> FastAPI:
    init_app_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS (origens permitidas vêm do .env -> settings.CORS_ORIGINS)
    # -------------------------------------------------------------------------
    allowed_origins = settings.CORS_ORIGINS_LIST or [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["ETag"],
    )
    app_logger.info("CORS configurado", origins=allowed_origins)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        api_logger.info(
            "Request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        api_logger.error("Erro interno", exc=exc, path=request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Erro interno do servidor"})

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------
    app.include_router(health.router)
    app.include_router(dashboard.router)

    @app.get("/")
    def root():
        return {
            "name": settings.APP_NAME,
            "env": settings.ENV,
            "docs": "/docs",
            "healthz": "/healthz",
            "readyz": "/readyz",
        }

    return app


# Instância global para uvicorn: `uvicorn painel_metas.main:app --reload`
app = create_app()
