# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de créditos on-chain.

Ajustes clave:
- .env cargado antes de cualquier import que lea configuración
- Logging vía setup_logging (plain en desarrollo, JSON en producción)
- create_all_tables opcional (DB_CREATE_ALL) en el arranque
- Cierre ordenado del cliente HTTP del verificador on-chain
- /health en la raíz; módulos bajo /api

Autor: Equipo Billing
Fecha: 2026-02-03
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# En producción: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

from app.shared.config.config_loader import resolve_env_name

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = resolve_env_name(os.getenv("PYTHON_ENV"))
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.modules.payments.dependencies import close_onchain_verifier
from app.routes import router as main_router
from app.shared.config import get_payments_settings, get_settings
from app.shared.config.logging_config import setup_logging
from app.shared.database import create_all_tables, engine
from app.shared.middleware import JSONExceptionMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    if settings.db_create_all:
        await create_all_tables()

    payments_cfg = get_payments_settings()
    if not payments_cfg.is_configured:
        logger.warning(
            "payments_not_configured receiving_address=%s indexer_url=%s",
            bool(payments_cfg.receiving_address), bool(payments_cfg.onchain_indexer_url),
        )

    logger.info("app_started env=%s version=%s", settings.python_env, settings.app_version)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            await close_onchain_verifier()
            await engine.dispose()
        logger.info("app_stopped")


def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Top-up de créditos con pagos USDC on-chain",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "payments", "description": "Intents y verificación de pagos on-chain"},
            {"name": "billing", "description": "Saldo y ledger de créditos"},
        ],
    )

    # El orden real de ejecución de middlewares en Starlette es inverso al registro.
    # CORS se registra al final para ejecutarse primero (outermost).
    application.add_middleware(JSONExceptionMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    origins = settings.get_cors_origins()
    wildcard = origins == ["*"]
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "OPTIONS"] if not wildcard else ["*"],
        allow_headers=["*"],
        max_age=600,
    )

    application.include_router(main_router)
    return application


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.app_host,
        port=_settings.app_port,
        reload=_settings.is_dev,
    )

# Fin del archivo backend/app/main.py
