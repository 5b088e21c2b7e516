# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from fastapi import APIRouter

from app.modules.payments.metrics import prometheus_ping
from app.modules.payments.utils.datetime_helpers import to_iso8601, utcnow
from app.shared.config import get_payments_settings, get_settings
from app.shared.database import check_database_health

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del backend",
    description=(
        "Estado básico del servicio: conectividad a la base de datos y "
        "configuración de pagos on-chain."
    ),
)
async def health_check() -> dict:
    settings = get_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": to_iso8601(utcnow()),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "payments": {
            "configured": get_payments_settings().is_configured,
            "metrics": prometheus_ping()["status"],
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
