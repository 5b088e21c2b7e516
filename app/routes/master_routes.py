# -*- coding: utf-8 -*-
"""
backend/app/routes/master_routes.py

Router maestro de la API.

Capas:
  - /api/... : billing (ledger) y payments (intents, attempts, métricas)

Autor: Equipo Billing
Fecha: 2026-02-03
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from app.modules.billing import router as billing_router
from app.modules.payments.routes import router as payments_router

logger = logging.getLogger(__name__)

api = APIRouter(prefix="/api")

_loaded: list[str] = []  # trazabilidad/debug


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y registra trazabilidad en logs."""
    target.include_router(router)
    _loaded.append(f"{target.prefix or '/'}:{name}")
    logger.debug("router_mounted name=%s prefix=%s", name, target.prefix or "/")


_include(api, billing_router, "billing")
_include(api, payments_router, "payments")


def loaded_routers() -> list[str]:
    return list(_loaded)


__all__ = ["api", "loaded_routers"]
# Fin del archivo backend/app/routes/master_routes.py
