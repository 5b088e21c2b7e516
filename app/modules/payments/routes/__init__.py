# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /payments/intents
- /payments/attempts/{attempt_id}/submit
- /payments/attempts/{attempt_id}
- /payments/metrics/prometheus
"""

from fastapi import APIRouter

from .attempts import router as attempts_router
from .metrics import router as metrics_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(attempts_router, prefix="/payments")
router.include_router(metrics_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
