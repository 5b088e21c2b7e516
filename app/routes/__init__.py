# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores.

Responsabilidades:
- Incluir el router de health (/health).
- Incluir la capa /api definida en master_routes.py.
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from .master_routes import api

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
