# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/__init__.py

Módulo de billing: saldo de créditos y ledger append-only.

Exporta el router:
- /api/billing/ledger

Autor: Equipo Billing
Fecha: 2025-12-29
"""

from fastapi import APIRouter

from .routes import router as billing_router

router = APIRouter(tags=["billing"])
router.include_router(billing_router)

__all__ = ["router"]
# Fin del archivo backend/app/modules/billing/__init__.py
