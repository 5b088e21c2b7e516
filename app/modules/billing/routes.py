# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/routes.py

Rutas de billing para el ledger de créditos.

Endpoints:
- GET /api/billing/ledger (auth requerido)

Autor: Equipo Billing
Fecha: 2025-12-29 (ledger on-chain 2026-02-03)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user_id
from app.shared.database.database import get_async_session

from .credits.services import CreditLedgerService
from .schemas import LedgerEntryOut, LedgerSummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/billing",
    tags=["billing"],
)


@router.get(
    "/ledger",
    response_model=LedgerSummaryResponse,
    summary="Saldo y movimientos de créditos",
    description="Saldo actual del caller y su ledger paginado (más recientes primero).",
)
async def get_ledger(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
) -> LedgerSummaryResponse:
    summary = await CreditLedgerService().get_ledger_summary_for_owner(
        session, user_id, limit=limit, offset=offset
    )
    logger.debug(
        "ledger_summary_read owner_id=%s balance=%d entries=%d",
        user_id, summary.balance_credits, len(summary.entries),
    )
    return LedgerSummaryResponse(
        balance_credits=summary.balance_credits,
        entries=[LedgerEntryOut.model_validate(e) for e in summary.entries],
        total=summary.total_entries,
        limit=limit,
        offset=offset,
    )


__all__ = ["router"]
# Fin del archivo backend/app/modules/billing/routes.py
