# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/schemas.py

Esquemas Pydantic para el módulo de billing (ledger de créditos).

Autor: Equipo Billing
Fecha: 2025-12-29 (ledger on-chain 2026-02-03)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LedgerEntryOut(BaseModel):
    """Movimiento del ledger tal como lo ve el dueño."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: int = Field(description="Créditos con signo (+abono, -cargo).")
    balance_after: int = Field(description="Saldo tras aplicar el movimiento.")
    reason: str = Field(description="on_chain_payment | llm_usage")
    reference: str = Field(description="Para pagos: '{chain_id}:{tx_hash}'.")
    metadata: Optional[dict[str, Any]] = Field(
        default=None,
        validation_alias="entry_metadata",
    )
    created_at: datetime


class LedgerSummaryResponse(BaseModel):
    """Saldo actual y página de movimientos (más recientes primero)."""

    balance_credits: int
    entries: List[LedgerEntryOut]
    total: int = Field(description="Total de movimientos de la cuenta.")
    limit: int
    offset: int


__all__ = [
    "LedgerEntryOut",
    "LedgerSummaryResponse",
]
# Fin del archivo backend/app/modules/billing/schemas.py
