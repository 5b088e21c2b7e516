# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/enums.py

Enums para el ledger de créditos.

Autor: Equipo Billing
Fecha: 2025-12-30 (pagos on-chain 2026-02-03)
"""

from enum import Enum


class LedgerReason(str, Enum):
    """
    Motivo de un movimiento en el ledger.

    Se persiste como texto (valor del enum), no como ENUM de PostgreSQL.
    """
    ON_CHAIN_PAYMENT = "on_chain_payment"  # Abono por pago USDC confirmado
    LLM_USAGE = "llm_usage"                # Cargo por consumo


__all__ = [
    "LedgerReason",
]
# Fin del archivo backend/app/modules/billing/credits/enums.py
