# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/dependencies.py

Dependencias FastAPI del flujo de pago on-chain.

- get_clock: reloj del sistema (los tests lo sustituyen por uno fijo)
- get_payments_policy: SettlementPolicy desde PaymentsSettings
- get_onchain_verifier: adaptador HTTP del indexador (singleton de proceso)
- get_settlement_engine / get_intent_manager: fachadas armadas por request

Sin configuración de pagos las rutas responden 503 payments_not_ready.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status

from app.shared.config import get_payments_settings

from .adapters import IndexerOnChainVerifier, OnChainVerifier
from .facades.intents import PaymentIntentManager
from .facades.settlement import PaymentsNotConfiguredError, SettlementPolicy
from .facades.settlement.engine import SettlementEngine
from .utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

_verifier: Optional[IndexerOnChainVerifier] = None


def _not_ready(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={"error": "payments_not_ready", "message": message},
    )


def get_clock() -> Clock:
    return SystemClock()


def get_payments_policy() -> SettlementPolicy:
    try:
        return SettlementPolicy.from_settings(get_payments_settings())
    except PaymentsNotConfiguredError as e:
        logger.error("payments_not_configured missing=%s", e.missing)
        raise _not_ready(str(e)) from e


def get_onchain_verifier() -> OnChainVerifier:
    global _verifier
    if _verifier is None:
        cfg = get_payments_settings()
        if not cfg.onchain_indexer_url:
            logger.error("payments_not_configured missing=ONCHAIN_INDEXER_URL")
            raise _not_ready("On-chain verifier is not configured")
        api_key = cfg.onchain_indexer_api_key.get_secret_value() if cfg.onchain_indexer_api_key else None
        _verifier = IndexerOnChainVerifier(
            cfg.onchain_indexer_url,
            api_key=api_key,
            timeout=cfg.verifier_timeout_seconds,
        )
        logger.info("onchain_verifier_ready base_url=%s", cfg.onchain_indexer_url)
    return _verifier


async def close_onchain_verifier() -> None:
    """Cierra el cliente HTTP del verificador (shutdown de la app)."""
    global _verifier
    if _verifier is not None:
        await _verifier.aclose()
        _verifier = None


def get_settlement_engine(
    verifier: OnChainVerifier = Depends(get_onchain_verifier),
    clock: Clock = Depends(get_clock),
    policy: SettlementPolicy = Depends(get_payments_policy),
) -> SettlementEngine:
    return SettlementEngine(verifier=verifier, clock=clock, policy=policy)


def get_intent_manager(
    clock: Clock = Depends(get_clock),
    policy: SettlementPolicy = Depends(get_payments_policy),
) -> PaymentIntentManager:
    return PaymentIntentManager(policy=policy, clock=clock)


__all__ = [
    "get_clock",
    "get_payments_policy",
    "get_onchain_verifier",
    "close_onchain_verifier",
    "get_settlement_engine",
    "get_intent_manager",
]
# Fin del archivo backend/app/modules/payments/dependencies.py
