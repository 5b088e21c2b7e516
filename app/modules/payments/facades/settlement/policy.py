# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/settlement/policy.py

Política de pagos on-chain resuelta desde PaymentsSettings.

Umbral de confirmaciones y ventanas de timeout son configurables; el motor
y el gestor de intents solo leen esta estructura inmutable.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from app.shared.config.settings_payments import PaymentsSettings

from .errors import PaymentsNotConfiguredError


@dataclass(frozen=True)
class SettlementPolicy:
    chain_id: int
    token_address: str
    receiving_address: str
    raw_units_per_cent: int = 10_000
    credits_per_cent: int = 10
    min_payment_amount_cents: int = 100
    max_payment_amount_cents: int = 1_000_000
    min_confirmations: int = 5
    intent_ttl: timedelta = timedelta(minutes=30)
    receipt_timeout: timedelta = timedelta(hours=24)
    verifier_timeout_seconds: float = 5.0
    verify_throttle: timedelta = timedelta(seconds=10)

    @classmethod
    def from_settings(cls, settings: PaymentsSettings) -> "SettlementPolicy":
        """
        Raises:
            PaymentsNotConfiguredError: sin dirección receptora
        """
        if not settings.receiving_address:
            raise PaymentsNotConfiguredError("RECEIVING_ADDRESS")

        return cls(
            chain_id=settings.chain_id,
            token_address=settings.token_address,
            receiving_address=settings.receiving_address,
            raw_units_per_cent=settings.raw_units_per_cent,
            credits_per_cent=settings.credits_per_cent,
            min_payment_amount_cents=settings.min_payment_amount_cents,
            max_payment_amount_cents=settings.max_payment_amount_cents,
            min_confirmations=settings.min_confirmations,
            intent_ttl=timedelta(minutes=settings.intent_ttl_minutes),
            receipt_timeout=timedelta(hours=settings.receipt_timeout_hours),
            verifier_timeout_seconds=settings.verifier_timeout_seconds,
            verify_throttle=timedelta(seconds=settings.verify_throttle_seconds),
        )


__all__ = ["SettlementPolicy"]
# Fin del archivo backend/app/modules/payments/facades/settlement/policy.py
