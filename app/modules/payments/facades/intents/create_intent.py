# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/intents/create_intent.py

Gestor de intents de pago on-chain.

Un intent fija lo que el caller promete pagar: red, token, dirección
receptora y monto exacto en unidades mínimas. Se persiste como un
PaymentAttempt CREATED_INTENT con expires_at; no escribe en el ledger.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.billing.credits.repositories import BillingAccountRepository
from app.modules.payments.enums import PaymentAttemptStatus, PaymentEventType
from app.modules.payments.metrics import observe_intent_created
from app.modules.payments.repositories import (
    PaymentAttemptRepository,
    PaymentEventRepository,
)
from app.modules.payments.utils.clock import Clock

from ..settlement.policy import SettlementPolicy
from ..settlement.rules import normalize_address
from .amounts import usd_cents_to_raw, validate_amount_cents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentIntent:
    attempt_id: uuid.UUID
    chain_id: int
    token: str
    recipient_address: str
    from_address: str
    amount_usd_cents: int
    amount_raw: int
    expires_at: datetime


class PaymentIntentManager:
    def __init__(
        self,
        *,
        policy: SettlementPolicy,
        clock: Clock,
        account_repo: Optional[BillingAccountRepository] = None,
        attempt_repo: Optional[PaymentAttemptRepository] = None,
        event_repo: Optional[PaymentEventRepository] = None,
    ):
        self.policy = policy
        self.clock = clock
        self.accounts = account_repo or BillingAccountRepository()
        self.attempts = attempt_repo or PaymentAttemptRepository()
        self.events = event_repo or PaymentEventRepository()

    async def create_intent(
        self,
        session: AsyncSession,
        *,
        billing_account_id: uuid.UUID,
        amount_usd_cents: int,
        from_address: str,
    ) -> PaymentIntent:
        """
        Crea un intent para la cuenta dada.

        Raises:
            InvalidPaymentAmountError: monto no entero, no positivo o fuera de límites
            InvalidWalletAddressError: from_address mal formada
        """
        cents = validate_amount_cents(
            amount_usd_cents,
            min_cents=self.policy.min_payment_amount_cents,
            max_cents=self.policy.max_payment_amount_cents,
        )
        sender = normalize_address(from_address)
        amount_raw = usd_cents_to_raw(cents, self.policy.raw_units_per_cent)

        now = self.clock.now()
        expires_at = now + self.policy.intent_ttl

        attempt = await self.attempts.create(
            session,
            billing_account_id=billing_account_id,
            from_address=sender,
            chain_id=self.policy.chain_id,
            token=self.policy.token_address,
            recipient_address=self.policy.receiving_address,
            amount_usd_cents=cents,
            amount_raw=amount_raw,
            status=PaymentAttemptStatus.CREATED.value,
            expires_at=expires_at,
            verify_attempt_count=0,
            created_at=now,
            updated_at=now,
        )
        await self.events.record(
            session,
            attempt_id=attempt.id,
            event_type=PaymentEventType.INTENT_CREATED,
            to_status=PaymentAttemptStatus.CREATED.value,
            created_at=now,
            metadata={"amount_usd_cents": cents, "amount_raw": str(amount_raw)},
        )

        observe_intent_created(self.policy.chain_id)
        logger.info(
            "payment_intent_created attempt_id=%s account_id=%s cents=%d raw=%d chain_id=%d",
            attempt.id, billing_account_id, cents, amount_raw, self.policy.chain_id,
        )

        return PaymentIntent(
            attempt_id=attempt.id,
            chain_id=attempt.chain_id,
            token=attempt.token,
            recipient_address=attempt.recipient_address,
            from_address=attempt.from_address,
            amount_usd_cents=cents,
            amount_raw=amount_raw,
            expires_at=expires_at,
        )

    async def create_intent_for_owner(
        self,
        session: AsyncSession,
        *,
        owner_id: str,
        amount_usd_cents: int,
        from_address: str,
    ) -> PaymentIntent:
        """Resuelve (o crea) la cuenta del caller y crea el intent."""
        # Validar antes de crear la cuenta: un monto inválido no deja rastro
        validate_amount_cents(
            amount_usd_cents,
            min_cents=self.policy.min_payment_amount_cents,
            max_cents=self.policy.max_payment_amount_cents,
        )
        normalize_address(from_address)

        account, _ = await self.accounts.get_or_create_for_owner(session, owner_id)
        return await self.create_intent(
            session,
            billing_account_id=account.id,
            amount_usd_cents=amount_usd_cents,
            from_address=from_address,
        )


__all__ = ["PaymentIntent", "PaymentIntentManager"]
# Fin del archivo backend/app/modules/payments/facades/intents/create_intent.py
