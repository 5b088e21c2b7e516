# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/settlement/engine.py

Motor de liquidación de pagos on-chain.

Flujo:
    submit_tx_hash -> liga el hash, CREATED_INTENT -> PENDING_UNVERIFIED y verifica
    get_status     -> evalúa timeouts en lectura y, si procede, re-verifica

Garantías:
- Aislamiento por dueño: un intento ajeno es indistinguible de uno inexistente.
- Exactly-once: el abono se ancla en UNIQUE(billing_account_id, reference)
  del ledger, con reference = "{chain_id}:{tx_hash}".
- Sin locks en proceso: la serialización la dan los UNIQUE de la DB y las
  transiciones condicionales sobre status.
- El verificador es la única I/O externa y corre con timeout; timeout o
  indisponibilidad cuentan como PENDING, nunca como rechazo.

Los servicios solo hacen flush(); el commit es de la ruta. Única excepción:
submit_tx_hash confirma el ligado del hash antes de llamar al verificador,
para no retener el lock de la fila durante la I/O externa.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.billing.credits.enums import LedgerReason
from app.modules.billing.credits.models import CreditLedgerEntry
from app.modules.billing.credits.services import CreditLedgerService
from app.modules.payments.adapters.onchain_verifier import (
    OnChainVerifier,
    VerificationResult,
    VerificationStatus,
    VerifierUnavailableError,
)
from app.modules.payments.enums import (
    PaymentAttemptStatus,
    PaymentErrorCode,
    PaymentEventType,
)
from app.modules.payments.metrics import (
    observe_ledger_settlement,
    observe_terminal_transition,
    observe_verifier_call,
)
from app.modules.payments.models.payment_attempt_models import PaymentAttempt
from app.modules.payments.repositories import (
    PaymentAttemptRepository,
    PaymentEventRepository,
)
from app.modules.payments.utils.clock import Clock

from ..intents.amounts import usd_cents_to_credits
from . import rules
from .errors import (
    InvalidStateTransitionError,
    PaymentNotFoundError,
    TxHashAlreadyBoundError,
)
from .policy import SettlementPolicy

logger = logging.getLogger(__name__)

_S = PaymentAttemptStatus


class SettlementEngine:
    def __init__(
        self,
        *,
        verifier: OnChainVerifier,
        clock: Clock,
        policy: SettlementPolicy,
        ledger: Optional[CreditLedgerService] = None,
        attempt_repo: Optional[PaymentAttemptRepository] = None,
        event_repo: Optional[PaymentEventRepository] = None,
    ):
        self.verifier = verifier
        self.clock = clock
        self.policy = policy
        self.ledger = ledger or CreditLedgerService()
        self.attempts = attempt_repo or PaymentAttemptRepository()
        self.events = event_repo or PaymentEventRepository()

    # ------------------------------------------------------------------
    # Operaciones públicas
    # ------------------------------------------------------------------
    async def submit_tx_hash(
        self,
        session: AsyncSession,
        *,
        attempt_id: uuid.UUID,
        tx_hash: str,
        caller_id: str,
    ) -> PaymentAttempt:
        """
        Liga tx_hash al intento del caller y dispara la verificación.

        Repetir la llamada con el mismo hash equivale a get_status.

        Raises:
            InvalidTxHashError: formato inválido
            PaymentNotFoundError: intento inexistente o ajeno
            TxHashAlreadyBoundError: el hash pertenece a otro intento, o el intento
                (no terminal) ya tiene un hash distinto
        """
        tx_hash = rules.normalize_tx_hash(tx_hash)
        attempt = await self._load_owned(session, attempt_id, caller_id)
        now = self.clock.now()

        bound = await self.attempts.find_by_tx_hash(session, attempt.chain_id, tx_hash)
        if bound is not None and bound.id != attempt.id:
            raise TxHashAlreadyBoundError(attempt.chain_id, tx_hash)

        if rules.is_terminal(attempt.status):
            return attempt

        if attempt.tx_hash is not None:
            if attempt.tx_hash != tx_hash:
                raise TxHashAlreadyBoundError(
                    attempt.chain_id, attempt.tx_hash, attempt_id=attempt.id
                )
            return await self._advance(session, attempt, now)

        if rules.is_intent_expired(attempt.status, attempt.expires_at, now):
            await self._transition(session, attempt, _S.FAILED, PaymentErrorCode.INTENT_EXPIRED, now)
            return attempt

        if not await self.attempts.bind_tx_hash(session, attempt, tx_hash, now):
            if attempt.tx_hash is None:
                raise TxHashAlreadyBoundError(attempt.chain_id, tx_hash)
            if rules.is_terminal(attempt.status):
                return attempt
            if attempt.tx_hash != tx_hash:
                raise TxHashAlreadyBoundError(
                    attempt.chain_id, attempt.tx_hash, attempt_id=attempt.id
                )
            # Otro request ligó el mismo hash al mismo intento
            return await self._advance(session, attempt, now)

        await self.events.record(
            session,
            attempt_id=attempt.id,
            event_type=PaymentEventType.TX_SUBMITTED,
            created_at=now,
            metadata={"tx_hash": tx_hash, "chain_id": attempt.chain_id},
        )
        logger.info(
            "payment_tx_submitted attempt_id=%s chain_id=%d tx_hash=%s",
            attempt.id, attempt.chain_id, tx_hash,
        )

        if not await self._transition(session, attempt, _S.PENDING_UNVERIFIED, None, now):
            return attempt

        await session.commit()
        return await self._verify(session, attempt, now)

    async def get_status(
        self,
        session: AsyncSession,
        *,
        attempt_id: uuid.UUID,
        caller_id: str,
    ) -> PaymentAttempt:
        """
        Estado actual del intento del caller, aplicando timeouts perezosos.

        Raises:
            PaymentNotFoundError: intento inexistente o ajeno
        """
        attempt = await self._load_owned(session, attempt_id, caller_id)
        return await self._advance(session, attempt, self.clock.now())

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------
    async def _load_owned(
        self,
        session: AsyncSession,
        attempt_id: uuid.UUID,
        caller_id: str,
    ) -> PaymentAttempt:
        attempt = await self.attempts.get_owned(session, attempt_id, caller_id)
        if attempt is None:
            raise PaymentNotFoundError(attempt_id)
        return attempt

    async def _advance(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        now: datetime,
    ) -> PaymentAttempt:
        status = attempt.status_enum

        if status.is_terminal:
            return attempt

        if status == _S.CREATED:
            if rules.is_intent_expired(status, attempt.expires_at, now):
                await self._transition(session, attempt, _S.FAILED, PaymentErrorCode.INTENT_EXPIRED, now)
            return attempt

        if rules.is_receipt_timed_out(status, attempt.submitted_at, now, self.policy.receipt_timeout):
            await self._transition(session, attempt, _S.FAILED, PaymentErrorCode.RECEIPT_NOT_FOUND, now)
            return attempt

        if rules.should_throttle_verification(
            attempt.last_verify_attempt_at, now, self.policy.verify_throttle
        ):
            logger.debug("payment_verify_throttled attempt_id=%s", attempt.id)
            return attempt

        return await self._verify(session, attempt, now)

    async def _call_verifier(self, attempt: PaymentAttempt) -> tuple[VerificationResult, str]:
        start = time.perf_counter()
        try:
            result = await asyncio.wait_for(
                self.verifier.verify(attempt.chain_id, attempt.tx_hash),
                timeout=self.policy.verifier_timeout_seconds,
            )
            outcome = result.status.lower()
        except asyncio.TimeoutError:
            logger.warning(
                "payment_verifier_timeout attempt_id=%s timeout_s=%.1f",
                attempt.id, self.policy.verifier_timeout_seconds,
            )
            result, outcome = VerificationResult.pending(), "timeout"
        except VerifierUnavailableError as e:
            logger.warning("payment_verifier_unavailable attempt_id=%s error=%s", attempt.id, e)
            result, outcome = VerificationResult.pending(), "unavailable"

        observe_verifier_call(outcome, time.perf_counter() - start)
        return result, outcome

    async def _verify(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        now: datetime,
    ) -> PaymentAttempt:
        result, outcome = await self._call_verifier(attempt)

        attempt.verify_attempt_count = (attempt.verify_attempt_count or 0) + 1
        attempt.last_verify_attempt_at = now
        attempt.updated_at = now
        if result.confirmations is not None:
            attempt.confirmations = result.confirmations
        await self.events.record(
            session,
            attempt_id=attempt.id,
            event_type=PaymentEventType.VERIFICATION_ATTEMPTED,
            created_at=now,
            error_code=result.error_code,
            metadata={"outcome": outcome, "confirmations": result.confirmations},
        )

        if result.status == VerificationStatus.REJECTED:
            code = PaymentErrorCode.from_verifier(result.error_code)
            await self._transition(session, attempt, _S.REJECTED, code, now)
            return attempt

        if result.status != VerificationStatus.VERIFIED:
            return attempt

        mismatch = rules.find_transfer_mismatch(
            expected_from=attempt.from_address,
            expected_token=attempt.token,
            expected_to=attempt.recipient_address,
            expected_amount_raw=attempt.amount_raw,
            result=result,
        )
        if mismatch is not None:
            await self._transition(
                session, attempt, _S.REJECTED, mismatch, now,
                metadata={
                    "actual_from": result.actual_from,
                    "actual_to": result.actual_to,
                    "actual_token": result.actual_token,
                    "actual_amount": str(result.actual_amount) if result.actual_amount is not None else None,
                },
            )
            return attempt

        if (result.confirmations or 0) < self.policy.min_confirmations:
            logger.info(
                "payment_awaiting_confirmations attempt_id=%s confirmations=%s required=%d",
                attempt.id, result.confirmations, self.policy.min_confirmations,
            )
            return attempt

        await self._credit(session, attempt, now)
        return attempt

    async def _credit(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        now: datetime,
    ) -> None:
        credits = usd_cents_to_credits(attempt.amount_usd_cents, self.policy.credits_per_cent)
        reference = attempt.ledger_reference

        async def _mark_credited(entry: CreditLedgerEntry) -> None:
            applied = await self._transition(
                session, attempt, _S.CREDITED, None, now,
                metadata={"ledger_entry_id": entry.id, "credits": credits},
            )
            if not applied:
                raise InvalidStateTransitionError(attempt.status, _S.CREDITED.value)

        try:
            result = await self.ledger.settle(
                session,
                billing_account_id=attempt.billing_account_id,
                reference=reference,
                amount=credits,
                reason=LedgerReason.ON_CHAIN_PAYMENT,
                entry_metadata={
                    "attempt_id": str(attempt.id),
                    "chain_id": attempt.chain_id,
                    "tx_hash": attempt.tx_hash,
                    "amount_usd_cents": attempt.amount_usd_cents,
                    "amount_raw": str(attempt.amount_raw),
                },
                on_settled=_mark_credited,
            )
        except InvalidStateTransitionError as e:
            # Otro request movió el intento; el SAVEPOINT deshizo el abono
            await session.refresh(attempt)
            logger.warning(
                "payment_credit_skipped attempt_id=%s status=%s reason=%s",
                attempt.id, attempt.status, e,
            )
            return

        observe_ledger_settlement(result.result, credits)

        if result.created:
            logger.info(
                "payment_attempt_credited attempt_id=%s account_id=%s credits=%d balance_after=%d ref=%s",
                attempt.id, attempt.billing_account_id, credits, result.balance_after, reference,
            )
            return

        # El abono ya existía: el intento debe reflejarlo
        await session.refresh(attempt)
        if not rules.is_terminal(attempt.status):
            await self._transition(
                session, attempt, _S.CREDITED, None, now,
                metadata={"ledger_entry_id": result.entry_id, "credits": result.amount},
            )
        logger.info(
            "payment_attempt_already_credited attempt_id=%s ref=%s balance_after=%d",
            attempt.id, reference, result.balance_after,
        )

    async def _transition(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        to_status: PaymentAttemptStatus,
        error_code: Optional[PaymentErrorCode],
        now: datetime,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ) -> bool:
        """
        Valida con las reglas y aplica la transición de forma condicional.

        Returns:
            False si otro request movió el intento primero.
        """
        from_status = attempt.status_enum
        rules.ensure_transition(from_status, to_status)

        code = error_code.value if error_code is not None else None
        applied = await self.attempts.transition_status(
            session,
            attempt,
            from_status=from_status.value,
            to_status=to_status.value,
            error_code=code,
            now=now,
        )
        if not applied:
            logger.info(
                "payment_transition_lost attempt_id=%s expected=%s current=%s",
                attempt.id, from_status.value, attempt.status,
            )
            return False

        await self.events.record(
            session,
            attempt_id=attempt.id,
            event_type=PaymentEventType.STATUS_CHANGED,
            from_status=from_status.value,
            to_status=to_status.value,
            error_code=code,
            created_at=now,
            metadata=metadata,
        )
        if to_status.is_terminal:
            observe_terminal_transition(to_status.value, code)

        logger.info(
            "payment_attempt_transition attempt_id=%s from=%s to=%s error_code=%s",
            attempt.id, from_status.value, to_status.value, code,
        )
        return True


__all__ = ["SettlementEngine"]
# Fin del archivo backend/app/modules/payments/facades/settlement/engine.py
