# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/services.py

Servicio del ledger de créditos.

Provee:
- settle: abono/cargo exactly-once anclado en UNIQUE(billing_account_id, reference)
- charge_usage: cargo por consumo sin permitir saldo negativo
- get_ledger_summary: saldo + movimientos paginados

Todo ocurre dentro de un SAVEPOINT de la sesión del caller: el UPDATE
atómico del saldo, el INSERT del movimiento y el hook transaccional del
caller se confirman o se deshacen juntos. El commit final es de la ruta.

Autor: Equipo Billing
Fecha: 2025-12-30 (pagos on-chain 2026-02-03)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Literal, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .enums import LedgerReason
from .errors import BillingAccountNotFoundError, InsufficientCreditsError
from .models import CreditLedgerEntry
from .repositories import BillingAccountRepository, CreditLedgerRepository

logger = logging.getLogger(__name__)

SettledHook = Callable[[CreditLedgerEntry], Awaitable[None]]


@dataclass(frozen=True)
class SettlementResult:
    """Resultado de settle."""
    entry_id: int
    billing_account_id: uuid.UUID
    reference: str
    amount: int
    balance_after: int
    result: Literal["created", "already_settled"]

    @property
    def created(self) -> bool:
        return self.result == "created"


@dataclass
class LedgerSummary:
    """Saldo actual y página de movimientos (más recientes primero)."""
    billing_account_id: Optional[uuid.UUID]
    balance_credits: int
    entries: List[CreditLedgerEntry] = field(default_factory=list)
    total_entries: int = 0


def _result_from(entry: CreditLedgerEntry, result: str) -> SettlementResult:
    return SettlementResult(
        entry_id=entry.id,
        billing_account_id=entry.billing_account_id,
        reference=entry.reference,
        amount=entry.amount,
        balance_after=entry.balance_after,
        result=result,  # type: ignore[arg-type]
    )


class CreditLedgerService:
    """
    Ledger append-only con liquidación exactly-once.

    Un mismo reference aplicado N veces (en serie o en paralelo) produce
    exactamente un movimiento y un único cambio de saldo.
    """

    def __init__(
        self,
        account_repo: Optional[BillingAccountRepository] = None,
        ledger_repo: Optional[CreditLedgerRepository] = None,
    ):
        self.account_repo = account_repo or BillingAccountRepository()
        self.ledger_repo = ledger_repo or CreditLedgerRepository()

    async def settle(
        self,
        session: AsyncSession,
        *,
        billing_account_id: uuid.UUID,
        reference: str,
        amount: int,
        reason: LedgerReason,
        entry_metadata: Optional[dict[str, Any]] = None,
        on_settled: Optional[SettledHook] = None,
    ) -> SettlementResult:
        """
        Aplica un movimiento una sola vez por (cuenta, reference).

        Si el reference ya fue aplicado devuelve el movimiento existente con
        result="already_settled"; nunca es un error. on_settled corre dentro
        del mismo SAVEPOINT y solo cuando el movimiento se crea.

        Raises:
            InsufficientCreditsError: cargo mayor al saldo disponible
            BillingAccountNotFoundError: la cuenta no existe
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount == 0:
            raise ValueError("amount must be a non-zero integer")
        if not reference:
            raise ValueError("reference is required")

        existing = await self.ledger_repo.get_by_reference(session, billing_account_id, reference)
        if existing:
            logger.info(
                "ledger_settle_idempotent account_id=%s ref=%s balance_after=%d",
                billing_account_id, reference, existing.balance_after,
            )
            return _result_from(existing, "already_settled")

        try:
            async with session.begin_nested():
                balance_after = await self.account_repo.apply_delta(
                    session, billing_account_id, amount
                )
                if balance_after is None:
                    await self._raise_not_applied(session, billing_account_id, amount)

                entry = await self.ledger_repo.create(
                    session,
                    billing_account_id=billing_account_id,
                    amount=amount,
                    balance_after=balance_after,
                    reason=reason,
                    reference=reference,
                    entry_metadata=entry_metadata,
                )
                if on_settled is not None:
                    await on_settled(entry)
        except IntegrityError:
            # Otro request liquidó el mismo reference; el SAVEPOINT deshizo el saldo
            existing = await self.ledger_repo.get_by_reference(session, billing_account_id, reference)
            if existing is None:
                raise
            logger.info(
                "ledger_settle_race_lost account_id=%s ref=%s balance_after=%d",
                billing_account_id, reference, existing.balance_after,
            )
            return _result_from(existing, "already_settled")

        logger.info(
            "ledger_settled account_id=%s ref=%s reason=%s amount=%+d balance_after=%d",
            billing_account_id, reference, LedgerReason(reason).value, amount, balance_after,
        )
        return _result_from(entry, "created")

    async def _raise_not_applied(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        amount: int,
    ) -> None:
        account = await self.account_repo.get_by_id(session, billing_account_id)
        if account is None:
            raise BillingAccountNotFoundError(billing_account_id)
        raise InsufficientCreditsError(billing_account_id, -amount)

    async def charge_usage(
        self,
        session: AsyncSession,
        *,
        billing_account_id: uuid.UUID,
        reference: str,
        credits: int,
        entry_metadata: Optional[dict[str, Any]] = None,
    ) -> SettlementResult:
        """
        Cargo por consumo (reason=llm_usage). Idempotente por reference.

        Raises:
            InsufficientCreditsError: si el saldo no alcanza
        """
        if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
            raise ValueError("credits must be a positive integer")

        return await self.settle(
            session,
            billing_account_id=billing_account_id,
            reference=reference,
            amount=-credits,
            reason=LedgerReason.LLM_USAGE,
            entry_metadata=entry_metadata,
        )

    async def get_ledger_summary(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> LedgerSummary:
        """Saldo actual y movimientos, más recientes primero."""
        account = await self.account_repo.get_by_id(session, billing_account_id, refresh=True)
        if account is None:
            raise BillingAccountNotFoundError(billing_account_id)

        entries = await self.ledger_repo.list_by_account(
            session, billing_account_id, limit=limit, offset=offset
        )
        total = await self.ledger_repo.count_by_account(session, billing_account_id)
        return LedgerSummary(
            billing_account_id=account.id,
            balance_credits=account.balance_credits,
            entries=entries,
            total_entries=total,
        )

    async def get_ledger_summary_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> LedgerSummary:
        """
        Resumen del caller. Sin cuenta todavía: saldo 0 y sin movimientos
        (la cuenta se crea con el primer pago o cargo, no en una lectura).
        """
        account = await self.account_repo.get_by_owner(session, owner_id)
        if account is None:
            return LedgerSummary(billing_account_id=None, balance_credits=0)
        return await self.get_ledger_summary(session, account.id, limit=limit, offset=offset)


__all__ = [
    "CreditLedgerService",
    "SettlementResult",
    "LedgerSummary",
    "SettledHook",
]
# Fin del archivo backend/app/modules/billing/credits/services.py
