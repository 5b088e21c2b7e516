# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/repositories.py

Repositorios para el sistema de créditos.

Autor: Equipo Billing
Fecha: 2025-12-30 (pagos on-chain 2026-02-03)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payments.utils.datetime_helpers import utcnow

from .enums import LedgerReason
from .models import BillingAccount, CreditLedgerEntry

logger = logging.getLogger(__name__)


class BillingAccountRepository:
    """Repositorio de BillingAccount."""

    async def get_by_id(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        *,
        refresh: bool = False,
    ) -> Optional[BillingAccount]:
        """
        Obtiene una cuenta por id.

        refresh=True fuerza releer columnas: el saldo se muta con UPDATE
        directo y el identity map puede tener un valor viejo.
        """
        stmt = select(BillingAccount).where(BillingAccount.id == billing_account_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
    ) -> Optional[BillingAccount]:
        stmt = (
            select(BillingAccount)
            .where(BillingAccount.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create_for_owner(
        self,
        session: AsyncSession,
        owner_id: str,
    ) -> tuple[BillingAccount, bool]:
        """
        Obtiene o crea la cuenta del dueño.

        Usa SAVEPOINT para manejar concurrencia sin invalidar
        la transacción principal del request.

        Returns:
            Tuple (account, created: bool)
        """
        account = await self.get_by_owner(session, owner_id)
        if account:
            return account, False

        try:
            async with session.begin_nested():
                account = BillingAccount(owner_id=owner_id, balance_credits=0)
                session.add(account)
                await session.flush()
            logger.info("billing_account_created owner_id=%s account_id=%s", owner_id, account.id)
            return account, True
        except IntegrityError:
            # SAVEPOINT ya hizo rollback; otro request creó la cuenta
            logger.debug("billing_account_exists owner_id=%s (concurrent create)", owner_id)

        account = await self.get_by_owner(session, owner_id)
        if account:
            return account, False

        raise RuntimeError(f"Failed to get or create billing account for owner {owner_id}")

    async def apply_delta(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        delta: int,
    ) -> Optional[int]:
        """
        Suma delta al saldo con un UPDATE atómico y devuelve el saldo nuevo.

        Para cargos (delta < 0) el UPDATE solo aplica si balance >= -delta;
        si no aplica (saldo insuficiente o cuenta inexistente) devuelve None.
        """
        stmt = (
            update(BillingAccount)
            .where(BillingAccount.id == billing_account_id)
            .values(
                balance_credits=BillingAccount.balance_credits + delta,
                updated_at=utcnow(),
            )
            .returning(BillingAccount.balance_credits)
            .execution_options(synchronize_session=False)
        )
        if delta < 0:
            stmt = stmt.where(BillingAccount.balance_credits >= -delta)

        result = await session.execute(stmt)
        new_balance = result.scalar_one_or_none()
        return int(new_balance) if new_balance is not None else None


class CreditLedgerRepository:
    """Repositorio del ledger (solo inserciones y lecturas)."""

    async def create(
        self,
        session: AsyncSession,
        *,
        billing_account_id: uuid.UUID,
        amount: int,
        balance_after: int,
        reason: LedgerReason,
        reference: str,
        entry_metadata: Optional[dict[str, Any]] = None,
    ) -> CreditLedgerEntry:
        """
        Inserta un movimiento. El flush dispara IntegrityError si la
        referencia ya existe para la cuenta.
        """
        if amount == 0:
            raise ValueError("amount cannot be zero")

        entry = CreditLedgerEntry(
            billing_account_id=billing_account_id,
            amount=amount,
            balance_after=balance_after,
            reason=LedgerReason(reason).value,
            reference=reference,
            entry_metadata=entry_metadata or {},
        )
        session.add(entry)
        await session.flush()

        logger.debug(
            "ledger_entry_created account_id=%s amount=%+d after=%d ref=%s",
            billing_account_id, amount, balance_after, reference,
        )
        return entry

    async def get_by_reference(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        reference: str,
    ) -> Optional[CreditLedgerEntry]:
        stmt = select(CreditLedgerEntry).where(
            CreditLedgerEntry.billing_account_id == billing_account_id,
            CreditLedgerEntry.reference == reference,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def sum_amounts(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
    ) -> int:
        """Suma del ledger; debe coincidir con balance_credits."""
        stmt = select(func.coalesce(func.sum(CreditLedgerEntry.amount), 0)).where(
            CreditLedgerEntry.billing_account_id == billing_account_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def count_by_account(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
    ) -> int:
        stmt = select(func.count()).select_from(CreditLedgerEntry).where(
            CreditLedgerEntry.billing_account_id == billing_account_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def list_by_account(
        self,
        session: AsyncSession,
        billing_account_id: uuid.UUID,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> List[CreditLedgerEntry]:
        """
        Lista movimientos de una cuenta, más recientes primero.
        """
        stmt = (
            select(CreditLedgerEntry)
            .where(CreditLedgerEntry.billing_account_id == billing_account_id)
            .order_by(CreditLedgerEntry.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


__all__ = [
    "BillingAccountRepository",
    "CreditLedgerRepository",
]
# Fin del archivo backend/app/modules/billing/credits/repositories.py
