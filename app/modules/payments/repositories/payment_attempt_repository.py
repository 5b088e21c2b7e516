# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_attempt_repository.py

Repositorio para la tabla payment_attempts.

Responsabilidades:
- Carga con aislamiento por dueño (JOIN billing_accounts.owner_id)
- Búsqueda por (chain_id, tx_hash)
- Ligado del tx_hash bajo SAVEPOINT (el UNIQUE resuelve carreras)
- Transiciones de estado condicionales (compare-and-set sobre status)

Autor: Ixchel Beristain
Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.billing.credits.models import BillingAccount
from app.shared.database.repository import BaseRepository

from ..models.payment_attempt_models import PaymentAttempt

logger = logging.getLogger(__name__)


class PaymentAttemptRepository(BaseRepository[PaymentAttempt]):
    def __init__(self) -> None:
        super().__init__(PaymentAttempt)

    async def get_owned(
        self,
        session: AsyncSession,
        attempt_id: uuid.UUID,
        owner_id: str,
    ) -> Optional[PaymentAttempt]:
        """
        Obtiene el intento solo si pertenece a la cuenta del dueño.

        Un intento ajeno y uno inexistente son indistinguibles (None).
        """
        stmt = (
            select(PaymentAttempt)
            .join(BillingAccount, BillingAccount.id == PaymentAttempt.billing_account_id)
            .where(
                PaymentAttempt.id == attempt_id,
                BillingAccount.owner_id == owner_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_tx_hash(
        self,
        session: AsyncSession,
        chain_id: int,
        tx_hash: str,
    ) -> Optional[PaymentAttempt]:
        stmt = select(PaymentAttempt).where(
            PaymentAttempt.chain_id == chain_id,
            PaymentAttempt.tx_hash == tx_hash,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def bind_tx_hash(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        tx_hash: str,
        submitted_at: datetime,
    ) -> bool:
        """
        Liga tx_hash al intento si todavía no tiene uno.

        UPDATE condicional (tx_hash IS NULL) bajo SAVEPOINT; el UNIQUE
        (chain_id, tx_hash) resuelve la carrera entre intentos distintos.

        Returns:
            False si no se ligó (otro intento ya tiene el hash, o este intento
            ya tenía uno). El intento queda recargado desde la DB.
        """
        stmt = (
            update(PaymentAttempt)
            .where(
                PaymentAttempt.id == attempt.id,
                PaymentAttempt.tx_hash.is_(None),
            )
            .values(tx_hash=tx_hash, submitted_at=submitted_at, updated_at=submitted_at)
            .execution_options(synchronize_session=False)
        )
        await session.flush()
        try:
            async with session.begin_nested():
                result = await session.execute(stmt)
        except IntegrityError:
            logger.info(
                "tx_hash_bind_conflict attempt_id=%s chain_id=%s tx_hash=%s",
                attempt.id, attempt.chain_id, tx_hash,
            )
            await session.refresh(attempt)
            return False

        await session.refresh(attempt)
        return result.rowcount == 1

    async def transition_status(
        self,
        session: AsyncSession,
        attempt: PaymentAttempt,
        *,
        from_status: str,
        to_status: str,
        error_code: Optional[str],
        now: datetime,
    ) -> bool:
        """
        UPDATE condicional (status = from_status).

        Returns:
            False si otro request ya movió el intento; queda recargado.
        """
        await session.flush()
        stmt = (
            update(PaymentAttempt)
            .where(
                PaymentAttempt.id == attempt.id,
                PaymentAttempt.status == from_status,
            )
            .values(status=to_status, error_code=error_code, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        await session.refresh(attempt)
        return result.rowcount == 1


__all__ = ["PaymentAttemptRepository"]
# Fin del archivo backend/app/modules/payments/repositories/payment_attempt_repository.py
