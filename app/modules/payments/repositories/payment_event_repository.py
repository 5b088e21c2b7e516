# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/payment_event_repository.py

Repositorio para la tabla payment_events (audit trail append-only).

Autor: Ixchel Beristain
Fecha: 2025-11-20
"""

import uuid
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import PaymentEventType
from app.modules.payments.models.payment_event_models import PaymentEvent


class PaymentEventRepository(BaseRepository[PaymentEvent]):
    def __init__(self) -> None:
        super().__init__(PaymentEvent)

    async def record(
        self,
        session: AsyncSession,
        *,
        attempt_id: uuid.UUID,
        event_type: PaymentEventType,
        created_at: datetime,
        from_status: Optional[str] = None,
        to_status: Optional[str] = None,
        error_code: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> PaymentEvent:
        return await self.create(
            session,
            attempt_id=attempt_id,
            event_type=PaymentEventType(event_type).value,
            from_status=from_status,
            to_status=to_status,
            error_code=error_code,
            event_metadata=metadata,
            created_at=created_at,
        )

    async def list_by_attempt(
        self,
        session: AsyncSession,
        attempt_id: uuid.UUID,
    ) -> Sequence[PaymentEvent]:
        stmt = (
            select(PaymentEvent)
            .where(PaymentEvent.attempt_id == attempt_id)
            .order_by(PaymentEvent.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

# Fin del archivo backend/app/modules/payments/repositories/payment_event_repository.py
