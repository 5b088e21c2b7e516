# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_event_models.py

Audit trail append-only de un PaymentAttempt.

Autor: Ixchel Beristain
Fecha: 2025-11-20 (eventos on-chain 2026-02-03)
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, json_column_type

from ..utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .payment_attempt_models import PaymentAttempt


class PaymentEvent(Base):
    __tablename__ = "payment_events"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    attempt_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("payment_attempts.id"),
        nullable=False,
        index=True,
    )

    event_type: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="INTENT_CREATED | TX_SUBMITTED | VERIFICATION_ATTEMPTED | STATUS_CHANGED",
    )

    from_status: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    to_status: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    error_code: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    event_metadata: Mapped[Optional[dict]] = mapped_column(
        "metadata",
        json_column_type(),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    attempt: Mapped["PaymentAttempt"] = relationship(
        "PaymentAttempt",
        back_populates="events",
    )

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return f"<PaymentEvent id={self.id} attempt={self.attempt_id} type={self.event_type}>"


__all__ = ["PaymentEvent"]
# Fin del archivo backend/app/modules/payments/models/payment_event_models.py
