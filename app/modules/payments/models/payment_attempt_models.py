# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/payment_attempt_models.py

Intento de pago on-chain (un ciclo de vida por intent).

Columnas clave:
- amount_usd_cents / amount_raw: enteros; amount_raw = cents * unidades por centavo
- tx_hash: se liga una sola vez; UNIQUE(chain_id, tx_hash)
- status: valor de PaymentAttemptStatus como texto
- expires_at / submitted_at: base de los timeouts evaluados en lectura

Nunca se borra (audit trail). Solo el SettlementEngine lo muta.

Autor: Ixchel Beristain
Fecha: 2026-02-03
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base

from ..enums import PaymentAttemptStatus
from ..utils.datetime_helpers import utcnow

if TYPE_CHECKING:
    from .payment_event_models import PaymentEvent


class PaymentAttempt(Base):
    __tablename__ = "payment_attempts"
    __table_args__ = (
        UniqueConstraint("chain_id", "tx_hash"),
        CheckConstraint("amount_usd_cents > 0", name="amount_usd_cents_positive"),
        CheckConstraint("amount_raw > 0", name="amount_raw_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    billing_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("billing_accounts.id"),
        nullable=False,
        index=True,
    )

    from_address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Wallet del caller que debe firmar la transferencia.",
    )

    chain_id: Mapped[int] = mapped_column(Integer, nullable=False)

    token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Contrato del token esperado (USDC).",
    )

    recipient_address: Mapped[str] = mapped_column(Text, nullable=False)

    amount_usd_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)

    amount_raw: Mapped[int] = mapped_column(BigInteger, nullable=False)

    tx_hash: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=PaymentAttemptStatus.CREATED.value,
        index=True,
    )

    error_code: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    confirmations: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    last_verify_attempt_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    verify_attempt_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    events: Mapped[list["PaymentEvent"]] = relationship(
        "PaymentEvent",
        back_populates="attempt",
        lazy="noload",
    )

    @property
    def status_enum(self) -> PaymentAttemptStatus:
        return PaymentAttemptStatus(self.status)

    @property
    def ledger_reference(self) -> Optional[str]:
        """Referencia del abono en el ledger: '{chain_id}:{tx_hash}'."""
        if not self.tx_hash:
            return None
        return f"{self.chain_id}:{self.tx_hash}"

    def __repr__(self) -> str:  # pragma: no cover - representacional
        return (
            f"<PaymentAttempt id={self.id} status={self.status} "
            f"cents={self.amount_usd_cents} tx={self.tx_hash}>"
        )


__all__ = ["PaymentAttempt"]
# Fin del archivo backend/app/modules/payments/models/payment_attempt_models.py
