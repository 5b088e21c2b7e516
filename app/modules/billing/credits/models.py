# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/models.py

Modelos ORM para el sistema de créditos.

- BillingAccount: saldo denormalizado por dueño (caller id del JWT).
- CreditLedgerEntry: ledger inmutable; ancla de idempotencia
  UNIQUE(billing_account_id, reference).

Invariante: balance_credits == SUM(credit_ledger.amount) de la cuenta.

Autor: Equipo Billing
Fecha: 2025-12-30 (pagos on-chain 2026-02-03)
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

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
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.payments.utils.datetime_helpers import utcnow
from app.shared.database.base import Base, json_column_type

# BIGSERIAL en PostgreSQL; INTEGER PRIMARY KEY (rowid) en SQLite
LedgerId = BigInteger().with_variant(Integer(), "sqlite")


class BillingAccount(Base):
    """
    Saldo de créditos de un dueño (denormalizado para lectura rápida).

    Tabla: billing_accounts

    Se crea perezosamente en el primer pago o cargo y nunca se borra.
    Solo se muta dentro de la transacción de settle.
    """

    __tablename__ = "billing_accounts"
    __table_args__ = (
        CheckConstraint("balance_credits >= 0", name="balance_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    owner_id: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        index=True,
    )

    balance_credits: Mapped[int] = mapped_column(
        BigInteger,
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

    def __repr__(self) -> str:
        return f"<BillingAccount id={self.id} owner={self.owner_id} balance={self.balance_credits}>"


class CreditLedgerEntry(Base):
    """
    Ledger inmutable de movimientos de créditos.

    Tabla: credit_ledger

    - amount: con signo (+abono, -cargo), nunca 0
    - balance_after: saldo de la cuenta tras aplicar este movimiento
    - reference: "{chain_id}:{tx_hash}" para pagos, clave del caller para cargos
    """

    __tablename__ = "credit_ledger"
    __table_args__ = (
        UniqueConstraint("billing_account_id", "reference"),
        CheckConstraint("amount <> 0", name="amount_nonzero"),
    )

    id: Mapped[int] = mapped_column(
        LedgerId,
        primary_key=True,
        autoincrement=True,
    )

    billing_account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("billing_accounts.id"),
        nullable=False,
        index=True,
    )

    amount: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    balance_after: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
    )

    reason: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    reference: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # "metadata" está reservado por DeclarativeBase
    entry_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata",
        json_column_type(),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<CreditLedgerEntry id={self.id} account={self.billing_account_id} "
            f"amount={self.amount:+d} after={self.balance_after} ref={self.reference}>"
        )


__all__ = [
    "BillingAccount",
    "CreditLedgerEntry",
]
# Fin del archivo backend/app/modules/billing/credits/models.py
