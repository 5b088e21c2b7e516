# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/payment_attempt_schemas.py

Contratos HTTP del flujo de pago on-chain.

- CreateIntentRequest / IntentResponse: POST /payments/intents
- SubmitTxRequest: POST /payments/attempts/{attempt_id}/submit
- AttemptStatusResponse: respuesta de submit y de GET /payments/attempts/{attempt_id}

El monto entra como entero estricto (centavos USD); un float o un bool
se rechaza antes de llegar al dominio.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from app.modules.payments.enums import ClientVisibleStatus
from app.modules.payments.facades.settlement.rules import to_client_status
from app.modules.payments.models.payment_attempt_models import PaymentAttempt


class CreateIntentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount_usd_cents: StrictInt = Field(
        ...,
        description="Monto en centavos USD (entero).",
        examples=[2500],
    )
    from_address: str = Field(
        ...,
        description="Wallet EVM desde la que se enviará la transferencia.",
        examples=["0x1111111111111111111111111111111111111111"],
    )


class IntentResponse(BaseModel):
    """Lo que el cliente debe transferir on-chain, exactamente."""

    attempt_id: uuid.UUID
    chain_id: int
    token: str = Field(description="Dirección del contrato del token (USDC).")
    recipient_address: str
    from_address: str
    amount_usd_cents: int
    amount_raw: str = Field(
        description="Monto en unidades mínimas del token, como string decimal."
    )
    expires_at: datetime


class SubmitTxRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tx_hash: str = Field(
        ...,
        description="Hash de la transacción (0x + 64 hex).",
        examples=["0x" + "ab" * 32],
    )


class AttemptStatusResponse(BaseModel):
    """
    Estado de un intento para polling del cliente.

    status usa el vocabulario estable del cliente; internal_status expone
    el estado de la máquina para diagnóstico.
    """

    attempt_id: uuid.UUID
    status: ClientVisibleStatus
    internal_status: str
    is_final: bool
    error_code: Optional[str] = None
    chain_id: int
    tx_hash: Optional[str] = None
    confirmations: Optional[int] = None
    amount_usd_cents: int
    credits: Optional[int] = Field(
        default=None,
        description="Créditos abonados (solo si CONFIRMED).",
    )
    submitted_at: Optional[datetime] = None
    updated_at: datetime

    @classmethod
    def from_attempt(
        cls,
        attempt: PaymentAttempt,
        *,
        credits_per_cent: Optional[int] = None,
    ) -> "AttemptStatusResponse":
        status_enum = attempt.status_enum
        client_status = to_client_status(status_enum)
        credits = None
        if client_status == ClientVisibleStatus.CONFIRMED and credits_per_cent is not None:
            credits = attempt.amount_usd_cents * credits_per_cent
        return cls(
            attempt_id=attempt.id,
            status=client_status,
            internal_status=status_enum.value,
            is_final=status_enum.is_terminal,
            error_code=attempt.error_code,
            chain_id=attempt.chain_id,
            tx_hash=attempt.tx_hash,
            confirmations=attempt.confirmations,
            amount_usd_cents=attempt.amount_usd_cents,
            credits=credits,
            submitted_at=attempt.submitted_at,
            updated_at=attempt.updated_at,
        )


__all__ = [
    "CreateIntentRequest",
    "IntentResponse",
    "SubmitTxRequest",
    "AttemptStatusResponse",
]
# Fin del archivo backend/app/modules/payments/schemas/payment_attempt_schemas.py
