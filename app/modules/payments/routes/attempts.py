# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/attempts.py

Rutas del flujo de pago on-chain (auth requerido).

Endpoints:
- POST /payments/intents
- POST /payments/attempts/{attempt_id}/submit
- GET  /payments/attempts/{attempt_id}

Los servicios solo hacen flush(); estas rutas hacen commit().

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user_id
from app.shared.database.database import get_async_session

from ..dependencies import get_intent_manager, get_settlement_engine
from ..facades.intents import PaymentIntentManager
from ..facades.settlement import (
    InvalidPaymentAmountError,
    InvalidStateTransitionError,
    InvalidTxHashError,
    InvalidWalletAddressError,
    PaymentNotFoundError,
    TxHashAlreadyBoundError,
)
from ..facades.settlement.engine import SettlementEngine
from ..schemas import (
    AttemptStatusResponse,
    CreateIntentRequest,
    IntentResponse,
    SubmitTxRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="",
    tags=["payments"],
)


def _http_error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "message": message})


def _not_found() -> HTTPException:
    # Mismo cuerpo para inexistente y ajeno
    return _http_error(status.HTTP_404_NOT_FOUND, "payment_not_found", "Payment attempt not found")


@router.post(
    "/intents",
    response_model=IntentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Crear intent de pago on-chain",
)
async def create_intent_route(
    payload: CreateIntentRequest,
    user_id: str = Depends(get_current_user_id),
    manager: PaymentIntentManager = Depends(get_intent_manager),
    session: AsyncSession = Depends(get_async_session),
) -> IntentResponse:
    """
    Fija red, token, dirección receptora y monto exacto a transferir.
    """
    try:
        intent = await manager.create_intent_for_owner(
            session,
            owner_id=user_id,
            amount_usd_cents=payload.amount_usd_cents,
            from_address=payload.from_address,
        )
    except InvalidPaymentAmountError as e:
        raise _http_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_amount", str(e))
    except InvalidWalletAddressError as e:
        raise _http_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_address", str(e))

    await session.commit()

    return IntentResponse(
        attempt_id=intent.attempt_id,
        chain_id=intent.chain_id,
        token=intent.token,
        recipient_address=intent.recipient_address,
        from_address=intent.from_address,
        amount_usd_cents=intent.amount_usd_cents,
        amount_raw=str(intent.amount_raw),
        expires_at=intent.expires_at,
    )


@router.post(
    "/attempts/{attempt_id}/submit",
    response_model=AttemptStatusResponse,
    summary="Enviar tx hash de un intent",
)
async def submit_tx_route(
    attempt_id: uuid.UUID,
    payload: SubmitTxRequest,
    user_id: str = Depends(get_current_user_id),
    engine: SettlementEngine = Depends(get_settlement_engine),
    session: AsyncSession = Depends(get_async_session),
) -> AttemptStatusResponse:
    """
    Liga el tx hash al intento y verifica la transferencia.

    Reenviar el mismo hash es idempotente.
    """
    try:
        attempt = await engine.submit_tx_hash(
            session,
            attempt_id=attempt_id,
            tx_hash=payload.tx_hash,
            caller_id=user_id,
        )
    except InvalidTxHashError as e:
        raise _http_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid_tx_hash", str(e))
    except PaymentNotFoundError:
        raise _not_found()
    except TxHashAlreadyBoundError as e:
        raise _http_error(status.HTTP_409_CONFLICT, "tx_hash_already_bound", str(e))
    except InvalidStateTransitionError as e:
        logger.warning("payment_submit_invalid_transition attempt_id=%s error=%s", attempt_id, e)
        raise _http_error(status.HTTP_409_CONFLICT, "invalid_state_transition", str(e))

    await session.commit()
    return AttemptStatusResponse.from_attempt(attempt, credits_per_cent=engine.policy.credits_per_cent)


@router.get(
    "/attempts/{attempt_id}",
    response_model=AttemptStatusResponse,
    summary="Estado de un intento para polling",
)
async def get_attempt_status_route(
    attempt_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    engine: SettlementEngine = Depends(get_settlement_engine),
    session: AsyncSession = Depends(get_async_session),
) -> AttemptStatusResponse:
    """
    Estado actual; puede re-verificar o aplicar timeouts al leer.
    """
    try:
        attempt = await engine.get_status(session, attempt_id=attempt_id, caller_id=user_id)
    except PaymentNotFoundError:
        raise _not_found()
    except InvalidStateTransitionError as e:
        logger.warning("payment_status_invalid_transition attempt_id=%s error=%s", attempt_id, e)
        raise _http_error(status.HTTP_409_CONFLICT, "invalid_state_transition", str(e))

    await session.commit()
    return AttemptStatusResponse.from_attempt(attempt, credits_per_cent=engine.policy.credits_per_cent)


__all__ = ["router"]
# Fin del archivo backend/app/modules/payments/routes/attempts.py
