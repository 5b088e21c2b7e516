# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/settlement/rules.py

Reglas puras de la máquina de estados de PaymentAttempt.

Transiciones permitidas:
    CREATED_INTENT     -> PENDING_UNVERIFIED | FAILED
    PENDING_UNVERIFIED -> CREDITED | REJECTED | FAILED
Los estados terminales (CREDITED, REJECTED, FAILED) no transicionan.

Sin I/O: el motor decide qué persistir.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from app.modules.payments.adapters.onchain_verifier import VerificationResult
from app.modules.payments.enums import (
    ClientVisibleStatus,
    PaymentAttemptStatus,
    PaymentErrorCode,
)
from app.modules.payments.utils.datetime_helpers import ensure_utc

from .errors import (
    InvalidStateTransitionError,
    InvalidTxHashError,
    InvalidWalletAddressError,
)

_S = PaymentAttemptStatus

ALLOWED_TRANSITIONS: dict[PaymentAttemptStatus, frozenset[PaymentAttemptStatus]] = {
    _S.CREATED: frozenset({_S.PENDING_UNVERIFIED, _S.FAILED}),
    _S.PENDING_UNVERIFIED: frozenset({_S.CREDITED, _S.REJECTED, _S.FAILED}),
    _S.CREDITED: frozenset(),
    _S.REJECTED: frozenset(),
    _S.FAILED: frozenset(),
}

_CLIENT_STATUS = {
    _S.CREATED: ClientVisibleStatus.PENDING_VERIFICATION,
    _S.PENDING_UNVERIFIED: ClientVisibleStatus.PENDING_VERIFICATION,
    _S.CREDITED: ClientVisibleStatus.CONFIRMED,
    _S.REJECTED: ClientVisibleStatus.REJECTED,
    _S.FAILED: ClientVisibleStatus.FAILED,
}

_TX_HASH_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")
_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_transition(from_status: PaymentAttemptStatus, to_status: PaymentAttemptStatus) -> bool:
    return to_status in ALLOWED_TRANSITIONS[PaymentAttemptStatus(from_status)]


def ensure_transition(from_status: PaymentAttemptStatus, to_status: PaymentAttemptStatus) -> None:
    if not is_valid_transition(from_status, to_status):
        raise InvalidStateTransitionError(str(from_status), str(to_status))


def is_terminal(status: PaymentAttemptStatus) -> bool:
    return PaymentAttemptStatus(status).is_terminal


def to_client_status(status: PaymentAttemptStatus) -> ClientVisibleStatus:
    return _CLIENT_STATUS[PaymentAttemptStatus(status)]


def is_intent_expired(
    status: PaymentAttemptStatus,
    expires_at: Optional[datetime],
    now: datetime,
) -> bool:
    """Solo aplica a CREATED_INTENT con expires_at."""
    if PaymentAttemptStatus(status) != _S.CREATED or expires_at is None:
        return False
    return ensure_utc(now) >= ensure_utc(expires_at)


def is_receipt_timed_out(
    status: PaymentAttemptStatus,
    submitted_at: Optional[datetime],
    now: datetime,
    timeout: timedelta,
) -> bool:
    """Solo aplica a PENDING_UNVERIFIED; estrictamente mayor que la ventana."""
    if PaymentAttemptStatus(status) != _S.PENDING_UNVERIFIED or submitted_at is None:
        return False
    return ensure_utc(now) - ensure_utc(submitted_at) > timeout


def should_throttle_verification(
    last_verify_attempt_at: Optional[datetime],
    now: datetime,
    throttle: timedelta,
) -> bool:
    if last_verify_attempt_at is None or throttle <= timedelta(0):
        return False
    return ensure_utc(now) - ensure_utc(last_verify_attempt_at) < throttle


def addresses_equal(a: Optional[str], b: Optional[str]) -> bool:
    """Direcciones EVM: comparación sin distinguir mayúsculas (checksum)."""
    if a is None or b is None:
        return False
    return a.strip().lower() == b.strip().lower()


def find_transfer_mismatch(
    *,
    expected_from: str,
    expected_token: str,
    expected_to: str,
    expected_amount_raw: int,
    result: VerificationResult,
) -> Optional[PaymentErrorCode]:
    """
    Compara una transferencia VERIFIED contra el intent.

    Orden fijo, gana el primer fallo: remitente, token (si el verificador lo
    reporta), destinatario, monto. Un monto mayor al esperado es aceptado.
    """
    if not addresses_equal(result.actual_from, expected_from):
        return PaymentErrorCode.SENDER_MISMATCH
    if result.actual_token is not None and not addresses_equal(result.actual_token, expected_token):
        return PaymentErrorCode.INVALID_TOKEN
    if not addresses_equal(result.actual_to, expected_to):
        return PaymentErrorCode.RECIPIENT_MISMATCH
    if result.actual_amount is None or result.actual_amount < expected_amount_raw:
        return PaymentErrorCode.INSUFFICIENT_AMOUNT
    return None


def normalize_tx_hash(tx_hash: str) -> str:
    """0x + 64 hex, en minúsculas."""
    value = (tx_hash or "").strip()
    if not _TX_HASH_RE.match(value):
        raise InvalidTxHashError("tx_hash must be 0x followed by 64 hex characters")
    return value.lower()


def normalize_address(address: str) -> str:
    """0x + 40 hex; se conserva el checksum original."""
    value = (address or "").strip()
    if not _ADDRESS_RE.match(value):
        raise InvalidWalletAddressError("address must be 0x followed by 40 hex characters")
    return value


__all__ = [
    "ALLOWED_TRANSITIONS",
    "is_valid_transition",
    "ensure_transition",
    "is_terminal",
    "to_client_status",
    "is_intent_expired",
    "is_receipt_timed_out",
    "should_throttle_verification",
    "addresses_equal",
    "find_transfer_mismatch",
    "normalize_tx_hash",
    "normalize_address",
]
# Fin del archivo backend/app/modules/payments/facades/settlement/rules.py
