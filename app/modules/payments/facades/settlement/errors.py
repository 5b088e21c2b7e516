# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/settlement/errors.py

Excepciones de dominio del flujo de pagos on-chain.

Las rutas las traducen a HTTPException con detail {"error", "message"}.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import uuid
from typing import Optional


class PaymentNotFoundError(LookupError):
    """El intento no existe o no pertenece al caller (indistinguibles)."""

    def __init__(self, attempt_id: uuid.UUID | str):
        self.attempt_id = attempt_id
        super().__init__(f"Payment attempt {attempt_id} not found")


class TxHashAlreadyBoundError(Exception):
    """
    Conflicto de ligado del tx_hash.

    Sin attempt_id: (chain_id, tx_hash) ya pertenece a otro intento.
    Con attempt_id: ese intento ya tiene ligado tx_hash y no acepta otro.
    """

    def __init__(self, chain_id: int, tx_hash: str, *, attempt_id: uuid.UUID | str | None = None):
        self.chain_id = chain_id
        self.tx_hash = tx_hash
        self.attempt_id = attempt_id
        if attempt_id is None:
            msg = f"Transaction {tx_hash} on chain {chain_id} is already bound to another payment"
        else:
            msg = f"Payment attempt {attempt_id} already has transaction {tx_hash} bound on chain {chain_id}"
        super().__init__(msg)


class InvalidStateTransitionError(Exception):
    """Transición no permitida por la máquina de estados."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Invalid payment transition {from_status} -> {to_status}")


class InvalidPaymentAmountError(ValueError):
    """Monto no entero, no positivo o fuera de límites."""

    def __init__(self, message: str, amount: object = None):
        self.amount = amount
        super().__init__(message)


class InvalidTxHashError(ValueError):
    """tx_hash con formato inválido (0x + 64 hex)."""


class InvalidWalletAddressError(ValueError):
    """Dirección EVM con formato inválido (0x + 40 hex)."""


class PaymentsNotConfiguredError(RuntimeError):
    """Falta configuración de pagos (dirección receptora o indexador)."""

    def __init__(self, missing: Optional[str] = None):
        self.missing = missing
        msg = "On-chain payments are not configured"
        if missing:
            msg = f"{msg}: missing {missing}"
        super().__init__(msg)


__all__ = [
    "PaymentNotFoundError",
    "TxHashAlreadyBoundError",
    "InvalidStateTransitionError",
    "InvalidPaymentAmountError",
    "InvalidTxHashError",
    "InvalidWalletAddressError",
    "PaymentsNotConfiguredError",
]
# Fin del archivo backend/app/modules/payments/facades/settlement/errors.py
