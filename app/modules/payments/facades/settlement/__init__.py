# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/settlement/__init__.py

Liquidación de pagos on-chain: reglas, política y errores de dominio.

El motor se importa explícitamente para evitar ciclos con intents:

    from app.modules.payments.facades.settlement.engine import SettlementEngine
"""

from .errors import (
    InvalidPaymentAmountError,
    InvalidStateTransitionError,
    InvalidTxHashError,
    InvalidWalletAddressError,
    PaymentNotFoundError,
    PaymentsNotConfiguredError,
    TxHashAlreadyBoundError,
)
from .policy import SettlementPolicy

__all__ = [
    "SettlementPolicy",
    "PaymentNotFoundError",
    "TxHashAlreadyBoundError",
    "InvalidStateTransitionError",
    "InvalidPaymentAmountError",
    "InvalidTxHashError",
    "InvalidWalletAddressError",
    "PaymentsNotConfiguredError",
]
# Fin del archivo backend/app/modules/payments/facades/settlement/__init__.py
