# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_status_enum.py

Estados internos de un PaymentAttempt y su vocabulario para clientes.

Se persisten como texto (valor del enum) en payment_attempts.status.

Autor: Ixchel Beristain
Fecha: 20/11/2025 (pagos on-chain 2026-02-03)
"""

from enum import StrEnum


class PaymentAttemptStatus(StrEnum):
    """Estado del intento en su ciclo de vida on-chain."""

    CREATED = "CREATED_INTENT"
    PENDING_UNVERIFIED = "PENDING_UNVERIFIED"
    CREDITED = "CREDITED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    PaymentAttemptStatus.CREDITED,
    PaymentAttemptStatus.REJECTED,
    PaymentAttemptStatus.FAILED,
})


class ClientVisibleStatus(StrEnum):
    """Estado expuesto por la API."""

    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


__all__ = ["PaymentAttemptStatus", "ClientVisibleStatus", "TERMINAL_STATUSES"]

# Fin del archivo backend/app/modules/payments/enums/payment_status_enum.py
