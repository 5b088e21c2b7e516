# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_error_code_enum.py

Códigos de error terminales de un PaymentAttempt.

Los códigos de mismatch los fija el motor al comparar lo reportado por el
verificador contra el intent; los demás pueden venir del verificador.

Autor: Ixchel Beristain
Fecha: 2026-02-03
"""

from enum import StrEnum
from typing import Optional


class PaymentErrorCode(StrEnum):
    # Mismatch contra el intent (REJECTED)
    SENDER_MISMATCH = "SENDER_MISMATCH"
    INVALID_TOKEN = "INVALID_TOKEN"
    RECIPIENT_MISMATCH = "RECIPIENT_MISMATCH"
    INSUFFICIENT_AMOUNT = "INSUFFICIENT_AMOUNT"

    # Reportados por el verificador (REJECTED)
    INVALID_CHAIN = "INVALID_CHAIN"
    TX_NOT_FOUND = "TX_NOT_FOUND"
    TX_REVERTED = "TX_REVERTED"
    TOKEN_TRANSFER_NOT_FOUND = "TOKEN_TRANSFER_NOT_FOUND"
    VERIFICATION_REJECTED = "VERIFICATION_REJECTED"

    # Timeouts (FAILED)
    RECEIPT_NOT_FOUND = "RECEIPT_NOT_FOUND"
    INTENT_EXPIRED = "INTENT_EXPIRED"

    @classmethod
    def from_verifier(cls, code: Optional[str]) -> "PaymentErrorCode":
        """Normaliza el código de un rechazo; desconocido -> VERIFICATION_REJECTED."""
        if code:
            try:
                return cls(code.strip().upper())
            except ValueError:
                pass
        return cls.VERIFICATION_REJECTED


__all__ = ["PaymentErrorCode"]

# Fin del archivo backend/app/modules/payments/enums/payment_error_code_enum.py
