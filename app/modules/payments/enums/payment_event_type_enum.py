# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_event_type_enum.py

Tipos de evento del audit trail de payment_attempts.

Autor: Ixchel Beristain
Fecha: 2026-02-03
"""

from enum import StrEnum


class PaymentEventType(StrEnum):
    INTENT_CREATED = "INTENT_CREATED"
    TX_SUBMITTED = "TX_SUBMITTED"
    VERIFICATION_ATTEMPTED = "VERIFICATION_ATTEMPTED"
    STATUS_CHANGED = "STATUS_CHANGED"


__all__ = ["PaymentEventType"]

# Fin del archivo backend/app/modules/payments/enums/payment_event_type_enum.py
