# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- PaymentAttemptStatus / ClientVisibleStatus
- PaymentErrorCode
- PaymentEventType

Autor: Ixchel Beristain
Fecha: 20/11/2025
"""

from .payment_error_code_enum import PaymentErrorCode
from .payment_event_type_enum import PaymentEventType
from .payment_status_enum import (
    TERMINAL_STATUSES,
    ClientVisibleStatus,
    PaymentAttemptStatus,
)

__all__ = [
    "PaymentAttemptStatus",
    "ClientVisibleStatus",
    "TERMINAL_STATUSES",
    "PaymentErrorCode",
    "PaymentEventType",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
