# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/models/__init__.py

Punto de entrada de modelos ORM del módulo Payments.

- PaymentAttempt: intento de pago on-chain
- PaymentEvent: audit trail del intento

Autor: Ixchel Beristain
Fecha: 2025-11-21
"""

from __future__ import annotations

# El FK a billing_accounts requiere la tabla registrada en el mismo metadata
from app.modules.billing.credits.models import BillingAccount  # noqa: F401

from .payment_attempt_models import PaymentAttempt
from .payment_event_models import PaymentEvent

__all__ = [
    "PaymentAttempt",
    "PaymentEvent",
]
# Fin del archivo backend/app/modules/payments/models/__init__.py
