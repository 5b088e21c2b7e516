# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/__init__.py

Punto de entrada para los esquemas Pydantic del módulo Payments.
"""

from __future__ import annotations

from .payment_attempt_schemas import (
    AttemptStatusResponse,
    CreateIntentRequest,
    IntentResponse,
    SubmitTxRequest,
)

__all__ = [
    "CreateIntentRequest",
    "IntentResponse",
    "SubmitTxRequest",
    "AttemptStatusResponse",
]

# Fin del archivo backend/app/modules/payments/schemas/__init__.py
