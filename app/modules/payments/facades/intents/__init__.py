# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/intents/__init__.py

Creación de intents de pago on-chain y conversiones de monto.
"""

from .amounts import usd_cents_to_credits, usd_cents_to_raw, validate_amount_cents
from .create_intent import PaymentIntent, PaymentIntentManager

__all__ = [
    "PaymentIntent",
    "PaymentIntentManager",
    "validate_amount_cents",
    "usd_cents_to_raw",
    "usd_cents_to_credits",
]
# Fin del archivo backend/app/modules/payments/facades/intents/__init__.py
