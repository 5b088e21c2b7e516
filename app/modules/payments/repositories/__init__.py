# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Punto de entrada de repositorios del módulo Payments.

Incluye:
- PaymentAttemptRepository
- PaymentEventRepository

Autor: Ixchel Beristain
Fecha: 2025-11-20
"""

from .payment_attempt_repository import PaymentAttemptRepository
from .payment_event_repository import PaymentEventRepository

__all__ = [
    "PaymentAttemptRepository",
    "PaymentEventRepository",
]

# Fin del archivo backend/app/modules/payments/repositories/__init__.py
