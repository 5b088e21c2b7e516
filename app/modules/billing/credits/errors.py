# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credits/errors.py

Excepciones de dominio del ledger de créditos.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import uuid


class BillingAccountNotFoundError(LookupError):
    """La cuenta de billing no existe."""

    def __init__(self, billing_account_id: uuid.UUID):
        self.billing_account_id = billing_account_id
        super().__init__(f"Billing account {billing_account_id} not found")


class InsufficientCreditsError(ValueError):
    """El cargo dejaría el saldo en negativo."""

    def __init__(self, billing_account_id: uuid.UUID, requested: int):
        self.billing_account_id = billing_account_id
        self.requested = requested
        super().__init__(
            f"Insufficient credits in account {billing_account_id}: requested {requested}"
        )


__all__ = ["BillingAccountNotFoundError", "InsufficientCreditsError"]
# Fin del archivo backend/app/modules/billing/credits/errors.py
