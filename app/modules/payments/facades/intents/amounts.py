# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/intents/amounts.py

Conversiones de monto en aritmética entera.

- USD cents -> unidades mínimas del token (USDC: 6 decimales => 10_000 por centavo)
- USD cents -> créditos

Nunca se usa punto flotante: el monto prometido on-chain debe ser
reproducible bit a bit por cualquier cliente.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

from ..settlement.errors import InvalidPaymentAmountError


def validate_amount_cents(amount_usd_cents: object, *, min_cents: int, max_cents: int) -> int:
    """
    Valida que el monto sea un int (no bool, no float) positivo y dentro de límites.

    Raises:
        InvalidPaymentAmountError
    """
    if isinstance(amount_usd_cents, bool) or not isinstance(amount_usd_cents, int):
        raise InvalidPaymentAmountError("amount_usd_cents must be an integer", amount_usd_cents)
    if amount_usd_cents <= 0:
        raise InvalidPaymentAmountError("amount_usd_cents must be positive", amount_usd_cents)
    if amount_usd_cents < min_cents or amount_usd_cents > max_cents:
        raise InvalidPaymentAmountError(
            f"amount_usd_cents must be between {min_cents} and {max_cents}",
            amount_usd_cents,
        )
    return amount_usd_cents


def usd_cents_to_raw(amount_usd_cents: int, raw_units_per_cent: int) -> int:
    """
    >>> usd_cents_to_raw(500, 10_000)
    5000000
    """
    return amount_usd_cents * raw_units_per_cent


def usd_cents_to_credits(amount_usd_cents: int, credits_per_cent: int) -> int:
    """
    >>> usd_cents_to_credits(500, 10)
    5000
    """
    return amount_usd_cents * credits_per_cent


__all__ = [
    "validate_amount_cents",
    "usd_cents_to_raw",
    "usd_cents_to_credits",
]
# Fin del archivo backend/app/modules/payments/facades/intents/amounts.py
