# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/test_amounts.py

Conversiones de monto en aritmética entera y validación de centavos.
"""

import pytest

from app.modules.payments.facades.intents import (
    usd_cents_to_credits,
    usd_cents_to_raw,
    validate_amount_cents,
)
from app.modules.payments.facades.settlement import InvalidPaymentAmountError


def test_usdc_raw_units_are_exact():
    # USDC tiene 6 decimales: 1 centavo = 10_000 unidades mínimas
    assert usd_cents_to_raw(1, 10_000) == 10_000
    assert usd_cents_to_raw(2500, 10_000) == 25_000_000
    assert usd_cents_to_raw(1_000_000, 10_000) == 10_000_000_000


def test_credits_per_cent():
    assert usd_cents_to_credits(2500, 10) == 25_000


@pytest.mark.parametrize("value", [100, 2500, 1_000_000])
def test_validate_amount_accepts_ints_in_range(value):
    assert validate_amount_cents(value, min_cents=100, max_cents=1_000_000) == value


@pytest.mark.parametrize("value", [0, -1, 99, 1_000_001, 25.0, True, "2500", None])
def test_validate_amount_rejects(value):
    with pytest.raises(InvalidPaymentAmountError) as exc:
        validate_amount_cents(value, min_cents=100, max_cents=1_000_000)
    assert isinstance(exc.value, ValueError)
    assert exc.value.amount == value
