# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/test_intent_manager.py

Creación de intents on-chain.
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from app.modules.billing.credits import BillingAccount, CreditLedgerEntry
from app.modules.payments.enums import PaymentAttemptStatus, PaymentEventType
from app.modules.payments.facades.settlement import (
    InvalidPaymentAmountError,
    InvalidWalletAddressError,
)
from app.modules.payments.repositories import (
    PaymentAttemptRepository,
    PaymentEventRepository,
)


@pytest.mark.asyncio
async def test_create_intent_for_owner_pins_transfer_terms(
    db_session, intent_manager, clock, addresses
):
    intent = await intent_manager.create_intent_for_owner(
        db_session,
        owner_id="user-1",
        amount_usd_cents=2500,
        from_address=addresses["sender"],
    )

    assert intent.chain_id == 8453
    assert intent.token == addresses["token"]
    assert intent.recipient_address == addresses["recipient"]
    assert intent.from_address == addresses["sender"]
    assert intent.amount_usd_cents == 2500
    assert intent.amount_raw == 25_000_000
    assert intent.expires_at == clock.now() + timedelta(minutes=30)

    attempt = await PaymentAttemptRepository().get(db_session, intent.attempt_id)
    assert attempt.status == PaymentAttemptStatus.CREATED
    assert attempt.tx_hash is None
    assert attempt.verify_attempt_count == 0

    events = await PaymentEventRepository().list_by_attempt(db_session, intent.attempt_id)
    assert [e.event_type for e in events] == [PaymentEventType.INTENT_CREATED.value]

    ledger = await db_session.execute(select(func.count()).select_from(CreditLedgerEntry))
    assert ledger.scalar_one() == 0


@pytest.mark.asyncio
async def test_intents_of_same_owner_share_account(db_session, intent_manager, addresses):
    first = await intent_manager.create_intent_for_owner(
        db_session, owner_id="user-1", amount_usd_cents=100, from_address=addresses["sender"]
    )
    second = await intent_manager.create_intent_for_owner(
        db_session, owner_id="user-1", amount_usd_cents=200, from_address=addresses["sender"]
    )

    repo = PaymentAttemptRepository()
    a1 = await repo.get(db_session, first.attempt_id)
    a2 = await repo.get(db_session, second.attempt_id)
    assert a1.billing_account_id == a2.billing_account_id
    assert first.attempt_id != second.attempt_id


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -100, 99, 1_000_001, 25.0, True])
async def test_invalid_amount_leaves_no_trace(db_session, intent_manager, addresses, amount):
    with pytest.raises(InvalidPaymentAmountError):
        await intent_manager.create_intent_for_owner(
            db_session, owner_id="user-1", amount_usd_cents=amount, from_address=addresses["sender"]
        )

    accounts = await db_session.execute(select(func.count()).select_from(BillingAccount))
    assert accounts.scalar_one() == 0


@pytest.mark.asyncio
async def test_invalid_sender_address(db_session, intent_manager):
    with pytest.raises(InvalidWalletAddressError):
        await intent_manager.create_intent_for_owner(
            db_session, owner_id="user-1", amount_usd_cents=2500, from_address="not-a-wallet"
        )
