# -*- coding: utf-8 -*-
"""
backend/tests/modules/billing/test_credit_ledger_service.py

Tests del ledger de créditos.
Verifica:
- settle crea un movimiento con balance_after y actualiza el saldo
- Idempotencia por reference (serie y carrera simulada)
- El hook on_settled corre en el SAVEPOINT y su fallo deshace el abono
- charge_usage no permite saldo negativo
- Resumen paginado, más recientes primero
"""

import uuid

import pytest
from sqlalchemy import func, select

from app.modules.billing.credits import (
    BillingAccountNotFoundError,
    CreditLedgerEntry,
    CreditLedgerService,
    InsufficientCreditsError,
    LedgerReason,
)
from app.modules.billing.credits.repositories import CreditLedgerRepository


async def _ledger_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(CreditLedgerEntry))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_settle_creates_entry_and_updates_balance(db_session, make_account):
    account = await make_account("user-1")
    service = CreditLedgerService()

    result = await service.settle(
        db_session,
        billing_account_id=account.id,
        reference="8453:0xabc",
        amount=25_000,
        reason=LedgerReason.ON_CHAIN_PAYMENT,
        entry_metadata={"attempt_id": "a-1"},
    )

    assert result.created is True
    assert result.amount == 25_000
    assert result.balance_after == 25_000

    await db_session.refresh(account)
    assert account.balance_credits == 25_000

    entry = await CreditLedgerRepository().get_by_reference(db_session, account.id, "8453:0xabc")
    assert entry is not None
    assert entry.reason == "on_chain_payment"
    assert entry.entry_metadata == {"attempt_id": "a-1"}


@pytest.mark.asyncio
async def test_settle_same_reference_twice_applies_once(db_session, make_account):
    account = await make_account("user-1")
    service = CreditLedgerService()

    first = await service.settle(
        db_session,
        billing_account_id=account.id,
        reference="8453:0xabc",
        amount=1_000,
        reason=LedgerReason.ON_CHAIN_PAYMENT,
    )
    second = await service.settle(
        db_session,
        billing_account_id=account.id,
        reference="8453:0xabc",
        amount=1_000,
        reason=LedgerReason.ON_CHAIN_PAYMENT,
    )

    assert first.created is True
    assert second.result == "already_settled"
    assert second.entry_id == first.entry_id
    assert second.balance_after == 1_000
    assert await _ledger_count(db_session) == 1

    await db_session.refresh(account)
    assert account.balance_credits == 1_000


@pytest.mark.asyncio
async def test_settle_race_lost_returns_existing_entry(session_factory):
    """
    Dos requests con el mismo reference: el segundo no vio el movimiento en
    su lectura previa y choca con el UNIQUE. Debe devolver el existente.
    """
    from app.modules.billing.credits.repositories import BillingAccountRepository

    async with session_factory() as s1:
        account, _ = await BillingAccountRepository().get_or_create_for_owner(s1, "user-1")
        winner = await CreditLedgerService().settle(
            s1,
            billing_account_id=account.id,
            reference="8453:0xrace",
            amount=500,
            reason=LedgerReason.ON_CHAIN_PAYMENT,
        )
        await s1.commit()

    class StaleFirstRead(CreditLedgerRepository):
        """Primera lectura ciega (como si el otro request aún no commiteara)."""

        def __init__(self):
            super().__init__()
            self.reads = 0

        async def get_by_reference(self, session, billing_account_id, reference):
            self.reads += 1
            if self.reads == 1:
                return None
            return await super().get_by_reference(session, billing_account_id, reference)

    async with session_factory() as s2:
        loser = await CreditLedgerService(ledger_repo=StaleFirstRead()).settle(
            s2,
            billing_account_id=account.id,
            reference="8453:0xrace",
            amount=500,
            reason=LedgerReason.ON_CHAIN_PAYMENT,
        )
        await s2.commit()

        assert loser.result == "already_settled"
        assert loser.entry_id == winner.entry_id
        assert loser.balance_after == 500
        assert await _ledger_count(s2) == 1

        refreshed = await BillingAccountRepository().get_by_id(s2, account.id, refresh=True)
        assert refreshed.balance_credits == 500


@pytest.mark.asyncio
async def test_on_settled_hook_failure_rolls_back_credit(db_session, make_account):
    account = await make_account("user-1")

    async def _boom(entry):
        raise RuntimeError("hook failed")

    with pytest.raises(RuntimeError):
        await CreditLedgerService().settle(
            db_session,
            billing_account_id=account.id,
            reference="8453:0xhook",
            amount=700,
            reason=LedgerReason.ON_CHAIN_PAYMENT,
            on_settled=_boom,
        )

    assert await _ledger_count(db_session) == 0
    await db_session.refresh(account)
    assert account.balance_credits == 0


@pytest.mark.asyncio
async def test_on_settled_hook_receives_entry(db_session, make_account):
    account = await make_account("user-1")
    seen = []

    async def _record(entry):
        seen.append((entry.reference, entry.balance_after))

    await CreditLedgerService().settle(
        db_session,
        billing_account_id=account.id,
        reference="8453:0xseen",
        amount=300,
        reason=LedgerReason.ON_CHAIN_PAYMENT,
        on_settled=_record,
    )

    assert seen == [("8453:0xseen", 300)]


@pytest.mark.asyncio
async def test_charge_usage_cannot_overdraw(db_session, make_account):
    account = await make_account("user-1", balance=100)
    service = CreditLedgerService()

    with pytest.raises(InsufficientCreditsError) as exc:
        await service.charge_usage(
            db_session,
            billing_account_id=account.id,
            reference="usage:req-1",
            credits=101,
        )
    assert exc.value.requested == 101

    await db_session.refresh(account)
    assert account.balance_credits == 100
    assert await _ledger_count(db_session) == 0


@pytest.mark.asyncio
async def test_charge_usage_debits_and_is_idempotent(db_session, make_account):
    account = await make_account("user-1", balance=100)
    service = CreditLedgerService()

    first = await service.charge_usage(
        db_session, billing_account_id=account.id, reference="usage:req-2", credits=40
    )
    again = await service.charge_usage(
        db_session, billing_account_id=account.id, reference="usage:req-2", credits=40
    )

    assert first.amount == -40
    assert first.balance_after == 60
    assert again.result == "already_settled"

    await db_session.refresh(account)
    assert account.balance_credits == 60


@pytest.mark.asyncio
@pytest.mark.parametrize("credits", [0, -5, True])
async def test_charge_usage_rejects_non_positive_credits(db_session, make_account, credits):
    account = await make_account("user-1", balance=100)
    with pytest.raises(ValueError):
        await CreditLedgerService().charge_usage(
            db_session, billing_account_id=account.id, reference="usage:bad", credits=credits
        )


@pytest.mark.asyncio
async def test_settle_unknown_account_raises(db_session):
    with pytest.raises(BillingAccountNotFoundError):
        await CreditLedgerService().settle(
            db_session,
            billing_account_id=uuid.uuid4(),
            reference="8453:0xnope",
            amount=10,
            reason=LedgerReason.ON_CHAIN_PAYMENT,
        )


@pytest.mark.asyncio
async def test_ledger_summary_is_newest_first_and_paginated(db_session, make_account):
    account = await make_account("user-1")
    service = CreditLedgerService()
    for i in range(3):
        await service.settle(
            db_session,
            billing_account_id=account.id,
            reference=f"8453:0x{i}",
            amount=100,
            reason=LedgerReason.ON_CHAIN_PAYMENT,
        )

    summary = await service.get_ledger_summary(db_session, account.id, limit=2, offset=0)

    assert summary.balance_credits == 300
    assert summary.total_entries == 3
    assert [e.reference for e in summary.entries] == ["8453:0x2", "8453:0x1"]
    assert [e.balance_after for e in summary.entries] == [300, 200]


@pytest.mark.asyncio
async def test_ledger_summary_for_owner_without_account(db_session):
    summary = await CreditLedgerService().get_ledger_summary_for_owner(db_session, "nobody")

    assert summary.billing_account_id is None
    assert summary.balance_credits == 0
    assert summary.entries == []
