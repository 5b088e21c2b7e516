# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/test_state_rules.py

Reglas puras de la máquina de estados y de la comparación de transferencias.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.modules.payments.adapters import VerificationResult, VerificationStatus
from app.modules.payments.enums import (
    ClientVisibleStatus,
    PaymentAttemptStatus as S,
    PaymentErrorCode,
)
from app.modules.payments.facades.settlement import rules
from app.modules.payments.facades.settlement.errors import (
    InvalidStateTransitionError,
    InvalidTxHashError,
    InvalidWalletAddressError,
)

NOW = datetime(2026, 2, 3, 12, 0, tzinfo=timezone.utc)
SENDER = "0x1111111111111111111111111111111111111111"
TOKEN = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
RECIPIENT = "0x2222222222222222222222222222222222222222"


def _transfer(**overrides) -> VerificationResult:
    data = dict(
        status=VerificationStatus.VERIFIED,
        actual_from=SENDER,
        actual_to=RECIPIENT,
        actual_amount=25_000_000,
        actual_token=TOKEN,
        confirmations=10,
    )
    data.update(overrides)
    return VerificationResult(**data)


def _mismatch(result: VerificationResult):
    return rules.find_transfer_mismatch(
        expected_from=SENDER,
        expected_token=TOKEN,
        expected_to=RECIPIENT,
        expected_amount_raw=25_000_000,
        result=result,
    )


@pytest.mark.parametrize(
    "from_status,to_status",
    [
        (S.CREATED, S.PENDING_UNVERIFIED),
        (S.CREATED, S.FAILED),
        (S.PENDING_UNVERIFIED, S.CREDITED),
        (S.PENDING_UNVERIFIED, S.REJECTED),
        (S.PENDING_UNVERIFIED, S.FAILED),
    ],
)
def test_allowed_transitions(from_status, to_status):
    assert rules.is_valid_transition(from_status, to_status)
    rules.ensure_transition(from_status, to_status)


@pytest.mark.parametrize("terminal", [S.CREDITED, S.REJECTED, S.FAILED])
@pytest.mark.parametrize("target", list(S))
def test_terminal_states_never_transition(terminal, target):
    assert not rules.is_valid_transition(terminal, target)
    with pytest.raises(InvalidStateTransitionError):
        rules.ensure_transition(terminal, target)


def test_created_cannot_jump_to_credited():
    with pytest.raises(InvalidStateTransitionError):
        rules.ensure_transition(S.CREATED, S.CREDITED)


def test_client_status_vocabulary():
    assert rules.to_client_status(S.CREATED) == ClientVisibleStatus.PENDING_VERIFICATION
    assert rules.to_client_status(S.PENDING_UNVERIFIED) == ClientVisibleStatus.PENDING_VERIFICATION
    assert rules.to_client_status(S.CREDITED) == ClientVisibleStatus.CONFIRMED
    assert rules.to_client_status(S.REJECTED) == ClientVisibleStatus.REJECTED
    assert rules.to_client_status(S.FAILED) == ClientVisibleStatus.FAILED


def test_intent_expiry_is_inclusive_and_only_for_created():
    expires = NOW
    assert rules.is_intent_expired(S.CREATED, expires, NOW)
    assert not rules.is_intent_expired(S.CREATED, expires, NOW - timedelta(seconds=1))
    assert not rules.is_intent_expired(S.PENDING_UNVERIFIED, expires, NOW + timedelta(days=1))


def test_receipt_timeout_is_strictly_greater_than_window():
    window = timedelta(hours=24)
    submitted = NOW - window
    assert not rules.is_receipt_timed_out(S.PENDING_UNVERIFIED, submitted, NOW, window)
    assert rules.is_receipt_timed_out(
        S.PENDING_UNVERIFIED, submitted, NOW + timedelta(seconds=1), window
    )
    assert not rules.is_receipt_timed_out(S.CREATED, submitted, NOW + timedelta(days=2), window)


def test_receipt_timeout_accepts_naive_sqlite_datetimes():
    submitted = (NOW - timedelta(hours=25)).replace(tzinfo=None)
    assert rules.is_receipt_timed_out(S.PENDING_UNVERIFIED, submitted, NOW, timedelta(hours=24))


def test_verification_throttle():
    throttle = timedelta(seconds=10)
    assert not rules.should_throttle_verification(None, NOW, throttle)
    assert rules.should_throttle_verification(NOW - timedelta(seconds=5), NOW, throttle)
    assert not rules.should_throttle_verification(NOW - timedelta(seconds=10), NOW, throttle)
    assert not rules.should_throttle_verification(NOW, NOW, timedelta(0))


def test_matching_transfer_has_no_mismatch():
    assert _mismatch(_transfer()) is None


def test_addresses_compare_case_insensitively():
    assert _mismatch(_transfer(actual_token=TOKEN.lower())) is None
    assert rules.addresses_equal("0xAbCdEf", "0xabcdef")
    assert not rules.addresses_equal(None, SENDER)


def test_overpayment_is_accepted():
    assert _mismatch(_transfer(actual_amount=30_000_000)) is None


def test_unreported_token_is_not_checked():
    assert _mismatch(_transfer(actual_token=None)) is None


def test_mismatch_order_sender_first():
    result = _transfer(
        actual_from="0x3333333333333333333333333333333333333333",
        actual_token="0x4444444444444444444444444444444444444444",
        actual_to="0x5555555555555555555555555555555555555555",
        actual_amount=1,
    )
    assert _mismatch(result) == PaymentErrorCode.SENDER_MISMATCH


def test_mismatch_order_token_before_recipient():
    result = _transfer(
        actual_token="0x4444444444444444444444444444444444444444",
        actual_to="0x5555555555555555555555555555555555555555",
    )
    assert _mismatch(result) == PaymentErrorCode.INVALID_TOKEN


def test_mismatch_order_recipient_before_amount():
    result = _transfer(actual_to="0x5555555555555555555555555555555555555555", actual_amount=1)
    assert _mismatch(result) == PaymentErrorCode.RECIPIENT_MISMATCH


def test_underpayment_is_insufficient_amount():
    assert _mismatch(_transfer(actual_amount=24_999_999)) == PaymentErrorCode.INSUFFICIENT_AMOUNT
    assert _mismatch(_transfer(actual_amount=None)) == PaymentErrorCode.INSUFFICIENT_AMOUNT


def test_normalize_tx_hash():
    raw = "0x" + "AB" * 32
    assert rules.normalize_tx_hash(f"  {raw} ") == raw.lower()


@pytest.mark.parametrize("bad", ["", "0x123", "ab" * 32, "0x" + "zz" * 32, "0x" + "ab" * 33])
def test_normalize_tx_hash_rejects(bad):
    with pytest.raises(InvalidTxHashError):
        rules.normalize_tx_hash(bad)


def test_normalize_address_keeps_checksum_case():
    assert rules.normalize_address(TOKEN) == TOKEN
    with pytest.raises(InvalidWalletAddressError):
        rules.normalize_address("0x1234")


def test_unknown_verifier_code_maps_to_verification_rejected():
    assert PaymentErrorCode.from_verifier("TX_REVERTED") == PaymentErrorCode.TX_REVERTED
    assert PaymentErrorCode.from_verifier("SOMETHING_NEW") == PaymentErrorCode.VERIFICATION_REJECTED
    assert PaymentErrorCode.from_verifier(None) == PaymentErrorCode.VERIFICATION_REJECTED
