# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/test_indexer_verifier.py

Adaptador HTTP del indexador con httpx.MockTransport.
Verifica URL y headers, mapeo del cuerpo JSON y que los fallos
transitorios se reporten como VerifierUnavailableError.
"""

import httpx
import pytest

from app.modules.payments.adapters import (
    IndexerOnChainVerifier,
    OnChainVerifier,
    VerificationStatus,
    VerifierUnavailableError,
)

TX = "0x" + "ab" * 32


def _verifier(handler) -> IndexerOnChainVerifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return IndexerOnChainVerifier("https://indexer.test/", api_key="k-123", client=client)


@pytest.mark.asyncio
async def test_verified_transfer_is_mapped():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["api_key"] = request.headers.get("X-API-Key")
        return httpx.Response(
            200,
            json={
                "status": "verified",
                "from": "0x1111111111111111111111111111111111111111",
                "to": "0x2222222222222222222222222222222222222222",
                "amount": "25000000",
                "token": "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
                "confirmations": 7,
            },
        )

    verifier = _verifier(handler)
    result = await verifier.verify(8453, TX)

    assert isinstance(verifier, OnChainVerifier)
    assert seen["url"] == f"https://indexer.test/v1/transfers/8453/{TX}"
    assert seen["api_key"] == "k-123"
    assert result.status == VerificationStatus.VERIFIED
    assert result.actual_amount == 25_000_000
    assert result.confirmations == 7
    assert result.actual_token == "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"


@pytest.mark.asyncio
async def test_rejected_transfer_carries_error_code():
    verifier = _verifier(
        lambda request: httpx.Response(200, json={"status": "REJECTED", "error_code": "TX_REVERTED"})
    )
    result = await verifier.verify(8453, TX)

    assert result.status == VerificationStatus.REJECTED
    assert result.error_code == "TX_REVERTED"


@pytest.mark.asyncio
async def test_not_indexed_yet_is_pending():
    verifier = _verifier(lambda request: httpx.Response(404, json={"detail": "not found"}))
    result = await verifier.verify(8453, TX)

    assert result.status == VerificationStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(502, text="bad gateway"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=["a", "list"]),
        httpx.Response(200, json={"status": "MAYBE"}),
        httpx.Response(200, json={"status": "VERIFIED", "amount": "12.5"}),
    ],
)
async def test_unusable_responses_are_unavailable(response):
    verifier = _verifier(lambda request: response)
    with pytest.raises(VerifierUnavailableError):
        await verifier.verify(8453, TX)


@pytest.mark.asyncio
async def test_transport_error_is_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    verifier = _verifier(handler)
    with pytest.raises(VerifierUnavailableError):
        await verifier.verify(8453, TX)


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
    verifier = IndexerOnChainVerifier("https://indexer.test", client=client)

    await verifier.aclose()

    assert not client.is_closed
    await client.aclose()
