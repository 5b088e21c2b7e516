# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/indexer_http_verifier.py

Adapter HTTP del verificador on-chain contra un indexador de transferencias.

Contrato del indexador:
    GET {base_url}/v1/transfers/{chain_id}/{tx_hash}
    200 -> {"status": "VERIFIED"|"PENDING"|"REJECTED",
            "from": "0x..", "to": "0x..", "token": "0x..",
            "amount": "5000000", "confirmations": 12, "error_code": null}
    404 -> transacción aún no indexada (PENDING)

Errores de transporte, 5xx y cuerpos inválidos se reportan como
VerifierUnavailableError: el motor los trata como PENDING.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .onchain_verifier import (
    VerificationResult,
    VerificationStatus,
    VerifierUnavailableError,
)

logger = logging.getLogger(__name__)


def _parse_amount(value: Any) -> Optional[int]:
    """Monto en unidades mínimas; llega como string decimal para no perder precisión."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("amount must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"amount must be a decimal integer string, got {value!r}")


def _parse_result(body: dict[str, Any]) -> VerificationResult:
    status = VerificationStatus(str(body.get("status", "")).upper())
    confirmations = body.get("confirmations")
    return VerificationResult(
        status=status,
        actual_from=body.get("from"),
        actual_to=body.get("to"),
        actual_amount=_parse_amount(body.get("amount")),
        actual_token=body.get("token"),
        confirmations=int(confirmations) if confirmations is not None else None,
        error_code=body.get("error_code"),
    )


class IndexerOnChainVerifier:
    """
    OnChainVerifier respaldado por httpx.AsyncClient.

    El cliente se puede inyectar (tests con httpx.MockTransport); si no, se
    crea uno propio que se cierra con aclose().
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if api_key:
            headers["X-API-Key"] = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    async def verify(self, chain_id: int, tx_hash: str) -> VerificationResult:
        url = f"{self.base_url}/v1/transfers/{chain_id}/{tx_hash}"
        try:
            response = await self._client.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            logger.warning("indexer_request_failed chain_id=%s tx_hash=%s error=%r", chain_id, tx_hash, e)
            raise VerifierUnavailableError(f"Indexer request failed: {e!r}") from e

        if response.status_code == 404:
            logger.debug("indexer_tx_not_indexed chain_id=%s tx_hash=%s", chain_id, tx_hash)
            return VerificationResult.pending()

        if response.status_code != 200:
            logger.warning(
                "indexer_bad_status chain_id=%s tx_hash=%s status=%d",
                chain_id, tx_hash, response.status_code,
            )
            raise VerifierUnavailableError(f"Indexer returned HTTP {response.status_code}")

        try:
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError("body must be a JSON object")
            result = _parse_result(body)
        except (ValueError, TypeError) as e:
            logger.warning("indexer_bad_payload chain_id=%s tx_hash=%s error=%s", chain_id, tx_hash, e)
            raise VerifierUnavailableError(f"Indexer returned an invalid payload: {e}") from e

        logger.debug(
            "indexer_result chain_id=%s tx_hash=%s status=%s confirmations=%s",
            chain_id, tx_hash, result.status, result.confirmations,
        )
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["IndexerOnChainVerifier"]
# Fin del archivo backend/app/modules/payments/adapters/indexer_http_verifier.py
