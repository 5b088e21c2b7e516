# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/onchain_verifier.py

Puerto del verificador on-chain.

El verificador consulta un oráculo externo (indexador de la cadena) y
reporta lo que realmente ocurrió con una transacción. Es idempotente y sin
efectos: puede llamarse cualquier número de veces para el mismo tx_hash.
La decisión de negocio (comparar contra el intent) la toma el motor.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Protocol, runtime_checkable


class VerificationStatus(StrEnum):
    VERIFIED = "VERIFIED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class VerificationResult:
    """Resultado transitorio de una verificación (no se persiste)."""
    status: VerificationStatus
    actual_from: Optional[str] = None
    actual_to: Optional[str] = None
    actual_amount: Optional[int] = None
    actual_token: Optional[str] = None
    confirmations: Optional[int] = None
    error_code: Optional[str] = None

    @classmethod
    def pending(cls, confirmations: Optional[int] = None) -> "VerificationResult":
        return cls(status=VerificationStatus.PENDING, confirmations=confirmations)

    @classmethod
    def rejected(cls, error_code: str) -> "VerificationResult":
        return cls(status=VerificationStatus.REJECTED, error_code=error_code)


class VerifierUnavailableError(Exception):
    """El oráculo no respondió o respondió algo inutilizable (transitorio)."""


@runtime_checkable
class OnChainVerifier(Protocol):
    async def verify(self, chain_id: int, tx_hash: str) -> VerificationResult:
        """
        Reporta el estado observado de la transferencia tx_hash en chain_id.

        Raises:
            VerifierUnavailableError: fallo transitorio del oráculo
        """
        ...


__all__ = [
    "OnChainVerifier",
    "VerificationResult",
    "VerificationStatus",
    "VerifierUnavailableError",
]
# Fin del archivo backend/app/modules/payments/adapters/onchain_verifier.py
