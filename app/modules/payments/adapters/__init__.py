# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/adapters/__init__.py

Adaptadores para integraciones externas (verificación on-chain).
"""

from .indexer_http_verifier import IndexerOnChainVerifier
from .onchain_verifier import (
    OnChainVerifier,
    VerificationResult,
    VerificationStatus,
    VerifierUnavailableError,
)

__all__ = [
    "OnChainVerifier",
    "VerificationResult",
    "VerificationStatus",
    "VerifierUnavailableError",
    "IndexerOnChainVerifier",
]
# Fin del archivo backend/app/modules/payments/adapters/__init__.py
