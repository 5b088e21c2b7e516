# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pagos on-chain (USDC) para el servicio de créditos.

Descripción:
    Centraliza la política de pagos: red y token aceptados, dirección
    custodia receptora, límites de monto, conversión a créditos,
    umbral de confirmaciones, ventanas de expiración y el indexador
    usado para verificar transferencias.

Autor: Equipo Billing
Fecha: 25/10/2025 (pagos on-chain 2026-02-03)
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos on-chain."""

    # =========================================================================
    # RED / TOKEN / CUSTODIA
    # =========================================================================

    chain_id: int = Field(
        default=8453,
        description="Chain ID EVM donde se aceptan pagos (8453 = Base mainnet)"
    )

    token_address: str = Field(
        default="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        description="Contrato del token aceptado (USDC en Base)"
    )

    receiving_address: Optional[str] = Field(
        default=None,
        description="Dirección custodia que recibe los pagos"
    )

    raw_units_per_cent: int = Field(
        default=10_000,
        description="Unidades mínimas del token por centavo USD (USDC: 6 decimales)"
    )

    # =========================================================================
    # LÍMITES
    # =========================================================================

    min_payment_amount_cents: int = Field(
        default=100,
        description="Monto mínimo de pago en centavos (1.00 USD)"
    )

    max_payment_amount_cents: int = Field(
        default=1_000_000,
        description="Monto máximo de pago en centavos (10,000 USD)"
    )

    # =========================================================================
    # CRÉDITOS
    # =========================================================================

    credits_per_cent: int = Field(
        default=10,
        description="Créditos otorgados por cada centavo USD pagado"
    )

    # =========================================================================
    # VERIFICACIÓN Y TIMEOUTS
    # =========================================================================

    min_confirmations: int = Field(
        default=5,
        description="Confirmaciones mínimas para acreditar un pago"
    )

    intent_ttl_minutes: int = Field(
        default=30,
        description="Minutos que un intent CREATED espera el tx hash"
    )

    receipt_timeout_hours: int = Field(
        default=24,
        description="Horas tras el envío del tx hash antes de fallar por recibo ausente"
    )

    verifier_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout de una llamada al verificador on-chain"
    )

    verify_throttle_seconds: int = Field(
        default=10,
        description="Intervalo mínimo entre verificaciones de un mismo intento"
    )

    # =========================================================================
    # INDEXADOR
    # =========================================================================

    onchain_indexer_url: Optional[str] = Field(
        default=None,
        description="URL base del indexador de transferencias"
    )

    onchain_indexer_api_key: Optional[SecretStr] = Field(
        default=None,
        description="API key del indexador (header X-API-Key)"
    )

    @field_validator("min_confirmations", "raw_units_per_cent", "credits_per_cent")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("debe ser un entero positivo")
        return v

    @field_validator("onchain_indexer_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            return v or None
        return v

    @property
    def is_configured(self) -> bool:
        """True si hay dirección receptora e indexador para verificar."""
        return bool(self.receiving_address and self.onchain_indexer_url)

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
