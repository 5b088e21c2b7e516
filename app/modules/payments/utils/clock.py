# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/utils/clock.py

Reloj inyectable para el motor de pagos.

Los timeouts (TTL del intent, ventana de recibo, throttle de verificación)
se evalúan perezosamente contra clock.now(); los tests inyectan un reloj
fijo para avanzar el tiempo sin esperar.

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from .datetime_helpers import utcnow


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime:
        """Instante actual, UTC timezone-aware."""
        ...


class SystemClock:
    """Reloj de pared (UTC)."""

    def now(self) -> datetime:
        return utcnow()


__all__ = ["Clock", "SystemClock"]
# Fin del archivo backend/app/modules/payments/utils/clock.py
