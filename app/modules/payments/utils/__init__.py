# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/utils/__init__.py

Utilidades de tiempo del módulo de pagos.
"""

from .clock import Clock, SystemClock
from .datetime_helpers import ensure_utc, to_iso8601, utcnow

__all__ = ["Clock", "SystemClock", "utcnow", "ensure_utc", "to_iso8601"]
# Fin del archivo backend/app/modules/payments/utils/__init__.py
