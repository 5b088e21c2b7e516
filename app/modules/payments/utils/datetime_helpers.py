# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.

Autor: Ixchel Beristáin
Fecha: 26/10/2025
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Asegura que un datetime sea UTC timezone-aware.

    SQLite devuelve DateTime(timezone=True) como naive; se asume UTC.

    Examples:
        >>> ensure_utc(datetime(2025, 10, 26, 14, 30)).tzinfo == timezone.utc
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    if dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def to_iso8601(dt: Optional[datetime]) -> Optional[str]:
    """
    Convierte datetime a string ISO 8601 con 'Z' para UTC.

    Examples:
        >>> to_iso8601(datetime(2025, 10, 26, 14, 30, tzinfo=timezone.utc))
        '2025-10-26T14:30:00Z'
    """
    if dt is None:
        return None
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


__all__ = ["utcnow", "ensure_utc", "to_iso8601"]
# Fin del archivo backend/app/modules/payments/utils/datetime_helpers.py
