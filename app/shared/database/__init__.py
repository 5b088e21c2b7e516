# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Equipo Billing
Fecha: 2025-10-18 (Consolidación modular; ajustado 2026-02-03)
"""

from __future__ import annotations

from .base import Base, NAMING_CONVENTION, json_column_type
from .database import (
    engine,
    SessionLocal,
    get_async_session,
    session_scope,
    create_all_tables,
    check_database_health,
)

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "NAMING_CONVENTION",
    "json_column_type",
    "get_async_session",
    "session_scope",
    "create_all_tables",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
