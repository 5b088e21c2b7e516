# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- json_column_type: JSON portable (JSONB en PostgreSQL, JSON en SQLite)

Autor: Equipo Billing
Fecha: 2026-02-03
"""

from __future__ import annotations

from sqlalchemy import JSON, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeEngine

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def json_column_type() -> TypeEngine:
    """
    Tipo JSON que se materializa como JSONB en PostgreSQL.

    En SQLite (tests) cae a JSON genérico, evitando parchear tipos en conftest.
    """
    return JSON().with_variant(JSONB(), "postgresql")


__all__ = ["Base", "NAMING_CONVENTION", "json_column_type"]

# Fin del archivo backend/app/shared/database/base.py
