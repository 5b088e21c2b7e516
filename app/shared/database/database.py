# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async + asyncpg.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Base (DeclarativeBase con naming convention)
- Dependencia FastAPI: get_async_session
- context manager: session_scope()
- create_all_tables() para entornos sin migraciones SQL
- check_database_health()

Notas:
- Los servicios solo hacen flush(); el commit es responsabilidad de la ruta.
- La serialización entre requests concurrentes la dan los UNIQUE constraints,
  no locks en proceso.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.shared.config import settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)

DB_ECHO_SQL = bool(getattr(settings, "db_echo_sql", False))

engine = create_async_engine(
    settings.database_url,
    echo=DB_ECHO_SQL,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
)

# ── Session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


# ── Dependencia FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Context manager reutilizable en scripts/tests
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
            # El commit/rollback queda a quien use el scope
        finally:
            if session.in_transaction():
                await session.rollback()


async def create_all_tables() -> None:
    """
    Crea las tablas registradas en Base.metadata (idempotente).

    Importa los modelos para registrarlos antes del create_all.
    """
    import app.modules.billing.credits.models  # noqa: F401
    import app.modules.payments.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("[DB] Tablas verificadas/creadas: %s", sorted(Base.metadata.tables))


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (TimeoutError, SQLAlchemyError, OSError) as e:
        logger.warning("[DB] Health check fallido: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "session_scope",
    "create_all_tables",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
