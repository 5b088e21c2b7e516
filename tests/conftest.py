# -*- coding: utf-8 -*-
"""
backend/tests/conftest.py

Config global de tests.

- PYTHON_ENV=test antes de importar la app (settings perezosos).
- Motor ASYNC sqlite+aiosqlite sobre archivo temporal por test, con
  SAVEPOINT funcional (BEGIN emitido por SQLAlchemy, no por el driver).
- Reloj fijo y verificador on-chain falso inyectables.
- Cliente httpx con ASGITransport + asgi-lifespan y overrides de dependencias.
"""

import os

os.environ.setdefault("PYTHON_ENV", "test")

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.modules.billing.credits.models  # noqa: F401
import app.modules.payments.models  # noqa: F401
from app.modules.billing.credits.repositories import BillingAccountRepository
from app.modules.payments.adapters import (
    VerificationResult,
    VerificationStatus,
)
from app.modules.payments.facades.intents import PaymentIntentManager
from app.modules.payments.facades.settlement import SettlementPolicy
from app.modules.payments.facades.settlement.engine import SettlementEngine
from app.shared.database import Base

USDC_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
RECEIVING_ADDRESS = "0x9999999999999999999999999999999999999999"
SENDER_ADDRESS = "0xAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAaAa"
T0 = datetime(2026, 2, 3, 12, 0, tzinfo=timezone.utc)


# ------------------------------------------------------------
# DOBLES: reloj y verificador
# ------------------------------------------------------------
class FixedClock:
    """Reloj controlado por el test."""

    def __init__(self, now: datetime = T0):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FakeOnChainVerifier:
    """Devuelve el resultado programado (o lanza la excepción programada)."""

    def __init__(self, result: Union[VerificationResult, BaseException, None] = None):
        self.result = result if result is not None else VerificationResult.pending()
        self.calls: list[tuple[int, str]] = []

    async def verify(self, chain_id: int, tx_hash: str) -> VerificationResult:
        self.calls.append((chain_id, tx_hash))
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


def _verified(
    amount_raw: int,
    *,
    confirmations: int = 5,
    sender: str = SENDER_ADDRESS,
    recipient: str = RECEIVING_ADDRESS,
    token: Optional[str] = USDC_BASE,
) -> VerificationResult:
    return VerificationResult(
        status=VerificationStatus.VERIFIED,
        actual_from=sender,
        actual_to=recipient,
        actual_amount=amount_raw,
        actual_token=token,
        confirmations=confirmations,
    )


# ------------------------------------------------------------
# BASE DE DATOS
# ------------------------------------------------------------
@pytest.fixture
async def db_engine(tmp_path):
    """
    Motor ASYNC SQLite en archivo temporal.

    pysqlite/aiosqlite gestionan BEGIN por su cuenta y rompen SAVEPOINT;
    se desactiva y SQLAlchemy emite BEGIN explícito.
    """
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'credits.db'}")

    @event.listens_for(eng.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(eng.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# ------------------------------------------------------------
# DOMINIO
# ------------------------------------------------------------
@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def verifier() -> FakeOnChainVerifier:
    return FakeOnChainVerifier()


@pytest.fixture
def policy() -> SettlementPolicy:
    # Sin throttle para poder re-verificar en el mismo instante
    return SettlementPolicy(
        chain_id=8453,
        token_address=USDC_BASE,
        receiving_address=RECEIVING_ADDRESS,
        min_confirmations=3,
        verify_throttle=timedelta(0),
    )


@pytest.fixture
def engine(verifier, clock, policy) -> SettlementEngine:
    return SettlementEngine(verifier=verifier, clock=clock, policy=policy)


@pytest.fixture
def intent_manager(clock, policy) -> PaymentIntentManager:
    return PaymentIntentManager(policy=policy, clock=clock)


@pytest.fixture
def make_account(db_session):
    """Factory: cuenta de billing para un owner (idempotente por owner)."""
    async def _make(owner_id: str = "user-1", balance: int = 0):
        account, _ = await BillingAccountRepository().get_or_create_for_owner(db_session, owner_id)
        if balance:
            account.balance_credits = balance
            await db_session.flush()
        return account
    return _make


@pytest.fixture
def make_intent(db_session, make_account, intent_manager):
    """Factory: intent CREATED_INTENT del owner dado."""
    async def _make(owner_id: str = "user-1", amount_usd_cents: int = 2500, from_address: str = SENDER_ADDRESS):
        account = await make_account(owner_id)
        return await intent_manager.create_intent(
            db_session,
            billing_account_id=account.id,
            amount_usd_cents=amount_usd_cents,
            from_address=from_address,
        )
    return _make


@pytest.fixture
def verified_transfer():
    """Factory de VerificationResult VERIFIED (por defecto coincide con el intent)."""
    return _verified


@pytest.fixture
def addresses() -> dict:
    return {
        "token": USDC_BASE,
        "recipient": RECEIVING_ADDRESS,
        "sender": SENDER_ADDRESS,
    }


@pytest.fixture
def tx_hash():
    """Factory de hashes válidos y distintos por semilla."""
    def _make(seed: int = 1) -> str:
        return "0x" + format(seed, "064x")
    return _make


# ------------------------------------------------------------
# APP FASTAPI Y CLIENTE HTTP
# ------------------------------------------------------------
@pytest.fixture
def app(session_factory, verifier, clock, policy):
    """
    App con dependencias sustituidas: sesión sobre el motor temporal,
    reloj fijo, verificador falso y política de test.
    """
    from app.main import app as fastapi_app
    from app.modules.payments.dependencies import (
        get_clock,
        get_onchain_verifier,
        get_payments_policy,
    )
    from app.shared.database.database import get_async_session

    async def _session_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    fastapi_app.dependency_overrides[get_async_session] = _session_override
    fastapi_app.dependency_overrides[get_onchain_verifier] = lambda: verifier
    fastapi_app.dependency_overrides[get_clock] = lambda: clock
    fastapi_app.dependency_overrides[get_payments_policy] = lambda: policy
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest.fixture
def auth_headers():
    """Encabezados Bearer con un JWT firmado con la clave de test."""
    from app.modules.auth.security import create_access_token

    def _make(user_id: str = "user-1") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return _make

# Fin del archivo backend/tests/conftest.py
