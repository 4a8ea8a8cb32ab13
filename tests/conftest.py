"""
Pytest global configuration for the EAP billing backend.

This conftest:
- Points the app at a throwaway SQLite database per test (aiosqlite)
- Sets the cron configuration the route requires
- Provides in-memory fakes for the wallet-asset lookup and transfer executor
"""

from dotenv import load_dotenv
import asyncio
import os
import pytest

# Load .env.test first; the module-level engine is replaced per test anyway
load_dotenv(".env.test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_eap_billing.db")

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from fastapi.testclient import TestClient

import app.database.session as db_session_module
from app.database.session import Base
import app.database.models  # noqa: F401 - registers all models on Base.metadata
from app.api.main import app
from app.payments import get_transfer_executor, get_wallet_assets_provider

from tests.factories import (
    CRON_SECRET,
    RECEIVE_WALLET,
    FakeTransferExecutor,
    FakeWalletAssets,
)


# ============================================================================
# ENVIRONMENT
# ============================================================================

@pytest.fixture(autouse=True)
def cron_env(monkeypatch):
    """Known cron configuration for every test, regardless of the local .env."""
    monkeypatch.setenv("CRON_SECRET", CRON_SECRET)
    monkeypatch.setenv("EAP_RECEIVE_WALLET_ADDRESS", RECEIVE_WALLET)
    monkeypatch.delenv("NEXT_PUBLIC_EAP_RECEIVE_WALLET_ADDRESS", raising=False)
    monkeypatch.setenv("EAP_SUBSCRIPTION_PRICE_SOL", "0.1")
    monkeypatch.setenv("SUBSCRIPTION_SCHEDULER_ENABLED", "false")


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def test_db_engine(tmp_path):
    """
    Creates a SQLite test database and swaps the global async engine and
    session factory used by session_scope().
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )

    async def _create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_tables())

    original_engine = db_session_module.async_engine
    original_factory = db_session_module.AsyncSessionLocal
    db_session_module.async_engine = engine
    db_session_module.AsyncSessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )

    yield engine

    db_session_module.async_engine = original_engine
    db_session_module.AsyncSessionLocal = original_factory
    asyncio.run(engine.dispose())


# ============================================================================
# COLLABORATOR FAKES
# ============================================================================

@pytest.fixture
def wallet_assets():
    return FakeWalletAssets()


@pytest.fixture
def transfer_executor():
    return FakeTransferExecutor()


# ============================================================================
# FASTAPI CLIENT
# ============================================================================

@pytest.fixture(scope="function")
def test_client(test_db_engine, wallet_assets, transfer_executor):
    """
    TestClient using the test database and the collaborator fakes.

    The lifespan is not entered, so the in-process scheduler never starts.
    """
    app.dependency_overrides[get_wallet_assets_provider] = lambda: wallet_assets
    app.dependency_overrides[get_transfer_executor] = lambda: transfer_executor
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
