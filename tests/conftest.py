"""Test configuration and fixtures for idorql."""

import os
from typing import AsyncGenerator

import pytest
from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from idorql import IndirectConfig, IndirectDirectiveTransformer, SignedIdCodec
from tests.models import Base
from tests.schema import make_executable_schema

# Try to load environment variables from .env file
load_dotenv()


@pytest.fixture(scope="session")
def secret() -> str:
    return os.getenv("IDORQL_TEST_SECRET", "secret")


@pytest.fixture
def codec(secret) -> SignedIdCodec:
    return SignedIdCodec(secret)


@pytest.fixture
def source_schema():
    """Untransformed SDL schema with resolvers working on raw ids."""
    return make_executable_schema()


@pytest.fixture
def schema(source_schema, codec):
    return IndirectDirectiveTransformer(IndirectConfig(codec=codec))(source_schema)


@pytest.fixture
def context() -> dict:
    return {}


@pytest.fixture(scope="function")
async def engine():
    """Create a test database engine for each test function."""
    test_db_url = os.getenv("IDORQL_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    engine = create_async_engine(test_db_url, echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for each test function."""
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


# Import fixtures from fixtures module
from tests.fixtures import sample_accounts, sample_users, populated_db  # noqa: E402,F401
