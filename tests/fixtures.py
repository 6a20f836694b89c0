"""Database fixtures for idorql tests (shared)."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Account, User


async def create_sample_accounts(session: AsyncSession):
    accounts = [Account(name="Acme"), Account(name="Globex")]
    session.add_all(accounts)
    await session.flush()
    await session.commit()
    return accounts


@pytest.fixture(scope="function")
async def sample_accounts(db_session: AsyncSession):
    return await create_sample_accounts(db_session)


async def create_sample_users(session: AsyncSession, accounts):
    """Create and commit the sample users used across tests."""
    acme, globex = accounts
    users = [
        User(name="Alice Johnson", email="alice@example.com", account_id=acme.id),
        User(name="Bob Smith", email="bob@example.com", account_id=acme.id),
        User(name="Charlie Brown", email="charlie@example.com", account_id=globex.id),
    ]
    session.add_all(users)
    await session.flush()
    await session.commit()
    return users


@pytest.fixture(scope="function")
async def sample_users(db_session: AsyncSession, sample_accounts):
    return await create_sample_users(db_session, sample_accounts)


@pytest.fixture(scope="function")
async def populated_db(sample_accounts, sample_users):
    return {
        'accounts': sample_accounts,
        'users': sample_users,
    }
