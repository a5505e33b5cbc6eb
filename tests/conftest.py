from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from rollback_command_handler import RollbackCommandHandler
from transaction_management.adapters.inbound.rest_api.fast_api_server import FastAPIServer
from transaction_management.adapters.inbound.rest_api.settings import FastAPIServerSettings
from transaction_management.adapters.outbound.repo.sa.database import Database
from transaction_management.adapters.outbound.repo.sa.seed import ensure_database_initialized
from transaction_management.adapters.outbound.repo.sa.transaction import SAConnectionFactory
from transaction_management.domain.cqrs.transactional import TransactionalCommandHandler
from transaction_management.ports.outbound.repo.connection import Connection, Transaction
from transaction_management.wiring.composition_root import CompositionRoot


@pytest_asyncio.fixture
async def sqlite_database(tmp_path):
    """File based SQLite, every connection of the test sees the same data"""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'customers.db'}")
    await ensure_database_initialized(db)

    yield db

    await db.dispose()


@pytest.fixture
def database(sqlite_database):
    return sqlite_database


@pytest.fixture
def sa_connection_factory(database):
    return SAConnectionFactory(database)


@pytest.fixture
def composition_root(sa_connection_factory):
    return CompositionRoot(sa_connection_factory)


@pytest.fixture
def rollback_composition_root(sa_connection_factory):
    """ Every command runs inside RollbackCommandHandler(TransactionalCommandHandler(handler)) """
    return CompositionRoot(sa_connection_factory,
                           command_handler_decorators=(TransactionalCommandHandler, RollbackCommandHandler))


@pytest.fixture
def fastapi_server(composition_root):
    return FastAPIServer.from_settings(FastAPIServerSettings(), composition_root)


@pytest_asyncio.fixture
async def client(fastapi_server):
    async with AsyncClient(transport=ASGITransport(app=fastapi_server.app), base_url="http://test") as client:
        yield client


@pytest.fixture
def raw_transaction() -> AsyncMock:
    transaction = AsyncMock(spec=Transaction)
    transaction.isolation_level = None
    return transaction


@pytest.fixture
def raw_connection(raw_transaction) -> AsyncMock:
    connection = AsyncMock(spec=Connection)
    connection.url = "sqlite+aiosqlite:///test.db"
    connection.database = "test.db"
    connection.is_open = True
    connection.begin_transaction.return_value = raw_transaction
    return connection
