import pytest
from sqlalchemy.exc import OperationalError, IntegrityError

from transaction_management.adapters.outbound.repo.sa.database import Database
from transaction_management.adapters.outbound.repo.sa.seed import ensure_database_initialized, SAMPLE_CUSTOMERS
from transaction_management.adapters.outbound.repo.sa.transaction import SAConnection, SATransaction
from transaction_management.domain.use_cases.customers import sql

NEW_CUSTOMER = {"customer_id": "AAPL", "company_name": "Apple", "country": "USA"}


async def count_customers(database: Database) -> int:
    async with SAConnection(database) as connection:
        return await connection.scalar("SELECT count(*) FROM customer")


@pytest.mark.asyncio
async def test_connection_is_opened_lazily(database):
    connection = SAConnection(database)
    assert not connection.is_open

    assert await connection.scalar("SELECT count(*) FROM customer") == len(SAMPLE_CUSTOMERS)
    assert connection.is_open

    await connection.close()
    assert not connection.is_open


@pytest.mark.asyncio
async def test_close_of_never_opened_connection(database):
    connection = SAConnection(database)
    await connection.close()
    assert not connection.is_open


@pytest.mark.asyncio
async def test_url_and_database(database, tmp_path):
    connection = SAConnection(database)
    assert connection.url.startswith("sqlite+aiosqlite:///")
    assert connection.database == str(tmp_path / "customers.db")


@pytest.mark.asyncio
async def test_query_returns_rows_as_dicts(database):
    async with SAConnection(database) as connection:
        rows = await connection.query(sql.CUSTOMERS_BY_COUNTRY, {"country": "Norway"})

    assert rows == [{"customer_id": "SANTG", "company_name": "Santé Gourmet", "country": "Norway"}]


@pytest.mark.asyncio
async def test_committed_insert_is_visible_to_other_connections(database):
    async with SAConnection(database) as connection:
        transaction = await connection.begin_transaction()
        assert isinstance(transaction, SATransaction)
        assert await connection.execute(sql.INSERT_CUSTOMER, NEW_CUSTOMER) == 1
        await transaction.commit()
        await transaction.close()

    assert await count_customers(database) == len(SAMPLE_CUSTOMERS) + 1


@pytest.mark.asyncio
async def test_rolled_back_insert_is_discarded(database):
    async with SAConnection(database) as connection:
        transaction = await connection.begin_transaction()
        await connection.execute(sql.INSERT_CUSTOMER, NEW_CUSTOMER)
        assert await connection.query(sql.CUSTOMER, {"customer_id": "AAPL"}) == [NEW_CUSTOMER]
        await transaction.rollback()
        await transaction.close()

    assert await count_customers(database) == len(SAMPLE_CUSTOMERS)


@pytest.mark.asyncio
async def test_transaction_begun_by_read_is_adopted(database):
    async with SAConnection(database) as connection:
        await connection.query(sql.CUSTOMER, {"customer_id": "ALFKI"})
        transaction = await connection.begin_transaction("SERIALIZABLE")
        assert transaction.isolation_level is None
        await connection.execute(sql.INSERT_CUSTOMER, NEW_CUSTOMER)
        await transaction.commit()

    assert await count_customers(database) == len(SAMPLE_CUSTOMERS) + 1


@pytest.mark.asyncio
async def test_isolation_level_is_applied_to_new_transaction(database):
    async with SAConnection(database) as connection:
        transaction = await connection.begin_transaction("SERIALIZABLE")
        assert transaction.isolation_level == "SERIALIZABLE"
        await transaction.rollback()


@pytest.mark.asyncio
async def test_duplicate_key_raises_integrity_error(database):
    async with SAConnection(database) as connection:
        transaction = await connection.begin_transaction()
        with pytest.raises(IntegrityError):
            await connection.execute(sql.INSERT_CUSTOMER, {**NEW_CUSTOMER, "customer_id": "ALFKI"})
        await transaction.rollback()


@pytest.mark.asyncio
async def test_unreachable_database_fails_on_begin(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'customers.db'}")
    connection = SAConnection(database)
    try:
        with pytest.raises(OperationalError):
            await connection.begin_transaction()
        assert not connection.is_open
    finally:
        await database.dispose()


@pytest.mark.asyncio
async def test_seed_loads_sample_customers_once(database):
    assert await ensure_database_initialized(database) is False
    assert await count_customers(database) == len(SAMPLE_CUSTOMERS)
