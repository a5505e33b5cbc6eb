from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncTransaction

from transaction_management.adapters.outbound.repo.sa.database import Database
from transaction_management.ports.common.logs import logger
from transaction_management.ports.outbound.repo.connection import Connection, ConnectionFactory, Transaction


class SATransaction(Transaction):

    def __init__(self, transaction: AsyncTransaction, isolation_level: Optional[str] = None):
        self.transaction = transaction
        self._isolation_level = isolation_level

    @property
    def isolation_level(self) -> Optional[str]:
        return self._isolation_level

    async def commit(self) -> None:
        await self.transaction.commit()

    async def rollback(self) -> None:
        await self.transaction.rollback()

    async def close(self) -> None:
        await self.transaction.close()


class SAConnection(Connection):
    """
    Connection on top of an AsyncEngine. It is opened lazily by the first statement or
    transaction request, so a failing open surfaces from that call.
    """

    def __init__(self, database: Database):
        self._database = database
        self.connection: Optional[AsyncConnection] = None

    @property
    def url(self) -> str:
        return self._database.url

    @property
    def database(self) -> Optional[str]:
        return self._database.engine.url.database

    @property
    def is_open(self) -> bool:
        return self.connection is not None and not self.connection.closed

    async def open(self) -> None:
        if self.is_open:
            return
        self.connection = await self._database.engine.connect()
        logger.debug(f"opened connection to {self.url}")

    async def close(self) -> None:
        if self.connection is None:
            return
        await self.connection.close()
        self.connection = None
        logger.debug(f"closed connection to {self.url}")

    async def execute(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        await self.open()
        result = await self.connection.execute(text(statement), params or {})
        return result.rowcount

    async def query(self, statement: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        await self.open()
        result = await self.connection.execute(text(statement), params or {})
        return [dict(row) for row in result.mappings().all()]

    async def scalar(self, statement: str, params: Optional[Dict[str, Any]] = None) -> Any:
        await self.open()
        return await self.connection.scalar(text(statement), params or {})

    async def begin_transaction(self, isolation_level: Optional[str] = None) -> SATransaction:
        await self.open()
        if self.connection.in_transaction():
            # a previous read has already auto-begun the transaction, it becomes the explicit one
            if isolation_level:
                logger.warning(f"transaction is already begun, isolation level {isolation_level} is ignored")
            return SATransaction(self.connection.get_transaction())
        if isolation_level:
            await self.connection.execution_options(isolation_level=isolation_level)
        transaction = await self.connection.begin()
        return SATransaction(transaction, isolation_level)


class SAConnectionFactory(ConnectionFactory):
    def __init__(self, database: Database):
        self._database = database

    def create(self) -> SAConnection:
        return SAConnection(self._database)
