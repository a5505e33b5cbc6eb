from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Self


class Transaction(ABC):
    """
    Database transaction handle.
    One instance is one real transaction opened on a connection.
    """

    @property
    @abstractmethod
    def isolation_level(self) -> Optional[str]:
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commits the changes."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rolls the changes back."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Releases the resources of the transaction."""
        pass


class Connection(ABC):
    """
    Database session able to run plain parameterized SQL.
    Opened before first use and closed exactly once.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        pass

    @property
    @abstractmethod
    def database(self) -> Optional[str]:
        pass

    @property
    @abstractmethod
    def is_open(self) -> bool:
        pass

    @abstractmethod
    async def open(self) -> None:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass

    @abstractmethod
    async def execute(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        """ Executes a statement and returns the amount of affected rows """
        pass

    @abstractmethod
    async def query(self, statement: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """ Executes a statement and returns every row as a dict keyed by column name """
        pass

    @abstractmethod
    async def scalar(self, statement: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """ Executes a statement and returns the first column of the first row, None if there are no rows """
        pass

    @abstractmethod
    async def begin_transaction(self, isolation_level: Optional[str] = None) -> Transaction:
        pass

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class ConnectionFactory(ABC):

    @abstractmethod
    def create(self) -> Connection:
        """ Returns a new connection that is not opened yet """
        pass
