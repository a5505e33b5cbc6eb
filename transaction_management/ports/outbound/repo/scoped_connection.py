import asyncio
import enum
from typing import Any, Dict, List, Optional, Self

from transaction_management.ports.common.logs import logger
from transaction_management.ports.outbound.repo.connection import Connection, Transaction
from transaction_management.ports.outbound.repo.exceptions import FinalizeError, TransactionAlreadyFinalizedError, \
    TransactionStateError


class TransactionOutcome(str, enum.Enum):
    COMMIT = "COMMIT"
    ROLLBACK = "ROLLBACK"


class TransactionCounter(Transaction):
    """
    Shared transaction of one scope.

    Every participant that requests a transaction increments the begin count, every participant
    that completes successfully increments the commit count. The real transaction is resolved only
    by finalize(): it is committed when both counts are equal and rolled back otherwise.
    """

    def __init__(self, connection: Connection, transaction: Transaction):
        self._connection = connection
        self._transaction = transaction
        self._begin_count = 0
        self._commit_count = 0
        self._outcome: Optional[TransactionOutcome] = None
        self._finalized = False

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def isolation_level(self) -> Optional[str]:
        return self._transaction.isolation_level

    @property
    def begin_count(self) -> int:
        return self._begin_count

    @property
    def commit_count(self) -> int:
        return self._commit_count

    @property
    def outcome(self) -> Optional[TransactionOutcome]:
        """ None until finalize() resolves the real transaction, stays None when it fails """
        return self._outcome

    @property
    def finalized(self) -> bool:
        return self._finalized

    def request_begin(self) -> None:
        self._check_not_finalized()
        self._begin_count += 1

    def signal_commit(self) -> None:
        self._check_not_finalized()
        if self._commit_count >= self._begin_count:
            raise TransactionStateError(f"commit signalled more times than begin was requested "
                                        f"({self._commit_count=}, {self._begin_count=})")
        self._commit_count += 1

    async def commit(self) -> None:
        self.signal_commit()

    async def rollback(self) -> None:
        # the participant simply does not signal commit
        self._check_not_finalized()

    async def close(self) -> None:
        pass

    async def finalize(self) -> TransactionOutcome:
        """
        Commits or rolls back the real transaction and releases it.
        The outcome is recorded only when the real commit or rollback succeeded,
        a failed finalize leaves it None.
        """
        self._check_not_finalized()
        self._finalized = True
        if self._commit_count == self._begin_count:
            outcome = TransactionOutcome.COMMIT
        else:
            outcome = TransactionOutcome.ROLLBACK
        try:
            if outcome == TransactionOutcome.COMMIT:
                await self._transaction.commit()
                logger.debug(f"committed shared transaction: {self._begin_count=}, {self._commit_count=}")
            else:
                await self._transaction.rollback()
                logger.info(f"rolled back shared transaction: {self._begin_count=}, {self._commit_count=}")
        except Exception as e:
            logger.error(f"unable to {outcome.value} shared transaction, persisted state may be inconsistent: "
                         f"{e.__class__.__name__}: {e}")
            await self._close_after_failure()
            raise FinalizeError(f"{outcome.value} of the shared transaction failed") from e
        except BaseException:
            await self._close_after_failure()
            raise
        self._outcome = outcome
        await self._transaction.close()
        return outcome

    async def _close_after_failure(self) -> None:
        # the failure of finalize is the one reported to the caller
        try:
            await self._transaction.close()
        except Exception as e:
            logger.error(f"unable to release shared transaction: {e.__class__.__name__}: {e}")

    def _check_not_finalized(self) -> None:
        if self._finalized:
            raise TransactionAlreadyFinalizedError(f"shared transaction is already finalized, "
                                                   f"outcome: {self._outcome.value if self._outcome else 'FAILED'}")


class ScopedConnection(Connection):
    """
    Connection of one scope (one web request or one test case).

    Opens at most one real transaction during its lifetime: every begin_transaction() call returns the
    same TransactionCounter. dispose() resolves the transaction and closes the wrapped connection.
    """

    def __init__(self, connection: Connection):
        self._connection = connection
        self._transaction: Optional[TransactionCounter] = None
        self._transaction_lock = asyncio.Lock()
        self._disposed = False

    @property
    def transaction(self) -> Optional[TransactionCounter]:
        return self._transaction

    @property
    def url(self) -> str:
        return self._connection.url

    @property
    def database(self) -> Optional[str]:
        return self._connection.database

    @property
    def is_open(self) -> bool:
        return self._connection.is_open

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def open(self) -> None:
        await self._connection.open()

    async def close(self) -> None:
        await self._connection.close()

    async def execute(self, statement: str, params: Optional[Dict[str, Any]] = None) -> int:
        return await self._connection.execute(statement, params)

    async def query(self, statement: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self._connection.query(statement, params)

    async def scalar(self, statement: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._connection.scalar(statement, params)

    async def begin_transaction(self, isolation_level: Optional[str] = None) -> TransactionCounter:
        """
        Returns the shared transaction of the scope, opening the real one on the first call.
        The isolation level is passed to the wrapped connection on that first call only.
        """
        if self._disposed:
            raise TransactionStateError("unable to begin transaction on a disposed connection")
        if self._transaction is None:
            async with self._transaction_lock:
                if self._transaction is None:
                    transaction = await self._connection.begin_transaction(isolation_level)
                    self._transaction = TransactionCounter(self, transaction)
                    logger.debug(f"opened shared transaction on {self._connection.url}")
        self._transaction.request_begin()
        return self._transaction

    async def dispose(self) -> Optional[TransactionOutcome]:
        """ Resolves the shared transaction (if one was opened) and closes the wrapped connection """
        if self._disposed:
            return self._transaction.outcome if self._transaction else None
        self._disposed = True
        try:
            outcome = await self._transaction.finalize() if self._transaction is not None else None
        except BaseException:
            await self._close_after_failure()
            raise
        await self._connection.close()
        return outcome

    async def _close_after_failure(self) -> None:
        try:
            await self._connection.close()
        except Exception as e:
            logger.error(f"unable to close connection to {self._connection.url}: {e.__class__.__name__}: {e}")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()
