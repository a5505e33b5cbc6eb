from typing import Generic

from transaction_management.domain.cqrs.abstract import CommandHandler, TCommand
from transaction_management.ports.common.logs import logger
from transaction_management.ports.outbound.repo.connection import Connection


class TransactionalCommandHandler(CommandHandler[TCommand], Generic[TCommand]):
    """
    Makes the wrapped handler a participant of the shared transaction of the connection.

    The commit is only signalled after the wrapped handler completes. A failed or cancelled
    handler leaves the transaction without its commit, so the scope rolls back at its end.
    """

    def __init__(self, connection: Connection, command_handler: CommandHandler[TCommand]):
        self._connection = connection
        self._command_handler = command_handler

    async def handle(self, command: TCommand) -> None:
        transaction = await self._connection.begin_transaction()
        try:
            await self._command_handler.handle(command)
        except BaseException as e:
            logger.debug(f"{type(command).__name__} failed, commit is not signalled: {e.__class__.__name__}: {e}")
            raise
        await transaction.commit()
