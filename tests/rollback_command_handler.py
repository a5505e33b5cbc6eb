from typing import Generic

from transaction_management.domain.cqrs.abstract import CommandHandler, TCommand
from transaction_management.ports.outbound.repo.connection import Connection


class RollbackCommandHandler(CommandHandler[TCommand], Generic[TCommand]):
    """
    Joins the shared transaction but never signals commit, so everything written in the
    scope is rolled back when it ends. Reads in the same scope still see the writes.
    """

    def __init__(self, connection: Connection, command_handler: CommandHandler[TCommand]):
        self._connection = connection
        self._command_handler = command_handler

    async def handle(self, command: TCommand) -> None:
        transaction = await self._connection.begin_transaction()
        await self._command_handler.handle(command)
        await transaction.rollback()
