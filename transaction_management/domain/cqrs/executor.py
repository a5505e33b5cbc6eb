from typing import Dict, Type, Any

from transaction_management.domain.cqrs.abstract import Command, CommandHandler, Query, QueryHandler, TResult
from transaction_management.ports.common.logs import logger


class HandlerNotFoundError(LookupError):
    pass


class CommandExecutor:
    """ Dispatches a command to the handler registered for its type """

    def __init__(self, handlers: Dict[Type[Command], CommandHandler] = None):
        self._handlers: Dict[Type[Command], CommandHandler] = dict(handlers) if handlers else {}

    def register(self, command_type: Type[Command], handler: CommandHandler) -> None:
        self._handlers[command_type] = handler

    async def execute(self, command: Command) -> None:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise HandlerNotFoundError(f"no command handler registered for {type(command).__name__}")
        logger.debug(f"executing {type(command).__name__}")
        await handler.handle(command)


class QueryExecutor:
    """ Dispatches a query to the handler registered for its type and returns the result """

    def __init__(self, handlers: Dict[Type[Query], QueryHandler] = None):
        self._handlers: Dict[Type[Query], QueryHandler] = dict(handlers) if handlers else {}

    def register(self, query_type: Type[Query], handler: QueryHandler) -> None:
        self._handlers[query_type] = handler

    async def execute(self, query: Query[TResult]) -> TResult:
        handler: Any = self._handlers.get(type(query))
        if handler is None:
            raise HandlerNotFoundError(f"no query handler registered for {type(query).__name__}")
        return await handler.handle(query)
