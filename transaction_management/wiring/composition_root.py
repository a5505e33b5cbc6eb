from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Sequence

from transaction_management.domain.cqrs.abstract import CommandHandler
from transaction_management.domain.cqrs.executor import CommandExecutor, QueryExecutor
from transaction_management.domain.cqrs.transactional import TransactionalCommandHandler
from transaction_management.domain.services.customer_service import CustomerService
from transaction_management.domain.use_cases.customers.add_customer import AddCustomerCommand, \
    AddCustomerCommandHandler
from transaction_management.domain.use_cases.customers.customer_query import CustomerQuery, CustomerQueryHandler
from transaction_management.domain.use_cases.customers.customers_query import CustomersQuery, CustomersQueryHandler
from transaction_management.domain.use_cases.customers.import_customers import ImportCustomersCommand, \
    ImportCustomersCommandHandler
from transaction_management.ports.outbound.repo.connection import Connection, ConnectionFactory
from transaction_management.ports.outbound.repo.scoped_connection import ScopedConnection

CommandHandlerDecorator = Callable[[Connection, CommandHandler], CommandHandler]

DEFAULT_COMMAND_HANDLER_DECORATORS: Sequence[CommandHandlerDecorator] = (TransactionalCommandHandler,)


class RequestScope:
    """ Object graph of one scope, every component shares the same scoped connection """

    def __init__(self,
                 connection: ScopedConnection,
                 command_executor: CommandExecutor,
                 query_executor: QueryExecutor,
                 customer_service: CustomerService):
        self.connection = connection
        self.command_executor = command_executor
        self.query_executor = query_executor
        self.customer_service = customer_service


class CompositionRoot:
    """
    Builds the handlers of a scope. Every command handler is wrapped into the decorators in the
    given order, so the first decorator is the innermost one.
    """

    def __init__(self,
                 connection_factory: ConnectionFactory,
                 command_handler_decorators: Sequence[CommandHandlerDecorator] = DEFAULT_COMMAND_HANDLER_DECORATORS):
        self._connection_factory = connection_factory
        self._command_handler_decorators = tuple(command_handler_decorators)

    def decorate(self, connection: Connection, command_handler: CommandHandler) -> CommandHandler:
        for decorator in self._command_handler_decorators:
            command_handler = decorator(connection, command_handler)
        return command_handler

    def compose(self, connection: ScopedConnection) -> RequestScope:
        query_executor = QueryExecutor({
            CustomerQuery: CustomerQueryHandler(connection),
            CustomersQuery: CustomersQueryHandler(connection),
        })
        command_executor = CommandExecutor()
        command_executor.register(AddCustomerCommand,
                                  self.decorate(connection, AddCustomerCommandHandler(connection)))
        command_executor.register(ImportCustomersCommand,
                                  self.decorate(connection, ImportCustomersCommandHandler(command_executor)))
        customer_service = CustomerService(query_executor, command_executor)
        return RequestScope(connection, command_executor, query_executor, customer_service)

    @asynccontextmanager
    async def scope(self) -> AsyncIterator[RequestScope]:
        async with ScopedConnection(self._connection_factory.create()) as connection:
            yield self.compose(connection)
