from typing import List

from pydantic import Field

from transaction_management.domain.cqrs.abstract import Command, CommandHandler
from transaction_management.domain.cqrs.executor import CommandExecutor
from transaction_management.domain.schemas.customer import Customer
from transaction_management.domain.use_cases.customers.add_customer import AddCustomerCommand


class ImportCustomersCommand(Command):
    customers: List[Customer] = Field(min_length=1)


class ImportCustomersCommandHandler(CommandHandler[ImportCustomersCommand]):
    """
    Adds every customer with its own AddCustomerCommand. Each of them joins the transaction
    of the import, so the customers are stored all together or not at all.
    """

    def __init__(self, command_executor: CommandExecutor):
        self._command_executor = command_executor

    async def handle(self, command: ImportCustomersCommand) -> None:
        for customer in command.customers:
            await self._command_executor.execute(AddCustomerCommand(**customer.model_dump()))
