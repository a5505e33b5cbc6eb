from typing import Optional

from pydantic import Field

from transaction_management.domain.cqrs.abstract import Command, CommandHandler
from transaction_management.domain.use_cases.customers import sql
from transaction_management.ports.common.logs import logger
from transaction_management.ports.outbound.repo.connection import Connection


class AddCustomerCommand(Command):
    customer_id: str = Field(min_length=1, max_length=16)
    company_name: str = Field(min_length=1, max_length=64)
    country: Optional[str] = Field(default=None, max_length=32)


class AddCustomerCommandHandler(CommandHandler[AddCustomerCommand]):
    def __init__(self, connection: Connection):
        self._connection = connection

    async def handle(self, command: AddCustomerCommand) -> None:
        await self._connection.execute(sql.INSERT_CUSTOMER, command.model_dump())
        logger.debug(f"added customer {command.customer_id}")
