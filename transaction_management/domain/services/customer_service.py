from typing import List

from transaction_management.domain.cqrs.executor import CommandExecutor, QueryExecutor
from transaction_management.domain.schemas.customer import Customer
from transaction_management.domain.use_cases.customers.add_customer import AddCustomerCommand
from transaction_management.domain.use_cases.customers.customers_query import CustomersQuery


class CustomerService:
    def __init__(self, query_executor: QueryExecutor, command_executor: CommandExecutor):
        self._query_executor = query_executor
        self._command_executor = command_executor

    async def get_customers(self, country: str) -> List[Customer]:
        if not country:
            raise ValueError("country must not be empty")
        return await self._query_executor.execute(CustomersQuery(country=country))

    async def save(self, customer: Customer) -> None:
        await self._command_executor.execute(AddCustomerCommand(**customer.model_dump()))
