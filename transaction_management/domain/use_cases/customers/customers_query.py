from typing import List

from transaction_management.domain.cqrs.abstract import Query, QueryHandler
from transaction_management.domain.schemas.customer import Customer
from transaction_management.domain.use_cases.customers import sql
from transaction_management.ports.outbound.repo.connection import Connection


class CustomersQuery(Query[List[Customer]]):
    country: str


class CustomersQueryHandler(QueryHandler[CustomersQuery, List[Customer]]):
    def __init__(self, connection: Connection):
        self._connection = connection

    async def handle(self, query: CustomersQuery) -> List[Customer]:
        rows = await self._connection.query(sql.CUSTOMERS_BY_COUNTRY, {"country": query.country})
        return [Customer.model_validate(row) for row in rows]
