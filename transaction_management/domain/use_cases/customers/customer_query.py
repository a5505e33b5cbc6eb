from typing import Optional

from transaction_management.domain.cqrs.abstract import Query, QueryHandler
from transaction_management.domain.schemas.customer import Customer
from transaction_management.domain.use_cases.customers import sql
from transaction_management.ports.outbound.repo.connection import Connection


class CustomerQuery(Query[Optional[Customer]]):
    customer_id: str


class CustomerQueryHandler(QueryHandler[CustomerQuery, Optional[Customer]]):
    def __init__(self, connection: Connection):
        self._connection = connection

    async def handle(self, query: CustomerQuery) -> Optional[Customer]:
        rows = await self._connection.query(sql.CUSTOMER, {"customer_id": query.customer_id})
        if not rows:
            return None
        return Customer.model_validate(rows[0])
