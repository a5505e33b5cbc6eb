from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette import status
from starlette.responses import Response

from transaction_management.adapters.inbound.rest_api.dependencies import get_query_executor, \
    get_command_executor, get_customer_service
from transaction_management.domain.cqrs.executor import CommandExecutor, QueryExecutor
from transaction_management.domain.schemas.customer import Customer
from transaction_management.domain.services.customer_service import CustomerService
from transaction_management.domain.use_cases.customers.customer_query import CustomerQuery
from transaction_management.domain.use_cases.customers.import_customers import ImportCustomersCommand

router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=List[Customer])
async def get_customers(country: str = Query(),
                        customer_service: CustomerService = Depends(get_customer_service)):
    customers = await customer_service.get_customers(country)
    if customers:
        return customers
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{customer_id}", response_model=Customer)
async def get_customer(customer_id: str,
                       query_executor: QueryExecutor = Depends(get_query_executor)):
    customer = await query_executor.execute(CustomerQuery(customer_id=customer_id))
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"customer {customer_id} not found")
    return customer


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def add_customer(customer: Customer,
                       customer_service: CustomerService = Depends(get_customer_service)):
    await customer_service.save(customer)
    return customer


@router.post("/import", response_model=List[Customer], status_code=status.HTTP_201_CREATED)
async def import_customers(customers: List[Customer],
                           command_executor: CommandExecutor = Depends(get_command_executor)):
    await command_executor.execute(ImportCustomersCommand(customers=customers))
    return customers
