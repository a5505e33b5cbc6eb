from typing import AsyncIterator

from fastapi import Depends
from starlette.requests import Request

from transaction_management.domain.cqrs.executor import CommandExecutor, QueryExecutor
from transaction_management.domain.services.customer_service import CustomerService
from transaction_management.wiring.composition_root import CompositionRoot, RequestScope


async def get_request_scope(request: Request) -> AsyncIterator[RequestScope]:
    """
    One scope per request. It ends right after the path operation, before the response is sent,
    so a failure to resolve the shared transaction becomes the response of the request.
    """
    composition_root: CompositionRoot = request.app.state.composition_root
    async with composition_root.scope() as scope:
        yield scope


def get_query_executor(scope: RequestScope = Depends(get_request_scope, scope="function")) -> QueryExecutor:
    return scope.query_executor


def get_command_executor(scope: RequestScope = Depends(get_request_scope, scope="function")) -> CommandExecutor:
    return scope.command_executor


def get_customer_service(scope: RequestScope = Depends(get_request_scope, scope="function")) -> CustomerService:
    return scope.customer_service
