from unittest.mock import AsyncMock

import pytest

from transaction_management.domain.cqrs.abstract import Command, CommandHandler, Query, QueryHandler
from transaction_management.domain.cqrs.executor import CommandExecutor, QueryExecutor, HandlerNotFoundError


class Ping(Command):
    pass


class Pong(Command):
    pass


class Count(Query[int]):
    pass


@pytest.mark.asyncio
async def test_command_is_dispatched_by_type():
    ping_handler = AsyncMock(spec=CommandHandler)
    pong_handler = AsyncMock(spec=CommandHandler)
    executor = CommandExecutor({Ping: ping_handler})
    executor.register(Pong, pong_handler)

    await executor.execute(Pong())

    pong_handler.handle.assert_awaited_once_with(Pong())
    ping_handler.handle.assert_not_awaited()


@pytest.mark.asyncio
async def test_command_without_handler():
    with pytest.raises(HandlerNotFoundError):
        await CommandExecutor().execute(Ping())


@pytest.mark.asyncio
async def test_handler_error_is_propagated():
    handler = AsyncMock(spec=CommandHandler)
    handler.handle.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await CommandExecutor({Ping: handler}).execute(Ping())


@pytest.mark.asyncio
async def test_query_result_is_returned():
    handler = AsyncMock(spec=QueryHandler)
    handler.handle.return_value = 23
    executor = QueryExecutor()
    executor.register(Count, handler)

    assert await executor.execute(Count()) == 23


@pytest.mark.asyncio
async def test_query_without_handler():
    with pytest.raises(HandlerNotFoundError):
        await QueryExecutor().execute(Count())
