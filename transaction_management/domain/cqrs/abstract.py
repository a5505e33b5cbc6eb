from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

TResult = TypeVar('TResult')  # Result of a query


class Command(BaseModel):
    """ Intention to change the stored data. Handled by exactly one CommandHandler """
    pass


class Query(BaseModel, Generic[TResult]):
    """ Request to read data returning TResult. Handled by exactly one QueryHandler """
    pass


TCommand = TypeVar('TCommand', bound=Command)
TQuery = TypeVar('TQuery', bound=Query)


class CommandHandler(ABC, Generic[TCommand]):

    @abstractmethod
    async def handle(self, command: TCommand) -> None:
        pass


class QueryHandler(ABC, Generic[TQuery, TResult]):

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        pass
