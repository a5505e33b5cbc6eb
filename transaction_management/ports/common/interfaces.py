from abc import ABC, abstractmethod


class Startable(ABC):
    """Long-living component started and stopped by the bootstrap in main.py."""

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def stop(self) -> None:
        pass
