from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine


class Database:

    def __init__(self, uri: str, echo: bool = False):
        self.engine: AsyncEngine = create_async_engine(uri, echo=echo)

    @property
    def url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    async def dispose(self) -> None:
        await self.engine.dispose()
