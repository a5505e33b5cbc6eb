import asyncio

from transaction_management.adapters.inbound.rest_api.fast_api_server import FastAPIServer
from transaction_management.adapters.outbound.repo.sa.database import Database
from transaction_management.adapters.outbound.repo.sa.seed import ensure_database_initialized
from transaction_management.adapters.outbound.repo.sa.transaction import SAConnectionFactory
from transaction_management.ports.common.logs import logger, set_log_level
from transaction_management.settings import ServiceSettings
from transaction_management.wiring.composition_root import CompositionRoot


async def main():
    settings = ServiceSettings()
    set_log_level(settings.log_level)
    database = Database(settings.database_uri, echo=settings.database_echo)

    if settings.initialize_database:
        await ensure_database_initialized(database)
    composition_root = CompositionRoot(SAConnectionFactory(database))
    fastapi_server = FastAPIServer.from_settings(settings.fastapi_server, composition_root)

    startable = [fastapi_server, ]
    for startable_obj in startable:
        await startable_obj.start()
    try:
        await asyncio.Future()
    except BaseException as e:
        logger.critical(f"Stop service due to error: {e.__class__.__name__}: {e}")
    finally:
        for startable_obj in startable:
            await startable_obj.stop()
        await database.dispose()


def run():
    asyncio.run(main())


if __name__ == '__main__':
    run()
