import asyncio
from asyncio import Task
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from transaction_management.ports.common.interfaces import Startable
from transaction_management.ports.common.logs import logger
from transaction_management.ports.outbound.repo.exceptions import FinalizeError
from transaction_management.wiring.composition_root import CompositionRoot
from .router import router as api_router
from .settings import FastAPIServerSettings


class FastAPIServer(Startable):
    """ Serves the customers API, every request runs in its own scope of the composition root """

    def __init__(self, composition_root: CompositionRoot, settings: FastAPIServerSettings):
        self._settings = settings

        self._app = FastAPI(title=settings.title, description=settings.description)
        self._app.state.composition_root = composition_root
        self._app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.origins,
            allow_credentials=True,
            allow_methods=settings.allow_methods,
            allow_headers=settings.allow_headers,
        )
        self._app.include_router(api_router)
        handle_422_exceptions(self._app)
        handle_domain_exceptions(self._app)
        handle_transaction_exceptions(self._app)

        self._server: Optional[uvicorn.Server] = None
        self._server_task: Optional[Task] = None

    @property
    def app(self) -> FastAPI:
        return self._app

    @classmethod
    def from_settings(cls, settings: FastAPIServerSettings, composition_root: CompositionRoot):
        return cls(composition_root, settings)

    async def start(self):
        config = uvicorn.Config(app=self._app, host=self._settings.host, port=self._settings.port)
        self._server = uvicorn.Server(config=config)
        self._server_task = asyncio.create_task(self._server.serve())
        logger.info(f'FastAPI started; local Swagger: http://localhost:{self._settings.port}/docs')

    async def stop(self):
        if self._server is None:
            return
        self._server.should_exit = True
        await self._server_task
        logger.info("FastAPI stopped")


def error_response(status_code: int, message: str) -> JSONResponse:
    content = {'status_code': 10000 + status_code, 'message': message, 'data': None}
    return JSONResponse(content=content, status_code=status_code)


def handle_422_exceptions(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        exc_str = f'{exc}'.replace('\n', ' ').replace('   ', ' ')
        logger.error(exc_str)
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc_str)


def handle_domain_exceptions(app: FastAPI):
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        exc_str = f'{exc}'.replace('\n', ' ')
        logger.warning(exc_str)
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc_str)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"{exc.__class__.__name__}: {exc.orig}")
        return error_response(status.HTTP_409_CONFLICT, str(exc.orig))


def handle_transaction_exceptions(app: FastAPI):
    # raised at the end of the request scope, before the response is sent
    @app.exception_handler(FinalizeError)
    async def finalize_error_handler(request: Request, exc: FinalizeError):
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, f"{exc}: {exc.__cause__}")
