from contextlib import asynccontextmanager
from typing import Any, TypeVar
from fastapi import FastAPI, Request, Response
from loguru import logger
import httpx
import uvicorn

from figma_auth_relay.contracts.figma_api import FigmaAPIException
from figma_auth_relay.contracts.repos import ConfigRepository
from figma_auth_relay.contracts.settings import ServerSettings
from figma_auth_relay.infrastructure.env_config import EnvConfig
from figma_auth_relay.services import (
    ServicesProviderSingleton,
    services_factory as services_factory,
)
from figma_auth_relay.web_api import router as web_api_router
from figma_auth_relay.web_api.middleware import middleware_chain


T = TypeVar("T", bound=Exception)


def remove_fastapi_traceback(exc: T) -> T:
    try:
        # FastAPI has 4 frames in the traceback - try to trim those off
        return exc.with_traceback(
            exc.__traceback__.tb_next.tb_next.tb_next.tb_next  # pyright: ignore[reportOptionalMemberAccess]
        )
    except AttributeError:
        return exc


def figma_api_exception_handler(request: Request, exc: Exception) -> Any:
    exc = remove_fastapi_traceback(exc)

    logger.opt(exception=exc).error("Token exchange failed: {}", str(exc))

    # the caller only learns that it failed
    return Response(status_code=400)


def create_app(
    config: ConfigRepository, transport: httpx.AsyncBaseTransport | None = None
) -> FastAPI:
    """
    Raises:
        KeyError: If a required setting is missing.
        ValueError: If a setting has an invalid value.
    """
    server = ServerSettings.from_config(config)

    @asynccontextmanager
    async def service_lifespan(app: FastAPI):
        async with services_factory(config, transport) as s:
            s.config.log_set_vars()
            ServicesProviderSingleton.register(s)
            yield
            ServicesProviderSingleton.clear()

    app = FastAPI(lifespan=service_lifespan, title="Figma Auth Relay")

    # the last middleware added is the outermost one
    for middleware in reversed(middleware_chain(server)):
        app.middleware("http")(middleware)

    app.add_exception_handler(FigmaAPIException, figma_api_exception_handler)

    app.include_router(web_api_router, prefix="/v0")

    return app


def run() -> None:
    config = EnvConfig()
    server = ServerSettings.from_config(config)
    app = create_app(config)

    if server.tls is not None:
        logger.info("Serving over TLS on {}:{}", server.host, server.tls.port)
        uvicorn.run(
            app,
            host=server.host,
            port=server.tls.port,
            ssl_certfile=server.tls.cert_path,
            ssl_keyfile=server.tls.key_path,
        )
    else:
        logger.info("Serving on {}:{}", server.host, server.port)
        uvicorn.run(app, host=server.host, port=server.port)
