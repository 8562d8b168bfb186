from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from loguru import logger

from figma_auth_relay.contracts.figma_api import FigmaAPI
from figma_auth_relay.contracts.repos import ConfigRepository
from figma_auth_relay.contracts.settings import FigmaOAuthSettings, ServerSettings
from figma_auth_relay.infrastructure.figma_api import FigmaAPIImpl


@dataclass
class Services:
    config: ConfigRepository
    server: ServerSettings
    figma_api: FigmaAPI

    def summary_of_implementations(self) -> str:
        return (
            "\n"
            f"  config:    {type(self.config).__name__}\n"
            f"  figma_api: {type(self.figma_api).__name__}\n"
            f"  tls:       {self.server.use_tls}"
        )


@asynccontextmanager
async def services_factory(
    config: ConfigRepository, transport: httpx.AsyncBaseTransport | None = None
):
    """
    `transport` replaces the network for the outbound calls, only tests should pass it.
    """
    figma_settings = FigmaOAuthSettings.from_config(config)

    async with httpx.AsyncClient(transport=transport) as session:
        services = Services(
            config=config,
            server=ServerSettings.from_config(config),
            figma_api=FigmaAPIImpl(session, figma_settings),
        )
        yield services


class ServicesProviderSingleton:
    """
    Holds the Services of the running app so routes can `Depends` on them.
    Filled in by the app lifespan, emptied on shutdown.
    """

    __services: Services | None = None

    @classmethod
    def register(cls, services: Services) -> None:
        logger.info(
            "Registering services: {}",
            services.summary_of_implementations(),
        )
        cls.__services = services

    @classmethod
    def services(cls) -> Services:
        if cls.__services is None:
            raise RuntimeError("ServicesProviderSingleton not yet initialized")
        return cls.__services

    @classmethod
    def clear(cls) -> None:
        cls.__services = None
