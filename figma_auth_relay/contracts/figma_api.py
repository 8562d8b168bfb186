from abc import ABC, abstractmethod

from figma_auth_relay.contracts.figma_models import OAuthAccessTokenResponseRaw


class FigmaAPIException(Exception):
    """
    Thrown if the API is unreachable, returns an error, or returns gibberish.
    """

    pass


class FigmaAPI(ABC):
    @abstractmethod
    async def exchange_authorization_code(
        self, code: str
    ) -> OAuthAccessTokenResponseRaw: ...
