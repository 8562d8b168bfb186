from httpx import AsyncClient, InvalidURL, RequestError
from loguru import logger
from pydantic import ValidationError


from figma_auth_relay.contracts.figma_api import FigmaAPI, FigmaAPIException
from figma_auth_relay.contracts.figma_models import OAuthAccessTokenResponseRaw
from figma_auth_relay.contracts.settings import FigmaOAuthSettings
from figma_auth_relay.util import strip_query


class FigmaAPIImpl(FigmaAPI):
    GRANT_TYPE = "authorization_code"

    def __init__(
        self,
        session: AsyncClient,
        settings: FigmaOAuthSettings,
    ) -> None:
        super().__init__()
        self.__session = session
        self.__settings = settings

    def _token_exchange_params(self, code: str) -> dict[str, str]:
        return {
            "client_id": self.__settings.client_id,
            "client_secret": self.__settings.client_secret,
            "redirect_uri": self.__settings.redirect_uri,
            "code": code,
            "grant_type": self.GRANT_TYPE,
        }

    async def exchange_authorization_code(
        self, code: str
    ) -> OAuthAccessTokenResponseRaw:
        """
        Trades an authorization code for an access token.

        Everything is sent as query parameters, the body is empty.

        Raises:
            FigmaAPIException: If Figma can't be reached, doesn't answer with 200,
              or answers with something that isn't a token response.
        """
        endpoint = self.__settings.token_exchange_endpoint
        try:
            resp = await self.__session.post(
                endpoint,
                params=self._token_exchange_params(code),
                content=b"",
                headers={"Content-Type": "application/json"},
            )
        except (RequestError, InvalidURL) as e:
            logger.error(
                "Could not reach Figma: {error}: POST '{url}'",
                error=type(e).__name__,
                url=strip_query(endpoint),
            )
            raise FigmaAPIException("Failed to connect to Figma API") from e

        if resp.status_code != 200:
            logger.error(
                "HTTP error ({status}) from figma: POST '{url}', response: {text}",
                status=resp.status_code,
                url=strip_query(endpoint),
                text=resp.text,
            )
            raise FigmaAPIException(
                f"Figma API returned an error: status {resp.status_code}"
            )

        try:
            return OAuthAccessTokenResponseRaw.model_validate_json(resp.content)
        except ValidationError as e:
            logger.error(
                "Failed to parse token response from Figma API: {error}",
                error=e.errors(include_url=False, include_input=False),
            )
            raise FigmaAPIException(
                "Failed to parse token response from Figma API."
            ) from e
