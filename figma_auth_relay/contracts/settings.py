"""
Typed, read-only views over the configuration.
They are built once at startup and handed to whatever needs them.
"""

from dataclasses import dataclass
from typing import Self

from figma_auth_relay.contracts.repos import ConfigRepository
from figma_auth_relay.util import Environment, parse_port

DEFAULT_FIGMA_TOKEN_EXCHANGE_ENDPOINT = "https://www.figma.com/api/oauth/token"
DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"


@dataclass(frozen=True)
class FigmaOAuthSettings:
    client_id: str
    client_secret: str
    redirect_uri: str
    token_exchange_endpoint: str

    @classmethod
    def from_config(cls, config: ConfigRepository) -> Self:
        """
        Raises:
            KeyError: If the client id, client secret or redirect uri is not configured.
        """
        return cls(
            client_id=config[ConfigRepository.FIGMA_CLIENT_ID_KEY],
            client_secret=config[ConfigRepository.FIGMA_CLIENT_SECRET_KEY],
            redirect_uri=config[ConfigRepository.FIGMA_REDIRECT_URI_KEY],
            token_exchange_endpoint=config.get_non_empty(
                ConfigRepository.FIGMA_TOKEN_EXCHANGE_ENDPOINT_KEY
            )
            or DEFAULT_FIGMA_TOKEN_EXCHANGE_ENDPOINT,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(client_id={self.client_id!r}, client_secret='***', "
            f"redirect_uri={self.redirect_uri!r}, token_exchange_endpoint={self.token_exchange_endpoint!r})"
        )


@dataclass(frozen=True)
class TLSSettings:
    port: int
    cert_path: str
    key_path: str


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    tls: TLSSettings | None
    environment: Environment

    @property
    def use_tls(self) -> bool:
        return self.tls is not None

    @property
    def enforce_https(self) -> bool:
        """
        HTTPS redirects only happen in TLS mode, and never in development.
        """
        return self.use_tls and self.environment != Environment.DEV

    @property
    def listen_port(self) -> int:
        return self.tls.port if self.tls is not None else self.port

    @classmethod
    def from_config(cls, config: ConfigRepository) -> Self:
        """
        Raises:
            KeyError: If TLS mode is enabled but the certificate or key path is missing.
            ValueError: If a port is not a valid port number.
        """
        tls: TLSSettings | None = None
        if (tls_port := config.get_non_empty(ConfigRepository.TLS_PORT_KEY)) is not None:
            tls = TLSSettings(
                port=parse_port(tls_port),
                cert_path=config[ConfigRepository.TLS_CERT_PATH_KEY],
                key_path=config[ConfigRepository.TLS_KEY_PATH_KEY],
            )

        port = config.get_non_empty(ConfigRepository.PORT_KEY)

        return cls(
            host=config.get_non_empty(ConfigRepository.HOST_KEY) or DEFAULT_HOST,
            port=parse_port(port) if port is not None else DEFAULT_PORT,
            tls=tls,
            environment=config.environment,
        )
