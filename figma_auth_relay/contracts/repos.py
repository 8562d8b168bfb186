from collections.abc import Mapping
from abc import ABC, abstractmethod

from loguru import logger

from figma_auth_relay.util import Environment


class ConfigRepository(ABC, Mapping[str, str]):
    TLS_PORT_KEY = "TLS_PORT"
    """
    Presence of this key switches the relay into TLS mode.
    """
    TLS_CERT_PATH_KEY = "TLS_CERT_PATH"
    TLS_KEY_PATH_KEY = "TLS_KEY_PATH"
    PORT_KEY = "PORT"
    HOST_KEY = "HOST"
    FIGMA_CLIENT_ID_KEY = "FIGMA_CLIENT_ID"
    FIGMA_CLIENT_SECRET_KEY = "FIGMA_CLIENT_SECRET"
    FIGMA_REDIRECT_URI_KEY = "FIGMA_REDIRECT_URI"
    FIGMA_TOKEN_EXCHANGE_ENDPOINT_KEY = "FIGMA_TOKEN_EXCHANGE_ENDPOINT"

    def log_set_vars(self):
        cls = type(self)
        # never log FIGMA_CLIENT_SECRET
        for key in [
            cls.TLS_PORT_KEY,
            cls.TLS_CERT_PATH_KEY,
            cls.TLS_KEY_PATH_KEY,
            cls.PORT_KEY,
            cls.HOST_KEY,
            cls.FIGMA_CLIENT_ID_KEY,
            cls.FIGMA_REDIRECT_URI_KEY,
            cls.FIGMA_TOKEN_EXCHANGE_ENDPOINT_KEY,
        ]:
            logger.info(
                "{}: {}",
                key,
                self.get(key, None),
            )

    @property
    @abstractmethod
    def environment(self) -> Environment: ...

    def get_non_empty(self, key: str) -> str | None:
        """
        Like `get`, but treats an empty or whitespace-only value as unset.
        """
        val = self.get(key, None)
        if val is None or not val.strip():
            return None
        return val.strip()
