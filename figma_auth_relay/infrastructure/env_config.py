from collections.abc import Iterator
import os
from pathlib import Path
import sys
import dotenv
from loguru import logger

from figma_auth_relay.contracts.repos import ConfigRepository
from figma_auth_relay.util import Environment


class EnvConfig(ConfigRepository):
    """
    Values from the .env file, overridden by the process environment.
    """

    def __init__(
        self, dotenv_path: str | Path | None = None, env: Environment | None = None
    ):
        self.__config = {
            k: v for k, v in dotenv.dotenv_values(dotenv_path).items() if v is not None
        }
        # ENV from the process, then from the .env file, else a production deployment
        self.__env = env or Environment.from_arg(
            os.environ.get(Environment.var_key())
            or self.__config.get(Environment.var_key(), Environment.PROD.value)
        )

        # backtrace=False prevents loguru from logging everything, and instead stopping at the try-except block
        # diagnose=False keeps variable values (and with them the client secret) out of tracebacks
        logger.configure(
            handlers=[{"sink": sys.stderr, "backtrace": False, "diagnose": False}]
        )

    def __iter__(self) -> Iterator[str]:
        return iter(self.__config)

    def __getitem__(self, key: str) -> str:
        if (val := os.environ.get(key)) is not None:
            return val

        return self.__config[key]

    def __len__(self) -> int:
        return len(self.__config)

    @property
    def environment(self) -> Environment:
        return self.__env
