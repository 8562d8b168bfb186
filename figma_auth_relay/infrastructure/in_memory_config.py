from collections.abc import Iterator, Mapping

from figma_auth_relay.contracts.repos import ConfigRepository
from figma_auth_relay.util import Environment


class InMemoryConfig(ConfigRepository):
    """
    Config backed by a plain dict. Never looks at the process environment.
    """

    def __init__(
        self, values: Mapping[str, str], env: Environment = Environment.TEST
    ) -> None:
        self.__config = dict(values)
        self.__env = env

    def __iter__(self) -> Iterator[str]:
        return iter(self.__config)

    def __getitem__(self, key: str) -> str:
        return self.__config[key]

    def __len__(self) -> int:
        return len(self.__config)

    @property
    def environment(self) -> Environment:
        return self.__env
