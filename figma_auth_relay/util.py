from enum import Enum


class Environment(Enum):
    """
    Where the relay runs. Set with ENV=prod|dev|test, `dev` turns off the https redirect.
    """

    PROD = "prod"
    DEV = "dev"
    TEST = "test"

    @classmethod
    def var_key(cls) -> str:
        return "ENV"

    @staticmethod
    def from_arg(arg: str):
        """
        Raises:
            ValueError: If `arg` isn't one of prod, dev, test (case and whitespace don't matter).
        """
        match arg.lower().strip():
            case "prod":
                return Environment.PROD
            case "dev":
                return Environment.DEV
            case "test":
                return Environment.TEST
            case other:
                raise ValueError(f"Invalid environment: {other}")


def parse_port(value: str) -> int:
    """
    Raises:
        ValueError: If the value is not a TCP port number.
    """
    port = int(value.strip())
    if not 0 < port < 65536:
        raise ValueError(f"Port out of range: {port}")
    return port


def strip_query(url: str) -> str:
    """
    Drop the query string so that secrets passed as query parameters never end up in logs.
    """
    return url.split("?", 1)[0]
