import os
from dataclasses import dataclass

from .errors import ConfigurationError

TABLE_NAME_VAR = "VPC_TABLE_NAME"


@dataclass(frozen=True)
class Settings:
    table_name: str
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    """Read settings from the Lambda environment."""
    environ = os.environ if environ is None else environ
    table_name = environ.get(TABLE_NAME_VAR, "")
    if not table_name:
        raise ConfigurationError(f"{TABLE_NAME_VAR} is not set")
    return Settings(
        table_name=table_name,
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
