import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True)

    host: str = Field(default="127.0.0.1", alias="CONTACTBOOK_HOST")
    port: int = Field(default=DEFAULT_PORT, alias="CONTACTBOOK_PORT")
    seed: bool = Field(default=True, alias="CONTACTBOOK_SEED")
    log_level: str = Field(default="INFO", alias="CONTACTBOOK_LOG_LEVEL")
    shutdown_timeout: int = Field(default=10, alias="CONTACTBOOK_SHUTDOWN_TIMEOUT")
    keepalive_timeout: int = Field(default=120, alias="CONTACTBOOK_KEEPALIVE_TIMEOUT")
    enable_metrics_endpoint: bool = Field(default=True, alias="CONTACTBOOK_ENABLE_METRICS")

    @field_validator("port", mode="before")
    @classmethod
    def _lenient_port(cls, value: Any) -> Any:
        # An unparseable port keeps the default rather than aborting startup.
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid CONTACTBOOK_PORT %r, using %d", value, DEFAULT_PORT)
            return DEFAULT_PORT

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_unless_disabled(cls, value: Any) -> Any:
        # Only an explicit "false"/"0" turns seeding off.
        if isinstance(value, str):
            return value.strip().lower() not in {"false", "0"}
        return value

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
