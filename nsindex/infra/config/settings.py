from functools import cached_property
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nsindex.infra.config.groups import IndexConfig, StoreConfig


class Settings(BaseSettings):
    """
    nsindex settings

    Environment variables use the NSINDEX_ prefix.
    Example: NSINDEX_REDIS_HOST, NSINDEX_INDEX_TYPE

    Grouped access:
        settings.store          # StoreConfig
        settings.index_config() # IndexConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NSINDEX_",
        extra="ignore",
    )

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None
    redis_use_scan: bool = True
    redis_scan_count: int = 100

    # Index
    index_type: str = "strings"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @cached_property
    def store(self) -> StoreConfig:
        """Redis connection group."""
        return StoreConfig(
            host=self.redis_host,
            port=self.redis_port,
            db=self.redis_db,
            password=self.redis_password,
            use_scan=self.redis_use_scan,
            scan_count=self.redis_scan_count,
        )

    def index_config(self, index_type: str | None = None) -> IndexConfig:
        """IndexConfig for one index; ``index_type`` overrides the env value."""
        return IndexConfig(
            **self.store.model_dump(),
            index_type=index_type if index_type is not None else self.index_type,
        )
