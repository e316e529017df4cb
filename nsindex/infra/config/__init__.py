"""Configuration: pydantic config groups and environment-driven Settings."""

from nsindex.infra.config.groups import IndexConfig, StoreConfig
from nsindex.infra.config.settings import Settings

__all__ = ["IndexConfig", "Settings", "StoreConfig"]
