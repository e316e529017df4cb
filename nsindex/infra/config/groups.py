"""
Configuration groups.

StoreConfig describes how to reach Redis; IndexConfig adds the index type.
Both are usable on their own or through Settings.
"""

from pydantic import BaseModel, ConfigDict, Field


class StoreConfig(BaseModel):
    """Redis connection settings."""

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    db: int = Field(default=0, ge=0, description="Redis DB number (server `databases` setting bounds it)")
    password: str | None = Field(default=None, description="Redis password")

    # Key enumeration
    use_scan: bool = Field(default=True, description="Enumerate keys with SCAN instead of KEYS")
    scan_count: int = Field(default=100, ge=1, description="SCAN COUNT hint per iteration")


class IndexConfig(StoreConfig):
    """
    Store settings plus the index type.

    ``index_type`` is kept as text here: NamespacedIndex resolves it, so an
    unknown value fails as ConfigurationError at index construction.
    The camelCase ``indexType`` alias is accepted as input.
    """

    model_config = ConfigDict(populate_by_name=True)

    index_type: str | None = Field(
        default="strings",
        alias="indexType",
        description="string | strings | strings_unique | object",
    )
