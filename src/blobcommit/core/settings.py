"""
Central configuration for blobcommit.

A single typed settings object read from environment variables
(12-factor style) using pydantic-settings.

Usage:

    from blobcommit.core.settings import get_settings

    settings = get_settings()
    digest = settings.digest_function()

Environment:

    BLOBCOMMIT_DIGEST            digest function name (default: sha256)
    BLOBCOMMIT_ODD_NODE_POLICY   'promote' or 'duplicate' (default: promote)
    BLOBCOMMIT_LOG_LEVEL         log level for the 'blobcommit' logger

The chunk size is fixed at 32 bytes and is deliberately not a setting.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..merkle.hashing import DigestFunction, get_digest
from ..protocol.enums import OddNodePolicy
from ..protocol.errors import ConfigurationError


class BlobCommitSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BLOBCOMMIT_", frozen=True)

    digest: str = Field(
        default="sha256",
        description="Digest function used for leaves and internal nodes.",
    )
    odd_node_policy: OddNodePolicy = Field(
        default=OddNodePolicy.PROMOTE,
        description="Rule for the unpaired node of an odd-sized level.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level applied to the 'blobcommit' logger (DEBUG/INFO/WARNING/ERROR).",
    )

    @field_validator("digest")
    @classmethod
    def _validate_digest(cls, v: str) -> str:
        # get_digest raises ConfigurationError, a ValueError, for unknown names
        return get_digest(v).name

    @field_validator("odd_node_policy", mode="before")
    @classmethod
    def _normalize_policy(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = (v or "WARNING").strip().upper()
        if v == "WARN":
            v = "WARNING"
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level: {v}")
        return v

    def digest_function(self) -> DigestFunction:
        return get_digest(self.digest)


@lru_cache(maxsize=1)
def get_settings() -> BlobCommitSettings:
    """
    Cached accessor for BlobCommitSettings.

    Raises:
        ConfigurationError: If a BLOBCOMMIT_* variable holds an unknown value
    """
    try:
        return BlobCommitSettings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid blobcommit settings: {exc}") from exc
