# src/simfin_api/infrastructure/external_apis/simfin/settings.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin client settings.

Purpose:
    Provide Pydantic-based configuration for the SimFin HTTP client: base
    URL, API key, timeout and user agent.

Layer:
    infrastructure

Notes:
    - Values are sourced from environment variables prefixed with ``SIMFIN_``.
    - An API key passed directly to the client takes precedence over
      ``SIMFIN_API_KEY``.
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://simfin.com/api/v1/"


class SimFinSettings(BaseSettings):
    """Configuration for the SimFin HTTP client.

    Environment variables (with ``model_config.env_prefix``):

    * ``SIMFIN_BASE_URL``
    * ``SIMFIN_API_KEY``
    * ``SIMFIN_TIMEOUT_S``
    * ``SIMFIN_USER_AGENT``
    """

    base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Base URL for the SimFin v1 API; routes are appended verbatim.",
    )
    api_key: SecretStr | None = Field(
        None,
        description="SimFin API key, sent as the ``api-key`` query parameter.",
    )
    timeout_s: float = Field(
        8.0,
        gt=0,
        description="Per-request timeout in seconds for the owned httpx client.",
    )
    user_agent: str = Field(
        "simfin-api-python/0.1",
        min_length=1,
        description="User-Agent header sent on every request.",
    )

    model_config: SettingsConfigDict = SettingsConfigDict(
        env_prefix="SIMFIN_",
        extra="ignore",
    )
