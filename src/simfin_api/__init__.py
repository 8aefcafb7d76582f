# src/simfin_api/__init__.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Async Python client for the SimFin financial-data API.

Typical usage::

    from simfin_api import SimFinClient

    async with SimFinClient("my-api-key") as simfin:
        [match] = await simfin.get_company_id_by_ticker("AAPL")
        data = await simfin.get_statement_data(match["simId"], "pl", "FY", 2017)
"""

from __future__ import annotations

from simfin_api.domain.catalog import INDICATORS, PERIOD_TYPES, STATEMENT_TYPES
from simfin_api.domain.enums.simfin import PeriodType, StatementType
from simfin_api.domain.exceptions.base import DomainError
from simfin_api.domain.exceptions.simfin import SimFinConfigurationError, SimFinValidationError
from simfin_api.infrastructure.external_apis.simfin.client import API_KEY_PARAM, SimFinClient
from simfin_api.infrastructure.external_apis.simfin.settings import SimFinSettings
from simfin_api.infrastructure.logging.logger import configure_root_logging, set_request_context

__all__ = [
    "API_KEY_PARAM",
    "INDICATORS",
    "PERIOD_TYPES",
    "STATEMENT_TYPES",
    "DomainError",
    "PeriodType",
    "SimFinClient",
    "SimFinConfigurationError",
    "SimFinSettings",
    "SimFinValidationError",
    "StatementType",
    "configure_root_logging",
    "set_request_context",
]

__version__ = "0.1.0"
