# src/simfin_api/infrastructure/external_apis/simfin/types.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""
SimFin Types.

Purpose:
    Typed response fragments for the SimFin endpoints this client wraps.

Layer:
    infrastructure

Notes:
    These are partial and descriptive only; the client returns the parsed
    JSON unchanged and never validates response shapes.
"""

from __future__ import annotations

from typing import Any, TypedDict


class CompanyIdMatch(TypedDict):
    """One hit of a ticker or name lookup."""

    name: str
    simId: int
    ticker: str


class CompanyEntity(TypedDict, total=False):
    """One row of the all-entities listing."""

    simId: int
    ticker: str
    name: str


class CompanyData(TypedDict, total=False):
    """General company data returned by ``companies/id/{id}``."""

    simId: int
    ticker: str
    name: str
    fyearEnd: int
    employees: int
    sectorName: str
    sectorCode: int


class AvailableStatement(TypedDict, total=False):
    """One statement period listed by ``statements/list``."""

    fyear: int
    period: str
    calculated: bool


class AvailableStatements(TypedDict):
    """Available statements, grouped by statement type."""

    pl: list[AvailableStatement]
    bs: list[AvailableStatement]
    cf: list[AvailableStatement]


class RatioValue(TypedDict, total=False):
    """One TTM financial ratio row."""

    indicatorId: str
    indicatorName: str
    value: Any
    period: str
    fyear: int
    currency: str
