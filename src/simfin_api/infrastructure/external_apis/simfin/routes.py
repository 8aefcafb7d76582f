# src/simfin_api/infrastructure/external_apis/simfin/routes.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""SimFin request construction.

Pure builders that turn already-validated arguments into a
:class:`RequestDescriptor` (route, method, query parameters). They perform no
validation and no I/O; the client validates first, builds second, and sends
last.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final
from urllib.parse import quote

Params = Mapping[str, str | int]

GET: Final[str] = "GET"


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """A single logical SimFin call, ready to hand to the transport."""

    route: str
    method: str = GET
    params: Params | None = None


def company_id_by_ticker(ticker: str) -> RequestDescriptor:
    return RequestDescriptor(f"info/find-id/ticker/{ticker}")


def company_id_by_name(name: str) -> RequestDescriptor:
    # Quote everything, "/" included, so the name stays one path segment.
    return RequestDescriptor(f"info/find-id/name-search/{quote(name, safe='')}")


def all_companies() -> RequestDescriptor:
    return RequestDescriptor("info/all-entities")


def company_data(company_id: int) -> RequestDescriptor:
    return RequestDescriptor(f"companies/id/{company_id}")


def available_statements(company_id: int) -> RequestDescriptor:
    return RequestDescriptor(f"companies/id/{company_id}/statements/list")


def statement_data(
    company_id: int,
    statement_type: str,
    period_type: str,
    fiscal_year: int,
    *,
    standardised: bool = False,
) -> RequestDescriptor:
    """Build a statement-data request.

    The route ends in ``standardised`` or ``original`` depending on the flag;
    the statement, period and year travel as ``stype``, ``ptype`` and
    ``fyear`` query parameters.
    """
    variant = "standardised" if standardised else "original"
    return RequestDescriptor(
        f"companies/id/{company_id}/statements/{variant}",
        params={"stype": statement_type, "ptype": period_type, "fyear": fiscal_year},
    )


def ttm_financial_ratios(
    company_id: int, indicators: Sequence[str] | None = None
) -> RequestDescriptor:
    """Build a TTM ratios request; indicators are sent comma-joined when given.

    An empty sequence still counts as given and is sent as an empty value.
    """
    params: Params | None = None
    if indicators is not None:
        params = {"indicators": ",".join(indicators)}
    return RequestDescriptor(f"companies/id/{company_id}/ratios", params=params)
